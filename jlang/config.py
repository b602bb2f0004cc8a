"""
Compiler configuration for Jlang.

Author: xwest
"""

from dataclasses import dataclass, field
from typing import Dict

from .parser.parser import (
    DEFAULT_BINOP_PRECEDENCE, ANONYMOUS_FUNCTION_PREFIX, MAX_NESTING_DEPTH
)


@dataclass
class CompilerConfig:
    """Settings shared by the parser, the IR generator and the driver."""
    binop_precedence: Dict[str, int] = field(
        default_factory=lambda: dict(DEFAULT_BINOP_PRECEDENCE))
    anon_prefix: str = ANONYMOUS_FUNCTION_PREFIX
    max_nesting_depth: int = MAX_NESTING_DEPTH
    module_name: str = "jlang"
    prompt: str = "Jlang>"
    verify: bool = True  # run LLVM's verifier on every finished function
