"""
Jlang IR Lowering Package

Translates Jlang AST nodes into LLVM IR using llvmlite's IR builder.

Key Features:
- Single-dispatch lowering over the closed AST node set
- Session-wide function table backed by the LLVM module
- Per-function parameter scope
- Verification and rollback of failed definitions

Author: xwest
"""

from .ir_generator import IRGenerator, LoweringContext, DOUBLE
from .errors import LoweringError

__all__ = [
    "IRGenerator",
    "LoweringContext",
    "LoweringError",
    "DOUBLE",
]
