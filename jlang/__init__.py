"""
Jlang Compiler Package

A compiler front-end for Jlang, a small expression-oriented language in
which every value is a double. Source text is lexed, parsed into an AST
and lowered to LLVM IR with llvmlite.

Architecture:
    jlang/
    ├── lexer/           # Tokenization
    ├── parser/          # Syntax analysis and AST
    ├── ir/              # Lowering to LLVM IR
    ├── backend/         # Verification and IR rendering
    ├── driver.py        # Top-level read/compile loop
    └── cli.py           # jlangc command line tool

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__license__ = "MIT"

from .config import CompilerConfig
from .diagnostics import Diagnostic, Result
from .lexer import Lexer
from .parser import Parser
from .ir import IRGenerator
from .driver import Session, TopLevelResult, ConstructKind

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "IRGenerator",
    "Session",
    "TopLevelResult",
    "ConstructKind",
    "CompilerConfig",
    "Diagnostic",
    "Result",

    # Version info
    "__version__",
    "__author__",
    "__license__",
]
