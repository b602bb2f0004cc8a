"""
Jlang Parser Package

Recursive descent parser with precedence climbing for binary operators.
Produces immutable AST nodes with source locations.

Key Features:
- One token of lookahead, pulled lazily from the lexer
- Extensible binary operator precedence table
- Success-or-diagnostic results instead of exceptions

Author: xwest
"""

from .ast_nodes import (
    ASTNode, Expression, NumberExpr, VariableExpr, BinaryExpr, CallExpr,
    Prototype, Function, dump
)
from .parser import Parser, DEFAULT_BINOP_PRECEDENCE, ANONYMOUS_FUNCTION_PREFIX
from .errors import ParseError

__all__ = [
    # Core parser
    "Parser",
    "DEFAULT_BINOP_PRECEDENCE",
    "ANONYMOUS_FUNCTION_PREFIX",

    # AST nodes
    "ASTNode", "Expression",
    "NumberExpr", "VariableExpr", "BinaryExpr", "CallExpr",
    "Prototype", "Function", "dump",

    # Error handling
    "ParseError",
]
