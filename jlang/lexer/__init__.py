"""
Jlang Lexer Package

Implements the lexical analyzer (tokenizer) for the Jlang language.

Key Features:
- Lazy, pull-based tokenization with one character of lookahead
- Works on strings and on interactive text streams
- Best-effort numeric literals (strtod-style prefix parsing)
- Source location tracking for diagnostics

Author: xwest
"""

from .tokens import Token, TokenType, SourceLocation, KEYWORDS
from .lexer import Lexer, tokenize_string, tokenize_file, parse_number_prefix

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "SourceLocation",
    "KEYWORDS",
    "tokenize_string",
    "tokenize_file",
    "parse_number_prefix",
]
