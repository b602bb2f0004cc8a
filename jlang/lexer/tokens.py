"""
Token definitions for the Jlang lexer.

Jlang has a deliberately tiny token vocabulary:
- End of input
- Keywords (`def`, `extern`)
- Identifiers and number literals
- Single raw characters (punctuation, operators, anything unrecognised)

Author: xwest
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any


class TokenType(Enum):
    """Enumeration of all token types in Jlang."""

    EOF = auto()                    # End of input
    DEF = auto()                    # def
    EXTERN = auto()                 # extern
    IDENTIFIER = auto()             # foo, x1
    NUMBER = auto()                 # 1, 2.5, .5
    CHAR = auto()                   # ( ) , + - * < ; and any other character


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Used for error reporting and debugging information.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of input

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in the Jlang language.

    Contains the token type, lexeme (raw text), semantic value
    and source location.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    value: Any                      # str for IDENTIFIER, float for NUMBER
    location: SourceLocation

    def __str__(self) -> str:
        if self.value is not None and self.value != self.lexeme:
            return f"{self.type.name}({self.lexeme!r} -> {self.value!r})"
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return (f"Token({self.type.name}, {self.lexeme!r}, "
                f"{self.value!r}, {self.location!r})")

    def is_char(self, char: str) -> bool:
        """Check if this is the raw character token `char`."""
        return self.type == TokenType.CHAR and self.lexeme == char

    @property
    def is_keyword(self) -> bool:
        """Check if this token is a keyword."""
        return self.type in KEYWORDS.values()

    def describe(self) -> str:
        """Human readable form used in diagnostics."""
        if self.type == TokenType.EOF:
            return "end of input"
        if self.type == TokenType.NUMBER:
            return f"number '{self.lexeme}'"
        if self.type == TokenType.IDENTIFIER:
            return f"identifier '{self.lexeme}'"
        if self.is_keyword:
            return f"keyword '{self.lexeme}'"
        return f"'{self.lexeme}'"


# Reserved words, matched case-sensitively against complete identifiers
KEYWORDS = {
    "def": TokenType.DEF,
    "extern": TokenType.EXTERN,
}

# Characters that close a comment
LINE_TERMINATORS = ("\n", "\r")
