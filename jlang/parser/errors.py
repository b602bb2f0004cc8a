"""
Error handling for the Jlang parser.

Syntax errors are diagnostic values carried by a failed `Result`; the
parser never raises them. The driver decides how to resynchronize.

Author: xwest
"""

from typing import Optional, List

from ..lexer.tokens import Token
from ..diagnostics import CompilerError


class ParseError(CompilerError):
    """A syntax error, with the token that triggered it."""

    def __init__(
        self,
        message: str,
        token: Token,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(
            message,
            token.location,
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )
        self.token = token


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P002": "Expected token not found",
    "P003": "Missing function name in prototype",
    "P004": "Missing '(' in prototype",
    "P005": "Missing ')' in prototype",
    "P006": "Malformed argument list",
    "P007": "Expression nested too deeply",
}


# Helper functions for creating common parser errors

def create_unexpected_token_error(found: Token) -> ParseError:
    """Create an error for a token that cannot start an expression."""
    return ParseError(
        message=f"Unknown token {found.describe()} when expecting an expression",
        token=found,
        code="P001",
        help_text="An expression starts with a number, an identifier or '('.",
    )


def create_expected_token_error(expected: str, found: Token) -> ParseError:
    """Create an error for a missing punctuation character."""
    return ParseError(
        message=f"Expected '{expected}', found {found.describe()}",
        token=found,
        code="P002",
        suggestions=[f"Add a '{expected}'"],
    )


def create_prototype_name_error(found: Token) -> ParseError:
    return ParseError(
        message=f"Expected function name in prototype, found {found.describe()}",
        token=found,
        code="P003",
    )


def create_prototype_open_error(found: Token) -> ParseError:
    return ParseError(
        message=f"Expected '(' in prototype, found {found.describe()}",
        token=found,
        code="P004",
    )


def create_prototype_close_error(found: Token) -> ParseError:
    return ParseError(
        message=f"Expected ')' in prototype, found {found.describe()}",
        token=found,
        code="P005",
        help_text="Parameter names are separated by whitespace, not commas.",
    )


def create_argument_list_error(found: Token) -> ParseError:
    return ParseError(
        message=f"Expected ')' or ',' in argument list, found {found.describe()}",
        token=found,
        code="P006",
    )


def create_nesting_error(found: Token, limit: int) -> ParseError:
    return ParseError(
        message=f"Expression nested too deeply at {found.describe()}",
        token=found,
        code="P007",
        help_text=f"Parentheses and call arguments may nest at most {limit} levels.",
    )
