"""
Lowering error handling for Jlang.

Errors found while turning the AST into IR: unresolved names, arity
mismatches, unsupported operators and verifier rejections.

Author: xwest
"""

from typing import Optional, List

from ..lexer.tokens import SourceLocation
from ..diagnostics import CompilerError


class LoweringError(CompilerError):
    """An error raised against an AST node during IR generation."""

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message, location, code=code, help_text=help_text,
                         suggestions=suggestions)


LOWERING_ERROR_CODES = {
    "G001": "Unknown variable name",
    "G002": "Invalid binary operator",
    "G003": "Unknown function referenced",
    "G004": "Incorrect argument count",
    "G005": "Redefinition of function",
    "G006": "Redefinition with a different number of arguments",
    "G007": "Duplicate parameter name",
    "G008": "IR verification failed",
    "G009": "Expression nested too deeply",
}


def create_unknown_variable_error(name: str, location: Optional[SourceLocation],
                                  params: List[str]) -> LoweringError:
    help_text = None
    if params:
        help_text = f"Names in scope: {', '.join(params)}"
    else:
        help_text = "This function has no parameters."
    return LoweringError(
        message=f"Unknown variable name '{name}'",
        location=location,
        code="G001",
        help_text=help_text,
    )


def create_invalid_operator_error(op: str, location: Optional[SourceLocation]) -> LoweringError:
    return LoweringError(
        message=f"Invalid binary operator '{op}'",
        location=location,
        code="G002",
    )


def create_unknown_function_error(name: str, location: Optional[SourceLocation]) -> LoweringError:
    return LoweringError(
        message=f"Unknown function referenced: '{name}'",
        location=location,
        code="G003",
        suggestions=[f"Declare it first with 'extern {name}(...)' or 'def {name}(...) ...'"],
    )


def create_argument_count_error(name: str, expected: int, found: int,
                                location: Optional[SourceLocation]) -> LoweringError:
    return LoweringError(
        message=f"Incorrect argument count for '{name}': expected {expected}, got {found}",
        location=location,
        code="G004",
    )


def create_redefinition_error(name: str, location: Optional[SourceLocation]) -> LoweringError:
    return LoweringError(
        message=f"Redefinition of function '{name}'",
        location=location,
        code="G005",
    )


def create_arity_redefinition_error(name: str, expected: int, found: int,
                                    location: Optional[SourceLocation]) -> LoweringError:
    return LoweringError(
        message=(f"Redefinition of '{name}' with a different number of arguments: "
                 f"declared with {expected}, now {found}"),
        location=location,
        code="G006",
    )


def create_duplicate_parameter_error(function: str, param: str,
                                     location: Optional[SourceLocation]) -> LoweringError:
    return LoweringError(
        message=f"Duplicate parameter name '{param}' in '{function}'",
        location=location,
        code="G007",
    )


def create_verification_error(problem: str, location: Optional[SourceLocation]) -> LoweringError:
    return LoweringError(
        message=f"IR verification failed: {problem}",
        location=location,
        code="G008",
    )


def create_nesting_error(function: str, location: Optional[SourceLocation]) -> LoweringError:
    return LoweringError(
        message=f"Body of '{function}' is nested too deeply to lower",
        location=location,
        code="G009",
    )
