"""
Shared diagnostics for the Jlang compiler.

Every stage reports problems as `Diagnostic` records and hands results
back as `Result` values: either a success carrying a value, or a failure
carrying the error that explains it. Failures are propagated by early
return at each call site rather than by raising.

Author: xwest
"""

import logging
from dataclasses import dataclass
from typing import Generic, List, Optional, TypeVar

from .lexer.tokens import SourceLocation

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Diagnostic:
    """A compiler diagnostic (error, warning, info)."""
    message: str
    location: Optional[SourceLocation]
    severity: str  # "error", "warning", "info"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        result = f"{severity_prefix}: {self.message}\n"
        if self.location is not None:
            result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class CompilerError:
    """
    Base for the error records produced by the parser and the IR generator.

    These are values, not exceptions: they travel inside a failed `Result`.
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation],
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def message(self) -> str:
        return self.diagnostic.message

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    @property
    def location(self) -> Optional[SourceLocation]:
        return self.diagnostic.location

    def __str__(self) -> str:
        return str(self.diagnostic)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.code}: {self.message!r})"


@dataclass
class Result(Generic[T]):
    """Outcome of a parse or lowering step."""
    value: Optional[T] = None
    error: Optional[CompilerError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: CompilerError) -> "Result[T]":
        return cls(error=error)


def report(error: CompilerError, log: logging.Logger = logger) -> CompilerError:
    """Emit a diagnostic through `log` and hand it back."""
    location = error.location
    if location is not None:
        log.error("Log Error: %s (%s)", error.message, location)
    else:
        log.error("Log Error: %s", error.message)
    return error
