"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum, StrEnum

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "ErrorCategory",
    "SourceSpan",
]


class ErrorCategory(StrEnum):
    """Error categorization, one value per public error kind.

    Categories:
        PATTERN: Malformed pattern or missing required data while formatting
        LOCALE: No usable locale data for the requested locale or its fallbacks
    """

    PATTERN = "pattern"
    LOCALE = "locale"


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Syntax errors (parser failures)
        2000-2999: Resolution errors (evaluation failures)
        3000-3999: Locale errors (formatter construction)
    """

    # Syntax errors (1000-1999)
    EXPECTED_CLOSING_BRACE = 1001
    EXPECTED_ARGUMENT_NAME = 1002
    EXPECTED_FORMATTER_NAME = 1003
    EXPECTED_CASE_BODY = 1004
    EXPECTED_CASE_KEY = 1005
    EMPTY_CASES = 1006
    INVALID_OFFSET = 1007
    EXPECTED_TAG_NAME = 1008
    EXPECTED_TAG_END = 1009
    UNCLOSED_TAG = 1010
    MISMATCHED_TAG = 1011
    UNEXPECTED_CLOSING_TAG = 1012
    EXPECTED_RANGE_END = 1013
    NESTING_DEPTH_EXCEEDED = 1014

    # Resolution errors (2000-2999)
    OTHER_OPTION_NOT_FOUND = 2001
    MISSING_VARIABLE = 2002
    MAX_DEPTH_EXCEEDED = 2003

    # Locale errors (3000-3999)
    UNSUPPORTED_LOCALE = 3001

    @property
    def category(self) -> ErrorCategory:
        """Public error kind this code belongs to."""
        if self.value >= 3000:
            return ErrorCategory.LOCALE
        return ErrorCategory.PATTERN


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Pattern location for error reporting.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, or line or
                column is less than 1 (both are 1-indexed).
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Pattern location (None for evaluation and locale errors)
        hint: Suggestion for fixing the error
        tag_name: Offending tag name (tag errors)
        variable_name: Missing variable name (strict mode)
        construct: Selecting construct, one of plural/select/selectordinal
        locale: Requested locale (locale errors)
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    tag_name: str | None = None
    variable_name: str | None = None
    construct: str | None = None
    locale: str | None = None

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Delegates to DiagnosticFormatter for consistent output.

        Example output:
            error[EXPECTED_CLOSING_BRACE]: Expected closing brace at line 1, column 7
              --> line 1, column 7
              = help: Close the placeholder with '}'

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
