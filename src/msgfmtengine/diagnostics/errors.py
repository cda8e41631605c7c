"""MessageFormat exception hierarchy with structured diagnostics.

Two public error kinds:
    PatternError - malformed pattern, or data a pattern requires is missing
    InvalidLocaleError - no usable locale data at formatter construction

All exceptions store Diagnostic objects for rich error information.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterable

from .codes import Diagnostic


class MessageFormatError(Exception):
    """Base exception for all MessageFormat errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize MessageFormatError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class PatternError(MessageFormatError):
    """Pattern rejected at parse or evaluation time.

    Never retried: the caller must fix the pattern or the arguments.
    """


class PatternSyntaxError(PatternError):
    """Malformed pattern syntax.

    The whole parse fails; there is no partial AST.

    Attributes:
        line: 1-based line of the offending position
        column: 1-based column of the offending position
        tag_name: Offending tag name (tag errors only)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize PatternSyntaxError, lifting location fields from the diagnostic."""
        super().__init__(message)
        span = self.diagnostic.span if self.diagnostic else None
        self.line: int | None = span.line if span else None
        self.column: int | None = span.column if span else None
        self.tag_name: str | None = self.diagnostic.tag_name if self.diagnostic else None


class PatternResolutionError(PatternError):
    """Evaluation of a well-formed pattern failed.

    Examples:
    - plural/select with no matching case and no 'other'
    - strict mode with a missing argument
    """


class MissingOptionError(PatternResolutionError):
    """No case matched and the construct has no 'other' case.

    Attributes:
        construct: plural, select or selectordinal
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize MissingOptionError."""
        super().__init__(message)
        self.construct: str | None = self.diagnostic.construct if self.diagnostic else None


class MissingVariableError(PatternResolutionError):
    """Required argument absent while require_all_variables is set.

    Attributes:
        variable_name: First missing variable in document order
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize MissingVariableError."""
        super().__init__(message)
        self.variable_name: str | None = (
            self.diagnostic.variable_name if self.diagnostic else None
        )


class InvalidLocaleError(MessageFormatError):
    """No locale in the fallback chain has data.

    Raised at formatter construction, never by an individual format call.

    Attributes:
        locale: The requested locale identifier
        available_locales: Locales the backend reported
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        locale: str = "",
        available_locales: Iterable[str] = (),
    ) -> None:
        """Initialize InvalidLocaleError.

        Args:
            message: Error message string OR Diagnostic object
            locale: The requested locale identifier
            available_locales: Locales the backend reported
        """
        super().__init__(message)
        self.locale = locale
        self.available_locales = tuple(available_locales)
