"""Diagnostic system for MessageFormat errors.

Provides structured error diagnostics with codes, spans and hints.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, ErrorCategory, SourceSpan
from .errors import (
    InvalidLocaleError,
    MessageFormatError,
    MissingOptionError,
    MissingVariableError,
    PatternError,
    PatternResolutionError,
    PatternSyntaxError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorCategory",
    "ErrorTemplate",
    "InvalidLocaleError",
    "MessageFormatError",
    "MissingOptionError",
    "MissingVariableError",
    "OutputFormat",
    "PatternError",
    "PatternResolutionError",
    "PatternSyntaxError",
    "SourceSpan",
]
