"""MsgFmtEngine - ICU MessageFormat compiler and evaluator.

Formats locale-sensitive text from ICU MessageFormat patterns: plain
arguments, plural/select/selectordinal, rich-text tags, and typed
formatters (number with ICU skeletons, date, time, list, duration,
relativeTime, numberRange, dateRange). Locale data comes from CLDR via
Babel.

Public API:
    MessageFormatter - Single-locale pattern formatting
    MessageFormatterProvider - Per-locale formatter cache
    FormatterOptions - Immutable formatter configuration
    parse_pattern - Parse a pattern to its AST
    parse_skeleton - Parse an ICU number skeleton

Exceptions:
    MessageFormatError - Base exception class
    PatternError - Malformed pattern or failed evaluation
    PatternSyntaxError - Parse errors (line, column, tag name)
    PatternResolutionError - Evaluation errors
    MissingOptionError - No matching case and no 'other'
    MissingVariableError - Absent argument under require_all_variables
    InvalidLocaleError - No locale data for the locale or any fallback

Submodules:
    msgfmtengine.syntax.ast - AST node types (Message, Plural, Select, Tag, etc.)
    msgfmtengine.runtime.locale_data - Locale-data backend protocol and Babel provider
    msgfmtengine.runtime.plural_operands - CLDR plural operands
    msgfmtengine.diagnostics - Diagnostics and error types
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

# Essential Public API - Minimal exports for clean namespace
from .core import DepthLimitExceededError
from .diagnostics import (
    InvalidLocaleError,
    MessageFormatError,
    MissingOptionError,
    MissingVariableError,
    PatternError,
    PatternResolutionError,
    PatternSyntaxError,
)
from .runtime import FormatterOptions, MessageFormatter, MessageFormatterProvider
from .syntax import parse as parse_pattern
from .syntax import parse_skeleton

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    __version__ = _get_version("msgfmtengine")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "DepthLimitExceededError",
    "FormatterOptions",
    "InvalidLocaleError",
    "MessageFormatError",
    "MessageFormatter",
    "MessageFormatterProvider",
    "MissingOptionError",
    "MissingVariableError",
    "PatternError",
    "PatternResolutionError",
    "PatternSyntaxError",
    "__version__",
    "parse_pattern",
    "parse_skeleton",
]
