"""Shared constants for MsgFmtEngine.

This module provides centralized configuration constants used across
syntax and runtime packages. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Depth limits: Recursion protection for parsing and evaluation
- Cache limits: Memory bounds for caching subsystems
- Input limits: Size constraints on pattern text
- Locale defaults: Fallback locale and numbering
- Message defaults: Complex-message flattening

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Cache limits
    "DEFAULT_CACHE_SIZE",
    "MAX_LOCALE_CACHE_SIZE",
    # Input limits
    "MAX_SOURCE_SIZE",
    # Locale defaults
    "DEFAULT_FALLBACK_LOCALE",
    "LATIN_DIGITS",
    # Message defaults
    "DEFAULT_NESTED_SEPARATOR",
    "MAX_FRACTION_DIGITS",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================
#
# One limit is shared by the parser (nested placeholder and tag depth) and the
# evaluator (recursive case-body evaluation). A pattern that parses within the
# limit therefore always evaluates within it.
#
# Python default recursion limit: 1000. Each nesting level costs a handful of
# frames in the recursive-descent parser, so 100 leaves ample margin.
#
# ============================================================================

MAX_DEPTH: int = 100

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Default maximum number of parsed patterns kept by PatternCache.
DEFAULT_CACHE_SIZE: int = 1000

# Maximum cached Babel Locale objects and per-locale formatters.
MAX_LOCALE_CACHE_SIZE: int = 128

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Default maximum pattern size in characters (10 MB).
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# LOCALE DEFAULTS
# ============================================================================

# Last entry of every locale fallback chain unless configured otherwise.
DEFAULT_FALLBACK_LOCALE: str = "en"

# Digits used when a locale declares no numbering system.
LATIN_DIGITS: str = "0123456789"

# ============================================================================
# MESSAGE DEFAULTS
# ============================================================================

# Joins nested argument keys: {"user": {"name": ...}} -> "user__name".
DEFAULT_NESTED_SEPARATOR: str = "__"

# Upper bound for "unlimited" fraction precision (".0*", ".##+").
MAX_FRACTION_DIGITS: int = 15
