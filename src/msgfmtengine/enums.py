"""Enumerations for MsgFmtEngine type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, so skeleton tokens, pattern keywords
and CLDR identifiers compare directly against them.

Python 3.13+.
"""

from enum import StrEnum


class PluralCategory(StrEnum):
    """CLDR plural category.

    StrEnum provides automatic string conversion: str(PluralCategory.ONE) == "one"
    """

    ZERO = "zero"
    ONE = "one"
    TWO = "two"
    FEW = "few"
    MANY = "many"
    OTHER = "other"


class Notation(StrEnum):
    """Number notation selected by a skeleton."""

    STANDARD = "standard"
    SCIENTIFIC = "scientific"
    ENGINEERING = "engineering"
    COMPACT_SHORT = "compact-short"
    COMPACT_LONG = "compact-long"


class SignDisplay(StrEnum):
    """When to show the sign of a formatted number."""

    AUTO = "auto"
    """Minus sign on negatives only: -1, 0, 1"""

    ALWAYS = "always"
    """Sign on every number: -1, +0, +1"""

    NEVER = "never"
    """No sign at all: 1, 0, 1"""

    EXCEPT_ZERO = "except-zero"
    """Sign on non-zero numbers: -1, 0, +1"""

    ACCOUNTING = "accounting"
    """Parentheses on negatives: (1), 0, 1"""

    ACCOUNTING_ALWAYS = "accounting-always"
    """Parentheses on negatives, plus on the rest: (1), +0, +1"""

    ACCOUNTING_EXCEPT_ZERO = "accounting-except-zero"
    """Parentheses on negatives, plus on positives: (1), 0, +1"""


class GroupingStrategy(StrEnum):
    """Digit grouping policy."""

    OFF = "off"
    MIN2 = "min2"
    AUTO = "auto"
    ALWAYS = "always"
    ON_ALIGNED = "on-aligned"


class UnitWidth(StrEnum):
    """Display width for currency and measurement units."""

    NARROW = "narrow"
    SHORT = "short"
    FULL_NAME = "full-name"
    ISO_CODE = "iso-code"


class CurrencyDisplay(StrEnum):
    """How a currency is rendered next to an amount."""

    SYMBOL = "symbol"
    NARROW_SYMBOL = "narrow-symbol"
    CODE = "code"
    NAME = "name"


class ListType(StrEnum):
    """List join semantics."""

    CONJUNCTION = "conjunction"
    DISJUNCTION = "disjunction"
    UNIT = "unit"


class ListWidth(StrEnum):
    """List join pattern width."""

    LONG = "long"
    SHORT = "short"
    NARROW = "narrow"


class DateTimeKind(StrEnum):
    """Which CLDR pattern family a date/time placeholder uses."""

    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"


class DataKind(StrEnum):
    """Kind of locale data, resolved independently along the fallback chain."""

    PLURAL = "plural"
    ORDINAL = "ordinal"
    NUMBER = "number"
    DATE = "date"
    CURRENCY = "currency"
    UNIT = "unit"
    LIST = "list"
    RELATIVE_TIME = "relative-time"


__all__ = [
    "CurrencyDisplay",
    "DataKind",
    "DateTimeKind",
    "GroupingStrategy",
    "ListType",
    "ListWidth",
    "Notation",
    "PluralCategory",
    "SignDisplay",
    "UnitWidth",
]
