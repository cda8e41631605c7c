"""Locale-data backend interface and the default Babel-backed provider.

The evaluator never touches CLDR data directly. Everything locale-specific
goes through a LocaleDataProvider: plural rules, number rendering, date and
time patterns, currency and unit display, list patterns, relative-time
phrases and numbering-system digits.

Policy lives with the callers (runtime.number_format, runtime.functions):
scaling, significant-digit rounding, sign display and digit transliteration
happen before or after the provider renders a non-negative magnitude. A
provider only answers lookups and renders; it never decides.

Data gaps are not errors. Lookups return None (or a neutral default) and the
caller substitutes a literal fallback.

Python 3.13+. Uses Babel for CLDR data.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol

from babel import UnknownLocaleError, localedata
from babel import dates as babel_dates
from babel import numbers as babel_numbers
from babel import units as babel_units

from msgfmtengine.constants import LATIN_DIGITS
from msgfmtengine.enums import (
    CurrencyDisplay,
    DataKind,
    DateTimeKind,
    ListType,
    ListWidth,
    UnitWidth,
)
from msgfmtengine.locale_utils import get_babel_locale, to_bcp47

if TYPE_CHECKING:
    from babel import Locale
    from babel.numbers import NumberPattern

    from msgfmtengine.runtime.plural_operands import PluralOperands

__all__ = [
    "BabelLocaleData",
    "ListPatterns",
    "LocaleDataProvider",
    "NumberRenderOptions",
    "NumberStyle",
    "NumberSymbols",
    "digits_for_numbering_system",
]

logger = logging.getLogger(__name__)

_DATE_STYLES = ("short", "medium", "long", "full")
_DEFAULT_DATE_STYLE = "medium"
_INTERVAL_FALLBACK = "{0} – {1}"

# Seconds per relative-time field for format_timedelta, used when a locale
# has no CLDR pattern for the field. Babel measures years as 365 days and
# months as 30 days; quarters are rendered as three months.
_RELATIVE_TIME_SECONDS: dict[str, tuple[str, int]] = {
    "year": ("year", 365 * 86400),
    "quarter": ("month", 3 * 30 * 86400),
    "month": ("month", 30 * 86400),
    "week": ("week", 7 * 86400),
    "day": ("day", 86400),
    "hour": ("hour", 3600),
    "minute": ("minute", 60),
    "second": ("second", 1),
}

# Digit-ordinal suffixes by language and ordinal plural category, from the
# CLDR RBNF "digits-ordinal" rule sets (masculine form where gendered).
_ORDINAL_SUFFIXES: dict[str, dict[str, str]] = {
    "en": {"one": "st", "two": "nd", "few": "rd", "other": "th"},
    "fr": {"one": "er", "other": "e"},
    "de": {"other": "."},
    "nl": {"other": "e"},
    "es": {"other": "º"},
    "it": {"other": "º"},
    "pt": {"other": "º"},
    "sv": {"one": ":a", "other": ":e"},
}

_LIST_STYLE_KEYS: dict[ListType, str] = {
    ListType.CONJUNCTION: "standard",
    ListType.DISJUNCTION: "or",
    ListType.UNIT: "unit",
}

_UNIT_LENGTHS: dict[UnitWidth, str] = {
    UnitWidth.NARROW: "narrow",
    UnitWidth.SHORT: "short",
    UnitWidth.FULL_NAME: "long",
    UnitWidth.ISO_CODE: "short",
}

# Zero code points of CLDR decimal numbering systems (numberingSystems.xml).
# Each system's digits are the ten consecutive code points starting here.
_NUMBERING_SYSTEM_ZEROS: dict[str, int] = {
    "latn": 0x0030,
    "arab": 0x0660,
    "arabext": 0x06F0,
    "adlm": 0x1E950,
    "beng": 0x09E6,
    "deva": 0x0966,
    "fullwide": 0xFF10,
    "gujr": 0x0AE6,
    "guru": 0x0A66,
    "khmr": 0x17E0,
    "knda": 0x0CE6,
    "laoo": 0x0ED0,
    "mlym": 0x0D66,
    "mong": 0x1810,
    "mtei": 0xABF0,
    "mymr": 0x1040,
    "nkoo": 0x07C0,
    "olck": 0x1C50,
    "orya": 0x0B66,
    "rohg": 0x10D30,
    "tamldec": 0x0BE6,
    "telu": 0x0C66,
    "thai": 0x0E50,
    "tibt": 0x0F20,
}


def digits_for_numbering_system(system: str) -> str:
    """Ten digits of a CLDR decimal numbering system, Latin if unknown.

    Example:
        >>> digits_for_numbering_system("arab")[:3]
        '٠١٢'
        >>> digits_for_numbering_system("bogus")
        '0123456789'
    """
    zero = _NUMBERING_SYSTEM_ZEROS.get(system)
    if zero is None:
        return LATIN_DIGITS
    return "".join(chr(zero + offset) for offset in range(10))


class NumberStyle(StrEnum):
    """Base CLDR number pattern family a magnitude is rendered with."""

    DECIMAL = "decimal"
    PERCENT = "percent"
    PERMILLE = "permille"
    CURRENCY = "currency"
    ACCOUNTING = "accounting"
    COMPACT_SHORT = "compact-short"
    COMPACT_LONG = "compact-long"


@dataclass(frozen=True, slots=True)
class NumberRenderOptions:
    """What the provider needs to render one non-negative magnitude.

    The value handed to the provider is already scaled (percent and permille
    styles included) and already rounded for significant digits. A literal
    pattern containing % or ‰ is scaled by the provider itself.

    Attributes:
        style: Base pattern family
        min_integer_digits: Zero-pad the integer part
        min_fraction_digits: None keeps the locale pattern's minimum
        max_fraction_digits: None keeps the locale pattern's maximum
        grouping: Emit the locale group separator
        currency: ISO 4217 code for currency styles
        currency_display: Symbol, narrow symbol, ISO code or name
        pattern: Literal CLDR pattern, overrides style
    """

    style: NumberStyle = NumberStyle.DECIMAL
    min_integer_digits: int = 1
    min_fraction_digits: int | None = None
    max_fraction_digits: int | None = None
    grouping: bool = True
    currency: str | None = None
    currency_display: CurrencyDisplay = CurrencyDisplay.SYMBOL
    pattern: str | None = None


@dataclass(frozen=True, slots=True)
class NumberSymbols:
    """Locale symbols the number formatter composes around a magnitude."""

    plus_sign: str = "+"
    minus_sign: str = "-"
    exponential: str = "E"


@dataclass(frozen=True, slots=True)
class ListPatterns:
    """CLDR list-join patterns; each uses {0} and {1} placeholders.

    Attributes:
        start: Joins the first two items of a 3+ item list
        middle: Joins interior items
        end: Joins the last item
        pair: Joins exactly two items
    """

    start: str
    middle: str
    end: str
    pair: str


class LocaleDataProvider(Protocol):
    """Per-locale CLDR lookups consumed by the evaluator.

    Locale identifiers are BCP-47 strings from the fallback chain
    ("en-US", "en"). Implementations must be safe for concurrent reads.
    """

    def has_data(self, locale_id: str, kind: DataKind) -> bool:
        """Whether locale_id carries data of the given kind."""
        ...  # pragma: no cover  # Protocol stub - not executable

    def available_locales(self) -> tuple[str, ...]:
        """Locales the backend knows, for diagnostics."""
        ...  # pragma: no cover  # Protocol stub - not executable

    def plural_category(
        self, locale_id: str, operands: PluralOperands, *, ordinal: bool
    ) -> str:
        """Cardinal or ordinal category name; "other" if no rule matches."""
        ...  # pragma: no cover  # Protocol stub - not executable

    def numbering_digits(self, locale_id: str) -> str:
        """Ten digits of the default numbering system (Latin if unspecified)."""
        ...  # pragma: no cover  # Protocol stub - not executable

    def number_symbols(self, locale_id: str) -> NumberSymbols:
        """Plus, minus and exponent symbols."""
        ...  # pragma: no cover  # Protocol stub - not executable

    def ordinal_suffix(self, locale_id: str, category: str) -> str | None:
        """Suffix of a digit ordinal ("st" for 1st) in an ordinal category; None if unknown."""
        ...  # pragma: no cover  # Protocol stub - not executable

    def format_number(
        self, locale_id: str, value: Decimal, options: NumberRenderOptions
    ) -> str:
        """Render a non-negative, pre-scaled magnitude.

        Raises:
            ValueError: If a literal pattern cannot be used
        """
        ...  # pragma: no cover  # Protocol stub - not executable

    def default_currency(self, locale_id: str) -> str | None:
        """Currency of the locale's territory, if any."""
        ...  # pragma: no cover  # Protocol stub - not executable

    def format_unit(
        self,
        locale_id: str,
        value: Decimal,
        unit: str,
        width: UnitWidth,
        options: NumberRenderOptions,
    ) -> str | None:
        """Render value with a measurement unit; None if the unit is unknown."""
        ...  # pragma: no cover  # Protocol stub - not executable

    def date_pattern(self, locale_id: str, kind: DateTimeKind, style: str) -> str:
        """CLDR pattern for a named style, falling back to medium."""
        ...  # pragma: no cover  # Protocol stub - not executable

    def date_skeleton_pattern(self, locale_id: str, skeleton: str) -> str | None:
        """Best CLDR pattern for a date skeleton such as "yMMMd"."""
        ...  # pragma: no cover  # Protocol stub - not executable

    def format_datetime(self, locale_id: str, value: datetime, pattern: str) -> str:
        """Render value with a CLDR date/time pattern.

        Raises:
            ValueError: If the pattern is malformed
        """
        ...  # pragma: no cover  # Protocol stub - not executable

    def interval_fallback(self, locale_id: str) -> str:
        """CLDR intervalFormatFallback, e.g. "{0} – {1}"."""
        ...  # pragma: no cover  # Protocol stub - not executable

    def format_date_interval(
        self, locale_id: str, start: datetime, end: datetime, skeleton: str
    ) -> str:
        """Render a date interval for a skeleton, sharing common fields."""
        ...  # pragma: no cover  # Protocol stub - not executable

    def list_patterns(
        self, locale_id: str, list_type: ListType, width: ListWidth
    ) -> ListPatterns | None:
        """List-join patterns; width falls back to long."""
        ...  # pragma: no cover  # Protocol stub - not executable

    def format_relative_time(
        self, locale_id: str, field: str, value: Decimal, width: ListWidth
    ) -> str | None:
        """Relative phrase such as "in 3 days"; None if field is unknown."""
        ...  # pragma: no cover  # Protocol stub - not executable


class BabelLocaleData:
    """LocaleDataProvider backed by Babel's CLDR data.

    Stateless apart from the process-wide Locale cache in
    :func:`msgfmtengine.locale_utils.get_babel_locale`, so a single instance
    is shared by every formatter.

    Example:
        >>> data = BabelLocaleData()
        >>> data.has_data("en-US", DataKind.PLURAL)
        True
        >>> data.has_data("xx-YY", DataKind.PLURAL)
        False
    """

    __slots__ = ()

    @staticmethod
    def _locale(locale_id: str) -> Locale | None:
        try:
            return get_babel_locale(locale_id)
        except (UnknownLocaleError, ValueError, TypeError):
            return None

    def has_data(self, locale_id: str, kind: DataKind) -> bool:
        """Whether Babel ships data of this kind for exactly this locale."""
        locale = self._locale(locale_id)
        if locale is None:
            return False
        match kind:
            case DataKind.NUMBER:
                return bool(locale.decimal_formats)
            case DataKind.DATE:
                return bool(locale.date_formats)
            case DataKind.CURRENCY:
                return bool(locale.currency_formats)
            case DataKind.UNIT:
                return bool(locale.unit_display_names)
            case DataKind.LIST:
                return bool(locale.list_patterns)
            case _:
                # Plural, ordinal and relative-time data exist for every
                # locale Babel can load.
                return True

    def available_locales(self) -> tuple[str, ...]:
        """All Babel locale identifiers, BCP-47 form."""
        return tuple(sorted(to_bcp47(name) for name in localedata.locale_identifiers()))

    def plural_category(
        self, locale_id: str, operands: PluralOperands, *, ordinal: bool
    ) -> str:
        """Apply Babel's CLDR plural_form / ordinal_form rule."""
        locale = self._locale(locale_id)
        if locale is None:
            return "other"
        rule = locale.ordinal_form if ordinal else locale.plural_form
        return str(rule(operands.as_decimal()))

    def numbering_digits(self, locale_id: str) -> str:
        """Digits of the locale's default numbering system."""
        locale = self._locale(locale_id)
        if locale is None:
            return LATIN_DIGITS
        return digits_for_numbering_system(locale.default_numbering_system)

    def number_symbols(self, locale_id: str) -> NumberSymbols:
        """Plus, minus and exponent symbols from CLDR."""
        locale = self._locale(locale_id)
        if locale is None:
            return NumberSymbols()
        return NumberSymbols(
            plus_sign=babel_numbers.get_plus_sign_symbol(locale),
            minus_sign=babel_numbers.get_minus_sign_symbol(locale),
            exponential=babel_numbers.get_exponential_symbol(locale),
        )

    def ordinal_suffix(self, locale_id: str, category: str) -> str | None:
        """Digit-ordinal suffix from the CLDR RBNF digits-ordinal rules.

        Babel ships no RBNF data, so the suffixes live in _ORDINAL_SUFFIXES.
        An unknown category uses the language's "other" suffix.
        """
        locale = self._locale(locale_id)
        if locale is None:
            return None
        suffixes = _ORDINAL_SUFFIXES.get(locale.language)
        if suffixes is None:
            return None
        return suffixes.get(category, suffixes["other"])

    def default_currency(self, locale_id: str) -> str | None:
        """First tender currency of the locale's territory."""
        locale = self._locale(locale_id)
        if locale is None or not locale.territory:
            return None
        currencies = babel_numbers.get_territory_currencies(locale.territory)
        return currencies[0] if currencies else None

    def _number_pattern(self, locale: Locale, options: NumberRenderOptions) -> NumberPattern:
        """Copy the locale's base pattern and apply digit limits."""
        if options.pattern is not None:
            base = babel_numbers.parse_pattern(options.pattern)
        elif options.currency_display is CurrencyDisplay.NAME and options.style in (
            NumberStyle.CURRENCY,
            NumberStyle.ACCOUNTING,
        ):
            # Long-name rendering wraps a plain number in the unit pattern
            base = locale.decimal_formats[None]
        else:
            match options.style:
                case NumberStyle.PERCENT:
                    base = locale.percent_formats[None]
                case NumberStyle.PERMILLE:
                    raw = locale.percent_formats[None].pattern.replace("%", "‰")
                    base = babel_numbers.parse_pattern(raw)
                case NumberStyle.ACCOUNTING:
                    base = locale.currency_formats.get("accounting") or (
                        locale.currency_formats["standard"]
                    )
                case NumberStyle.CURRENCY:
                    base = locale.currency_formats["standard"]
                case _:
                    base = locale.decimal_formats[None]
            if options.currency_display is CurrencyDisplay.CODE and "\xa4" in base.pattern:
                # Double currency sign renders the ISO code
                base = babel_numbers.parse_pattern(base.pattern.replace("\xa4", "\xa4\xa4"))

        pattern = copy.copy(base)
        if options.pattern is None:
            # Percent and permille styles arrive pre-scaled; a literal
            # pattern keeps the scale its own % or ‰ implies.
            pattern.scale = 0
        if options.min_integer_digits > 1:
            pattern.int_prec = (options.min_integer_digits, pattern.int_prec[1])
        if options.min_fraction_digits is not None or options.max_fraction_digits is not None:
            minimum = options.min_fraction_digits
            maximum = options.max_fraction_digits
            if minimum is None:
                minimum = min(pattern.frac_prec[0], maximum or 0)
            if maximum is None:
                maximum = max(pattern.frac_prec[1], minimum)
            pattern.frac_prec = (minimum, max(minimum, maximum))
        return pattern

    def format_number(
        self, locale_id: str, value: Decimal, options: NumberRenderOptions
    ) -> str:
        """Render a magnitude with Babel's format_decimal / format_currency."""
        locale = get_babel_locale(locale_id)

        if options.style in (NumberStyle.COMPACT_SHORT, NumberStyle.COMPACT_LONG):
            format_type = "long" if options.style is NumberStyle.COMPACT_LONG else "short"
            fraction_digits = options.max_fraction_digits or 0
            if options.currency:
                return str(
                    babel_numbers.format_compact_currency(
                        value,
                        options.currency,
                        format_type="short",
                        locale=locale,
                        fraction_digits=fraction_digits,
                    )
                )
            return str(
                babel_numbers.format_compact_decimal(
                    value,
                    format_type=format_type,
                    locale=locale,
                    fraction_digits=fraction_digits,
                )
            )

        pattern = self._number_pattern(locale, options)
        has_limits = (
            options.min_fraction_digits is not None or options.max_fraction_digits is not None
        )

        if options.currency and options.style in (
            NumberStyle.CURRENCY,
            NumberStyle.ACCOUNTING,
        ):
            return str(
                babel_numbers.format_currency(
                    value,
                    options.currency,
                    format=pattern,
                    locale=locale,
                    currency_digits=not has_limits,
                    format_type=(
                        "name" if options.currency_display is CurrencyDisplay.NAME else "standard"
                    ),
                    group_separator=options.grouping,
                )
            )

        return str(
            babel_numbers.format_decimal(
                value,
                format=pattern,
                locale=locale,
                group_separator=options.grouping,
            )
        )

    def format_unit(
        self,
        locale_id: str,
        value: Decimal,
        unit: str,
        width: UnitWidth,
        options: NumberRenderOptions,
    ) -> str | None:
        """Render with babel.units.format_unit; None for unknown units."""
        locale = get_babel_locale(locale_id)
        try:
            return str(
                babel_units.format_unit(
                    value,
                    unit,
                    length=_UNIT_LENGTHS[width],
                    format=self._number_pattern(locale, options),
                    locale=locale,
                )
            )
        except babel_units.UnknownUnitError:
            logger.debug("Unknown measurement unit '%s' for locale %s", unit, locale_id)
            return None

    def date_pattern(self, locale_id: str, kind: DateTimeKind, style: str) -> str:
        """CLDR date, time or combined pattern for a named style."""
        locale = get_babel_locale(locale_id)
        if style not in _DATE_STYLES:
            style = _DEFAULT_DATE_STYLE
        match kind:
            case DateTimeKind.DATE:
                return str(locale.date_formats[style].pattern)
            case DateTimeKind.TIME:
                return str(locale.time_formats[style].pattern)
            case _:
                date_part = str(locale.date_formats[style].pattern)
                time_part = str(locale.time_formats[style].pattern)
                combined = str(
                    locale.datetime_formats.get(style)
                    or locale.datetime_formats.get(_DEFAULT_DATE_STYLE)
                    or "{1} {0}"
                )
                return combined.replace("{1}", date_part).replace("{0}", time_part)

    def date_skeleton_pattern(self, locale_id: str, skeleton: str) -> str | None:
        """Match a skeleton against the locale's availableFormats."""
        locale = get_babel_locale(locale_id)
        skeletons = locale.datetime_skeletons
        match = babel_dates.match_skeleton(skeleton, skeletons.keys())
        if match is None:
            return None
        return str(skeletons[match].pattern)

    def format_datetime(self, locale_id: str, value: datetime, pattern: str) -> str:
        """Render with babel.dates.format_datetime; naive values are not shifted."""
        return str(
            babel_dates.format_datetime(value, format=pattern, locale=get_babel_locale(locale_id))
        )

    def interval_fallback(self, locale_id: str) -> str:
        """intervalFormats fallback entry of the locale."""
        locale = self._locale(locale_id)
        if locale is None:
            return _INTERVAL_FALLBACK
        return str(locale.interval_formats.get(None) or _INTERVAL_FALLBACK)

    def format_date_interval(
        self, locale_id: str, start: datetime, end: datetime, skeleton: str
    ) -> str:
        """Render with babel.dates.format_interval."""
        return str(
            babel_dates.format_interval(
                start, end, skeleton=skeleton, locale=get_babel_locale(locale_id)
            )
        )

    def list_patterns(
        self, locale_id: str, list_type: ListType, width: ListWidth
    ) -> ListPatterns | None:
        """CLDR listPatterns; a missing width falls back to long."""
        locale = self._locale(locale_id)
        if locale is None:
            return None
        base_key = _LIST_STYLE_KEYS[list_type]
        key = base_key if width is ListWidth.LONG else f"{base_key}-{width}"
        patterns = locale.list_patterns.get(key) or locale.list_patterns.get(base_key)
        if not patterns:
            return None
        return ListPatterns(
            start=patterns["start"],
            middle=patterns["middle"],
            end=patterns["end"],
            pair=patterns["2"],
        )

    def format_relative_time(
        self, locale_id: str, field: str, value: Decimal, width: ListWidth
    ) -> str | None:
        """CLDR relativeTime pattern of a field, such as "in {0} quarters".

        Fields without patterns in the locale data go through
        babel.dates.format_timedelta, which renders quarters as three months.
        """
        locale = get_babel_locale(locale_id)
        # Babel keeps the CLDR <field> relativeTime patterns under date_fields
        date_fields = locale._data.get("date_fields") or {}  # noqa: SLF001
        key = field if width is ListWidth.LONG else f"{field}-{width}"
        by_direction = date_fields.get(key) or date_fields.get(field)
        if by_direction:
            patterns = by_direction.get("past" if value < 0 else "future")
            if patterns:
                magnitude = abs(value)
                category = str(locale.plural_form(magnitude))
                pattern = patterns.get(category) or patterns.get("other")
                if pattern:
                    number = babel_numbers.format_decimal(magnitude, locale=locale)
                    return str(pattern).replace("{0}", number)
        return self._format_timedelta(locale, field, value, width)

    @staticmethod
    def _format_timedelta(
        locale: Locale, field: str, value: Decimal, width: ListWidth
    ) -> str | None:
        unit = _RELATIVE_TIME_SECONDS.get(field)
        if unit is None:
            return None
        granularity, seconds_per_unit = unit
        try:
            seconds = float(value * seconds_per_unit)
            delta = timedelta(seconds=seconds)
        except (InvalidOperation, OverflowError):
            return None
        return str(
            babel_dates.format_timedelta(
                delta,
                granularity=granularity,
                threshold=float("inf"),
                add_direction=True,
                format=str(width),
                locale=locale,
            )
        )
