"""Built-in formatter functions.

Every built-in has the signature ``(value, call, context) -> str``:

    value    resolved argument value; a (start, end) tuple for range formatters
    call     the FormatterCall node (style text, parsed skeleton)
    context  the formatter's LocaleContext

Built-ins never raise for bad values or data gaps. A value a formatter
cannot interpret renders as its plain string form.

Styles understood:
    number        (none) | integer | percent | currency | currency/XXX
                  | ::skeleton | literal CLDR number pattern
    date/time/    short | medium (default) | long | full | ::skeleton
    datetime      | literal CLDR date pattern
    list          [conjunction|disjunction|unit] [long|short|narrow]
    duration      long (default) | short | narrow | timer
    relativeTime  field [long|short|narrow] [always|auto]
    numberRange   (none) | ::skeleton | any number style
    dateRange     any date style

Python 3.13+. Uses Babel through the locale-data backend.
"""

import logging
import re
from collections.abc import Callable, Mapping, Sequence
from datetime import UTC, date, datetime, time, timedelta
from decimal import Decimal, InvalidOperation

from msgfmtengine.enums import DataKind, DateTimeKind, ListType, ListWidth, UnitWidth
from msgfmtengine.locale_utils import locale_language
from msgfmtengine.runtime.locale_context import LocaleContext
from msgfmtengine.runtime.locale_data import ListPatterns, NumberRenderOptions
from msgfmtengine.runtime.number_format import (
    DEFAULT_NUMBER_SPEC,
    format_number,
    format_plain_number,
)
from msgfmtengine.runtime.plural_operands import to_decimal
from msgfmtengine.runtime.value_types import plain_string
from msgfmtengine.syntax.ast import FormatterCall
from msgfmtengine.syntax.skeleton import NumberFormatSpec, PrecisionSource, parse_skeleton

__all__ = [
    "BUILTIN_FORMATTERS",
    "BuiltinFormatter",
    "date_formatter",
    "date_range_formatter",
    "datetime_formatter",
    "duration_formatter",
    "format_plain_value",
    "join_list",
    "list_formatter",
    "number_formatter",
    "number_range_formatter",
    "number_spec_for_style",
    "range_separator",
    "relative_time_formatter",
    "time_formatter",
]

logger = logging.getLogger(__name__)

type BuiltinFormatter = Callable[[object, FormatterCall, LocaleContext], str]

_DATE_STYLES = frozenset({"short", "medium", "long", "full"})
_FALLBACK_CURRENCY = "USD"
_FALLBACK_LIST = ListPatterns(start="{0}, {1}", middle="{0}, {1}", end="{0}, {1}", pair="{0}, {1}")
_STYLE_SPLIT_RE = re.compile(r"[\s,]+")

# ISO-8601 duration: PnYnMnWnDTnHnMnS, fractions allowed on any component.
_ISO_DURATION_RE = re.compile(
    r"^(?P<sign>[-+])?P"
    r"(?:(?P<years>\d+(?:[.,]\d+)?)Y)?"
    r"(?:(?P<months>\d+(?:[.,]\d+)?)M)?"
    r"(?:(?P<weeks>\d+(?:[.,]\d+)?)W)?"
    r"(?:(?P<days>\d+(?:[.,]\d+)?)D)?"
    r"(?:T"
    r"(?:(?P<hours>\d+(?:[.,]\d+)?)H)?"
    r"(?:(?P<minutes>\d+(?:[.,]\d+)?)M)?"
    r"(?:(?P<seconds>\d+(?:[.,]\d+)?)S)?"
    r")?$",
    re.IGNORECASE,
)
_ISO_DURATION_SECONDS: dict[str, int] = {
    "years": 365 * 86400,
    "months": 30 * 86400,
    "weeks": 7 * 86400,
    "days": 86400,
    "hours": 3600,
    "minutes": 60,
    "seconds": 1,
}

_DURATION_UNITS = (
    ("duration-hour", 3600),
    ("duration-minute", 60),
    ("duration-second", 1),
)
_DURATION_WIDTHS: dict[str, UnitWidth] = {
    "long": UnitWidth.FULL_NAME,
    "short": UnitWidth.SHORT,
    "narrow": UnitWidth.NARROW,
}

# Range separators: no spaces for CJK, plain spaces for Arabic, thin spaces
# elsewhere.
_TIGHT_RANGE_LANGUAGES = frozenset({"ja", "zh", "ko"})
_SPACED_RANGE_LANGUAGES = frozenset({"ar"})


def _style_tokens(style: str | None) -> list[str]:
    if not style:
        return []
    return [token for token in _STYLE_SPLIT_RE.split(style.strip().lower()) if token]


# ============================================================================
# Values
# ============================================================================


def _to_datetime(value: object) -> datetime | None:
    """Interpret an argument as a point in time."""
    match value:
        case datetime():
            return value
        case date():
            return datetime.combine(value, time())
        case time():
            return datetime.combine(date(1970, 1, 1), value)
        case bool():
            return None
        case int() | float() | Decimal():
            try:
                return datetime.fromtimestamp(float(value), tz=UTC)
            except (OverflowError, OSError, ValueError):
                return None
        case str():
            try:
                return datetime.fromisoformat(value.strip())
            except ValueError:
                logger.debug("Unparsable date string %r", value)
                return None
    return None


def _to_seconds(value: object) -> Decimal | None:
    """Interpret an argument as a duration in seconds."""
    if isinstance(value, timedelta):
        return Decimal(str(value.total_seconds()))
    if isinstance(value, str) and (match := _ISO_DURATION_RE.match(value.strip())):
        parts = {name: text for name, text in match.groupdict().items() if text}
        if not parts.keys() - {"sign"}:
            return None
        total = sum(
            (
                Decimal(text.replace(",", ".")) * _ISO_DURATION_SECONDS[name]
                for name, text in parts.items()
                if name != "sign"
            ),
            Decimal(0),
        )
        return -total if parts.get("sign") == "-" else total
    return to_decimal(value)


def format_plain_value(value: object, context: LocaleContext) -> str:
    """Render a plain {name} argument.

    None is empty, booleans are true/false, numbers use the locale default
    number format, dates and datetimes the locale medium style, everything
    else str().
    """
    match value:
        case None | bool() | str():
            return plain_string(value)
        case int() | float() | Decimal():
            return format_plain_number(value, context)
        case datetime():
            return _format_moment(value, None, DateTimeKind.DATETIME, context)
        case date():
            return _format_moment(value, None, DateTimeKind.DATE, context)
    return plain_string(value)


# ============================================================================
# Numbers
# ============================================================================


def number_spec_for_style(style: str | None, context: LocaleContext) -> NumberFormatSpec:
    """Translate a number style argument into a NumberFormatSpec."""
    if style is None:
        return DEFAULT_NUMBER_SPEC
    keyword = style.lower()
    if keyword == "integer":
        return NumberFormatSpec(
            min_fraction_digits=0,
            max_fraction_digits=0,
            precision_source=PrecisionSource.SKELETON,
        )
    if keyword == "percent":
        return NumberFormatSpec(is_percent=True)
    if keyword == "currency":
        return NumberFormatSpec(currency=_default_currency(context))
    if keyword.startswith(("currency/", "::")):
        return parse_skeleton(style)
    currency = _default_currency(context) if "\xa4" in style else None
    return NumberFormatSpec(
        pattern=style, currency=currency, precision_source=PrecisionSource.PATTERN
    )


def _default_currency(context: LocaleContext) -> str:
    locale_id = context.locale_for(DataKind.CURRENCY)
    if locale_id is None:
        return _FALLBACK_CURRENCY
    return context.data.default_currency(locale_id) or _FALLBACK_CURRENCY


def number_formatter(value: object, call: FormatterCall, context: LocaleContext) -> str:
    """{n, number[, style]}"""
    spec = call.skeleton or number_spec_for_style(call.style, context)
    return format_number(value, spec, context)


def range_separator(context: LocaleContext) -> str:
    """Separator between the two ends of a range for the formatter locale.

    Example:
        >>> from msgfmtengine.runtime.locale_data import BabelLocaleData
        >>> from msgfmtengine.runtime.locale_resolver import LocaleResolver
        >>> data = BabelLocaleData()
        >>> range_separator(LocaleContext(LocaleResolver("ja", data), data))
        '–'
    """
    language = locale_language(context.requested)
    if language in _TIGHT_RANGE_LANGUAGES:
        return "\u2013"
    if language in _SPACED_RANGE_LANGUAGES:
        return " \u2013 "
    return "\u2009\u2013\u2009"


def _range_ends(value: object) -> tuple[object, object]:
    if isinstance(value, tuple) and len(value) == 2:
        return value[0], value[1]
    return value, value


def number_range_formatter(value: object, call: FormatterCall, context: LocaleContext) -> str:
    """{start, numberRange, end[, style]}: both ends share one spec."""
    start, end = _range_ends(value)
    spec = call.skeleton or number_spec_for_style(call.style, context)
    first = format_number(start, spec, context)
    second = format_number(end, spec, context)
    return f"{first}{range_separator(context)}{second}"


# ============================================================================
# Dates and times
# ============================================================================


def _format_moment(
    value: object, style: str | None, kind: DateTimeKind, context: LocaleContext
) -> str:
    moment = _to_datetime(value)
    if moment is None:
        return plain_string(value)
    locale_id = context.locale_for(DataKind.DATE)
    if locale_id is None:
        return moment.isoformat()

    data = context.data
    try:
        if style and style.startswith("::"):
            pattern = data.date_skeleton_pattern(locale_id, style[2:].strip())
            if pattern is None:
                logger.debug("No date pattern matches skeleton %r", style)
                pattern = data.date_pattern(locale_id, kind, "medium")
        elif style is None or style.lower() in _DATE_STYLES:
            pattern = data.date_pattern(locale_id, kind, (style or "medium").lower())
        else:
            pattern = style
        return data.format_datetime(locale_id, moment, pattern)
    except (ValueError, KeyError, AttributeError, OverflowError) as e:
        logger.debug("Date formatting degraded for %r: %s", value, e)
        return moment.isoformat()


def date_formatter(value: object, call: FormatterCall, context: LocaleContext) -> str:
    """{d, date[, style]}"""
    return _format_moment(value, call.style, DateTimeKind.DATE, context)


def time_formatter(value: object, call: FormatterCall, context: LocaleContext) -> str:
    """{t, time[, style]}"""
    return _format_moment(value, call.style, DateTimeKind.TIME, context)


def datetime_formatter(value: object, call: FormatterCall, context: LocaleContext) -> str:
    """{dt, datetime[, style]}"""
    return _format_moment(value, call.style, DateTimeKind.DATETIME, context)


def date_range_formatter(value: object, call: FormatterCall, context: LocaleContext) -> str:
    """{start, dateRange, end[, style]}

    A ``::skeleton`` style uses the locale interval formats, so shared fields
    are written once ("Jan 5 – 9, 2024"). Other styles format both ends and
    join them with the locale interval fallback pattern.
    """
    start, end = _range_ends(value)
    locale_id = context.locale_for(DataKind.DATE)
    style = call.style
    if locale_id is not None and style and style.startswith("::"):
        first_moment, second_moment = _to_datetime(start), _to_datetime(end)
        if first_moment is not None and second_moment is not None:
            try:
                return context.data.format_date_interval(
                    locale_id, first_moment, second_moment, style[2:].strip()
                )
            except (ValueError, KeyError, TypeError, AttributeError) as e:
                logger.debug("Date interval degraded to fallback join: %s", e)

    first = _format_moment(start, style, DateTimeKind.DATE, context)
    second = _format_moment(end, style, DateTimeKind.DATE, context)
    if locale_id is None:
        return f"{first}{range_separator(context)}{second}"
    return context.data.interval_fallback(locale_id).replace("{0}", first).replace("{1}", second)


# ============================================================================
# Lists
# ============================================================================


def _list_items(value: object, context: LocaleContext) -> list[str]:
    match value:
        case None:
            return []
        case str() | bytes() | Mapping():
            return [plain_string(value)]
        case Sequence() | set() | frozenset():
            return [format_plain_value(item, context) for item in value]
    return [format_plain_value(value, context)]


def join_list(items: Sequence[str], patterns: ListPatterns) -> str:
    """Join items with CLDR list patterns.

    Example:
        >>> p = ListPatterns(start="{0}, {1}", middle="{0}, {1}", end="{0}, and {1}",
        ...                  pair="{0} and {1}")
        >>> join_list(["a", "b", "c"], p)
        'a, b, and c'
        >>> join_list(["a", "b"], p)
        'a and b'
    """
    match len(items):
        case 0:
            return ""
        case 1:
            return items[0]
        case 2:
            return patterns.pair.format(items[0], items[1])
    result = patterns.end.format(items[-2], items[-1])
    for item in reversed(items[1:-2]):
        result = patterns.middle.format(item, result)
    return patterns.start.format(items[0], result)


def list_formatter(value: object, call: FormatterCall, context: LocaleContext) -> str:
    """{items, list[, type][, width]}"""
    list_type = ListType.CONJUNCTION
    width = ListWidth.LONG
    for token in _style_tokens(call.style):
        if token in ListType:
            list_type = ListType(token)
        elif token in ListWidth:
            width = ListWidth(token)
        else:
            logger.debug("Ignoring unknown list style token %r", token)

    items = _list_items(value, context)
    locale_id = context.locale_for(DataKind.LIST)
    patterns = None
    if locale_id is not None:
        patterns = context.data.list_patterns(locale_id, list_type, width)
    return join_list(items, patterns or _FALLBACK_LIST)


# ============================================================================
# Durations and relative time
# ============================================================================


def _format_timer(seconds: Decimal) -> str:
    total = int(abs(seconds).to_integral_value())
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    sign = "-" if seconds < 0 and total else ""
    return f"{sign}{hours}:{minutes:02d}:{secs:02d}"


def duration_formatter(value: object, call: FormatterCall, context: LocaleContext) -> str:
    """{secs, duration[, style]}"""
    seconds = _to_seconds(value)
    if seconds is None:
        return plain_string(value)

    style = (call.style or "long").lower()
    if style == "timer":
        return context.transliterate(_format_timer(seconds))
    width = _DURATION_WIDTHS.get(style, UnitWidth.FULL_NAME)

    remaining = abs(seconds)
    parts: list[tuple[str, Decimal]] = []
    for unit, unit_seconds in _DURATION_UNITS:
        if unit_seconds > 1:
            amount = Decimal(int(remaining // unit_seconds))
            remaining -= amount * unit_seconds
        else:
            amount = remaining
        if amount:
            parts.append((unit, amount))
    if not parts:
        parts.append(("duration-second", Decimal(0)))

    unit_locale = context.locale_for(DataKind.UNIT)
    rendered: list[str] = []
    for unit, amount in parts:
        text = None
        if unit_locale is not None:
            text = context.data.format_unit(
                unit_locale, amount, unit, width, NumberRenderOptions()
            )
        rendered.append(text or f"{format_plain_number(amount, context)} {unit[9:]}")

    list_locale = context.locale_for(DataKind.LIST)
    list_width = ListWidth.LONG if width is UnitWidth.FULL_NAME else ListWidth(str(width))
    patterns = None
    if list_locale is not None:
        patterns = context.data.list_patterns(list_locale, ListType.UNIT, list_width)
    text = join_list(rendered, patterns or _FALLBACK_LIST)
    return f"-{text}" if seconds < 0 else text


def relative_time_formatter(value: object, call: FormatterCall, context: LocaleContext) -> str:
    """{v, relativeTime[, field][, width][, numeric]}

    numeric=auto ("yesterday", "next week") is accepted and rendered
    numerically.
    """
    tokens = _style_tokens(call.style)
    field = tokens[0] if tokens else "day"
    width = ListWidth.LONG
    for token in tokens[1:]:
        if token in ListWidth:
            width = ListWidth(token)

    amount = to_decimal(value)
    if amount is None:
        amount = Decimal(0)

    locale_id = context.locale_for(DataKind.RELATIVE_TIME)
    text = None
    if locale_id is not None:
        try:
            text = context.data.format_relative_time(locale_id, field, amount, width)
        except (ValueError, KeyError, InvalidOperation) as e:
            logger.debug("Relative time degraded for %r %s: %s", value, field, e)
    if text is None:
        return f"{format_plain_number(amount, context)} {field}"
    return context.transliterate(text)


BUILTIN_FORMATTERS: dict[str, BuiltinFormatter] = {
    "number": number_formatter,
    "date": date_formatter,
    "time": time_formatter,
    "datetime": datetime_formatter,
    "list": list_formatter,
    "duration": duration_formatter,
    "relativetime": relative_time_formatter,
    "numberrange": number_range_formatter,
    "daterange": date_range_formatter,
}
