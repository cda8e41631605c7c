"""Number rendering under a NumberFormatSpec.

The locale-data backend renders a non-negative magnitude with a CLDR
pattern. Everything a skeleton can ask for on top of that is decided here:

    1. scale (scale/<n>, %x100) and percent/permille multiplication
    2. integer truncation (integer-width/##0)
    3. significant-digit rounding (@@#) or fraction rounding (.00)
    4. grouping policy (min2 groups only from 10,000 up)
    5. notation: compact via the backend, scientific/engineering composed here
    6. currency or measurement unit
    7. ordinal suffix (::ordinal) chosen by the ordinal plural category
    8. sign display composed around the rendered magnitude
    9. transliteration into the locale's numbering digits

Rendering never raises for data gaps: a backend failure or a non-numeric
argument degrades to the argument's plain string form.

Python 3.13+.
"""

import logging
from dataclasses import replace
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation, localcontext

from msgfmtengine.enums import DataKind, GroupingStrategy, Notation, SignDisplay
from msgfmtengine.runtime.locale_context import LocaleContext
from msgfmtengine.runtime.locale_data import NumberRenderOptions, NumberStyle
from msgfmtengine.runtime.plural_operands import to_decimal
from msgfmtengine.runtime.value_types import plain_string
from msgfmtengine.syntax.skeleton import NumberFormatSpec

__all__ = ["DEFAULT_NUMBER_SPEC", "format_number", "format_plain_number"]

logger = logging.getLogger(__name__)

DEFAULT_NUMBER_SPEC = NumberFormatSpec()

_MIN2_THRESHOLD = Decimal(10000)
_HUNDRED = Decimal(100)
_THOUSAND = Decimal(1000)

_ACCOUNTING = frozenset(
    {
        SignDisplay.ACCOUNTING,
        SignDisplay.ACCOUNTING_ALWAYS,
        SignDisplay.ACCOUNTING_EXCEPT_ZERO,
    }
)


def _quantize(value: Decimal, fraction_digits: int) -> Decimal:
    """Round half-even to a fixed number of fraction digits."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + fraction_digits + 2)
        return value.quantize(Decimal(1).scaleb(-fraction_digits), rounding=ROUND_HALF_EVEN)


def _round_significant(
    value: Decimal, minimum: int, maximum: int
) -> tuple[Decimal, int, int]:
    """Round to at most `maximum` significant digits.

    Returns:
        (rounded value, min fraction digits, max fraction digits) such that
        the rendering shows at least `minimum` significant digits

    Example:
        >>> _round_significant(Decimal("12345"), 2, 2)
        (Decimal('12000'), 0, 0)
        >>> _round_significant(Decimal("1.5"), 3, 3)
        (Decimal('1.50'), 2, 2)
    """
    if value == 0:
        digits = max(0, minimum - 1)
        return Decimal(0), digits, digits
    places = maximum - value.adjusted() - 1
    rounded = _quantize(value, places)
    if places < 0:
        # Rounded into the integer part: 1.2E+4 -> 12000
        rounded = _quantize(rounded, 0)
    min_fraction = max(0, minimum - rounded.adjusted() - 1)
    return rounded, min_fraction, max(min_fraction, places, 0)


def _compose_sign(
    text: str, *, negative: bool, is_zero: bool, spec: NumberFormatSpec, context: LocaleContext
) -> str:
    symbols = context.number_symbols()
    match spec.sign_display:
        case SignDisplay.NEVER:
            return text
        case SignDisplay.ALWAYS:
            return f"{symbols.minus_sign if negative else symbols.plus_sign}{text}"
        case SignDisplay.EXCEPT_ZERO:
            if is_zero:
                return text
            return f"{symbols.minus_sign if negative else symbols.plus_sign}{text}"
        case SignDisplay.ACCOUNTING:
            return f"({text})" if negative else text
        case SignDisplay.ACCOUNTING_ALWAYS:
            return f"({text})" if negative else f"{symbols.plus_sign}{text}"
        case SignDisplay.ACCOUNTING_EXCEPT_ZERO:
            if is_zero:
                return text
            return f"({text})" if negative else f"{symbols.plus_sign}{text}"
        case _:
            return f"{symbols.minus_sign}{text}" if negative else text


def _style_for(spec: NumberFormatSpec) -> NumberStyle:
    if spec.notation is Notation.COMPACT_LONG:
        return NumberStyle.COMPACT_LONG
    if spec.notation is Notation.COMPACT_SHORT:
        return NumberStyle.COMPACT_SHORT
    if spec.currency:
        if spec.sign_display in _ACCOUNTING:
            return NumberStyle.ACCOUNTING
        return NumberStyle.CURRENCY
    if spec.is_percent:
        return NumberStyle.PERCENT
    if spec.is_permille:
        return NumberStyle.PERMILLE
    return NumberStyle.DECIMAL


def _render_scientific(
    magnitude: Decimal,
    options: NumberRenderOptions,
    spec: NumberFormatSpec,
    locale_id: str,
    context: LocaleContext,
) -> str:
    """Mantissa via the backend, exponent composed with the locale symbol."""
    exponent = magnitude.adjusted() if magnitude else 0
    if spec.notation is Notation.ENGINEERING:
        exponent -= exponent % 3
    mantissa = magnitude.scaleb(-exponent)
    mantissa_options = replace(options, style=NumberStyle.DECIMAL, grouping=False)
    text = context.data.format_number(locale_id, mantissa, mantissa_options)
    symbols = context.number_symbols()
    exponent_text = f"{symbols.minus_sign}{-exponent}" if exponent < 0 else str(exponent)
    suffix = ""
    if spec.is_percent:
        suffix = "%"
    elif spec.is_permille:
        suffix = "‰"
    return f"{text}{symbols.exponential}{exponent_text}{suffix}"


def _ordinal_suffix(magnitude: Decimal, context: LocaleContext) -> str:
    """Suffix such as "st" or "nd"; empty if the locale has none."""
    locale_id = context.locale_for(DataKind.ORDINAL)
    if locale_id is None:
        return ""
    category = context.plural_category(magnitude, ordinal=True)
    return context.data.ordinal_suffix(locale_id, category) or ""


def format_number(value: object, spec: NumberFormatSpec, context: LocaleContext) -> str:
    """Format a number argument under a spec.

    Args:
        value: int, float, Decimal or numeric string
        spec: Parsed skeleton, pattern, or DEFAULT_NUMBER_SPEC
        context: Formatter locale context

    Returns:
        Formatted string; the plain string form of value if it is not a
        number, the skeleton was not understood at all, or rendering failed

    Example:
        >>> from msgfmtengine.runtime.locale_data import BabelLocaleData
        >>> from msgfmtengine.runtime.locale_resolver import LocaleResolver
        >>> from msgfmtengine.syntax.skeleton import parse_skeleton
        >>> ctx = LocaleContext(LocaleResolver("en", BabelLocaleData()), BabelLocaleData())
        >>> format_number(0.1234, parse_skeleton("::percent .00"), ctx)
        '12.34%'
        >>> format_number(-42, parse_skeleton("::sign-never"), ctx)
        '42'
    """
    number = to_decimal(value)
    if number is None or spec.is_literal_fallback:
        return plain_string(value)

    kind = DataKind.CURRENCY if spec.currency else DataKind.NUMBER
    locale_id = context.locale_for(kind) or context.locale_for(DataKind.NUMBER)
    if locale_id is None:
        return plain_string(value)

    number *= spec.scale
    if spec.is_percent and spec.scale == 1:
        number *= _HUNDRED
    elif spec.is_permille:
        number *= _THOUSAND

    negative = number < 0
    magnitude = number.copy_abs()

    if spec.max_integer_digits is not None:
        magnitude %= Decimal(10) ** spec.max_integer_digits

    min_fraction = spec.min_fraction_digits
    max_fraction = spec.max_fraction_digits
    scientific = spec.notation in (Notation.SCIENTIFIC, Notation.ENGINEERING)

    try:
        if spec.has_significant_limits and not scientific:
            magnitude, min_fraction, max_fraction = _round_significant(
                magnitude,
                spec.min_significant_digits or 1,
                spec.max_significant_digits or 1,
            )
        elif max_fraction is not None and not scientific:
            magnitude = _quantize(magnitude, max_fraction)
    except InvalidOperation:
        logger.debug("Could not round %s under %s", number, spec)

    match spec.grouping:
        case GroupingStrategy.OFF:
            grouping = False
        case GroupingStrategy.MIN2:
            grouping = magnitude >= _MIN2_THRESHOLD
        case _:
            grouping = True

    options = NumberRenderOptions(
        style=_style_for(spec),
        min_integer_digits=spec.min_integer_digits,
        min_fraction_digits=min_fraction,
        max_fraction_digits=max_fraction,
        grouping=grouping,
        currency=spec.currency,
        currency_display=spec.currency_display,
        pattern=spec.pattern,
    )

    try:
        if scientific:
            text = _render_scientific(magnitude, options, spec, locale_id, context)
        elif spec.unit:
            unit_locale = context.locale_for(DataKind.UNIT) or locale_id
            text = context.data.format_unit(
                unit_locale, magnitude, spec.unit, spec.unit_width, options
            ) or f"{context.data.format_number(locale_id, magnitude, options)} {spec.unit}"
        else:
            text = context.data.format_number(locale_id, magnitude, options)
    except (ValueError, KeyError, TypeError, InvalidOperation) as e:
        logger.debug("Number formatting degraded for %r: %s", value, e)
        return plain_string(value)

    if spec.is_ordinal and not scientific:
        text += _ordinal_suffix(magnitude, context)

    text = _compose_sign(
        text, negative=negative, is_zero=magnitude == 0, spec=spec, context=context
    )
    return context.transliterate(text)


def format_plain_number(value: object, context: LocaleContext) -> str:
    """Locale default number format, as used for '#' and plain arguments."""
    return format_number(value, DEFAULT_NUMBER_SPEC, context)
