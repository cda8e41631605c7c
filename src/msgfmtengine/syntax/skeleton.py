"""ICU number skeleton parser.

Parses the ``::`` style slot of a number placeholder into a NumberFormatSpec:

    {price, number, ::currency/EUR .00}
    {ratio, number, ::percent .0#}
    {delta, number, ::+! ,_ @@#}

Both token forms are recognized and compose into one specification:

    Concise:  %  %x100  K  KK  +!  +_  +?  +-  ()  ,_  ,?  ,!  E0  EE0  000
    Verbose:  percent  permille  compact-short  compact-long  scientific
              engineering  ordinal  currency/XXX  unit/<id>  measure-unit/<id>
              scale/<n>  sign-*  group-*  unit-width-*  currency-*
              integer-width/*000  precision-integer  precision-unlimited
    Digits:   .00  .0#  .0*  .##+  (fraction)   @@  @@#  @*  (significant)

Unknown tokens never raise: they are recorded on the NumberFormatSpec and skipped, so
untrusted pattern content degrades instead of failing.

Python 3.13+. Zero external dependencies.
"""

import logging
import re
from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation
from enum import StrEnum

from msgfmtengine.constants import MAX_FRACTION_DIGITS
from msgfmtengine.enums import (
    CurrencyDisplay,
    GroupingStrategy,
    Notation,
    SignDisplay,
    UnitWidth,
)

__all__ = ["NumberFormatSpec", "PrecisionSource", "parse_skeleton"]

logger = logging.getLogger(__name__)

_FRACTION_RE = re.compile(r"^\.(0*)(#*)([*+]?)$")
_SIGNIFICANT_RE = re.compile(r"^(@+)(#*)([*+]?)$")
_INTEGER_WIDTH_RE = re.compile(r"^integer-width/([*+]?)(#*)(0*)$")
_CONCISE_INTEGER_WIDTH_RE = re.compile(r"^0+$")
_SCIENTIFIC_RE = re.compile(r"^(E{1,2})(\+[!?])?0+$")

_SIGN_TOKENS: dict[str, SignDisplay] = {
    "sign-auto": SignDisplay.AUTO,
    "sign-always": SignDisplay.ALWAYS,
    "sign-never": SignDisplay.NEVER,
    "sign-except-zero": SignDisplay.EXCEPT_ZERO,
    "sign-accounting": SignDisplay.ACCOUNTING,
    "sign-accounting-always": SignDisplay.ACCOUNTING_ALWAYS,
    "sign-accounting-except-zero": SignDisplay.ACCOUNTING_EXCEPT_ZERO,
    "+!": SignDisplay.ALWAYS,
    "+_": SignDisplay.NEVER,
    "+?": SignDisplay.EXCEPT_ZERO,
    "+-": SignDisplay.AUTO,
    "()": SignDisplay.ACCOUNTING,
    "()!": SignDisplay.ACCOUNTING_ALWAYS,
    "()?": SignDisplay.ACCOUNTING_EXCEPT_ZERO,
}

_GROUP_TOKENS: dict[str, GroupingStrategy] = {
    "group-off": GroupingStrategy.OFF,
    "group-min2": GroupingStrategy.MIN2,
    "group-auto": GroupingStrategy.AUTO,
    "group-on-aligned": GroupingStrategy.ON_ALIGNED,
    "group-always": GroupingStrategy.ALWAYS,
    ",_": GroupingStrategy.OFF,
    ",?": GroupingStrategy.MIN2,
    ",!": GroupingStrategy.ALWAYS,
}

_NOTATION_TOKENS: dict[str, Notation] = {
    "compact-short": Notation.COMPACT_SHORT,
    "K": Notation.COMPACT_SHORT,
    "compact-long": Notation.COMPACT_LONG,
    "KK": Notation.COMPACT_LONG,
    "scientific": Notation.SCIENTIFIC,
    "engineering": Notation.ENGINEERING,
    "notation-simple": Notation.STANDARD,
}

# unit-width-* sets both the measurement-unit width and the currency display.
_WIDTH_TOKENS: dict[str, tuple[UnitWidth, CurrencyDisplay]] = {
    "unit-width-narrow": (UnitWidth.NARROW, CurrencyDisplay.NARROW_SYMBOL),
    "unit-width-short": (UnitWidth.SHORT, CurrencyDisplay.SYMBOL),
    "unit-width-full-name": (UnitWidth.FULL_NAME, CurrencyDisplay.NAME),
    "unit-width-iso-code": (UnitWidth.ISO_CODE, CurrencyDisplay.CODE),
}

_CURRENCY_DISPLAY_TOKENS: dict[str, CurrencyDisplay] = {
    "currency-symbol": CurrencyDisplay.SYMBOL,
    "currency-narrow-symbol": CurrencyDisplay.NARROW_SYMBOL,
    "currency-iso-code": CurrencyDisplay.CODE,
    "currency-name": CurrencyDisplay.NAME,
}


class PrecisionSource(StrEnum):
    """Where a spec's digit limits came from."""

    DEFAULT = "default"
    """Locale default number format"""

    SKELETON = "skeleton"
    """Fraction or significant-digit tokens of a skeleton"""

    PATTERN = "pattern"
    """Literal CLDR number pattern, e.g. {x, number, #,##0.00}"""


@dataclass(frozen=True, slots=True)
class NumberFormatSpec:
    """Structured number-format specification.

    Built token by token while parsing, immutable afterwards. A default
    instance means "locale default number format".

    Attributes:
        notation: standard, scientific, engineering, compact-short, compact-long
        sign_display: Sign policy
        grouping: Grouping policy
        min_integer_digits: Zero-pad the integer part to this many digits
        max_integer_digits: Truncate the integer part (None = unlimited)
        min_fraction_digits: Minimum fraction digits (None = locale default)
        max_fraction_digits: Maximum fraction digits (None = locale default)
        min_significant_digits: Minimum significant digits (None = unused)
        max_significant_digits: Maximum significant digits (None = unused)
        scale: Multiplier applied before any other processing
        is_percent: Render as percent (value x 100)
        is_permille: Render as permille (value x 1000)
        is_ordinal: Ordinal rendering requested
        currency: ISO 4217 code, upper-cased
        currency_display: Currency rendering
        unit: Measurement unit id (e.g. "length-meter", "kilometer")
        unit_width: Measurement unit width
        pattern: Literal CLDR pattern (precision_source == PATTERN)
        precision_source: Where digit limits came from
        unrecognized_tokens: Skeleton tokens that were skipped
    """

    notation: Notation = Notation.STANDARD
    sign_display: SignDisplay = SignDisplay.AUTO
    grouping: GroupingStrategy = GroupingStrategy.AUTO
    min_integer_digits: int = 1
    max_integer_digits: int | None = None
    min_fraction_digits: int | None = None
    max_fraction_digits: int | None = None
    min_significant_digits: int | None = None
    max_significant_digits: int | None = None
    scale: Decimal = Decimal(1)
    is_percent: bool = False
    is_permille: bool = False
    is_ordinal: bool = False
    currency: str | None = None
    currency_display: CurrencyDisplay = CurrencyDisplay.SYMBOL
    unit: str | None = None
    unit_width: UnitWidth = UnitWidth.SHORT
    pattern: str | None = None
    precision_source: PrecisionSource = PrecisionSource.DEFAULT
    unrecognized_tokens: tuple[str, ...] = ()

    @property
    def has_fraction_limits(self) -> bool:
        """True if fraction digits were set explicitly."""
        return self.min_fraction_digits is not None or self.max_fraction_digits is not None

    @property
    def has_significant_limits(self) -> bool:
        """True if significant digits were set explicitly."""
        return self.max_significant_digits is not None

    @property
    def is_literal_fallback(self) -> bool:
        """True if the skeleton had tokens but none of them were understood.

        Such a placeholder renders the argument's plain string form.
        """
        return bool(self.unrecognized_tokens) and self == NumberFormatSpec(
            unrecognized_tokens=self.unrecognized_tokens
        )


def parse_skeleton(text: str) -> NumberFormatSpec:
    """Parse an ICU number skeleton.

    Args:
        text: Skeleton text, with or without the leading ``::``

    Returns:
        NumberFormatSpec. Empty or whitespace-only input yields the default
        spec (locale default number format).

    Example:
        >>> spec = parse_skeleton("::percent .00")
        >>> spec.is_percent, spec.min_fraction_digits, spec.max_fraction_digits
        (True, 2, 2)
        >>> parse_skeleton("currency/eur").currency
        'EUR'
        >>> parse_skeleton("bogus").unrecognized_tokens
        ('bogus',)
    """
    body = text.strip()
    if body.startswith("::"):
        body = body[2:]

    spec = NumberFormatSpec()
    unrecognized: list[str] = []
    for token in body.split():
        updated = _apply_token(spec, token)
        if updated is None:
            unrecognized.append(token)
        else:
            spec = updated

    if unrecognized:
        logger.debug("Ignoring unrecognized number skeleton tokens: %s", unrecognized)
        spec = replace(spec, unrecognized_tokens=tuple(unrecognized))
    return spec


def _apply_token(  # noqa: PLR0911, PLR0912  # One branch per token family
    spec: NumberFormatSpec, token: str
) -> NumberFormatSpec | None:
    """Compose one token into spec; None if the token is not understood."""
    if token in _SIGN_TOKENS:
        return replace(spec, sign_display=_SIGN_TOKENS[token])
    if token in _GROUP_TOKENS:
        return replace(spec, grouping=_GROUP_TOKENS[token])
    if token in _NOTATION_TOKENS:
        return replace(spec, notation=_NOTATION_TOKENS[token])
    if token in _WIDTH_TOKENS:
        unit_width, currency_display = _WIDTH_TOKENS[token]
        return replace(spec, unit_width=unit_width, currency_display=currency_display)
    if token in _CURRENCY_DISPLAY_TOKENS:
        return replace(spec, currency_display=_CURRENCY_DISPLAY_TOKENS[token])

    match token:
        case "percent" | "%":
            return replace(spec, is_percent=True, is_permille=False)
        case "%x100":
            return replace(spec, is_percent=True, is_permille=False, scale=Decimal(100))
        case "permille":
            return replace(spec, is_permille=True, is_percent=False)
        case "ordinal":
            return replace(spec, is_ordinal=True)
        case "precision-integer":
            return _with_fraction(spec, 0, 0)
        case "precision-unlimited":
            return _with_fraction(spec, 0, MAX_FRACTION_DIGITS)
        case "base-unit" | "notation-simple":
            return spec

    stem, _, option = token.partition("/")
    if option:
        return _apply_option_token(spec, stem, option)

    if match := _FRACTION_RE.match(token):
        zeros, hashes, unlimited = match.groups()
        minimum = len(zeros)
        maximum = MAX_FRACTION_DIGITS if unlimited else minimum + len(hashes)
        return _with_fraction(spec, minimum, maximum)

    if match := _SIGNIFICANT_RE.match(token):
        ats, hashes, unlimited = match.groups()
        minimum = len(ats)
        maximum = MAX_FRACTION_DIGITS if unlimited else minimum + len(hashes)
        return replace(
            spec,
            min_significant_digits=minimum,
            max_significant_digits=maximum,
            precision_source=PrecisionSource.SKELETON,
        )

    if _CONCISE_INTEGER_WIDTH_RE.match(token):
        return replace(spec, min_integer_digits=len(token))

    if match := _SCIENTIFIC_RE.match(token):
        notation = Notation.ENGINEERING if match.group(1) == "EE" else Notation.SCIENTIFIC
        return replace(spec, notation=notation)

    return None


def _apply_option_token(
    spec: NumberFormatSpec, stem: str, option: str
) -> NumberFormatSpec | None:
    """Compose a ``stem/option`` token."""
    match stem:
        case "currency":
            return replace(spec, currency=option.upper())
        case "unit" | "measure-unit":
            return replace(spec, unit=option)
        case "scale":
            try:
                factor = Decimal(option)
            except InvalidOperation:
                return None
            if not factor.is_finite():
                return None
            return replace(spec, scale=factor)
        case "integer-width":
            match = _INTEGER_WIDTH_RE.match(f"{stem}/{option}")
            if match is None:
                return None
            unlimited, hashes, zeros = match.groups()
            maximum = None if unlimited else len(hashes) + len(zeros)
            return replace(
                spec,
                min_integer_digits=len(zeros),
                max_integer_digits=maximum or None,
            )
    return None


def _with_fraction(spec: NumberFormatSpec, minimum: int, maximum: int) -> NumberFormatSpec:
    return replace(
        spec,
        min_fraction_digits=minimum,
        max_fraction_digits=maximum,
        precision_source=PrecisionSource.SKELETON,
    )
