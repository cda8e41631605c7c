"""CLDR plural operands.

CLDR plural rules are formulas over a small set of operands derived from the
*visible* decimal form of a number, not only its value:

    n  absolute value
    i  integer digits of n
    v  number of visible fraction digits, with trailing zeros
    w  number of visible fraction digits, without trailing zeros
    f  visible fraction digits as an integer, with trailing zeros
    t  visible fraction digits as an integer, without trailing zeros
    e  exponent of the source's exponential notation (0 if none)

"1" and "1.0" have the same value but different operands (v=0 vs v=1), and
English selects "one" for the first and "other" for the second.

Textual policy:
    - str and Decimal arguments keep their digits as written: "1.50" -> v=2.
    - float arguments use Python's shortest round-trip repr without a
      trailing ".0": 1.5 -> "1.5", 1.0 -> "1", 1e21 -> "1e+21" (e=21).
      A float carries no trailing-zero information, so 1.50 and 1.5 are
      indistinguishable and 1.0 selects like 1.
    - Non-numeric values, None, bool and non-finite numbers count as zero.

Python 3.13+. Zero external dependencies.
"""

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

__all__ = ["PluralOperands", "operands_of", "to_decimal"]

_NUMERIC_TEXT_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE]([+-]?\d+))?$")
_ZERO = Decimal(0)


@dataclass(frozen=True, slots=True)
class PluralOperands:
    """Immutable CLDR operand set for one plural selection.

    Example:
        >>> ops = operands_of("1.50")
        >>> ops.i, ops.v, ops.w, ops.f, ops.t
        (1, 2, 1, 50, 5)
    """

    n: Decimal
    i: int
    v: int
    w: int
    f: int
    t: int
    e: int = 0
    is_negative: bool = False

    def as_decimal(self) -> Decimal:
        """Absolute value with the visible fraction digits preserved.

        Rule engines that derive v/w/f/t from a Decimal's exponent (Babel's
        plural_form does) see exactly the operands computed here.
        """
        return self.n


def _text_of(value: object) -> str | None:
    """Decimal text for a numeric argument, or None if it is not numeric."""
    match value:
        case bool():
            return None
        case int():
            return str(value)
        case float():
            text = repr(value)
            return text.removesuffix(".0")
        case Decimal():
            return str(value) if value.is_finite() else None
        case str():
            text = value.strip()
            return text if _NUMERIC_TEXT_RE.match(text) else None
    return None


def to_decimal(value: object) -> Decimal | None:
    """Convert an argument to Decimal, keeping textual fraction digits.

    Returns:
        Decimal, or None if the value is not a finite number

    Example:
        >>> to_decimal("2.50")
        Decimal('2.50')
        >>> to_decimal(None) is None
        True
    """
    text = _text_of(value)
    if text is None:
        return None
    try:
        number = Decimal(text)
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def operands_of(value: object) -> PluralOperands:
    """Compute CLDR plural operands for an argument value.

    Args:
        value: int, float, Decimal or numeric string; anything else is zero

    Returns:
        PluralOperands

    Example:
        >>> operands_of(5).i
        5
        >>> operands_of("1.2e3").e
        3
        >>> operands_of("abc").n
        Decimal('0')
    """
    text = _text_of(value)
    number = to_decimal(value)
    if number is None:
        number = _ZERO
    exponent = 0
    if text is not None and (match := _NUMERIC_TEXT_RE.match(text)) and match.group(1):
        exponent = int(match.group(1))

    absolute = number.copy_abs()
    visible = max(0, -int(absolute.as_tuple().exponent))
    fraction = format(absolute, "f").partition(".")[2] if visible else ""
    stripped = fraction.rstrip("0")

    return PluralOperands(
        n=absolute,
        i=int(absolute),
        v=len(fraction),
        w=len(stripped),
        f=int(fraction or 0),
        t=int(stripped or 0),
        e=exponent,
        is_negative=number < 0,
    )
