"""Tests for CLDR plural operands and plural category selection.

Reference: https://www.unicode.org/cldr/charts/47/supplemental/language_plural_rules.html
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from msgfmtengine.enums import DataKind, PluralCategory
from msgfmtengine.runtime import (
    BabelLocaleData,
    LocaleContext,
    LocaleResolver,
    PluralOperands,
    operands_of,
    select_plural_category,
)
from msgfmtengine.runtime.plural_operands import to_decimal
from tests.helpers import ALL_KINDS, FakeLocaleData


class TestOperandsOf:
    """Operand derivation from argument values."""

    def test_string_keeps_trailing_zeros(self) -> None:
        """'1.50' has two visible fraction digits, one significant."""
        ops = operands_of("1.50")
        assert (ops.i, ops.v, ops.w, ops.f, ops.t) == (1, 2, 1, 50, 5)
        assert ops.n == Decimal("1.50")

    def test_integer(self) -> None:
        """Integers have no fraction digits."""
        ops = operands_of(42)
        assert (ops.n, ops.i, ops.v, ops.w, ops.f, ops.t, ops.e) == (Decimal(42), 42, 0, 0, 0, 0, 0)

    def test_float_uses_shortest_repr(self) -> None:
        """Floats carry the digits of repr(), without a trailing '.0'."""
        assert operands_of(1.5).v == 1
        assert operands_of(0.25).f == 25

    @pytest.mark.parametrize("value", [1.0, 100.0, -3.0])
    def test_whole_floats_have_no_fraction_digits(self, value: float) -> None:
        """A whole-number float has the operands of the matching integer."""
        assert operands_of(value) == operands_of(int(value))

    def test_decimal_keeps_exponent(self) -> None:
        """Decimal('2.500') keeps its three fraction digits."""
        ops = operands_of(Decimal("2.500"))
        assert (ops.v, ops.w, ops.f, ops.t) == (3, 1, 500, 5)

    def test_negative_values(self) -> None:
        """n is the absolute value; the sign is recorded separately."""
        ops = operands_of(-5)
        assert ops.n == Decimal(5)
        assert ops.is_negative

    def test_exponent_notation(self) -> None:
        """e records the exponent of scientific input."""
        ops = operands_of("1.2e3")
        assert ops.e == 3
        assert ops.i == 1200
        assert ops.v == 0

    @pytest.mark.parametrize("value", [None, True, False, "abc", "", Decimal("NaN"), float("inf")])
    def test_non_numeric_is_zero(self, value: object) -> None:
        """Non-numeric, boolean and non-finite values count as zero."""
        ops = operands_of(value)
        assert ops.n == 0
        assert ops.i == 0
        assert not ops.is_negative

    def test_to_decimal(self) -> None:
        """to_decimal preserves textual digits and rejects non-numbers."""
        assert to_decimal(" 3.10 ") == Decimal("3.10")
        assert to_decimal(True) is None
        assert to_decimal([1]) is None

    @given(st.integers(min_value=-(10**30), max_value=10**30))
    def test_integer_operands(self, value: int) -> None:
        """Integers: i == |value| and no fraction operands."""
        ops = operands_of(value)
        assert ops.i == abs(value)
        assert (ops.v, ops.w, ops.f, ops.t) == (0, 0, 0, 0)
        assert ops.is_negative == (value < 0)

    @given(
        whole=st.integers(min_value=0, max_value=10**9),
        digits=st.integers(min_value=1, max_value=8),
        data=st.data(),
    )
    def test_string_fraction_operands(self, whole: int, digits: int, data: st.DataObject) -> None:
        """Fraction operands follow the written digits exactly."""
        fraction = data.draw(st.integers(min_value=0, max_value=10**digits - 1))
        written = f"{fraction:0{digits}d}"
        ops = operands_of(f"{whole}.{written}")
        stripped = written.rstrip("0")
        assert ops.i == whole
        assert ops.v == digits
        assert ops.w == len(stripped)
        assert ops.f == fraction
        assert ops.t == int(stripped or 0)


class TestSelectPluralCategory:
    """Category selection through the Babel backend."""

    @pytest.mark.parametrize(
        ("locale", "value", "expected"),
        [
            ("en", 1, PluralCategory.ONE),
            ("en", "1.0", PluralCategory.OTHER),
            ("en", 0, PluralCategory.OTHER),
            ("ru", 1, PluralCategory.ONE),
            ("ru", 2, PluralCategory.FEW),
            ("ru", 5, PluralCategory.MANY),
            ("ru", 21, PluralCategory.ONE),
            ("pl", 2, PluralCategory.FEW),
            ("lv", 0, PluralCategory.ZERO),
            ("ar", 0, PluralCategory.ZERO),
            ("ar", 2, PluralCategory.TWO),
            ("ja", 1, PluralCategory.OTHER),
        ],
    )
    def test_cardinal(self, locale: str, value: object, expected: PluralCategory) -> None:
        """Cardinal categories match CLDR."""
        assert select_plural_category(locale, value, BabelLocaleData()) is expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (1, PluralCategory.ONE),
            (2, PluralCategory.TWO),
            (3, PluralCategory.FEW),
            (4, PluralCategory.OTHER),
            (11, PluralCategory.OTHER),
            (22, PluralCategory.TWO),
        ],
    )
    def test_english_ordinal(self, value: int, expected: PluralCategory) -> None:
        """English ordinals: 1st, 2nd, 3rd, 4th, 11th, 22nd."""
        assert select_plural_category("en", value, BabelLocaleData(), ordinal=True) is expected

    def test_precomputed_operands(self) -> None:
        """PluralOperands are passed through unchanged."""
        ops = PluralOperands(n=Decimal(1), i=1, v=0, w=0, f=0, t=0)
        assert select_plural_category("en", ops, BabelLocaleData()) is PluralCategory.ONE

    def test_unknown_category_becomes_other(self) -> None:
        """A backend answer outside the CLDR set is treated as 'other'."""

        class OddData(FakeLocaleData):
            def plural_category(
                self, locale_id: str, operands: PluralOperands, *, ordinal: bool
            ) -> str:
                return "plenty"

        assert select_plural_category("en", 1, OddData()) is PluralCategory.OTHER

    def test_locale_without_plural_data(self) -> None:
        """A chain with no plural data selects 'other'."""
        data = FakeLocaleData(kinds={"en": {DataKind.NUMBER}})
        context = LocaleContext(LocaleResolver("en", data), data)
        assert context.plural_category(1) is PluralCategory.OTHER

    def test_plural_rules_follow_chain(self) -> None:
        """Plural rules come from the first chain entry with plural data."""
        data = FakeLocaleData(kinds={"pt": ALL_KINDS, "en": ALL_KINDS})
        context = LocaleContext(LocaleResolver("pt-BR", data), data)
        assert context.plural_category(1) is PluralCategory.ONE
        assert data.served_by("plural_category") == ["pt"]
