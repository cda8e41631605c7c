"""Tests for number formatting through {n, number, ...} and numberRange."""

from __future__ import annotations

from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from msgfmtengine import MessageFormatter
from msgfmtengine.runtime import BabelLocaleData, LocaleContext, LocaleResolver
from msgfmtengine.runtime.number_format import format_number, format_plain_number
from msgfmtengine.syntax import NumberFormatSpec


@pytest.fixture(scope="module")
def en() -> MessageFormatter:
    return MessageFormatter("en")


def _context(locale: str) -> LocaleContext:
    data = BabelLocaleData()
    return LocaleContext(LocaleResolver(locale, data), data)


class TestNamedStyles:
    """integer, percent, currency and literal patterns."""

    def test_default(self, en: MessageFormatter) -> None:
        """No style uses the locale decimal pattern."""
        assert en.format_message("{n, number}", {"n": 1234.5678}) == "1,234.568"

    def test_integer(self, en: MessageFormatter) -> None:
        """integer rounds half-even to whole numbers."""
        assert en.format_message("{n, number, integer}", {"n": 3.7}) == "4"
        assert en.format_message("{n, number, integer}", {"n": "2.5"}) == "2"

    def test_percent(self, en: MessageFormatter) -> None:
        """percent multiplies by 100."""
        assert en.format_message("{n, number, percent}", {"n": 0.5}) == "50%"

    def test_currency_defaults_to_territory(self) -> None:
        """currency uses the currency of the locale's territory."""
        en_us = MessageFormatter("en-US")
        assert en_us.format_message("{n, number, currency}", {"n": 5}) == "$5.00"
        de = MessageFormatter("de-DE").format_message("{n, number, currency}", {"n": 5})
        assert de.replace("\xa0", " ") == "5,00 €"

    def test_currency_without_territory(self, en: MessageFormatter) -> None:
        """A locale without territory falls back to USD."""
        assert en.format_message("{n, number, currency}", {"n": 5}) == "$5.00"

    def test_literal_pattern(self, en: MessageFormatter) -> None:
        """A literal CLDR pattern controls digits."""
        assert en.format_message("{n, number, #,##0.0}", {"n": 1234}) == "1,234.0"
        assert en.format_message("{n, number, 000}", {"n": 7}) == "007"

    def test_literal_percent_and_permille_patterns_scale(self, en: MessageFormatter) -> None:
        """'%' in a literal pattern multiplies by 100, '‰' by 1000."""
        assert en.format_message("{n, number, #0.0%}", {"n": 0.5}) == "50.0%"
        assert en.format_message("{n, number, #0‰}", {"n": 0.5}) == "500‰"

    def test_non_numbers_render_plain(self, en: MessageFormatter) -> None:
        """Values that are not numbers are not formatted."""
        assert en.format_message("{n, number}", {"n": "abc"}) == "abc"
        assert en.format_message("{n, number}", {}) == ""


class TestSkeletons:
    """ICU number skeletons."""

    @pytest.mark.parametrize(
        ("pattern", "value", "expected"),
        [
            ("{n, number, ::percent .00}", 0.1234, "12.34%"),
            ("{n, number, ::sign-never}", -42, "42"),
            ("{n, number, ::+!}", 5, "+5"),
            ("{n, number, ::+?}", 0, "0"),
            ("{n, number, ::.00}", 2, "2.00"),
            ("{n, number, ::.0#}", 2.345, "2.34"),
            ("{n, number, ::@@}", 12345, "12,000"),
            ("{n, number, ::@@@}", 1.5, "1.50"),
            ("{n, number, ::,_}", 12345, "12345"),
            ("{n, number, ::,?}", 1000, "1000"),
            ("{n, number, ::,?}", 10000, "10,000"),
            ("{n, number, ::scale/100}", 0.5, "50"),
            ("{n, number, ::permille}", 0.5, "500‰"),
            ("{n, number, ::integer-width/*000}", 7, "007"),
            ("{n, number, ::integer-width/##0}", 12345, "345"),
            ("{n, number, ::scientific}", 12000, "1.2E4"),
            ("{n, number, ::engineering}", 12000, "12E3"),
            ("{n, number, ::compact-short}", 1000, "1K"),
            ("{n, number, ::compact-long}", 1000, "1 thousand"),
        ],
    )
    def test_english(
        self, en: MessageFormatter, pattern: str, value: object, expected: str
    ) -> None:
        """Skeleton options compose in English."""
        assert en.format_message(pattern, {"n": value}) == expected

    def test_currency_skeletons(self, en: MessageFormatter) -> None:
        """Currency codes and accounting negatives."""
        assert en.format_message("{n, number, ::currency/EUR}", {"n": 1234.5}) == "€1,234.50"
        assert en.format_message("{n, number, ::currency/USD ()}", {"n": -5}) == "($5.00)"
        assert en.format_message("{n, number, ::currency/USD}", {"n": -5}) == "-$5.00"

    def test_currency_precision_override(self, en: MessageFormatter) -> None:
        """Explicit fraction digits beat the currency's own digits."""
        assert en.format_message("{n, number, ::currency/JPY}", {"n": 1234.5}) == "¥1,234"
        assert en.format_message("{n, number, ::currency/USD .0}", {"n": 2.25}) == "$2.2"

    def test_units(self, en: MessageFormatter) -> None:
        """Measurement units use CLDR unit patterns."""
        full = en.format_message("{n, number, ::unit/kilometer unit-width-full-name}", {"n": 5})
        assert full == "5 kilometers"
        assert en.format_message("{n, number, ::unit/florp}", {"n": 5}) == "5 florp"

    def test_unknown_skeleton_renders_plain(self, en: MessageFormatter) -> None:
        """A skeleton of unknown tokens only is a literal fallback."""
        assert en.format_message("{n, number, ::bogus}", {"n": 1234.5}) == "1234.5"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(1, "1st"), (2, "2nd"), (3, "3rd"), (11, "11th"), (21, "21st"), (102, "102nd")],
    )
    def test_ordinal(self, en: MessageFormatter, value: int, expected: str) -> None:
        """::ordinal appends the suffix of the ordinal plural category."""
        assert en.format_message("{n, number, ::ordinal}", {"n": value}) == expected

    def test_ordinal_other_languages(self) -> None:
        """Suffixes follow the locale; unknown languages render the plain number."""
        fr = MessageFormatter("fr")
        assert fr.format_message("{n, number, ::ordinal}", {"n": 1}) == "1er"
        assert fr.format_message("{n, number, ::ordinal}", {"n": 2}) == "2e"
        assert MessageFormatter("ja").format_message("{n, number, ::ordinal}", {"n": 3}) == "3"

    def test_german_separators(self) -> None:
        """Separators follow the locale."""
        de = MessageFormatter("de")
        assert de.format_message("{n, number, ::.00}", {"n": 1234.5}) == "1.234,50"

    def test_native_digits(self) -> None:
        """Locales with a non-Latin default numbering system transliterate."""
        result = MessageFormatter("ar-EG").format_message("{n, number}", {"n": 1234})
        assert "١" in result
        assert not any(ch in "0123456789" for ch in result)


class TestNumberRange:
    """{a, numberRange, b}"""

    def test_thin_spaced_dash(self, en: MessageFormatter) -> None:
        """Most locales join with a thin-spaced en dash."""
        expected = "1\u2009\u2013\u20095"
        assert en.format_message("{a, numberRange, b}", {"a": 1, "b": 5}) == expected

    def test_shared_style(self, en: MessageFormatter) -> None:
        """Both ends use the same style."""
        result = en.format_message("{a, numberRange, b, ::currency/EUR}", {"a": 10, "b": 20})
        assert result == "€10.00\u2009\u2013\u2009€20.00"

    def test_cjk_has_no_spaces(self) -> None:
        """Japanese ranges are written tight."""
        ja = MessageFormatter("ja")
        assert ja.format_message("{a, numberRange, b}", {"a": 1, "b": 5}) == "1\u20135"


class TestFormatNumberFunction:
    """Direct calls to format_number."""

    def test_default_spec(self) -> None:
        """NumberFormatSpec() is the locale default format."""
        assert format_number(Decimal("1234.5"), NumberFormatSpec(), _context("en")) == "1,234.5"

    def test_plain_number_for_non_number(self) -> None:
        """Booleans are not numbers."""
        assert format_plain_number(True, _context("en")) == "true"

    @given(st.integers(min_value=-(10**12), max_value=10**12))
    def test_integers_round_trip_digits(self, value: int) -> None:
        """Grouped English integers keep their digits and sign."""
        text = format_plain_number(value, _context("en"))
        assert int(text.replace(",", "").replace("-", "")) == abs(value)
        assert text.startswith("-") == (value < 0)
