"""Tests for MessageFormatterProvider and concurrent formatting."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from msgfmtengine import (
    FormatterOptions,
    InvalidLocaleError,
    MessageFormatter,
    MessageFormatterProvider,
)
from tests.helpers import ALL_KINDS, FakeLocaleData

_ITEMS = "{name} has {n, plural, one {# item} other {# items}}"


class TestMessageFormatterProvider:
    """Per-locale formatter registry."""

    def test_formatters_created_once(self) -> None:
        """Identifiers differing in case or separator share a formatter."""
        provider = MessageFormatterProvider()
        formatter = provider.get_formatter("en_US")
        assert provider.get_formatter("en-us") is formatter
        assert provider.get_formatter("EN-US") is formatter
        assert formatter.locale == "en-US"
        assert len(provider) == 1

    def test_membership_and_listing(self) -> None:
        """Created locales are listed as first requested."""
        provider = MessageFormatterProvider()
        provider.initialize(["de", "fr_CA"])
        assert "DE" in provider
        assert "fr-ca" in provider
        assert "it" not in provider
        assert None not in provider
        assert provider.available_locales == ("de", "fr-CA")

    def test_shared_cache(self) -> None:
        """All formatters of a provider share one pattern cache."""
        provider = MessageFormatterProvider()
        en = provider.get_formatter("en")
        de = provider.get_formatter("de")
        assert en.cache is provider.cache
        assert de.cache is provider.cache
        en.format_message("{n}", {"n": 1})
        de.format_message("{n}", {"n": 1})
        assert provider.cache is not None
        assert provider.cache.get_stats()["hits"] == 1

    def test_options_applied(self) -> None:
        """Provider options reach every formatter."""
        options = FormatterOptions(enable_cache=False, fallback_locale="de")
        provider = MessageFormatterProvider(options)
        assert provider.cache is None
        formatter = provider.get_formatter("xx")
        assert formatter.cache is None
        assert formatter.options is options
        assert formatter.locale_chain == ("xx", "de")

    def test_locale_without_data(self) -> None:
        """Locale failures surface from get_formatter and are not cached."""
        provider = MessageFormatterProvider(locale_data=FakeLocaleData(kinds={"de": ALL_KINDS}))
        with pytest.raises(InvalidLocaleError):
            provider.get_formatter("xx")
        assert "xx" not in provider
        assert len(provider) == 0

    def test_concurrent_get_formatter(self) -> None:
        """Racing first requests end with a single formatter."""
        provider = MessageFormatterProvider()
        with ThreadPoolExecutor(max_workers=8) as pool:
            formatters = list(pool.map(provider.get_formatter, ["pl"] * 64))
        assert len({id(formatter) for formatter in formatters}) == 1
        assert len(provider) == 1


class TestConcurrentFormatting:
    """One formatter shared across threads."""

    def test_parallel_format_calls(self) -> None:
        """Results match sequential evaluation."""
        formatter = MessageFormatter("en")

        def render(index: int) -> str:
            return formatter.format_message(_ITEMS, {"name": f"user{index}", "n": index})

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(render, range(500)))

        for index, result in enumerate(results):
            noun = "item" if index == 1 else "items"
            assert result == f"user{index} has {index} {noun}"

    def test_parallel_mixed_patterns(self) -> None:
        """Distinct patterns parsed concurrently do not interfere."""
        formatter = MessageFormatter("en", options=FormatterOptions(cache_size=4))
        patterns = [f"<b>{{v{i}}}</b>-{i}" for i in range(16)]

        def render(index: int) -> str:
            slot = index % 16
            return formatter.format_message(patterns[slot], {f"v{slot}": slot})

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(render, range(400)))

        assert results == [f"{i % 16}-{i % 16}" for i in range(400)]
        assert formatter.cache is not None
        assert len(formatter.cache) <= 4
