"""Tests for formatter and tag registries and FormatterOptions."""

from __future__ import annotations

import dataclasses

import pytest

from msgfmtengine import FormatterOptions
from msgfmtengine.runtime import FormatterRegistry, TagRegistry


def _upper(value: object, style: str | None, locale: str) -> str:
    return str(value).upper()


class TestRegistries:
    """Case-insensitive, read-only name maps."""

    def test_lookup_is_case_insensitive(self) -> None:
        """Names are folded to lower case."""
        registry = FormatterRegistry({"Upper": _upper})
        assert registry.get("UPPER") is _upper
        assert "uPPer" in registry
        assert list(registry) == ["upper"]
        assert len(registry) == 1

    def test_missing_name(self) -> None:
        """Unknown names give None."""
        registry = TagRegistry()
        assert registry.get("b") is None
        assert "b" not in registry
        assert 3 not in registry

    def test_later_duplicate_wins(self) -> None:
        """Names differing only in case collapse to the last entry."""
        registry = TagRegistry({"b": lambda c: "first", "B": lambda c: "second"})
        handler = registry.get("b")
        assert handler is not None
        assert handler("") == "second"
        assert len(registry) == 1

    def test_read_only(self) -> None:
        """The mapping view cannot be modified."""
        registry = TagRegistry({"b": lambda c: c})
        with pytest.raises(TypeError):
            registry.as_mapping()["i"] = lambda c: c  # type: ignore[index]

    @pytest.mark.parametrize(
        "entries",
        [{"": _upper}, {1: _upper}, {"upper": "not callable"}],
    )
    def test_invalid_entries(self, entries: dict[object, object]) -> None:
        """Names must be non-empty strings and entries callable."""
        with pytest.raises(TypeError):
            FormatterRegistry(entries)  # type: ignore[arg-type]

    def test_repr(self) -> None:
        """repr shows the entry count."""
        assert repr(FormatterRegistry({"a": _upper})) == "FormatterRegistry(entries=1)"


class TestFormatterOptions:
    """Validation and immutability."""

    def test_defaults(self) -> None:
        """FormatterOptions() is usable as is."""
        options = FormatterOptions()
        assert options.fallback_locale == "en"
        assert options.nested_separator == "__"
        assert options.enable_cache
        assert not options.require_all_variables
        assert dict(options.custom_formatters) == {}

    @pytest.mark.parametrize(
        "changes",
        [
            {"fallback_locale": ""},
            {"fallback_locale": "  "},
            {"nested_separator": ""},
            {"max_nesting_depth": 0},
            {"max_source_size": -1},
            {"cache_size": 0},
        ],
    )
    def test_invalid_values(self, changes: dict[str, object]) -> None:
        """Empty strings and non-positive limits are rejected."""
        with pytest.raises(ValueError, match="must"):
            FormatterOptions(**changes)  # type: ignore[arg-type]

    def test_frozen(self) -> None:
        """Fields cannot be reassigned."""
        options = FormatterOptions()
        with pytest.raises(dataclasses.FrozenInstanceError):
            options.fallback_locale = "de"  # type: ignore[misc]

    def test_handler_maps_are_snapshots(self) -> None:
        """Mutating the caller's dict after construction has no effect."""
        handlers = {"b": lambda content: content}
        options = FormatterOptions(tag_handlers=handlers)
        handlers["i"] = lambda content: content
        assert "i" not in options.tag_handlers
        with pytest.raises(TypeError):
            options.tag_handlers["i"] = lambda content: content  # type: ignore[index]
