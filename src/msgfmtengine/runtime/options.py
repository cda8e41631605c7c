"""Formatter configuration.

A single frozen dataclass holds every setting of a MessageFormatter. It is
built once, validated on construction and shared by reference; nothing in it
changes during a format call.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from msgfmtengine.constants import (
    DEFAULT_CACHE_SIZE,
    DEFAULT_FALLBACK_LOCALE,
    DEFAULT_NESTED_SEPARATOR,
    MAX_DEPTH,
    MAX_SOURCE_SIZE,
)
from msgfmtengine.runtime.value_types import CustomFormatter, TagHandler

__all__ = ["FormatterOptions"]


@dataclass(frozen=True, slots=True)
class FormatterOptions:
    """Immutable configuration for MessageFormatter.

    All fields have sensible defaults; ``FormatterOptions()`` is a usable
    configuration.

    Attributes:
        fallback_locale: Last entry of every locale fallback chain (default: "en")
        require_all_variables: Raise MissingVariableError for an argument
            absent from the mapping or None instead of rendering ""
            (default: False)
        custom_formatters: Formatter name -> ``(value, style, locale) -> str``.
            Names are case-insensitive.
        tag_handlers: Tag name -> ``(content) -> str``. Names are
            case-insensitive.
        nested_separator: Joins nested keys in format_complex_message
            (default: "__")
        max_nesting_depth: Parser and evaluator nesting limit (default: 100)
        max_source_size: Maximum pattern length in characters (default: 10 MiB)
        cache_size: Pattern cache capacity (default: 1000)
        enable_cache: Memoize parsed patterns (default: True)
        ignore_tag: Treat '<' as plain text instead of a tag start
            (default: False)

    Example:
        >>> options = FormatterOptions(
        ...     require_all_variables=True,
        ...     tag_handlers={"b": lambda content: f"<strong>{content}</strong>"},
        ... )
        >>> options.fallback_locale
        'en'
        >>> options.tag_handlers["b"]("x")
        '<strong>x</strong>'
    """

    fallback_locale: str = DEFAULT_FALLBACK_LOCALE
    require_all_variables: bool = False
    custom_formatters: Mapping[str, CustomFormatter] = field(
        default_factory=lambda: MappingProxyType({})
    )
    tag_handlers: Mapping[str, TagHandler] = field(default_factory=lambda: MappingProxyType({}))
    nested_separator: str = DEFAULT_NESTED_SEPARATOR
    max_nesting_depth: int = MAX_DEPTH
    max_source_size: int = MAX_SOURCE_SIZE
    cache_size: int = DEFAULT_CACHE_SIZE
    enable_cache: bool = True
    ignore_tag: bool = False

    def __post_init__(self) -> None:
        """Validate configuration values and freeze the handler maps.

        Raises:
            ValueError: If a limit is not positive, or fallback_locale or
                nested_separator is empty
        """
        if not self.fallback_locale.strip():
            msg = "fallback_locale must not be empty"
            raise ValueError(msg)
        if not self.nested_separator:
            msg = "nested_separator must not be empty"
            raise ValueError(msg)
        if self.max_nesting_depth <= 0:
            msg = "max_nesting_depth must be positive"
            raise ValueError(msg)
        if self.max_source_size <= 0:
            msg = "max_source_size must be positive"
            raise ValueError(msg)
        if self.cache_size <= 0:
            msg = "cache_size must be positive"
            raise ValueError(msg)
        # Snapshot the caller's dicts.
        object.__setattr__(
            self, "custom_formatters", MappingProxyType(dict(self.custom_formatters))
        )
        object.__setattr__(self, "tag_handlers", MappingProxyType(dict(self.tag_handlers)))
