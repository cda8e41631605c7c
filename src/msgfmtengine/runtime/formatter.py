"""MessageFormatter - Main API for ICU MessageFormat formatting.

Python 3.13+. External dependency: Babel (CLDR locale data).
"""

import logging
from collections.abc import Mapping

from msgfmtengine.runtime.cache import PatternCache
from msgfmtengine.runtime.flatten import flatten_arguments, to_mapping
from msgfmtengine.runtime.html import escape_arguments
from msgfmtengine.runtime.locale_context import LocaleContext
from msgfmtengine.runtime.locale_data import BabelLocaleData, LocaleDataProvider
from msgfmtengine.runtime.locale_resolver import LocaleResolver
from msgfmtengine.runtime.options import FormatterOptions
from msgfmtengine.runtime.registry import FormatterRegistry, TagRegistry
from msgfmtengine.runtime.resolver import MessageResolver
from msgfmtengine.syntax.ast import Message
from msgfmtengine.syntax.parser import MessageParser

__all__ = ["MessageFormatter"]

logger = logging.getLogger(__name__)

# Shared by every formatter that is not given a backend; BabelLocaleData is
# stateless.
_DEFAULT_LOCALE_DATA = BabelLocaleData()

# Logging truncation limit for pattern text in debug messages.
_LOG_TRUNCATE_DEBUG: int = 50


class MessageFormatter:
    """Formats ICU MessageFormat patterns for one locale.

    Construction resolves the locale against the backend and fails fast with
    InvalidLocaleError when no entry of the fallback chain has data. After
    that every setting is fixed: formatters are safe to share across threads.

    Parser Security:
        Configurable limits (FormatterOptions) bound untrusted patterns:
        - max_source_size: Maximum pattern length (default: 10 MiB)
        - max_nesting_depth: Maximum placeholder/tag nesting (default: 100)

    Examples:
        >>> formatter = MessageFormatter("en")
        >>> formatter.format_message("You have {n, plural, one {# item} other {# items}}", {"n": 3})
        'You have 3 items'
        >>> formatter.format_complex_message("Hi {user__name}", {"user": {"name": "Ann"}})
        'Hi Ann'
        >>> formatter.format_html_message("<b>{name}</b>", {"name": "<script>"})
        '<b>&lt;script&gt;</b>'
    """

    __slots__ = ("_cache", "_locale", "_options", "_parser", "_resolver")

    def __init__(
        self,
        locale: str,
        *,
        options: FormatterOptions | None = None,
        locale_data: LocaleDataProvider | None = None,
        cache: PatternCache | None = None,
    ) -> None:
        """Initialize formatter for a locale.

        Args:
            locale: Locale identifier (BCP-47 "en-US" or POSIX "en_US")
            options: Formatter configuration (keyword-only)
            locale_data: Locale-data backend (default: Babel) (keyword-only)
            cache: Pattern cache to share with other formatters; a private one
                is created when omitted and caching is enabled (keyword-only)

        Raises:
            InvalidLocaleError: If neither the locale nor any fallback has data
        """
        self._options = options or FormatterOptions()
        data = locale_data or _DEFAULT_LOCALE_DATA

        locale_resolver = LocaleResolver(
            locale, data, fallback_locale=self._options.fallback_locale
        )
        resolved = locale_resolver.resolve_any()
        self._locale = LocaleContext(resolver=locale_resolver, data=data)

        self._parser = MessageParser(
            max_source_size=self._options.max_source_size,
            max_nesting_depth=self._options.max_nesting_depth,
            ignore_tag=self._options.ignore_tag,
        )
        self._resolver = MessageResolver(
            self._locale,
            formatters=FormatterRegistry(self._options.custom_formatters),
            tags=TagRegistry(self._options.tag_handlers),
            require_all_variables=self._options.require_all_variables,
            max_depth=self._options.max_nesting_depth,
        )

        if not self._options.enable_cache:
            self._cache: PatternCache | None = None
        else:
            self._cache = (
                cache if cache is not None else PatternCache(maxsize=self._options.cache_size)
            )

        logger.debug("MessageFormatter for '%s' resolved to '%s'", locale, resolved)

    @property
    def locale(self) -> str:
        """Locale identifier as requested."""
        return self._locale.requested

    @property
    def locale_chain(self) -> tuple[str, ...]:
        """Fallback chain consulted for locale data."""
        return self._locale.resolver.chain

    @property
    def options(self) -> FormatterOptions:
        """Formatter configuration."""
        return self._options

    @property
    def cache(self) -> PatternCache | None:
        """Pattern cache, or None when caching is disabled."""
        return self._cache

    def parse(self, pattern: str) -> Message:
        """Parse a pattern, using the pattern cache when enabled.

        Raises:
            PatternSyntaxError: If the pattern is malformed
            ValueError: If the pattern exceeds max_source_size
        """
        if self._cache is None:
            return self._parser.parse(pattern)
        return self._cache.get_or_compute(
            pattern, self._parser.parse, ignore_tag=self._parser.ignore_tag
        )

    def format_message(self, pattern: str, arguments: Mapping[str, object] | None = None) -> str:
        """Format a pattern with a flat argument mapping.

        Args:
            pattern: MessageFormat pattern
            arguments: Argument values by name

        Returns:
            Formatted string

        Raises:
            PatternSyntaxError: Malformed pattern
            PatternResolutionError: No matching case, or a missing argument
                under require_all_variables
        """
        message = self.parse(pattern)
        logger.debug("Formatting pattern %r", pattern[:_LOG_TRUNCATE_DEBUG])
        return self._resolver.resolve(message, arguments)

    def format_complex_message(self, pattern: str, arguments: object = None) -> str:
        """Format a pattern with nested arguments.

        Nested mappings and objects are flattened with the configured
        separator: ``{"user": {"name": "Ann"}}`` is addressed as
        ``{user__name}``.

        Args:
            pattern: MessageFormat pattern
            arguments: Mapping, dataclass instance or plain object

        Returns:
            Formatted string
        """
        flat = flatten_arguments(arguments, self._options.nested_separator)
        return self.format_message(pattern, flat)

    def format_html_message(self, pattern: str, arguments: object = None) -> str:
        """Format a pattern containing HTML markup.

        Text argument values are HTML-escaped (without double-escaping
        existing entities), and tags with no registered handler are kept as
        markup instead of being stripped.

        Args:
            pattern: Pattern with HTML markup
            arguments: Mapping, dataclass instance or plain object

        Returns:
            Formatted HTML string
        """
        mapping = to_mapping(arguments) or {}
        message = self.parse(pattern)
        return self._resolver.resolve(message, escape_arguments(mapping), html=True)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"MessageFormatter(locale={self.locale!r}, chain={self.locale_chain!r})"
