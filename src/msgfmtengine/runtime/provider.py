"""Per-locale formatter provider.

Hosts that serve many locales ask the provider for a MessageFormatter
instead of constructing one per request. Formatters are created lazily,
kept for the provider's lifetime, and share one PatternCache, so a pattern
parsed for one locale is reused by all of them.

Locale identifiers are keyed case- and separator-insensitively: "en_US",
"en-us" and "EN-US" share one formatter.

Python 3.13+.
"""

import logging
from collections.abc import Iterable
from threading import RLock

from msgfmtengine.locale_utils import to_bcp47
from msgfmtengine.runtime.cache import PatternCache
from msgfmtengine.runtime.formatter import MessageFormatter
from msgfmtengine.runtime.locale_data import LocaleDataProvider
from msgfmtengine.runtime.options import FormatterOptions

__all__ = ["MessageFormatterProvider"]

logger = logging.getLogger(__name__)


class MessageFormatterProvider:
    """Creates and caches one MessageFormatter per locale.

    Thread Safety:
        Double-checked locking: lookups of existing formatters take the lock
        briefly; creation happens under the lock, so each locale gets exactly
        one formatter.

    Example:
        >>> provider = MessageFormatterProvider()
        >>> provider.get_formatter("en_US") is provider.get_formatter("en-us")
        True
        >>> provider.available_locales
        ('en-US',)
    """

    __slots__ = ("_cache", "_formatters", "_locale_data", "_lock", "_options")

    def __init__(
        self,
        options: FormatterOptions | None = None,
        locale_data: LocaleDataProvider | None = None,
    ) -> None:
        """Initialize provider.

        Args:
            options: Configuration applied to every formatter
            locale_data: Locale-data backend (default: Babel)
        """
        self._options = options or FormatterOptions()
        self._locale_data = locale_data
        self._cache = (
            PatternCache(maxsize=self._options.cache_size) if self._options.enable_cache else None
        )
        self._formatters: dict[str, MessageFormatter] = {}
        self._lock = RLock()

    @staticmethod
    def _key(locale: str) -> str:
        return to_bcp47(locale).lower()

    def get_formatter(self, locale: str) -> MessageFormatter:
        """Formatter for locale, created on first request.

        Raises:
            InvalidLocaleError: If neither the locale nor any fallback has data
        """
        key = self._key(locale)
        with self._lock:
            formatter = self._formatters.get(key)
        if formatter is not None:
            return formatter

        with self._lock:
            # Another thread may have created it since the first check.
            formatter = self._formatters.get(key)
            if formatter is None:
                formatter = MessageFormatter(
                    to_bcp47(locale),
                    options=self._options,
                    locale_data=self._locale_data,
                    cache=self._cache,
                )
                self._formatters[key] = formatter
                logger.debug("Created formatter for locale '%s'", locale)
            return formatter

    def initialize(self, locales: Iterable[str]) -> None:
        """Pre-create formatters so first requests skip locale resolution.

        Raises:
            InvalidLocaleError: For the first locale without data
        """
        for locale in locales:
            self.get_formatter(locale)

    @property
    def available_locales(self) -> tuple[str, ...]:
        """Locales with a created formatter, as first requested."""
        with self._lock:
            return tuple(formatter.locale for formatter in self._formatters.values())

    @property
    def cache(self) -> PatternCache | None:
        """Pattern cache shared by all formatters."""
        return self._cache

    def __contains__(self, locale: object) -> bool:
        """Check if a formatter exists for locale ('in' operator)."""
        if not isinstance(locale, str):
            return False
        with self._lock:
            return self._key(locale) in self._formatters

    def __len__(self) -> int:
        """Number of created formatters."""
        with self._lock:
            return len(self._formatters)
