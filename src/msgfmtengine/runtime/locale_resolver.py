"""Locale fallback resolution.

A requested locale expands into an ordered, de-duplicated fallback chain:

    "zh_Hant_TW" -> ("zh-Hant-TW", "zh-Hant", "zh", "en")

Each data kind (plural rules, number patterns, currency data, ...) walks the
chain independently and settles on the first locale with data of that kind,
so one formatter may take plural rules from "pt-BR" and list patterns from
"pt".

Python 3.13+.
"""

import logging
from collections.abc import Iterable
from threading import Lock

from msgfmtengine.constants import DEFAULT_FALLBACK_LOCALE
from msgfmtengine.diagnostics import ErrorTemplate, InvalidLocaleError
from msgfmtengine.enums import DataKind
from msgfmtengine.locale_utils import to_bcp47
from msgfmtengine.runtime.locale_data import LocaleDataProvider

__all__ = ["LocaleResolver", "build_locale_chain", "resolve_locale"]

logger = logging.getLogger(__name__)


def build_locale_chain(
    requested: str, fallback_locale: str = DEFAULT_FALLBACK_LOCALE
) -> tuple[str, ...]:
    """Build the fallback chain for a requested locale.

    Separators are normalized to '-', then trailing subtags are stripped one
    at a time; the fallback locale comes last unless already present.
    Duplicates are dropped case-insensitively.

    Example:
        >>> build_locale_chain("en_US")
        ('en-US', 'en')
        >>> build_locale_chain("de-AT", "fr")
        ('de-AT', 'de', 'fr')
        >>> build_locale_chain("")
        ('en',)
    """
    chain: list[str] = []
    seen: set[str] = set()

    def add(candidate: str) -> None:
        if candidate and candidate.lower() not in seen:
            seen.add(candidate.lower())
            chain.append(candidate)

    subtags = [subtag for subtag in to_bcp47(requested).split("-") if subtag]
    while subtags:
        add("-".join(subtags))
        subtags.pop()
    add(to_bcp47(fallback_locale))
    return tuple(chain)


def _first_with_data(
    chain: Iterable[str], locale_data: LocaleDataProvider, kind: DataKind
) -> str | None:
    for candidate in chain:
        if locale_data.has_data(candidate, kind):
            return candidate
    return None


def resolve_locale(
    requested: str,
    locale_data: LocaleDataProvider,
    kind: DataKind,
    *,
    fallback_locale: str = DEFAULT_FALLBACK_LOCALE,
) -> str:
    """Resolve one data kind for a locale, raising if the chain has no data.

    Args:
        requested: Requested locale identifier (BCP-47 or POSIX)
        locale_data: Backend queried for data availability
        kind: Data kind to resolve
        fallback_locale: Last chain entry

    Returns:
        First chain entry with data of this kind

    Raises:
        InvalidLocaleError: If no chain entry has data of this kind
    """
    resolved = _first_with_data(build_locale_chain(requested, fallback_locale), locale_data, kind)
    if resolved is None:
        available = locale_data.available_locales()
        raise InvalidLocaleError(
            ErrorTemplate.unsupported_locale(requested, available),
            locale=requested,
            available_locales=available,
        )
    return resolved


class LocaleResolver:
    """Per-formatter locale resolution, memoized per data kind.

    The chain is built once. Each kind is resolved on first use and the
    answer kept for the resolver's lifetime; locale data is immutable after
    configuration, so entries never go stale.

    Thread Safety:
        Concurrent first lookups of one kind may both walk the chain; the
        first stored answer wins and both walks yield the same value anyway.

    Example:
        >>> from msgfmtengine.runtime.locale_data import BabelLocaleData
        >>> resolver = LocaleResolver("xx-YY", BabelLocaleData())
        >>> resolver.chain
        ('xx-YY', 'xx', 'en')
        >>> resolver.resolve(DataKind.PLURAL)
        'en'
    """

    __slots__ = ("_chain", "_lock", "_locale_data", "_memo", "_requested")

    def __init__(
        self,
        requested: str,
        locale_data: LocaleDataProvider,
        *,
        fallback_locale: str = DEFAULT_FALLBACK_LOCALE,
    ) -> None:
        """Initialize resolver.

        Args:
            requested: Requested locale identifier
            locale_data: Backend queried for data availability
            fallback_locale: Last chain entry (default: "en")
        """
        self._requested = requested
        self._locale_data = locale_data
        self._chain = build_locale_chain(requested, fallback_locale)
        self._memo: dict[DataKind, str | None] = {}
        self._lock = Lock()

    @property
    def requested(self) -> str:
        """Locale identifier as requested."""
        return self._requested

    @property
    def chain(self) -> tuple[str, ...]:
        """Ordered fallback chain."""
        return self._chain

    def resolve(self, kind: DataKind) -> str | None:
        """First chain entry with data of this kind, or None."""
        with self._lock:
            if kind in self._memo:
                return self._memo[kind]

        resolved = _first_with_data(self._chain, self._locale_data, kind)
        if resolved is not None and resolved != self._chain[0]:
            logger.warning(
                "Locale '%s' has no %s data; using '%s'", self._requested, kind, resolved
            )

        with self._lock:
            return self._memo.setdefault(kind, resolved)

    def resolve_any(self) -> str:
        """First chain entry with data of any kind.

        Used at formatter construction to reject locales the backend cannot
        serve at all.

        Raises:
            InvalidLocaleError: If no chain entry has any data
        """
        for kind in DataKind:
            resolved = self.resolve(kind)
            if resolved is not None:
                return resolved
        available = self._locale_data.available_locales()
        raise InvalidLocaleError(
            ErrorTemplate.unsupported_locale(self._requested, available),
            locale=self._requested,
            available_locales=available,
        )
