"""Locale utilities for BCP-47 to POSIX conversion.

Centralizes locale identifier normalization used throughout the codebase.
Pattern-facing code speaks BCP-47 (``en-US``); Babel speaks POSIX (``en_US``).
Both forms are accepted at every entry point and normalized at the boundary.

Python 3.13+.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING

from msgfmtengine.constants import MAX_LOCALE_CACHE_SIZE

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "locale_language",
    "normalize_locale",
    "to_bcp47",
]


def to_bcp47(locale_code: str) -> str:
    """Normalize separators to BCP-47 form.

    Args:
        locale_code: Locale code in either form (e.g., "en_US", "pt-BR")

    Returns:
        Hyphen-separated locale code with surrounding whitespace removed

    Example:
        >>> to_bcp47("en_US")
        'en-US'
        >>> to_bcp47("zh_Hant_TW")
        'zh-Hant-TW'
    """
    return locale_code.strip().replace("_", "-")


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    Args:
        locale_code: BCP-47 locale code (e.g., "en-US", "pt-BR")

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")
        'en'
    """
    return locale_code.strip().replace("-", "_")


def locale_language(locale_code: str) -> str:
    """Return the lower-cased primary language subtag.

    Example:
        >>> locale_language("ja-JP")
        'ja'
    """
    return to_bcp47(locale_code).split("-", 1)[0].lower()


@functools.lru_cache(maxsize=MAX_LOCALE_CACHE_SIZE)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Parses the locale code once and caches the result. This avoids repeated
    parsing overhead in hot paths like plural rule selection.

    Thread-safe via lru_cache internal locking.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))
