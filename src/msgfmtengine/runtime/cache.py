"""Thread-safe LRU cache of parsed patterns.

Memoizes pattern text -> Message so repeated formatting of the same pattern
skips parsing.

Architecture:
    - Thread-safe using threading.RLock (reentrant lock)
    - LRU eviction via OrderedDict
    - Get-or-compute: parsing runs outside the lock, so concurrent misses
      for one key may both parse; the first stored result is kept and every
      caller receives it
    - Entries are never invalidated: patterns are immutable and a Message
      is a frozen tree

Cache Key Structure:
    (pattern, ignore_tag)
    - pattern: str (exact pattern text)
    - ignore_tag: bool (the same text parses differently with tags off)

Thread Safety:
    All operations protected by RLock. Safe for concurrent reads and writes.

Python 3.13+.
"""

import logging
from collections import OrderedDict
from collections.abc import Callable
from threading import RLock

from msgfmtengine.constants import DEFAULT_CACHE_SIZE
from msgfmtengine.syntax.ast import Message

__all__ = ["PatternCache"]

logger = logging.getLogger(__name__)

type _CacheKey = tuple[str, bool]


class PatternCache:
    """Thread-safe LRU cache for parsed patterns.

    Attributes:
        maxsize: Maximum number of cache entries
        hits: Number of cache hits (for metrics)
        misses: Number of cache misses (for metrics)

    Example:
        >>> from msgfmtengine.syntax import parse
        >>> cache = PatternCache(maxsize=10)
        >>> first = cache.get_or_compute("Hi {name}", parse)
        >>> cache.get_or_compute("Hi {name}", parse) is first
        True
        >>> cache.get_stats()["hits"]
        1
    """

    __slots__ = ("_cache", "_hits", "_lock", "_maxsize", "_misses")

    def __init__(self, maxsize: int = DEFAULT_CACHE_SIZE) -> None:
        """Initialize pattern cache.

        Args:
            maxsize: Maximum number of entries (default: DEFAULT_CACHE_SIZE)
        """
        if maxsize <= 0:
            msg = "maxsize must be positive"
            raise ValueError(msg)

        self._cache: OrderedDict[_CacheKey, Message] = OrderedDict()
        self._maxsize = maxsize
        self._lock = RLock()
        self._hits = 0
        self._misses = 0

    def get(self, pattern: str, *, ignore_tag: bool = False) -> Message | None:
        """Get cached Message if present.

        Thread-safe. Returns None on cache miss.
        """
        key = (pattern, ignore_tag)
        with self._lock:
            message = self._cache.get(key)
            if message is None:
                self._misses += 1
                return None
            # Move to end (mark as recently used)
            self._cache.move_to_end(key)
            self._hits += 1
            return message

    def get_or_compute(
        self,
        pattern: str,
        compute: Callable[[str], Message],
        *,
        ignore_tag: bool = False,
    ) -> Message:
        """Return the cached Message for pattern, parsing it on a miss.

        Args:
            pattern: Pattern text
            compute: Parser callable, invoked outside the lock on a miss
            ignore_tag: Part of the key; must match how compute parses

        Returns:
            The retained Message for this key

        Raises:
            Whatever compute raises; failed parses are not cached
        """
        cached = self.get(pattern, ignore_tag=ignore_tag)
        if cached is not None:
            return cached

        message = compute(pattern)

        key = (pattern, ignore_tag)
        with self._lock:
            existing = self._cache.get(key)
            if existing is not None:
                # Lost a concurrent compile race; keep the first result.
                logger.debug("Pattern cache race for %d-char pattern", len(pattern))
                self._cache.move_to_end(key)
                return existing
            if len(self._cache) >= self._maxsize:
                self._cache.popitem(last=False)  # Remove first (oldest)
            self._cache[key] = message
            return message

    def clear(self) -> None:
        """Clear all cached entries and reset metrics.

        Thread-safe.
        """
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0

    def get_stats(self) -> dict[str, int | float]:
        """Get cache statistics.

        Thread-safe. Returns current metrics.

        Returns:
            Dict with keys:
            - size (int): Current number of cached entries
            - maxsize (int): Maximum cache capacity
            - hits (int): Number of cache hits
            - misses (int): Number of cache misses
            - hit_rate (float): Hit rate as percentage (0.0-100.0)
        """
        with self._lock:
            total = self._hits + self._misses
            hit_rate = (self._hits / total * 100) if total > 0 else 0.0

            return {
                "size": len(self._cache),
                "maxsize": self._maxsize,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(hit_rate, 2),
            }

    def __len__(self) -> int:
        """Get current cache size.

        Thread-safe.
        """
        with self._lock:
            return len(self._cache)

    def __contains__(self, key: object) -> bool:
        """Check whether a pattern is cached.

        A bare pattern string checks the entry parsed with tags interpreted;
        a (pattern, ignore_tag) tuple checks that exact entry.
        """
        match key:
            case str():
                cache_key = (key, False)
            case (str() as pattern, bool() as ignore_tag):
                cache_key = (pattern, ignore_tag)
            case _:
                return False
        with self._lock:
            return cache_key in self._cache

    @property
    def maxsize(self) -> int:
        """Maximum cache size."""
        return self._maxsize

    @property
    def hits(self) -> int:
        """Number of cache hits.

        Thread-safe.
        """
        with self._lock:
            return self._hits

    @property
    def misses(self) -> int:
        """Number of cache misses.

        Thread-safe.
        """
        with self._lock:
            return self._misses
