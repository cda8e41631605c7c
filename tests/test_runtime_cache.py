"""Tests for the bounded pattern cache."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from msgfmtengine import PatternSyntaxError, parse_pattern
from msgfmtengine.runtime import PatternCache
from msgfmtengine.syntax import Message


class TestPatternCacheBasics:
    """Lookup, insertion and statistics."""

    def test_miss_then_hit(self) -> None:
        """The second lookup returns the stored Message."""
        cache = PatternCache(maxsize=4)
        first = cache.get_or_compute("Hi {name}", parse_pattern)
        second = cache.get_or_compute("Hi {name}", parse_pattern)
        assert first is second
        assert (cache.hits, cache.misses) == (1, 1)

    def test_get_counts(self) -> None:
        """get() records misses and hits."""
        cache = PatternCache()
        assert cache.get("x") is None
        cache.get_or_compute("x", parse_pattern)
        assert cache.get("x") is not None
        assert cache.get_stats() == {
            "size": 1,
            "maxsize": cache.maxsize,
            "hits": 1,
            "misses": 2,
            "hit_rate": 33.33,
        }

    def test_empty_stats(self) -> None:
        """An unused cache reports a zero hit rate."""
        stats = PatternCache(maxsize=3).get_stats()
        assert stats["hit_rate"] == 0.0
        assert stats["size"] == 0

    def test_ignore_tag_is_part_of_key(self) -> None:
        """The same text parsed with and without tags is cached twice."""
        cache = PatternCache()
        with_tags = cache.get_or_compute("<b>x</b>", parse_pattern)
        without_tags = cache.get_or_compute(
            "<b>x</b>", lambda p: parse_pattern(p, ignore_tag=True), ignore_tag=True
        )
        assert with_tags != without_tags
        assert len(cache) == 2
        assert "<b>x</b>" in cache

    def test_contains_rejects_non_strings(self) -> None:
        """Only pattern strings and (pattern, ignore_tag) pairs can be members."""
        cache = PatternCache()
        cache.get_or_compute("x", parse_pattern)
        assert 42 not in cache
        assert ("x", "no") not in cache

    def test_contains_with_ignore_tag_key(self) -> None:
        """A (pattern, ignore_tag) pair checks that exact entry."""
        cache = PatternCache()
        cache.get_or_compute(
            "<b>x</b>", lambda p: parse_pattern(p, ignore_tag=True), ignore_tag=True
        )
        assert ("<b>x</b>", True) in cache
        assert ("<b>x</b>", False) not in cache
        assert "<b>x</b>" not in cache

    def test_clear(self) -> None:
        """clear() drops entries and statistics."""
        cache = PatternCache()
        cache.get_or_compute("x", parse_pattern)
        cache.get("x")
        cache.clear()
        assert len(cache) == 0
        assert (cache.hits, cache.misses) == (0, 0)

    @pytest.mark.parametrize("maxsize", [0, -1])
    def test_maxsize_must_be_positive(self, maxsize: int) -> None:
        """Non-positive capacities are rejected."""
        with pytest.raises(ValueError, match="maxsize"):
            PatternCache(maxsize=maxsize)


class TestPatternCacheEviction:
    """LRU bound."""

    def test_least_recently_used_evicted(self) -> None:
        """A hit refreshes an entry; the oldest untouched one goes."""
        cache = PatternCache(maxsize=2)
        cache.get_or_compute("a", parse_pattern)
        cache.get_or_compute("b", parse_pattern)
        cache.get("a")
        cache.get_or_compute("c", parse_pattern)
        assert "a" in cache
        assert "b" not in cache
        assert "c" in cache
        assert len(cache) == 2

    def test_evicted_pattern_reparses_equal(self) -> None:
        """Re-parsing an evicted pattern yields an equal tree."""
        cache = PatternCache(maxsize=1)
        first = cache.get_or_compute("{n, plural, other {#}}", parse_pattern)
        cache.get_or_compute("other", parse_pattern)
        again = cache.get_or_compute("{n, plural, other {#}}", parse_pattern)
        assert again is not first
        assert again == first


class TestPatternCacheFailures:
    """Failed parses and compile races."""

    def test_failed_parse_not_cached(self) -> None:
        """Syntax errors propagate and nothing is stored."""
        cache = PatternCache()
        with pytest.raises(PatternSyntaxError):
            cache.get_or_compute("{", parse_pattern)
        assert "{" not in cache
        assert len(cache) == 0

    def test_first_stored_result_wins(self) -> None:
        """A result stored while computing is returned instead of the new one."""
        cache = PatternCache()
        first = parse_pattern("x")

        def racing(pattern: str) -> Message:
            cache.get_or_compute(pattern, lambda _: first)
            return parse_pattern(pattern)

        assert cache.get_or_compute("x", racing) is first
        assert len(cache) == 1

    def test_concurrent_access(self) -> None:
        """Parallel lookups of a few patterns converge on one Message each."""
        cache = PatternCache(maxsize=8)
        patterns = [f"{{n{i}, plural, other {{# {i}}}}}" for i in range(4)]

        def lookup(index: int) -> Message:
            return cache.get_or_compute(patterns[index % 4], parse_pattern)

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lookup, range(200)))

        assert len(cache) == 4
        for index, message in enumerate(results):
            assert message is cache.get(patterns[index % 4])
        assert cache.hits + cache.misses >= 200
