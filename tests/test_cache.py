"""Tests for cache module."""

import pytest
from hypothesis import given, strategies as st

from pagebuilder.core.cache import LRUCache, Stats


def test_lru_basic():
    """Test basic cache operations."""
    cache = LRUCache[str](max_size=3)

    cache.set("a", "<p>a</p>")
    cache.set("b", "<p>b</p>")
    cache.set("c", "<p>c</p>")

    assert cache.get("a") == "<p>a</p>"
    assert cache.get("b") == "<p>b</p>"
    assert cache.get("c") == "<p>c</p>"
    assert len(cache) == 3


def test_lru_eviction():
    """Test LRU eviction on size limit."""
    cache = LRUCache[str](max_size=2)

    cache.set("a", "value_a")
    cache.set("b", "value_b")
    cache.set("c", "value_c")  # evicts "a"

    assert cache.get("a") is None
    assert cache.get("b") == "value_b"
    assert cache.get("c") == "value_c"
    assert cache.stats.evictions == 1


def test_lru_order():
    """Test LRU ordering (most recently used stays)."""
    cache = LRUCache[str](max_size=2)

    cache.set("a", "value_a")
    cache.set("b", "value_b")
    _ = cache.get("a")
    cache.set("c", "value_c")

    assert "a" in cache
    assert "b" not in cache
    assert "c" in cache


def test_lru_update():
    """Test updating existing entry."""
    cache = LRUCache[str](max_size=10)

    cache.set("key", "value1")
    cache.set("key", "value2")

    assert cache.get("key") == "value2"
    assert len(cache) == 1


def test_lru_clear():
    """Test clearing keeps statistics consistent."""
    cache = LRUCache[str](max_size=10)
    cache.set("a", "1")
    cache.set("b", "2")
    assert cache.stats.size == 2

    cache.clear()
    assert len(cache) == 0
    assert cache.stats.size == 0


def test_lru_rejects_non_positive_size():
    with pytest.raises(ValueError):
        LRUCache[str](max_size=0)


def test_stats():
    """Test hit/miss tracking."""
    cache = LRUCache[str](max_size=10)
    cache.set("a", "1")

    cache.get("a")
    cache.get("a")
    cache.get("missing")

    stats = cache.stats
    assert stats.hits == 2
    assert stats.misses == 1
    assert stats.hit_rate == pytest.approx(2 / 3)
    assert stats.to_dict()["max_size"] == 10


def test_empty_stats_hit_rate():
    assert Stats().hit_rate == 0.0


@given(st.lists(st.text(max_size=5), max_size=50), st.integers(min_value=1, max_value=8))
def test_size_never_exceeds_max(keys, max_size):
    """Property: the cache never holds more than max_size entries."""
    cache = LRUCache[str](max_size=max_size)
    for key in keys:
        cache.set(key, key)
        assert len(cache) <= max_size

    if keys:
        assert cache.get(keys[-1]) == keys[-1]
