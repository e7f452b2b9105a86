"""Tests for the LRU cache."""

from __future__ import annotations

import pytest

from placekit.services.cache import LRUCache
from placekit.shared.errors import ApplicationError


class TestLRUCache:
    """Capacity, eviction order and promotion."""

    def test_get_missing_returns_default(self):
        cache = LRUCache(2)

        assert cache.get("missing") is None
        assert cache.get("missing", "fallback") == "fallback"

    def test_evicts_least_recently_used(self):
        cache = LRUCache(2)
        cache.set("a", 1)
        cache.set("b", 2)

        cache.get("a")
        cache.set("c", 3)

        assert cache.keys() == ["a", "c"]
        assert "b" not in cache

    def test_contains_does_not_promote(self):
        cache = LRUCache(2)
        cache.set("a", 1)
        cache.set("b", 2)

        assert cache.contains("a")
        cache.set("c", 3)

        assert not cache.contains("a")
        assert len(cache) == 2

    def test_overwrite_promotes_without_growing(self):
        cache = LRUCache(2)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("a", 10)

        assert cache.size() == 2
        assert cache.keys() == ["b", "a"]
        assert cache.get("a") == 10

    def test_clear(self):
        cache = LRUCache()
        cache.set("a", 1)
        cache.clear()

        assert cache.size() == 0
        assert cache.get("a") is None

    @pytest.mark.parametrize("size", [0, -5])
    def test_invalid_size(self, size):
        with pytest.raises(ApplicationError):
            LRUCache(size)
