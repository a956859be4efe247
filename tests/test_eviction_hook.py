"""
Tests for the on_evict finalization hook.
"""

import pytest
from recency_cache import LRUCache


class Resource:
    """Stand-in for a value that needs cleanup when dropped from the cache."""

    def __init__(self, name: str):
        self.name = name
        self.closed = False

    def close(self):
        self.closed = True


class TestEvictionHook:
    """Verify the hook sees every evicted entry once the cache is consistent."""

    def test_hook_called_on_capacity_eviction(self):
        seen = []
        cache = LRUCache(2, on_evict=lambda entry: seen.append(entry.key))
        cache.put("a", 1)
        cache.put("b", 2)
        assert seen == []

        cache.put("c", 3)
        assert seen == ["a"]

    def test_hook_called_on_direct_evict(self):
        seen = []
        cache = LRUCache(3, on_evict=seen.append)
        cache.put("a", 1)
        evicted = cache.evict()
        assert seen == [evicted]

    def test_hook_not_called_when_empty(self):
        seen = []
        cache = LRUCache(3, on_evict=seen.append)
        assert cache.evict() is None
        assert seen == []

    def test_hook_finalizes_values(self):
        cache = LRUCache(2, on_evict=lambda entry: entry.value.close())
        resources = [Resource(name) for name in ("a", "b", "c", "d")]
        for resource in resources:
            cache.put(resource.name, resource)

        assert [r.closed for r in resources] == [True, True, False, False]

    def test_hook_sees_consistent_cache(self):
        cache = None

        def on_evict(entry):
            assert entry.key not in cache
            assert not entry.is_linked
            assert cache.size <= cache.limit
            cache.check_invariants()

        cache = LRUCache(2, on_evict=on_evict)
        for i in range(5):
            cache.put(i, i)
        cache.evict()

    def test_hook_errors_propagate(self):
        def on_evict(entry):
            raise RuntimeError(f"cannot finalize {entry.key}")

        cache = LRUCache(1, on_evict=on_evict)
        cache.put("a", 1)
        with pytest.raises(RuntimeError, match="cannot finalize a"):
            cache.put("b", 2)

        # The eviction itself completed before the hook failed
        assert cache.keys() == ["b"]
        cache.check_invariants()
