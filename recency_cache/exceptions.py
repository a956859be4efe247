"""
Exceptions raised by the recency cache.

Lookups never raise: a missing key is reported as None. These errors only
signal contract violations.
"""


class CacheError(Exception):
    """Base class for all cache errors"""
    pass


class InvalidCapacityError(CacheError, ValueError):
    """Raised when a cache is constructed with a negative or non-integer limit."""

    def __init__(self, limit):
        self.limit = limit
        super().__init__(f"Cache limit must be a non-negative integer, got {limit!r}")


class CacheInvariantError(CacheError, AssertionError):
    """Raised by LRUCache.check_invariants() when the index and chain disagree."""
    pass
