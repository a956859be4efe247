"""
Cache interface - contract shared by cache engines.
"""

from abc import ABC, abstractmethod
from typing import Any, Hashable, List, Optional


class ICache(ABC):
    """
    Minimal cache contract.

    Engines implementing this interface are interchangeable for callers
    that only need keyed storage with bounded capacity.
    """

    @abstractmethod
    def get(self, key: Hashable, want_entry: bool = False) -> Optional[Any]:
        """
        Retrieve a value and register its use.

        Args:
            key: Cache key
            want_entry: Return the whole entry instead of its value

        Returns:
            Cached value (or entry), or None if not found
        """
        pass

    @abstractmethod
    def put(self, key: Hashable, value: Any) -> Optional[Any]:
        """
        Store a value.

        Args:
            key: Cache key
            value: Value to cache

        Returns:
            The entry evicted to make room, or None
        """
        pass

    @abstractmethod
    def evict(self) -> Optional[Any]:
        """
        Remove the least recently used entry.

        Returns:
            The evicted entry, or None if the cache was empty
        """
        pass

    @abstractmethod
    def remove(self, key: Hashable) -> Optional[Any]:
        """
        Remove a specific key.

        Args:
            key: Cache key to remove

        Returns:
            The removed value, or None if not found
        """
        pass

    @abstractmethod
    def remove_all(self) -> None:
        """Clear all entries from cache."""
        pass

    @abstractmethod
    def keys(self) -> List[Hashable]:
        """Return all live keys, in no guaranteed order."""
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass
