"""Recency Cache - fixed capacity LRU key-value cache with O(1) operations."""

__version__ = "1.0.0"

from .caching import LRUCache
from .config import CacheSettings, settings
from .exceptions import CacheError, CacheInvariantError, InvalidCapacityError
from .interfaces import ICache
from .models import Entry, NIL

__all__ = [
    # Engine
    "LRUCache",
    "ICache",
    # Models
    "Entry",
    "NIL",
    # Config
    "CacheSettings",
    "settings",
    # Errors
    "CacheError",
    "CacheInvariantError",
    "InvalidCapacityError",
]
