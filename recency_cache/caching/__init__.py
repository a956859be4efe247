"""
Cache engines.

Every engine implements the ICache interface, so callers can swap them.
"""

from .lru_cache import LRUCache

__all__ = [
    "LRUCache",
]
