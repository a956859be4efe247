"""Abstract interfaces for cache engines."""

from .cache import ICache

__all__ = [
    "ICache",
]
