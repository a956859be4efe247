"""Data models for the recency cache."""

from .entry import Entry, NIL

__all__ = [
    "Entry",
    "NIL",
]
