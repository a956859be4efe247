"""
Cache entry model.

Entries live in the cache's arena and point at their neighbours by slot
number instead of by reference.
"""

from typing import Generic, Tuple, TypeVar
from pydantic import BaseModel, ConfigDict

K = TypeVar("K")
V = TypeVar("V")

# Slot number meaning "no entry"
NIL = -1


class Entry(BaseModel, Generic[K, V]):
    """One cached binding plus its position in the recency chain"""
    key: K
    value: V
    older: int = NIL  # slot of the next less recently used entry
    newer: int = NIL  # slot of the next more recently used entry
    slot: int = NIL

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @property
    def is_linked(self) -> bool:
        """True while the entry still holds a link into the chain."""
        return self.older != NIL or self.newer != NIL

    def detach(self) -> None:
        """Drop every link and the slot number."""
        self.older = NIL
        self.newer = NIL
        self.slot = NIL

    def as_pair(self) -> Tuple[K, V]:
        return self.key, self.value
