"""
LRU (Least Recently Used) cache over an arena of entries.

Entries are kept in a list of slots and linked into a doubly linked
recency chain by slot number:

    head                                             tail
    [A] .newer -> [B] .newer -> [C] .newer -> [D]
        <- .older     <- .older     <- .older
    evicted <------------------------------------ added

A dict maps each key to its slot, so every operation is O(1).
Released slots are recycled through a free list.
"""

import logging
from typing import Callable, Dict, Generic, Hashable, Iterator, List, Optional, TypeVar, Union

from ..config import CacheSettings, settings as default_settings
from ..exceptions import CacheInvariantError, InvalidCapacityError
from ..interfaces.cache import ICache
from ..models.entry import NIL, Entry

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class LRUCache(ICache, Generic[K, V]):
    """
    Fixed capacity key-value cache with least-recently-used eviction.

    Features:
    - O(1) put/get/set/remove/evict
    - Evicts the head (least recently used) entry as soon as the limit is exceeded
    - Optional on_evict hook for finalizing evicted values
    - Not thread-safe; wrap calls in a lock if shared between threads
    """

    def __init__(
        self,
        limit: int,
        on_evict: Optional[Callable[[Entry], None]] = None,
        describe_delimiter: Optional[str] = None
    ):
        """
        Initialize LRU cache.

        Args:
            limit: Maximum number of entries, >= 0
            on_evict: Called with each evicted entry once it is unlinked
            describe_delimiter: Separator used by describe(), defaults to
                CacheSettings.describe_delimiter

        Raises:
            InvalidCapacityError: If limit is negative or not an integer
        """
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
            raise InvalidCapacityError(limit)

        self._limit = limit
        self._size = 0
        self._on_evict = on_evict
        if describe_delimiter is None:
            describe_delimiter = default_settings.describe_delimiter
        self._describe_delimiter = describe_delimiter

        # Index: key -> slot
        self._index: Dict[K, int] = {}

        # Arena of entries, None marks a free slot
        self._slots: List[Optional[Entry]] = []
        self._free: List[int] = []

        self._head = NIL
        self._tail = NIL

        logger.debug(f"Created LRU cache with limit {limit}")

    @classmethod
    def from_settings(
        cls,
        cache_settings: Optional[CacheSettings] = None,
        on_evict: Optional[Callable[[Entry], None]] = None
    ) -> "LRUCache":
        """Build a cache from CacheSettings limit and describe delimiter."""
        cache_settings = cache_settings or default_settings
        return cls(
            cache_settings.default_limit,
            on_evict=on_evict,
            describe_delimiter=cache_settings.describe_delimiter
        )

    # ------------------------------------------------------------------
    # Read-only state

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def size(self) -> int:
        return self._size

    @property
    def head(self) -> Optional[Entry]:
        """Least recently used entry, or None when empty."""
        return self._entry_at(self._head)

    @property
    def tail(self) -> Optional[Entry]:
        """Most recently used entry, or None when empty."""
        return self._entry_at(self._tail)

    # ------------------------------------------------------------------
    # Core operations

    def put(self, key: K, value: V) -> Optional[Entry]:
        """
        Insert value under key as the most recently used entry.

        An existing entry for key is unlinked and replaced, never left
        orphaned in the chain. Use set() to update a value in place.

        Args:
            key: Cache key
            value: Value to cache

        Returns:
            The entry evicted to make room, or None if there was room
        """
        stale_slot = self._index.get(key)
        if stale_slot is not None:
            stale = self._slots[stale_slot]
            self._unlink(stale)
            self._release(stale)
            self._size -= 1
            logger.debug(f"Replaced existing entry for key {key!r}")

        entry = Entry(key=key, value=value)
        self._allocate(entry)
        self._index[key] = entry.slot
        self._link_tail(entry)

        if self._size == self._limit:
            # Limit hit: size stays at limit, the head makes room
            evicted = self._shift()
            self._finalize(evicted)
            return evicted

        self._size += 1
        return None

    def evict(self) -> Optional[Entry]:
        """
        Remove the least recently used entry.

        Decrements size, so callers need no bookkeeping of their own.

        Returns:
            The evicted entry with its links cleared, or None if empty
        """
        entry = self._shift()
        if entry is None:
            return None
        self._size -= 1
        self._finalize(entry)
        return entry

    def get(self, key: K, want_entry: bool = False) -> Optional[Union[V, Entry]]:
        """
        Look up key and mark it as most recently used.

        Args:
            key: Cache key
            want_entry: Return the Entry instead of its value

        Returns:
            Value (or Entry) if found, None otherwise
        """
        slot = self._index.get(key)
        if slot is None:
            return None

        entry = self._slots[slot]
        if slot != self._tail:
            self._unlink(entry)
            self._link_tail(entry)

        return entry if want_entry else entry.value

    def find(self, key: K) -> Optional[Entry]:
        """Peek at the entry for key without changing its recency."""
        slot = self._index.get(key)
        if slot is None:
            return None
        return self._slots[slot]

    def set(self, key: K, value: V) -> Optional[V]:
        """
        Update the value for key, inserting it if absent.

        Returns:
            The previous value if key was cached, the value of an entry
            evicted to make room if key was new, otherwise None. When the
            new entry evicts itself (limit 0) None is returned.
        """
        entry = self.get(key, True)
        if entry is not None:
            old_value = entry.value
            entry.value = value
            return old_value

        evicted = self.put(key, value)
        if evicted is None or key not in self._index:
            return None
        return evicted.value

    def remove(self, key: K) -> Optional[V]:
        """
        Remove key from the cache.

        Returns:
            The removed value, or None if not found
        """
        slot = self._index.pop(key, None)
        if slot is None:
            return None

        entry = self._slots[slot]
        value = entry.value
        self._unlink(entry)
        self._release(entry)
        self._size -= 1
        return value

    def remove_all(self) -> None:
        """Remove all entries."""
        for entry in self._slots:
            if entry is not None:
                entry.detach()
        self._index = {}
        self._slots = []
        self._free = []
        self._head = NIL
        self._tail = NIL
        self._size = 0

    # ------------------------------------------------------------------
    # Traversal and introspection

    def keys(self) -> List[K]:
        """All live keys, in arbitrary order."""
        return list(self._index)

    def entries(self, start_from_most_recent: bool = False) -> Iterator[Entry]:
        """
        Walk the recency chain without touching entries.

        Yields least recently used first, or most recently used first when
        start_from_most_recent is set.
        """
        if start_from_most_recent:
            slot = self._tail
            while slot != NIL:
                entry = self._slots[slot]
                yield entry
                slot = entry.older
        else:
            slot = self._head
            while slot != NIL:
                entry = self._slots[slot]
                yield entry
                slot = entry.newer

    def for_each(self, visit: Callable[[K, V], None], start_from_most_recent: bool = False) -> None:
        """Call visit(key, value) for every entry in recency order."""
        for entry in self.entries(start_from_most_recent):
            visit(*entry.as_pair())

    def lru_order(self) -> List[K]:
        """Keys from least to most recently used."""
        return [entry.key for entry in self.entries()]

    def describe(self, delimiter: Optional[str] = None) -> str:
        """Render the chain head to tail as key:value pairs, for debugging."""
        if delimiter is None:
            delimiter = self._describe_delimiter
        return delimiter.join(f"{entry.key}:{entry.value}" for entry in self.entries())

    def check_invariants(self) -> None:
        """
        Verify that index, chain and arena agree.

        Walks the whole chain, so O(size). Meant for tests and debugging.

        Raises:
            CacheInvariantError: Describing the first inconsistency found
        """
        if not 0 <= self._size <= self._limit:
            raise CacheInvariantError(f"size {self._size} outside 0..{self._limit}")
        if len(self._index) != self._size:
            raise CacheInvariantError(f"index holds {len(self._index)} keys, size is {self._size}")
        if (self._size == 0) != (self._head == NIL and self._tail == NIL):
            raise CacheInvariantError("head/tail do not match emptiness")

        seen = set()
        previous = NIL
        slot = self._head
        while slot != NIL:
            if slot in seen:
                raise CacheInvariantError(f"cycle in recency chain at slot {slot}")
            seen.add(slot)
            entry = self._entry_at(slot)
            if entry is None:
                raise CacheInvariantError(f"chain points at free slot {slot}")
            if entry.slot != slot:
                raise CacheInvariantError(f"entry {entry.key!r} records slot {entry.slot}, stored at {slot}")
            if entry.older != previous:
                raise CacheInvariantError(f"entry {entry.key!r} has older={entry.older}, expected {previous}")
            if self._index.get(entry.key) != slot:
                raise CacheInvariantError(f"index does not point at entry {entry.key!r}")
            previous = slot
            slot = entry.newer

        if previous != self._tail:
            raise CacheInvariantError(f"chain ends at slot {previous}, tail is {self._tail}")
        if len(seen) != self._size:
            raise CacheInvariantError(f"chain length {len(seen)} != size {self._size}")

        live = sum(1 for entry in self._slots if entry is not None)
        if live != self._size or len(self._slots) != live + len(self._free):
            raise CacheInvariantError(
                f"arena has {live} live and {len(self._free)} free of {len(self._slots)} slots"
            )

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key) -> bool:
        return key in self._index

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return f"LRUCache(limit={self._limit}, size={self._size})"

    # ------------------------------------------------------------------
    # Chain and arena maintenance

    def _entry_at(self, slot: int) -> Optional[Entry]:
        if slot == NIL:
            return None
        return self._slots[slot]

    def _allocate(self, entry: Entry) -> None:
        """Store entry in a free slot, growing the arena if none is free."""
        if self._free:
            slot = self._free.pop()
            self._slots[slot] = entry
        else:
            slot = len(self._slots)
            self._slots.append(entry)
        entry.slot = slot

    def _release(self, entry: Entry) -> None:
        """Return the entry's slot to the free list and clear its links."""
        self._slots[entry.slot] = None
        self._free.append(entry.slot)
        entry.detach()

    def _link_tail(self, entry: Entry) -> None:
        """Append an unlinked entry as the most recently used."""
        entry.newer = NIL
        entry.older = self._tail
        if self._tail != NIL:
            self._slots[self._tail].newer = entry.slot
        else:
            self._head = entry.slot
        self._tail = entry.slot

    def _unlink(self, entry: Entry) -> None:
        """Bridge the entry's neighbours, moving head/tail if it was at an end."""
        if entry.older != NIL:
            self._slots[entry.older].newer = entry.newer
        else:
            self._head = entry.newer

        if entry.newer != NIL:
            self._slots[entry.newer].older = entry.older
        else:
            self._tail = entry.older

        entry.older = NIL
        entry.newer = NIL

    def _shift(self) -> Optional[Entry]:
        """Detach the head entry. Leaves size to the caller."""
        if self._head == NIL:
            return None

        entry = self._slots[self._head]
        self._unlink(entry)
        del self._index[entry.key]
        self._release(entry)
        return entry

    def _finalize(self, entry: Entry) -> None:
        logger.debug(f"Evicted LRU entry: {entry.key!r}")
        if self._on_evict is not None:
            self._on_evict(entry)
