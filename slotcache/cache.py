"""
LRU Cache engine for SlotCache
Copyright 2025 Jurden Bruce

Fixed-capacity key-value cache with least-recently-used eviction.

Three structures are kept in lockstep:
    _store  key -> value (source of truth for membership)
    arena   recency list stored as parallel slot tables linked by integer
            handles; head is the least recently used key, tail the most
    _index  key -> handle of its slot in the arena

Every touch (add, successful read, update) relocates the key's slot to the
tail. Eviction removes the head. All operations are O(1) amortized.
"""

import logging
from typing import Any, Dict, Generic, Hashable, List, Tuple, TypeVar

from .errors import DuplicateKeyError, InvalidCapacityError, KeyNotFoundError

logger = logging.getLogger("slotcache.cache")

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

NIL = -1


class LRUCache(Generic[K, V]):
    """LRU cache with a fixed entry count and a slot-arena recency list"""

    def __init__(self, capacity: int):
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise InvalidCapacityError(capacity)
        self._capacity = capacity

        self._store: Dict[K, V] = {}
        self._index: Dict[K, int] = {}

        # Arena grows on demand and never holds more than capacity slots
        self._slot_keys: List[Any] = []
        self._prev: List[int] = []
        self._next: List[int] = []
        self._free: List[int] = []
        self._head = NIL
        self._tail = NIL

    # ===== PROPERTIES =====

    @property
    def capacity(self) -> int:
        """Maximum number of entries. Fixed at construction."""
        return self._capacity

    @property
    def count(self) -> int:
        """Current number of entries, never greater than capacity"""
        return len(self._store)

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key) -> bool:
        return key in self._store

    def __repr__(self) -> str:
        return f"{type(self).__name__}(capacity={self._capacity}, count={len(self._store)})"

    # ===== PUBLIC OPERATIONS =====

    def add(self, key: K, value: V) -> None:
        """Insert a new key as most recently used.

        Raises DuplicateKeyError if the key is already cached; add never
        overwrites. Evicts the least recently used entry when full.
        """
        if key in self._store:
            raise DuplicateKeyError(key)
        self._insert(key, value)

    def get(self, key: K) -> V:
        """Return the value for key and mark it most recently used"""
        try:
            value = self._store[key]
        except KeyError:
            raise KeyNotFoundError(key) from None
        self._touch(key)
        return value

    def try_get(self, key: K) -> Tuple[bool, Any]:
        """Return (True, value) on a hit, (False, None) on a miss.

        A hit touches the key like get(); a miss changes nothing.
        """
        if key not in self._store:
            return False, None
        self._touch(key)
        return True, self._store[key]

    def set(self, key: K, value: V) -> None:
        """Upsert: replace and touch an existing key, otherwise insert it.

        The absent branch goes through the same path as add(), so it evicts
        when full and always creates the index record.
        """
        if key in self._store:
            self._store[key] = value
            self._touch(key)
        else:
            self._insert(key, value)

    def remove(self, key: K) -> bool:
        """Remove key if present. Returns whether it was present."""
        if key not in self._store:
            return False
        self._remove_key(key)
        return True

    def contains_key(self, key: K) -> bool:
        """Membership test. Does not affect recency order."""
        return key in self._store

    def clear(self) -> None:
        """Drop every entry. Capacity is unchanged."""
        self._store.clear()
        self._index.clear()
        self._slot_keys.clear()
        self._prev.clear()
        self._next.clear()
        self._free.clear()
        self._head = NIL
        self._tail = NIL

    # ===== READ-ONLY INSPECTION =====

    def eviction_candidate(self) -> Tuple[bool, Any]:
        """Peek at the least recently used key without touching it"""
        if self._head == NIL:
            return False, None
        return True, self._slot_keys[self._head]

    def peek(self, key: K) -> Tuple[bool, Any]:
        """Like try_get() but leaves recency order alone"""
        if key not in self._store:
            return False, None
        return True, self._store[key]

    def snapshot(self) -> List[Tuple[K, V]]:
        """Copy of all (key, value) pairs, least to most recently used"""
        pairs = []
        handle = self._head
        while handle != NIL:
            key = self._slot_keys[handle]
            pairs.append((key, self._store[key]))
            handle = self._next[handle]
        return pairs

    # ===== INTERNALS =====

    def _insert(self, key, value):
        if len(self._store) == self._capacity:
            self._evict_lru()
        handle = self._allocate(key)
        self._link_tail(handle)
        self._index[key] = handle
        self._store[key] = value

    def _touch(self, key):
        handle = self._index[key]
        if handle == self._tail:
            return
        self._unlink(handle)
        self._link_tail(handle)

    def _evict_lru(self):
        key = self._slot_keys[self._head]
        value = self._remove_key(key)
        logger.debug(f"Evicted least recently used key {key!r}")
        return key, value

    def _remove_key(self, key):
        handle = self._index.pop(key)
        self._unlink(handle)
        self._release(handle)
        return self._store.pop(key)

    def _allocate(self, key) -> int:
        if self._free:
            handle = self._free.pop()
            self._slot_keys[handle] = key
            return handle
        self._slot_keys.append(key)
        self._prev.append(NIL)
        self._next.append(NIL)
        return len(self._slot_keys) - 1

    def _release(self, handle):
        self._slot_keys[handle] = None
        self._free.append(handle)

    def _link_tail(self, handle):
        self._prev[handle] = self._tail
        self._next[handle] = NIL
        if self._tail != NIL:
            self._next[self._tail] = handle
        else:
            self._head = handle
        self._tail = handle

    def _unlink(self, handle):
        prev_handle = self._prev[handle]
        next_handle = self._next[handle]
        if prev_handle != NIL:
            self._next[prev_handle] = next_handle
        else:
            self._head = next_handle
        if next_handle != NIL:
            self._prev[next_handle] = prev_handle
        else:
            self._tail = prev_handle
        self._prev[handle] = NIL
        self._next[handle] = NIL
