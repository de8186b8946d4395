"""
Dictionary interface for SlotCache
Copyright 2025 Jurden Bruce

CacheMapping wraps an LRUCache in the MutableMapping protocol. Item access
and assignment count as touches; membership tests, iteration and the
keys()/values()/items() copies do not.
"""

from collections.abc import MutableMapping
from typing import Any, List, Tuple

from .cache import LRUCache
from .errors import KeyNotFoundError


class CacheMapping(MutableMapping):
    """MutableMapping view over an LRU cache"""

    def __init__(self, cache=None, capacity: int = None):
        if cache is None:
            cache = LRUCache(capacity)
        self._cache = cache

    @property
    def cache(self):
        return self._cache

    @property
    def capacity(self) -> int:
        return self._cache.capacity

    def __getitem__(self, key):
        return self._cache.get(key)

    def __setitem__(self, key, value):
        self._cache.set(key, value)

    def __delitem__(self, key):
        if not self._cache.remove(key):
            raise KeyNotFoundError(key)

    def __iter__(self):
        # Iterate over a copy so callers may mutate while looping
        return iter([key for key, _ in self._cache.snapshot()])

    def __len__(self) -> int:
        return self._cache.count

    def __contains__(self, key) -> bool:
        return self._cache.contains_key(key)

    def clear(self) -> None:
        self._cache.clear()

    # Copies, not live views. Building them must not reorder the cache.
    def keys(self) -> List[Any]:
        return [key for key, _ in self._cache.snapshot()]

    def values(self) -> List[Any]:
        return [value for _, value in self._cache.snapshot()]

    def items(self) -> List[Tuple[Any, Any]]:
        return self._cache.snapshot()

    def contains_item(self, item: Tuple[Any, Any]) -> bool:
        """True if the key is cached with exactly this value"""
        key, value = item
        found, cached_value = self._cache.peek(key)
        return found and cached_value == value

    def remove_item(self, item: Tuple[Any, Any]) -> bool:
        """Remove the pair only if both key and value match"""
        if not self.contains_item(item):
            return False
        return self._cache.remove(item[0])

    def copy_to(self, array: list, index: int = 0) -> None:
        """Write (key, value) pairs into array starting at index"""
        if index < 0:
            raise IndexError(f"index must be non-negative, got {index}")
        pairs = self._cache.snapshot()
        if len(array) - index < len(pairs):
            raise IndexError(
                f"array of length {len(array)} cannot hold {len(pairs)} entries from index {index}"
            )
        array[index:index + len(pairs)] = pairs

    def __eq__(self, other):
        if not isinstance(other, CacheMapping):
            return NotImplemented
        if other is self:
            return True
        return self.capacity == other.capacity and self.items() == other.items()

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self.items())!r}, capacity={self.capacity})"
