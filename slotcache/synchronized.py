"""
Thread-safe wrapper for SlotCache
Copyright 2025 Jurden Bruce

The engine itself performs no locking. SynchronizedCache puts the whole
engine behind one re-entrant lock so that the store write, recency
relocation and index update of every call happen as a single step.
"""

import threading
from typing import Any, List, Tuple


class SynchronizedCache:
    """Coarse-locked facade exposing the full cache operation surface"""

    def __init__(self, cache):
        self._cache = cache
        self._lock = threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        """Hold this to run several operations as one atomic unit"""
        return self._lock

    @property
    def capacity(self) -> int:
        return self._cache.capacity

    @property
    def count(self) -> int:
        with self._lock:
            return self._cache.count

    def __len__(self) -> int:
        return self.count

    def __contains__(self, key) -> bool:
        return self.contains_key(key)

    def __repr__(self) -> str:
        with self._lock:
            return f"{type(self).__name__}({self._cache!r})"

    def add(self, key, value) -> None:
        with self._lock:
            self._cache.add(key, value)

    def get(self, key):
        with self._lock:
            return self._cache.get(key)

    def try_get(self, key) -> Tuple[bool, Any]:
        with self._lock:
            return self._cache.try_get(key)

    def set(self, key, value) -> None:
        with self._lock:
            self._cache.set(key, value)

    def remove(self, key) -> bool:
        with self._lock:
            return self._cache.remove(key)

    def contains_key(self, key) -> bool:
        with self._lock:
            return self._cache.contains_key(key)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def eviction_candidate(self) -> Tuple[bool, Any]:
        with self._lock:
            return self._cache.eviction_candidate()

    def peek(self, key) -> Tuple[bool, Any]:
        with self._lock:
            return self._cache.peek(key)

    def snapshot(self) -> List[Tuple[Any, Any]]:
        with self._lock:
            return self._cache.snapshot()

    def get_stats(self):
        with self._lock:
            return self._cache.get_stats()

    def __getattr__(self, name):
        # Pass through extras of the wrapped cache (stats, listeners)
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._cache, name)
