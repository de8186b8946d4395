"""
Eviction listeners and usage counters for SlotCache
Copyright 2025 Jurden Bruce

The core engine has no eviction callback. ObservedCache wraps it, works out
which key a full-cache insertion is about to push out, and tells registered
listeners after the insertion succeeds.
"""

import logging
import traceback
from collections import deque
from datetime import datetime
from typing import Any, Callable, List, Tuple

from .cache import LRUCache
from .models import CacheStats, EvictionEvent

logger = logging.getLogger("slotcache.observed")

EvictionListener = Callable[[EvictionEvent], None]


class ObservedCache:
    """LRU cache that reports evictions and keeps hit/miss statistics"""

    def __init__(self, cache=None, capacity: int = None, listeners: List[EvictionListener] = None):
        if cache is None:
            cache = LRUCache(capacity)
        self._cache = cache
        self._listeners: List[EvictionListener] = list(listeners or [])
        self.stats = CacheStats(capacity=cache.capacity)
        self.recent_evictions = deque(maxlen=100)

    # ===== LISTENERS =====

    def add_listener(self, listener: EvictionListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: EvictionListener) -> bool:
        try:
            self._listeners.remove(listener)
            return True
        except ValueError:
            return False

    def get_stats(self) -> CacheStats:
        self.stats.count = self._cache.count
        return self.stats

    # ===== PROPERTIES =====

    @property
    def capacity(self) -> int:
        return self._cache.capacity

    @property
    def count(self) -> int:
        return self._cache.count

    def __len__(self) -> int:
        return self._cache.count

    def __contains__(self, key) -> bool:
        return self._cache.contains_key(key)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._cache!r}, evictions={self.stats.evictions})"

    # ===== OPERATIONS =====

    def add(self, key, value) -> None:
        victim = self._pending_victim(key)
        self._cache.add(key, value)
        self.stats.insertions += 1
        self._after_write(victim, key)

    def get(self, key):
        try:
            value = self._cache.get(key)
        except KeyError:
            self.stats.misses += 1
            raise
        self.stats.hits += 1
        return value

    def try_get(self, key) -> Tuple[bool, Any]:
        found, value = self._cache.try_get(key)
        if found:
            self.stats.hits += 1
        else:
            self.stats.misses += 1
        return found, value

    def set(self, key, value) -> None:
        if self._cache.contains_key(key):
            self._cache.set(key, value)
            self.stats.updates += 1
            return
        victim = self._pending_victim(key)
        self._cache.set(key, value)
        self.stats.insertions += 1
        self._after_write(victim, key)

    def remove(self, key) -> bool:
        removed = self._cache.remove(key)
        if removed:
            self.stats.removals += 1
            self.stats.count = self._cache.count
        return removed

    def contains_key(self, key) -> bool:
        return self._cache.contains_key(key)

    def clear(self) -> None:
        self._cache.clear()
        self.stats.count = 0

    def eviction_candidate(self) -> Tuple[bool, Any]:
        return self._cache.eviction_candidate()

    def peek(self, key) -> Tuple[bool, Any]:
        return self._cache.peek(key)

    def snapshot(self) -> List[Tuple[Any, Any]]:
        return self._cache.snapshot()

    # ===== INTERNALS =====

    def _pending_victim(self, incoming_key):
        """(key, value) that inserting incoming_key will evict, or None"""
        if self._cache.count < self._cache.capacity or self._cache.contains_key(incoming_key):
            return None
        found, victim_key = self._cache.eviction_candidate()
        if not found:
            return None
        _, victim_value = self._cache.peek(victim_key)
        return victim_key, victim_value

    def _after_write(self, victim, incoming_key):
        self.stats.count = self._cache.count
        if victim is None:
            return

        event = EvictionEvent(
            key=victim[0],
            value=victim[1],
            evicted_at=datetime.now(),
            incoming_key=incoming_key,
        )
        self.stats.evictions += 1
        self.stats.last_eviction = event.evicted_at
        self.recent_evictions.append(event)

        logger.debug(f"Evicted {event.key!r} to make room for {incoming_key!r}")
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                logger.error(f"Eviction listener {listener!r} failed: {e}")
                logger.error(traceback.format_exc())
