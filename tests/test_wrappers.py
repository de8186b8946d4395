"""
Wrapper Tests for SlotCache (synchronized and observed caches)
Copyright 2025 Jurden Bruce
"""

import threading

import pytest

from slotcache import (
    DuplicateKeyError,
    EvictionEvent,
    KeyNotFoundError,
    LRUCache,
    ObservedCache,
    SynchronizedCache,
)


# ===== OBSERVED CACHE =====

def test_listener_receives_evicted_entry():
    events = []
    cache = ObservedCache(capacity=2, listeners=[events.append])
    cache.add("a", 1)
    cache.add("b", 2)
    assert events == []

    cache.add("c", 3)
    assert len(events) == 1
    event = events[0]
    assert isinstance(event, EvictionEvent)
    assert (event.key, event.value, event.incoming_key) == ("a", 1, "c")
    assert event.to_dict()["evicted_at"] == event.evicted_at.isoformat()


def test_upsert_of_absent_key_reports_eviction():
    events = []
    cache = ObservedCache(capacity=1)
    cache.add_listener(events.append)
    cache.set("a", 1)
    cache.set("a", 2)
    assert events == []
    cache.set("b", 3)
    assert [e.key for e in events] == ["a"]
    assert cache.stats.updates == 1
    assert cache.stats.insertions == 2


def test_failed_add_reports_nothing():
    events = []
    cache = ObservedCache(capacity=1, listeners=[events.append])
    cache.add("a", 1)
    with pytest.raises(DuplicateKeyError):
        cache.add("a", 2)
    assert events == []
    assert cache.stats.evictions == 0
    assert cache.stats.insertions == 1


def test_listener_errors_do_not_break_cache():
    def broken(event):
        raise RuntimeError("listener failed")

    seen = []
    cache = ObservedCache(capacity=1, listeners=[broken, seen.append])
    cache.add("a", 1)
    cache.add("b", 2)
    assert cache.contains_key("b")
    assert cache.count == 1
    assert [e.key for e in seen] == ["a"]


def test_remove_listener():
    events = []
    cache = ObservedCache(capacity=1, listeners=[events.append])
    assert cache.remove_listener(events.append) is True
    assert cache.remove_listener(events.append) is False
    cache.add("a", 1)
    cache.add("b", 2)
    assert events == []
    assert cache.stats.evictions == 1


def test_hit_miss_statistics():
    cache = ObservedCache(capacity=3)
    cache.add("a", 1)
    cache.get("a")
    cache.try_get("a")
    cache.try_get("b")
    with pytest.raises(KeyNotFoundError):
        cache.get("b")
    cache.contains_key("a")
    cache.remove("a")
    cache.remove("a")

    stats = cache.get_stats()
    assert (stats.hits, stats.misses) == (2, 2)
    assert stats.hit_rate == 0.5
    assert stats.removals == 1
    assert stats.count == 0
    assert stats.to_dict()["hit_rate"] == 0.5


def test_recent_evictions_are_bounded():
    cache = ObservedCache(capacity=1)
    for i in range(150):
        cache.add(i, i)
    assert cache.stats.evictions == 149
    assert len(cache.recent_evictions) == 100
    assert cache.recent_evictions[-1].key == 148
    assert cache.stats.last_eviction == cache.recent_evictions[-1].evicted_at


def test_observed_cache_keeps_lru_semantics():
    cache = ObservedCache(LRUCache(3))
    for key in ("ak", "bk", "ck"):
        cache.add(key, key)
    cache.set("ak", "newak")
    cache.set("bk", "newbk")
    cache.add("dk", "dv")
    assert [key for key, _ in cache.snapshot()] == ["ak", "bk", "dk"]
    assert cache.peek("ak") == (True, "newak")


# ===== SYNCHRONIZED CACHE =====

def test_synchronized_cache_delegates():
    cache = SynchronizedCache(LRUCache(2))
    cache.add("a", 1)
    cache.set("b", 2)
    assert cache.get("a") == 1
    assert cache.try_get("b") == (True, 2)
    assert cache.contains_key("a")
    assert "a" in cache
    assert len(cache) == 2
    assert cache.capacity == 2
    assert cache.eviction_candidate() == (True, "a")
    assert cache.remove("a") is True
    cache.clear()
    assert cache.count == 0


def test_synchronized_passes_through_observed_extras():
    cache = SynchronizedCache(ObservedCache(capacity=1))
    cache.add("a", 1)
    cache.add("b", 2)
    assert cache.get_stats().evictions == 1
    with pytest.raises(AttributeError):
        cache._not_there


def test_concurrent_writers_respect_capacity():
    cache = SynchronizedCache(LRUCache(50))
    errors = []

    def worker(offset):
        try:
            for i in range(500):
                key = (offset, i % 80)
                cache.set(key, i)
                cache.try_get((offset, (i * 7) % 80))
                if i % 5 == 0:
                    cache.remove((offset, (i * 3) % 80))
        except Exception as e:
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert cache.count <= 50
    with cache.lock:
        snapshot = cache.snapshot()
        assert len(snapshot) == cache.count
        assert len({key for key, _ in snapshot}) == len(snapshot)


def lock_held_elsewhere(lock):
    """True if another thread cannot take the lock right now"""
    result = []

    def try_acquire():
        acquired = lock.acquire(blocking=False)
        if acquired:
            lock.release()
        result.append(acquired)

    t = threading.Thread(target=try_acquire)
    t.start()
    t.join()
    return not result[0]


def test_synchronized_get_stats_holds_lock():
    inner = ObservedCache(capacity=2)
    cache = SynchronizedCache(inner)
    held = []
    original = inner.get_stats

    def recording_get_stats():
        held.append(lock_held_elsewhere(cache.lock))
        return original()

    inner.get_stats = recording_get_stats
    cache.add("a", 1)

    assert lock_held_elsewhere(cache.lock) is False
    assert cache.get_stats().count == 1
    assert held == [True]
