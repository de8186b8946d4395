"""
Exception types for SlotCache
Copyright 2025 Jurden Bruce
"""


class CacheError(Exception):
    """Base class for all cache errors"""


class InvalidCapacityError(CacheError, ValueError):
    """Raised when a cache is constructed with a non-positive capacity"""

    def __init__(self, capacity):
        self.capacity = capacity
        super().__init__(f"capacity must be a positive integer, got {capacity!r}")


class DuplicateKeyError(CacheError, KeyError):
    """Raised by add() when the key is already cached"""

    def __init__(self, key):
        self.key = key
        super().__init__(key)

    def __str__(self):
        return f"an element with the same key already exists in the cache: {self.key!r}"


class KeyNotFoundError(CacheError, KeyError):
    """Raised by get() when the key is not cached"""

    def __init__(self, key):
        self.key = key
        super().__init__(key)

    def __str__(self):
        return f"key not found in the cache: {self.key!r}"
