"""
SlotCache - fixed-capacity LRU cache
Copyright 2025 Jurden Bruce
"""

__version__ = "1.0.0"

from .cache import LRUCache
from .errors import CacheError, InvalidCapacityError, DuplicateKeyError, KeyNotFoundError
from .mapping import CacheMapping
from .models import CacheCommand, CacheSnapshot, CacheStats, EvictionEvent
from .observed import ObservedCache
from .synchronized import SynchronizedCache

__all__ = [
    'LRUCache',
    'CacheError',
    'InvalidCapacityError',
    'DuplicateKeyError',
    'KeyNotFoundError',
    'CacheMapping',
    'CacheCommand',
    'CacheSnapshot',
    'CacheStats',
    'EvictionEvent',
    'ObservedCache',
    'SynchronizedCache',
]
