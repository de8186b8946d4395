"""
Configuration for SlotCache
Copyright 2025 Jurden Bruce

All settings come from environment variables.
"""

import os
import logging
from typing import Any, Dict, Optional

from .cache import LRUCache
from .observed import ObservedCache
from .synchronized import SynchronizedCache

logger = logging.getLogger("slotcache.config")

DEFAULT_CAPACITY = 1000

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean (true/false), got {raw!r}")


def get_config() -> Dict[str, Any]:
    """Get configuration from environment variables"""
    return {
        "capacity": _env_int("SLOTCACHE_CAPACITY", DEFAULT_CAPACITY),
        "thread_safe": _env_bool("SLOTCACHE_THREAD_SAFE", True),
        "log_level": os.getenv("SLOTCACHE_LOG_LEVEL", "INFO").upper(),
        "server_name": os.getenv("SLOTCACHE_SERVER_NAME", "slotcache"),
    }


def build_cache(config: Optional[Dict[str, Any]] = None):
    """Construct the observed (and optionally locked) cache described by config"""
    config = config or get_config()
    cache = ObservedCache(LRUCache(config["capacity"]))
    if config.get("thread_safe", True):
        cache = SynchronizedCache(cache)
    logger.info(
        f"Cache ready: capacity={config['capacity']} thread_safe={config.get('thread_safe', True)}"
    )
    return cache
