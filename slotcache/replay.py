"""
Command replay for SlotCache
Copyright 2025 Jurden Bruce

Runs a scripted sequence of cache operations against a fresh cache and
reports the final state. Scripts are JSON:

    {"capacity": 3,
     "commands": [{"op": "add", "key": "ak", "value": "av"},
                  {"op": "modify", "key": "ak", "value": "newak"},
                  {"op": "remove", "key": "ak"}]}
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

from .errors import CacheError
from .models import CacheCommand, CacheSnapshot, CacheStats
from .observed import ObservedCache

logger = logging.getLogger("slotcache.replay")


def load_script(path: Union[str, Path]) -> Tuple[int, List[CacheCommand]]:
    """Read a replay script and return (capacity, commands)"""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Replay script not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict) or "capacity" not in data:
        raise ValueError(f"Replay script must be an object with a 'capacity' field: {path}")

    commands = [CacheCommand.from_dict(item) for item in data.get("commands", [])]
    return data["capacity"], commands


def apply_command(cache, command: CacheCommand) -> Any:
    """Run one command and return its result"""
    op = command.op
    if op == "add":
        cache.add(command.key, command.value)
        return None
    if op == "get":
        return cache.get(command.key)
    if op == "tryget":
        found, value = cache.try_get(command.key)
        return {"found": found, "value": value}
    if op in ("set", "modify"):
        cache.set(command.key, command.value)
        return None
    if op == "remove":
        return cache.remove(command.key)
    if op == "contains":
        return cache.contains_key(command.key)
    if op == "clear":
        cache.clear()
        return None
    raise ValueError(f"Unknown cache command: {op!r}")


def replay(capacity: int, commands: List[CacheCommand]) -> Tuple[CacheSnapshot, List[Dict[str, Any]], CacheStats]:
    """Replay commands on a new cache.

    A failing step is recorded with its error and the replay continues.

    Returns:
        (final snapshot, per-step results, usage statistics)
    """
    cache = ObservedCache(capacity=capacity)
    results = []

    for step, command in enumerate(commands):
        entry = {"step": step, "op": command.op, "key": command.key}
        try:
            entry["result"] = apply_command(cache, command)
            entry["success"] = True
        except (CacheError, TypeError) as e:
            logger.debug(f"Step {step} ({command.op} {command.key!r}) failed: {e}")
            entry["success"] = False
            entry["error"] = str(e)
        results.append(entry)

    snapshot = CacheSnapshot(
        capacity=cache.capacity,
        count=cache.count,
        keys=[key for key, _ in cache.snapshot()],
        taken_at=datetime.now(),
    )
    return snapshot, results, cache.get_stats()
