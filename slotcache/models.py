"""
Data models for SlotCache
Copyright 2025 Jurden Bruce
"""

from dataclasses import dataclass, asdict, field
from datetime import datetime
from typing import Any, List, Dict, Optional

VALID_OPS = ("add", "get", "tryget", "set", "modify", "remove", "contains", "clear")


@dataclass
class EvictionEvent:
    """An entry pushed out of a full cache to make room for a new key"""
    key: Any
    value: Any
    evicted_at: datetime
    incoming_key: Any = None

    def __post_init__(self):
        if isinstance(self.evicted_at, str):
            self.evicted_at = datetime.fromisoformat(self.evicted_at)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "value": self.value,
            "evicted_at": self.evicted_at.isoformat(),
            "incoming_key": self.incoming_key,
        }


@dataclass
class CacheStats:
    capacity: int
    count: int = 0
    hits: int = 0
    misses: int = 0
    insertions: int = 0
    updates: int = 0
    removals: int = 0
    evictions: int = 0
    last_eviction: Optional[datetime] = None

    @property
    def hit_rate(self) -> float:
        """Fraction of reads that found their key (0.0 when nothing was read)"""
        lookups = self.hits + self.misses
        if lookups == 0:
            return 0.0
        return self.hits / lookups

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["hit_rate"] = round(self.hit_rate, 4)
        if self.last_eviction:
            data["last_eviction"] = self.last_eviction.isoformat()
        return data


@dataclass
class CacheCommand:
    """One step of a replay script"""
    op: str  # add | get | tryget | set | modify | remove | contains | clear
    key: Any = None
    value: Any = None

    def __post_init__(self):
        if not isinstance(self.op, str):
            raise ValueError(f"Cache command op must be a string, got {self.op!r}")
        self.op = self.op.strip().lower()
        if self.op == "remove key":
            self.op = "remove"
        if self.op not in VALID_OPS:
            raise ValueError(f"Unknown cache command: {self.op!r} (expected one of {', '.join(VALID_OPS)})")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CacheCommand":
        if "op" not in data:
            raise ValueError(f"Cache command is missing 'op': {data}")
        return cls(op=data["op"], key=data.get("key"), value=data.get("value"))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class CacheSnapshot:
    """Point-in-time view of a cache, keys ordered least to most recently used"""
    capacity: int
    count: int
    keys: List[Any] = field(default_factory=list)
    taken_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "capacity": self.capacity,
            "count": self.count,
            "keys": list(self.keys),
            "taken_at": self.taken_at.isoformat(),
        }
