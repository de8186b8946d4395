"""
MCP Tool Tests for SlotCache
Copyright 2025 Jurden Bruce

Drives the tool handler directly; no MCP transport is started.
"""

import asyncio
import json

import pytest

from slotcache.config import build_cache
from slotcache.mcp_tools import get_tool_definitions, handle_tool_call


@pytest.fixture
def cache():
    return build_cache({"capacity": 2, "thread_safe": True})


def call(cache, name, **arguments):
    result = asyncio.run(handle_tool_call(name, arguments, cache))
    assert len(result) == 1
    assert result[0].type == "text"
    return json.loads(result[0].text)


def test_tool_definitions():
    names = [tool.name for tool in get_tool_definitions()]
    assert names == [
        "cache_add",
        "cache_get",
        "cache_try_get",
        "cache_set",
        "cache_remove",
        "cache_contains",
        "cache_clear",
        "cache_stats",
    ]
    for tool in get_tool_definitions():
        assert tool.description


def test_add_get_round_trip(cache):
    assert call(cache, "cache_add", key="pi", value=3.14) == {"success": True, "key": "pi", "count": 1}
    assert call(cache, "cache_get", key="pi")["value"] == 3.14


def test_structured_values(cache):
    call(cache, "cache_set", key="doc", value={"tags": ["a", "b"], "n": 1})
    assert call(cache, "cache_get", key="doc")["value"] == {"tags": ["a", "b"], "n": 1}


def test_duplicate_add_reports_error(cache):
    call(cache, "cache_add", key="a", value=1)
    result = call(cache, "cache_add", key="a", value=2)
    assert result["success"] is False
    assert result["error_type"] == "DuplicateKeyError"
    assert call(cache, "cache_get", key="a")["value"] == 1


def test_get_missing_reports_error(cache):
    result = call(cache, "cache_get", key="nope")
    assert result["success"] is False
    assert result["error_type"] == "KeyNotFoundError"


def test_try_get(cache):
    assert call(cache, "cache_try_get", key="x") == {"success": True, "key": "x", "found": False, "value": None}
    call(cache, "cache_set", key="x", value="y")
    assert call(cache, "cache_try_get", key="x")["found"] is True


def test_eviction_and_stats(cache):
    call(cache, "cache_add", key="a", value=1)
    call(cache, "cache_add", key="b", value=2)
    call(cache, "cache_get", key="a")
    call(cache, "cache_add", key="c", value=3)

    assert call(cache, "cache_contains", key="b")["contains"] is False
    stats = call(cache, "cache_stats", include_keys=True)
    assert stats["success"] is True
    assert stats["capacity"] == 2
    assert stats["count"] == 2
    assert stats["evictions"] == 1
    assert stats["keys"] == ["a", "c"]
    assert isinstance(stats["last_eviction"], str)


def test_remove_and_clear(cache):
    call(cache, "cache_add", key="a", value=1)
    assert call(cache, "cache_remove", key="a")["removed"] is True
    assert call(cache, "cache_remove", key="a")["removed"] is False
    call(cache, "cache_add", key="b", value=1)
    assert call(cache, "cache_clear") == {"success": True, "count": 0, "capacity": 2}
    assert call(cache, "cache_stats")["count"] == 0


def test_missing_argument(cache):
    result = call(cache, "cache_add", key="a")
    assert result["success"] is False
    assert "value" in result["error"]


def test_unknown_tool(cache):
    result = call(cache, "cache_explode")
    assert result == {"success": False, "error": "Unknown tool: cache_explode"}


def test_stats_on_plain_engine():
    from slotcache import LRUCache

    plain = LRUCache(3)
    plain.add("k", "v")
    stats = call(plain, "cache_stats", include_keys=True)
    assert stats == {"capacity": 3, "count": 1, "keys": ["k"], "success": True}
