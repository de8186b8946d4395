"""
MCP Tool Definitions and Handlers for SlotCache
Copyright 2025 Jurden Bruce

All tool responses return JSON for AI consumption, not human-formatted text.
"""

import json
import logging
import traceback
from datetime import datetime
from typing import List, Dict, Any

from mcp.types import Tool, TextContent

from .errors import CacheError


class DateTimeEncoder(json.JSONEncoder):
    """JSON encoder that handles datetime objects"""
    def default(self, obj):
        if isinstance(obj, datetime):
            return obj.isoformat()
        return super().default(obj)


logger = logging.getLogger("slotcache.mcp-tools")

_KEY_SCHEMA = {"type": "string", "description": "Cache key"}
_VALUE_SCHEMA = {"description": "Any JSON value to cache"}


def get_tool_definitions() -> List[Tool]:
    """Return list of available MCP tools"""
    return [
        Tool(
            name="cache_add",
            description="Insert a new key. Fails if the key is already cached (use cache_set to overwrite). Evicts the least recently used entry when the cache is full.",
            inputSchema={
                "type": "object",
                "properties": {"key": _KEY_SCHEMA, "value": _VALUE_SCHEMA},
                "required": ["key", "value"],
            },
        ),
        Tool(
            name="cache_get",
            description="Read a cached value and mark the key most recently used. Fails if the key is absent.",
            inputSchema={
                "type": "object",
                "properties": {"key": _KEY_SCHEMA},
                "required": ["key"],
            },
        ),
        Tool(
            name="cache_try_get",
            description="Read a cached value without failing on a miss. Returns found=false when absent.",
            inputSchema={
                "type": "object",
                "properties": {"key": _KEY_SCHEMA},
                "required": ["key"],
            },
        ),
        Tool(
            name="cache_set",
            description="Insert or overwrite a key (upsert). The key becomes most recently used.",
            inputSchema={
                "type": "object",
                "properties": {"key": _KEY_SCHEMA, "value": _VALUE_SCHEMA},
                "required": ["key", "value"],
            },
        ),
        Tool(
            name="cache_remove",
            description="Remove a key. Returns removed=false if it was not cached.",
            inputSchema={
                "type": "object",
                "properties": {"key": _KEY_SCHEMA},
                "required": ["key"],
            },
        ),
        Tool(
            name="cache_contains",
            description="Check whether a key is cached without changing eviction order.",
            inputSchema={
                "type": "object",
                "properties": {"key": _KEY_SCHEMA},
                "required": ["key"],
            },
        ),
        Tool(
            name="cache_clear",
            description="Remove every entry. Capacity is unchanged.",
            inputSchema={"type": "object", "properties": {}},
        ),
        Tool(
            name="cache_stats",
            description="Get cache statistics (capacity, count, hits, misses, evictions, hit rate) and the keys in eviction order.",
            inputSchema={
                "type": "object",
                "properties": {
                    "include_keys": {"type": "boolean", "description": "Include keys ordered least to most recently used", "default": False},
                },
            },
        ),
    ]


def _json_response(payload: Dict[str, Any]) -> List[TextContent]:
    return [TextContent(type="text", text=json.dumps(payload, cls=DateTimeEncoder))]


async def handle_tool_call(name: str, arguments: Dict[str, Any], cache) -> List[TextContent]:
    """
    Handle MCP tool calls with JSON responses

    Args:
        name: Tool name
        arguments: Tool arguments
        cache: cache instance (LRUCache or one of its wrappers)

    Returns:
        List of TextContent with JSON-encoded responses
    """
    arguments = arguments or {}
    try:
        if name == "cache_add":
            cache.add(arguments["key"], arguments["value"])
            logger.debug(f"Added {arguments['key']!r}")
            return _json_response({"success": True, "key": arguments["key"], "count": cache.count})

        elif name == "cache_get":
            value = cache.get(arguments["key"])
            return _json_response({"success": True, "key": arguments["key"], "value": value})

        elif name == "cache_try_get":
            found, value = cache.try_get(arguments["key"])
            return _json_response({"success": True, "key": arguments["key"], "found": found, "value": value})

        elif name == "cache_set":
            cache.set(arguments["key"], arguments["value"])
            return _json_response({"success": True, "key": arguments["key"], "count": cache.count})

        elif name == "cache_remove":
            removed = cache.remove(arguments["key"])
            return _json_response({"success": True, "key": arguments["key"], "removed": removed, "count": cache.count})

        elif name == "cache_contains":
            return _json_response({"success": True, "key": arguments["key"], "contains": cache.contains_key(arguments["key"])})

        elif name == "cache_clear":
            cache.clear()
            logger.info("Cache cleared")
            return _json_response({"success": True, "count": 0, "capacity": cache.capacity})

        elif name == "cache_stats":
            if hasattr(cache, "get_stats"):
                result = cache.get_stats().to_dict()
            else:
                result = {"capacity": cache.capacity, "count": cache.count}
            if arguments.get("include_keys", False):
                result["keys"] = [key for key, _ in cache.snapshot()]
            result["success"] = True
            return _json_response(result)

        else:
            return _json_response({"success": False, "error": f"Unknown tool: {name}"})

    except CacheError as e:
        logger.info(f"{name} rejected: {e}")
        return _json_response({"success": False, "error": str(e), "error_type": type(e).__name__})
    except KeyError as e:
        return _json_response({"success": False, "error": f"Missing required argument: {e.args[0]}"})
    except Exception as e:
        logger.error(f"Error executing {name}: {e}")
        logger.error(traceback.format_exc())
        return _json_response({"success": False, "error": f"Error executing {name}: {str(e)}"})
