#!/usr/bin/env python3
"""
MCP Server for SlotCache
Copyright 2025 Jurden Bruce

Serves one process-wide LRU cache to MCP clients over stdio.
"""

import sys
import asyncio
import logging
import traceback

from mcp.server.models import InitializationOptions
from mcp.server import NotificationOptions, Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from . import __version__
from .config import get_config, build_cache
from .mcp_tools import get_tool_definitions, handle_tool_call

logger = logging.getLogger("slotcache")

cache = None
app = Server("slotcache")


@app.list_tools()
async def handle_list_tools() -> list[Tool]:
    return get_tool_definitions()


@app.call_tool()
async def handle_call_tool(name: str, arguments: dict) -> list[TextContent]:
    logger.debug(f"Tool call: {name} {arguments}")
    return await handle_tool_call(name, arguments, cache)


async def main():
    """Main entry point"""
    global cache

    config = get_config()
    logging.basicConfig(
        level=getattr(logging, config["log_level"], logging.INFO),
        stream=sys.stderr,
        format="%(asctime)s [%(levelname)s] [%(name)s] %(message)s",
    )

    try:
        logger.info(f"Initializing cache with capacity {config['capacity']}")
        cache = build_cache(config)

        logger.info("Starting MCP server...")
        async with stdio_server() as (read_stream, write_stream):
            await app.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name=config["server_name"],
                    server_version=__version__,
                    capabilities=app.get_capabilities(
                        notification_options=NotificationOptions(),
                        experimental_capabilities={},
                    ),
                ),
            )
    except KeyboardInterrupt:
        logger.info("Received interrupt signal")
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        logger.error(traceback.format_exc())
        sys.exit(1)


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
