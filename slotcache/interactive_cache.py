#!/usr/bin/env python3
"""
Interactive Cache CLI for SlotCache
Provides direct CLI access to cache operations.

Usage:
    slotcache replay script.json
    slotcache replay script.json --json --pretty
    slotcache shell --capacity 3
"""

import sys
import json
import shlex
import logging
import argparse
from typing import Any, List, Optional, TextIO

from .config import get_config
from .errors import CacheError
from .observed import ObservedCache
from .replay import load_script, replay

logger = logging.getLogger("slotcache.cli")

SHELL_HELP = """Commands:
  add KEY VALUE      insert a new key (fails if present)
  get KEY            read a value (fails if absent)
  tryget KEY         read a value, reporting misses
  set KEY VALUE      insert or overwrite a key
  remove KEY         remove a key
  contains KEY       membership test (does not change eviction order)
  clear              remove everything
  count              number of entries
  keys               keys, least to most recently used
  stats              usage statistics
  help               this text
  quit               leave the shell"""


def _parse_value(raw: str) -> Any:
    """Interpret shell values as JSON where possible, otherwise as text"""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


class CacheCLI:
    """Line-oriented shell over an observed cache"""

    def __init__(self, capacity: int):
        self.cache = ObservedCache(capacity=capacity)

    def execute_line(self, line: str) -> Optional[str]:
        """Run one shell line. Returns the output text, or None to quit."""
        try:
            parts = shlex.split(line)
        except ValueError as e:
            return f"ERROR {e}"
        if not parts:
            return ""

        command, args = parts[0].lower(), parts[1:]
        if command in ("quit", "exit"):
            return None
        if command == "help":
            return SHELL_HELP

        try:
            return self._dispatch(command, args)
        except CacheError as e:
            return f"ERROR {e}"
        except TypeError as e:
            return f"ERROR {e}"

    def _dispatch(self, command: str, args: List[str]) -> str:
        arity = {"add": 2, "set": 2, "get": 1, "tryget": 1, "remove": 1, "contains": 1}
        if command in arity and len(args) != arity[command]:
            return f"ERROR {command} takes {arity[command]} argument(s)"

        if command == "add":
            self.cache.add(args[0], _parse_value(args[1]))
            return f"ADDED key={args[0]} count={self.cache.count}"
        if command == "set":
            self.cache.set(args[0], _parse_value(args[1]))
            return f"SET key={args[0]} count={self.cache.count}"
        if command == "get":
            return f"VALUE key={args[0]} value={json.dumps(self.cache.get(args[0]), default=str)}"
        if command == "tryget":
            found, value = self.cache.try_get(args[0])
            if not found:
                return f"MISS key={args[0]}"
            return f"VALUE key={args[0]} value={json.dumps(value, default=str)}"
        if command == "remove":
            return f"REMOVED key={args[0]} removed={self.cache.remove(args[0])} count={self.cache.count}"
        if command == "contains":
            return f"CONTAINS key={args[0]} contains={self.cache.contains_key(args[0])}"
        if command == "clear":
            self.cache.clear()
            return "CLEARED count=0"
        if command == "count":
            return f"COUNT count={self.cache.count} capacity={self.cache.capacity}"
        if command == "keys":
            return "KEYS " + " ".join(json.dumps(key) for key, _ in self.cache.snapshot())
        if command == "stats":
            stats = self.cache.get_stats()
            return (f"STATS capacity={stats.capacity} count={stats.count} hits={stats.hits} "
                    f"misses={stats.misses} evictions={stats.evictions} hit_rate={stats.hit_rate:.2f}")
        return f"ERROR unknown command: {command} (try 'help')"

    def run(self, stream: TextIO = None, out: TextIO = None, prompt: str = "slotcache> "):
        stream = stream or sys.stdin
        out = out or sys.stdout
        interactive = stream.isatty()
        while True:
            if interactive:
                out.write(prompt)
                out.flush()
            line = stream.readline()
            if not line:
                break
            result = self.execute_line(line)
            if result is None:
                break
            if result:
                out.write(result + "\n")


def format_compact_replay(snapshot, results, stats) -> str:
    """AI-optimized compact output for a replay"""
    lines = [f"REPLAY capacity={snapshot.capacity} count={snapshot.count} steps={len(results)}"]
    for entry in results:
        if not entry["success"]:
            lines.append(f"FAILED step={entry['step']} op={entry['op']} key={entry['key']!r} error={entry['error']}")
    lines.append("KEYS " + " ".join(json.dumps(key) for key in snapshot.keys))
    lines.append(f"STATS hits={stats.hits} misses={stats.misses} evictions={stats.evictions}")
    return "\n".join(lines)


def _add_output_flags(parser: argparse.ArgumentParser, default=False):
    parser.add_argument("--json", action="store_true", default=default, help="Output as JSON")
    parser.add_argument("--pretty", action="store_true", default=default, help="Pretty print JSON output")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="slotcache",
        description="Interactive Cache CLI for SlotCache",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Replay a scripted sequence of operations:
    slotcache replay examples.json

  Replay with JSON output:
    slotcache replay examples.json --json --pretty

  Open a shell on a cache of 3 entries:
    slotcache shell --capacity 3
        """
    )
    _add_output_flags(parser)
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    replay_parser = subparsers.add_parser("replay", help="Replay a JSON script of cache commands")
    replay_parser.add_argument("script", help="Path to the replay script")
    # Accepted after the subcommand too; SUPPRESS keeps a top-level --json from being reset
    _add_output_flags(replay_parser, default=argparse.SUPPRESS)

    shell_parser = subparsers.add_parser("shell", help="Interactive cache shell")
    shell_parser.add_argument("--capacity", type=int, help="Cache capacity (overrides SLOTCACHE_CAPACITY env var)")

    return parser


def main(argv: List[str] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(asctime)s [%(levelname)s] [%(name)s] %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 1

    try:
        if args.command == "replay":
            capacity, commands = load_script(args.script)
            logger.debug(f"Replaying {len(commands)} commands with capacity {capacity}")
            snapshot, results, stats = replay(capacity, commands)
            if args.json:
                result = {
                    "snapshot": snapshot.to_dict(),
                    "results": results,
                    "stats": stats.to_dict(),
                }
                print(json.dumps(result, indent=2 if args.pretty else None, default=str))
            else:
                print(format_compact_replay(snapshot, results, stats))

        elif args.command == "shell":
            capacity = args.capacity if args.capacity is not None else get_config()["capacity"]
            CacheCLI(capacity).run()

    except (CacheError, TypeError, ValueError, OSError) as e:
        if args.json:
            print(json.dumps({"success": False, "error": str(e)}))
        else:
            print(f"ERROR {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
