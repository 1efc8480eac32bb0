"""
structcache command line interface.

Examples:
    python -m structcache set greeting hello --ttl 60
    python -m structcache hset user:1 name '"Prinny"' --ttl 3600
    python -m structcache lset events '{"type": "login"}' --ttl 3600 --push
    python -m structcache lget events --start 0 --end 9
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from structcache import utils
from structcache.cache import (
    CacheError,
    HashDelOptions,
    ListDelOptions,
    ListGetOptions,
    ListSetOptions,
    MemcachedConfig,
    MemcachedWrapper,
)
from structcache.config import ConfigManager
from structcache.logging_utils import initLogging

logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging.WARNING)
logger = logging.getLogger(__name__)


def parseValue(text: str) -> Any:
    """Parse command line value as JSON, fall back to plain string."""
    try:
        return json.loads(text)
    except ValueError:
        return text


def parseArguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(prog="structcache", description="Memcached client with hashes and lists")
    parser.add_argument("--config", default="config.toml", help="Path to TOML config file (default: config.toml)")
    parser.add_argument(
        "--config-dir",
        dest="configDirs",
        action="append",
        default=[],
        help="Directory with additional *.toml files, may be repeated",
    )
    parser.add_argument("--dotenv", default=".env", help="Path to .env file (default: .env)")

    commands = parser.add_subparsers(dest="command", required=True)

    cmd = commands.add_parser("get", help="Get plain value")
    cmd.add_argument("key")

    cmd = commands.add_parser("set", help="Set plain value")
    cmd.add_argument("key")
    cmd.add_argument("value")
    cmd.add_argument("--ttl", type=float, required=True)

    cmd = commands.add_parser("del", help="Delete key")
    cmd.add_argument("key")

    cmd = commands.add_parser("hget", help="Get hash or hash field")
    cmd.add_argument("key")
    cmd.add_argument("field", nargs="?")

    cmd = commands.add_parser("hset", help="Set hash field (value is JSON)")
    cmd.add_argument("key")
    cmd.add_argument("field")
    cmd.add_argument("value")
    cmd.add_argument("--ttl", type=float, required=True)

    cmd = commands.add_parser("hdel", help="Delete hash field or whole hash")
    cmd.add_argument("key")
    cmd.add_argument("field", nargs="?")
    cmd.add_argument("--ttl", type=float)

    cmd = commands.add_parser("lget", help="Get list, element or inclusive slice")
    cmd.add_argument("key")
    cmd.add_argument("--index", type=int)
    cmd.add_argument("--start", type=int)
    cmd.add_argument("--end", type=int)

    cmd = commands.add_parser("lset", help="Prepend, append or overwrite list element (value is JSON)")
    cmd.add_argument("key")
    cmd.add_argument("value")
    cmd.add_argument("--ttl", type=float, required=True)
    cmd.add_argument("--index", type=int)
    cmd.add_argument("--push", action="store_true", help="Append instead of prepend")

    cmd = commands.add_parser("ldel", help="Delete list elements or whole list")
    cmd.add_argument("key")
    cmd.add_argument("--ttl", type=float, default=None)
    cmd.add_argument("--index", type=int)
    cmd.add_argument("--start", type=int)
    cmd.add_argument("--end", type=int)
    cmd.add_argument("--clear", action="store_true", help="Remove all elements but keep the key")

    return parser.parse_args(argv)


async def runCommand(cache: MemcachedWrapper, args: argparse.Namespace) -> Any:
    """Execute single command against the cache and return its result."""
    match args.command:
        case "get":
            return await cache.get(args.key)
        case "set":
            return await cache.set(args.key, args.value, args.ttl)
        case "del":
            return await cache.delete(args.key)
        case "hget":
            return await cache.hashGet(args.key, args.field)
        case "hset":
            await cache.hashSet(args.key, args.field, parseValue(args.value), args.ttl)
            return None
        case "hdel":
            return await cache.hashDel(args.key, args.field, HashDelOptions(ttl=args.ttl))
        case "lget":
            return await cache.listGet(args.key, ListGetOptions(index=args.index, start=args.start, end=args.end))
        case "lset":
            options = ListSetOptions(index=args.index, push=args.push)
            await cache.listSet(args.key, parseValue(args.value), args.ttl, options)
            return None
        case "ldel":
            # Nothing set means deleting the whole key
            delOptions = ListDelOptions(index=args.index, start=args.start, end=args.end, clear=args.clear)
            return await cache.listDel(args.key, args.ttl, delOptions)
        case _:
            raise ValueError(f"Unknown command: {args.command}")


async def execute(memcachedConfig: MemcachedConfig, args: argparse.Namespace) -> Any:
    async with MemcachedWrapper.fromConfig(memcachedConfig) as cache:
        return await runCommand(cache, args)


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point, returns process exit code."""
    args = parseArguments(argv)

    memcachedConfig: MemcachedConfig = {}
    try:
        if Path(args.config).is_file() or args.configDirs:
            configManager = ConfigManager(args.config, args.configDirs, args.dotenv)
            initLogging(configManager.getLoggingConfig())
            memcachedConfig = configManager.getMemcachedConfig()
        else:
            logger.warning(f"Config file {args.config} not found, using defaults")

        result = asyncio.run(execute(memcachedConfig, args))
    except CacheError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1

    print(utils.jsonDumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
