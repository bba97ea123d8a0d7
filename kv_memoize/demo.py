#!/usr/bin/env python3
"""
KV-Memoize Demo Entry Point

Walks through the memoizer operations against an in-memory store and
prints each result.

Usage:
    python -m kv_memoize.demo                     # Default settings
    python -m kv_memoize.demo --prefix app:       # Custom key prefix
    python -m kv_memoize.demo --ttl-ms 5000       # Custom TTL
    python -m kv_memoize.demo --debug             # Enable debug logging

Environment Variables:
    KV_MEMOIZE_PREFIX     - Default key prefix
    KV_MEMOIZE_TTL_MS     - Default TTL in milliseconds
    KV_MEMOIZE_MAX_KEYS   - In-memory store capacity
    KV_MEMOIZE_DEBUG      - Enable debug mode (true/false)
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from .config.settings import settings
from .memoize import SKIP, create
from .store.memory import MemoryStore


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="KV-Memoize: store-backed function memoization demo",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--prefix",
        type=str,
        default=settings.PREFIX,
        help="Key prefix for cache entries",
    )

    parser.add_argument(
        "--ttl-ms",
        type=int,
        default=settings.TTL_MS,
        help="Time-to-live of cache entries in milliseconds",
    )

    parser.add_argument(
        "--max-keys",
        type=int,
        default=settings.MAX_KEYS,
        help="Maximum number of keys in the in-memory store",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        default=settings.DEBUG,
        help="Enable debug logging",
    )

    return parser.parse_args(argv)


def setup_logging(debug: bool = False) -> None:
    """Configure logging based on debug flag."""
    level = logging.DEBUG if debug else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
        ]
    )


async def run_demo(store: MemoryStore, prefix: str, ttl_ms: int) -> None:
    """Exercise call/get/set/skip/raw/clear and print what happens."""
    memoize = create({"client": store, "prefix": prefix, "ttl_ms": ttl_ms})

    async def some_async_fn(number):
        print(f"some_async_fn: {number}")
        return number

    def only_small_numbers(fn, number):
        if number >= 4:
            return SKIP
        return f"{fn.__name__}:{number}"

    cached = memoize(some_async_fn, {"key": only_small_numbers})

    print(await cached(1))
    print(await cached(2))
    print(await cached(2))  # from cache
    print("---")

    print(await cached.get(3))
    await cached.set(3, "some value")
    print(await cached.get(3))  # from cache
    print("---")

    print(await cached(4))  # never cached
    print(await cached.get(4))
    print("---")

    print(await cached.raw(5))  # bypasses cache
    print(await cached.get(5))
    print("---")

    for number in (1, 2, 3, 4):
        print(await cached.clear(number))


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the demo."""
    args = parse_args(argv)

    setup_logging(debug=args.debug)
    logger = logging.getLogger(__name__)

    logger.info("Starting KV-Memoize demo")
    logger.info(f"  Prefix: {args.prefix!r}")
    logger.info(f"  TTL: {args.ttl_ms} ms")
    logger.info(f"  Max keys: {args.max_keys}")

    store = MemoryStore(max_size=args.max_keys)
    asyncio.run(run_demo(store, args.prefix, args.ttl_ms))

    logger.info(f"Demo complete, store stats: {store.get_stats()}")


if __name__ == "__main__":
    main()
