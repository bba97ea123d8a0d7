"""
Default Read/Write Hooks

The default hooks store values as JSON text with a millisecond expiry.
Both degrade store failures instead of raising: a failed read behaves like
a cache miss and a failed write is dropped, so an unavailable store never
breaks the wrapped function. Custom hooks get no such protection.
"""

import inspect
import json
import logging
import math
from typing import Any

from .markers import MISSING
from .types import StoreClient

logger = logging.getLogger(__name__)


async def maybe_await(value: Any) -> Any:
    """Await value if it is awaitable, otherwise return it unchanged."""
    if inspect.isawaitable(value):
        return await value
    return value


async def default_get(client: StoreClient, key: str) -> Any:
    """
    Read and decode the JSON value stored under key.

    Args:
        client: Store client exposing ``get(key)``
        key: Fully-qualified cache key

    Returns:
        The decoded value, or MISSING when the key is absent, the stored
        text is not valid JSON, or the client raised
    """
    try:
        text = await maybe_await(client.get(key))
    except Exception as exc:
        logger.debug(f"Cache read failed for {key}: {exc!r}")
        return MISSING

    if text is None:
        return MISSING

    try:
        return json.loads(text)
    except (TypeError, ValueError, RecursionError):
        logger.debug(f"Ignoring undecodable cache entry for {key}")
        return MISSING


async def default_set(client: StoreClient, key: str, value: Any, ttl_ms: float) -> None:
    """
    Encode value as JSON and store it under key with a millisecond expiry.

    MISSING is never written. Serialization and client errors are logged
    and dropped.

    Args:
        client: Store client exposing ``set(key, value, px=...)``
        key: Fully-qualified cache key
        value: Value to cache
        ttl_ms: Time-to-live in milliseconds (rounded up to a whole number)
    """
    if value is MISSING:
        return

    try:
        text = json.dumps(value)
        await maybe_await(client.set(key, text, px=math.ceil(ttl_ms)))
    except Exception as exc:
        logger.debug(f"Cache write failed for {key}: {exc!r}")
