"""Structural types for store clients, key rules and hooks."""

from typing import Any, Awaitable, Callable, Optional, Protocol, Union, runtime_checkable

from .markers import Marker


@runtime_checkable
class StoreClient(Protocol):
    """
    Protocol for the backing key-value store (e.g. ``redis.asyncio.Redis``).

    Each method may be a coroutine function or a plain function.
    """

    def get(self, key: str) -> Union[Optional[Union[str, bytes]], Awaitable[Optional[Union[str, bytes]]]]:
        ...

    def set(self, key: str, value: str, *, px: Optional[int] = None) -> Any:
        ...

    def delete(self, *keys: str) -> Union[int, Awaitable[int]]:
        ...


KeyResult = Union[str, Marker]

# key(fn, *args, **kwargs) -> str | SKIP, optionally awaitable
KeyFunction = Callable[..., Union[KeyResult, Awaitable[KeyResult]]]
KeyRule = Union[str, KeyFunction]

# get(client, key) -> value | MISSING
ReadHook = Callable[[StoreClient, str], Any]

# set(client, key, value, ttl_ms) -> anything
WriteHook = Callable[[StoreClient, str, Any, float], Any]
