"""
Memoizer Module

This module implements the cache-or-compute protocol on top of a
key-value store client.

Usage:
    memoize = create({"client": MemoryStore(), "prefix": "cache:", "ttl_ms": 60_000})

    async def lookup(user_id):
        ...

    cached_lookup = memoize(lookup, {"key": lambda fn, user_id: f"{fn.__name__}:{user_id}"})
    await cached_lookup(42)          # computes and stores
    await cached_lookup(42)          # served from the store
    await cached_lookup.clear(42)    # drops the stored value

Concurrent misses for the same key are not coalesced: each caller
computes and writes, and the last write wins.
"""

import copy
import functools
import logging
from typing import Any, Callable, Dict, Tuple

from .errors import ArgumentCountError, ConfigurationError, KeyContractError
from .hooks import maybe_await
from .markers import MISSING, SKIP
from .options import NOT_GIVEN, MemoizeOptions, ResolvedOptions, resolve_options

logger = logging.getLogger(__name__)


class MemoizedFunction:
    """
    A function wrapped with store-backed caching.

    Awaiting the instance runs the cache-or-compute protocol. The ``raw``,
    ``get``, ``set`` and ``clear`` methods give direct access to the
    function and its cache entries; all of them derive keys the same way.

    Stored as a class attribute, the handle binds like a method: accessed
    through an instance, every operation receives that instance as its
    first argument, and so does the key function (after the wrapped function).

    Attributes:
        options: The ResolvedOptions captured at wrap time
    """

    def __init__(self, fn: Callable, options: ResolvedOptions):
        functools.update_wrapper(self, fn)
        self._fn = fn
        self._bound_args: Tuple = ()
        self.options = options

    def __get__(self, instance: Any, owner: Any = None) -> "MemoizedFunction":
        if instance is None:
            return self
        bound = copy.copy(self)
        bound._bound_args = (instance,)
        return bound

    def __repr__(self) -> str:
        name = getattr(self._fn, '__qualname__', self._fn)
        if self._bound_args:
            return f"<bound MemoizedFunction {name!r} of {self._bound_args[0]!r}>"
        return f"<MemoizedFunction {name!r}>"

    async def _derive_key(self, args: Tuple, kwargs: Dict[str, Any]) -> Any:
        """
        Compute the cache key for a call, or SKIP.

        A key function receives the wrapped function first, then the
        call arguments (including any bound instance).

        Raises:
            KeyContractError: If the key function returns anything other
                than a string or SKIP
        """
        rule = self.options.key
        if isinstance(rule, str):
            return self.options.prefix + rule

        key = await maybe_await(rule(self._fn, *args, **kwargs))
        if key is SKIP:
            return SKIP
        if not isinstance(key, str):
            raise KeyContractError(f"`key` function must return a string or SKIP, got {type(key).__name__}")
        return self.options.prefix + key

    async def __call__(self, *args: Any, **kwargs: Any) -> Any:
        args = self._bound_args + args
        key = await self._derive_key(args, kwargs)

        if key is SKIP:
            logger.debug(f"Skipping cache for {self!r}")
            return await maybe_await(self._fn(*args, **kwargs))

        result = await maybe_await(self.options.get(self.options.client, key))
        if result is not MISSING:
            logger.debug(f"Cache hit: {key}")
            return result

        logger.debug(f"Cache miss: {key}")
        result = await maybe_await(self._fn(*args, **kwargs))

        await maybe_await(self.options.set(self.options.client, key, result, self.options.ttl_ms))

        return result

    async def raw(self, *args: Any, **kwargs: Any) -> Any:
        """Call the wrapped function without touching the cache."""
        return await maybe_await(self._fn(*self._bound_args, *args, **kwargs))

    async def get(self, *args: Any, **kwargs: Any) -> Any:
        """
        Read the cached value for the given arguments.

        Returns:
            The cached value, or MISSING if nothing is cached or the key
            function returned SKIP
        """
        key = await self._derive_key(self._bound_args + args, kwargs)
        if key is SKIP:
            return MISSING

        return await maybe_await(self.options.get(self.options.client, key))

    async def set(self, *args_and_value: Any, **kwargs: Any) -> Any:
        """
        Store a value for the given arguments.

        The last positional argument is the value; the remaining arguments
        select the key.

        Returns:
            The write hook's result, or MISSING if nothing was written

        Raises:
            ArgumentCountError: If called without any positional argument
        """
        if not args_and_value:
            raise ArgumentCountError("set requires at least one argument (value)")

        value = args_and_value[-1]
        key = await self._derive_key(self._bound_args + args_and_value[:-1], kwargs)

        if key is SKIP or value is MISSING:
            return MISSING

        return await maybe_await(self.options.set(self.options.client, key, value, self.options.ttl_ms))

    async def clear(self, *args: Any, **kwargs: Any) -> Any:
        """
        Delete the cached value for the given arguments.

        Returns:
            The client's delete result (number of keys removed), or MISSING
            if the key function returned SKIP
        """
        key = await self._derive_key(self._bound_args + args, kwargs)
        if key is SKIP:
            return MISSING

        logger.debug(f"Clearing cache entry: {key}")
        return await maybe_await(self.options.client.delete(key))


def create(options: Any = NOT_GIVEN) -> Callable[..., MemoizedFunction]:
    """
    Create a memoizer with global default options.

    Args:
        options: A mapping with any of ``client``, ``prefix``,
            ``key``, ``ttl_ms``, ``get``, ``set``, or a MemoizeOptions

    Returns:
        ``memoize(fn, fn_options=None)``, which wraps fn into a
        MemoizedFunction. ``fn_options`` takes the same shapes as
        ``options`` and overrides them field by field; a bare number is
        shorthand for ``{"ttl_ms": number}``.

    Raises:
        ConfigurationError: If options is given but is not a mapping
            (None included)

    Note: client and ttl_ms are only required once a function is wrapped,
    so they may be left to the per-function options.
    """
    defaults = MemoizeOptions() if options is NOT_GIVEN else MemoizeOptions.coerce(options)

    def memoize(fn: Callable, fn_options: Any = None) -> MemoizedFunction:
        if not callable(fn):
            raise ConfigurationError("`fn` must be callable")

        merged = defaults.merge(MemoizeOptions.coerce_for_function(fn_options))
        return MemoizedFunction(fn, resolve_options(merged, fn))

    return memoize
