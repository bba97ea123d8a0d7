"""
Memoizer Options

This module defines the option containers and the wrap-time resolution
step. Options given to ``create()`` act as global defaults; options given
per function override them field by field. Resolution validates the merged
result and fills in defaults, producing an immutable ResolvedOptions that
the memoized function captures for its whole lifetime.

A field that was never given is NOT_GIVEN and is inherited when merging.
An explicit None does override: it falls back to the default for prefix,
key and hooks, and fails validation for client and ttl_ms.
"""

import math
from dataclasses import dataclass, fields, replace
from typing import Any, Callable, Mapping, Optional

from .errors import ConfigurationError, MissingClientError
from .hooks import default_get, default_set
from .types import KeyRule, ReadHook, StoreClient, WriteHook

CLIENT_METHODS = ("get", "set", "delete")


class _NotGiven:
    """Type of the NOT_GIVEN placeholder for options that were left out."""

    def __repr__(self) -> str:
        return "NOT_GIVEN"


NOT_GIVEN: Any = _NotGiven()


def _or_default(value: Any, default: Any) -> Any:
    return default if value is NOT_GIVEN or value is None else value


@dataclass(frozen=True)
class MemoizeOptions:
    """
    Unresolved memoizer options.

    Attributes:
        client: Store client exposing get/set/delete
        prefix: String prepended to every derived key
        key: Fixed key string, or ``key(fn, *args, **kwargs)`` returning
            a string or SKIP
        ttl_ms: Time-to-live in milliseconds
        get: Read hook ``get(client, key)``
        set: Write hook ``set(client, key, value, ttl_ms)``
    """
    client: Optional[StoreClient] = NOT_GIVEN
    prefix: Optional[str] = NOT_GIVEN
    key: Optional[KeyRule] = NOT_GIVEN
    ttl_ms: Optional[float] = NOT_GIVEN
    get: Optional[ReadHook] = NOT_GIVEN
    set: Optional[WriteHook] = NOT_GIVEN

    @classmethod
    def coerce(cls, value: Any) -> "MemoizeOptions":
        """
        Build options from a mapping of option names, or an instance.

        Raises:
            ConfigurationError: If value has another type (None included)
                or names an unknown option
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, Mapping):
            raise ConfigurationError("`options` must be a mapping")

        unknown = [name for name in value if name not in OPTION_NAMES]
        if unknown:
            raise ConfigurationError(f"unknown memoize options: {', '.join(map(repr, unknown))}")
        return cls(**value)

    @classmethod
    def coerce_for_function(cls, value: Any) -> "MemoizeOptions":
        """Like coerce(), but None means no overrides and anything else is a ttl."""
        if value is None:
            return cls()
        if isinstance(value, (cls, Mapping)):
            return cls.coerce(value)
        return cls(ttl_ms=value)

    def merge(self, overrides: "MemoizeOptions") -> "MemoizeOptions":
        """Return a copy with every field given in overrides replaced."""
        changes = {
            f.name: getattr(overrides, f.name)
            for f in fields(overrides)
            if getattr(overrides, f.name) is not NOT_GIVEN
        }
        return replace(self, **changes)


OPTION_NAMES = frozenset(f.name for f in fields(MemoizeOptions))


@dataclass(frozen=True)
class ResolvedOptions:
    """Validated options with every default filled in."""
    client: StoreClient
    prefix: str
    key: KeyRule
    ttl_ms: float
    get: ReadHook
    set: WriteHook


def _is_positive_ttl(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


def resolve_options(options: MemoizeOptions, fn: Callable) -> ResolvedOptions:
    """
    Validate merged options for fn and apply defaults.

    Defaults: prefix ``""``, key ``fn.__name__``, default_get/default_set
    hooks. ``client`` and ``ttl_ms`` have no default.

    Raises:
        MissingClientError: If client lacks callable get/set/delete
        ConfigurationError: If prefix, key, ttl_ms or a hook is invalid
    """
    client = options.client
    if client is None or not all(callable(getattr(client, name, None)) for name in CLIENT_METHODS):
        raise MissingClientError("`client` must be a store client with get/set/delete methods")

    prefix = _or_default(options.prefix, "")
    if not isinstance(prefix, str):
        raise ConfigurationError("`prefix` must be a string")

    key = _or_default(options.key, getattr(fn, "__name__", None))
    if not ((isinstance(key, str) and key) or callable(key)):
        raise ConfigurationError("`key` must be a non-empty string or a callable")

    if not _is_positive_ttl(options.ttl_ms):
        raise ConfigurationError("`ttl_ms` must be a positive number of milliseconds")

    getter = _or_default(options.get, default_get)
    setter = _or_default(options.set, default_set)
    if not callable(getter):
        raise ConfigurationError("`get` must be callable")
    if not callable(setter):
        raise ConfigurationError("`set` must be callable")

    return ResolvedOptions(
        client=client,
        prefix=prefix,
        key=key,
        ttl_ms=options.ttl_ms,
        get=getter,
        set=setter,
    )
