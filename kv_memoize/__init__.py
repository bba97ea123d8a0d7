"""
KV-Memoize: Store-Backed Function Memoization

Caches the results of async (or sync) functions in a key-value store with
millisecond expiry, such as Redis or the bundled in-memory store.
"""

from .memoize import (
    MISSING,
    SKIP,
    ArgumentCountError,
    ConfigurationError,
    KeyContractError,
    MemoizedFunction,
    MemoizeError,
    MemoizeOptions,
    MissingClientError,
    create,
)
from .store import MemoryStore

__version__ = "1.0.0"

__all__ = [
    "MISSING",
    "SKIP",
    "ArgumentCountError",
    "ConfigurationError",
    "KeyContractError",
    "MemoizedFunction",
    "MemoizeError",
    "MemoizeOptions",
    "MissingClientError",
    "create",
    "MemoryStore",
]
