"""Memoizer module for KV-Memoize."""

from .errors import (
    ArgumentCountError,
    ConfigurationError,
    KeyContractError,
    MemoizeError,
    MissingClientError,
)
from .hooks import default_get, default_set
from .markers import MISSING, SKIP, Marker
from .memoizer import MemoizedFunction, create
from .options import MemoizeOptions, ResolvedOptions
from .types import StoreClient

__all__ = [
    "ArgumentCountError",
    "ConfigurationError",
    "KeyContractError",
    "MemoizeError",
    "MissingClientError",
    "default_get",
    "default_set",
    "MISSING",
    "SKIP",
    "Marker",
    "MemoizedFunction",
    "create",
    "MemoizeOptions",
    "ResolvedOptions",
    "StoreClient",
]
