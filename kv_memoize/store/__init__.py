"""Store clients for KV-Memoize."""

from .memory import MemoryStore

__all__ = ["MemoryStore"]
