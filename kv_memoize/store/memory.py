"""
In-Memory Store Client

This module provides a redis-like key-value client that lives entirely in
the current process. It satisfies the store contract the memoizer expects
(async get/set/delete with millisecond expiry), which makes it suitable for
tests, demos and single-process applications.
"""

import logging
import time
from collections import OrderedDict
from typing import Optional, Tuple, Dict, Any

from ..config.settings import settings

logger = logging.getLogger(__name__)


class MemoryStore:
    """
    In-memory key-value client with millisecond TTL and LRU eviction.

    The public methods are coroutines so the store can be injected anywhere
    a networked client such as ``redis.asyncio.Redis`` is expected. They
    never actually suspend; every operation completes synchronously.

    Features:
    - TTL (Time-To-Live): Keys expire after ``px`` milliseconds
    - LRU Eviction: When the store is full, the least recently used key
      is evicted

    Internal Storage:
        Uses OrderedDict for O(1) operations with LRU ordering.
        Format: key -> (value, expiration_timestamp)
        expiration_timestamp = 0 means no expiration

    Attributes:
        max_size: Maximum number of keys allowed in the store
    """

    def __init__(self, max_size: Optional[int] = None):
        """
        Initialize the store.

        Args:
            max_size: Maximum number of keys (default from settings.MAX_KEYS)

        Raises:
            ValueError: If max_size is not positive
        """
        self.max_size = max_size if max_size is not None else settings.MAX_KEYS
        if self.max_size <= 0:
            raise ValueError("max_size must be positive")

        self._store: "OrderedDict[str, Tuple[str, float]]" = OrderedDict()

    def _is_expired(self, expires_at: float, now: Optional[float] = None) -> bool:
        if not expires_at:
            return False
        return expires_at <= (now if now is not None else time.time())

    def _lookup(self, key: str) -> Optional[Tuple[str, float]]:
        """Return the live entry for key, dropping it if it has expired."""
        entry = self._store.get(key)
        if entry is None:
            return None

        if self._is_expired(entry[1]):
            # Lazy expiration
            self._store.pop(key, None)
            logger.debug(f"Expired key on access: {key}")
            return None

        return entry

    async def get(self, key: str) -> Optional[str]:
        """
        Retrieve the value stored under key.

        Args:
            key: The key to look up

        Returns:
            The stored text if found and not expired, None otherwise
        """
        entry = self._lookup(key)
        if entry is None:
            return None

        # Mark as most recently used
        self._store.move_to_end(key)
        return entry[0]

    async def set(self, key: str, value: str, px: Optional[int] = None) -> bool:
        """
        Insert or update a key.

        Args:
            key: The key to store
            value: The text to associate with the key
            px: Time-to-live in milliseconds (None or 0 = no expiration)

        Returns:
            True on success
        """
        expires_at = time.time() + px / 1000.0 if px and px > 0 else 0

        if key in self._store:
            # Update value/TTL and mark as most recently used
            self._store[key] = (value, expires_at)
            self._store.move_to_end(key)
            return True

        if len(self._store) >= self.max_size:
            evicted, _ = self._store.popitem(last=False)
            logger.debug(f"Evicted least recently used key: {evicted}")

        self._store[key] = (value, expires_at)
        return True

    async def delete(self, *keys: str) -> int:
        """
        Delete one or more keys.

        Expired keys are treated as non-existent but removed eagerly.

        Returns:
            Number of live keys that were removed
        """
        removed = 0
        for key in keys:
            if self._lookup(key) is None:
                continue
            self._store.pop(key, None)
            removed += 1
        return removed

    async def exists(self, *keys: str) -> int:
        """Count how many of the given keys exist and are not expired."""
        return sum(1 for key in keys if self._lookup(key) is not None)

    async def pttl(self, key: str) -> int:
        """
        Get the remaining time-to-live of a key in milliseconds.

        Returns:
            Remaining milliseconds, -1 if the key has no expiration,
            -2 if the key does not exist
        """
        entry = self._lookup(key)
        if entry is None:
            return -2

        expires_at = entry[1]
        if not expires_at:
            return -1
        return max(0, int(round((expires_at - time.time()) * 1000)))

    def size(self) -> int:
        """
        Get the current number of keys in the store.

        Note: This may include expired keys that haven't been cleaned up yet.
        """
        return len(self._store)

    def clear(self) -> None:
        """Remove all keys from the store."""
        self._store.clear()

    def cleanup_expired(self) -> int:
        """
        Remove all expired keys from the store (active expiration).

        Returns:
            Number of keys removed
        """
        now = time.time()
        to_delete = [k for k, (_, exp) in self._store.items() if self._is_expired(exp, now)]
        for key in to_delete:
            self._store.pop(key, None)
        if to_delete:
            logger.debug(f"Cleaned up {len(to_delete)} expired keys")
        return len(to_delete)

    def get_stats(self) -> Dict[str, Any]:
        """
        Get statistics about the store.

        Returns:
            Dictionary containing:
            - total_keys: Total keys in store
            - expired_keys: Count of expired (but not yet cleaned) keys
            - active_keys: Count of non-expired keys
            - max_size: Maximum capacity
            - utilization: Current usage as fraction of max_size
        """
        now = time.time()
        total = len(self._store)
        expired = sum(1 for _, (_, expires_at) in self._store.items() if self._is_expired(expires_at, now))

        return {
            "total_keys": total,
            "expired_keys": expired,
            "active_keys": total - expired,
            "max_size": self.max_size,
            "utilization": total / self.max_size,
        }
