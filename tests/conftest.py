"""
Pytest Configuration and Fixtures

This module provides shared fixtures, store doubles and configuration
for all tests.
"""

from typing import Any, Callable, List, Optional, Tuple

import pytest

from kv_memoize.memoize import create
from kv_memoize.store.memory import MemoryStore


# ============================================================================
# Store Doubles
# ============================================================================

class RecordingStore(MemoryStore):
    """
    MemoryStore that records every client call.

    Usage:
        store = RecordingStore()
        await store.set("key", "1", px=1000)
        assert store.calls == [("set", "key")]
    """

    def __init__(self, max_size: Optional[int] = None):
        super().__init__(max_size=max_size)
        self.calls: List[Tuple[str, str]] = []
        self.last_px: Optional[int] = None

    async def get(self, key: str) -> Optional[str]:
        self.calls.append(("get", key))
        return await super().get(key)

    async def set(self, key: str, value: str, px: Optional[int] = None) -> bool:
        self.calls.append(("set", key))
        self.last_px = px
        return await super().set(key, value, px=px)

    async def delete(self, *keys: str) -> int:
        for key in keys:
            self.calls.append(("delete", key))
        return await super().delete(*keys)


class BrokenStore:
    """Store client whose every operation fails like a dropped connection."""

    async def get(self, key: str) -> Optional[str]:
        raise ConnectionError("store unavailable")

    async def set(self, key: str, value: str, px: Optional[int] = None) -> bool:
        raise ConnectionError("store unavailable")

    async def delete(self, *keys: str) -> int:
        raise ConnectionError("store unavailable")


class SyncStore:
    """Store client with plain (non-async) methods backed by a dict."""

    def __init__(self):
        self.data = {}

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str, px: Optional[int] = None) -> bool:
        self.data[key] = value
        return True

    def delete(self, *keys: str) -> int:
        return sum(1 for key in keys if self.data.pop(key, None) is not None)


class CallCounter:
    """
    Async target function that counts its invocations.

    Returns ``result`` if given, otherwise echoes its arguments.
    """

    _UNSET = object()

    def __init__(self, result: Any = _UNSET):
        self.count = 0
        self.result = result
        self.__name__ = "counted"

    async def __call__(self, *args: Any, **kwargs: Any) -> Any:
        self.count += 1
        if self.result is not self._UNSET:
            return self.result
        return list(args)


# ============================================================================
# Store Fixtures
# ============================================================================

@pytest.fixture
def store() -> MemoryStore:
    """Create a fresh MemoryStore with default size (100 keys)."""
    return MemoryStore(max_size=100)


@pytest.fixture
def small_store() -> MemoryStore:
    """Create a MemoryStore with small capacity for eviction testing (5 keys)."""
    return MemoryStore(max_size=5)


@pytest.fixture
def recording_store() -> RecordingStore:
    """Create a store that records every call made to it."""
    return RecordingStore(max_size=100)


@pytest.fixture
def broken_store() -> BrokenStore:
    """Create a store whose operations always raise."""
    return BrokenStore()


@pytest.fixture
def sync_store() -> SyncStore:
    """Create a store client with synchronous methods."""
    return SyncStore()


# ============================================================================
# Memoizer Fixtures
# ============================================================================

@pytest.fixture
def memoize(recording_store: RecordingStore) -> Callable:
    """Create a memoizer bound to the recording store with a 1s TTL."""
    return create({"client": recording_store, "ttl_ms": 1000})


@pytest.fixture
def counter() -> CallCounter:
    """Create a counting async target function."""
    return CallCounter()


@pytest.fixture
def make_counter() -> Callable[..., CallCounter]:
    """Factory fixture for counting target functions with a fixed result."""
    return CallCounter


# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
