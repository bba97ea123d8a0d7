"""
KV-Memoize Configuration Settings

This module contains the environment-driven defaults used by the demo
entry point and the in-memory store. The memoizer itself never reads
these values: its own defaults (empty prefix, function-name key) are fixed.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Package configuration settings."""

    # Memoizer defaults (demo only)
    PREFIX: str = os.environ.get("KV_MEMOIZE_PREFIX", "cache:")
    TTL_MS: int = int(os.environ.get("KV_MEMOIZE_TTL_MS", "600000"))

    # In-memory store settings
    MAX_KEYS: int = int(os.environ.get("KV_MEMOIZE_MAX_KEYS", "10000"))

    # Logging settings
    DEBUG: bool = os.environ.get("KV_MEMOIZE_DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.environ.get("KV_MEMOIZE_LOG_LEVEL", "INFO")


# Global settings instance
settings = Settings()
