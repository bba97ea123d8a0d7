"""Configuration module for KV-Memoize."""

from .settings import Settings, settings

__all__ = ["Settings", "settings"]
