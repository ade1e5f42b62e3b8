"""Caching of resolved settings."""

from domainconf.caching.cache import (
    DEFAULT_TTL,
    CacheEntry,
    ConfigCache,
    InMemoryConfigCache,
)

__all__ = [
    "DEFAULT_TTL",
    "CacheEntry",
    "ConfigCache",
    "InMemoryConfigCache",
]
