"""Expiring key/value cache for resolved settings.

Entries carry their own expiry and are evicted lazily: a read that finds an
expired entry removes it and reports a miss. There is no background sweep and
no size bound; the number of entries is bounded by the distinct
(settings type, domain) pairs ever resolved.
"""

import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from datetime import timedelta
from typing import Generic, TypeVar

T = TypeVar("T")

DEFAULT_TTL = timedelta(minutes=5)


class ConfigCache(ABC, Generic[T]):
    """Abstract interface for a settings cache."""

    @abstractmethod
    def try_get(self, key: Hashable) -> tuple[bool, T | None]:
        """Look up a key.

        Returns:
            (True, value) on a live hit, (False, None) on a miss or expiry
        """
        pass

    @abstractmethod
    def set(self, key: Hashable, value: T, ttl: timedelta | None = None) -> None:
        """Store a value, replacing any existing entry.

        Args:
            key: Cache key
            value: Value to store
            ttl: Time-to-live (cache default when None)
        """
        pass

    @abstractmethod
    def remove(self, key: Hashable) -> None:
        """Remove a key if present."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every entry."""
        pass

    @abstractmethod
    def keys(self) -> list[Hashable]:
        """Snapshot of stored keys, expired entries included."""
        pass


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """A cached value and the clock reading at which it expires."""

    value: T
    expires_at: float


class InMemoryConfigCache(ConfigCache[T]):
    """Thread-safe in-memory cache with per-entry expiry.

    Each operation holds a single lock for its duration, so individual
    entries are never torn; no atomicity is offered across keys.
    """

    def __init__(
        self,
        default_ttl: timedelta | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize empty cache.

        Args:
            default_ttl: Expiry used when `set` gets no ttl (default 5 minutes)
            clock: Monotonic seconds source, injectable for tests
        """
        self._default_ttl = default_ttl if default_ttl is not None else DEFAULT_TTL
        self._clock = clock
        self._entries: dict[Hashable, CacheEntry[T]] = {}
        self._lock = threading.Lock()

    @property
    def default_ttl(self) -> timedelta:
        return self._default_ttl

    def try_get(self, key: Hashable) -> tuple[bool, T | None]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return False, None

            if self._clock() >= entry.expires_at:
                del self._entries[key]
                return False, None

            return True, entry.value

    def set(self, key: Hashable, value: T, ttl: timedelta | None = None) -> None:
        lifetime = ttl if ttl is not None else self._default_ttl
        with self._lock:
            self._entries[key] = CacheEntry(
                value=value,
                expires_at=self._clock() + lifetime.total_seconds(),
            )

    def remove(self, key: Hashable) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def keys(self) -> list[Hashable]:
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
