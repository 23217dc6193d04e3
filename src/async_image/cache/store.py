"""
Generic in-memory key/value store.

Backed by a cachetools LRUCache guarded by a lock so it can be shared
between threads without external synchronization.
"""

import threading
from collections.abc import Hashable
from typing import Generic, TypeVar

from cachetools import LRUCache
from loguru import logger

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

# Entry ceiling standing in for automatic release under memory pressure.
# Eviction order and timing are not part of the store's contract.
_MAX_ENTRIES = 512


class CacheStore(Generic[K, V]):
    """Thread-safe key/value store with automatic eviction."""

    def __init__(self) -> None:
        self._cache: LRUCache[K, V] = LRUCache(maxsize=_MAX_ENTRIES)
        self._lock = threading.RLock()

    def store(self, value: V, key: K) -> None:
        """Insert or replace the value for a key."""
        with self._lock:
            self._cache[key] = value

    def fetch(self, key: K) -> V | None:
        """Return the value for a key, or None if absent or evicted."""
        with self._lock:
            return self._cache.get(key)

    def remove(self, key: K) -> None:
        """Remove the entry for a key. No-op if absent."""
        with self._lock:
            self._cache.pop(key, None)

    def remove_all(self) -> None:
        """Remove every entry."""
        with self._lock:
            count = len(self._cache)
            self._cache.clear()
        logger.debug("Cleared {} cache entries", count)

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._cache
