"""
Session-scoped image cache.

Holds raw image bytes keyed by canonical URL for the lifetime of the
process. The module-level ``session_cache`` instance is process-wide state
with no teardown; components receive it by injection and default to it.
"""

import httpx
from loguru import logger

from .store import CacheStore


def canonical_url(url: str | httpx.URL) -> str:
    """
    Return the canonical absolute string form of a URL.

    Scheme and host are lowercased and default ports dropped, so equivalent
    spellings of the same resource share a cache entry.

    Raises:
        httpx.InvalidURL: If the URL cannot be parsed
    """
    return str(httpx.URL(url))


class SessionImageCache:
    """Process-wide cache of raw image bytes keyed by URL."""

    def __init__(self) -> None:
        self._store: CacheStore[str, bytes] = CacheStore()

    @classmethod
    def shared(cls) -> "SessionImageCache":
        """Return the process-wide instance."""
        return session_cache

    def fetch_image_for_url(self, url: str | httpx.URL) -> bytes | None:
        """
        Return cached image bytes for a URL.

        Args:
            url: Image URL

        Returns:
            Cached bytes, or None if nothing is cached for the URL

        Raises:
            httpx.InvalidURL: If the URL cannot be parsed
        """
        key = canonical_url(url)
        data = self._store.fetch(key)
        if data is None:
            logger.debug("Session cache miss: {}", key[:80])
        else:
            logger.debug("Session cache hit: {} ({} bytes)", key[:80], len(data))
        return data

    def cache_image(self, data: bytes, url: str | httpx.URL) -> None:
        """
        Store image bytes for a URL.

        Args:
            data: Raw, already validated image bytes
            url: Image URL
        """
        key = canonical_url(url)
        self._store.store(data, key)
        logger.debug("Cached {} bytes for {}", len(data), key[:80])

    def remove_cached_image(self, url: str | httpx.URL) -> None:
        """
        Remove cached bytes for a URL. No-op if nothing is cached.

        Raises:
            httpx.InvalidURL: If the URL cannot be parsed
        """
        key = canonical_url(url)
        self._store.remove(key)
        logger.debug("Removed cached image: {}", key[:80])

    def remove_all_cached_images(self) -> None:
        """Remove every cached image."""
        self._store.remove_all()

    def __len__(self) -> int:
        return len(self._store)


# Global session cache instance
session_cache = SessionImageCache()
