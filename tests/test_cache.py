"""
Tests for the cache package.

Tests CacheStore, URL canonicalization, and the session image cache.
"""

import threading

import httpx
import pytest

from async_image.cache import CacheStore, SessionImageCache, canonical_url, session_cache


class TestCacheStore:
    """Test CacheStore class."""

    def test_store_and_fetch(self):
        """Test a stored value is returned for its key."""
        store: CacheStore[str, bytes] = CacheStore()

        store.store(b"abc", "key")

        assert store.fetch("key") == b"abc"

    def test_fetch_missing(self):
        """Test fetching an unknown key returns None."""
        store: CacheStore[str, bytes] = CacheStore()

        assert store.fetch("missing") is None

    def test_store_replaces_value(self):
        """Test storing again under the same key replaces the value."""
        store: CacheStore[str, bytes] = CacheStore()

        store.store(b"old", "key")
        store.store(b"new", "key")

        assert store.fetch("key") == b"new"
        assert len(store) == 1

    def test_equal_keys_share_entry(self):
        """Test lookup uses key equality, not identity."""
        store: CacheStore[tuple, str] = CacheStore()

        store.store("value", ("a", 1))

        assert store.fetch(("a", 1)) == "value"
        assert ("a", 1) in store

    def test_remove(self):
        """Test removing a key."""
        store: CacheStore[str, bytes] = CacheStore()
        store.store(b"abc", "key")

        store.remove("key")

        assert store.fetch("key") is None

    def test_remove_missing_is_noop(self):
        """Test removing an unknown key does nothing."""
        store: CacheStore[str, bytes] = CacheStore()
        store.store(b"abc", "other")

        store.remove("missing")

        assert len(store) == 1

    def test_remove_all(self):
        """Test clearing every entry."""
        store: CacheStore[str, bytes] = CacheStore()
        store.store(b"1", "a")
        store.store(b"2", "b")

        store.remove_all()

        assert len(store) == 0
        assert store.fetch("a") is None
        assert store.fetch("b") is None

    def test_concurrent_access(self):
        """Test the store tolerates writers and readers on many threads."""
        store: CacheStore[str, int] = CacheStore()

        def worker(offset: int):
            for i in range(100):
                key = f"k{offset}-{i}"
                store.store(i, key)
                store.fetch(key)
                if i % 10 == 0:
                    store.remove(key)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert store.fetch("k0-1") == 1
        assert store.fetch("k3-10") is None


class TestCanonicalUrl:
    """Test canonical_url function."""

    def test_plain_url_unchanged(self):
        """Test an already canonical URL is returned as-is."""
        assert canonical_url("https://example.com/a.png") == "https://example.com/a.png"

    def test_scheme_and_host_case(self):
        """Test scheme and host are lowercased."""
        assert canonical_url("HTTPS://EXAMPLE.com/a.png") == "https://example.com/a.png"

    def test_accepts_httpx_url(self):
        """Test httpx.URL input gives the same key as the string."""
        url = "https://example.com/a.png?size=large"

        assert canonical_url(httpx.URL(url)) == canonical_url(url)

    def test_query_is_part_of_key(self):
        """Test different query strings are different resources."""
        assert canonical_url("https://example.com/a.png?v=1") != canonical_url(
            "https://example.com/a.png?v=2"
        )


class TestSessionImageCache:
    """Test SessionImageCache class."""

    def test_cache_and_fetch(self, image_cache):
        """Test cached bytes are returned for the same URL."""
        image_cache.cache_image(b"bytes", "https://example.com/a.png")

        assert image_cache.fetch_image_for_url("https://example.com/a.png") == b"bytes"

    def test_fetch_uncached(self, image_cache):
        """Test an uncached URL returns None."""
        assert image_cache.fetch_image_for_url("https://example.com/a.png") is None

    def test_equivalent_urls_share_entry(self, image_cache):
        """Test URLs with the same canonical form hit the same entry."""
        image_cache.cache_image(b"bytes", "https://EXAMPLE.com/a.png")

        assert image_cache.fetch_image_for_url(httpx.URL("https://example.com/a.png")) == b"bytes"

    def test_remove_cached_image(self, image_cache):
        """Test removing a single URL."""
        image_cache.cache_image(b"a", "https://example.com/a.png")
        image_cache.cache_image(b"b", "https://example.com/b.png")

        image_cache.remove_cached_image("https://example.com/a.png")

        assert image_cache.fetch_image_for_url("https://example.com/a.png") is None
        assert image_cache.fetch_image_for_url("https://example.com/b.png") == b"b"

    def test_remove_uncached_image(self, image_cache):
        """Test removing a URL that was never cached is not an error."""
        image_cache.remove_cached_image("https://example.com/missing.png")

        assert len(image_cache) == 0

    def test_remove_all_cached_images(self, image_cache):
        """Test clearing every cached URL."""
        urls = [f"https://example.com/{i}.png" for i in range(5)]
        for url in urls:
            image_cache.cache_image(b"data", url)

        image_cache.remove_all_cached_images()

        assert all(image_cache.fetch_image_for_url(url) is None for url in urls)

    def test_remove_all_twice(self, image_cache):
        """Test clearing an already empty cache is not an error."""
        image_cache.cache_image(b"data", "https://example.com/a.png")

        image_cache.remove_all_cached_images()
        assert len(image_cache) == 0

        image_cache.remove_all_cached_images()
        assert len(image_cache) == 0

    def test_instances_are_independent(self, image_cache):
        """Test separately constructed caches do not share entries."""
        image_cache.cache_image(b"data", "https://example.com/a.png")

        assert SessionImageCache().fetch_image_for_url("https://example.com/a.png") is None

    def test_shared_returns_global_instance(self):
        """Test shared() is the module-level session cache."""
        assert SessionImageCache.shared() is session_cache
        assert SessionImageCache.shared() is SessionImageCache.shared()

    def test_invalid_url_raises(self, image_cache):
        """Test an unparsable URL is rejected by canonicalization."""
        with pytest.raises(httpx.InvalidURL):
            image_cache.fetch_image_for_url("https://example.com:notaport/")

    def test_remove_invalid_url_raises(self, image_cache):
        """Test removal rejects an unparsable URL and keeps other entries."""
        image_cache.cache_image(b"data", "https://example.com/a.png")

        with pytest.raises(httpx.InvalidURL):
            image_cache.remove_cached_image("https://example.com:notaport/")

        assert len(image_cache) == 1
