"""
Image fetch use case.

Decides per request whether to serve from the session cache, go to the
network, and whether to write the result back.
"""

from collections.abc import Callable

import httpx
from loguru import logger

from .cache import SessionImageCache, session_cache
from .decoder import decode_image
from .errors import InvalidDataError, InvalidURLError
from .fetcher import ImageFetcher
from .models import CachingPolicy, DisplayableImage


class ImageFetchUseCase:
    """Combines the session cache, the network fetcher, and the decoder."""

    def __init__(
        self,
        fetcher: ImageFetcher | None = None,
        cache: SessionImageCache | None = None,
        decoder: Callable[[bytes], DisplayableImage | None] = decode_image,
    ):
        self.fetcher = fetcher or ImageFetcher()
        self.cache = cache if cache is not None else session_cache
        self.decoder = decoder

    async def fetch_image(
        self, url: str | httpx.URL | None, caching_policy: CachingPolicy
    ) -> DisplayableImage:
        """
        Load and decode the image at a URL.

        With SESSION_SCOPED, cached bytes are used when present and fresh
        bytes are cached after they decode. VIEW_SCOPED always goes to the
        network and never touches the cache.

        Args:
            url: Image URL
            caching_policy: Retention policy for this request

        Returns:
            The decoded image

        Raises:
            InvalidURLError: If url is None
            InvalidDataError: If cached or fetched bytes do not decode
            TransportError, InvalidResponseError, InvalidURLError: From the fetcher
        """
        if url is None:
            raise InvalidURLError(None)

        if caching_policy is CachingPolicy.SESSION_SCOPED:
            cached = self._cached_data(url)
            if cached is not None:
                image = self.decoder(cached)
                if image is None:
                    # A corrupt cache entry is a hard failure, not a miss
                    logger.warning("Cached bytes for {} do not decode", str(url)[:80])
                    raise InvalidDataError(cached)
                return image

        data = await self.fetcher.fetch_image(url)
        image = self.decoder(data)
        if image is None:
            logger.warning("Fetched bytes for {} do not decode", str(url)[:80])
            raise InvalidDataError(data)

        # Written only after a successful decode
        if caching_policy is CachingPolicy.SESSION_SCOPED:
            self.cache.cache_image(data, url)

        return image

    def _cached_data(self, url: str | httpx.URL) -> bytes | None:
        try:
            return self.cache.fetch_image_for_url(url)
        except (httpx.InvalidURL, UnicodeError) as e:
            raise InvalidURLError(url) from e
