"""
Network fetcher.

Performs exactly one HTTP GET per call and returns the raw body bytes.
"""

import httpx
from loguru import logger

from .config import settings
from .errors import InvalidResponseError, InvalidURLError, TransportError

_SUPPORTED_SCHEMES = ("http", "https")


def validate_url(url: str | httpx.URL | None) -> httpx.URL:
    """
    Parse a URL and check it can be requested.

    Args:
        url: Candidate image URL

    Returns:
        The parsed URL

    Raises:
        InvalidURLError: If the URL is None, malformed, not http(s), or has no host
    """
    if url is None:
        raise InvalidURLError(None)
    try:
        parsed = httpx.URL(url)
        # .host IDNA-decodes, so a bad punycode label fails here
        usable = parsed.scheme in _SUPPORTED_SCHEMES and bool(parsed.host)
    except (httpx.InvalidURL, TypeError, UnicodeError) as e:
        raise InvalidURLError(url) from e
    if not usable:
        raise InvalidURLError(url)
    return parsed


class ImageFetcher:
    """Fetches image bytes over HTTP."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
        follow_redirects: bool | None = None,
        user_agent: str | None = None,
    ):
        """
        Initialize the fetcher.

        Args:
            client: Optional shared client. When omitted, a client is created
                for each request and closed afterwards.
            timeout: HTTP timeout in seconds (defaults to settings.fetch_timeout)
            follow_redirects: Follow redirects (defaults to settings.follow_redirects)
            user_agent: User-Agent header (defaults to settings.user_agent)
        """
        self._client = client
        self.timeout = settings.fetch_timeout if timeout is None else timeout
        self.follow_redirects = (
            settings.follow_redirects if follow_redirects is None else follow_redirects
        )
        self.user_agent = user_agent or settings.user_agent

    async def fetch_image(self, url: str | httpx.URL | None) -> bytes:
        """
        Fetch the raw bytes at a URL.

        Args:
            url: Image URL

        Returns:
            Response body, unmodified

        Raises:
            InvalidURLError: If the URL is unusable (no request is issued)
            TransportError: If the request could not be completed
            InvalidResponseError: If the server did not answer with HTTP 200
        """
        target = validate_url(url)
        logger.debug("Requesting image: {}", str(target)[:80])

        try:
            if self._client is not None:
                response = await self._get(self._client, target)
            else:
                async with httpx.AsyncClient(
                    timeout=self.timeout, follow_redirects=self.follow_redirects
                ) as client:
                    response = await self._get(client, target)
        except httpx.HTTPError as e:
            logger.warning("Image request failed: {} - {}", str(target)[:80], e)
            raise TransportError(e) from e

        if response.status_code != 200:
            logger.warning(
                "Image request returned status {}: {}", response.status_code, str(target)[:80]
            )
            raise InvalidResponseError(response.status_code)

        logger.debug(
            "Fetched image: {} bytes, type={}",
            len(response.content),
            response.headers.get("content-type", "unknown"),
        )
        return response.content

    async def _get(self, client: httpx.AsyncClient, url: httpx.URL) -> httpx.Response:
        return await client.get(url, headers={"User-Agent": self.user_agent})
