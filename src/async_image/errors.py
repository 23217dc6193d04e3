"""
Error taxonomy for image fetching.

Every failure in the fetch pipeline is one of four kinds, all rooted at
FetchError so callers can handle the pipeline with a single except clause.
"""

from enum import Enum

import httpx


class FetchErrorKind(str, Enum):
    """Classification of a fetch failure."""

    TRANSPORT_FAILURE = "transport_failure"
    INVALID_RESPONSE = "invalid_response"
    INVALID_URL = "invalid_url"
    INVALID_DATA = "invalid_data"


class FetchError(Exception):
    """Base class for all image fetch failures."""

    kind: FetchErrorKind


class TransportError(FetchError):
    """The transport layer could not complete the exchange (DNS, timeout, TLS, reset)."""

    kind = FetchErrorKind.TRANSPORT_FAILURE

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Transport failure: {cause}")


class InvalidResponseError(FetchError):
    """The exchange completed but the server did not answer with HTTP 200."""

    kind = FetchErrorKind.INVALID_RESPONSE

    def __init__(self, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(f"Invalid response (status code: {status_code})")


class InvalidURLError(FetchError):
    """The URL is missing, malformed, or uses an unsupported scheme."""

    kind = FetchErrorKind.INVALID_URL

    def __init__(self, url: str | httpx.URL | None = None):
        self.url = url
        super().__init__(f"Invalid URL: {url!r}")


class InvalidDataError(FetchError):
    """The bytes could not be decoded into a displayable image."""

    kind = FetchErrorKind.INVALID_DATA

    def __init__(self, data: bytes):
        self.data = data
        super().__init__(f"Could not decode {len(data)} bytes as an image")
