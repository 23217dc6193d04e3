"""
Async Image.

Fetches remote images over HTTP, decodes them with Pillow, and keeps the
raw bytes in a process-wide in-memory cache when asked to.

Usage:
    from async_image import CachingPolicy, ImageViewModel

    view_model = ImageViewModel()
    view_model.subscribe(render)
    view_model.start(CachingPolicy.SESSION_SCOPED, "https://example.com/a.png")

    # Clear the session cache
    from async_image import session_cache
    session_cache.remove_all_cached_images()
"""

__version__ = "0.1.0"

from loguru import logger

from .cache import SessionImageCache, session_cache
from .errors import (
    FetchError,
    FetchErrorKind,
    InvalidDataError,
    InvalidResponseError,
    InvalidURLError,
    TransportError,
)
from .models import CachingPolicy, DisplayableImage, Failure, Loading, LoadingState, Success
from .use_case import ImageFetchUseCase
from .view_model import ImageViewModel, load_image

# Library code stays silent until the application enables it
logger.disable(__name__)

__all__ = [
    "CachingPolicy",
    "DisplayableImage",
    "Failure",
    "FetchError",
    "FetchErrorKind",
    "ImageFetchUseCase",
    "ImageViewModel",
    "InvalidDataError",
    "InvalidResponseError",
    "InvalidURLError",
    "Loading",
    "LoadingState",
    "SessionImageCache",
    "Success",
    "TransportError",
    "load_image",
    "session_cache",
]
