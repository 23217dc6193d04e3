"""Pytest fixtures and configuration for async-image tests.

This module provides shared fixtures for testing the session cache, the
network fetcher, the fetch use case, and the view model.
"""

import tempfile
from collections.abc import Generator
from io import BytesIO
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from PIL import Image

from async_image.cache import SessionImageCache, session_cache
from async_image.fetcher import ImageFetcher
from async_image.use_case import ImageFetchUseCase


# --- Temporary Directory Fixtures ---


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmp:
        yield Path(tmp)


# --- Sample Data Fixtures ---


@pytest.fixture
def sample_png_bytes() -> bytes:
    """Create sample PNG bytes for testing."""
    img = Image.new("RGBA", (40, 20), color=(0, 128, 255, 200))
    buffer = BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def sample_jpeg_bytes() -> bytes:
    """Create sample JPEG bytes for testing."""
    img = Image.new("RGB", (100, 100), color="red")
    buffer = BytesIO()
    img.save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture
def corrupt_bytes() -> bytes:
    """Bytes that no image decoder accepts."""
    return b"<html><body>Not an image</body></html>"


# --- Cache Fixtures ---


@pytest.fixture(autouse=True)
def clear_session_cache() -> Generator[None, None, None]:
    """Keep the process-wide cache empty between tests."""
    session_cache.remove_all_cached_images()
    yield
    session_cache.remove_all_cached_images()


@pytest.fixture
def image_cache() -> SessionImageCache:
    """Create an isolated session cache."""
    return SessionImageCache()


# --- Mock Collaborator Fixtures ---


@pytest.fixture
def mock_fetcher(sample_png_bytes: bytes) -> ImageFetcher:
    """Create a mock fetcher that returns sample PNG bytes."""
    fetcher = MagicMock(spec=ImageFetcher)
    fetcher.fetch_image = AsyncMock(return_value=sample_png_bytes)
    return fetcher


@pytest.fixture
def use_case(mock_fetcher: ImageFetcher, image_cache: SessionImageCache) -> ImageFetchUseCase:
    """Create a use case wired to the mock fetcher and an isolated cache."""
    return ImageFetchUseCase(fetcher=mock_fetcher, cache=image_cache)


# --- Settings Override Fixtures ---


@pytest.fixture
def mock_settings(monkeypatch):
    """Override settings with test values."""
    monkeypatch.setenv("FETCH_TIMEOUT", "5")
    monkeypatch.setenv("DEFAULT_CACHING_POLICY", "view_scoped")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    from async_image.config import Settings

    return Settings()
