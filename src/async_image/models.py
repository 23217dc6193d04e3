"""
Data models for image loading.

Provides the caching policy, the decoded image wrapper, and the
three-state loading value observed by the presentation layer.
"""

import base64
from enum import Enum
from typing import Annotated, Literal

from PIL import Image as PILImage
from pydantic import BaseModel, ConfigDict, Field

from .errors import FetchError


class CachingPolicy(str, Enum):
    """How long fetched image bytes are retained.

    VIEW_SCOPED results live only as long as the requesting view and never
    touch the shared cache. SESSION_SCOPED results are read from and written
    to the process-wide session cache.
    """

    VIEW_SCOPED = "view_scoped"
    SESSION_SCOPED = "session_scoped"


class DisplayableImage(BaseModel):
    """A decoded image ready for rendering."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    image: PILImage.Image = Field(description="Decoded Pillow image")
    data: bytes = Field(repr=False, description="Raw bytes the image was decoded from")
    format: str | None = Field(default=None, description="Pillow format name (e.g., 'PNG')")
    media_type: str | None = Field(default=None, description="MIME type (e.g., 'image/png')")
    width: int = Field(description="Image width in pixels")
    height: int = Field(description="Image height in pixels")
    mode: str = Field(description="Pillow pixel mode (e.g., 'RGB', 'RGBA')")

    def to_base64(self) -> str:
        """Return the original bytes as a base64 string."""
        return base64.b64encode(self.data).decode("utf-8")


class Loading(BaseModel):
    """The fetch is in flight."""

    model_config = ConfigDict(frozen=True)

    status: Literal["loading"] = "loading"


class Success(BaseModel):
    """The fetch completed and the image decoded."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    status: Literal["success"] = "success"
    image: DisplayableImage


class Failure(BaseModel):
    """The fetch failed with a classified error."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    status: Literal["failure"] = "failure"
    error: FetchError


LoadingState = Annotated[Loading | Success | Failure, Field(discriminator="status")]
