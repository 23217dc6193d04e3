"""
Image decoding.

Turns raw bytes into a DisplayableImage with Pillow. Decoding is fallible:
malformed or unsupported input yields None rather than an exception.
"""

from io import BytesIO

from loguru import logger
from PIL import Image as PILImage

from .models import DisplayableImage


def decode_image(data: bytes) -> DisplayableImage | None:
    """
    Decode image bytes.

    Args:
        data: Raw image bytes (PNG, JPEG, GIF, WebP, and anything else Pillow reads)

    Returns:
        The decoded image, or None if the bytes are not a readable image
    """
    if not data:
        return None

    try:
        # verify() walks the whole file (a PNG missing its end chunk fails here)
        # but leaves the image unusable, so it is reopened for decoding
        PILImage.open(BytesIO(data)).verify()
        img = PILImage.open(BytesIO(data))
        img.load()
    except Exception as e:
        logger.debug("Could not decode {} bytes as an image: {}", len(data), e)
        return None

    return DisplayableImage(
        image=img,
        data=data,
        format=img.format,
        media_type=img.get_format_mimetype() if img.format else None,
        width=img.width,
        height=img.height,
        mode=img.mode,
    )
