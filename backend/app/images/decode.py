"""app/images/decode.py

Read true pixel dimensions from image bytes.

Only the header is parsed (Pillow's `Image.open` is lazy); pixel data is
never decoded, so this stays cheap even for 5MB files. The declared
content-type is not consulted here: the format comes from the bytes.
"""

from __future__ import annotations

import io
import struct

from PIL import Image, UnidentifiedImageError

from app.images.types import ImageDimensions


class ImageDecodeError(Exception):
    """Bytes could not be parsed as a supported image."""


def decode_dimensions(data: bytes) -> ImageDimensions:
    if not data:
        raise ImageDecodeError("empty payload")

    try:
        with Image.open(io.BytesIO(data)) as img:
            width, height = img.size
            fmt = img.format or ""
            # verify() walks the chunk structure (CRCs for PNG) without decoding pixels
            img.verify()
    except (UnidentifiedImageError, Image.DecompressionBombError) as e:
        raise ImageDecodeError(type(e).__name__) from e
    except (OSError, SyntaxError, ValueError, EOFError, IndexError, TypeError, struct.error) as e:
        # Pillow surfaces truncated/garbled headers as any of these
        raise ImageDecodeError(f"{type(e).__name__}: {e}") from e

    if width <= 0 or height <= 0:
        raise ImageDecodeError(f"invalid size {width}x{height}")
    # Pillow only warns between 1x and 2x its limit; a header claiming that many pixels is not a hero image.
    if Image.MAX_IMAGE_PIXELS and width * height > Image.MAX_IMAGE_PIXELS:
        raise ImageDecodeError(f"too many pixels {width}x{height}")

    return ImageDimensions(width=width, height=height, format=fmt.upper())
