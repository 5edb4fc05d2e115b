"""
image_validators.py
- Purpose: Centralized validation for hero image uploads.
- Design: Return a ValidationVerdict instead of raising, so the orchestrator
  decides what happens next. Checks run cheapest-first and stop at the first
  failure: presence, declared type, size, decoded metadata, dimensions.
"""

import logging

from app.core import ErrorCode
from app.images.decode import ImageDecodeError, decode_dimensions
from app.images.policy import MIB, MIME_BY_PIL_FORMAT, BucketPolicy
from app.images.types import Accepted, Rejected, UploadCandidate, ValidationVerdict

logger = logging.getLogger("app.validations.image")


def normalize_content_type(content_type: str | None) -> str:
    # "image/JPEG; charset=binary" -> "image/jpeg"
    return (content_type or "").split(";", 1)[0].strip().lower()


def validate_hero_image(candidate: UploadCandidate | None, policy: BucketPolicy) -> ValidationVerdict:
    # Basic presence check
    if candidate is None or not candidate.data:
        return Rejected(ErrorCode.MISSING_FILE)

    # Content-type validation (exact match against the policy allow-list)
    content_type = normalize_content_type(candidate.content_type)
    if content_type not in policy.allowed_mime_types:
        return Rejected(ErrorCode.INVALID_TYPE, {"content_type": content_type})

    # Size
    if candidate.size > policy.max_size_bytes:
        return Rejected(
            ErrorCode.TOO_LARGE,
            {
                "size_bytes": candidate.size,
                "size_mb": f"{candidate.size / MIB:.2f}",
                "limit_mb": policy.max_size_mb,
            },
        )

    # Decoded metadata: never trust the declared type alone
    try:
        dims = decode_dimensions(candidate.data)
    except ImageDecodeError as e:
        logger.info("hero_image.decode_failed", extra={"content_type": content_type, "error": str(e)})
        return Rejected(ErrorCode.CORRUPT_IMAGE, {"content_type": content_type})

    if MIME_BY_PIL_FORMAT.get(dims.format) not in policy.allowed_mime_types:
        # e.g. a GIF or BMP labelled image/png
        return Rejected(ErrorCode.CORRUPT_IMAGE, {"content_type": content_type, "decoded_format": dims.format})

    # Dimensions
    if dims.width < policy.min_width or dims.height < policy.min_height:
        return Rejected(
            ErrorCode.INVALID_DIMENSIONS,
            {
                "min_width": policy.min_width,
                "min_height": policy.min_height,
                "width": dims.width,
                "height": dims.height,
            },
        )

    return Accepted(width=dims.width, height=dims.height)
