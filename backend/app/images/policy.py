"""
Bucket policy for hero images.

Single source of truth for the container name, visibility, size limit and
accepted MIME types. The same object drives bucket provisioning and upload
validation so the two can never drift.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from app.core.config import settings

MIB = 1024 * 1024

HERO_IMAGES_BUCKET_DEFAULT = "hero-images"
ALLOWED_IMAGE_MIME = ("image/jpeg", "image/png", "image/webp")

# Accepted MIME type -> storage key extension
EXTENSION_BY_MIME = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}

# Pillow format name -> MIME type it is allowed to arrive as
MIME_BY_PIL_FORMAT = {
    "JPEG": "image/jpeg",
    "MPO": "image/jpeg",  # multi-picture JPEG from phone cameras
    "PNG": "image/png",
    "WEBP": "image/webp",
}


@dataclass(frozen=True, slots=True)
class BucketPolicy:
    """Immutable policy object; configuration constant, never mutated at runtime."""

    name: str
    public: bool
    max_size_bytes: int
    allowed_mime_types: tuple[str, ...]
    min_width: int
    min_height: int

    @property
    def max_size_mb(self) -> int:
        return self.max_size_bytes // MIB

    def to_bucket_options(self) -> dict[str, Any]:
        """Options payload for Supabase `create_bucket`."""
        return {
            "public": self.public,
            "file_size_limit": self.max_size_bytes,
            "allowed_mime_types": list(self.allowed_mime_types),
        }


HERO_IMAGE_POLICY = BucketPolicy(
    name=(settings.HERO_IMAGES_BUCKET or HERO_IMAGES_BUCKET_DEFAULT).strip(),
    public=True,
    max_size_bytes=5 * MIB,
    allowed_mime_types=ALLOWED_IMAGE_MIME,
    min_width=1920,
    min_height=800,
)


def extension_for(content_type: str) -> str:
    return EXTENSION_BY_MIME[content_type]


__all__ = [
    "ALLOWED_IMAGE_MIME",
    "BucketPolicy",
    "HERO_IMAGE_POLICY",
    "MIB",
    "MIME_BY_PIL_FORMAT",
    "extension_for",
]
