"""
hero_image.py (schemas)
- Purpose: Response DTOs for the hero image upload endpoint.
- Design: Keep API DTOs stable; include helper constructors for DRY mapping.
"""

from pydantic import BaseModel

from app.images.types import StoredObjectRef


class HeroImageUploadResponse(BaseModel):
    """
    API response after upload; the admin UI stores `url` in site content.
    """
    url: str
    width: int
    height: int

    @classmethod
    def from_ref(cls, ref: StoredObjectRef) -> "HeroImageUploadResponse":
        return cls(url=ref.url, width=ref.width, height=ref.height)


class ErrorResponse(BaseModel):
    error: str
