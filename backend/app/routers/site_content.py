"""
site_content.py
- Purpose: Admin API routes for site content media (hero image upload).
- Design: Keep router thin. Delegate business logic to services.
"""

from fastapi import APIRouter, Depends, File, Request, UploadFile

from app.api.deps import get_hero_image_service
from app.auth.deps import require_admin_or_staff
from app.images.types import UploadCandidate
from app.schemas.hero_image import ErrorResponse, HeroImageUploadResponse
from app.services.hero_image_service import HeroImageService

router = APIRouter(
    prefix="/api/admin/settings/site-content",
    tags=["Site content"],
    # The gate runs before the service (and its storage client) is built.
    dependencies=[Depends(require_admin_or_staff)],
)


@router.post(
    "/upload",
    response_model=HeroImageUploadResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def upload_hero_image(
    request: Request,
    file: UploadFile | None = File(None),
    svc: HeroImageService = Depends(get_hero_image_service),
):
    candidate = None
    if file is not None:
        candidate = UploadCandidate(
            data=file.file.read(),
            content_type=file.content_type or "",
            filename=file.filename,
        )

    ref = svc.upload(candidate)
    request.state.object_key = ref.key
    return HeroImageUploadResponse.from_ref(ref)
