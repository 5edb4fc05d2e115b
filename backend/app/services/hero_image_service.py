"""
hero_image_service.py
- Purpose: Orchestrates the "upload hero image" workflow end-to-end.
- Owns: provisioning -> validation -> key generation -> storage write -> public URL.
- Design: Thick service; the router stays thin. Each step gates the next:
  nothing is written before validation passes, and nothing is validated
  after a write has started.
"""

import logging
import uuid

from app.core import AppError, ErrorCode, ErrorReason
from app.core.errors import internal_error
from app.core.request_context import set_context
from app.images.policy import HERO_IMAGE_POLICY, BucketPolicy, extension_for
from app.images.types import Rejected, StoredObjectRef, UploadCandidate
from app.services.storage.ports import ObjectStore, StorageError, StorageQuotaExceeded
from app.services.storage.provisioner import BucketProvisioner
from app.validations.image_validators import normalize_content_type, validate_hero_image

logger = logging.getLogger("app.hero_image_service")


def generate_object_key(content_type: str) -> str:
    """
    Storage key convention:
    {uuid4 hex}.{ext}

    - ext comes from the accepted content type, never from the client filename
    - fresh uuid per upload: no overwrite of earlier uploads, no path traversal
    """
    return f"{uuid.uuid4().hex}.{extension_for(content_type)}"


class HeroImageService:
    def __init__(self, store: ObjectStore, policy: BucketPolicy = HERO_IMAGE_POLICY):
        self.store = store
        self.policy = policy
        self.provisioner = BucketProvisioner(store)

    def upload(self, candidate: UploadCandidate | None) -> StoredObjectRef:
        # Step 1: container (no user content touched yet)
        self.provisioner.ensure(self.policy)

        # Step 2: validation
        verdict = validate_hero_image(candidate, self.policy)
        if isinstance(verdict, Rejected):
            logger.info(
                "hero_image.rejected",
                extra={"kind": verdict.kind.value, "detail": verdict.detail},
            )
            raise verdict.to_error()

        content_type = normalize_content_type(candidate.content_type)

        # Step 3: key
        key = generate_object_key(content_type)
        set_context(object_key=key)

        # Step 4: write
        try:
            self.store.write_object(self.policy.name, key, candidate.data, content_type)
        except StorageQuotaExceeded as e:
            logger.error("hero_image.storage_failed", extra={"bucket": self.policy.name, "error": str(e)})
            raise AppError(code=ErrorCode.STORAGE_QUOTA_EXCEEDED, reason=ErrorReason.QUOTA_EXCEEDED) from e
        except StorageError as e:
            logger.error("hero_image.storage_failed", extra={"bucket": self.policy.name, "error": str(e)})
            raise internal_error(ErrorReason.UPLOAD_FAILED) from e

        # Step 5: public URL
        try:
            url = self.store.resolve_public_url(self.policy.name, key)
        except StorageError as e:
            raise internal_error(ErrorReason.PUBLIC_URL_FAILED) from e
        if not url:
            raise internal_error(ErrorReason.PUBLIC_URL_FAILED)

        logger.info(
            "hero_image.stored",
            extra={
                "bucket": self.policy.name,
                "size_bytes": candidate.size,
                "content_type": content_type,
                "width": verdict.width,
                "height": verdict.height,
            },
        )
        return StoredObjectRef(
            bucket=self.policy.name,
            key=key,
            url=url,
            width=verdict.width,
            height=verdict.height,
        )
