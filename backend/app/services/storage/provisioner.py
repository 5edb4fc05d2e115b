"""
Bucket provisioning for public image containers.

Intent:
    Make sure the container an upload targets exists with the declared
    visibility, size limit and MIME allow-list before anything is written.

Behavior:
    - Checks existence first; an existing container is left untouched (no
      policy re-application).
    - Creates the container when missing.
    - A concurrent request winning the create race is success, not failure:
      provisioning is idempotent ensure, not create-or-fail.
    - Any other backend failure is an infrastructure fault: logged and raised
      as an internal AppError. Never retried here.
"""

from __future__ import annotations

import logging

from app.core import ErrorReason
from app.core.errors import internal_error
from app.images.policy import BucketPolicy
from app.services.storage.ports import ContainerAlreadyExists, ObjectStore, StorageError

logger = logging.getLogger("app.storage.provisioner")


class BucketProvisioner:
    def __init__(self, store: ObjectStore):
        self.store = store

    def ensure(self, policy: BucketPolicy) -> None:
        try:
            if self.store.container_exists(policy.name):
                return

            try:
                self.store.create_container(policy.name, policy)
            except ContainerAlreadyExists:
                logger.info("hero_image.bucket_race", extra={"bucket": policy.name})
                return

        except StorageError as e:
            logger.error(
                "hero_image.provision_failed",
                extra={"bucket": policy.name, "error": str(e)},
            )
            raise internal_error(ErrorReason.STORAGE_UNAVAILABLE, details={"bucket": policy.name}) from e

        logger.info(
            "hero_image.bucket_created",
            extra={"bucket": policy.name, "public": policy.public, "file_size_limit": policy.max_size_bytes},
        )
