"""
Storage port used by the hero image pipeline.

Keep this small and framework-agnostic so tests can supply simple fakes.
The pipeline only ever needs four capabilities; anything else a backend
offers stays behind the adapter.
"""

from __future__ import annotations

from typing import Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from app.images.policy import BucketPolicy


class StorageError(Exception):
    """Backend refused or failed an operation."""


class ContainerAlreadyExists(StorageError):
    """create_container lost a race with another request (or an earlier run)."""


class StorageQuotaExceeded(StorageError):
    """Backend rejected a write because the project's storage quota is used up."""


class ObjectStore(Protocol):
    """Minimal interface to provision a public container and publish objects into it.

    Permissions:
        Implementations run with service-role credentials; callers must have
        passed the admin gate already.
    """

    def container_exists(self, name: str) -> bool: ...

    def create_container(self, name: str, policy: "BucketPolicy") -> None: ...

    def write_object(self, container: str, key: str, data: bytes, content_type: str) -> None: ...

    def resolve_public_url(self, container: str, key: str) -> str: ...


__all__ = ["ContainerAlreadyExists", "ObjectStore", "StorageError", "StorageQuotaExceeded"]
