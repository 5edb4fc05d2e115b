"""
supabase_storage.py
- Purpose: Storage adapter for Supabase Storage (public hero-images bucket).
- Owns: bucket listing/creation, object upload, public URL resolution.
- Design: Treat as an infrastructure adapter; no business logic. Backend
  errors are translated into the ports' exception types so the service never
  sees SDK-specific exceptions.
"""

from __future__ import annotations

import logging
from typing import Any

from app.core import AppError, ErrorCode, ErrorReason
from app.core.config import settings
from app.images.policy import BucketPolicy
from app.services.storage.ports import ContainerAlreadyExists, StorageError, StorageQuotaExceeded

logger = logging.getLogger("app.storage.supabase")


def _error_text(e: Exception) -> str:
    # storage3 errors carry message/status/code attributes in newer releases and a
    # {"statusCode", "error", "message"} dict as args[0] in older ones.
    parts = [str(e)]
    for attr in ("message", "status", "code", "error"):
        val = getattr(e, attr, None)
        if val is not None:
            parts.append(str(val))
    if e.args and isinstance(e.args[0], dict):
        parts.extend(str(v) for v in e.args[0].values())
    return " ".join(parts).lower()


def _status_codes(e: Exception) -> set[str]:
    codes = {str(getattr(e, attr)) for attr in ("status", "statusCode") if getattr(e, attr, None) is not None}
    if e.args and isinstance(e.args[0], dict):
        codes.update(str(e.args[0][k]) for k in ("status", "statusCode") if e.args[0].get(k) is not None)
    return codes


def _is_already_exists(e: Exception) -> bool:
    if "409" in _status_codes(e):
        return True
    text = _error_text(e)
    return "already exists" in text or "duplicate" in text


def _is_quota_exceeded(e: Exception) -> bool:
    return "quota" in _error_text(e)


def _bucket_name(bucket: Any) -> str:
    if isinstance(bucket, dict):
        return str(bucket.get("name") or bucket.get("id") or "")
    return str(getattr(bucket, "name", None) or getattr(bucket, "id", None) or "")


class SupabaseStorage:
    """
    Minimal adapter around Supabase Storage.

    Assumptions:
    - Client is built with the service-role key (bucket admin needs it)
    - Hero image bucket is public; we resolve plain public URLs, not signed ones
    """

    def __init__(self, client: Any | None = None):
        if client is not None:
            self._client = client
            return

        if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_ROLE_KEY:
            raise AppError(
                code=ErrorCode.INTERNAL_ERROR,
                reason=ErrorReason.CONFIG_MISSING,
                message="SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set",
            )

        # Import lazily so missing dependency errors are localized.
        try:
            from supabase import create_client  # type: ignore
        except ImportError as e:
            raise AppError(
                code=ErrorCode.INTERNAL_ERROR,
                reason=ErrorReason.MISSING_DEPENDENCY,
                message="Supabase client library is not installed or failed to import",
            ) from e

        self._client = create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)

    def container_exists(self, name: str) -> bool:
        try:
            buckets = self._client.storage.list_buckets() or []
        except Exception as e:
            raise StorageError(f"list buckets failed: {type(e).__name__}") from e
        return any(_bucket_name(b) == name for b in buckets)

    def create_container(self, name: str, policy: BucketPolicy) -> None:
        try:
            self._client.storage.create_bucket(name, options=policy.to_bucket_options())
        except Exception as e:
            if _is_already_exists(e):
                raise ContainerAlreadyExists(name) from e
            raise StorageError(f"create bucket '{name}' failed: {type(e).__name__}") from e

    def write_object(self, container: str, key: str, data: bytes, content_type: str) -> None:
        try:
            # file_options is NOT headers; upsert stays off so a key is written at most once.
            self._client.storage.from_(container).upload(
                path=key,
                file=data,
                file_options={"content-type": content_type, "upsert": "false"},
            )
        except Exception as e:
            if _is_quota_exceeded(e):
                raise StorageQuotaExceeded(str(e)) from e
            raise StorageError(f"upload '{key}' failed: {type(e).__name__}") from e

    def resolve_public_url(self, container: str, key: str) -> str:
        try:
            res = self._client.storage.from_(container).get_public_url(key)
        except Exception as e:
            raise StorageError(f"public url for '{key}' failed: {type(e).__name__}") from e

        # Recent clients return a plain string; older ones a {"publicUrl": ...} dict.
        if isinstance(res, dict):
            data = res.get("data") if isinstance(res.get("data"), dict) else res
            res = data.get("publicUrl") or data.get("publicURL") or data.get("public_url")
        url = str(res or "")
        # storage3 appends a bare "?" when no transform options are passed
        return url.rstrip("?")
