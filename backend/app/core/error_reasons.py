"""
error_reasons.py
- Purpose: Human-friendly "reason" strings and the user-facing message per ErrorCode.
- Keep these stable; they are surfaced verbatim in the admin UI.
"""

from enum import Enum
from typing import Any

from app.core.error_codes import ErrorCode


class ErrorReason(str, Enum):
    UNKNOWN = "Unknown error"

    # User-facing (templated where the message carries measurements)
    NO_FILE = "No file provided"
    INVALID_IMAGE_TYPE = "File must be JPEG, PNG, or WebP"
    FILE_TOO_LARGE = "File size must be under {limit_mb}MB (current: {size_mb}MB)"
    IMAGE_TOO_SMALL = "Image must be at least {min_width}x{min_height} pixels (actual: {width}x{height})"
    IMAGE_UNREADABLE = "Failed to read image metadata. Please ensure the file is a valid image."
    QUOTA_EXCEEDED = "Storage quota exceeded"
    ADMIN_REQUIRED = "Unauthorized: Admin or staff access required"
    INTERNAL_ERROR = "Internal server error"

    # Internal only (logs)
    STORAGE_UNAVAILABLE = "Storage unavailable"
    UPLOAD_FAILED = "upload failed"
    PUBLIC_URL_FAILED = "public url resolution failed"
    MISSING_DEPENDENCY = "Missing dependency"
    CONFIG_MISSING = "Missing configuration"
    AUTH_REQUIRED = "Authentication required"
    AUTH_INVALID = "Invalid authentication"
    AUTH_FORBIDDEN = "Authentication forbidden"


_USER_MESSAGES: dict[ErrorCode, ErrorReason] = {
    ErrorCode.MISSING_FILE: ErrorReason.NO_FILE,
    ErrorCode.INVALID_TYPE: ErrorReason.INVALID_IMAGE_TYPE,
    ErrorCode.TOO_LARGE: ErrorReason.FILE_TOO_LARGE,
    ErrorCode.INVALID_DIMENSIONS: ErrorReason.IMAGE_TOO_SMALL,
    ErrorCode.CORRUPT_IMAGE: ErrorReason.IMAGE_UNREADABLE,
    ErrorCode.STORAGE_QUOTA_EXCEEDED: ErrorReason.QUOTA_EXCEEDED,
    ErrorCode.UNAUTHORIZED: ErrorReason.ADMIN_REQUIRED,
    ErrorCode.INTERNAL_ERROR: ErrorReason.INTERNAL_ERROR,
}


class _Detail(dict):
    # Unknown template fields render as "?" rather than failing the response.
    def __missing__(self, key: str) -> str:
        return "?"


def message_for(code: ErrorCode, details: dict[str, Any] | None = None) -> str:
    """Render the stable user message for `code`, filling measurements from `details`."""
    return _USER_MESSAGES[code].value.format_map(_Detail(details or {}))
