# app/core/error_codes.py
from enum import Enum

from fastapi import status as http_status


class ErrorCode(str, Enum):
    # Upload / validation (client fixable)
    MISSING_FILE = "MISSING_FILE"
    INVALID_TYPE = "INVALID_TYPE"
    TOO_LARGE = "TOO_LARGE"
    INVALID_DIMENSIONS = "INVALID_DIMENSIONS"
    CORRUPT_IMAGE = "CORRUPT_IMAGE"

    # Supabase / Storage
    STORAGE_QUOTA_EXCEEDED = "STORAGE_QUOTA_EXCEEDED"

    # Auth (raised by the admin gate, before the pipeline runs)
    UNAUTHORIZED = "UNAUTHORIZED"

    INTERNAL_ERROR = "INTERNAL_ERROR"


# Every code must have a status; tests assert the mapping is exhaustive.
ERROR_STATUS: dict[ErrorCode, int] = {
    ErrorCode.MISSING_FILE: http_status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_TYPE: http_status.HTTP_400_BAD_REQUEST,
    ErrorCode.TOO_LARGE: http_status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_DIMENSIONS: http_status.HTTP_400_BAD_REQUEST,
    ErrorCode.CORRUPT_IMAGE: http_status.HTTP_400_BAD_REQUEST,
    ErrorCode.STORAGE_QUOTA_EXCEEDED: http_status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.UNAUTHORIZED: http_status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INTERNAL_ERROR: http_status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(code: ErrorCode) -> int:
    return ERROR_STATUS[code]
