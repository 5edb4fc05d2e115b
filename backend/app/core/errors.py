"""
errors.py
- Purpose: AppError used across services/validators for consistent errors.
- Pattern: raise AppError(...) in service/validator, handler converts to JSON response.
- Response body is always {"error": "<stable user message>"}; `reason` and
  `details` are for logs and never leak backend detail to the caller.
"""

from dataclasses import dataclass
from typing import Any

from fastapi import status as http_status

from app.core.error_codes import ErrorCode, status_for
from app.core.error_reasons import ErrorReason, message_for


@dataclass
class AppError(Exception):
    code: ErrorCode
    reason: str = ErrorReason.UNKNOWN.value
    status_code: int | None = None  # defaults to the code's status class
    details: dict[str, Any] | None = None
    message: str | None = None  # Optional override of the user message

    def __post_init__(self) -> None:
        if self.status_code is None:
            self.status_code = status_for(self.code)
        if isinstance(self.reason, ErrorReason):
            self.reason = self.reason.value

    @property
    def public_message(self) -> str:
        # Internal failures never surface their details.
        if self.code == ErrorCode.INTERNAL_ERROR:
            return message_for(ErrorCode.INTERNAL_ERROR)
        return self.message or message_for(self.code, self.details)

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.public_message}

    def __str__(self) -> str:
        return f"{self.code.value}: {self.reason}"


# Convenience constructors (optional but makes services cleaner)
def unauthorized(reason: str = ErrorReason.AUTH_REQUIRED, *, details: dict | None = None) -> AppError:
    return AppError(code=ErrorCode.UNAUTHORIZED, reason=reason, status_code=http_status.HTTP_401_UNAUTHORIZED, details=details)


def forbidden(reason: str = ErrorReason.AUTH_FORBIDDEN, *, details: dict | None = None) -> AppError:
    return AppError(code=ErrorCode.UNAUTHORIZED, reason=reason, status_code=http_status.HTTP_403_FORBIDDEN, details=details)


def internal_error(reason: str = ErrorReason.UNKNOWN, *, details: dict | None = None) -> AppError:
    return AppError(code=ErrorCode.INTERNAL_ERROR, reason=reason, status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR, details=details)
