# app/auth/jwt.py
from datetime import datetime, timedelta, timezone
from jose import jwt, JWTError

from app.core.config import settings
from app.core import AppError, ErrorCode, ErrorReason
from app.core.errors import unauthorized


def _secret() -> str:
    if not settings.JWT_SECRET_KEY:
        raise AppError(code=ErrorCode.INTERNAL_ERROR, reason=ErrorReason.CONFIG_MISSING, message="JWT_SECRET_KEY is not set")
    return settings.JWT_SECRET_KEY


def create_access_token(*, subject: str, role: str, expires_minutes: int | None = None) -> str:
    """Mint a gate token (used by the identity side and by tests)."""
    minutes = expires_minutes or settings.JWT_ACCESS_TOKEN_EXPIRES_MINUTES
    now = datetime.now(timezone.utc)
    payload = {
        "sub": subject,
        "role": role,
        "exp": now + timedelta(minutes=minutes),
        "iat": now,
    }
    return jwt.encode(payload, _secret(), algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, _secret(), algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise unauthorized(ErrorReason.AUTH_INVALID)
