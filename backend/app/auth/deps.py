# app/auth/deps.py
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.auth.jwt import decode_access_token
from app.core.config import settings
from app.core import ErrorReason
from app.core.errors import forbidden, unauthorized
from app.core.request_context import set_context

bearer = HTTPBearer(auto_error=False)


async def require_admin_or_staff(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> dict:
    """Admin gate: runs before any pipeline step; 401 without a valid token, 403 for other roles.

    Async on purpose: token decoding is CPU-only, and running in the request task
    lets the `actor` context var reach the threadpooled endpoint and the error handlers.
    """
    if not creds or creds.scheme.lower() != "bearer" or not creds.credentials:
        raise unauthorized(ErrorReason.AUTH_REQUIRED)

    payload = decode_access_token(creds.credentials)

    role = str(payload.get("role") or "").lower()
    if role not in settings.admin_roles:
        raise forbidden(ErrorReason.AUTH_FORBIDDEN, details={"role": role or None})

    actor = str(payload.get("sub") or "")
    set_context(actor=actor)
    # scope state is shared with the middleware, which runs in another task
    request.state.actor = actor
    return payload
