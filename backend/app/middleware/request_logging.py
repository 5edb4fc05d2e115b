"""
Per-request access logging.

- Accepts an upstream x-request-id (or mints one) and echoes it on the response.
- The app runs in a separate task from this middleware, so context vars set
  downstream (actor, object_key) are not visible here; routes that want them
  on the access line publish them on `request.state` instead.
"""

from __future__ import annotations

import time
import uuid
import logging

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.core.request_context import set_context, clear_context


logger = logging.getLogger("app.http")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        rid = request.headers.get("x-request-id") or str(uuid.uuid4())
        set_context(request_id=rid)

        t0 = time.perf_counter()
        try:
            logger.info(
                "http.request",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "content_length": request.headers.get("content-length"),
                },
            )
            response: Response = await call_next(request)

            fields = {
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": int((time.perf_counter() - t0) * 1000),
            }
            for name in ("actor", "object_key"):
                value = getattr(request.state, name, None)
                if value:
                    fields[name] = value
            logger.info("http.response", extra=fields)

            response.headers["x-request-id"] = rid
            return response
        finally:
            clear_context()
