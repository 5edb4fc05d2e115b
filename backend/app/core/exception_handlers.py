"""
exception_handlers.py
- Purpose: Convert AppError (and generic exceptions) into consistent API responses.

Every failure leaves as {"error": "<message>"}. Errors are logged with request
context so failures are diagnosable without exposing backend detail.
"""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core import AppError, ErrorCode
from app.core.error_reasons import message_for

logger = logging.getLogger("app.exceptions")


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "app_error",
        extra={
            "path": str(getattr(request.url, "path", "")),
            "method": request.method,
            "status_code": exc.status_code,
            "code": exc.code.value,
            "reason": exc.reason,
            "details": exc.details,
        },
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(
        "request_validation_error",
        extra={"path": str(getattr(request.url, "path", "")), "method": request.method, "errors": str(exc.errors())},
    )
    return JSONResponse(status_code=422, content={"error": "Invalid request"})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "unhandled_exception",
        extra={"path": str(getattr(request.url, "path", "")), "method": request.method},
    )
    return JSONResponse(
        status_code=500,
        content={"error": message_for(ErrorCode.INTERNAL_ERROR)},
    )
