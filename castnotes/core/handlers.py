from __future__ import annotations

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from castnotes.core.errors import AppError, upstream_message
from castnotes.core.logging import log_context

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    request_id = getattr(request.state, "request_id", None)
    with log_context(request_id=request_id, method=request.method, path=request.url.path):
        if exc.status_code >= 500:
            logger.error(
                "%s",
                exc.detail,
                exc_info=exc.__cause__,
                extra={"error_code": exc.code, "status_code": exc.status_code, "error_type": type(exc).__name__},
            )
        else:
            logger.warning("%s", exc.detail, extra={"error_code": exc.code, "status_code": exc.status_code})
    return _error_response(exc.status_code, exc.detail)


async def handle_validation_error(request: Request, _exc: RequestValidationError) -> JSONResponse:
    request_id = getattr(request.state, "request_id", None)
    with log_context(request_id=request_id, method=request.method, path=request.url.path):
        logger.warning("Invalid request", extra={"error_code": "invalid_request", "status_code": 400})
    return _error_response(400, "Invalid request")


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    request_id = getattr(request.state, "request_id", None)
    with log_context(request_id=request_id, method=request.method, path=request.url.path):
        logger.exception("Unhandled error", extra={"error_type": type(exc).__name__})
    return _error_response(500, upstream_message(exc, "Internal Server Error"))
