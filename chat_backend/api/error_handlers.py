"""
Exception handlers rendering the failure envelope.

Every error leaves the API as ``{"ok": false, "error": {"code", "message"}}``
with the status class of the underlying failure. Unknown routes and
methods collapse into a generic not-found result.

Dependencies: fastapi, starlette, chat_backend.core.exceptions
System role: HTTP error mapping
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from chat_backend.core.exceptions import ChatBackendError, RateLimitedError
from chat_backend.models.common import ErrorDetail, ErrorResponse
from chat_backend.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


def error_response(
    status_code: int,
    code: str,
    message: str,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build a failure envelope response."""
    body = ErrorResponse(error=ErrorDetail(code=code, message=message))
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


async def chat_backend_error_handler(request: Request, exc: ChatBackendError) -> JSONResponse:
    """Map domain exceptions to their code and status."""
    headers = None
    if isinstance(exc, RateLimitedError):
        headers = {"Retry-After": str(exc.retry_after_seconds)}

    if exc.status_code >= 500:
        log_exception_with_context(
            logger,
            f"{request.method} {request.url.path} failed",
            exc,
            code=exc.code,
            details=exc.details,
        )
    else:
        logger.info(
            f"{request.method} {request.url.path} rejected: {exc.code}",
            extra={"code": exc.code, "field": exc.details.get("field")},
        )
    return error_response(exc.status_code, exc.code, exc.message, headers)


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies (invalid JSON, wrong top-level type, missing upload)."""
    logger.info(f"{request.method} {request.url.path} rejected: malformed request")
    return error_response(400, "bad_request", "Invalid request body")


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Routing errors from the framework."""
    if exc.status_code in (404, 405):
        return error_response(404, "not_found", "Not found")
    code = "internal" if exc.status_code >= 500 else "bad_request"
    return error_response(exc.status_code, code, str(exc.detail), getattr(exc, "headers", None))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: never leak internals."""
    log_exception_with_context(logger, f"{request.method} {request.url.path} crashed", exc)
    return error_response(500, "internal", "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all envelope handlers to the app."""
    app.add_exception_handler(ChatBackendError, chat_backend_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
