"""Global error handling to keep responses uniform and free of internals.

Every error body has the shape ``{"message": str}``, optionally with
``detail`` (store error text) and ``missing`` (unset configuration).
"""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from sims_api.exceptions import LoginRateLimitedError, SimsAPIError

logger = logging.getLogger(__name__)


def _get_cors_headers(request: Request) -> dict[str, str]:
    """Get CORS headers for error responses.

    Responses built by the catch-all handler bypass the CORS middleware,
    so the allowed origin is echoed here.

    Args:
        request: The incoming request

    Returns:
        Dict of CORS headers to add to the response
    """
    origin = request.headers.get("origin")
    if not origin:
        return {}

    if origin in request.app.state.settings.cors_origins_list:
        return {"Access-Control-Allow-Origin": origin, "Vary": "Origin"}

    return {}


def _is_debug(request: Request) -> bool:
    return bool(request.app.state.settings.debug)


# Safe error messages that can be shown to users
SAFE_ERROR_MESSAGES = {
    400: "Invalid payload",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not found",
    405: "Method not allowed",
    409: "Conflict",
    429: "Too many requests",
    500: "Internal server error",
    503: "Service temporarily unavailable",
}


def _error_body(message: str, extra: dict[str, Any] | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"message": message}
    if extra:
        body.update(extra)
    return body


async def sims_api_exception_handler(request: Request, exc: SimsAPIError) -> JSONResponse:
    """Render domain exceptions with their own status code and message.

    Args:
        request: FastAPI request
        exc: Domain exception

    Returns:
        JSONResponse with message and any details
    """
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} for {request.method} {request.url.path}: {exc.message}")

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.message, exc.details),
        headers=_get_cors_headers(request),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions raised by the framework (404, 405, ...).

    Args:
        request: FastAPI request
        exc: HTTP exception

    Returns:
        JSONResponse with a generic message
    """
    if _is_debug(request) and isinstance(exc.detail, str):
        message = exc.detail
    else:
        message = SAFE_ERROR_MESSAGES.get(exc.status_code, "Request failed")

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(message),
        headers={**(exc.headers or {}), **_get_cors_headers(request)},
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report request validation failures as an invalid payload.

    Args:
        request: FastAPI request
        exc: Validation exception

    Returns:
        JSONResponse with status 400
    """
    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(SAFE_ERROR_MESSAGES[400]),
        headers=_get_cors_headers(request),
    )


async def login_rate_limited_handler(request: Request, exc: LoginRateLimitedError) -> JSONResponse:
    """Reject a rate-limited login with Retry-After.

    Args:
        request: FastAPI request
        exc: Rate limit exception carrying the seconds until reset

    Returns:
        JSONResponse with status 429
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.message),
        headers={
            "Retry-After": str(exc.retry_after),
            **_get_cors_headers(request),
        },
    )


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handle store errors that escaped the service layer.

    Args:
        request: FastAPI request
        exc: SQLAlchemy exception

    Returns:
        JSONResponse with a generic store error
    """
    logger.error(f"Database error for {request.url.path}: {exc}", exc_info=True)

    content = _error_body("Database error occurred")
    if _is_debug(request):
        content["detail"] = type(exc).__name__

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
        headers=_get_cors_headers(request),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without leaking information.

    Args:
        request: FastAPI request
        exc: Unexpected exception

    Returns:
        JSONResponse with generic error
    """
    logger.error(f"Unhandled exception for {request.url.path}: {exc}", exc_info=True)

    content = _error_body(SAFE_ERROR_MESSAGES[500])
    if _is_debug(request):
        content["detail"] = str(exc)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
        headers=_get_cors_headers(request),
    )
