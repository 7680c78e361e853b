"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to the failure envelope {success: false, error, details?}.
Internal error detail is logged, never returned (unless DEBUG).
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.core.constants import STORE_RETRY_AFTER_SECONDS
from app.domain.exceptions import UserServiceException
from app.schemas.envelope import error_body

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status
_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "AUTHENTICATION_ERROR": 401,
    "RESOURCE_NOT_FOUND": 404,
    "USER_ALREADY_EXISTS": 409,
    "DUPLICATE_EMAIL": 409,
    "INFRASTRUCTURE_ERROR": 500,
    "STORE_UNAVAILABLE": 503,
}


def status_for(exc: UserServiceException) -> int:
    """HTTP status for a domain exception (400 for unmapped codes)."""
    return _ERROR_CODE_STATUS.get(exc.error_code, 400)


def _user_service_exception_handler(
    request: Request, exc: UserServiceException
) -> JSONResponse:
    """Return the failure envelope with the status mapped from error_code."""
    status = status_for(exc)
    headers: dict[str, str] | None = None
    if status >= 500:
        logger.error("%s on %s %s", exc.error_code, request.method, request.url.path)
        if status == 503:
            headers = {"Retry-After": str(STORE_RETRY_AFTER_SECONDS)}
    return JSONResponse(
        status_code=status,
        content=error_body(exc.message, exc.details),
        headers=headers,
    )


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 400 with field locations and messages (input values are not echoed)."""
    details = [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content=error_body("Invalid request", details),
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return the envelope for Starlette HTTP exceptions (unknown routes, 405, 429)."""
    message: Any = "Route not found" if exc.status_code == 404 else exc.detail
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(message)),
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    detail = str(exc) if get_settings().debug else None
    return JSONResponse(
        status_code=500,
        content=error_body("Internal server error", detail),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: UserServiceException (and
    subclasses), RequestValidationError, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(UserServiceException, _user_service_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
