"""Error responses for the storefront API.

Every failure, whether raised by a service, by request validation or by
the auth middleware, is returned as the same JSON envelope:
``{error_code, message, details, request_id}``.
"""

from typing import Any

import structlog
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.domain.exceptions import (
    ConflictError,
    DomainError,
    InvalidReferenceError,
    NotFoundError,
    ValidationError,
)

logger = structlog.get_logger()

# Most specific first
DOMAIN_ERROR_STATUS: list[tuple[type[DomainError], int]] = [
    (InvalidReferenceError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
]


def error_body(
    request: Request,
    error_code: str,
    message: str,
    details: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Build the standard error envelope."""
    return {
        "error_code": error_code,
        "message": message,
        "details": details or [],
        "request_id": getattr(request.state, "request_id", None),
    }


def error_response(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    details: list[dict[str, Any]] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build a JSON response carrying the error envelope."""
    return JSONResponse(
        status_code=status_code,
        content=error_body(request, error_code, message, details),
        headers=headers,
    )


def domain_error_status(exc: DomainError) -> int:
    """Get HTTP status for a domain error."""
    for error_type, status_code in DOMAIN_ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


# ============================================================================
# Exception Handlers
# ============================================================================


async def domain_exception_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Map domain errors onto HTTP responses."""
    status_code = domain_error_status(exc)

    logger.info(
        "Domain error",
        path=request.url.path,
        error_code=exc.error_code,
        status_code=status_code,
    )

    return error_response(
        request,
        status_code,
        exc.error_code,
        exc.message,
        [{"field": key, "message": str(value)} for key, value in exc.details.items()],
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions with consistent format."""
    detail = exc.detail
    if isinstance(detail, dict):
        error_code = detail.get("error_code", "ERROR")
        message = detail.get("message", str(detail))
        details = detail.get("details", [])
    else:
        error_code = "ERROR"
        message = str(detail)
        details = []

    return error_response(
        request,
        exc.status_code,
        error_code,
        message,
        details,
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Flatten pydantic errors into ``{field, message}`` details."""
    details = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ())),
            "message": error.get("msg", "Invalid value"),
        }
        for error in exc.errors()
    ]

    return error_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_ERROR",
        "Request validation failed",
        details,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log and hide anything the handlers above don't cover."""
    logger.exception(
        "Unhandled exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
    )

    return error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        "An internal error occurred",
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the application.

    Args:
        app: FastAPI application instance.
    """
    app.add_exception_handler(DomainError, domain_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
