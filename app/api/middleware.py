"""HTTP middleware for the storefront API.

- ``RequestContextMiddleware`` tags every request with a request ID (and
  the shopper's user ID when one is forwarded) for logs and responses.
- ``ApiKeyMiddleware`` guards everything except health checks, docs and
  anonymous catalog reads.

Uncaught errors are turned into the 500 envelope by the exception
handlers in ``app.api.errors``.
"""

import secrets
import time
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response, status
from starlette.middleware.base import BaseHTTPMiddleware

from app.api.dependencies import USER_ID_HEADER
from app.api.errors import error_response
from app.infrastructure.config import settings

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"

# Paths that never need the API key
PUBLIC_PATHS = {
    "/health",
    "/ready",
    "/docs",
    "/redoc",
    "/openapi.json",
}

# Catalog reads are open to anonymous shoppers
PUBLIC_READ_PREFIXES = (
    "/products",
    "/categories",
    "/colors",
)


def is_public(method: str, path: str) -> bool:
    """Check whether a request may skip API key authentication.

    Args:
        method: HTTP method.
        path: Request path without trailing slash.

    Returns:
        True for health checks, docs and catalog reads.
    """
    if path in PUBLIC_PATHS or path.startswith("/docs") or path.startswith("/redoc"):
        return True
    if method in ("GET", "HEAD"):
        return any(
            path == prefix or path.startswith(prefix + "/")
            for prefix in PUBLIC_READ_PREFIXES
        )
    return False


def parse_bearer(auth_header: str) -> str | None:
    """Extract the token from ``Bearer <token>``, or None if malformed."""
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


# ============================================================================
# Request Context
# ============================================================================


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind request and shopper identity to the log context.

    The request ID is taken from ``X-Request-ID`` or generated, stored on
    ``request.state`` for error envelopes and echoed in the response.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id
        user_id = request.headers.get(USER_ID_HEADER)

        started = time.perf_counter()
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

        with structlog.contextvars.bound_contextvars(request_id=request_id):
            try:
                response = await call_next(request)
                status_code = response.status_code
            finally:
                logger.info(
                    "Request completed",
                    method=request.method,
                    path=request.url.path,
                    user_id=user_id,
                    status_code=status_code,
                    duration_ms=round((time.perf_counter() - started) * 1000, 2),
                )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


# ============================================================================
# API Key Authentication
# ============================================================================


class ApiKeyMiddleware(BaseHTTPMiddleware):
    """Require ``Authorization: Bearer <api key>`` on non-public routes."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path.rstrip("/")
        if is_public(request.method, path):
            return await call_next(request)

        auth_header = request.headers.get("Authorization")
        if not auth_header:
            return self._reject(request, "UNAUTHORIZED", "Missing Authorization header")

        api_key = parse_bearer(auth_header)
        if api_key is None:
            return self._reject(
                request,
                "UNAUTHORIZED",
                "Invalid Authorization header format. Use 'Bearer <api_key>'",
            )

        if not secrets.compare_digest(api_key.encode(), settings.storefront_api_key.encode()):
            return self._reject(request, "INVALID_API_KEY", "Invalid API key")

        request.state.authenticated = True
        return await call_next(request)

    @staticmethod
    def _reject(request: Request, error_code: str, message: str) -> Response:
        logger.warning(
            "API key rejected",
            path=request.url.path,
            method=request.method,
            error_code=error_code,
        )
        return error_response(
            request,
            status.HTTP_401_UNAUTHORIZED,
            error_code,
            message,
            headers={"WWW-Authenticate": "Bearer"},
        )


# ============================================================================
# Middleware Setup
# ============================================================================


def setup_middleware(app: FastAPI) -> None:
    """Configure all middleware for the application.

    Middleware is added in reverse order (last added = first executed),
    so the request context is bound before authentication runs.

    Args:
        app: FastAPI application instance.
    """
    app.add_middleware(ApiKeyMiddleware)
    app.add_middleware(RequestContextMiddleware)
