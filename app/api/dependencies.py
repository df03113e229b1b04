"""Shared FastAPI dependencies.

Store handles live on ``app.state`` (set up by the application
lifespan) and are handed to services per request.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.cart.service import CartService
from app.catalog.service import CatalogService

USER_ID_HEADER = "X-User-ID"


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Get database session for the request.

    Commits when the handler succeeds and rolls back otherwise.

    Yields:
        AsyncSession for database operations.
    """
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_catalog_service(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CatalogService:
    """Get catalog service bound to the request session."""
    return CatalogService(session)


def get_cart_service(
    request: Request,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CartService:
    """Get cart service with request ID."""
    request_id = getattr(request.state, "request_id", None)
    return CartService(session, request_id=request_id)


def get_current_user_id(
    x_user_id: Annotated[str | None, Header(alias=USER_ID_HEADER)] = None,
) -> str:
    """Get the authenticated user forwarded by the identity provider.

    Raises:
        HTTPException: If the header is missing or blank.
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "error_code": "MISSING_USER",
                "message": f"Missing {USER_ID_HEADER} header",
            },
        )
    return x_user_id.strip()
