"""Database configuration and session management.

Provides async SQLAlchemy engine and session factory builders. Engines are
created by the application lifespan and handed to request handlers through
``app.state``; nothing here opens a connection at import time.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

# Base class for models
Base = declarative_base()


def create_engine(database_url: str, echo: bool = False, **kwargs) -> AsyncEngine:
    """Create async engine.

    Args:
        database_url: SQLAlchemy URL with an async driver.
        echo: Whether to log SQL statements.
        **kwargs: Extra engine options (e.g. ``poolclass``).

    Returns:
        AsyncEngine instance.
    """
    kwargs.setdefault("pool_pre_ping", True)
    return create_async_engine(database_url, echo=echo, **kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory bound to an engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create database tables if they don't exist."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def check_connection(engine: AsyncEngine) -> bool:
    """Check database connectivity.

    Returns:
        True if a trivial query succeeds.
    """
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    return True
