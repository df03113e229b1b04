"""Storefront API main application module.

This module initializes the FastAPI application and configures
core middleware, routers, and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.cart import router as cart_router
from app.api.categories import router as categories_router
from app.api.colors import router as colors_router
from app.api.errors import setup_exception_handlers
from app.api.health import router as health_router
from app.api.middleware import setup_middleware
from app.api.products import router as products_router
from app.cart.repository import check_upsert_support
from app.infrastructure.config import settings
from app.infrastructure.database import create_engine, create_session_factory, create_tables
from app.infrastructure.logging import configure_logging

configure_logging(settings.log_level, settings.log_json)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Builds the database engine and session factory and exposes them on
    ``app.state`` for request dependencies.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.

    Raises:
        UnsupportedDialectError: If the database can't run cart upserts.
    """
    # Startup
    logger.info(
        "Starting storefront API",
        version=settings.api_version,
        debug=settings.debug,
    )

    engine = create_engine(settings.database_url, echo=settings.debug)
    try:
        check_upsert_support(engine.dialect.name)
    except Exception:
        await engine.dispose()
        raise

    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    if settings.auto_create_tables:
        await create_tables(engine)
        logger.info("Database tables ensured")

    yield

    # Shutdown
    logger.info("Shutting down storefront API")
    await engine.dispose()


app = FastAPI(
    title="Storefront API",
    description="Catalog browsing and shopping cart backend",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware (must be added before custom middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup custom middleware (request context, API key auth)
setup_middleware(app)
setup_exception_handlers(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(products_router)
app.include_router(categories_router)
app.include_router(colors_router)
app.include_router(cart_router)
