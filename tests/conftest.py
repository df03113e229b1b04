"""Shared fixtures: a throwaway SQLite database with a small sample catalog."""

import asyncio
from collections.abc import AsyncGenerator, Generator
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlalchemy.pool import NullPool

import app.cart.models  # noqa: F401  registers cart tables
from app.catalog.models import Category, Color, Product
from app.infrastructure.database import create_engine, create_session_factory, create_tables
from app.main import app

BASE_TIME = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@dataclass(frozen=True)
class SampleCatalog:
    """Identifiers of the sample catalog.

    Products (newest last):

    ======  ======  =====  =====
    id      cat     color  price
    ======  ======  =====  =====
    prod-1  shoes   red    50.00
    prod-2  shoes   blue   30.00
    prod-3  shoes   -      70.00
    prod-4  shoes   red    30.00
    prod-5  hats    blue   20.00
    ======  ======  =====  =====
    """

    shoes_id: str = "cat-shoes"
    hats_id: str = "cat-hats"
    red_id: str = "color-red"
    blue_id: str = "color-blue"


SAMPLE_PRODUCTS = [
    ("prod-1", "cat-shoes", "color-red", "50.00", "Acme Runner"),
    ("prod-2", "cat-shoes", "color-blue", "30.00", "Acme Sneaker"),
    ("prod-3", "cat-shoes", None, "70.00", "Globex Boot"),
    ("prod-4", "cat-shoes", "color-red", "30.00", "Initech Loafer"),
    ("prod-5", "cat-hats", "color-blue", "20.00", "Contoso Cap"),
]


async def insert_sample_catalog(session: AsyncSession) -> SampleCatalog:
    """Insert the sample catalog and commit."""
    sample = SampleCatalog()

    session.add_all([
        Category(id=sample.shoes_id, name="Shoes", slug="shoes"),
        Category(id=sample.hats_id, name="Hats", slug="hats"),
        Color(id=sample.red_id, name="Red", slug="red", hex="#ff0000"),
        Color(id=sample.blue_id, name="Blue", slug="blue", hex="#00f"),
    ])
    await session.flush()

    for position, (product_id, category_id, color_id, price, name) in enumerate(SAMPLE_PRODUCTS, start=1):
        created_at = BASE_TIME + timedelta(minutes=position)
        session.add(
            Product(
                id=product_id,
                category_id=category_id,
                color_id=color_id,
                name=name,
                description=f"{name} description",
                price=Decimal(price),
                stock=10,
                images=[f"https://img.example.com/{product_id}.jpg"],
                features=["Lightweight"],
                created_at=created_at,
                updated_at=created_at,
            )
        )

    await session.commit()
    return sample


# ============================================================================
# Async Fixtures (service and repository tests)
# ============================================================================


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    """SQLite database file unique to the test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'storefront.db'}"


@pytest_asyncio.fixture
async def engine(database_url: str) -> AsyncGenerator[AsyncEngine, None]:
    """Engine with all tables created."""
    engine = create_engine(database_url, poolclass=NullPool)
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Database session for the test."""
    async with create_session_factory(engine)() as session:
        yield session


@pytest_asyncio.fixture
async def sample_catalog(session: AsyncSession) -> SampleCatalog:
    """Sample catalog stored through the test session."""
    return await insert_sample_catalog(session)


# ============================================================================
# Sync Fixtures (API tests)
# ============================================================================


@pytest.fixture
def app_database(database_url: str) -> Generator[SampleCatalog, None, None]:
    """Point the application at a fresh database holding the sample catalog.

    TestClient is used without its context manager, so the lifespan
    doesn't run and the store handles are installed here instead.
    """

    async def prepare() -> SampleCatalog:
        setup_engine = create_engine(database_url, poolclass=NullPool)
        try:
            await create_tables(setup_engine)
            async with create_session_factory(setup_engine)() as session:
                return await insert_sample_catalog(session)
        finally:
            await setup_engine.dispose()

    sample = asyncio.run(prepare())

    engine = create_engine(database_url, poolclass=NullPool)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    yield sample

    del app.state.session_factory
    del app.state.engine
