#!/usr/bin/env python3
"""Seed product catalog script.

Generates and stores categories, colors and products using
deterministic generation. Re-running with the same options is a no-op.

Usage:
    python scripts/seed_catalog.py --mode small
    python scripts/seed_catalog.py --mode full
    python scripts/seed_catalog.py --mode small --seed 7 --database-url sqlite+aiosqlite:///./dev.db
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import app.cart.models  # noqa: F401  registers cart tables
from app.catalog.generator import GeneratorConfig
from app.catalog.service import CatalogService
from app.infrastructure.config import settings
from app.infrastructure.database import create_engine, create_session_factory, create_tables
from app.infrastructure.logging import configure_logging


async def seed(database_url: str, config: GeneratorConfig) -> dict:
    """Create tables and seed the catalog.

    Args:
        database_url: Database to seed.
        config: Generator configuration.

    Returns:
        Seeding result.
    """
    engine = create_engine(database_url)
    try:
        await create_tables(engine)
        session_factory = create_session_factory(engine)
        async with session_factory() as session:
            service = CatalogService(session)
            return await service.seed_catalog(config)
    finally:
        await engine.dispose()


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Seed the storefront product catalog",
    )
    parser.add_argument(
        "--mode",
        choices=["small", "full"],
        default="small",
        help="Catalog size: small (5 per category) or full (50 per category)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Override the random seed",
    )
    parser.add_argument(
        "--database-url",
        default=settings.database_url,
        help="Database URL (default: DATABASE_URL setting)",
    )

    args = parser.parse_args()

    configure_logging(settings.log_level, json_logs=False)

    config = GeneratorConfig.full() if args.mode == "full" else GeneratorConfig.small()
    if args.seed is not None:
        config.seed = args.seed

    print("=" * 60)
    print("Storefront Catalog Seeder")
    print("=" * 60)
    print(f"Mode: {args.mode}")
    print(f"Seed: {config.seed}")
    print()

    result = await seed(args.database_url, config)

    print(f"  ✓ Categories: {result['categories']}")
    print(f"  ✓ Colors: {result['colors']}")
    print(f"  ✓ Created: {result['products_created']} products")
    print(f"  ✓ Skipped: {result['products_skipped']} existing products")
    print()
    print("=" * 60)
    print("Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
