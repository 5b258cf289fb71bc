#!/usr/bin/env python3
"""Seed product catalog script.

Creates the catalog tables if needed and inserts the development
data set into an empty database.

Usage:
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py --skip-create-tables
"""

import argparse
import asyncio

from product_catalog.catalog.seed import seed_catalog
from product_catalog.infrastructure.database import (
    async_session_factory,
    create_tables,
    engine,
    wait_for_database,
)


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Seed the product catalog with development data",
    )
    parser.add_argument(
        "--skip-create-tables",
        action="store_true",
        help="Don't create tables (use when migrations manage the schema)",
    )

    args = parser.parse_args()

    print("=" * 60)
    print("Product Catalog Seeder")
    print("=" * 60)

    await wait_for_database()

    if not args.skip_create_tables:
        print("Creating database tables...")
        await create_tables()
        print("Tables ready.")
        print()

    try:
        async with async_session_factory() as session:
            result = await seed_catalog(session)
    finally:
        await engine.dispose()

    if result["seeded"]:
        print(f"  ✓ Categories: {result['categories_created']}")
        print(f"  ✓ Products: {result['products_created']}")
    else:
        print("  ✓ Catalog already has data, nothing inserted")

    print("=" * 60)
    print("Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
