"""Shared fixtures for catalog tests.

Tests run against a temporary SQLite file. The schema is rebuilt and
filled through a plain synchronous engine, so fixtures never need an
event loop; async code under test uses its own aiosqlite engine on
the same file.
"""

from collections.abc import AsyncGenerator, Generator
from decimal import Decimal
from pathlib import Path

import pytest
from sqlalchemy import Engine, create_engine
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import NullPool

from product_catalog.catalog.models import Category, Product
from product_catalog.infrastructure.database import Base

# (name, is_active)
TEST_CATEGORIES = [
    ("Electronics", True),
    ("Clothing", True),
    ("Kitchen", True),
    ("Archived", False),
]

# (category, name, description, price, stock, is_active)
TEST_PRODUCTS = [
    ("Electronics", "Laptop", "High-performance laptop", "999.99", 10, True),
    ("Electronics", "Smartphone", "Latest smartphone model", "699.99", 25, True),
    ("Electronics", "Headphones", "Wireless headphones", "149.99", 50, True),
    ("Clothing", "T-Shirt", "Cotton t-shirt", "29.99", 100, True),
    ("Clothing", "Jeans", "Blue denim jeans", "59.99", 75, True),
    ("Clothing", "Sneakers", "Running sneakers", "89.99", 0, True),
    ("Electronics", "Inactive Product", "This product is inactive", "19.99", 5, False),
    ("Clothing", "50% Off Item", "Special sale_item with 50% discount", "49.99", 20, True),
    ("Kitchen", "Blender", "500 watt motor, final sale-item", "59.99", 0, True),
    ("Electronics", "Monitor Stand [Pro]", "Adjustable stand", "39.99", 5, True),
]


@pytest.fixture(scope="session")
def database_path(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """Path of the SQLite file shared by all tests."""
    return tmp_path_factory.mktemp("db") / "catalog.db"


@pytest.fixture
def sync_engine(database_path: Path) -> Generator[Engine, None, None]:
    """Synchronous engine on a freshly created schema."""
    engine = create_engine(f"sqlite:///{database_path}")
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def catalog_data(sync_engine: Engine) -> dict[str, int]:
    """Insert the test catalog.

    Returns:
        IDs of all categories and products keyed by name.
    """
    ids: dict[str, int] = {}
    with Session(sync_engine) as session:
        categories = {
            name: Category(name=name, description=f"{name} items", is_active=active)
            for name, active in TEST_CATEGORIES
        }
        session.add_all(categories.values())
        session.flush()

        products = [
            Product(
                name=name,
                description=description,
                price=Decimal(price),
                category_id=categories[category].id,
                stock_quantity=stock,
                is_active=active,
            )
            for category, name, description, price, stock, active in TEST_PRODUCTS
        ]
        session.add_all(products)
        session.commit()

        ids.update({c.name: c.id for c in categories.values()})
        ids.update({p.name: p.id for p in products})
    return ids


@pytest.fixture(scope="session")
def async_engine(database_path: Path) -> AsyncEngine:
    """Async engine for code under test.

    NullPool opens a connection per checkout, so the engine can be
    used from whichever event loop the test or TestClient runs.
    """
    return create_async_engine(f"sqlite+aiosqlite:///{database_path}", poolclass=NullPool)


@pytest.fixture
def session_factory(
    sync_engine: Engine,
    async_engine: AsyncEngine,
) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test database."""
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Async session for repository and service tests."""
    async with session_factory() as session:
        yield session
