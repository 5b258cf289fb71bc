"""Development seed data for the catalog.

A small fixed data set of five categories and twenty products, a
few of them out of stock, used to populate an empty database.
"""

from decimal import Decimal
from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from product_catalog.catalog.models import Category, Product
from product_catalog.catalog.repository import CategoryRepository, ProductRepository

logger = structlog.get_logger()

# (name, description)
SEED_CATEGORIES: list[tuple[str, str]] = [
    ("Electronics", "Electronic devices and accessories"),
    ("Clothing", "Apparel and fashion items"),
    ("Books", "Physical and digital books"),
    ("Home & Garden", "Home improvement and garden supplies"),
    ("Sports & Outdoors", "Sporting goods and outdoor equipment"),
]

# (category name, product name, description, price, stock quantity)
SEED_PRODUCTS: list[tuple[str, str, str, str, int]] = [
    ("Electronics", "Wireless Bluetooth Headphones", "High-quality noise-canceling headphones", "149.99", 50),
    ("Electronics", "USB-C Charging Cable", "Fast charging cable, 6ft length", "12.99", 200),
    ("Electronics", "Portable Power Bank", "10000mAh portable charger", "29.99", 75),
    ("Electronics", "Wireless Mouse", "Ergonomic wireless mouse with adjustable DPI", "24.99", 100),
    ("Electronics", "Smart Watch", "Fitness tracking smartwatch with heart rate monitor", "199.99", 0),
    ("Clothing", "Cotton T-Shirt", "100% organic cotton, available in multiple colors", "19.99", 150),
    ("Clothing", "Denim Jeans", "Classic fit denim jeans", "49.99", 80),
    ("Clothing", "Running Shoes", "Lightweight running shoes with cushioned sole", "89.99", 45),
    ("Clothing", "Winter Jacket", "Insulated waterproof winter jacket", "129.99", 0),
    ("Books", "Clean Code", "A Handbook of Agile Software Craftsmanship by Robert C. Martin", "39.99", 30),
    ("Books", "Design Patterns", "Elements of Reusable Object-Oriented Software", "54.99", 25),
    ("Books", "The Pragmatic Programmer", "Your Journey to Mastery, 20th Anniversary Edition", "49.99", 40),
    ("Books", "Domain-Driven Design", "Tackling Complexity in the Heart of Software", "59.99", 15),
    ("Home & Garden", "Garden Hose", "50ft expandable garden hose with spray nozzle", "34.99", 60),
    ("Home & Garden", "LED Desk Lamp", "Adjustable LED desk lamp with USB charging port", "42.99", 85),
    ("Home & Garden", "Tool Set", "130-piece household tool kit", "79.99", 35),
    ("Home & Garden", "Plant Pot Set", "Set of 5 ceramic plant pots in various sizes", "29.99", 0),
    ("Sports & Outdoors", "Yoga Mat", "Non-slip yoga mat, 6mm thick", "24.99", 120),
    ("Sports & Outdoors", "Camping Tent", "2-person waterproof camping tent", "89.99", 20),
    ("Sports & Outdoors", "Resistance Bands Set", "Set of 5 resistance bands with different strengths", "19.99", 90),
]


async def seed_catalog(session: AsyncSession) -> dict[str, Any]:
    """Insert the seed data set unless the catalog already has categories.

    Args:
        session: Async SQLAlchemy session. Committed on success.

    Returns:
        Seeding result with counts.
    """
    categories = CategoryRepository(session)
    products = ProductRepository(session)

    if await categories.count() > 0:
        logger.info("Database already seeded")
        return {"seeded": False, "categories_created": 0, "products_created": 0}

    logger.info("Seeding database")

    by_name: dict[str, Category] = {}
    for name, description in SEED_CATEGORIES:
        by_name[name] = await categories.add(Category(name=name, description=description))

    created = await products.add_all(
        [
            Product(
                name=name,
                description=description,
                price=Decimal(price),
                category_id=by_name[category_name].id,
                stock_quantity=stock,
            )
            for category_name, name, description, price, stock in SEED_PRODUCTS
        ]
    )
    await session.commit()

    logger.info(
        "Database seeded",
        category_count=len(by_name),
        product_count=len(created),
    )
    return {
        "seeded": True,
        "categories_created": len(by_name),
        "products_created": len(created),
    }
