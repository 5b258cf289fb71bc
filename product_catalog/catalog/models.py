"""SQLAlchemy models for the product catalog.

Defines Category and Product tables plus the read model returned
by product queries.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    true,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from product_catalog.infrastructure.database import Base

NAME_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 2000
CATEGORY_NAME_MAX_LENGTH = 100
CATEGORY_DESCRIPTION_MAX_LENGTH = 500


class Category(Base):
    """Product category.

    Attributes:
        id: Category identifier.
        name: Display name.
        description: Optional description.
        is_active: Inactive categories are hidden and cannot take new products.
        products: Products filed under this category.
    """

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(CATEGORY_NAME_MAX_LENGTH), nullable=False)
    description: Mapped[str | None] = mapped_column(
        String(CATEGORY_DESCRIPTION_MAX_LENGTH), nullable=True
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true(), index=True
    )

    # Relationships
    products: Mapped[list["Product"]] = relationship("Product", back_populates="category")

    def __repr__(self) -> str:
        """String representation."""
        return f"<Category(id={self.id}, name={self.name})>"


class Product(Base):
    """Product entity in the catalog.

    Products are never removed from storage; deleting one clears
    ``is_active`` instead.

    Attributes:
        id: Product identifier.
        name: Product name.
        description: Product description.
        price: Unit price, two decimal places.
        category_id: Owning category.
        stock_quantity: Units on hand.
        created_date: Creation timestamp (UTC).
        is_active: False once the product has been deleted.
    """

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(
        String(DESCRIPTION_MAX_LENGTH), nullable=True
    )
    price: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False, index=True)
    category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("categories.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    stock_quantity: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )
    created_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true(), index=True
    )

    # Relationships
    category: Mapped["Category"] = relationship("Category", back_populates="products")

    __table_args__ = (
        Index("ix_products_is_active_category_id", "is_active", "category_id"),
        CheckConstraint("price > 0", name="ck_products_price_positive"),
        CheckConstraint("stock_quantity >= 0", name="ck_products_stock_non_negative"),
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(id={self.id}, name={self.name[:30]})>"


@dataclass
class ProductDTO:
    """Product as returned by read queries, joined with its category name."""

    id: int
    name: str
    description: str | None
    price: Decimal
    category_id: int
    category_name: str
    stock_quantity: int
    created_date: datetime
    is_active: bool
