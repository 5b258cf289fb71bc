"""Catalog services for product and category operations.

High-level services that combine repository operations with the
catalog's business rules: category validation, soft delete and
paginated search.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Generic, TypeVar

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from product_catalog.catalog.exceptions import CategoryNotFoundError, ProductNotFoundError
from product_catalog.catalog.models import Category, Product, ProductDTO
from product_catalog.catalog.repository import (
    CategoryRepository,
    ProductRepository,
    resolve_sort_column,
)

T = TypeVar("T")

logger = structlog.get_logger()


@dataclass
class ProductFilter:
    """Filter parameters for product search.

    Attributes:
        search_term: Words matched against name and description.
        category_id: Filter by category ID.
        min_price: Minimum price.
        max_price: Maximum price.
        in_stock: Filter by availability.
    """

    search_term: str | None = None
    category_id: int | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    in_stock: bool | None = None


@dataclass
class PaginationParams:
    """Pagination parameters.

    Attributes:
        page: Page number (1-indexed).
        page_size: Items per page.
        sort_by: Sort field.
        sort_order: Sort order (asc/desc).
    """

    page: int = 1
    page_size: int = 10
    sort_by: str = "name"
    sort_order: str = "asc"

    @property
    def offset(self) -> int:
        """Calculate offset from page number."""
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        """Get limit (alias for page_size)."""
        return self.page_size


@dataclass
class PaginatedResult(Generic[T]):
    """Paginated result container.

    Attributes:
        items: List of items.
        total: Total count.
        page: Current page.
        page_size: Items per page.
        total_pages: Total number of pages.
    """

    items: list[T]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        """Calculate total pages."""
        return (self.total + self.page_size - 1) // self.page_size

    @property
    def has_next(self) -> bool:
        """Check if there's a next page."""
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        """Check if there's a previous page."""
        return self.page > 1


@dataclass
class ProductInput:
    """Writable product fields, used for both create and update."""

    name: str
    price: Decimal
    category_id: int
    stock_quantity: int
    description: str | None = None


@dataclass
class CategoryInput:
    """Writable category fields."""

    name: str
    description: str | None = None


class ProductService:
    """Service for product operations.

    Example usage:
        async with async_session_factory() as session:
            service = ProductService(session)
            results = await service.search_products(
                ProductFilter(search_term="headphones", in_stock=True),
                PaginationParams(page=1, sort_by="price"),
            )
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session
        self.repository = ProductRepository(session)
        self.categories = CategoryRepository(session)

    async def list_products(self) -> list[ProductDTO]:
        """Get all active products."""
        logger.debug("Retrieving all active products")
        return await self.repository.list_active()

    async def get_product(self, product_id: int) -> ProductDTO:
        """Get an active product by ID.

        Raises:
            ProductNotFoundError: If the product is missing or deleted.
        """
        logger.debug("Retrieving product", product_id=product_id)
        product = await self.repository.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    async def search_products(
        self,
        filters: ProductFilter,
        pagination: PaginationParams,
    ) -> PaginatedResult[ProductDTO]:
        """Search products with filters and pagination.

        Args:
            filters: Filter parameters.
            pagination: Pagination parameters.

        Returns:
            Paginated product results.
        """
        logger.debug(
            "Searching products",
            search_term=filters.search_term,
            sort_by=resolve_sort_column(pagination.sort_by),
            page=pagination.page,
            page_size=pagination.page_size,
        )
        items, total = await self.repository.search(
            search_term=filters.search_term,
            category_id=filters.category_id,
            min_price=filters.min_price,
            max_price=filters.max_price,
            in_stock=filters.in_stock,
            sort_by=pagination.sort_by,
            sort_order=pagination.sort_order,
            limit=pagination.limit,
            offset=pagination.offset,
        )

        return PaginatedResult(
            items=items,
            total=total,
            page=pagination.page,
            page_size=pagination.page_size,
        )

    async def create_product(self, data: ProductInput) -> ProductDTO:
        """Create a new active product.

        Args:
            data: Product fields.

        Returns:
            Created product with its category name.

        Raises:
            CategoryNotFoundError: If the category is missing or inactive.
        """
        await self._ensure_category(data.category_id)

        product = Product(
            name=data.name,
            description=data.description,
            price=data.price,
            category_id=data.category_id,
            stock_quantity=data.stock_quantity,
            created_date=datetime.now(timezone.utc),
            is_active=True,
        )
        await self.repository.add(product)
        logger.info("Product created", product_id=product.id, category_id=product.category_id)

        return await self.get_product(product.id)

    async def update_product(self, product_id: int, data: ProductInput) -> ProductDTO:
        """Replace the writable fields of an active product.

        The category is only re-validated when it changes.

        Raises:
            ProductNotFoundError: If the product is missing or deleted.
            CategoryNotFoundError: If the new category is missing or inactive.
        """
        product = await self.repository.get_entity_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        if product.category_id != data.category_id:
            await self._ensure_category(data.category_id, product_id=product_id)

        product.name = data.name
        product.description = data.description
        product.price = data.price
        product.category_id = data.category_id
        product.stock_quantity = data.stock_quantity

        await self.repository.update(product)
        logger.info("Product updated", product_id=product_id)

        return await self.get_product(product_id)

    async def delete_product(self, product_id: int) -> None:
        """Soft-delete a product.

        Raises:
            ProductNotFoundError: If the product is missing or already deleted.
        """
        product = await self.repository.get_entity_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        product.is_active = False
        await self.repository.update(product)
        logger.info("Product soft-deleted", product_id=product_id)

    async def _ensure_category(self, category_id: int, product_id: int | None = None) -> None:
        if not await self.categories.exists(category_id):
            logger.warning(
                "Product references unknown category",
                category_id=category_id,
                product_id=product_id,
            )
            raise CategoryNotFoundError(category_id)


class CategoryService:
    """Service for category operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session
        self.repository = CategoryRepository(session)

    async def list_categories(self) -> list[Category]:
        """Get all active categories."""
        logger.debug("Retrieving all active categories")
        return list(await self.repository.list_active())

    async def get_category(self, category_id: int) -> Category:
        """Get a category by ID.

        Raises:
            CategoryNotFoundError: If no category has this ID.
        """
        category = await self.repository.get_by_id(category_id)
        if category is None:
            raise CategoryNotFoundError(category_id)
        return category

    async def create_category(self, data: CategoryInput) -> Category:
        """Create a new active category."""
        category = Category(
            name=data.name,
            description=data.description,
            is_active=True,
        )
        await self.repository.add(category)
        logger.info("Category created", category_id=category.id)
        return category
