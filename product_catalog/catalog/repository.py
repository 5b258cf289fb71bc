"""Repositories for catalog database operations.

Provides CRUD operations for categories and products, and the
product search query with filtering, sorting, and pagination.
"""

from collections.abc import Sequence
from decimal import Decimal
from typing import Any

from sqlalchemy import Select, func, null, or_, select, true, union_all
from sqlalchemy.ext.asyncio import AsyncSession

from product_catalog.catalog.models import Category, Product, ProductDTO

LIKE_ESCAPE = "\\"

# Public sort keys mapped to result columns
SORT_COLUMNS = {
    "name": "name",
    "price": "price",
    "createddate": "created_date",
    "created_date": "created_date",
    "stockquantity": "stock_quantity",
    "stock_quantity": "stock_quantity",
}
DEFAULT_SORT = "name"


def escape_like(term: str, escape: str = LIKE_ESCAPE) -> str:
    """Escape LIKE pattern characters so they match literally.

    Args:
        term: Raw search word.
        escape: Escape character used in the ``ESCAPE`` clause.

    Returns:
        Term safe to embed in a LIKE pattern.
    """
    # Escape character first so later replacements are not doubled
    for char in (escape, "%", "_", "["):
        term = term.replace(char, escape + char)
    return term


def resolve_sort_column(sort_by: str | None) -> str:
    """Map a requested sort field to a column name, falling back to name."""
    if not sort_by:
        return SORT_COLUMNS[DEFAULT_SORT]
    return SORT_COLUMNS.get(sort_by.strip().lower(), SORT_COLUMNS[DEFAULT_SORT])


def is_descending(sort_order: str | None) -> bool:
    """Whether the requested direction is descending (anything else is ascending)."""
    return bool(sort_order) and sort_order.strip().lower() == "desc"


def _row_to_dto(row: Any) -> ProductDTO:
    return ProductDTO(
        id=row.id,
        name=row.name,
        description=row.description,
        price=row.price,
        category_id=row.category_id,
        category_name=row.category_name,
        stock_quantity=row.stock_quantity,
        created_date=row.created_date,
        is_active=row.is_active,
    )


class CategoryRepository:
    """Repository for Category database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def list_active(self) -> Sequence[Category]:
        """Get all active categories ordered by name."""
        query = (
            select(Category)
            .where(Category.is_active.is_(True))
            .order_by(Category.name, Category.id)
        )
        result = await self.session.execute(query)
        return result.scalars().all()

    async def get_by_id(self, category_id: int) -> Category | None:
        """Get category by ID, active or not."""
        return await self.session.get(Category, category_id)

    async def exists(self, category_id: int) -> bool:
        """Check whether an active category with this ID exists."""
        query = select(
            select(Category.id)
            .where(Category.id == category_id, Category.is_active.is_(True))
            .exists()
        )
        result = await self.session.execute(query)
        return bool(result.scalar())

    async def add(self, category: Category) -> Category:
        """Save a new category and assign its ID.

        Args:
            category: Category to save.

        Returns:
            Saved category.
        """
        self.session.add(category)
        await self.session.flush()
        return category

    async def count(self) -> int:
        """Count all categories, active or not."""
        result = await self.session.execute(select(func.count(Category.id)))
        return result.scalar_one()


class ProductRepository:
    """Repository for Product database operations.

    Read methods return ``ProductDTO`` rows joined with the category
    name and only ever see active products.

    Example usage:
        async with async_session_factory() as session:
            repo = ProductRepository(session)
            items, total = await repo.search(
                search_term="wireless mouse",
                in_stock=True,
                sort_by="price",
                limit=10,
            )
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    def _select_dto(self) -> Select:
        return select(
            Product.id,
            Product.name,
            Product.description,
            Product.price,
            Product.category_id,
            Category.name.label("category_name"),
            Product.stock_quantity,
            Product.created_date,
            Product.is_active,
        ).join(Category, Product.category_id == Category.id)

    async def list_active(self) -> list[ProductDTO]:
        """Get all active products ordered by name."""
        query = (
            self._select_dto()
            .where(Product.is_active.is_(True))
            .order_by(Product.name, Product.id)
        )
        result = await self.session.execute(query)
        return [_row_to_dto(row) for row in result.all()]

    async def get_by_id(self, product_id: int) -> ProductDTO | None:
        """Get active product by ID.

        Args:
            product_id: Product ID.

        Returns:
            Product if found and active, None otherwise.
        """
        query = self._select_dto().where(
            Product.id == product_id,
            Product.is_active.is_(True),
        )
        result = await self.session.execute(query)
        row = result.one_or_none()
        return _row_to_dto(row) if row is not None else None

    async def get_entity_by_id(self, product_id: int) -> Product | None:
        """Get the tracked ORM entity of an active product, for modification."""
        query = select(Product).where(
            Product.id == product_id,
            Product.is_active.is_(True),
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def add(self, product: Product) -> Product:
        """Save a new product and assign its ID.

        Args:
            product: Product to save.

        Returns:
            Saved product.
        """
        self.session.add(product)
        await self.session.flush()
        return product

    async def add_all(self, products: list[Product]) -> list[Product]:
        """Save multiple products to database."""
        self.session.add_all(products)
        await self.session.flush()
        return products

    async def update(self, product: Product) -> Product:
        """Flush pending changes of a tracked product."""
        self.session.add(product)
        await self.session.flush()
        return product

    async def exists(self, product_id: int) -> bool:
        """Check whether an active product with this ID exists."""
        query = select(
            select(Product.id)
            .where(Product.id == product_id, Product.is_active.is_(True))
            .exists()
        )
        result = await self.session.execute(query)
        return bool(result.scalar())

    async def search(
        self,
        search_term: str | None = None,
        category_id: int | None = None,
        min_price: Decimal | None = None,
        max_price: Decimal | None = None,
        in_stock: bool | None = None,
        sort_by: str | None = None,
        sort_order: str | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> tuple[list[ProductDTO], int]:
        """Find active products with filtering, sorting, and pagination.

        Runs as a single statement. The filtered set and its count are
        CTEs; the requested page is selected from the filtered set and,
        when that page is empty, a sentinel row holding only the count
        is appended with UNION ALL. Items and total therefore always
        come from the same snapshot.

        Args:
            search_term: Words matched against name and description. Every
                word must match one of the two columns.
            category_id: Filter by category.
            min_price: Minimum price (inclusive).
            max_price: Maximum price (inclusive).
            in_stock: True for stock > 0, False for stock = 0.
            sort_by: name, price, createddate or stockquantity.
            sort_order: asc or desc.
            limit: Page size.
            offset: Number of rows to skip.

        Returns:
            Page items and the total number of matching products.
        """
        filtered = (
            self._select_dto()
            .where(*self._search_conditions(search_term, category_id, min_price, max_price, in_stock))
            .cte("filtered")
        )
        total = select(func.count().label("total_count")).select_from(filtered).cte("total")

        sort_column = resolve_sort_column(sort_by)
        descending = is_descending(sort_order)

        def ordering(columns: Any) -> list[Any]:
            key = columns[sort_column]
            # Id breaks ties so pages never overlap
            return [key.desc() if descending else key.asc(), columns.id.asc()]

        page = (
            select(filtered, total.c.total_count)
            .select_from(filtered.join(total, true()))
            .order_by(*ordering(filtered.c))
            .limit(limit)
            .offset(offset)
            .cte("page")
        )
        sentinel = select(
            *[null().label(column.name) for column in filtered.c],
            total.c.total_count,
        ).where(~select(page.c.id).exists())

        results = union_all(select(page), sentinel).subquery("results")
        query = select(results).order_by(*ordering(results.c))

        result = await self.session.execute(query)
        rows = result.all()

        total_count = rows[0].total_count if rows else 0
        items = [_row_to_dto(row) for row in rows if row.id is not None]
        return items, total_count

    def _search_conditions(
        self,
        search_term: str | None,
        category_id: int | None,
        min_price: Decimal | None,
        max_price: Decimal | None,
        in_stock: bool | None,
    ) -> list[Any]:
        conditions: list[Any] = [Product.is_active.is_(True)]

        if search_term:
            for word in search_term.split():
                pattern = f"%{escape_like(word)}%"
                conditions.append(
                    or_(
                        Product.name.ilike(pattern, escape=LIKE_ESCAPE),
                        Product.description.ilike(pattern, escape=LIKE_ESCAPE),
                    )
                )

        if category_id is not None:
            conditions.append(Product.category_id == category_id)

        if min_price is not None:
            conditions.append(Product.price >= min_price)

        if max_price is not None:
            conditions.append(Product.price <= max_price)

        if in_stock is not None:
            if in_stock:
                conditions.append(Product.stock_quantity > 0)
            else:
                conditions.append(Product.stock_quantity == 0)

        return conditions
