"""Product Catalog module.

Provides the catalog's persistence models, repositories, services
and development seed data.
"""

from product_catalog.catalog.exceptions import (
    CatalogError,
    CategoryNotFoundError,
    ProductNotFoundError,
)
from product_catalog.catalog.models import Category, Product, ProductDTO
from product_catalog.catalog.repository import CategoryRepository, ProductRepository
from product_catalog.catalog.service import (
    CategoryInput,
    CategoryService,
    PaginatedResult,
    PaginationParams,
    ProductFilter,
    ProductInput,
    ProductService,
)

__all__ = [
    # Models
    "Category",
    "Product",
    "ProductDTO",
    # Exceptions
    "CatalogError",
    "CategoryNotFoundError",
    "ProductNotFoundError",
    # Repositories
    "CategoryRepository",
    "ProductRepository",
    # Services
    "CategoryInput",
    "CategoryService",
    "PaginatedResult",
    "PaginationParams",
    "ProductFilter",
    "ProductInput",
    "ProductService",
]
