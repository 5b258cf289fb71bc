"""Catalog exceptions.

Raised by catalog services when a requested resource is missing or
an operation would break a catalog invariant. The API layer maps
them to problem responses.
"""

from typing import Any


class CatalogError(Exception):
    """Base class for all catalog exceptions."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize catalog error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ProductNotFoundError(CatalogError):
    """Raised when no active product has the given ID."""

    def __init__(self, product_id: int) -> None:
        """Initialize product not found error.

        Args:
            product_id: ID that was looked up.
        """
        super().__init__(
            f"Product with ID {product_id} was not found.",
            details={"product_id": product_id},
        )
        self.product_id = product_id


class CategoryNotFoundError(CatalogError):
    """Raised when a category does not exist or is inactive."""

    def __init__(self, category_id: int) -> None:
        """Initialize category not found error.

        Args:
            category_id: ID that was looked up.
        """
        super().__init__(
            f"Category with ID {category_id} does not exist.",
            details={"category_id": category_id},
        )
        self.category_id = category_id
