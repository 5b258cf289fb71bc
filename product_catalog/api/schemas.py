"""API schemas for the Product Catalog API.

Pydantic models for request/response validation and serialization.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field

from product_catalog.catalog.models import (
    CATEGORY_DESCRIPTION_MAX_LENGTH,
    CATEGORY_NAME_MAX_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    NAME_MAX_LENGTH,
)

# Prices are sent as JSON numbers; up to 15 significant digits survive the float round trip
PRICE_MAX_DIGITS = 15


def _reject_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("Name is required.")
    return value


RequiredName = Annotated[str, AfterValidator(_reject_blank)]


# ============================================================================
# Common Schemas
# ============================================================================


class ProblemDetail(BaseModel):
    """Standard error response.

    All API errors are returned as problem documents.
    """

    type: str = Field(default="about:blank", description="Problem type URI")
    title: str = Field(..., description="Short summary of the problem")
    status: int = Field(..., description="HTTP status code")
    detail: str | None = Field(default=None, description="Explanation of this occurrence")
    instance: str | None = Field(default=None, description="Request path")
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


class ValidationProblemDetail(ProblemDetail):
    """Problem document for rejected input."""

    errors: dict[str, list[str]] = Field(
        default_factory=dict, description="Messages per offending field"
    )


class PaginatedResponse(BaseModel):
    """Base paginated response."""

    total_count: int = Field(..., description="Total number of matching items")
    page_number: int = Field(..., description="Current page number")
    page_size: int = Field(..., description="Items per page")
    total_pages: int = Field(..., description="Number of pages")
    has_next_page: bool = Field(..., description="Whether a later page exists")
    has_previous_page: bool = Field(..., description="Whether an earlier page exists")


# ============================================================================
# Category Schemas
# ============================================================================


class CategoryCreateRequest(BaseModel):
    """Request to create a category."""

    name: RequiredName = Field(..., min_length=1, max_length=CATEGORY_NAME_MAX_LENGTH)
    description: str | None = Field(
        default=None, max_length=CATEGORY_DESCRIPTION_MAX_LENGTH
    )


class CategoryResponse(BaseModel):
    """Category representation."""

    id: int
    name: str
    description: str | None = None
    is_active: bool


# ============================================================================
# Product Schemas
# ============================================================================


class ProductWriteRequest(BaseModel):
    """Fields accepted when creating or replacing a product."""

    name: RequiredName = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    price: Decimal = Field(
        ..., gt=0, max_digits=PRICE_MAX_DIGITS, decimal_places=2, description="Unit price"
    )
    category_id: int = Field(..., ge=1, description="Owning category")
    stock_quantity: int = Field(..., ge=0, description="Units on hand")


class ProductCreateRequest(ProductWriteRequest):
    """Request to create a product."""


class ProductUpdateRequest(ProductWriteRequest):
    """Request to replace a product's fields."""


class ProductResponse(BaseModel):
    """Product representation."""

    id: int
    name: str
    description: str | None = None
    price: float
    category_id: int
    category_name: str
    stock_quantity: int
    created_date: datetime
    is_active: bool


class ProductsPageResponse(PaginatedResponse):
    """Paginated list of products."""

    items: list[ProductResponse] = Field(..., description="Products on this page")
