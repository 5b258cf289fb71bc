"""Product API endpoints.

Provides endpoints for the product catalog:
- GET /api/products - list active products
- GET /api/products/search - filtered, sorted, paginated search
- GET /api/products/{id} - product details
- POST /api/products - create a product
- PUT /api/products/{id} - replace a product
- DELETE /api/products/{id} - soft-delete a product
"""

from decimal import Decimal
from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from product_catalog.api.schemas import (
    ProblemDetail,
    ProductCreateRequest,
    ProductResponse,
    ProductsPageResponse,
    ProductUpdateRequest,
    ProductWriteRequest,
    ValidationProblemDetail,
)
from product_catalog.catalog.exceptions import CategoryNotFoundError, ProductNotFoundError
from product_catalog.catalog.models import ProductDTO
from product_catalog.catalog.service import (
    PaginatedResult,
    PaginationParams,
    ProductFilter,
    ProductInput,
    ProductService,
)
from product_catalog.infrastructure.database import get_session

logger = structlog.get_logger()

router = APIRouter(prefix="/api/products", tags=["Products"])


# ============================================================================
# Dependencies
# ============================================================================


def get_service(session: Annotated[AsyncSession, Depends(get_session)]) -> ProductService:
    """Get product service bound to the request's session."""
    return ProductService(session)


# ============================================================================
# Converters
# ============================================================================


def product_to_response(product: ProductDTO) -> ProductResponse:
    """Convert ProductDTO to ProductResponse."""
    return ProductResponse(
        id=product.id,
        name=product.name,
        description=product.description,
        price=float(product.price),
        category_id=product.category_id,
        category_name=product.category_name,
        stock_quantity=product.stock_quantity,
        created_date=product.created_date,
        is_active=product.is_active,
    )


def page_to_response(page: PaginatedResult[ProductDTO]) -> ProductsPageResponse:
    """Convert a page of products to the paged response."""
    return ProductsPageResponse(
        items=[product_to_response(p) for p in page.items],
        total_count=page.total,
        page_number=page.page,
        page_size=page.page_size,
        total_pages=page.total_pages,
        has_next_page=page.has_next,
        has_previous_page=page.has_prev,
    )


def request_to_input(request: ProductWriteRequest) -> ProductInput:
    """Convert a create/update request to service input."""
    return ProductInput(
        name=request.name,
        description=request.description,
        price=request.price,
        category_id=request.category_id,
        stock_quantity=request.stock_quantity,
    )


def _not_found(exc: ProductNotFoundError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={"title": "Product not found", "detail": exc.message},
    )


def _invalid_category(exc: CategoryNotFoundError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"title": "Invalid operation", "detail": exc.message},
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "",
    response_model=list[ProductResponse],
    summary="List products",
    description="Get all active products ordered by name.",
)
async def list_products(
    service: Annotated[ProductService, Depends(get_service)],
) -> list[ProductResponse]:
    """List all active products."""
    products = await service.list_products()
    return [product_to_response(p) for p in products]


@router.get(
    "/search",
    response_model=ProductsPageResponse,
    responses={400: {"model": ValidationProblemDetail}},
    summary="Search products",
    description="Search active products with filtering, sorting, and pagination.",
)
async def search_products(
    service: Annotated[ProductService, Depends(get_service)],
    search_term: str | None = Query(
        default=None, description="Words matched against name and description"
    ),
    category_id: int | None = Query(default=None, description="Filter by category"),
    min_price: Decimal | None = Query(default=None, ge=0, description="Minimum price"),
    max_price: Decimal | None = Query(default=None, ge=0, description="Maximum price"),
    in_stock: bool | None = Query(default=None, description="Only in-stock or out-of-stock"),
    sort_by: str | None = Query(
        default=None, description="name, price, createddate or stockquantity"
    ),
    sort_order: str | None = Query(default=None, description="asc or desc"),
    page_number: int = Query(default=1, ge=1, description="Page number"),
    page_size: int = Query(default=10, ge=1, le=100, description="Items per page"),
) -> ProductsPageResponse:
    """Search products.

    Unknown sort fields fall back to sorting by name. The total count
    covers the whole filtered set, also when the page is past the end.

    Returns:
        One page of matching products with paging metadata.
    """
    filters = ProductFilter(
        search_term=search_term,
        category_id=category_id,
        min_price=min_price,
        max_price=max_price,
        in_stock=in_stock,
    )
    pagination = PaginationParams(
        page=page_number,
        page_size=page_size,
        sort_by=sort_by or "name",
        sort_order=sort_order or "asc",
    )
    page = await service.search_products(filters, pagination)
    return page_to_response(page)


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ProblemDetail}},
    summary="Get product",
)
async def get_product(
    product_id: int,
    service: Annotated[ProductService, Depends(get_service)],
) -> ProductResponse:
    """Get an active product by ID.

    Raises:
        HTTPException: If product not found.
    """
    try:
        product = await service.get_product(product_id)
    except ProductNotFoundError as exc:
        raise _not_found(exc)
    return product_to_response(product)


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ValidationProblemDetail}},
    summary="Create product",
)
async def create_product(
    request: ProductCreateRequest,
    response: Response,
    service: Annotated[ProductService, Depends(get_service)],
) -> ProductResponse:
    """Create a product in an existing category.

    Raises:
        HTTPException: 400 if the category does not exist.
    """
    try:
        product = await service.create_product(request_to_input(request))
    except CategoryNotFoundError as exc:
        logger.warning("Failed to create product", reason=exc.message)
        raise _invalid_category(exc)

    response.headers["Location"] = f"{router.prefix}/{product.id}"
    return product_to_response(product)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={
        400: {"model": ValidationProblemDetail},
        404: {"model": ProblemDetail},
    },
    summary="Update product",
)
async def update_product(
    product_id: int,
    request: ProductUpdateRequest,
    service: Annotated[ProductService, Depends(get_service)],
) -> ProductResponse:
    """Replace the fields of an active product.

    Raises:
        HTTPException: 404 if the product is missing, 400 if the new
            category does not exist.
    """
    try:
        product = await service.update_product(product_id, request_to_input(request))
    except ProductNotFoundError as exc:
        raise _not_found(exc)
    except CategoryNotFoundError as exc:
        logger.warning("Failed to update product", product_id=product_id, reason=exc.message)
        raise _invalid_category(exc)
    return product_to_response(product)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ProblemDetail}},
    summary="Delete product",
    description="Soft-delete a product. It disappears from all listings.",
)
async def delete_product(
    product_id: int,
    service: Annotated[ProductService, Depends(get_service)],
) -> Response:
    """Soft-delete a product.

    Raises:
        HTTPException: If the product is missing or already deleted.
    """
    try:
        await service.delete_product(product_id)
    except ProductNotFoundError as exc:
        raise _not_found(exc)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
