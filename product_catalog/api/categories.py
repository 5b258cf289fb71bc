"""Category API endpoints.

Provides endpoints for listing and creating product categories.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from product_catalog.api.schemas import (
    CategoryCreateRequest,
    CategoryResponse,
    ProblemDetail,
    ValidationProblemDetail,
)
from product_catalog.catalog.exceptions import CategoryNotFoundError
from product_catalog.catalog.models import Category
from product_catalog.catalog.service import CategoryInput, CategoryService
from product_catalog.infrastructure.database import get_session

router = APIRouter(prefix="/api/categories", tags=["Categories"])


def get_service(session: Annotated[AsyncSession, Depends(get_session)]) -> CategoryService:
    """Get category service bound to the request's session."""
    return CategoryService(session)


def category_to_response(category: Category) -> CategoryResponse:
    """Convert Category model to CategoryResponse."""
    return CategoryResponse(
        id=category.id,
        name=category.name,
        description=category.description,
        is_active=category.is_active,
    )


@router.get(
    "",
    response_model=list[CategoryResponse],
    summary="List categories",
    description="Get all active categories ordered by name.",
)
async def list_categories(
    service: Annotated[CategoryService, Depends(get_service)],
) -> list[CategoryResponse]:
    """List all active categories."""
    categories = await service.list_categories()
    return [category_to_response(c) for c in categories]


@router.get(
    "/{category_id}",
    response_model=CategoryResponse,
    responses={404: {"model": ProblemDetail}},
    summary="Get category",
)
async def get_category(
    category_id: int,
    service: Annotated[CategoryService, Depends(get_service)],
) -> CategoryResponse:
    """Get a category by ID.

    Raises:
        HTTPException: If category not found.
    """
    try:
        category = await service.get_category(category_id)
    except CategoryNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"title": "Category not found", "detail": exc.message},
        )
    return category_to_response(category)


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ValidationProblemDetail}},
    summary="Create category",
)
async def create_category(
    request: CategoryCreateRequest,
    response: Response,
    service: Annotated[CategoryService, Depends(get_service)],
) -> CategoryResponse:
    """Create a new active category."""
    category = await service.create_category(
        CategoryInput(name=request.name, description=request.description)
    )
    response.headers["Location"] = f"{router.prefix}/{category.id}"
    return category_to_response(category)
