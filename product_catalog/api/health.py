"""Health check endpoints.

Provides liveness and readiness probes for the service.
"""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from product_catalog.infrastructure.config import settings
from product_catalog.infrastructure.database import (
    TRANSIENT_ERRORS,
    check_database,
    get_session,
)

logger = structlog.get_logger()

router = APIRouter(prefix="/health")


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    service: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response schema."""

    status: str
    checks: dict[str, str]


@router.get("/live", response_model=HealthResponse)
async def liveness_check() -> HealthResponse:
    """Check that the process is up. Touches no dependencies.

    Returns:
        Health status with service name and version.
    """
    return HealthResponse(
        status="healthy",
        service="product-catalog",
        version=settings.api_version,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"model": ReadinessResponse}},
)
async def readiness_check(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ReadinessResponse | JSONResponse:
    """Check if service is ready to accept requests.

    Returns:
        Readiness status, 503 while the database is unreachable.
    """
    try:
        await check_database(session)
    except (SQLAlchemyError, *TRANSIENT_ERRORS) as e:
        await session.rollback()
        logger.warning("Readiness check failed", error=str(e))
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "checks": {"database": "unhealthy"}},
        )

    return ReadinessResponse(status="ready", checks={"database": "healthy"})
