"""Product Catalog API main application module.

This module initializes the FastAPI application and configures
core middleware, routers, exception handlers and startup/shutdown
events.
"""

import traceback
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from product_catalog.api.categories import router as categories_router
from product_catalog.api.health import router as health_router
from product_catalog.api.middleware import (
    RequestIdMiddleware,
    apply_cors_headers,
    problem_response,
    setup_middleware,
)
from product_catalog.api.products import router as products_router
from product_catalog.catalog.seed import seed_catalog
from product_catalog.infrastructure.config import settings
from product_catalog.infrastructure.database import (
    async_session_factory,
    create_tables,
    engine,
    wait_for_database,
)
from product_catalog.infrastructure.logging_config import configure_logging

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    configure_logging()
    logger.info(
        "Starting Product Catalog API",
        version=settings.api_version,
        environment=settings.environment,
    )

    await wait_for_database()

    # Development databases are created and seeded in place
    if settings.is_development:
        await create_tables()
        async with async_session_factory() as session:
            await seed_catalog(session)

    yield

    logger.info("Shutting down Product Catalog API")
    await engine.dispose()


app = FastAPI(
    title="Product Catalog API",
    description="Products and categories with search, filtering and pagination",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

setup_middleware(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(products_router)
app.include_router(categories_router)


# ============================================================================
# Exception Handlers
# ============================================================================


def _field_name(loc: tuple) -> str:
    # Drop the "body"/"query"/"path" prefix
    parts = [str(part) for part in loc[1:]] or [str(part) for part in loc]
    return ".".join(parts)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reject invalid input with field-level messages."""
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        errors.setdefault(_field_name(tuple(error.get("loc", ()))), []).append(error["msg"])

    logger.info("Request validation failed", path=request.url.path, fields=sorted(errors))

    return problem_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        title="Validation failed",
        detail="One or more validation errors occurred.",
        errors=errors,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions with consistent format."""
    detail = exc.detail
    if isinstance(detail, dict):
        title = detail.get("title", HTTPStatus(exc.status_code).phrase)
        message = detail.get("detail")
    else:
        title = HTTPStatus(exc.status_code).phrase
        message = str(detail) if detail else None

    response = problem_response(request, exc.status_code, title=title, detail=message)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions with consistent format.

    Runs outside the request ID and CORS middleware, so both are
    applied here explicitly.
    """
    request_id = getattr(request.state, "request_id", None)
    logger.exception(
        "Unhandled exception in handler",
        request_id=request_id,
        path=request.url.path,
        method=request.method,
        error=str(exc),
    )

    extensions = {}
    if settings.is_development:
        extensions["stack_trace"] = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )

    response = problem_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        title="An error occurred while processing your request.",
        detail=str(exc) if settings.is_development else None,
        **extensions,
    )
    if request_id:
        response.headers[RequestIdMiddleware.HEADER_NAME] = request_id
    apply_cors_headers(request, response)
    return response
