"""API middleware for the Product Catalog.

Provides:
- Request ID correlation
- Problem document responses
"""

import time
from typing import Any, Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from product_catalog.infrastructure.config import settings

logger = structlog.get_logger()

PROBLEM_MEDIA_TYPE = "application/problem+json"
CORS_EXPOSE_HEADERS = ["X-Request-ID", "Location"]


# ============================================================================
# Request ID Middleware
# ============================================================================


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Middleware to add request ID for correlation.

    Generates or extracts a request ID and adds it to:
    - Request state for access in handlers
    - Response headers for client correlation
    - Log context for tracing
    """

    HEADER_NAME = "X-Request-ID"

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        """Process request with correlation ID.

        Args:
            request: Incoming request.
            call_next: Next middleware/handler.

        Returns:
            Response with request ID header.
        """
        request_id = request.headers.get(self.HEADER_NAME) or str(uuid4())
        request.state.request_id = request_id
        structlog.contextvars.bind_contextvars(request_id=request_id)

        start_time = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=status_code,
                duration_ms=round(duration_ms, 2),
            )
            structlog.contextvars.unbind_contextvars("request_id")

        response.headers[self.HEADER_NAME] = request_id
        return response


# ============================================================================
# Problem Responses
# ============================================================================


def problem_response(
    request: Request,
    status_code: int,
    title: str,
    detail: str | None = None,
    **extensions: Any,
) -> JSONResponse:
    """Build an ``application/problem+json`` response.

    Args:
        request: Request being answered.
        status_code: HTTP status code.
        title: Short summary of the problem type.
        detail: Explanation specific to this occurrence.
        **extensions: Extra members added to the document.

    Returns:
        JSON response carrying the problem document.
    """
    content: dict[str, Any] = {
        "type": "about:blank",
        "title": title,
        "status": status_code,
        "detail": detail,
        "instance": request.url.path,
        "request_id": getattr(request.state, "request_id", None),
    }
    content.update(extensions)
    return JSONResponse(
        status_code=status_code,
        content=content,
        media_type=PROBLEM_MEDIA_TYPE,
    )


def apply_cors_headers(request: Request, response: Response) -> None:
    """Add CORS headers for an allowed origin to a response built outside CORSMiddleware.

    Args:
        request: Request being answered.
        response: Response to decorate in place.
    """
    origin = request.headers.get("origin")
    if origin is None or origin not in settings.cors_origins:
        return

    response.headers["Access-Control-Allow-Origin"] = origin
    response.headers["Access-Control-Allow-Credentials"] = "true"
    response.headers["Access-Control-Expose-Headers"] = ", ".join(CORS_EXPOSE_HEADERS)
    response.headers.add_vary_header("Origin")


# ============================================================================
# Middleware Setup
# ============================================================================


def setup_middleware(app: FastAPI) -> None:
    """Configure all middleware for the application.

    Middleware is added in reverse order (last added = first executed).

    Args:
        app: FastAPI application instance.
    """
    app.add_middleware(RequestIdMiddleware)

    # CORS outermost so preflight requests are answered first
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=CORS_EXPOSE_HEADERS,
    )
