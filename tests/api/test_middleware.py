"""Tests for API middleware and error responses."""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from structlog.testing import capture_logs

from product_catalog.infrastructure.config import settings
from product_catalog.infrastructure.database import get_session
from product_catalog.main import app


@pytest.fixture
def broken_client() -> Generator[TestClient, None, None]:
    """Create test client whose database session always fails."""

    async def failing_session() -> None:
        raise RuntimeError("database exploded")

    app.dependency_overrides[get_session] = failing_session
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


class TestRequestIdMiddleware:
    """Tests for request ID correlation middleware."""

    def test_generates_request_id_if_not_provided(self, client: TestClient) -> None:
        """Should generate request ID if not in request headers."""
        response = client.get("/health/live")
        assert response.status_code == 200
        # UUID format
        assert len(response.headers["X-Request-ID"]) == 36

    def test_uses_provided_request_id(self, client: TestClient) -> None:
        """Should use request ID from request headers."""
        custom_id = "custom-request-id-12345"
        response = client.get("/health/live", headers={"X-Request-ID": custom_id})
        assert response.headers["X-Request-ID"] == custom_id

    def test_request_id_in_problem_document(self, client: TestClient) -> None:
        """Problem documents carry the request ID."""
        response = client.get("/api/products/99999", headers={"X-Request-ID": "trace-me"})
        assert response.status_code == 404
        assert response.json()["request_id"] == "trace-me"
        assert response.headers["X-Request-ID"] == "trace-me"


class TestCorsMiddleware:
    """Tests for cross-origin requests from the web client."""

    def test_allowed_origin(self, client: TestClient) -> None:
        """Configured origins receive CORS headers."""
        origin = settings.cors_origins[0]
        response = client.get("/health/live", headers={"Origin": origin})
        assert response.headers["access-control-allow-origin"] == origin

    def test_preflight(self, client: TestClient) -> None:
        """Preflight requests for writes are answered."""
        response = client.options(
            "/api/products",
            headers={
                "Origin": settings.cors_origins[0],
                "Access-Control-Request-Method": "POST",
            },
        )
        assert response.status_code == 200

    def test_unknown_origin(self, client: TestClient) -> None:
        """Other origins get no CORS headers."""
        response = client.get("/health/live", headers={"Origin": "http://evil.example"})
        assert "access-control-allow-origin" not in response.headers


class TestErrorResponses:
    """Tests for problem document error responses."""

    def test_validation_problem_shape(self, client: TestClient) -> None:
        """Malformed input returns a validation problem document."""
        response = client.post("/api/products", json={})
        assert response.status_code == 400
        assert response.headers["content-type"].startswith("application/problem+json")
        data = response.json()
        assert data["type"] == "about:blank"
        assert data["title"] == "Validation failed"
        assert data["status"] == 400
        assert data["detail"] == "One or more validation errors occurred."
        assert data["instance"] == "/api/products"
        assert {"name", "price", "category_id", "stock_quantity"} <= set(data["errors"])
        assert all(isinstance(msgs, list) and msgs for msgs in data["errors"].values())

    def test_malformed_path_parameter(self, client: TestClient) -> None:
        """Non-integer IDs are validation errors."""
        response = client.get("/api/products/abc")
        assert response.status_code == 400
        assert "product_id" in response.json()["errors"]

    def test_unknown_route(self, client: TestClient) -> None:
        """Unknown routes get a problem document too."""
        response = client.get("/api/nothing-here")
        assert response.status_code == 404
        data = response.json()
        assert data["title"] == "Not Found"
        assert data["status"] == 404

    def test_unhandled_error_hides_details(self, broken_client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
        """Unexpected failures return a generic 500 outside development."""
        monkeypatch.setattr(settings, "environment", "production")
        response = broken_client.get("/api/products")
        assert response.status_code == 500
        data = response.json()
        assert data["title"] == "An error occurred while processing your request."
        assert data["status"] == 500
        assert data["detail"] is None
        assert "stack_trace" not in data
        assert "database exploded" not in response.text

    def test_unhandled_error_details_in_development(
        self, broken_client: TestClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Development responses include the error and stack trace."""
        monkeypatch.setattr(settings, "environment", "development")
        response = broken_client.get("/api/products")
        assert response.status_code == 500
        data = response.json()
        assert data["detail"] == "database exploded"
        assert "RuntimeError" in data["stack_trace"]

    def test_unhandled_error_logged_with_request_id(self, broken_client: TestClient) -> None:
        """The error log line carries the request ID of the failed request."""
        with capture_logs() as logs:
            response = broken_client.get("/api/products", headers={"X-Request-ID": "rid-1"})
        assert response.status_code == 500
        assert response.headers["X-Request-ID"] == "rid-1"

        errors = [e for e in logs if e["event"] == "Unhandled exception in handler"]
        assert len(errors) == 1
        assert errors[0]["request_id"] == "rid-1"

    def test_unhandled_error_keeps_cors_headers(self, broken_client: TestClient) -> None:
        """Browser clients can read the 500 problem document."""
        origin = settings.cors_origins[0]
        response = broken_client.get("/api/products", headers={"Origin": origin})
        assert response.status_code == 500
        assert response.headers["access-control-allow-origin"] == origin
        assert "X-Request-ID" in response.headers["access-control-expose-headers"]
        assert response.json()["status"] == 500

    def test_unhandled_error_no_cors_for_unknown_origin(self, broken_client: TestClient) -> None:
        """Unlisted origins get no CORS headers on errors either."""
        response = broken_client.get("/api/products", headers={"Origin": "http://evil.example"})
        assert response.status_code == 500
        assert "access-control-allow-origin" not in response.headers
