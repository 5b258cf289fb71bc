"""Tests for health check endpoints."""

from collections.abc import AsyncGenerator, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from product_catalog.infrastructure.config import settings
from product_catalog.infrastructure.database import get_session
from product_catalog.main import app


class _UnreachableSession:
    """Session stand-in whose every query fails to connect."""

    def __init__(self) -> None:
        self.attempts = 0
        self.rolled_back = False

    async def execute(self, statement: object) -> None:
        self.attempts += 1
        raise OperationalError("SELECT 1", {}, ConnectionRefusedError("connection refused"))

    async def rollback(self) -> None:
        self.rolled_back = True


@pytest.fixture
def client(session_factory: async_sessionmaker[AsyncSession]) -> Generator[TestClient, None, None]:
    """Create test client on the test database."""

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_liveness_check(client: TestClient) -> None:
    """Test liveness endpoint returns healthy status."""
    response = client.get("/health/live")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "product-catalog"
    assert data["version"] == settings.api_version


def test_readiness_check(client: TestClient) -> None:
    """Test readiness endpoint returns ready status."""
    response = client.get("/health/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["checks"]["database"] == "healthy"


def test_readiness_check_database_down(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test readiness endpoint reports 503 after retries run out."""
    monkeypatch.setattr(settings, "db_retry_max_delay", 0.0)
    session = _UnreachableSession()

    async def unreachable_session() -> AsyncGenerator[_UnreachableSession, None]:
        yield session

    app.dependency_overrides[get_session] = unreachable_session
    try:
        response = TestClient(app).get("/health/ready")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 503
    data = response.json()
    assert data["status"] == "unhealthy"
    assert data["checks"]["database"] == "unhealthy"
    assert session.attempts == settings.db_retry_attempts
    assert session.rolled_back is True
