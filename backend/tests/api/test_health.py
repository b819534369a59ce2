"""Tests for the health check endpoint."""
from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from api.main import app
from db.session import get_async_session


async def test_health_endpoint_returns_200(client: AsyncClient) -> None:
    """Test that the health endpoint returns 200 OK."""
    response = await client.get("/health")
    assert response.status_code == 200


async def test_health_endpoint_returns_healthy_status(client: AsyncClient) -> None:
    """Test that the health endpoint returns healthy status."""
    response = await client.get("/health")
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == "healthy"


async def test_health_endpoint_sets_security_headers(client: AsyncClient) -> None:
    response = await client.get("/health")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert "max-age=31536000" in response.headers["Strict-Transport-Security"]


async def test_health_endpoint_reports_degraded_database(client: AsyncClient) -> None:
    """A failing database yields a degraded status rather than an error."""
    broken = MagicMock()
    broken.execute = AsyncMock(side_effect=OperationalError("SELECT 1", {}, Exception("down")))

    async def override_get_async_session() -> AsyncGenerator[MagicMock]:
        yield broken

    app.dependency_overrides[get_async_session] = override_get_async_session

    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "degraded", "database": "unhealthy"}
