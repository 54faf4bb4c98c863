"""Unit tests for health endpoint behavior."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from src.api.deps import get_db
from src.main import app
from src.plans.catalog import PlanCatalog


class FakeSession:
    """Fake async database session for health checks."""

    def __init__(self, should_fail: bool) -> None:
        self.should_fail = should_fail

    async def execute(self, _statement: object) -> None:
        """Simulate database execute behavior."""
        if self.should_fail:
            raise RuntimeError("database unavailable")

    async def commit(self) -> None:
        return None


async def _make_request(catalog: PlanCatalog, db_fail: bool = False) -> AsyncClient:
    async def override_get_db() -> AsyncGenerator[FakeSession, None]:
        yield FakeSession(should_fail=db_fail)

    app.dependency_overrides[get_db] = override_get_db
    app.state.plan_catalog = catalog

    return AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    )


@pytest.mark.asyncio
async def test_health_endpoint_returns_ok(catalog: PlanCatalog) -> None:
    """Return ok when the database is connected."""
    client = await _make_request(catalog)
    try:
        response = await client.get("/api/health")
    finally:
        await client.aclose()
        app.dependency_overrides.clear()

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "db": "connected", "plans": 2}


@pytest.mark.asyncio
async def test_health_endpoint_degraded_on_db_failure(catalog: PlanCatalog) -> None:
    """Return degraded when database is disconnected."""
    client = await _make_request(catalog, db_fail=True)
    try:
        response = await client.get("/api/health")
    finally:
        await client.aclose()
        app.dependency_overrides.clear()

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "degraded"
    assert data["db"] == "disconnected"
