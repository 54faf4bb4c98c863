"""Tests for the plans endpoint."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_list_plans(api_client: AsyncClient) -> None:
    """Plans endpoint returns the catalog keyed by plan id."""
    response = await api_client.get("/api/plans")
    assert response.status_code == 200
    assert response.json() == {
        "ok": True,
        "data": {
            "4h-u": {"price": 60.0, "hours": 4, "label": "4 hours"},
            "12h-u": {"price": 150.0, "hours": 12, "label": "12 hours"},
        },
    }


@pytest.mark.asyncio
async def test_created_client_plan_info_matches_catalog(api_client: AsyncClient) -> None:
    """Every valid create resolves planInfo to the catalog entry."""
    plans = (await api_client.get("/api/plans")).json()["data"]

    for plan_id, info in plans.items():
        response = await api_client.post(
            "/api/clients", json={"name": f"Client {plan_id}", "plan": plan_id}
        )
        assert response.status_code == 201
        assert response.json()["data"]["planInfo"] == info
