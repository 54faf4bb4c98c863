"""Service-level tests for failure handling and validation ordering."""

import re
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from src.api.deps import get_db
from src.clients.service import ClientService
from src.core.errors import InvalidArgumentError, NotFoundError, StoreFailureError
from src.main import app
from src.plans.catalog import PlanCatalog


@pytest.fixture
def broken_session() -> AsyncMock:
    session = AsyncMock()
    session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("gone"))
    return session


@pytest.mark.asyncio
async def test_store_failure_is_wrapped(
    broken_session: AsyncMock, catalog: PlanCatalog
) -> None:
    service = ClientService(broken_session, catalog)

    with pytest.raises(StoreFailureError) as exc_info:
        await service.list_clients()

    assert exc_info.value.message == "Database error"
    assert isinstance(exc_info.value.__cause__, OperationalError)


@pytest.mark.asyncio
async def test_validation_runs_before_any_statement(
    mock_db_session: AsyncMock, catalog: PlanCatalog
) -> None:
    """Invalid input never reaches the database."""
    service = ClientService(mock_db_session, catalog)

    with pytest.raises(InvalidArgumentError):
        await service.update_client(1, {"abono": -5})
    with pytest.raises(InvalidArgumentError):
        await service.increment_hours("x", {"delta": 1})
    with pytest.raises(InvalidArgumentError):
        await service.create_client({"name": "A", "plan": "nope"})

    mock_db_session.execute.assert_not_called()


@pytest.mark.asyncio
async def test_missing_row_raises_not_found(
    mock_db_session: AsyncMock, catalog: PlanCatalog
) -> None:
    mock_db_session.execute.return_value.mappings.return_value.one_or_none.return_value = None
    service = ClientService(mock_db_session, catalog)

    with pytest.raises(NotFoundError):
        await service.increment_hours(5, {"delta": 2})


@pytest.mark.asyncio
async def test_increment_is_one_atomic_update(
    mock_db_session: AsyncMock, catalog: PlanCatalog
) -> None:
    """Increment issues a single UPDATE that adds to the stored value."""
    mock_db_session.execute.return_value.mappings.return_value.one_or_none.return_value = None
    service = ClientService(mock_db_session, catalog)

    with pytest.raises(NotFoundError):
        await service.increment_hours(1, {"delta": 3})

    mock_db_session.execute.assert_awaited_once()
    stmt = mock_db_session.execute.call_args.args[0]
    compiled = stmt.compile()
    sql = str(compiled)
    assert sql.startswith("UPDATE clients")
    assert re.search(r"SET hours=\(?clients\.hours \+ :\w+\)?", sql)
    assert "SELECT" not in sql
    assert 3 in compiled.params.values()


@pytest.mark.asyncio
async def test_store_failure_maps_to_500(
    broken_session: AsyncMock, catalog: PlanCatalog
) -> None:
    async def override_get_db():
        yield broken_session

    app.state.plan_catalog = catalog
    app.dependency_overrides[get_db] = override_get_db
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as client:
            response = await client.get("/api/clients")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"ok": False, "error": "Database error"}
