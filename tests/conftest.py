"""Pytest configuration and shared fixtures for tests."""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.api.deps import get_db
from src.main import app
from src.models import Base
from src.plans.catalog import PlanCatalog, load_catalog_from_dict

TEST_PLANS = {
    "4h-u": {"price": 60, "hours": 4, "label": "4 hours"},
    "12h-u": {"price": 150, "hours": 12, "label": "12 hours"},
}


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Use asyncio backend for async tests."""
    return "asyncio"


@pytest.fixture
def catalog() -> PlanCatalog:
    """Small deterministic plan catalog."""
    return load_catalog_from_dict(TEST_PLANS)


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """Create a mock database session.

    Returns:
        AsyncMock configured to simulate database session.
    """
    session = AsyncMock()
    session.execute.return_value = MagicMock()
    return session


@pytest.fixture
def mock_db_session_failing() -> AsyncMock:
    """Create a mock database session that fails on execute.

    Returns:
        AsyncMock configured to raise exception on execute.
    """
    session = AsyncMock()
    session.execute.side_effect = Exception("Database connection failed")
    return session


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Create sqlite-backed session factory with the clients table."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, expire_on_commit=False)
    app.state.async_session = factory
    try:
        yield factory
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def api_client(
    session_factory: async_sessionmaker[AsyncSession],
    catalog: PlanCatalog,
) -> AsyncGenerator[AsyncClient, None]:
    """Create API client with DB dependency override."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.state.plan_catalog = catalog
    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
    app.dependency_overrides.clear()
