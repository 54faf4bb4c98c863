"""FastAPI dependency injection for database access and the plan catalog."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.clients.service import ClientService
from src.plans.catalog import PlanCatalog


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a database session from the app's session factory.

    Args:
        request: FastAPI request containing app state.

    Yields:
        AsyncSession for database operations with automatic commit/rollback.
    """
    async with request.app.state.async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_catalog(request: Request) -> PlanCatalog:
    """Return the plan catalog loaded at startup."""
    return request.app.state.plan_catalog


def get_client_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    catalog: Annotated[PlanCatalog, Depends(get_catalog)],
) -> ClientService:
    """Build a request-scoped client service."""
    return ClientService(db, catalog)
