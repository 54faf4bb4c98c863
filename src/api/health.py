"""Health check endpoint for infrastructure verification."""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.deps import get_catalog, get_db
from src.core.logging import get_logger
from src.plans.catalog import PlanCatalog

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["health"])


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    db: str
    plans: int


@router.get("/health", response_model=HealthResponse)
async def health_check(
    db: Annotated[AsyncSession, Depends(get_db)],
    catalog: Annotated[PlanCatalog, Depends(get_catalog)],
) -> HealthResponse:
    """Check database connectivity and report the loaded plan count."""
    try:
        await db.execute(text("SELECT 1"))
        db_status = "connected"
    except Exception as e:
        logger.exception("database_health_check_failed", error=str(e))
        db_status = "disconnected"

    return HealthResponse(
        status="ok" if db_status == "connected" else "degraded",
        db=db_status,
        plans=len(catalog),
    )
