"""Plan catalog endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from src.api.deps import get_catalog
from src.plans.catalog import PlanCatalog
from src.plans.models import PlanInfo

router = APIRouter(prefix="/api/plans", tags=["plans"])


class PlansEnvelope(BaseModel):
    """Plan catalog response envelope."""

    ok: bool = True
    data: dict[str, PlanInfo]


@router.get("", response_model=PlansEnvelope)
async def list_plans(
    catalog: Annotated[PlanCatalog, Depends(get_catalog)],
) -> PlansEnvelope:
    """Return the static plan catalog keyed by plan id."""
    return PlansEnvelope(data=catalog.to_dict())
