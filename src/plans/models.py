"""Pydantic models for the plan catalog."""

from pydantic import BaseModel, ConfigDict, Field


class PlanInfo(BaseModel):
    """A named bundle of included hours and a price."""

    model_config = ConfigDict(frozen=True)

    price: float = Field(..., ge=0, description="Plan price")
    hours: int = Field(..., ge=0, description="Hours included in the plan")
    label: str = Field(..., min_length=1, description="Display label")
