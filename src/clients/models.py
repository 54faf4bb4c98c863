"""Read projection of a client record."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, computed_field

from src.clients import accounting
from src.plans.models import PlanInfo


class EnrichedClient(BaseModel):
    """Client record plus its resolved plan and derived accounting metrics.

    Never persisted; rebuilt from the stored row on every read.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    dni: str | None = None
    representative: str | None = None
    representative_dni: str | None = None
    email: str | None = None
    address: str | None = None
    phone: str | None = None
    plan: str
    abono: float
    hours: int
    created_date: date
    plan_info: PlanInfo | None = Field(
        default=None,
        validation_alias="planInfo",
        serialization_alias="planInfo",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def remaining_hours(self) -> int:
        return accounting.remaining_hours(self)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def remaining_balance(self) -> float:
        return accounting.remaining_balance(self)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def plan_finished(self) -> bool:
        return accounting.is_plan_finished(self)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def balance_status(self) -> accounting.BalanceStatus:
        """Owed, credit, or settled, with the absolute amount."""
        return accounting.describe_balance(self)
