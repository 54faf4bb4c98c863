"""Plan accounting for client records.

Pure functions deriving usage and billing metrics from a client and its
resolved plan:
- Remaining hours (floored at zero)
- Finished state (no hours left)
- Remaining balance (positive = owed, negative = credit)

A client whose plan id no longer resolves is treated as a plan with zero
hours and zero price.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol

from src.plans.models import PlanInfo


class PlanUsage(Protocol):
    """Anything carrying used hours, amount paid, and a resolved plan."""

    hours: int
    abono: float
    plan_info: PlanInfo | None


class BalanceKind(str, enum.Enum):
    """How a remaining balance should be reported."""

    OWED = "owed"
    CREDIT = "credit"
    SETTLED = "settled"


@dataclass(frozen=True)
class BalanceStatus:
    """Remaining balance split into direction and magnitude.

    Attributes:
        kind: Whether the client owes money, holds a credit, or is settled.
        amount: Absolute value of the remaining balance.
    """

    kind: BalanceKind
    amount: float


def _to_decimal(value: float | int | Decimal) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def remaining_hours(client: PlanUsage) -> int:
    """Included hours minus used hours, never below zero."""
    included = client.plan_info.hours if client.plan_info is not None else 0
    return max(0, included - client.hours)


def is_plan_finished(client: PlanUsage) -> bool:
    """True when no included hours remain."""
    return remaining_hours(client) <= 0


def remaining_balance(client: PlanUsage) -> float:
    """Plan price minus amount paid. Negative means the client has a credit."""
    price = client.plan_info.price if client.plan_info is not None else 0
    balance = _to_decimal(price) - _to_decimal(client.abono)
    return float(balance)


def describe_balance(client: PlanUsage) -> BalanceStatus:
    """Classify the remaining balance as owed, credit, or settled."""
    balance = remaining_balance(client)
    if balance > 0:
        return BalanceStatus(kind=BalanceKind.OWED, amount=balance)
    if balance < 0:
        return BalanceStatus(kind=BalanceKind.CREDIT, amount=abs(balance))
    return BalanceStatus(kind=BalanceKind.SETTLED, amount=0.0)
