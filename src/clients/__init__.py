"""Client records: normalization, plan accounting and the service layer."""

from src.clients.accounting import (
    BalanceKind,
    BalanceStatus,
    describe_balance,
    is_plan_finished,
    remaining_balance,
    remaining_hours,
)
from src.clients.models import EnrichedClient
from src.clients.service import ClientService

__all__ = [
    "BalanceKind",
    "BalanceStatus",
    "ClientService",
    "EnrichedClient",
    "describe_balance",
    "is_plan_finished",
    "remaining_balance",
    "remaining_hours",
]
