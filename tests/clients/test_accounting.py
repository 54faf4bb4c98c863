"""Tests for plan accounting functions."""

from dataclasses import dataclass

import pytest

from src.clients.accounting import (
    BalanceKind,
    describe_balance,
    is_plan_finished,
    remaining_balance,
    remaining_hours,
)
from src.plans.models import PlanInfo

PLAN = PlanInfo(price=150, hours=12, label="12 hours")


@dataclass
class Usage:
    hours: int
    abono: float
    plan_info: PlanInfo | None = PLAN


class TestRemainingHours:
    """Tests for remaining_hours and is_plan_finished."""

    @pytest.mark.parametrize(
        ("used", "expected"), [(0, 12), (5, 7), (12, 0), (40, 0)]
    )
    def test_floors_at_zero(self, used: int, expected: int) -> None:
        assert remaining_hours(Usage(hours=used, abono=0)) == expected

    def test_missing_plan_counts_as_zero_hours(self) -> None:
        client = Usage(hours=0, abono=0, plan_info=None)
        assert remaining_hours(client) == 0
        assert is_plan_finished(client) is True

    def test_finished_only_when_no_hours_left(self) -> None:
        assert is_plan_finished(Usage(hours=11, abono=0)) is False
        assert is_plan_finished(Usage(hours=12, abono=0)) is True


class TestRemainingBalance:
    """Tests for remaining_balance and describe_balance."""

    def test_owed(self) -> None:
        client = Usage(hours=0, abono=100.1)
        assert remaining_balance(client) == 49.9
        status = describe_balance(client)
        assert status.kind is BalanceKind.OWED
        assert status.amount == 49.9

    def test_overpayment_is_reported_as_credit(self) -> None:
        client = Usage(hours=0, abono=180)
        assert remaining_balance(client) == -30.0
        status = describe_balance(client)
        assert status.kind is BalanceKind.CREDIT
        assert status.amount == 30.0

    def test_settled(self) -> None:
        status = describe_balance(Usage(hours=0, abono=150))
        assert status.kind is BalanceKind.SETTLED
        assert status.amount == 0.0

    def test_missing_plan_counts_as_zero_price(self) -> None:
        client = Usage(hours=0, abono=20, plan_info=None)
        assert remaining_balance(client) == -20.0
