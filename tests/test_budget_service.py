"""Tests for budget service."""

import pytest
from datetime import date
from decimal import Decimal

from finmetrics.domain.entities import BudgetMethodType
from finmetrics.domain.errors import NotFoundError, UnsupportedBudgetMethodError


def test_create_budget_stores_active_budget(budget_service):
    """Test creating a budget makes it the active one."""
    budget_id = budget_service.create_budget(
        "50-30-20", Decimal("5000"), start_date=date(2024, 1, 1)
    )

    budget = budget_service.get_active_budget()
    assert budget.id == budget_id
    assert budget.method.type == BudgetMethodType.FIFTY_THIRTY_TWENTY
    assert budget.period.end_date == date(2024, 2, 1)
    assert sum(c.allocated for c in budget.categories) == Decimal("5000")


def test_new_budget_deactivates_previous(budget_service):
    """Test only the newest budget stays active."""
    first_id = budget_service.create_budget("zero-based", Decimal("0"), start_date=date(2024, 1, 1))
    second_id = budget_service.create_budget("zero-based", Decimal("0"), start_date=date(2024, 1, 1))

    assert budget_service.get_active_budget().id == second_id
    assert budget_service.get_budget(first_id).is_active is False
    assert len(budget_service.list_budgets()) == 2


def test_create_custom_budget(budget_service):
    """Test a custom budget keeps its allocations."""
    budget_id = budget_service.create_budget(
        "custom",
        Decimal("2000"),
        frequency="weekly",
        start_date=date(2024, 1, 1),
        allocations={"groceries": Decimal("300"), "gym": Decimal("50")},
        name="Lean week",
    )

    budget = budget_service.get_budget(budget_id)
    assert budget.name == "Lean week"
    assert budget.period.end_date == date(2024, 1, 8)
    assert {c.id: c.type for c in budget.categories} == {"groceries": "food", "gym": "fitness"}


def test_envelope_budget_is_rejected(budget_service):
    """Test the envelope method fails without storing anything."""
    with pytest.raises(UnsupportedBudgetMethodError, match="envelope"):
        budget_service.create_budget("envelope", Decimal("1000"))

    assert budget_service.list_budgets() == []


def test_require_active_budget(budget_service):
    """Test requiring a budget when none exists."""
    with pytest.raises(NotFoundError, match="No active budget"):
        budget_service.require_active_budget()


def test_evaluate_without_budget(budget_service):
    """Test evaluating no budget returns the zeroed report."""
    data = budget_service.evaluate(None)

    assert data.current_budget is None
    assert data.budget_health.score == 0
    assert data.budget_health.status == "poor"


def test_evaluate_uses_period_transactions(budget_service, transaction_service):
    """Test evaluation sees only transactions inside the budget period."""
    budget_service.create_budget("50-30-20", Decimal("5000"), start_date=date(2024, 1, 1))
    transaction_service.create_transaction("income", Decimal("5000"), "salary", date(2024, 1, 1))
    transaction_service.create_transaction("expense", Decimal("1200"), "rent", date(2024, 1, 3))
    transaction_service.create_transaction("expense", Decimal("999"), "rent", date(2024, 2, 1))

    data = budget_service.evaluate(budget_service.get_active_budget())

    assert data.total_income == Decimal("5000")
    assert data.total_spent == Decimal("1200")
    assert len(data.alerts) == 1
    alert = data.alerts[0]
    assert alert.category_id == "housing"
    assert alert.overage == Decimal("200")
    assert alert.severity == "warning"


def test_roll_over_if_due(budget_service):
    """Test the active budget rolls into the next period once it ends."""
    old_id = budget_service.create_budget("50-30-20", Decimal("5000"), start_date=date(2024, 1, 1))

    assert budget_service.roll_over_if_due(date(2024, 1, 31)) is None

    new_id = budget_service.roll_over_if_due(date(2024, 2, 1))

    assert new_id != old_id
    active = budget_service.get_active_budget()
    assert active.id == new_id
    assert active.period.start_date == date(2024, 2, 1)
    assert active.period.end_date == date(2024, 3, 1)
    assert budget_service.get_budget(old_id).is_active is False


def test_roll_over_without_budget(budget_service):
    """Test rollover is a no-op without an active budget."""
    assert budget_service.roll_over_if_due(date(2024, 2, 1)) is None


def test_rollover_budget_carries_unspent_balance(budget_service, transaction_service):
    """Test a rollover-enabled budget carries its leftover into the next period."""
    budget_service.create_budget(
        "50-30-20", Decimal("5000"), start_date=date(2024, 1, 1), allow_rollover=True
    )
    transaction_service.create_transaction("expense", Decimal("900"), "rent", date(2024, 1, 3))

    budget_service.roll_over_if_due(date(2024, 2, 1))

    active = budget_service.get_active_budget()
    housing = next(c for c in active.categories if c.id == "housing")
    assert housing.allow_rollover is True
    assert housing.rollover_amount == Decimal("100")

    transaction_service.create_transaction("expense", Decimal("1050"), "rent", date(2024, 2, 2))
    data = budget_service.evaluate(active)
    housing = next(c for c in data.current_budget.categories if c.id == "housing")

    assert housing.is_over_budget is False
    assert housing.remaining == Decimal("50")
    assert not any(alert.kind == "over-budget" for alert in data.alerts)


def test_budget_without_rollover_carries_nothing(budget_service):
    """Test budgets default to starting each period from the allocation alone."""
    budget_service.create_budget("50-30-20", Decimal("5000"), start_date=date(2024, 1, 1))

    budget_service.roll_over_if_due(date(2024, 2, 1))

    active = budget_service.get_active_budget()
    assert all(c.rollover_amount == 0 for c in active.categories)
