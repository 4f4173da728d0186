"""Budget domain service."""

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Mapping, Optional

from finmetrics.database.base import Database
from finmetrics.domain import errors
from finmetrics.domain.budget import (
    calculate_budget_data,
    create_budget_from_method,
    create_budget_period,
    rollover_budget,
    should_create_new_budget_period,
)
from finmetrics.domain.entities import (
    Budget,
    BudgetData,
    BudgetFrequency,
    BudgetMethod,
    BudgetMethodType,
)
from finmetrics.domain.errors import NotFoundError

logger = logging.getLogger(__name__)


class BudgetService:
    """Service for creating, storing and evaluating budgets."""

    def __init__(self, db: Database):
        """Initialize budget service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_budget(
        self,
        method: BudgetMethodType | str,
        income: Decimal,
        frequency: BudgetFrequency | str = BudgetFrequency.MONTHLY,
        start_date: Optional[date] = None,
        allocations: Optional[Mapping[str, Decimal]] = None,
        user_id: Optional[str] = None,
        name: Optional[str] = None,
        allow_rollover: bool = False,
    ) -> int:
        """Create a budget, make it the active one and store it.

        Args:
            method: Budget method
            income: Income to allocate
            frequency: Period frequency
            start_date: Period start (defaults to today)
            allocations: Category allocations for custom budgets
            user_id: Optional owner tag
            name: Optional budget name
            allow_rollover: Carry unspent category balances into the next period

        Returns:
            Budget ID

        Raises:
            UnsupportedBudgetMethodError: If the method has no allocation rule
        """
        budget_method = BudgetMethod(
            type=BudgetMethodType(method), allocations=dict(allocations or {})
        )
        period = create_budget_period(frequency, start_date)
        budget = create_budget_from_method(
            budget_method, income, period, user_id, name, allow_rollover=allow_rollover
        )

        self.db.deactivate_budgets(user_id)
        budget_id = self.db.save_budget(budget)
        logger.info(
            "Created budget %d (%s, %s to %s)",
            budget_id,
            budget_method.type.value,
            period.start_date,
            period.end_date,
        )
        return budget_id

    def get_budget(self, budget_id: int) -> Optional[Budget]:
        """Get budget by ID."""
        return self.db.get_budget(budget_id)

    def list_budgets(self) -> list[Budget]:
        """List all budgets, newest first."""
        return self.db.list_budgets()

    def get_active_budget(self, user_id: Optional[str] = None) -> Optional[Budget]:
        """Get the active budget, or None."""
        return self.db.get_active_budget(user_id)

    def require_active_budget(self, user_id: Optional[str] = None) -> Budget:
        """Get the active budget.

        Raises:
            NotFoundError: If there is no active budget
        """
        budget = self.db.get_active_budget(user_id)
        if budget is None:
            raise NotFoundError(errors.no_active_budget())
        return budget

    def evaluate(self, budget: Optional[Budget]) -> BudgetData:
        """Evaluate a budget against the transactions of its period.

        The period end date belongs to the next period, so transactions are
        taken up to the day before it.
        """
        if budget is None:
            return calculate_budget_data([], None)
        transactions = self.db.list_transactions(
            start_date=budget.period.start_date,
            end_date=budget.period.end_date - timedelta(days=1),
        )
        return calculate_budget_data(transactions, budget)

    def roll_over_if_due(self, current_date: Optional[date] = None) -> Optional[int]:
        """Start the next period of the active budget once the current one ends.

        Returns:
            ID of the new budget, or None if no rollover was needed
        """
        budget = self.db.get_active_budget()
        if budget is None or not should_create_new_budget_period(budget.period, current_date):
            return None

        evaluated = self.evaluate(budget).current_budget
        next_budget = rollover_budget(evaluated)
        self.db.deactivate_budgets(budget.user_id)
        budget_id = self.db.save_budget(next_budget)
        logger.info("Rolled budget %s over into %d", budget.id, budget_id)
        return budget_id
