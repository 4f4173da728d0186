"""Emergency fund and retirement goal progress derived from transactions."""

import re
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from finmetrics.domain.categories import normalize_category
from finmetrics.domain.constants import (
    EMERGENCY_FUND_CATEGORIES,
    EMERGENCY_FUND_MINIMUM,
    EMERGENCY_FUND_MONTHS,
    RETIREMENT_GOAL_CATEGORIES,
    RETIREMENT_TARGET,
)
from finmetrics.domain.entities import SavingsGoal, SavingsGoalType, Transaction, TransactionType

ZERO = Decimal("0")
HUNDRED = Decimal("100")

_GOAL_TYPES = (TransactionType.ASSET, TransactionType.EXPENSE)
_RETIREMENT_KEYWORDS = re.compile(r"retirement|\bira\b|\b401k\b", re.IGNORECASE)


def _is_emergency_fund(txn: Transaction) -> bool:
    category = normalize_category(txn.category)
    if txn.type == TransactionType.ASSET and category in EMERGENCY_FUND_CATEGORIES:
        return True
    if txn.type not in _GOAL_TYPES:
        return False
    return "emergency" in category or "emergency" in (txn.description or "").lower()


def _is_retirement(txn: Transaction) -> bool:
    if txn.type not in _GOAL_TYPES:
        return False
    if normalize_category(txn.category) in RETIREMENT_GOAL_CATEGORIES:
        return True
    return bool(_RETIREMENT_KEYWORDS.search(txn.description or ""))


def emergency_fund_target(monthly_expenses: Decimal) -> Decimal:
    """Return the emergency fund target: six months of expenses, at least 5000."""
    return max(EMERGENCY_FUND_MINIMUM, Decimal(monthly_expenses) * EMERGENCY_FUND_MONTHS)


def _goal(goal_type: SavingsGoalType, name: str, current: Decimal, target: Decimal) -> SavingsGoal:
    progress = min(HUNDRED, current / target * HUNDRED) if target > 0 else HUNDRED
    return SavingsGoal(
        type=goal_type,
        name=name,
        current_amount=current,
        target_amount=target,
        progress=progress,
        is_completed=current >= target,
    )


def calculate_savings_goals(
    transactions: Iterable[Transaction],
    as_of_date: Optional[date] = None,
    monthly_expenses: Decimal = ZERO,
) -> list[SavingsGoal]:
    """Derive emergency fund and retirement goal progress.

    A transaction contributes only when its category is whitelisted for a
    goal or its text carries the goal keyword. Income and liability
    transactions never contribute.

    Args:
        transactions: Transactions to scan
        as_of_date: Ignore transactions dated after this day
        monthly_expenses: Monthly expenses used for the emergency fund target

    Returns:
        Two goals, emergency fund first, zeroed when nothing matches
    """
    emergency = ZERO
    retirement = ZERO
    for txn in transactions:
        if as_of_date is not None and txn.date > as_of_date:
            continue
        if _is_emergency_fund(txn):
            emergency += txn.amount
        elif _is_retirement(txn):
            retirement += txn.amount

    return [
        _goal(
            SavingsGoalType.EMERGENCY_FUND,
            "Emergency Fund",
            emergency,
            emergency_fund_target(monthly_expenses),
        ),
        _goal(SavingsGoalType.RETIREMENT, "Retirement", retirement, RETIREMENT_TARGET),
    ]
