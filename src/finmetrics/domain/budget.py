"""Budget allocation, evaluation and maintenance."""

import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Mapping, Optional

from dateutil.relativedelta import relativedelta

from finmetrics.domain import errors
from finmetrics.domain.categories import classify, map_category_to_budget_type, normalize_category
from finmetrics.domain.constants import (
    BUDGET_HEALTH_BANDS,
    FIFTY_THIRTY_TWENTY_SPLIT,
    METHOD_VARIANCE_TOLERANCE,
    MIN_SAVINGS_ALLOCATION,
    NEEDS_CATEGORIES,
    SAVINGS_BUDGET_CATEGORIES,
    SAVINGS_CATEGORIES,
    WANTS_CATEGORIES,
    ZERO_BASED_CATEGORIES,
)
from finmetrics.domain.entities import (
    Budget,
    BudgetAlert,
    BudgetCategory,
    BudgetData,
    BudgetFrequency,
    BudgetHealth,
    BudgetMethod,
    BudgetMethodType,
    BudgetPeriod,
    CategoryPerformance,
    Transaction,
    TransactionType,
)
from finmetrics.domain.errors import NotFoundError, UnsupportedBudgetMethodError

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")
APPROACHING_LIMIT = Decimal("80")

FREQUENCY_DELTAS = {
    BudgetFrequency.WEEKLY: relativedelta(days=7),
    BudgetFrequency.BI_WEEKLY: relativedelta(days=14),
    BudgetFrequency.MONTHLY: relativedelta(months=1),
    BudgetFrequency.QUARTERLY: relativedelta(months=3),
    BudgetFrequency.ANNUAL: relativedelta(years=1),
}


def create_budget_period(
    frequency: BudgetFrequency | str, start_date: Optional[date] = None
) -> BudgetPeriod:
    """Create a budget period whose end date is derived from the frequency.

    Args:
        frequency: Period frequency
        start_date: First day of the period (defaults to today)

    Returns:
        BudgetPeriod with ``end_date = start_date + frequency``
    """
    frequency = BudgetFrequency(frequency)
    if start_date is None:
        start_date = date.today()
    return BudgetPeriod(
        frequency=frequency,
        start_date=start_date,
        end_date=start_date + FREQUENCY_DELTAS[frequency],
    )


def _category_name(key: str) -> str:
    return key[:1].upper() + key[1:]


def _fifty_thirty_twenty(method: BudgetMethod, income: Decimal) -> list[BudgetCategory]:
    return [
        BudgetCategory(id=key, name=_category_name(key), type=key, allocated=income * share)
        for key, share in FIFTY_THIRTY_TWENTY_SPLIT
    ]


def _zero_based(method: BudgetMethod, income: Decimal) -> list[BudgetCategory]:
    return [
        BudgetCategory(id=key, name=_category_name(key), type=key, allocated=ZERO)
        for key in ZERO_BASED_CATEGORIES
    ]


def _custom(method: BudgetMethod, income: Decimal) -> list[BudgetCategory]:
    return [
        BudgetCategory(
            id=key,
            name=_category_name(key),
            type=map_category_to_budget_type(key),
            allocated=Decimal(amount),
        )
        for key, amount in method.allocations.items()
    ]


_ALLOCATORS = {
    BudgetMethodType.FIFTY_THIRTY_TWENTY: _fifty_thirty_twenty,
    BudgetMethodType.ZERO_BASED: _zero_based,
    BudgetMethodType.CUSTOM: _custom,
}


def create_budget_from_method(
    method: BudgetMethod,
    income: Decimal,
    period: BudgetPeriod,
    user_id: Optional[str] = None,
    name: Optional[str] = None,
    allow_rollover: bool = False,
) -> Budget:
    """Create a budget whose categories are determined by the method.

    Income is not validated; zero or negative income propagates into the
    allocations unchanged.

    Args:
        method: Budget method
        income: Income to allocate
        period: Budget period
        user_id: Owner tag, passed through
        name: Optional budget name (defaults to "<method> Budget")
        allow_rollover: Carry unspent money of every category into the next period

    Returns:
        New Budget

    Raises:
        UnsupportedBudgetMethodError: If the method has no allocation rule
    """
    method_type = BudgetMethodType(method.type)
    allocator = _ALLOCATORS.get(method_type)
    if allocator is None:
        raise UnsupportedBudgetMethodError(errors.unsupported_budget_method(method_type.value))

    categories = allocator(method, Decimal(income))
    if allow_rollover:
        categories = [replace(c, allow_rollover=True) for c in categories]
    logger.debug(
        "Created %s budget with %d categories for income %s",
        method_type.value,
        len(categories),
        income,
    )
    return Budget(
        method=method,
        period=period,
        categories=tuple(categories),
        user_id=user_id,
        name=name or f"{method_type.value} Budget",
    )


def _budget_status(score: int) -> str:
    for threshold, status in BUDGET_HEALTH_BANDS:
        if score >= threshold:
            return status
    return "poor"


def _allocation_component(total_allocated: Decimal, total_income: Decimal) -> Decimal:
    if total_income <= 0:
        return ZERO
    ratio = total_allocated / total_income
    if ratio <= 1:
        return max(ratio, ZERO)
    return max(ZERO, 1 - 2 * (ratio - 1))


def _within_budget_component(categories: tuple[BudgetCategory, ...]) -> Decimal:
    if not categories:
        return Decimal("1")
    over = sum(1 for category in categories if category.is_over_budget)
    return 1 - Decimal(over) / Decimal(len(categories))


def _spending_component(total_spent: Decimal, total_income: Decimal) -> Decimal:
    if total_income <= 0:
        return Decimal("1") if total_spent == 0 else ZERO
    ratio = total_spent / total_income
    if ratio <= 1:
        return 1 - ratio / 2
    return max(ZERO, Decimal("0.5") - (ratio - 1))


def calculate_budget_health(
    categories: tuple[BudgetCategory, ...],
    total_income: Decimal,
    total_allocated: Decimal,
    total_spent: Decimal,
    total_savings_allocated: Decimal = ZERO,
) -> BudgetHealth:
    """Score budget adherence from 0 to 100.

    The score weighs allocation fit (40), the share of categories within
    budget (35) and spend relative to income (25).
    """
    raw = (
        40 * _allocation_component(total_allocated, total_income)
        + 35 * _within_budget_component(categories)
        + 25 * _spending_component(total_spent, total_income)
    )
    score = int(raw.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    score = max(0, min(100, score))

    suggestions = []
    unallocated = total_income - total_allocated
    if total_income > 0:
        ratio = total_allocated / total_income
        if ratio < Decimal("0.8"):
            suggestions.append(
                f"Allocate the remaining {unallocated:,.2f} of your income to categories or savings"
            )
        elif ratio > 1:
            suggestions.append(
                f"Allocations exceed income by {-unallocated:,.2f}; reduce some categories"
            )

    for category in categories:
        if category.is_over_budget:
            overage = category.spent - category.available
            suggestions.append(
                f"Reduce {category.name} spending by {overage:,.2f} to get back on budget"
            )

    if total_income > 0 and total_spent > total_income:
        suggestions.append("Spending exceeds income; review discretionary categories")

    if total_income > 0 and total_savings_allocated / total_income < MIN_SAVINGS_ALLOCATION:
        suggestions.append("Aim to allocate at least 10% of income to savings")

    return BudgetHealth(score=score, status=_budget_status(score), suggestions=tuple(suggestions))


def _utilization(category: BudgetCategory) -> Decimal:
    if category.available <= 0:
        return ZERO
    return (category.spent / category.available * HUNDRED).quantize(
        Decimal("0.1"), rounding=ROUND_HALF_UP
    )


def _alert_for(category: BudgetCategory) -> Optional[BudgetAlert]:
    """Alert for an overspent or nearly spent category, or None."""
    if not category.is_over_budget:
        utilization = _utilization(category)
        if utilization < APPROACHING_LIMIT:
            return None
        return BudgetAlert(
            category_id=category.id,
            category_name=category.name,
            allocated=category.allocated,
            spent=category.spent,
            overage=ZERO,
            overage_percentage=ZERO,
            severity="info",
            message=f"You've used {utilization:.0f}% of your {category.name} budget",
            kind="approaching-limit",
        )

    overage = category.spent - category.available
    if category.available > 0:
        percentage = (overage / category.available * HUNDRED).quantize(
            Decimal("0.1"), rounding=ROUND_HALF_UP
        )
    else:
        percentage = HUNDRED

    if category.available <= 0 or percentage >= 50:
        severity = "critical"
    elif percentage >= 20:
        severity = "warning"
    else:
        severity = "info"

    return BudgetAlert(
        category_id=category.id,
        category_name=category.name,
        allocated=category.allocated,
        spent=category.spent,
        overage=overage,
        overage_percentage=percentage,
        severity=severity,
        message=f"{category.name} is over budget by {overage:,.2f} ({percentage}%)",
    )


def _performance_for(category: BudgetCategory) -> CategoryPerformance:
    return CategoryPerformance(
        category_id=category.id,
        category_name=category.name,
        allocated=category.allocated,
        spent=category.spent,
        remaining=category.remaining,
        utilization=_utilization(category),
    )


def _spent_by_category(
    categories: tuple[BudgetCategory, ...], expenses: list[Transaction]
) -> dict[str, Decimal]:
    """Assign each expense to at most one budget category.

    An expense whose category key names a budget category goes there.
    Otherwise it goes to the category whose key is the expense's semantic
    bucket, if the budget has one.
    """
    by_key = {normalize_category(c.id): c.id for c in categories}
    by_bucket = {c.type: c.id for c in categories if normalize_category(c.id) == c.type}

    spent: dict[str, Decimal] = {}
    for txn in expenses:
        target = by_key.get(normalize_category(txn.category))
        if target is None:
            target = by_bucket.get(classify(txn).semantic_category)
        if target is not None:
            spent[target] = spent.get(target, ZERO) + txn.amount
    return spent


def calculate_budget_data(
    transactions: Iterable[Transaction], budget: Optional[Budget]
) -> BudgetData:
    """Evaluate a budget against actual transactions.

    Transactions are not filtered by the budget period; callers pass the
    transactions they want evaluated.

    Args:
        transactions: Transactions to evaluate
        budget: Budget to evaluate, or None

    Returns:
        BudgetData report. A None budget yields a zeroed report.
    """
    if budget is None:
        return BudgetData(
            current_budget=None,
            total_income=ZERO,
            total_allocated=ZERO,
            total_spent=ZERO,
            unallocated_amount=ZERO,
            budget_health=BudgetHealth(
                score=0,
                status="poor",
                suggestions=("Create your first budget to get started",),
            ),
        )

    transactions = list(transactions)
    total_income = sum(
        (txn.amount for txn in transactions if txn.type == TransactionType.INCOME), ZERO
    )

    expenses = [txn for txn in transactions if txn.type == TransactionType.EXPENSE]
    total_expenses = sum((txn.amount for txn in expenses), ZERO)
    spent_by_category = _spent_by_category(budget.categories, expenses)

    categories = []
    for category in budget.categories:
        spent = spent_by_category.get(category.id, ZERO)
        categories.append(
            replace(category, spent=spent, is_over_budget=spent > category.available)
        )
    categories = tuple(categories)
    evaluated = replace(budget, categories=categories)

    total_allocated = sum((c.allocated for c in categories), ZERO)
    total_spent = sum((c.spent for c in categories), ZERO)
    total_savings_allocated = sum(
        (c.allocated for c in categories if c.type in SAVINGS_BUDGET_CATEGORIES), ZERO
    )
    total_savings = sum(
        (
            txn.amount
            for txn in transactions
            if txn.type == TransactionType.ASSET
            and normalize_category(txn.category) in SAVINGS_CATEGORIES
        ),
        ZERO,
    )

    health = calculate_budget_health(
        categories, total_income, total_allocated, total_spent, total_savings_allocated
    )
    alerts = tuple(alert for alert in map(_alert_for, categories) if alert is not None)

    logger.debug(
        "Budget evaluated: income=%s allocated=%s spent=%s score=%d alerts=%d",
        total_income,
        total_allocated,
        total_spent,
        health.score,
        len(alerts),
    )

    return BudgetData(
        current_budget=evaluated,
        total_income=total_income,
        total_allocated=total_allocated,
        total_spent=total_spent,
        unallocated_amount=total_income - total_allocated,
        budget_health=health,
        alerts=alerts,
        total_expense_allocated=total_allocated - total_savings_allocated,
        total_savings_allocated=total_savings_allocated,
        total_savings=total_savings,
        cash_at_hand=total_income - total_expenses - total_savings,
        category_performance=tuple(_performance_for(c) for c in categories),
    )


def should_create_new_budget_period(period: BudgetPeriod, current_date: Optional[date] = None) -> bool:
    """Return True once the current date has reached the period end."""
    if current_date is None:
        current_date = date.today()
    return current_date >= period.end_date


def next_budget_period(period: BudgetPeriod) -> BudgetPeriod:
    """Return the period immediately following ``period``."""
    return create_budget_period(period.frequency, period.end_date)


def rollover_budget(budget: Budget, new_period: Optional[BudgetPeriod] = None) -> Budget:
    """Start a new period, carrying unspent money of rollover categories.

    Categories with ``allow_rollover`` keep their positive remaining balance
    as ``rollover_amount``; all categories start the new period unspent.
    """
    if new_period is None:
        new_period = next_budget_period(budget.period)

    categories = []
    for category in budget.categories:
        carried = ZERO
        if category.allow_rollover and category.remaining > 0:
            carried = category.remaining
        categories.append(
            replace(category, spent=ZERO, is_over_budget=False, rollover_amount=carried)
        )

    return replace(budget, period=new_period, categories=tuple(categories), id=None)


def requires_rebalancing(budget: Budget) -> bool:
    """Return True if editing a category should rebalance the others.

    Method-based budgets keep their proportions; custom budgets do not.
    """
    return BudgetMethodType(budget.method.type) != BudgetMethodType.CUSTOM


def apply_budget_rebalance(
    budget: Budget,
    category_id: str,
    new_amount: Decimal,
    adjustments: Optional[Mapping[str, Decimal]] = None,
) -> Budget:
    """Set a category allocation and apply adjustments to other categories.

    Args:
        budget: Budget to update
        category_id: Category being edited
        new_amount: New allocation for that category
        adjustments: Optional mapping of other category IDs to new allocations.
            Unknown IDs in this mapping are ignored.

    Returns:
        Updated Budget

    Raises:
        NotFoundError: If ``category_id`` is not in the budget
    """
    if not any(c.id == category_id for c in budget.categories):
        raise NotFoundError(errors.budget_category_not_found(category_id))

    new_allocations = dict(adjustments or {})
    new_allocations[category_id] = new_amount

    categories = tuple(
        replace(c, allocated=Decimal(new_allocations[c.id])) if c.id in new_allocations else c
        for c in budget.categories
    )
    return replace(budget, categories=categories)


def validate_budget_method(budget: Budget, income: Decimal) -> tuple[bool, Optional[str]]:
    """Check that a 50-30-20 budget still respects its split.

    Each of needs, wants and savings may deviate from its target share by up
    to five percentage points. Other methods always validate.

    Returns:
        Tuple of (is_valid, message)
    """
    if BudgetMethodType(budget.method.type) != BudgetMethodType.FIFTY_THIRTY_TWENTY:
        return True, None
    if income <= 0:
        return False, "Income must be positive to validate a 50-30-20 budget"

    groups = (
        ("Needs", NEEDS_CATEGORIES, Decimal("50")),
        ("Wants", WANTS_CATEGORIES, Decimal("30")),
        ("Savings", SAVINGS_BUDGET_CATEGORIES, Decimal("20")),
    )
    for label, members, target in groups:
        total = sum((c.allocated for c in budget.categories if c.type in members), ZERO)
        percentage = total / income * HUNDRED
        if abs(percentage - target) > METHOD_VARIANCE_TOLERANCE:
            return False, f"{label} allocation is {percentage:.1f}%, should be around {target}%"

    return True, None


def convert_to_custom_budget(budget: Budget) -> Budget:
    """Turn a method-based budget into a custom one with the same allocations."""
    allocations = {c.id: c.allocated for c in budget.categories}
    method = BudgetMethod(type=BudgetMethodType.CUSTOM, allocations=allocations)
    method_label = BudgetMethodType(budget.method.type).value
    name = budget.name.replace(method_label, "Custom") if budget.name else "Custom Budget"
    return replace(budget, method=method, name=name)
