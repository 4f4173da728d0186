"""Income, expense and savings-rate reports over a date range.

All reports filter transactions with inclusive bounds and normalize period
totals to a 30-day month (``total / period_days * 30``).
"""

import logging
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from dateutil.relativedelta import relativedelta

from finmetrics.domain.categories import map_category_to_budget_type, normalize_category
from finmetrics.domain.constants import (
    EMERGENCY_FUND_CATEGORIES,
    EXPENSE_TYPE_BUCKETS,
    INCOME_SOURCE_BUCKETS,
    INCOME_STABILITY_THRESHOLD,
    RETIREMENT_GOAL_CATEGORIES,
    SAVINGS_CATEGORIES,
    SAVINGS_STREAK_MAX_MONTHS,
)
from finmetrics.domain.entities import (
    ExpenseBreakdown,
    ExpensesData,
    IncomeBySource,
    IncomeData,
    SavingsByType,
    SavingsRateData,
    Transaction,
    TransactionType,
)
from finmetrics.domain.networth import growth_percentage

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")
DAYS_PER_MONTH = 30
MONTHS_PER_YEAR = 12
DEFAULT_TARGET_SAVINGS_RATE = Decimal("20")
_INVESTMENT_SAVINGS = frozenset({"mutual-funds", "cryptocurrency"})


def filter_by_period(
    transactions: Iterable[Transaction], start_date: date, end_date: date
) -> list[Transaction]:
    """Return transactions dated within ``[start_date, end_date]``."""
    return [txn for txn in transactions if start_date <= txn.date <= end_date]


def period_length_days(start_date: date, end_date: date) -> int:
    """Number of days in the period, never less than one."""
    return max((end_date - start_date).days, 1)


def normalize_monthly(total: Decimal, start_date: date, end_date: date) -> Decimal:
    """Normalize a period total to a 30-day month."""
    return total / period_length_days(start_date, end_date) * DAYS_PER_MONTH


def previous_period(start_date: date, end_date: date) -> tuple[date, date]:
    """Shift a period back by one calendar month."""
    return start_date - relativedelta(months=1), end_date - relativedelta(months=1)


def _sum(transactions: Iterable[Transaction], txn_type: TransactionType) -> Decimal:
    return sum((txn.amount for txn in transactions if txn.type == txn_type), ZERO)


def _by_category(transactions: Iterable[Transaction], txn_type: TransactionType) -> dict[str, Decimal]:
    totals: dict[str, Decimal] = {}
    for txn in transactions:
        if txn.type == txn_type:
            totals[txn.category] = totals.get(txn.category, ZERO) + txn.amount
    return totals


def _round_rate(value: Decimal) -> Decimal:
    return value.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)


def _income_consistency(incomes: list[Transaction]) -> int:
    """Score 0-100 from recurring share (50) and amount regularity (50)."""
    if not incomes:
        return 0
    count = Decimal(len(incomes))
    recurring_score = Decimal(sum(1 for txn in incomes if txn.is_recurring)) / count * 50

    mean = sum((txn.amount for txn in incomes), ZERO) / count
    variance = sum(((txn.amount - mean) ** 2 for txn in incomes), ZERO) / count
    variation = variance.sqrt() / mean if mean > 0 else Decimal("1")
    variation_score = max(ZERO, 50 - variation * 25)

    return int((recurring_score + variation_score).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def calculate_income_data(
    transactions: Iterable[Transaction],
    start_date: date,
    end_date: date,
    previous_transactions: Optional[Iterable[Transaction]] = None,
) -> IncomeData:
    """Summarize income within a period.

    Args:
        transactions: Transactions to report on
        start_date: Period start (inclusive)
        end_date: Period end (inclusive)
        previous_transactions: Transactions for the period one month earlier

    Returns:
        IncomeData report
    """
    incomes = [
        txn
        for txn in filter_by_period(transactions, start_date, end_date)
        if txn.type == TransactionType.INCOME
    ]
    total = sum((txn.amount for txn in incomes), ZERO)
    by_category = _by_category(incomes, TransactionType.INCOME)
    monthly = normalize_monthly(total, start_date, end_date)

    sources = {
        name: sum(
            (txn.amount for txn in incomes if normalize_category(txn.category) in keys), ZERO
        )
        for name, keys in INCOME_SOURCE_BUCKETS
    }

    previous_total = ZERO
    growth = ZERO
    if previous_transactions is not None:
        prev_start, prev_end = previous_period(start_date, end_date)
        previous_total = _sum(
            filter_by_period(previous_transactions, prev_start, prev_end), TransactionType.INCOME
        )
        growth = growth_percentage(total, previous_total)

    recurring = sum((txn.amount for txn in incomes if txn.is_recurring), ZERO)
    is_stable = total > 0 and recurring / total >= INCOME_STABILITY_THRESHOLD

    return IncomeData(
        total_income=total,
        monthly_income=monthly,
        average_daily_income=total / period_length_days(start_date, end_date),
        income_by_category=by_category,
        income_by_source=IncomeBySource(**sources),
        previous_period_income=previous_total,
        growth_percentage=growth,
        projected_annual_income=monthly * MONTHS_PER_YEAR,
        is_income_stable=is_stable,
        income_consistency=_income_consistency(incomes),
    )


def classify_expense_type(category: str) -> Optional[str]:
    """Return the expense bucket for a raw category, or None."""
    semantic = map_category_to_budget_type(category)
    for bucket, members in EXPENSE_TYPE_BUCKETS:
        if semantic in members:
            return bucket
    return None


def calculate_expenses_data(
    transactions: Iterable[Transaction],
    start_date: date,
    end_date: date,
    previous_transactions: Optional[Iterable[Transaction]] = None,
) -> ExpensesData:
    """Summarize expenses within a period.

    ``expenses_by_type`` buckets are mutually exclusive; categories outside
    every bucket (savings transfers, "other") count in none of them.
    """
    expenses = [
        txn
        for txn in filter_by_period(transactions, start_date, end_date)
        if txn.type == TransactionType.EXPENSE
    ]
    total = sum((txn.amount for txn in expenses), ZERO)
    by_category = _by_category(expenses, TransactionType.EXPENSE)
    monthly = normalize_monthly(total, start_date, end_date)

    buckets = {bucket: ZERO for bucket, _ in EXPENSE_TYPE_BUCKETS}
    for category, amount in by_category.items():
        bucket = classify_expense_type(category)
        if bucket is not None:
            buckets[bucket] += amount

    previous_total = ZERO
    growth = ZERO
    if previous_transactions is not None:
        prev_start, prev_end = previous_period(start_date, end_date)
        previous_total = _sum(
            filter_by_period(previous_transactions, prev_start, prev_end), TransactionType.EXPENSE
        )
        growth = growth_percentage(total, previous_total)

    largest = None
    if by_category:
        largest = max(sorted(by_category), key=lambda key: by_category[key])

    return ExpensesData(
        total_expenses=total,
        monthly_expenses=monthly,
        average_daily_expenses=total / period_length_days(start_date, end_date),
        expenses_by_category=by_category,
        expenses_by_type=ExpenseBreakdown(**buckets),
        previous_period_expenses=previous_total,
        growth_percentage=growth,
        projected_annual_expenses=monthly * MONTHS_PER_YEAR,
        average_transaction_size=total / len(expenses) if expenses else ZERO,
        largest_category=largest,
    )


def cash_flow_savings_rate(transactions: Iterable[Transaction]) -> Decimal:
    """Savings rate of already-filtered transactions, rounded to 0.1."""
    transactions = list(transactions)
    income = _sum(transactions, TransactionType.INCOME)
    if income <= 0:
        return ZERO
    expenses = _sum(transactions, TransactionType.EXPENSE)
    return _round_rate((income - expenses) / income * HUNDRED)


def _savings_by_type(transactions: list[Transaction]) -> SavingsByType:
    emergency = retirement = investments = general = ZERO
    for txn in transactions:
        category = normalize_category(txn.category)
        if txn.type != TransactionType.ASSET or category not in SAVINGS_CATEGORIES:
            continue
        if category in EMERGENCY_FUND_CATEGORIES:
            emergency += txn.amount
        elif category in RETIREMENT_GOAL_CATEGORIES:
            retirement += txn.amount
        elif category in _INVESTMENT_SAVINGS:
            investments += txn.amount
        else:
            general += txn.amount
    return SavingsByType(
        emergency_fund=emergency,
        retirement=retirement,
        investments=investments,
        general=general,
    )


def calculate_savings_streak(
    transactions: Iterable[Transaction],
    end_date: date,
    max_months: int = SAVINGS_STREAK_MAX_MONTHS,
) -> int:
    """Count consecutive calendar months with a positive savings rate.

    Counting starts at the month containing ``end_date`` and walks back.
    """
    transactions = list(transactions)
    month_start = end_date.replace(day=1)
    streak = 0
    for offset in range(max_months):
        start = month_start - relativedelta(months=offset)
        end = start + relativedelta(months=1) - timedelta(days=1)
        if cash_flow_savings_rate(filter_by_period(transactions, start, end)) <= 0:
            break
        streak += 1
    return streak


def calculate_savings_rate_data(
    transactions: Iterable[Transaction],
    start_date: date,
    end_date: date,
    previous_transactions: Optional[Iterable[Transaction]] = None,
    target_rate: Optional[Decimal] = None,
) -> SavingsRateData:
    """Summarize savings within a period.

    ``savings_rate`` is the cash-flow margin ``(income - expenses) / income``
    in percent. ``total_savings`` is the sum of asset transactions in savings
    categories. The two measure different things and may disagree.

    Args:
        transactions: Transactions to report on; the full history is used for
            the savings streak
        start_date: Period start (inclusive)
        end_date: Period end (inclusive)
        previous_transactions: Transactions for the period one month earlier
        target_rate: Target savings rate in percent (defaults to 20)

    Returns:
        SavingsRateData report
    """
    transactions = list(transactions)
    current = filter_by_period(transactions, start_date, end_date)
    income = _sum(current, TransactionType.INCOME)
    expenses = _sum(current, TransactionType.EXPENSE)
    net_cash_flow = income - expenses
    rate = cash_flow_savings_rate(current)

    savings_by_type = _savings_by_type(current)
    total_savings = (
        savings_by_type.emergency_fund
        + savings_by_type.retirement
        + savings_by_type.investments
        + savings_by_type.general
    )

    previous_rate = ZERO
    if previous_transactions is not None:
        prev_start, prev_end = previous_period(start_date, end_date)
        previous_rate = cash_flow_savings_rate(
            filter_by_period(previous_transactions, prev_start, prev_end)
        )

    target = DEFAULT_TARGET_SAVINGS_RATE if target_rate is None else Decimal(target_rate)
    target_progress = ZERO
    if rate > 0 and target > 0:
        target_progress = min(HUNDRED, _round_rate(rate / target * HUNDRED))

    monthly_savings = normalize_monthly(net_cash_flow, start_date, end_date)
    logger.debug(
        "Savings rate %s%% for %s..%s (income=%s expenses=%s)",
        rate,
        start_date,
        end_date,
        income,
        expenses,
    )

    return SavingsRateData(
        savings_rate=rate,
        total_income=income,
        total_expenses=expenses,
        net_cash_flow=net_cash_flow,
        total_savings=total_savings,
        monthly_savings=monthly_savings,
        projected_annual_savings=monthly_savings * MONTHS_PER_YEAR,
        savings_by_type=savings_by_type,
        previous_savings_rate=previous_rate,
        savings_rate_change=rate - previous_rate,
        target_savings_rate=target,
        target_progress=target_progress,
        savings_streak=calculate_savings_streak(transactions, end_date),
    )
