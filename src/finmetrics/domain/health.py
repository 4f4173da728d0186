"""Composite financial health score."""

import logging
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from finmetrics.domain.categories import normalize_category
from finmetrics.domain.constants import (
    DEBT_PAYMENT_CATEGORIES,
    EMERGENCY_FUND_ADEQUATE_MONTHS,
    FINANCIAL_HEALTH_BANDS,
    FINANCIAL_HEALTH_WEIGHTS,
    HIGH_DEBT_RATIO,
    TARGET_SAVINGS_RATE,
)
from finmetrics.domain.entities import (
    FinancialHealthScore,
    HealthBreakdown,
    Transaction,
    TransactionType,
)
from finmetrics.domain.networth import calculate_net_worth, net_worth_before
from finmetrics.domain.reports import (
    calculate_expenses_data,
    calculate_savings_rate_data,
    filter_by_period,
    normalize_monthly,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")

_LEAD_RECOMMENDATIONS = {
    "excellent": "Keep up your habits and review your plan every quarter",
    "good": "Solid position; work on your weakest area to reach excellent",
    "fair": "Focus on one improvement at a time, starting with the lowest score",
    "needs-improvement": "Build a monthly budget and track spending closely",
    "critical": "Stabilize cash flow first: cut non-essential spending and avoid new debt",
}


def _clamp(score: int) -> int:
    return max(0, min(100, score))


def score_net_worth(net_worth: Decimal, total_assets: Decimal, trend: Decimal = ZERO) -> int:
    """Score net worth relative to assets, nudged by its trend.

    Args:
        net_worth: Current net worth
        total_assets: Current total assets
        trend: Change in net worth over the period

    Returns:
        Score from 0 to 100
    """
    if total_assets <= 0:
        score = 10
    else:
        ratio = net_worth / total_assets
        if ratio >= Decimal("0.75"):
            score = 100
        elif ratio >= Decimal("0.5"):
            score = 80
        elif ratio >= Decimal("0.25"):
            score = 60
        elif ratio > 0:
            score = 40
        else:
            score = 10

    if trend > 0:
        score += 10
    elif trend < 0:
        score -= 10
    return _clamp(score)


def score_savings_rate(savings_rate: Decimal) -> int:
    """Score a cash-flow savings rate given in percent."""
    if savings_rate >= 20:
        return 100
    if savings_rate >= 15:
        return 80
    if savings_rate >= 10:
        return 55
    if savings_rate >= 5:
        return 40
    if savings_rate >= 0:
        return 25
    return 0


def score_debt_ratio(debt_to_income: Decimal) -> int:
    """Score a debt-to-income ratio given in percent."""
    if debt_to_income <= 0:
        return 100
    if debt_to_income <= 20:
        return 90
    if debt_to_income <= 36:
        return 75
    if debt_to_income <= 50:
        return 50
    if debt_to_income <= 75:
        return 25
    return 10


def calculate_debt_to_income(
    transactions: Iterable[Transaction], start_date: date, end_date: date
) -> Decimal:
    """Monthly debt payments as a percentage of monthly income.

    Without income the ratio is 0 when nothing was paid and 100 otherwise.
    """
    current = filter_by_period(transactions, start_date, end_date)
    income = sum((txn.amount for txn in current if txn.type == TransactionType.INCOME), ZERO)
    payments = sum(
        (
            txn.amount
            for txn in current
            if txn.type == TransactionType.EXPENSE
            and normalize_category(txn.category) in DEBT_PAYMENT_CATEGORIES
        ),
        ZERO,
    )
    if income <= 0:
        return ZERO if payments == 0 else HUNDRED

    monthly_income = normalize_monthly(income, start_date, end_date)
    monthly_payments = normalize_monthly(payments, start_date, end_date)
    return (monthly_payments / monthly_income * HUNDRED).quantize(
        Decimal("0.1"), rounding=ROUND_HALF_UP
    )


def _rating(overall: int) -> str:
    for threshold, rating in FINANCIAL_HEALTH_BANDS:
        if overall >= threshold:
            return rating
    return "critical"


def calculate_financial_health_score(
    transactions: Iterable[Transaction], start_date: date, end_date: date
) -> FinancialHealthScore:
    """Combine net worth, savings rate and debt ratio into one score.

    Net worth is weighted 40%, savings rate 35% and debt ratio 25%.

    Args:
        transactions: Full transaction history
        start_date: Period start (inclusive)
        end_date: Period end (inclusive)

    Returns:
        FinancialHealthScore with component scores and recommendations
    """
    transactions = list(transactions)
    expenses = calculate_expenses_data(transactions, start_date, end_date)
    savings = calculate_savings_rate_data(transactions, start_date, end_date)
    net_worth = calculate_net_worth(
        transactions, as_of_date=end_date, monthly_expenses=expenses.monthly_expenses
    )
    trend = net_worth.net_worth - net_worth_before(transactions, start_date)
    debt_ratio = calculate_debt_to_income(transactions, start_date, end_date)

    breakdown = HealthBreakdown(
        net_worth=score_net_worth(net_worth.net_worth, net_worth.total_assets, trend),
        savings_rate=score_savings_rate(savings.savings_rate),
        debt_ratio=score_debt_ratio(debt_ratio),
    )
    weighted = (
        FINANCIAL_HEALTH_WEIGHTS["net_worth"] * breakdown.net_worth
        + FINANCIAL_HEALTH_WEIGHTS["savings_rate"] * breakdown.savings_rate
        + FINANCIAL_HEALTH_WEIGHTS["debt_ratio"] * breakdown.debt_ratio
    )
    overall = _clamp(int(weighted.quantize(Decimal("1"), rounding=ROUND_HALF_UP)))
    rating = _rating(overall)

    recommendations = [_LEAD_RECOMMENDATIONS[rating]]
    if debt_ratio > HIGH_DEBT_RATIO:
        recommendations.append(
            f"Your debt payments take {debt_ratio}% of income; pay down high-interest debt "
            "to get below 36%"
        )
    if savings.savings_rate < TARGET_SAVINGS_RATE:
        recommendations.append("Increase your savings rate to at least 15% of income")
    if net_worth.net_worth <= 0:
        recommendations.append("Build positive net worth by growing assets and reducing liabilities")
    emergency_months = net_worth.emergency_fund.months_covered
    if emergency_months < EMERGENCY_FUND_ADEQUATE_MONTHS:
        recommendations.append("Build an emergency fund covering at least 3 months of expenses")

    logger.debug(
        "Financial health %d (%s): net worth %d, savings %d, debt %d",
        overall,
        rating,
        breakdown.net_worth,
        breakdown.savings_rate,
        breakdown.debt_ratio,
    )

    return FinancialHealthScore(
        overall=overall,
        rating=rating,
        breakdown=breakdown,
        net_worth=net_worth.net_worth,
        savings_rate=savings.savings_rate,
        debt_to_income_ratio=debt_ratio,
        emergency_fund_months=emergency_months,
        recommendations=tuple(recommendations),
    )
