"""Net worth aggregation."""

import logging
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from dateutil.relativedelta import relativedelta

from finmetrics.domain.categories import normalize_category
from finmetrics.domain.constants import (
    EMERGENCY_FUND_ADEQUATE_MONTHS,
    INVESTMENT_CATEGORIES,
    LIQUID_CATEGORIES,
    REAL_ESTATE_CATEGORIES,
    RETIREMENT_CATEGORIES,
)
from finmetrics.domain.entities import (
    AssetAllocation,
    EmergencyFundStatus,
    NetWorthData,
    NetWorthPoint,
    Transaction,
    TransactionType,
)
from finmetrics.domain.savings_goals import calculate_savings_goals

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def _up_to(transactions: Iterable[Transaction], as_of_date: Optional[date]) -> list[Transaction]:
    if as_of_date is None:
        return list(transactions)
    return [txn for txn in transactions if txn.date <= as_of_date]


def _sum_by_category(transactions: list[Transaction], txn_type: TransactionType) -> dict[str, Decimal]:
    totals: dict[str, Decimal] = {}
    for txn in transactions:
        if txn.type == txn_type:
            totals[txn.category] = totals.get(txn.category, ZERO) + txn.amount
    return totals


def calculate_asset_allocation(assets_by_category: dict[str, Decimal]) -> AssetAllocation:
    """Group asset totals into liquid, investment, real estate and retirement."""
    liquid = investments = real_estate = retirement = other = ZERO
    for key, amount in assets_by_category.items():
        category = normalize_category(key)
        if category in LIQUID_CATEGORIES:
            liquid += amount
        elif category in INVESTMENT_CATEGORIES:
            investments += amount
        elif category in REAL_ESTATE_CATEGORIES:
            real_estate += amount
        elif category in RETIREMENT_CATEGORIES:
            retirement += amount
        else:
            other += amount
    return AssetAllocation(
        liquid=liquid,
        investments=investments,
        real_estate=real_estate,
        retirement=retirement,
        other=other,
    )


def calculate_asset_allocation_percentages(data: NetWorthData) -> dict[str, Decimal]:
    """Return each allocation group as a percentage of total assets."""
    allocation = data.asset_allocation
    groups = {
        "liquid": allocation.liquid,
        "investments": allocation.investments,
        "real_estate": allocation.real_estate,
        "retirement": allocation.retirement,
        "other": allocation.other,
    }
    if data.total_assets == 0:
        return {name: ZERO for name in groups}
    return {name: amount / data.total_assets * HUNDRED for name, amount in groups.items()}


def get_emergency_fund_status(liquid_assets: Decimal, monthly_expenses: Decimal) -> EmergencyFundStatus:
    """Describe how many months of expenses liquid assets cover.

    Args:
        liquid_assets: Liquid asset total
        monthly_expenses: Monthly expenses; zero yields zero months covered

    Returns:
        EmergencyFundStatus with a recommendation
    """
    monthly_expenses = Decimal(monthly_expenses)
    if monthly_expenses > 0:
        months = (liquid_assets / monthly_expenses).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    else:
        months = ZERO

    if months < 1:
        recommendation = "Build an emergency fund now; aim for one month of expenses first"
    elif months < EMERGENCY_FUND_ADEQUATE_MONTHS:
        recommendation = "Good start; aim for 3-6 months of expenses"
    elif months < 6:
        recommendation = "Consider building to 6 months of expenses"
    else:
        recommendation = "Excellent emergency fund coverage"

    return EmergencyFundStatus(
        current_amount=liquid_assets,
        monthly_expenses=monthly_expenses,
        months_covered=months,
        target_months=6,
        is_adequate=months >= EMERGENCY_FUND_ADEQUATE_MONTHS,
        recommendation=recommendation,
    )


def growth_percentage(current: Decimal, previous: Decimal) -> Decimal:
    """Percentage change from ``previous``; zero when there is no base."""
    if previous == 0:
        return ZERO
    return (current - previous) / abs(previous) * HUNDRED


def _net_worth_of(transactions: list[Transaction]) -> Decimal:
    net = ZERO
    for txn in transactions:
        if txn.type == TransactionType.ASSET:
            net += txn.amount
        elif txn.type == TransactionType.LIABILITY:
            net -= txn.amount
    return net


def calculate_net_worth(
    transactions: Iterable[Transaction],
    as_of_date: Optional[date] = None,
    monthly_expenses: Decimal = ZERO,
    previous_transactions: Optional[Iterable[Transaction]] = None,
) -> NetWorthData:
    """Aggregate asset and liability transactions into net worth.

    Args:
        transactions: Transactions to aggregate
        as_of_date: Ignore transactions dated after this day
        monthly_expenses: Passed to savings goals and emergency fund status
        previous_transactions: Transactions of an earlier snapshot for growth

    Returns:
        NetWorthData report
    """
    current = _up_to(transactions, as_of_date)
    assets_by_category = _sum_by_category(current, TransactionType.ASSET)
    liabilities_by_category = _sum_by_category(current, TransactionType.LIABILITY)
    total_assets = sum(assets_by_category.values(), ZERO)
    total_liabilities = sum(liabilities_by_category.values(), ZERO)
    net_worth = total_assets - total_liabilities

    growth = ZERO
    if previous_transactions is not None:
        growth = growth_percentage(net_worth, _net_worth_of(list(previous_transactions)))

    allocation = calculate_asset_allocation(assets_by_category)
    logger.debug(
        "Net worth as of %s: assets=%s liabilities=%s net=%s",
        as_of_date or "all",
        total_assets,
        total_liabilities,
        net_worth,
    )

    return NetWorthData(
        total_assets=total_assets,
        total_liabilities=total_liabilities,
        net_worth=net_worth,
        assets_by_category=assets_by_category,
        liabilities_by_category=liabilities_by_category,
        asset_allocation=allocation,
        savings_goals=tuple(calculate_savings_goals(current, as_of_date, monthly_expenses)),
        growth_percentage=growth,
        emergency_fund=get_emergency_fund_status(allocation.liquid, monthly_expenses),
    )


def calculate_net_worth_for_period(
    transactions: Iterable[Transaction],
    start_date: date,
    end_date: date,
    monthly_expenses: Decimal = ZERO,
) -> NetWorthData:
    """Net worth at ``end_date`` with growth measured from before ``start_date``."""
    transactions = list(transactions)
    previous = [txn for txn in transactions if txn.date < start_date]
    return calculate_net_worth(
        transactions,
        as_of_date=end_date,
        monthly_expenses=monthly_expenses,
        previous_transactions=previous,
    )


def get_net_worth_trend(
    transactions: Iterable[Transaction],
    end_date: Optional[date] = None,
    months: int = 6,
) -> list[NetWorthPoint]:
    """Net worth at the end of each of the previous ``months`` months and at ``end_date``.

    Points are ordered oldest first.
    """
    transactions = list(transactions)
    if end_date is None:
        end_date = date.today()

    month_start = end_date.replace(day=1)
    points = []
    for offset in range(months, -1, -1):
        if offset == 0:
            point_date = end_date
        else:
            point_date = month_start - relativedelta(months=offset - 1) - timedelta(days=1)
        points.append(
            NetWorthPoint(
                date=point_date,
                net_worth=_net_worth_of(_up_to(transactions, point_date)),
            )
        )
    return points


def net_worth_before(transactions: Iterable[Transaction], day: date) -> Decimal:
    """Net worth from transactions dated strictly before ``day``."""
    return _net_worth_of(_up_to(transactions, day - timedelta(days=1)))
