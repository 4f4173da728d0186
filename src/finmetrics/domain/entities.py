"""Domain model entities for finmetrics.

These are pure data classes representing business concepts, independent of
database schema. Transactions and budgets are the inputs; every other class
here is a report value object rebuilt from scratch on each calculation.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Mapping, Optional


class TransactionType(str, Enum):
    """Top-level bucket of a transaction."""

    INCOME = "income"
    EXPENSE = "expense"
    ASSET = "asset"
    LIABILITY = "liability"


class BudgetMethodType(str, Enum):
    """Strategy used to derive allocations from income."""

    FIFTY_THIRTY_TWENTY = "50-30-20"
    ZERO_BASED = "zero-based"
    CUSTOM = "custom"
    ENVELOPE = "envelope"


class BudgetFrequency(str, Enum):
    """Length of a budget period."""

    WEEKLY = "weekly"
    BI_WEEKLY = "bi-weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUAL = "annual"


class SavingsGoalType(str, Enum):
    """Kinds of derived savings goals."""

    EMERGENCY_FUND = "emergency-fund"
    RETIREMENT = "retirement"


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    ``amount`` is a magnitude; its direction is implied by ``type``.
    """

    id: Optional[int]
    type: TransactionType
    amount: Decimal
    category: str
    date: date
    description: str = ""
    currency: str = "USD"
    is_recurring: bool = False
    user_id: Optional[str] = None


@dataclass(frozen=True)
class Classification:
    """Result of classifying a transaction."""

    bucket: TransactionType
    semantic_category: str


@dataclass(frozen=True)
class BudgetMethod:
    """Budget method with optional custom allocations (category key -> amount)."""

    type: BudgetMethodType
    allocations: Mapping[str, Decimal] = field(default_factory=dict)


@dataclass(frozen=True)
class BudgetPeriod:
    """Budget period; ``end_date`` is derived from start date and frequency."""

    frequency: BudgetFrequency
    start_date: date
    end_date: date


@dataclass(frozen=True)
class BudgetCategory:
    """Budget category domain entity."""

    id: str
    name: str
    type: str
    allocated: Decimal
    spent: Decimal = Decimal("0")
    is_over_budget: bool = False
    allow_rollover: bool = False
    rollover_amount: Decimal = Decimal("0")

    @property
    def available(self) -> Decimal:
        """Allocation plus any balance rolled over from the previous period."""
        return self.allocated + self.rollover_amount

    @property
    def remaining(self) -> Decimal:
        """Amount left to spend, including any rolled-over balance."""
        return self.available - self.spent


@dataclass(frozen=True)
class Budget:
    """Budget domain entity."""

    method: BudgetMethod
    period: BudgetPeriod
    categories: tuple[BudgetCategory, ...]
    user_id: Optional[str] = None
    name: str = ""
    id: Optional[int] = None
    is_active: bool = True


@dataclass(frozen=True)
class BudgetHealth:
    """Budget adherence score with textual suggestions."""

    score: int
    status: str
    suggestions: tuple[str, ...] = ()


@dataclass(frozen=True)
class BudgetAlert:
    """Spending alert for a single category.

    ``kind`` is "over-budget" once spending exceeds the available amount and
    "approaching-limit" from 80% of it.
    """

    category_id: str
    category_name: str
    allocated: Decimal
    spent: Decimal
    overage: Decimal
    overage_percentage: Decimal
    severity: str
    message: str
    kind: str = "over-budget"


@dataclass(frozen=True)
class CategoryPerformance:
    """Spend versus allocation for a single category."""

    category_id: str
    category_name: str
    allocated: Decimal
    spent: Decimal
    remaining: Decimal
    utilization: Decimal


@dataclass(frozen=True)
class BudgetData:
    """Top-level budget report."""

    current_budget: Optional[Budget]
    total_income: Decimal
    total_allocated: Decimal
    total_spent: Decimal
    unallocated_amount: Decimal
    budget_health: BudgetHealth
    alerts: tuple[BudgetAlert, ...] = ()
    total_expense_allocated: Decimal = Decimal("0")
    total_savings_allocated: Decimal = Decimal("0")
    total_savings: Decimal = Decimal("0")
    cash_at_hand: Decimal = Decimal("0")
    category_performance: tuple[CategoryPerformance, ...] = ()


@dataclass(frozen=True)
class SavingsGoal:
    """Derived savings goal progress."""

    type: SavingsGoalType
    name: str
    current_amount: Decimal
    target_amount: Decimal
    progress: Decimal
    is_completed: bool


@dataclass(frozen=True)
class AssetAllocation:
    """Assets grouped by liquidity and purpose."""

    liquid: Decimal
    investments: Decimal
    real_estate: Decimal
    retirement: Decimal
    other: Decimal

    @property
    def total(self) -> Decimal:
        return self.liquid + self.investments + self.real_estate + self.retirement + self.other


@dataclass(frozen=True)
class EmergencyFundStatus:
    """Coverage of monthly expenses by the emergency fund."""

    current_amount: Decimal
    monthly_expenses: Decimal
    months_covered: Decimal
    target_months: int
    is_adequate: bool
    recommendation: str


@dataclass(frozen=True)
class NetWorthData:
    """Net worth report."""

    total_assets: Decimal
    total_liabilities: Decimal
    net_worth: Decimal
    assets_by_category: dict[str, Decimal]
    liabilities_by_category: dict[str, Decimal]
    asset_allocation: AssetAllocation
    savings_goals: tuple[SavingsGoal, ...]
    growth_percentage: Decimal
    emergency_fund: EmergencyFundStatus


@dataclass(frozen=True)
class NetWorthPoint:
    """Net worth at a single date."""

    date: date
    net_worth: Decimal


@dataclass(frozen=True)
class IncomeBySource:
    """Income grouped by source type."""

    primary: Decimal
    secondary: Decimal
    passive: Decimal
    one_time: Decimal


@dataclass(frozen=True)
class IncomeData:
    """Income report for a date range."""

    total_income: Decimal
    monthly_income: Decimal
    average_daily_income: Decimal
    income_by_category: dict[str, Decimal]
    income_by_source: IncomeBySource
    previous_period_income: Decimal
    growth_percentage: Decimal
    projected_annual_income: Decimal
    is_income_stable: bool
    income_consistency: int


@dataclass(frozen=True)
class ExpenseBreakdown:
    """Mutually exclusive expense buckets."""

    essential: Decimal
    fixed: Decimal
    variable: Decimal
    discretionary: Decimal


@dataclass(frozen=True)
class ExpensesData:
    """Expense report for a date range."""

    total_expenses: Decimal
    monthly_expenses: Decimal
    average_daily_expenses: Decimal
    expenses_by_category: dict[str, Decimal]
    expenses_by_type: ExpenseBreakdown
    previous_period_expenses: Decimal
    growth_percentage: Decimal
    projected_annual_expenses: Decimal
    average_transaction_size: Decimal
    largest_category: Optional[str]


@dataclass(frozen=True)
class SavingsByType:
    """Asset savings grouped by purpose."""

    emergency_fund: Decimal
    retirement: Decimal
    investments: Decimal
    general: Decimal


@dataclass(frozen=True)
class SavingsRateData:
    """Savings rate report for a date range.

    ``savings_rate`` is a cash-flow margin. ``total_savings`` is the sum of
    asset transactions in savings categories. The two are not reconciled.
    """

    savings_rate: Decimal
    total_income: Decimal
    total_expenses: Decimal
    net_cash_flow: Decimal
    total_savings: Decimal
    monthly_savings: Decimal
    projected_annual_savings: Decimal
    savings_by_type: SavingsByType
    previous_savings_rate: Decimal
    savings_rate_change: Decimal
    target_savings_rate: Decimal
    target_progress: Decimal
    savings_streak: int


@dataclass(frozen=True)
class HealthBreakdown:
    """Component scores (0-100) of the financial health score."""

    net_worth: int
    savings_rate: int
    debt_ratio: int


@dataclass(frozen=True)
class FinancialHealthScore:
    """Composite financial health score."""

    overall: int
    rating: str
    breakdown: HealthBreakdown
    net_worth: Decimal
    savings_rate: Decimal
    debt_to_income_ratio: Decimal
    emergency_fund_months: Decimal
    recommendations: tuple[str, ...]
