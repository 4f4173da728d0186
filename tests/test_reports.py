"""Tests for income, expense and savings-rate reports."""

from datetime import date
from decimal import Decimal

import pytest

from conftest import make_transaction
from finmetrics.domain.reports import (
    calculate_expenses_data,
    calculate_income_data,
    calculate_savings_rate_data,
    calculate_savings_streak,
    classify_expense_type,
    filter_by_period,
    normalize_monthly,
    previous_period,
)

JAN_START = date(2024, 1, 1)
JAN_END = date(2024, 1, 31)


@pytest.fixture
def december_transactions():
    return [
        make_transaction("income", 4000, "salary", date(2023, 12, 1), id=11),
        make_transaction("expense", 1000, "rent", date(2023, 12, 3), id=12),
    ]


class TestPeriodHelpers:
    """Tests for period filtering and normalization."""

    def test_filter_bounds_are_inclusive(self, january_transactions):
        """Test transactions on both boundary days are kept."""
        kept = filter_by_period(january_transactions, date(2024, 1, 1), date(2024, 1, 3))
        assert [txn.id for txn in kept] == [1, 2]

    def test_normalize_monthly(self):
        """Test a 30-day period normalizes to its own total."""
        assert normalize_monthly(Decimal("900"), JAN_START, JAN_END) == Decimal("900")
        assert normalize_monthly(Decimal("100"), date(2024, 1, 1), date(2024, 1, 11)) == Decimal("300")

    def test_single_day_period_counts_as_one_day(self):
        """Test a zero-length period does not divide by zero."""
        assert normalize_monthly(Decimal("10"), JAN_START, JAN_START) == Decimal("300")

    def test_previous_period_is_one_month_back(self):
        """Test the previous period shifts both bounds by a calendar month."""
        assert previous_period(date(2024, 3, 1), date(2024, 3, 31)) == (
            date(2024, 2, 1),
            date(2024, 2, 29),
        )


class TestIncomeData:
    """Tests for the income report."""

    def test_totals(self, january_transactions):
        """Test totals, normalization and projection."""
        data = calculate_income_data(january_transactions, JAN_START, JAN_END)

        assert data.total_income == Decimal("5000")
        assert data.monthly_income == Decimal("5000")
        assert data.projected_annual_income == Decimal("60000")
        assert data.income_by_category == {"salary": Decimal("5000")}
        assert data.income_by_source.primary == Decimal("5000")
        assert data.income_by_source.passive == Decimal("0")

    def test_stability_and_consistency(self, january_transactions):
        """Test recurring salary makes income stable and consistent."""
        data = calculate_income_data(january_transactions, JAN_START, JAN_END)

        assert data.is_income_stable is True
        assert data.income_consistency == 100

    def test_irregular_income(self):
        """Test non-recurring uneven income scores lower."""
        transactions = [
            make_transaction("income", 100, "freelance", date(2024, 1, 5), id=1),
            make_transaction("income", 300, "freelance", date(2024, 1, 20), id=2),
        ]
        data = calculate_income_data(transactions, JAN_START, JAN_END)

        assert data.is_income_stable is False
        assert data.income_consistency == 38
        assert data.income_by_source.secondary == Decimal("400")

    def test_growth_against_previous_month(self, january_transactions, december_transactions):
        """Test growth compares against the period one month earlier."""
        data = calculate_income_data(
            january_transactions,
            JAN_START,
            JAN_END,
            previous_transactions=december_transactions,
        )

        assert data.previous_period_income == Decimal("4000")
        assert data.growth_percentage == Decimal("25")

    def test_empty_period(self):
        """Test an empty period reports zeros."""
        data = calculate_income_data([], JAN_START, JAN_END)

        assert data.total_income == 0
        assert data.growth_percentage == 0
        assert data.is_income_stable is False
        assert data.income_consistency == 0

    def test_sources_ignore_category_case(self):
        """Test income sources match category keys regardless of case."""
        transactions = [
            make_transaction("income", 3000, "Salary", id=1),
            make_transaction("income", 200, "FREELANCE", id=2),
        ]
        data = calculate_income_data(transactions, JAN_START, JAN_END)

        assert data.income_by_source.primary == Decimal("3000")
        assert data.income_by_source.secondary == Decimal("200")


class TestExpensesData:
    """Tests for the expense report."""

    def test_totals(self, january_transactions):
        """Test totals and per-category sums."""
        data = calculate_expenses_data(january_transactions, JAN_START, JAN_END)

        assert data.total_expenses == Decimal("2030")
        assert data.expenses_by_category["rent"] == Decimal("1200")
        assert data.average_transaction_size == Decimal("406")
        assert data.largest_category == "rent"

    def test_expense_buckets(self, january_transactions):
        """Test expenses are split into mutually exclusive buckets."""
        breakdown = calculate_expenses_data(january_transactions, JAN_START, JAN_END).expenses_by_type

        assert breakdown.essential == Decimal("1830")
        assert breakdown.fixed == Decimal("0")
        assert breakdown.variable == Decimal("0")
        assert breakdown.discretionary == Decimal("200")

    @pytest.mark.parametrize(
        "category,bucket",
        [
            ("rent", "essential"),
            ("car-insurance", "fixed"),
            ("gym", "variable"),
            ("movies", "discretionary"),
            ("savings-account", None),
            ("mystery", None),
        ],
    )
    def test_classify_expense_type(self, category, bucket):
        """Test bucket lookup through the semantic category."""
        assert classify_expense_type(category) == bucket

    def test_largest_category_tie_breaks_alphabetically(self):
        """Test equal totals pick the alphabetically first category."""
        transactions = [
            make_transaction("expense", 50, "movies", id=1),
            make_transaction("expense", 50, "groceries", id=2),
        ]
        data = calculate_expenses_data(transactions, JAN_START, JAN_END)
        assert data.largest_category == "groceries"

    def test_no_expenses(self):
        """Test an empty period has no largest category."""
        data = calculate_expenses_data([], JAN_START, JAN_END)

        assert data.largest_category is None
        assert data.average_transaction_size == 0

    def test_growth(self, january_transactions, december_transactions):
        """Test expense growth against the previous month."""
        data = calculate_expenses_data(
            january_transactions,
            JAN_START,
            JAN_END,
            previous_transactions=december_transactions,
        )
        assert data.previous_period_expenses == Decimal("1000")
        assert data.growth_percentage == Decimal("103")


class TestSavingsRateData:
    """Tests for the savings-rate report."""

    def test_cash_flow_rate(self, january_transactions):
        """Test the savings rate is the cash-flow margin."""
        data = calculate_savings_rate_data(january_transactions, JAN_START, JAN_END)

        assert data.savings_rate == Decimal("59.4")
        assert data.net_cash_flow == Decimal("2970")
        assert data.total_savings == Decimal("500")
        assert data.savings_by_type.emergency_fund == Decimal("500")
        assert data.target_savings_rate == Decimal("20")
        assert data.target_progress == Decimal("100")

    def test_rate_and_total_savings_can_disagree(self):
        """Test an expense-only transfer moves the rate but not total savings."""
        transactions = [
            make_transaction("income", 1000, "salary", id=1),
            make_transaction("expense", 300, "transfer", id=2),
        ]
        data = calculate_savings_rate_data(transactions, JAN_START, JAN_END)

        assert data.savings_rate == Decimal("70.0")
        assert data.total_savings == 0

    def test_rate_is_rounded(self):
        """Test the rate is rounded to one decimal place."""
        transactions = [
            make_transaction("income", 3000, "salary", id=1),
            make_transaction("expense", 1000, "rent", id=2),
        ]
        data = calculate_savings_rate_data(transactions, JAN_START, JAN_END)
        assert data.savings_rate == Decimal("66.7")

    def test_zero_income(self):
        """Test a period without income has a zero rate."""
        transactions = [make_transaction("expense", 100, "rent")]
        data = calculate_savings_rate_data(transactions, JAN_START, JAN_END)

        assert data.savings_rate == 0
        assert data.target_progress == 0
        assert data.net_cash_flow == Decimal("-100")

    def test_custom_target(self):
        """Test target progress against a custom target rate."""
        transactions = [
            make_transaction("income", 1000, "salary", id=1),
            make_transaction("expense", 900, "rent", id=2),
        ]
        data = calculate_savings_rate_data(transactions, JAN_START, JAN_END, target_rate=Decimal("40"))

        assert data.savings_rate == Decimal("10.0")
        assert data.target_progress == Decimal("25.0")

    def test_change_against_previous_month(self, january_transactions, december_transactions):
        """Test the change in rate from the previous month."""
        data = calculate_savings_rate_data(
            january_transactions,
            JAN_START,
            JAN_END,
            previous_transactions=december_transactions,
        )
        assert data.previous_savings_rate == Decimal("75.0")
        assert data.savings_rate_change == Decimal("-15.6")

    def test_idempotent(self, january_transactions):
        """Test repeated calls give identical reports."""
        first = calculate_savings_rate_data(january_transactions, JAN_START, JAN_END)
        second = calculate_savings_rate_data(january_transactions, JAN_START, JAN_END)
        assert first == second

    def test_savings_categories_ignore_case(self):
        """Test saved money is recognised for mixed-case category keys."""
        transactions = [
            make_transaction("income", 2000, "salary", id=1),
            make_transaction("asset", 1000, "Savings-Account", id=2),
            make_transaction("asset", 400, "Retirement-IRA", id=3),
        ]
        data = calculate_savings_rate_data(transactions, JAN_START, JAN_END)

        assert data.total_savings == Decimal("1400")
        assert data.savings_by_type.emergency_fund == Decimal("1000")
        assert data.savings_by_type.retirement == Decimal("400")


def test_savings_streak_counts_consecutive_months():
    transactions = [
        make_transaction("income", 1000, "salary", date(2023, 10, 1), id=1),
        make_transaction("expense", 1200, "rent", date(2023, 10, 2), id=2),
        make_transaction("income", 1000, "salary", date(2023, 11, 1), id=3),
        make_transaction("income", 1000, "salary", date(2023, 12, 1), id=4),
        make_transaction("income", 1000, "salary", date(2024, 1, 1), id=5),
    ]
    assert calculate_savings_streak(transactions, date(2024, 1, 15)) == 3


def test_savings_streak_is_capped():
    transactions = [
        make_transaction("income", 100, "salary", date(2024, month, 1), id=month)
        for month in range(1, 13)
    ]
    assert calculate_savings_streak(transactions, date(2024, 12, 31), max_months=6) == 6


def test_savings_streak_without_current_savings():
    assert calculate_savings_streak([], date(2024, 1, 31)) == 0
