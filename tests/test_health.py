"""Tests for the composite financial health score."""

from datetime import date
from decimal import Decimal

import pytest

from conftest import make_transaction
from finmetrics.domain.health import (
    calculate_debt_to_income,
    calculate_financial_health_score,
    score_debt_ratio,
    score_net_worth,
    score_savings_rate,
)

JAN_START = date(2024, 1, 1)
JAN_END = date(2024, 1, 31)


@pytest.mark.parametrize(
    "net_worth,assets,trend,expected",
    [
        ("900", "1000", "0", 100),
        ("600", "1000", "0", 80),
        ("300", "1000", "0", 60),
        ("100", "1000", "0", 40),
        ("-100", "1000", "0", 10),
        ("0", "0", "0", 10),
        ("600", "1000", "50", 90),
        ("600", "1000", "-50", 70),
        ("900", "1000", "50", 100),
        ("-100", "1000", "-50", 0),
    ],
)
def test_score_net_worth(net_worth, assets, trend, expected):
    assert score_net_worth(Decimal(net_worth), Decimal(assets), Decimal(trend)) == expected


@pytest.mark.parametrize(
    "rate,expected",
    [("25", 100), ("20", 100), ("15", 80), ("12", 55), ("5", 40), ("0", 25), ("-3", 0)],
)
def test_score_savings_rate(rate, expected):
    assert score_savings_rate(Decimal(rate)) == expected


@pytest.mark.parametrize(
    "ratio,expected",
    [("0", 100), ("20", 90), ("36", 75), ("50", 50), ("75", 25), ("90", 10)],
)
def test_score_debt_ratio(ratio, expected):
    assert score_debt_ratio(Decimal(ratio)) == expected


class TestDebtToIncome:
    """Tests for the debt-to-income ratio."""

    def test_ratio(self):
        """Test debt payments as a share of income."""
        transactions = [
            make_transaction("income", 5000, "salary", id=1),
            make_transaction("expense", 2000, "debt-payment", id=2),
            make_transaction("expense", 1000, "rent", id=3),
        ]
        assert calculate_debt_to_income(transactions, JAN_START, JAN_END) == Decimal("40.0")

    def test_no_income_no_payments(self):
        """Test the ratio is zero without income or payments."""
        assert calculate_debt_to_income([], JAN_START, JAN_END) == 0

    def test_debt_categories_ignore_case(self):
        """Test debt payments match category keys regardless of case."""
        transactions = [
            make_transaction("income", 5000, "salary", id=1),
            make_transaction("expense", 1000, "Student-Loan", id=2),
            make_transaction("expense", 500, " auto-loan ", id=3),
        ]
        assert calculate_debt_to_income(transactions, JAN_START, JAN_END) == Decimal("30.0")

    def test_payments_without_income(self):
        """Test payments without income report a full ratio."""
        transactions = [make_transaction("expense", 100, "loan-payment")]
        assert calculate_debt_to_income(transactions, JAN_START, JAN_END) == Decimal("100")


class TestFinancialHealthScore:
    """Tests for the overall financial health score."""

    def test_healthy_month(self, january_transactions):
        """Test a month with savings and no debt scores excellent."""
        score = calculate_financial_health_score(january_transactions, JAN_START, JAN_END)

        assert score.breakdown.net_worth == 100
        assert score.breakdown.savings_rate == 100
        assert score.breakdown.debt_ratio == 100
        assert score.overall == 100
        assert score.rating == "excellent"
        assert score.savings_rate == Decimal("59.4")
        assert score.emergency_fund_months == Decimal("0.2")

    def test_recommendations_lead_with_rating(self, january_transactions):
        """Test the rating-specific advice comes first."""
        score = calculate_financial_health_score(january_transactions, JAN_START, JAN_END)

        assert score.recommendations[0].startswith("Keep up your habits")
        assert "Build an emergency fund covering at least 3 months of expenses" in score.recommendations
        assert len(score.recommendations) == 2

    def test_empty_history(self):
        """Test a user with no transactions gets a weighted low score."""
        score = calculate_financial_health_score([], JAN_START, JAN_END)

        assert score.breakdown.net_worth == 10
        assert score.breakdown.savings_rate == 25
        assert score.breakdown.debt_ratio == 100
        assert score.overall == 38
        assert score.rating == "needs-improvement"
        assert "Increase your savings rate to at least 15% of income" in score.recommendations
        assert len(score.recommendations) == 4

    def test_high_debt_is_flagged(self):
        """Test a high debt ratio adds a debt recommendation."""
        transactions = [
            make_transaction("income", 1000, "salary", id=1),
            make_transaction("expense", 600, "credit-card-payment", id=2),
        ]
        score = calculate_financial_health_score(transactions, JAN_START, JAN_END)

        assert score.debt_to_income_ratio == Decimal("60.0")
        assert score.breakdown.debt_ratio == 25
        assert any("debt payments take 60.0%" in item for item in score.recommendations)

    def test_score_bounds(self, january_transactions):
        """Test the overall score stays within 0 and 100."""
        score = calculate_financial_health_score(january_transactions, JAN_START, JAN_END)
        assert 0 <= score.overall <= 100
