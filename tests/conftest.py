"""Shared pytest fixtures for finmetrics tests."""

import os
import tempfile
from datetime import date
from decimal import Decimal

import pytest

from finmetrics.database.factories import create_sqlite_database
from finmetrics.domain.budget_service import BudgetService
from finmetrics.domain.entities import Transaction, TransactionType
from finmetrics.domain.transaction import TransactionService


def make_transaction(
    type: str,
    amount,
    category: str,
    day: date = date(2024, 1, 15),
    description: str = "",
    is_recurring: bool = False,
    id: int = 0,
) -> Transaction:
    """Build a Transaction with sensible defaults for tests."""
    return Transaction(
        id=id,
        type=TransactionType(type),
        amount=Decimal(str(amount)),
        category=category,
        date=day,
        description=description,
        is_recurring=is_recurring,
    )


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def budget_service(temp_db):
    """Create a BudgetService with a temporary database."""
    return BudgetService(temp_db)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def january_transactions():
    """A month of mixed transactions in January 2024."""
    return [
        make_transaction("income", 5000, "salary", date(2024, 1, 1), "Monthly salary", True, id=1),
        make_transaction("expense", 1200, "rent", date(2024, 1, 3), "January rent", id=2),
        make_transaction("expense", 150, "electricity", date(2024, 1, 5), id=3),
        make_transaction("expense", 400, "groceries", date(2024, 1, 10), id=4),
        make_transaction("expense", 80, "gas", date(2024, 1, 12), "Fuel", id=5),
        make_transaction("expense", 200, "movies", date(2024, 1, 20), id=6),
        make_transaction("asset", 500, "savings-account", date(2024, 1, 25), id=7),
    ]


@pytest.fixture
def net_worth_transactions():
    """Assets and liabilities with a known net worth of 15500."""
    return [
        make_transaction("asset", 10000, "cash", id=1),
        make_transaction("asset", 5000, "stocks", id=2),
        make_transaction("asset", 2500, "emergency-fund", id=3),
        make_transaction("liability", 2000, "credit-card", id=4),
    ]
