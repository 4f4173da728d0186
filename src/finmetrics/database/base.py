"""Abstract database interface."""

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from finmetrics.domain.entities import Budget, Transaction, TransactionType


class Database(ABC):
    """Abstract database interface for finmetrics."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        type: TransactionType,
        amount: Decimal,
        category: str,
        date: date,
        description: Optional[str] = None,
        currency: str = "USD",
        is_recurring: bool = False,
        user_id: Optional[str] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        transaction_type: Optional[TransactionType] = None,
        category: Optional[str] = None,
    ) -> list[Transaction]:
        """List transactions with optional filters, oldest first."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        pass

    # Budget operations
    @abstractmethod
    def save_budget(self, budget: Budget) -> int:
        """Store a budget with its categories. Returns budget ID."""
        pass

    @abstractmethod
    def get_budget(self, budget_id: int) -> Optional[Budget]:
        """Get budget by ID."""
        pass

    @abstractmethod
    def get_active_budget(self, user_id: Optional[str] = None) -> Optional[Budget]:
        """Get the most recent active budget."""
        pass

    @abstractmethod
    def list_budgets(self) -> list[Budget]:
        """List all budgets, newest period first."""
        pass

    @abstractmethod
    def deactivate_budgets(self, user_id: Optional[str] = None) -> None:
        """Mark all budgets as inactive."""
        pass

    @abstractmethod
    def delete_budget(self, budget_id: int) -> None:
        """Delete a budget and its categories."""
        pass
