"""Transaction domain service."""

from typing import Optional
from datetime import date
from decimal import Decimal
from finmetrics.database.base import Database
from finmetrics.domain import errors
from finmetrics.domain.categories import normalize_category
from finmetrics.domain.entities import Transaction, TransactionType
from finmetrics.domain.errors import NotFoundError, ValidationError


class TransactionService:
    """Service for recording and querying transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_transaction(
        self,
        type: TransactionType | str,
        amount: Decimal,
        category: str,
        date: date,
        description: Optional[str] = None,
        currency: str = "USD",
        is_recurring: bool = False,
        user_id: Optional[str] = None,
    ) -> int:
        """Record a transaction.

        Args:
            type: Transaction type (income, expense, asset, liability)
            amount: Non-negative amount; direction comes from the type
            category: Category key (e.g. "rent", "emergency-fund")
            date: Transaction date
            description: Optional description
            currency: Currency code
            is_recurring: Whether the transaction repeats
            user_id: Optional owner tag

        Returns:
            Transaction ID

        Raises:
            ValidationError: If the type is unknown, the amount is negative
                or the category is empty
        """
        try:
            txn_type = TransactionType(type)
        except ValueError:
            valid = ", ".join(t.value for t in TransactionType)
            raise ValidationError(f"Unknown transaction type '{type}'. Expected one of: {valid}")

        if amount < 0:
            raise ValidationError(
                f"Amount must not be negative (got {amount}); use the transaction type for direction"
            )

        category_key = normalize_category(category)
        if not category_key:
            raise ValidationError("Category is required")

        return self.db.create_transaction(
            type=txn_type,
            amount=amount,
            category=category_key,
            date=date,
            description=description,
            currency=currency.upper(),
            is_recurring=is_recurring,
            user_id=user_id,
        )

    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        transaction_type: Optional[TransactionType | str] = None,
        category: Optional[str] = None,
    ) -> list[Transaction]:
        """List transactions, oldest first, with optional filters."""
        if transaction_type is not None:
            transaction_type = TransactionType(transaction_type)
        if category is not None:
            category = normalize_category(category)
        return self.db.list_transactions(
            start_date=start_date,
            end_date=end_date,
            transaction_type=transaction_type,
            category=category,
        )

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        if self.db.get_transaction(transaction_id) is None:
            raise NotFoundError(errors.transaction_not_found(transaction_id))
        self.db.delete_transaction(transaction_id)
