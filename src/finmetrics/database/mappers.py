"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the calculation code never sees
ORM objects.
"""

from decimal import Decimal

from finmetrics.domain import entities as domain
from finmetrics.database.models import (
    BudgetCategoryRecord,
    BudgetRecord,
    TransactionRecord,
)


def transaction_to_domain(record: TransactionRecord) -> domain.Transaction:
    """Convert SQLAlchemy TransactionRecord to domain Transaction entity."""
    return domain.Transaction(
        id=record.id,
        type=domain.TransactionType(record.type),
        amount=Decimal(record.amount),
        category=record.category,
        date=record.date,
        description=record.description or "",
        currency=record.currency,
        is_recurring=record.is_recurring,
        user_id=record.user_id,
    )


def budget_category_to_domain(record: BudgetCategoryRecord) -> domain.BudgetCategory:
    """Convert SQLAlchemy BudgetCategoryRecord to domain BudgetCategory entity."""
    return domain.BudgetCategory(
        id=record.key,
        name=record.name,
        type=record.category_type,
        allocated=Decimal(record.allocated),
        allow_rollover=record.allow_rollover,
        rollover_amount=Decimal(record.rollover_amount or 0),
    )


def budget_to_domain(record: BudgetRecord) -> domain.Budget:
    """Convert SQLAlchemy BudgetRecord to domain Budget entity.

    Custom allocations are not stored separately; they are rebuilt from the
    category allocations.
    """
    categories = tuple(budget_category_to_domain(c) for c in record.categories)
    method_type = domain.BudgetMethodType(record.method)
    allocations = {}
    if method_type == domain.BudgetMethodType.CUSTOM:
        allocations = {c.id: c.allocated for c in categories}

    return domain.Budget(
        method=domain.BudgetMethod(type=method_type, allocations=allocations),
        period=domain.BudgetPeriod(
            frequency=domain.BudgetFrequency(record.frequency),
            start_date=record.start_date,
            end_date=record.end_date,
        ),
        categories=categories,
        user_id=record.user_id,
        name=record.name,
        id=record.id,
        is_active=record.is_active,
    )


def budget_to_record(budget: domain.Budget) -> BudgetRecord:
    """Build a new SQLAlchemy BudgetRecord from a domain Budget."""
    record = BudgetRecord(
        name=budget.name,
        method=domain.BudgetMethodType(budget.method.type).value,
        frequency=domain.BudgetFrequency(budget.period.frequency).value,
        start_date=budget.period.start_date,
        end_date=budget.period.end_date,
        user_id=budget.user_id,
        is_active=budget.is_active,
    )
    record.categories = [
        BudgetCategoryRecord(
            key=category.id,
            name=category.name,
            category_type=category.type,
            allocated=category.allocated,
            allow_rollover=category.allow_rollover,
            rollover_amount=category.rollover_amount,
            position=position,
        )
        for position, category in enumerate(budget.categories)
    ]
    return record
