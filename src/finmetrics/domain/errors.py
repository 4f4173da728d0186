"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class UnsupportedBudgetMethodError(DomainError):
    """Budget method has no allocation rule."""


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def budget_not_found(budget_id: int) -> str:
    """Return message for missing budget."""
    return f"Budget {budget_id} not found"


def budget_category_not_found(category_id: str) -> str:
    """Return message for missing budget category."""
    return f"Budget category '{category_id}' not found"


def unsupported_budget_method(method: str) -> str:
    """Return message for a budget method without an allocator."""
    return (
        f"Budget method '{method}' has no automatic allocation. "
        "Use 'custom' with explicit allocations instead."
    )


def no_active_budget() -> str:
    """Return message when no budget is active."""
    return "No active budget. Create one with 'finmetrics budget create'."
