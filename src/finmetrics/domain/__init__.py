"""Domain layer for finmetrics application."""

__all__ = [
    "TransactionService",
    "BudgetService",
]


# Services import the database layer, which imports entities from this
# package, so they are resolved lazily
def __getattr__(name):
    if name == "TransactionService":
        from finmetrics.domain.transaction import TransactionService
        return TransactionService
    if name == "BudgetService":
        from finmetrics.domain.budget_service import BudgetService
        return BudgetService
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
