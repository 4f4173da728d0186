"""Transaction classification into semantic budget categories."""

import logging
from typing import Iterable

from finmetrics.domain.constants import CATEGORY_TO_BUDGET_TYPE, DEFAULT_BUDGET_TYPE
from finmetrics.domain.entities import Classification, Transaction, TransactionType

logger = logging.getLogger(__name__)

# Description keywords used when the category key is not recognised
_DESCRIPTION_HINTS = (
    ("rent", "housing"),
    ("mortgage", "housing"),
    ("landlord", "housing"),
    ("electric", "utilities"),
    ("internet", "utilities"),
    ("grocery", "food"),
    ("restaurant", "food"),
    ("cafe", "food"),
    ("uber", "transportation"),
    ("taxi", "transportation"),
    ("fuel", "transportation"),
    ("parking", "transportation"),
    ("pharmacy", "healthcare"),
    ("doctor", "healthcare"),
    ("insurance", "insurance"),
    ("netflix", "subscriptions"),
    ("spotify", "subscriptions"),
    ("cinema", "entertainment"),
    ("concert", "entertainment"),
    ("flight", "travel"),
    ("hotel", "travel"),
    ("gym", "fitness"),
    ("loan", "debt"),
    ("tuition", "education"),
    ("donation", "donations"),
    ("charity", "donations"),
)


def normalize_category(category: str | None) -> str:
    """Normalize a raw category key for table lookups."""
    return (category or "").strip().lower()


def map_category_to_budget_type(category: str | None) -> str:
    """Map a raw category key to its semantic budget category.

    Semantic keys map to themselves. Unknown keys fall back to ``other``.
    """
    key = normalize_category(category)
    semantic = CATEGORY_TO_BUDGET_TYPE.get(key)
    if semantic is None:
        logger.debug("No budget category for %r, using %r", key, DEFAULT_BUDGET_TYPE)
        return DEFAULT_BUDGET_TYPE
    return semantic


def is_mapped_category(category: str | None) -> bool:
    """Return True if the category key appears in the lookup table."""
    return normalize_category(category) in CATEGORY_TO_BUDGET_TYPE


def classify(transaction: Transaction) -> Classification:
    """Classify a transaction into its type bucket and semantic category.

    Args:
        transaction: Transaction to classify

    Returns:
        Classification with the transaction type and semantic category
    """
    return Classification(
        bucket=TransactionType(transaction.type),
        semantic_category=map_category_to_budget_type(transaction.category),
    )


def get_unmapped_transactions(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Return expense transactions whose category has no budget mapping."""
    return [
        txn
        for txn in transactions
        if txn.type == TransactionType.EXPENSE and not is_mapped_category(txn.category)
    ]


def suggest_budget_categories(transaction: Transaction) -> list[str]:
    """Suggest semantic budget categories for a transaction.

    A mapped category key wins outright. Otherwise the description is scanned
    for known keywords, and ``other`` is returned when nothing matches.
    """
    if is_mapped_category(transaction.category):
        return [map_category_to_budget_type(transaction.category)]

    description = (transaction.description or "").lower()
    suggestions: list[str] = []
    for keyword, semantic in _DESCRIPTION_HINTS:
        if keyword in description and semantic not in suggestions:
            suggestions.append(semantic)

    return suggestions or [DEFAULT_BUDGET_TYPE]
