"""Amount parsing and formatting utilities."""

import re
from decimal import Decimal, InvalidOperation

_CURRENCY_SYMBOLS = re.compile(r"[$€£¥₦]")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Accepts "1234.5", "$1,234.50" and "(12.00)" (negative in parentheses).

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    text = amount_str.strip()
    negative = text.startswith("(") and text.endswith(")")
    if negative:
        text = text[1:-1]
    text = _CURRENCY_SYMBOLS.sub("", text).replace(",", "").strip()

    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if negative else amount


def parse_allocation(pair: str) -> tuple[str, Decimal]:
    """Parse a "category=amount" pair.

    Raises:
        ValueError: If the pair is malformed
    """
    key, sep, value = pair.partition("=")
    if not sep or not key.strip():
        raise ValueError(f"Allocation must look like 'category=amount', got '{pair}'")
    return key.strip().lower(), parse_amount(value)


def format_amount(amount: Decimal) -> str:
    """Format an amount with thousands separators and two decimals."""
    return f"{amount:,.2f}"


def format_percentage(value: Decimal) -> str:
    """Format a percentage with one decimal."""
    return f"{value:.1f}%"
