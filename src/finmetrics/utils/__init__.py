"""Utility functions for finmetrics."""

from finmetrics.utils.date_parser import parse_date, get_date_range
from finmetrics.utils.amount_parser import parse_amount, format_amount

__all__ = ["parse_date", "get_date_range", "parse_amount", "format_amount"]
