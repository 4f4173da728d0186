"""Date parsing utilities."""

from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

PERIODS = (
    "this-week",
    "last-week",
    "this-month",
    "last-month",
    "this-quarter",
    "this-year",
    "last-year",
)


def month_bounds(day: date) -> tuple[date, date]:
    """Return the first and last day of the month containing ``day``."""
    start = day.replace(day=1)
    return start, start + relativedelta(months=1) - timedelta(days=1)


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024") and a few
    relative forms: "today", "yesterday", "tomorrow", "N days ago",
    "start of month", "start of year".

    Args:
        date_str: Date string
        today: Reference day for relative forms (defaults to today)

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    if today is None:
        today = date.today()

    relative = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
        "start of month": today.replace(day=1),
        "start of year": today.replace(month=1, day=1),
    }
    if text in relative:
        return relative[text]

    parts = text.split()
    if len(parts) == 3 and parts[1] in ("day", "days") and parts[2] == "ago" and parts[0].isdigit():
        return today - timedelta(days=int(parts[0]))

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get start and end dates for a named period.

    Current periods end today; past periods end on their last day.

    Args:
        period: One of PERIODS
        today: Reference day (defaults to today)

    Returns:
        Tuple of (start_date, end_date)

    Raises:
        ValueError: If period string is not recognized
    """
    key = period.strip().lower()
    if today is None:
        today = date.today()
    week_start = today - timedelta(days=today.weekday())

    if key == "this-week":
        return week_start, today
    if key == "last-week":
        start = week_start - timedelta(days=7)
        return start, start + timedelta(days=6)
    if key == "this-month":
        return today.replace(day=1), today
    if key == "last-month":
        return month_bounds(today.replace(day=1) - timedelta(days=1))
    if key == "this-quarter":
        first_month = 3 * ((today.month - 1) // 3) + 1
        return today.replace(month=first_month, day=1), today
    if key == "this-year":
        return today.replace(month=1, day=1), today
    if key == "last-year":
        return date(today.year - 1, 1, 1), date(today.year - 1, 12, 31)

    raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")
