"""Date parsing utilities."""

import re
from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday"

    Args:
        date_str: Date string in various formats
        today: Reference date for relative dates (should come from the
            ledger clock so "today" matches the reference timezone)

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    if today is None:
        today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    # Try parsing as absolute date
    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_month(month_str: str, today: Optional[date] = None) -> date:
    """Parse a month string into the first day of that month.

    Supports:
    - "this month", "last month"
    - "2024-01", "2024/01"
    - Anything parse_date accepts (the day is dropped)

    Args:
        month_str: Month string
        today: Reference date for relative months

    Returns:
        First day of the month

    Raises:
        ValueError: If month string cannot be parsed
    """
    month_str = month_str.strip().lower()
    if today is None:
        today = date.today()

    if month_str == "this month":
        return today.replace(day=1)
    if month_str == "last month":
        return (today - relativedelta(months=1)).replace(day=1)

    match = re.fullmatch(r"(\d{4})[-/](\d{1,2})", month_str)
    if match:
        year, month = int(match.group(1)), int(match.group(2))
        if not 1 <= month <= 12:
            raise ValueError(f"Could not parse month '{month_str}': month must be 1-12")
        return date(year, month, 1)

    return parse_date(month_str, today=today).replace(day=1)
