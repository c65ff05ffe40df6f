"""Calendar-month arithmetic for report buckets."""

import calendar as cal
from datetime import datetime


def add_months(dt: datetime, months: int) -> datetime:
    """Add months to a datetime, clamping to last day of month."""
    month = dt.month - 1 + months
    year = dt.year + month // 12
    month = month % 12 + 1
    max_day = cal.monthrange(year, month)[1]
    day = min(dt.day, max_day)
    return dt.replace(year=year, month=month, day=day)


def month_start(reference: datetime) -> datetime:
    """Get midnight on the first day of the month containing the reference date."""
    return reference.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def months_between(start: datetime, end: datetime) -> int:
    """Number of calendar months from start's month to end's month, inclusive.

    Returns 0 when end falls before the start of start's month.
    """
    if end < month_start(start):
        return 0
    return (end.year - start.year) * 12 + end.month - start.month + 1


def month_label(dt: datetime) -> str:
    """Short month and year, e.g. "Jan 2024"."""
    return f"{cal.month_abbr[dt.month]} {dt.year}"
