"""
Local calendar arithmetic.

Everything works on ``datetime.date`` values, so "local midnight" is the
date itself and day differences are exact calendar-day counts.
"""

from datetime import date, timedelta
from typing import Optional


def parse_calendar_date(value: str) -> Optional[date]:
    """
    Parse ``YYYY-MM-DD`` into a date.

    Returns None for anything that is not three numeric components, has a
    month outside 1..12 or a day outside 1..31, or names a day the
    calendar does not have (e.g. 2023-02-30). Overflowing dates are
    rejected rather than rolled forward.
    """
    if not isinstance(value, str):
        return None

    parts = value.strip().split("-")
    if len(parts) != 3 or not all(
        part.isascii() and part.isdigit() and len(part) <= 4 for part in parts
    ):
        return None

    year, month, day = (int(part) for part in parts)
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        return None

    try:
        return date(year, month, day)
    except ValueError:
        return None


def format_calendar_date(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def add_years(d: date, years: int) -> date:
    """
    Shift ``d`` by whole calendar years.

    Feb 29 landing on a non-leap year rolls over to Mar 1. Raises
    OverflowError when the target year is outside the calendar range.
    """
    year = d.year + years
    if not date.min.year <= year <= date.max.year:
        raise OverflowError(f"Year {year} is out of range")
    try:
        return d.replace(year=year)
    except ValueError:
        # Only Feb 29 can fail here
        return date(year, 3, 1)


def add_days(d: date, days: int) -> date:
    return d + timedelta(days=days)


def start_of_today() -> date:
    return date.today()


def diff_days(a: date, b: date) -> int:
    """Whole days from ``b`` to ``a``; negative when ``a`` is earlier."""
    return (a - b).days
