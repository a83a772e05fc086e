"""
Calendar date utilities for inventory records and reports.

Purchase, warranty, reported and completed dates are plain calendar dates.
Reports that depend on "now" accept an explicit ``as_of`` date so results are
reproducible; ``today()`` is only the fallback.
"""

import calendar
from datetime import date, datetime, timezone
from typing import Optional, Union

DAYS_PER_YEAR = 365.25


def today() -> date:
    """Current UTC calendar date."""
    return datetime.now(timezone.utc).date()


def resolve_as_of(as_of: Optional[date] = None) -> date:
    """Return ``as_of`` when given, otherwise today's date."""
    if as_of is not None:
        return as_of
    return today()


def parse_iso_date(value: Union[str, date, datetime, None]) -> Optional[date]:
    """
    Parse an ISO date string into a date.

    Accepts ``YYYY-MM-DD`` strings, full ISO timestamps (the date part is
    kept), ``date`` and ``datetime`` objects. Empty values return None.

    Raises:
        ValueError: If the string is not an ISO date
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        return None

    if "T" in text:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    return date.fromisoformat(text)


def format_iso_date(value: Optional[date]) -> Optional[str]:
    """Format a date as ``YYYY-MM-DD`` (None stays None)."""
    if value is None:
        return None
    return value.isoformat()


def add_months(value: date, months: int) -> date:
    """
    Shift a date by whole months, clamping the day to the target month's end.

    ``add_months(date(2024, 8, 31), 6)`` is ``date(2025, 2, 28)``.
    """
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(value.day, last_day))


def years_between(start: date, end: date) -> float:
    """Elapsed years from ``start`` to ``end`` using 365.25-day years."""
    return (end - start).days / DAYS_PER_YEAR


def month_key(value: date) -> str:
    """Sortable ``YYYY-MM`` key for monthly aggregation."""
    return f"{value.year:04d}-{value.month:02d}"


def month_label(value: date) -> str:
    """Short display label such as ``Jul 24``."""
    return value.strftime("%b %y")
