"""Mini README: Calendar helpers for date strings and year-month keys.

Entries store their day as an ISO ``YYYY-MM-DD`` string and monthly data is
keyed by the ``YYYY-MM`` prefix of that string, so month filters are plain
prefix matches. The helpers here build and validate those strings; they
raise ``ValueError`` and leave translation into ledger errors to callers.
"""

from __future__ import annotations

import calendar
from datetime import date


def year_month_key(year: int, month: int) -> str:
    """Return the zero-padded ``YYYY-MM`` key for a calendar month."""

    if not 1 <= int(month) <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")
    return f"{int(year)}-{int(month):02d}"


def month_of(entry_date: str) -> str:
    """Return the year-month key an ISO date string belongs to."""

    return entry_date[:7]


def days_in_month(year: int, month: int) -> int:
    """Number of calendar days in the month (28 to 31)."""

    return calendar.monthrange(int(year), int(month))[1]


def normalise_entry_date(value: object) -> str:
    """Validate an entry date and return it in ``YYYY-MM-DD`` form."""

    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str):
        raise ValueError("Entry dates must be ISO strings or date instances")
    candidate = value.strip()
    if len(candidate) != 10:
        raise ValueError(f"Entry date '{value}' is not in YYYY-MM-DD format")
    return date.fromisoformat(candidate).isoformat()
