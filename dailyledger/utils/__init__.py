"""Mini README: Small shared helpers for the ledger packages."""

from .months import days_in_month, month_of, normalise_entry_date, year_month_key

__all__ = ["days_in_month", "month_of", "normalise_entry_date", "year_month_key"]
