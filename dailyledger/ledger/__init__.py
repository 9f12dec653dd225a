"""Mini README: Daily entry ledger and the monthly advance cache.

``entries`` owns the per-user, per-day records; ``advances`` keeps the
monthly advance totals derived from them.
"""

from .advances import MonthlyAdvanceAggregator
from .entries import DailyEntryLedger, derive_totals

__all__ = ["DailyEntryLedger", "MonthlyAdvanceAggregator", "derive_totals"]
