"""Mini README: Administrator reporting over the daily ledger.

The ``summaries`` module contains the report builders and the dataclasses
they return; each result exposes ``as_dict`` for JSON responses.
"""

from .summaries import (
    ComprehensiveMonthlySummary,
    DaySummary,
    MonthTotals,
    ReportingEngine,
    UserDayEntry,
    UserMonthlySummary,
    UsersMonthlyAggregate,
    UserTotal,
)

__all__ = [
    "ComprehensiveMonthlySummary",
    "DaySummary",
    "MonthTotals",
    "ReportingEngine",
    "UserDayEntry",
    "UserMonthlySummary",
    "UsersMonthlyAggregate",
    "UserTotal",
]
