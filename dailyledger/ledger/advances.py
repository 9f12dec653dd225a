"""Mini README: Monthly advance totals maintained as a materialised view.

Structure:
    * MonthlyAdvanceAggregator - recomputes and serves per-user monthly sums.

A month's total is always rebuilt from the user's entries rather than
adjusted by deltas, so edits that clear an advance and entry deletions leave
the cache exact. Rows are keyed by ``(user_id, year_month)``.
"""

from __future__ import annotations

from typing import Optional

from ..auth import AuthorizationGuard
from ..logging_utils import get_logger
from ..records import MonthlyAdvance, amount_or_zero, utcnow
from ..storage import DAILY_ENTRIES, MONTHLY_ADVANCES, DocumentStore
from ..utils import month_of

LOGGER = get_logger(__name__)


class MonthlyAdvanceAggregator:
    """Keep ``monthly_advances`` in step with the daily entries."""

    def __init__(self, store: DocumentStore, guard: AuthorizationGuard) -> None:
        self.store = store
        self.guard = guard

    def compute_month(self, user_id: str, year_month: str) -> float:
        """Sum the user's advances for entries dated within ``year_month``."""

        entries = self.store.find(DAILY_ENTRIES, "by_user", user_id=user_id)
        advances = [
            amount_or_zero(entry.get("advance_amount"))
            for entry in entries
            if entry["date"].startswith(year_month) and entry.get("advance_amount")
        ]
        return sum(advances, 0.0)

    def recompute_month(self, user_id: str, entry_date: str) -> MonthlyAdvance:
        """Rebuild the cached total for the month containing ``entry_date``."""

        year_month = month_of(entry_date)
        total = self.compute_month(user_id, year_month)
        now = utcnow()
        existing = self.store.first(
            MONTHLY_ADVANCES, "by_user_and_month", user_id=user_id, year_month=year_month
        )
        if existing:
            self.store.patch(
                MONTHLY_ADVANCES, existing["_id"], {"total_advances": total, "updated_at": now}
            )
            advance_id = existing["_id"]
        else:
            advance_id = self.store.insert(
                MONTHLY_ADVANCES,
                {
                    "user_id": user_id,
                    "year_month": year_month,
                    "total_advances": total,
                    "updated_at": now,
                },
            )
        LOGGER.info("Recomputed advances for %s %s -> %.2f", user_id, year_month, total)
        return MonthlyAdvance(
            advance_id=advance_id,
            user_id=user_id,
            year_month=year_month,
            total_advances=total,
            updated_at=now,
        )

    def get_monthly_total(
        self, caller_id: Optional[str], year_month: str, target_user_id: Optional[str] = None
    ) -> float:
        """Return the cached advance total for a month, or 0 when none is recorded."""

        with self.store.transaction():
            context = self.guard.resolve_caller(caller_id)
            target = self.guard.require_self_or_admin(target_user_id, context)
            document = self.store.first(
                MONTHLY_ADVANCES, "by_user_and_month", user_id=target, year_month=year_month
            )
        return amount_or_zero(document.get("total_advances")) if document else 0.0

    def delete_for_user(self, user_id: str) -> int:
        rows = self.store.find(MONTHLY_ADVANCES, "by_user", user_id=user_id)
        for row in rows:
            self.store.delete(MONTHLY_ADVANCES, row["_id"])
        return len(rows)

    def clear_all(self) -> int:
        rows = self.store.scan(MONTHLY_ADVANCES)
        for row in rows:
            self.store.delete(MONTHLY_ADVANCES, row["_id"])
        return len(rows)
