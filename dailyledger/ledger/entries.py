"""Mini README: Per-user daily entry ledger.

Structure:
    * DailyEntryLedger - lists, upserts, and deletes daily entries.

Entries are unique per ``(user_id, date)``; writing the same day again
replaces the stored figures in place. ``total`` and ``remaining`` are derived
from the raw amounts on every write and deductions never enter them, they
are applied by the reporting engine only. Any write touching an advance
triggers a full recomputation of that month's cached advance total.
"""

from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Tuple

from ..auth import AuthorizationGuard
from ..errors import EntryNotFound, InvalidInput, ProfileNotFound
from ..logging_utils import get_logger
from ..records import DailyEntry, amount_or_zero, utcnow
from ..storage import DAILY_ENTRIES, DocumentStore
from ..utils import normalise_entry_date, year_month_key
from .advances import MonthlyAdvanceAggregator

LOGGER = get_logger(__name__)


def _coerce_amount(name: str, value: Any) -> Optional[float]:
    """Validate an optional amount, keeping ``None`` for absent values."""

    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidInput(f"{name} must be a number")
    try:
        amount = float(value)
    except (TypeError, ValueError) as error:
        raise InvalidInput(f"{name} must be a number") from error
    if not math.isfinite(amount) or amount < 0:
        raise InvalidInput(f"{name} must be a non-negative number")
    return amount


def derive_totals(
    cash_amount: Optional[float],
    network_amount: Optional[float],
    purchases_amount: Optional[float],
) -> Tuple[float, float]:
    """Return ``(total, remaining)`` for the given raw amounts."""

    total = amount_or_zero(cash_amount) + amount_or_zero(network_amount)
    return total, total - amount_or_zero(purchases_amount)


def _sorted_newest_first(documents: List[Dict[str, Any]]) -> List[DailyEntry]:
    entries = [DailyEntry.from_document(document) for document in documents]
    return sorted(entries, key=lambda entry: entry.date, reverse=True)


class DailyEntryLedger:
    """Record and query the daily figures of every user."""

    def __init__(
        self,
        store: DocumentStore,
        guard: AuthorizationGuard,
        advances: MonthlyAdvanceAggregator,
    ) -> None:
        self.store = store
        self.guard = guard
        self.advances = advances

    # ---------------------------------------------------------------- queries
    def list_all_for_user(self, user_id: str) -> List[DailyEntry]:
        """Every entry of the user, newest date first."""

        return _sorted_newest_first(self.store.find(DAILY_ENTRIES, "by_user", user_id=user_id))

    def list_for_user_in_month(self, user_id: str, year_month: str) -> List[DailyEntry]:
        """Entries of the user whose date starts with ``year_month``, newest first."""

        documents = self.store.find(DAILY_ENTRIES, "by_user", user_id=user_id)
        return _sorted_newest_first(
            [document for document in documents if document["date"].startswith(year_month)]
        )

    def entries_in_month(self, year_month: str) -> List[DailyEntry]:
        """All users' entries for a month, in storage order."""

        return [
            DailyEntry.from_document(document)
            for document in self.store.scan(DAILY_ENTRIES)
            if document["date"].startswith(year_month)
        ]

    def list_entries(
        self,
        caller_id: Optional[str],
        target_user_id: Optional[str] = None,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> List[DailyEntry]:
        with self.store.transaction():
            context = self.guard.resolve_caller(caller_id)
            target = self.guard.require_self_or_admin(target_user_id, context)
            if year is not None and month is not None:
                try:
                    year_month = year_month_key(year, month)
                except ValueError as error:
                    raise InvalidInput(str(error)) from error
                entries = self.list_for_user_in_month(target, year_month)
            else:
                entries = self.list_all_for_user(target)
        LOGGER.debug("Listed %s entries for %s", len(entries), target)
        return entries

    # -------------------------------------------------------------- mutations
    def upsert_entry(
        self,
        caller_id: Optional[str],
        entry_date: Any,
        *,
        cash_amount: Optional[float] = None,
        network_amount: Optional[float] = None,
        purchases_amount: Optional[float] = None,
        advance_amount: Optional[float] = None,
        notes: Optional[str] = None,
        target_user_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Create or replace the entry for ``(target, entry_date)``.

        The target must own a profile. An admin writing for an identity that
        never created one gets ``ProfileNotFound``; the entry is not stored
        with zero deductions assumed.
        """

        with self.store.transaction():
            context = self.guard.resolve_caller(caller_id)
            target = self.guard.require_self_or_admin(target_user_id, context)

            try:
                day = normalise_entry_date(entry_date)
            except ValueError as error:
                raise InvalidInput(str(error)) from error
            cash = _coerce_amount("cash_amount", cash_amount)
            network = _coerce_amount("network_amount", network_amount)
            purchases = _coerce_amount("purchases_amount", purchases_amount)
            advance = _coerce_amount("advance_amount", advance_amount)

            target_profile = (
                context.profile if target == context.user_id else self.guard.load_profile(target)
            )
            if target_profile is None:
                raise ProfileNotFound(target)
            # Deductions are applied by the reports, never stored on the entry.
            LOGGER.debug("Target %s carries deductions %.2f", target, target_profile.deductions)

            total, remaining = derive_totals(cash, network, purchases)
            now = utcnow()
            fields = {
                "user_id": target,
                "date": day,
                "cash_amount": cash,
                "network_amount": network,
                "purchases_amount": purchases,
                "advance_amount": advance,
                "notes": notes,
                "total": total,
                "remaining": remaining,
                "updated_at": now,
            }
            existing = self.store.first(DAILY_ENTRIES, "by_user_and_date", user_id=target, date=day)
            if existing:
                self.store.patch(DAILY_ENTRIES, existing["_id"], fields)
                entry_id = existing["_id"]
                LOGGER.info("Updated entry %s for %s on %s", entry_id, target, day)
            else:
                entry_id = self.store.insert(DAILY_ENTRIES, {**fields, "created_at": now})
                LOGGER.info("Created entry %s for %s on %s", entry_id, target, day)

            if advance or (existing and existing.get("advance_amount")):
                self.advances.recompute_month(target, day)

        return {"success": True, "entry_id": entry_id}

    def delete_entry(self, caller_id: Optional[str], entry_id: str) -> Dict[str, Any]:
        """Admin-only removal of a single entry."""

        with self.store.transaction():
            self.guard.require_admin(caller_id)
            document = self.store.get(DAILY_ENTRIES, entry_id)
            if document is None:
                raise EntryNotFound(entry_id)
            self.store.delete(DAILY_ENTRIES, entry_id)
            if document.get("advance_amount"):
                self.advances.recompute_month(document["user_id"], document["date"])
        LOGGER.info("Deleted entry %s", entry_id)
        return {"success": True}

    # ----------------------------------------------------------- bulk helpers
    def delete_for_user(self, user_id: str) -> int:
        rows = self.store.find(DAILY_ENTRIES, "by_user", user_id=user_id)
        for row in rows:
            self.store.delete(DAILY_ENTRIES, row["_id"])
        return len(rows)

    def clear_all(self) -> int:
        rows = self.store.scan(DAILY_ENTRIES)
        for row in rows:
            self.store.delete(DAILY_ENTRIES, row["_id"])
        return len(rows)
