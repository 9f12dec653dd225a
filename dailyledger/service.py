"""Mini README: Single entry point exposing every ledger operation.

Structure:
    * LedgerService - wires the store, guard, ledger, advance cache,
      reporting engine, and account administration together.

Each operation takes the caller's user id (or ``None`` for anonymous calls)
as its first argument, so identity resolution stays with the transport. The
component methods run inside ``store.transaction()``; a failing operation
leaves no partial write behind.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .accounts import AccountAdministration, ProfileService
from .auth import AuthorizationGuard, IdentityDirectory
from .ledger import DailyEntryLedger, MonthlyAdvanceAggregator
from .logging_utils import get_logger
from .records import DailyEntry, UserProfile
from .reporting import (
    ComprehensiveMonthlySummary,
    ReportingEngine,
    UserMonthlySummary,
    UsersMonthlyAggregate,
)
from .storage import DocumentStore, InMemoryDocumentStore

LOGGER = get_logger(__name__)


class LedgerService:
    """Facade grouping the public and admin-only operations."""

    def __init__(self, store: Optional[DocumentStore] = None) -> None:
        self.store = store or InMemoryDocumentStore()
        self.guard = AuthorizationGuard(self.store)
        self.identities = IdentityDirectory(self.store)
        self.advances = MonthlyAdvanceAggregator(self.store, self.guard)
        self.ledger = DailyEntryLedger(self.store, self.guard, self.advances)
        self.reports = ReportingEngine(self.store, self.guard, self.ledger)
        self.profiles = ProfileService(self.store, self.guard)
        self.accounts = AccountAdministration(
            self.store, self.guard, self.identities, self.ledger, self.advances
        )
        LOGGER.debug("Ledger service ready on %s store", self.store.backend_name)

    # ------------------------------------------------------------------ public
    def create_user_profile(self, caller_id: Optional[str], username: str) -> UserProfile:
        return self.profiles.create_user_profile(caller_id, username)

    def check_user_profile(self, caller_id: Optional[str]) -> Optional[UserProfile]:
        return self.profiles.check_user_profile(caller_id)

    def get_user_profile(
        self, caller_id: Optional[str], target_user_id: Optional[str] = None
    ) -> Optional[UserProfile]:
        return self.profiles.get_user_profile(caller_id, target_user_id)

    def list_entries(
        self,
        caller_id: Optional[str],
        target_user_id: Optional[str] = None,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> List[DailyEntry]:
        return self.ledger.list_entries(caller_id, target_user_id, year, month)

    def upsert_entry(self, caller_id: Optional[str], entry_date: Any, **fields: Any) -> Dict[str, Any]:
        return self.ledger.upsert_entry(caller_id, entry_date, **fields)

    def get_monthly_advance_total(
        self, caller_id: Optional[str], year_month: str, target_user_id: Optional[str] = None
    ) -> float:
        return self.advances.get_monthly_total(caller_id, year_month, target_user_id)

    # -------------------------------------------------------------- admin only
    def list_all_users(self, caller_id: Optional[str]) -> List[Dict[str, Any]]:
        return self.accounts.list_all_users(caller_id)

    def set_deductions(
        self, caller_id: Optional[str], user_id: str, deductions: float
    ) -> Dict[str, Any]:
        return self.accounts.set_deductions(caller_id, user_id, deductions)

    def rename_user(
        self, caller_id: Optional[str], user_id: str, new_username: str
    ) -> Dict[str, Any]:
        return self.accounts.rename_user(caller_id, user_id, new_username)

    def delete_user(self, caller_id: Optional[str], user_id: str) -> Dict[str, Any]:
        return self.accounts.delete_user(caller_id, user_id)

    def delete_entry(self, caller_id: Optional[str], entry_id: str) -> Dict[str, Any]:
        return self.ledger.delete_entry(caller_id, entry_id)

    def get_users_monthly_aggregate(
        self, caller_id: Optional[str], year: int, month: int
    ) -> UsersMonthlyAggregate:
        return self.reports.get_users_monthly_aggregate(caller_id, year, month)

    def get_comprehensive_monthly_summary(
        self, caller_id: Optional[str], year: int, month: int
    ) -> ComprehensiveMonthlySummary:
        return self.reports.get_comprehensive_monthly_summary(caller_id, year, month)

    def get_users_monthly_summary(
        self, caller_id: Optional[str], year: int, month: int
    ) -> List[UserMonthlySummary]:
        return self.reports.get_users_monthly_summary(caller_id, year, month)

    def complete_system_reset(
        self, caller_id: Optional[str], confirmation_text: str
    ) -> Dict[str, Any]:
        return self.accounts.complete_system_reset(caller_id, confirmation_text)

    def reset_data_only(self, caller_id: Optional[str], confirmation_text: str) -> Dict[str, Any]:
        return self.accounts.reset_data_only(caller_id, confirmation_text)
