"""Mini README: Monthly reports built across every user's entries.

Structure:
    * UserTotal / UsersMonthlyAggregate - quick month totals per user.
    * UserDayEntry / DaySummary / MonthTotals / ComprehensiveMonthlySummary -
      day-by-day breakdown with grand totals.
    * UserMonthlySummary - per-profile rollup for a month.
    * ReportingEngine - admin-only builders for the three reports.

Reports are pure reads over full table scans. Missing amounts count as zero.
``total_remaining`` is gross minus purchases and never includes deductions;
deductions surface separately. The comprehensive summary adds a user's
deductions once per entry in the month, so a user with three entries
contributes three times their deductions to ``total_deductions``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Set

from ..auth import AuthorizationGuard
from ..errors import InvalidInput
from ..ledger import DailyEntryLedger
from ..logging_utils import get_logger
from ..messages import translate
from ..records import UserProfile, amount_or_zero
from ..storage import USER_PROFILES, DocumentStore
from ..utils import days_in_month, year_month_key

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class UserTotal:
    user_id: str
    total_amount: float = 0.0
    entries_count: int = 0


@dataclass(slots=True)
class UsersMonthlyAggregate:
    """Gross totals for a month, overall and per active user."""

    year_month: str
    total_amount: float
    total_entries: int
    active_users: int
    user_totals: List[UserTotal]

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class UserDayEntry:
    """One user's figures inside a day bucket."""

    user_id: str
    username: str
    cash_amount: float
    network_amount: float
    purchases_amount: float
    advance_amount: float
    deductions: float
    total: float
    remaining: float


@dataclass(slots=True)
class DaySummary:
    """Totals of every entry recorded for one calendar date."""

    date: str
    total_cash: float = 0.0
    total_network: float = 0.0
    total_purchases: float = 0.0
    total_advances: float = 0.0
    total_amount: float = 0.0
    total_remaining: float = 0.0
    entries_count: int = 0
    user_entries: List[UserDayEntry] = field(default_factory=list)


@dataclass(slots=True)
class MonthTotals:
    total_cash: float = 0.0
    total_network: float = 0.0
    total_gross: float = 0.0
    total_purchases: float = 0.0
    total_net: float = 0.0
    total_advances: float = 0.0
    total_deductions: float = 0.0
    average_daily_amount: float = 0.0
    active_days: int = 0
    days_in_month: int = 0
    active_users: int = 0


@dataclass(slots=True)
class ComprehensiveMonthlySummary:
    year: int
    month: int
    daily_summary: List[DaySummary]
    totals: MonthTotals

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class UserMonthlySummary:
    """Month rollup for one profile, present even without activity."""

    user_id: str
    username: str
    is_admin: bool
    deductions: float
    total_cash: float = 0.0
    total_network: float = 0.0
    total_purchases: float = 0.0
    total_advances: float = 0.0
    total_amount: float = 0.0
    total_remaining: float = 0.0
    entries_count: int = 0
    active_days: int = 0

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _month_key(year: int, month: int) -> str:
    try:
        return year_month_key(year, month)
    except ValueError as error:
        raise InvalidInput(str(error)) from error


class ReportingEngine:
    """Build administrator reports from entries and profiles."""

    def __init__(
        self, store: DocumentStore, guard: AuthorizationGuard, ledger: DailyEntryLedger
    ) -> None:
        self.store = store
        self.guard = guard
        self.ledger = ledger

    def _profiles(self) -> List[UserProfile]:
        return [UserProfile.from_document(document) for document in self.store.scan(USER_PROFILES)]

    def get_users_monthly_aggregate(
        self, caller_id: Optional[str], year: int, month: int
    ) -> UsersMonthlyAggregate:
        with self.store.transaction():
            self.guard.require_admin(caller_id)
            year_month = _month_key(year, month)
            entries = self.ledger.entries_in_month(year_month)

        per_user: Dict[str, UserTotal] = {}
        total_amount = 0.0
        for entry in entries:
            gross = amount_or_zero(entry.cash_amount) + amount_or_zero(entry.network_amount)
            total_amount += gross
            user_total = per_user.setdefault(entry.user_id, UserTotal(user_id=entry.user_id))
            user_total.total_amount += gross
            user_total.entries_count += 1

        LOGGER.debug("Aggregated %s entries for %s", len(entries), year_month)
        return UsersMonthlyAggregate(
            year_month=year_month,
            total_amount=total_amount,
            total_entries=len(entries),
            active_users=len(per_user),
            user_totals=list(per_user.values()),
        )

    def get_comprehensive_monthly_summary(
        self, caller_id: Optional[str], year: int, month: int
    ) -> ComprehensiveMonthlySummary:
        with self.store.transaction():
            self.guard.require_admin(caller_id)
            year_month = _month_key(year, month)
            entries = self.ledger.entries_in_month(year_month)
            profiles = {profile.user_id: profile for profile in self._profiles()}

        deleted_user = translate("deleted_user")
        days: Dict[str, DaySummary] = {}
        totals = MonthTotals()
        active_users: Set[str] = set()

        for entry in entries:
            profile = profiles.get(entry.user_id)
            cash = amount_or_zero(entry.cash_amount)
            network = amount_or_zero(entry.network_amount)
            purchases = amount_or_zero(entry.purchases_amount)
            advance = amount_or_zero(entry.advance_amount)
            deductions = profile.deductions if profile else 0.0
            gross = cash + network

            day = days.setdefault(entry.date, DaySummary(date=entry.date))
            day.total_cash += cash
            day.total_network += network
            day.total_purchases += purchases
            day.total_advances += advance
            day.total_amount += gross
            day.total_remaining += gross - purchases
            day.entries_count += 1
            day.user_entries.append(
                UserDayEntry(
                    user_id=entry.user_id,
                    username=profile.username if profile else deleted_user,
                    cash_amount=cash,
                    network_amount=network,
                    purchases_amount=purchases,
                    advance_amount=advance,
                    deductions=deductions,
                    total=gross,
                    remaining=gross - purchases,
                )
            )

            totals.total_cash += cash
            totals.total_network += network
            totals.total_purchases += purchases
            totals.total_advances += advance
            totals.total_deductions += deductions
            active_users.add(entry.user_id)

        daily_summary = sorted(days.values(), key=lambda day: day.date, reverse=True)
        totals.total_gross = totals.total_cash + totals.total_network
        totals.total_net = totals.total_gross - totals.total_purchases
        totals.active_days = len(daily_summary)
        totals.average_daily_amount = (
            totals.total_gross / totals.active_days if totals.active_days else 0.0
        )
        totals.days_in_month = days_in_month(year, month)
        totals.active_users = len(active_users)

        LOGGER.debug(
            "Comprehensive summary %s -> days: %s gross: %.2f users: %s",
            year_month,
            totals.active_days,
            totals.total_gross,
            totals.active_users,
        )
        return ComprehensiveMonthlySummary(
            year=int(year), month=int(month), daily_summary=daily_summary, totals=totals
        )

    def get_users_monthly_summary(
        self, caller_id: Optional[str], year: int, month: int
    ) -> List[UserMonthlySummary]:
        with self.store.transaction():
            self.guard.require_admin(caller_id)
            year_month = _month_key(year, month)
            entries = self.ledger.entries_in_month(year_month)
            profiles = self._profiles()

        summaries: Dict[str, UserMonthlySummary] = {
            profile.user_id: UserMonthlySummary(
                user_id=profile.user_id,
                username=profile.username,
                is_admin=profile.is_admin,
                deductions=profile.deductions,
            )
            for profile in profiles
        }

        for entry in entries:
            summary = summaries.get(entry.user_id)
            if summary is None:
                # Entries left behind by deleted accounts are not reported.
                continue
            cash = amount_or_zero(entry.cash_amount)
            network = amount_or_zero(entry.network_amount)
            purchases = amount_or_zero(entry.purchases_amount)
            summary.total_cash += cash
            summary.total_network += network
            summary.total_purchases += purchases
            summary.total_advances += amount_or_zero(entry.advance_amount)
            summary.total_amount += cash + network
            summary.total_remaining += cash + network - purchases
            summary.entries_count += 1

        active_dates: Dict[str, Set[str]] = {}
        for entry in entries:
            active_dates.setdefault(entry.user_id, set()).add(entry.date)
        for user_id, dates in active_dates.items():
            if user_id in summaries:
                summaries[user_id].active_days = len(dates)

        return sorted(summaries.values(), key=lambda summary: summary.total_amount, reverse=True)
