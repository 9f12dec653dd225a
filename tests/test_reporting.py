"""Mini README: Tests for the administrator monthly reports.

A shared month of activity exercises day bucketing, grand totals (including
the per-entry deduction sum), the deleted-user placeholder, per-user
rollups, and the quick aggregate.
"""

from __future__ import annotations

import pytest

from dailyledger.errors import Forbidden, InvalidInput


@pytest.fixture
def march_activity(service, admin_id, member_id, other_member_id):
    """Two members plus one entry left behind by a removed account."""

    service.set_deductions(admin_id, member_id, 40.0)
    service.upsert_entry(member_id, "2024-03-05", cash_amount=100, network_amount=50, purchases_amount=30)
    service.upsert_entry(member_id, "2024-03-06", cash_amount=0, network_amount=0, purchases_amount=0, advance_amount=20)
    service.upsert_entry(other_member_id, "2024-03-05", cash_amount=10)
    service.upsert_entry(other_member_id, "2024-02-29", cash_amount=500)
    service.store.insert(
        "daily_entries",
        {"user_id": "user_0999", "date": "2024-03-07", "cash_amount": 7.0},
    )
    return service


def test_comprehensive_summary_groups_days_newest_first(march_activity, admin_id) -> None:
    summary = march_activity.get_comprehensive_monthly_summary(admin_id, 2024, 3)

    days = {day.date: day for day in summary.daily_summary}
    assert [day.date for day in summary.daily_summary] == ["2024-03-07", "2024-03-06", "2024-03-05"]
    assert days["2024-03-05"].total_amount == pytest.approx(160.0)
    assert days["2024-03-05"].total_remaining == pytest.approx(130.0)
    assert days["2024-03-05"].entries_count == 2
    assert [entry.username for entry in days["2024-03-05"].user_entries] == ["sara", "omar"]
    assert days["2024-03-06"].total_amount == pytest.approx(0.0)
    assert days["2024-03-06"].total_advances == pytest.approx(20.0)
    assert days["2024-03-07"].user_entries[0].username == "deleted user"


def test_comprehensive_summary_totals(march_activity, admin_id) -> None:
    """Deductions are summed once per entry, not once per user."""

    totals = march_activity.get_comprehensive_monthly_summary(admin_id, 2024, 3).totals

    assert totals.total_cash == pytest.approx(117.0)
    assert totals.total_network == pytest.approx(50.0)
    assert totals.total_gross == pytest.approx(167.0)
    assert totals.total_purchases == pytest.approx(30.0)
    assert totals.total_net == pytest.approx(137.0)
    assert totals.total_advances == pytest.approx(20.0)
    assert totals.total_deductions == pytest.approx(80.0)
    assert totals.active_days == 3
    assert totals.average_daily_amount == pytest.approx(167.0 / 3)
    assert totals.days_in_month == 31
    assert totals.active_users == 3


def test_comprehensive_summary_for_empty_month(service, admin_id) -> None:
    summary = service.get_comprehensive_monthly_summary(admin_id, 2024, 2)

    assert summary.daily_summary == []
    assert summary.totals.average_daily_amount == 0
    assert summary.totals.days_in_month == 29
    assert summary.as_dict()["totals"]["active_days"] == 0


def test_users_monthly_summary_covers_every_profile(march_activity, admin_id, member_id, other_member_id) -> None:
    """Profiles without activity appear zeroed; orphaned entries are dropped."""

    summaries = march_activity.get_users_monthly_summary(admin_id, 2024, 3)

    assert [summary.username for summary in summaries] == ["sara", "omar", "admin"]
    sara, omar, admin = summaries
    assert sara.total_amount == pytest.approx(150.0)
    assert sara.total_remaining == pytest.approx(120.0)
    assert sara.total_advances == pytest.approx(20.0)
    assert sara.entries_count == 2
    assert sara.active_days == 2
    assert sara.deductions == pytest.approx(40.0)
    assert omar.total_cash == pytest.approx(10.0)
    assert admin.is_admin is True
    assert admin.entries_count == 0
    assert all(summary.user_id != "user_0999" for summary in summaries)


def test_users_monthly_aggregate(march_activity, admin_id, member_id) -> None:
    aggregate = march_activity.get_users_monthly_aggregate(admin_id, 2024, 3)

    totals = {user_total.user_id: user_total for user_total in aggregate.user_totals}
    assert aggregate.year_month == "2024-03"
    assert aggregate.total_amount == pytest.approx(167.0)
    assert aggregate.total_entries == 4
    assert aggregate.active_users == 3
    assert totals[member_id].total_amount == pytest.approx(150.0)
    assert totals[member_id].entries_count == 2


def test_reports_are_admin_only(march_activity, member_id) -> None:
    for report in (
        march_activity.get_users_monthly_aggregate,
        march_activity.get_comprehensive_monthly_summary,
        march_activity.get_users_monthly_summary,
    ):
        with pytest.raises(Forbidden):
            report(member_id, 2024, 3)


def test_reports_reject_invalid_month(service, admin_id) -> None:
    with pytest.raises(InvalidInput):
        service.get_users_monthly_summary(admin_id, 2024, 13)
