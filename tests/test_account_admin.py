"""Mini README: Tests for administrator account management.

Covers listing, renames, deduction overrides, the deletion cascade, both
reset operations, and the admin-only gate.
"""

from __future__ import annotations

import pytest

from dailyledger.errors import (
    CannotDeleteAdmin,
    ConfirmationMismatch,
    Forbidden,
    UserNotFound,
    UsernameTaken,
)
from dailyledger.messages import translate


def _seed_entries(service, *user_ids: str) -> None:
    for user_id in user_ids:
        service.upsert_entry(user_id, "2024-03-05", cash_amount=100, advance_amount=10)
        service.upsert_entry(user_id, "2024-04-02", network_amount=30, advance_amount=5)


def test_list_all_users_sorted_with_identity(service, admin_id, member_id, other_member_id) -> None:
    users = service.list_all_users(admin_id)

    assert [user["username"] for user in users] == ["admin", "omar", "sara"]
    sara = users[2]
    assert sara["user"]["user_id"] == member_id
    assert sara["user"]["name"] == "sara"


def test_set_deductions(service, admin_id, member_id) -> None:
    assert service.set_deductions(admin_id, member_id, 125.5) == {"success": True}
    assert service.get_user_profile(member_id).deductions == pytest.approx(125.5)

    with pytest.raises(UserNotFound):
        service.set_deductions(admin_id, "user_9999", 1)


def test_rename_user_rules(service, admin_id, member_id, other_member_id) -> None:
    """Renaming to a held name fails; renaming to one's own name succeeds."""

    with pytest.raises(UsernameTaken):
        service.rename_user(admin_id, member_id, "omar")
    assert service.rename_user(admin_id, member_id, "sara") == {"success": True}
    assert service.rename_user(admin_id, member_id, "sara.k") == {"success": True}
    assert service.get_user_profile(member_id).username == "sara.k"

    with pytest.raises(UserNotFound):
        service.rename_user(admin_id, "user_9999", "nobody")


def test_delete_user_cascades(service, admin_id, member_id, other_member_id) -> None:
    _seed_entries(service, member_id, other_member_id)

    service.delete_user(admin_id, member_id)

    store = service.store
    assert store.find("daily_entries", "by_user", user_id=member_id) == []
    assert store.find("monthly_advances", "by_user", user_id=member_id) == []
    assert store.first("user_profiles", "by_user_id", user_id=member_id) is None
    assert service.identities.get(member_id) is None
    assert len(store.find("daily_entries", "by_user", user_id=other_member_id)) == 2


def test_delete_user_protects_admins_and_unknown_ids(service, admin_id, member_id) -> None:
    with pytest.raises(CannotDeleteAdmin):
        service.delete_user(admin_id, admin_id)
    with pytest.raises(UserNotFound):
        service.delete_user(admin_id, "user_9999")


def test_reset_data_only_keeps_profiles(service, admin_id, member_id, other_member_id) -> None:
    _seed_entries(service, member_id, other_member_id)
    service.set_deductions(admin_id, member_id, 40)
    service.set_deductions(admin_id, admin_id, 15)

    result = service.reset_data_only(admin_id, translate("data_reset_phrase"))

    assert result["success"] is True
    assert result["message"] == translate("data_reset_done")
    assert service.store.scan("daily_entries") == []
    assert service.store.scan("monthly_advances") == []
    profiles = service.store.scan("user_profiles")
    assert len(profiles) == 3
    assert all(profile["deductions"] == 0 for profile in profiles)


def test_complete_system_reset_keeps_only_acting_admin(service, admin_id, member_id, other_member_id) -> None:
    _seed_entries(service, admin_id, member_id, other_member_id)
    service.set_deductions(admin_id, admin_id, 15)

    result = service.complete_system_reset(admin_id, translate("complete_reset_phrase"))

    assert result["message"] == translate("complete_reset_done")
    profiles = service.store.scan("user_profiles")
    assert [profile["user_id"] for profile in profiles] == [admin_id]
    assert profiles[0]["deductions"] == 0
    assert service.store.scan("daily_entries") == []
    assert service.store.scan("monthly_advances") == []
    assert [user["_id"] for user in service.store.scan("users")] == [admin_id]


def test_resets_require_exact_phrase_and_change_nothing(service, admin_id, member_id) -> None:
    _seed_entries(service, member_id)

    with pytest.raises(ConfirmationMismatch):
        service.complete_system_reset(admin_id, translate("data_reset_phrase"))
    with pytest.raises(ConfirmationMismatch):
        service.reset_data_only(admin_id, translate("data_reset_phrase") + "!")

    assert len(service.store.scan("daily_entries")) == 2
    assert len(service.store.scan("user_profiles")) == 2


def test_admin_operations_reject_members(service, member_id, other_member_id) -> None:
    calls = [
        lambda: service.list_all_users(member_id),
        lambda: service.set_deductions(member_id, other_member_id, 1),
        lambda: service.rename_user(member_id, other_member_id, "x"),
        lambda: service.delete_user(member_id, other_member_id),
        lambda: service.complete_system_reset(member_id, translate("complete_reset_phrase")),
        lambda: service.reset_data_only(member_id, translate("data_reset_phrase")),
    ]
    for call in calls:
        with pytest.raises(Forbidden):
            call()
