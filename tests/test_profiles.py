"""Mini README: Tests for profile creation and the authorization guard.

Covers first-user promotion, idempotent creation, username uniqueness, and
the self-or-admin rule on profile reads.
"""

from __future__ import annotations

import pytest

from dailyledger.errors import Forbidden, ProfileMissing, Unauthenticated, UsernameTaken


def test_first_profile_is_admin_and_later_profiles_are_not(service) -> None:
    """Only the profile created in an empty system is granted admin rights."""

    first = service.identities.register("first")
    second = service.identities.register("second")

    assert service.create_user_profile(first, "first").is_admin is True
    assert service.create_user_profile(second, "second").is_admin is False


def test_create_profile_is_idempotent(service, member_id) -> None:
    """Creating again returns the stored profile instead of failing."""

    again = service.create_user_profile(member_id, "another-name")

    assert again.username == "sara"
    assert len(service.store.scan("user_profiles")) == 2


def test_create_profile_rejects_taken_username(service, member_id) -> None:
    """Usernames are unique across profiles and compared case-sensitively."""

    newcomer = service.identities.register("newcomer")

    with pytest.raises(UsernameTaken):
        service.create_user_profile(newcomer, "sara")
    assert service.create_user_profile(newcomer, "Sara").username == "Sara"


def test_create_profile_requires_identity(service) -> None:
    with pytest.raises(Unauthenticated):
        service.create_user_profile(None, "ghost")


def test_check_profile_returns_none_without_profile(service, admin_id) -> None:
    """Anonymous callers and identities without a profile get ``None``."""

    pending = service.identities.register("pending")

    assert service.check_user_profile(None) is None
    assert service.check_user_profile(pending) is None
    assert service.check_user_profile(admin_id).username == "admin"


def test_get_profile_enforces_self_or_admin(service, admin_id, member_id, other_member_id) -> None:
    """Members read only their own profile; admins read anyone's."""

    assert service.get_user_profile(member_id).user_id == member_id
    assert service.get_user_profile(admin_id, member_id).username == "sara"
    with pytest.raises(Forbidden):
        service.get_user_profile(member_id, other_member_id)


def test_operations_without_profile_raise_profile_missing(service, admin_id) -> None:
    pending = service.identities.register("pending")

    with pytest.raises(ProfileMissing):
        service.list_entries(pending)
