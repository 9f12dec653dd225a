"""Mini README: Shared fixtures for the ledger test-suite.

Structure:
    * service - fresh LedgerService over an in-memory store.
    * admin_id - identity whose profile was created first (administrator).
    * member_id / other_member_id - regular user identities.
"""

from __future__ import annotations

import pytest

from dailyledger import LedgerService
from dailyledger.storage import InMemoryDocumentStore


@pytest.fixture
def service() -> LedgerService:
    return LedgerService(InMemoryDocumentStore())


def _register_with_profile(service: LedgerService, username: str) -> str:
    user_id = service.identities.register(username)
    service.create_user_profile(user_id, username)
    return user_id


@pytest.fixture
def admin_id(service: LedgerService) -> str:
    return _register_with_profile(service, "admin")


@pytest.fixture
def member_id(service: LedgerService, admin_id: str) -> str:
    return _register_with_profile(service, "sara")


@pytest.fixture
def other_member_id(service: LedgerService, member_id: str) -> str:
    return _register_with_profile(service, "omar")
