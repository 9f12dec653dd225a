"""Mini README: Tests for the in-process document stores.

Covers index maintenance across patches, rollback of failed transactions,
rejection of undeclared indexes, the JSON snapshot round trip, and the
rollback of operations whose snapshot write fails.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from dailyledger import LedgerService
from dailyledger.storage import (
    DAILY_ENTRIES,
    USER_PROFILES,
    InMemoryDocumentStore,
    JsonFileDocumentStore,
)


def test_patch_moves_document_between_index_buckets() -> None:
    """Patching an indexed field should make lookups follow the new value."""

    store = InMemoryDocumentStore()
    profile_id = store.insert(USER_PROFILES, {"user_id": "user_0001", "username": "sara"})

    store.patch(USER_PROFILES, profile_id, {"username": "sara.k"})

    assert store.first(USER_PROFILES, "by_username", username="sara") is None
    renamed = store.first(USER_PROFILES, "by_username", username="sara.k")
    assert renamed["_id"] == profile_id
    assert profile_id.startswith("profile_")


def test_find_requires_declared_index_fields() -> None:
    """Lookups must name a declared index and supply exactly its fields."""

    store = InMemoryDocumentStore()

    with pytest.raises(KeyError):
        store.find(DAILY_ENTRIES, "by_notes", notes="x")
    with pytest.raises(ValueError):
        store.find(DAILY_ENTRIES, "by_user_and_date", user_id="user_0001")


def test_failed_transaction_restores_documents_and_indexes() -> None:
    """An exception inside a transaction discards every write made within it."""

    store = InMemoryDocumentStore()
    kept_id = store.insert(DAILY_ENTRIES, {"user_id": "u1", "date": "2024-03-01"})

    with pytest.raises(RuntimeError):
        with store.transaction():
            store.insert(DAILY_ENTRIES, {"user_id": "u1", "date": "2024-03-02"})
            store.delete(DAILY_ENTRIES, kept_id)
            raise RuntimeError("boom")

    remaining = store.find(DAILY_ENTRIES, "by_user", user_id="u1")
    assert [document["_id"] for document in remaining] == [kept_id]
    assert store.first(DAILY_ENTRIES, "by_user_and_date", user_id="u1", date="2024-03-02") is None


def test_nested_transaction_failure_rolls_back_outer_work() -> None:
    """Nested transactions join the outer one, so the whole unit is undone."""

    store = InMemoryDocumentStore()

    with pytest.raises(ValueError):
        with store.transaction():
            store.insert(DAILY_ENTRIES, {"user_id": "u1", "date": "2024-03-01"})
            with store.transaction():
                raise ValueError("inner failure")

    assert store.scan(DAILY_ENTRIES) == []


def test_returned_documents_are_copies() -> None:
    """Mutating a fetched document must not change the stored one."""

    store = InMemoryDocumentStore()
    entry_id = store.insert(DAILY_ENTRIES, {"user_id": "u1", "date": "2024-03-01"})

    fetched = store.get(DAILY_ENTRIES, entry_id)
    fetched["date"] = "1999-01-01"

    assert store.get(DAILY_ENTRIES, entry_id)["date"] == "2024-03-01"


def test_json_store_persists_committed_transactions(tmp_path) -> None:
    """Committed writes survive a reload, including timestamps and sequences."""

    path = tmp_path / "ledger.json"
    created_at = datetime(2024, 3, 5, 8, 30, tzinfo=timezone.utc)
    store = JsonFileDocumentStore(path)
    with store.transaction():
        store.insert(DAILY_ENTRIES, {"user_id": "u1", "date": "2024-03-05", "created_at": created_at})

    reloaded = JsonFileDocumentStore(path)
    documents = reloaded.find(DAILY_ENTRIES, "by_user_and_date", user_id="u1", date="2024-03-05")
    assert len(documents) == 1
    assert documents[0]["created_at"] == created_at

    with reloaded.transaction():
        next_id = reloaded.insert(DAILY_ENTRIES, {"user_id": "u1", "date": "2024-03-06"})
    assert next_id == "entry_0002"


def _ledger_on_json_store(path) -> tuple:
    service = LedgerService(JsonFileDocumentStore(path))
    user_id = service.identities.register("sara")
    service.create_user_profile(user_id, "sara")
    return service, user_id


def test_failed_snapshot_write_rolls_back_the_operation(tmp_path, monkeypatch) -> None:
    """A persistence error must leave neither memory nor disk holding the write."""

    path = tmp_path / "ledger.json"
    service, user_id = _ledger_on_json_store(path)

    def refuse_write(self, *args, **kwargs):
        raise OSError("disk full")

    with monkeypatch.context() as patched:
        patched.setattr(Path, "write_text", refuse_write)
        with pytest.raises(OSError):
            service.upsert_entry(user_id, "2024-03-05", cash_amount=100)

    assert service.list_entries(user_id) == []
    assert JsonFileDocumentStore(path).scan(DAILY_ENTRIES) == []


def test_read_only_operations_do_not_rewrite_the_snapshot(tmp_path, monkeypatch) -> None:
    """Only transactions that changed a document persist the store."""

    service, user_id = _ledger_on_json_store(tmp_path / "ledger.json")
    service.upsert_entry(user_id, "2024-03-05", cash_amount=100, advance_amount=10)
    writes = []
    original_write = Path.write_text

    def counting_write(self, *args, **kwargs):
        writes.append(self)
        return original_write(self, *args, **kwargs)

    monkeypatch.setattr(Path, "write_text", counting_write)
    for _ in range(5):
        service.list_entries(user_id)
    service.get_monthly_advance_total(user_id, "2024-03")
    service.check_user_profile(user_id)
    assert writes == []

    service.upsert_entry(user_id, "2024-03-06", cash_amount=40)
    assert len(writes) == 1
