"""Mini README: Document storage collaborators for the ledger.

``base`` defines the abstract ``DocumentStore`` contract, ``schema`` declares
tables and indexes, and ``memory`` provides the in-process backends. Use
``build_store`` to pick a backend from the runtime settings.
"""

from __future__ import annotations

from typing import Optional

from ..configuration import LedgerSettings, get_settings
from .base import Document, DocumentStore
from .memory import InMemoryDocumentStore, JsonFileDocumentStore
from .schema import DAILY_ENTRIES, MONTHLY_ADVANCES, TABLES, USER_PROFILES, USERS


def build_store(settings: Optional[LedgerSettings] = None) -> DocumentStore:
    """Return a JSON-backed store when a storage path is configured, else memory."""

    settings = settings or get_settings()
    if settings.storage_path is not None:
        return JsonFileDocumentStore(settings.storage_path)
    return InMemoryDocumentStore()


__all__ = [
    "DAILY_ENTRIES",
    "Document",
    "DocumentStore",
    "InMemoryDocumentStore",
    "JsonFileDocumentStore",
    "MONTHLY_ADVANCES",
    "TABLES",
    "USER_PROFILES",
    "USERS",
    "build_store",
]
