"""Mini README: Table and index declarations for the ledger documents.

Structure:
    * TABLES - table name -> index name -> tuple of indexed fields.
    * ID_PREFIXES - prefix used when generating document identifiers.

Stores refuse lookups on undeclared indexes so every query in the business
modules names the access path it relies on.
"""

from __future__ import annotations

from typing import Dict, Tuple

USERS = "users"
USER_PROFILES = "user_profiles"
DAILY_ENTRIES = "daily_entries"
MONTHLY_ADVANCES = "monthly_advances"

TABLES: Dict[str, Dict[str, Tuple[str, ...]]] = {
    # Identity records owned by the authentication collaborator.
    USERS: {},
    USER_PROFILES: {
        "by_user_id": ("user_id",),
        "by_username": ("username",),
    },
    DAILY_ENTRIES: {
        "by_user_and_date": ("user_id", "date"),
        "by_user": ("user_id",),
        "by_date": ("date",),
    },
    MONTHLY_ADVANCES: {
        "by_user_and_month": ("user_id", "year_month"),
        "by_user": ("user_id",),
    },
}

ID_PREFIXES: Dict[str, str] = {
    USERS: "user",
    USER_PROFILES: "profile",
    DAILY_ENTRIES: "entry",
    MONTHLY_ADVANCES: "advance",
}
