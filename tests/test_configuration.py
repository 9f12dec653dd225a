"""Mini README: Tests for settings, the message catalog, and month helpers."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from dailyledger.configuration import LedgerSettings
from dailyledger.errors import UsernameTaken
from dailyledger.messages import translate
from dailyledger.utils import days_in_month, normalise_entry_date, year_month_key


def test_settings_reject_unknown_locale() -> None:
    with pytest.raises(ValidationError):
        LedgerSettings(locale="fr")
    assert LedgerSettings(locale=" AR ").locale == "ar"


def test_storage_path_is_created(tmp_path) -> None:
    settings = LedgerSettings(storage_path=tmp_path / "nested" / "ledger.json")

    assert settings.storage_path.parent.is_dir()


def test_errors_use_requested_locale() -> None:
    error = UsernameTaken(locale="ar")

    assert error.message == "اسم المستخدم موجود بالفعل"
    assert translate("deleted_user", "en") == "deleted user"
    assert translate("deleted_user", "xx") == "deleted user"


def test_month_helpers() -> None:
    assert year_month_key(2024, 3) == "2024-03"
    assert days_in_month(2023, 2) == 28
    assert normalise_entry_date("2024-03-05") == "2024-03-05"
    with pytest.raises(ValueError):
        year_month_key(2024, 0)
