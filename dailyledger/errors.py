"""Mini README: Failure taxonomy shared by every ledger operation.

Structure:
    * LedgerError - base class carrying a stable code, HTTP status, and
      localized message.
    * One subclass per failure kind (authentication, authorization, missing
      targets, uniqueness, protected accounts, confirmation phrases, input).

Errors are raised where the rule is checked and propagate untouched to the
caller. The service facade runs each operation inside a store transaction,
so raising always discards partial writes; the web layer renders the error
as ``{"error": code, "detail": message}``.
"""

from __future__ import annotations

from typing import Optional

from .messages import translate


class LedgerError(Exception):
    """Base class for failures surfaced to ledger callers."""

    code = "ledger_error"
    status_code = 400
    message_key = "invalid_input"

    def __init__(
        self,
        detail: Optional[str] = None,
        *,
        message_key: Optional[str] = None,
        locale: Optional[str] = None,
    ) -> None:
        self.message = translate(message_key or self.message_key, locale)
        self.detail = detail
        super().__init__(self.message if detail is None else f"{self.message} ({detail})")

    def as_dict(self) -> dict:
        payload = {"error": self.code, "detail": self.message}
        if self.detail is not None:
            payload["context"] = self.detail
        return payload


class Unauthenticated(LedgerError):
    code = "unauthenticated"
    status_code = 401
    message_key = "unauthenticated"


class ProfileMissing(LedgerError):
    """The caller is authenticated but has not created a profile yet."""

    code = "profile_missing"
    status_code = 404
    message_key = "profile_missing"


class Forbidden(LedgerError):
    code = "forbidden"
    status_code = 403
    message_key = "forbidden"


class UserNotFound(LedgerError):
    code = "user_not_found"
    status_code = 404
    message_key = "user_not_found"


class ProfileNotFound(LedgerError):
    code = "profile_not_found"
    status_code = 404
    message_key = "profile_not_found"


class EntryNotFound(LedgerError):
    code = "entry_not_found"
    status_code = 404
    message_key = "entry_not_found"


class UsernameTaken(LedgerError):
    code = "username_taken"
    status_code = 409
    message_key = "username_taken"


class CannotDeleteAdmin(LedgerError):
    code = "cannot_delete_admin"
    status_code = 409
    message_key = "cannot_delete_admin"


class ConfirmationMismatch(LedgerError):
    """A destructive operation was called with the wrong safety phrase."""

    code = "confirmation_mismatch"
    status_code = 400
    message_key = "confirmation_mismatch"


class InvalidInput(LedgerError):
    code = "invalid_input"
    status_code = 422
    message_key = "invalid_input"
