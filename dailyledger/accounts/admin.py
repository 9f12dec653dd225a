"""Mini README: Administrator account management.

Structure:
    * AccountAdministration - user listing, renames, deductions, deletion,
      and the two destructive reset operations.

Every method starts with ``require_admin``. Deleting a user removes the
children before the parents (entries, advance totals, profile, identity).
Resets demand an exact confirmation phrase from the message catalog so the
phrase follows the configured locale.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..auth import AuthorizationGuard, IdentityDirectory
from ..errors import CannotDeleteAdmin, ConfirmationMismatch, UserNotFound, UsernameTaken
from ..ledger import DailyEntryLedger, MonthlyAdvanceAggregator
from ..logging_utils import get_logger
from ..messages import translate
from ..records import UserProfile
from ..storage import USER_PROFILES, DocumentStore
from .profiles import clean_username

LOGGER = get_logger(__name__)


def _identity_payload(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if document is None:
        return None
    created_at = document.get("created_at")
    return {
        "user_id": document["_id"],
        "name": document.get("name"),
        "created_at": created_at.isoformat() if created_at is not None else None,
    }


class AccountAdministration:
    """Admin-only operations over every account in the system."""

    def __init__(
        self,
        store: DocumentStore,
        guard: AuthorizationGuard,
        identities: IdentityDirectory,
        ledger: DailyEntryLedger,
        advances: MonthlyAdvanceAggregator,
    ) -> None:
        self.store = store
        self.guard = guard
        self.identities = identities
        self.ledger = ledger
        self.advances = advances

    def _profile_or_raise(self, user_id: str) -> UserProfile:
        profile = self.guard.load_profile(user_id)
        if profile is None:
            raise UserNotFound(user_id)
        return profile

    def all_profiles(self) -> List[UserProfile]:
        return [UserProfile.from_document(document) for document in self.store.scan(USER_PROFILES)]

    def list_all_users(self, caller_id: Optional[str]) -> List[Dict[str, Any]]:
        """Every profile joined with its identity record, ordered by username."""

        with self.store.transaction():
            self.guard.require_admin(caller_id)
            users = []
            for profile in self.all_profiles():
                payload = profile.as_dict()
                payload["user"] = _identity_payload(self.identities.get(profile.user_id))
                users.append(payload)
        return sorted(users, key=lambda user: (user["username"].casefold(), user["username"]))

    def set_deductions(
        self, caller_id: Optional[str], user_id: str, deductions: float
    ) -> Dict[str, Any]:
        with self.store.transaction():
            self.guard.require_admin(caller_id)
            profile = self._profile_or_raise(user_id)
            self.store.patch(USER_PROFILES, profile.profile_id, {"deductions": float(deductions)})
        LOGGER.info("Set deductions of %s to %.2f", user_id, float(deductions))
        return {"success": True}

    def rename_user(
        self, caller_id: Optional[str], user_id: str, new_username: str
    ) -> Dict[str, Any]:
        with self.store.transaction():
            self.guard.require_admin(caller_id)
            new_username = clean_username(new_username)
            holder = self.store.first(USER_PROFILES, "by_username", username=new_username)
            if holder and holder["user_id"] != user_id:
                raise UsernameTaken(new_username)
            profile = self._profile_or_raise(user_id)
            self.store.patch(USER_PROFILES, profile.profile_id, {"username": new_username})
        LOGGER.info("Renamed %s from '%s' to '%s'", user_id, profile.username, new_username)
        return {"success": True}

    def delete_user(self, caller_id: Optional[str], user_id: str) -> Dict[str, Any]:
        with self.store.transaction():
            self.guard.require_admin(caller_id)
            profile = self._profile_or_raise(user_id)
            if profile.is_admin:
                raise CannotDeleteAdmin(user_id)
            entries_removed = self.ledger.delete_for_user(user_id)
            advances_removed = self.advances.delete_for_user(user_id)
            self.store.delete(USER_PROFILES, profile.profile_id)
            self.identities.remove(user_id)
        LOGGER.info(
            "Deleted user %s with %s entries and %s monthly advances",
            user_id,
            entries_removed,
            advances_removed,
        )
        return {"success": True}

    def complete_system_reset(
        self, caller_id: Optional[str], confirmation_text: str
    ) -> Dict[str, Any]:
        """Wipe all financial data and every account except the acting admin's."""

        with self.store.transaction():
            context = self.guard.require_admin(caller_id)
            if confirmation_text != translate("complete_reset_phrase"):
                raise ConfirmationMismatch()
            LOGGER.warning("Complete system reset requested by %s", context.user_id)

            entries_removed = self.ledger.clear_all()
            advances_removed = self.advances.clear_all()
            profiles_removed = 0
            for profile in self.all_profiles():
                if profile.user_id == context.user_id:
                    continue
                self.store.delete(USER_PROFILES, profile.profile_id)
                self.identities.remove(profile.user_id)
                profiles_removed += 1

            own_profile = self.guard.load_profile(context.user_id)
            if own_profile is not None:
                self.store.patch(USER_PROFILES, own_profile.profile_id, {"deductions": 0.0})

        LOGGER.warning(
            "Complete reset removed %s entries, %s monthly advances, %s accounts",
            entries_removed,
            advances_removed,
            profiles_removed,
        )
        return {"success": True, "message": translate("complete_reset_done")}

    def reset_data_only(self, caller_id: Optional[str], confirmation_text: str) -> Dict[str, Any]:
        """Wipe entries and advance totals, keep accounts, zero every deduction."""

        with self.store.transaction():
            context = self.guard.require_admin(caller_id)
            if confirmation_text != translate("data_reset_phrase"):
                raise ConfirmationMismatch()
            LOGGER.warning("Data reset requested by %s", context.user_id)

            entries_removed = self.ledger.clear_all()
            advances_removed = self.advances.clear_all()
            for profile in self.all_profiles():
                self.store.patch(USER_PROFILES, profile.profile_id, {"deductions": 0.0})

        LOGGER.warning(
            "Data reset removed %s entries and %s monthly advances",
            entries_removed,
            advances_removed,
        )
        return {"success": True, "message": translate("data_reset_done")}
