"""Mini README: Self-service profile operations.

Structure:
    * ProfileService - creates, checks, and reads user profiles.

A profile is created once per identity after registration. Creation is
idempotent, usernames are unique and case-sensitive, and the very first
profile in an empty system becomes the administrator.
"""

from __future__ import annotations

from typing import Optional

from ..auth import AuthorizationGuard
from ..errors import InvalidInput, Unauthenticated, UsernameTaken
from ..logging_utils import get_logger
from ..records import UserProfile, utcnow
from ..storage import USER_PROFILES, DocumentStore

LOGGER = get_logger(__name__)


def clean_username(username: str) -> str:
    """Strip surrounding whitespace and reject empty names."""

    cleaned = (username or "").strip()
    if not cleaned:
        raise InvalidInput("username must not be empty")
    return cleaned


class ProfileService:
    """Profile lifecycle for authenticated callers."""

    def __init__(self, store: DocumentStore, guard: AuthorizationGuard) -> None:
        self.store = store
        self.guard = guard

    def create_user_profile(self, caller_id: Optional[str], username: str) -> UserProfile:
        with self.store.transaction():
            if not caller_id:
                raise Unauthenticated()
            existing = self.guard.load_profile(caller_id)
            if existing is not None:
                LOGGER.debug("Profile already exists for %s", caller_id)
                return existing

            username = clean_username(username)
            if self.store.first(USER_PROFILES, "by_username", username=username):
                raise UsernameTaken(username)

            is_first_user = self.store.count(USER_PROFILES) == 0
            profile_id = self.store.insert(
                USER_PROFILES,
                {
                    "user_id": caller_id,
                    "username": username,
                    "is_admin": is_first_user,
                    "deductions": 0.0,
                    "created_at": utcnow(),
                },
            )
            profile = UserProfile.from_document(self.store.get(USER_PROFILES, profile_id))
        LOGGER.info(
            "Created profile %s for %s (admin=%s)", profile.profile_id, caller_id, profile.is_admin
        )
        return profile

    def check_user_profile(self, caller_id: Optional[str]) -> Optional[UserProfile]:
        """Return the caller's profile, or ``None`` when anonymous or not yet created."""

        if not caller_id:
            return None
        with self.store.transaction():
            return self.guard.load_profile(caller_id)

    def get_user_profile(
        self, caller_id: Optional[str], target_user_id: Optional[str] = None
    ) -> Optional[UserProfile]:
        with self.store.transaction():
            context = self.guard.resolve_caller(caller_id)
            target = self.guard.require_self_or_admin(target_user_id, context)
            if target == context.user_id:
                return context.profile
            return self.guard.load_profile(target)
