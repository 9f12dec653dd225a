"""Mini README: Authorization rules gating every ledger operation.

Structure:
    * CallerContext - resolved identity together with its profile.
    * AuthorizationGuard - resolves callers and enforces role/ownership rules.

Every service operation starts with ``resolve_caller`` or ``require_admin``;
operations acting on another user's data follow up with
``require_self_or_admin``. The guard only reads.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..errors import Forbidden, ProfileMissing, Unauthenticated
from ..logging_utils import get_logger
from ..records import UserProfile
from ..storage import USER_PROFILES, DocumentStore

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class CallerContext:
    """The authenticated caller and the profile backing it."""

    user_id: str
    profile: UserProfile

    @property
    def is_admin(self) -> bool:
        return self.profile.is_admin


class AuthorizationGuard:
    """Resolve the caller's profile and apply access rules."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def load_profile(self, user_id: str) -> Optional[UserProfile]:
        document = self.store.first(USER_PROFILES, "by_user_id", user_id=user_id)
        return UserProfile.from_document(document) if document else None

    def resolve_caller(self, caller_id: Optional[str]) -> CallerContext:
        if not caller_id:
            raise Unauthenticated()
        profile = self.load_profile(caller_id)
        if profile is None:
            raise ProfileMissing(caller_id)
        return CallerContext(user_id=caller_id, profile=profile)

    def require_admin(self, caller_id: Optional[str]) -> CallerContext:
        context = self.resolve_caller(caller_id)
        if not context.is_admin:
            LOGGER.warning("Rejected admin operation for non-admin %s", caller_id)
            raise Forbidden(message_key="forbidden_admin")
        return context

    def require_self_or_admin(self, target_user_id: Optional[str], context: CallerContext) -> str:
        """Return the effective target, defaulting to the caller."""

        target = target_user_id or context.user_id
        if target != context.user_id and not context.is_admin:
            LOGGER.warning("User %s denied access to data of %s", context.user_id, target)
            raise Forbidden()
        return target
