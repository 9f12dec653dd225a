"""Mini README: Identity collaborators standing in for the auth service.

Structure:
    * IdentityProvider - abstract resolver from request headers to a user id.
    * HeaderIdentityProvider - trusts a gateway-populated header.
    * IdentityDirectory - reads and writes identity records in ``users``.

Authentication itself happens upstream; the ledger only needs a stable user
identifier or ``None``. The directory also lets administrators delete the
identity record when an account is removed and gives development setups a
way to mint identities.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping, Optional

from ..logging_utils import get_logger
from ..records import utcnow
from ..storage import USERS, Document, DocumentStore

LOGGER = get_logger(__name__)


class IdentityProvider(ABC):
    """Base interface for resolving the calling identity."""

    provider_name: str = "generic"

    @abstractmethod
    def resolve(self, headers: Mapping[str, str]) -> Optional[str]:
        """Return the caller's user identifier or ``None`` when anonymous."""


class IdentityDirectory:
    """Access identity records owned by the authentication collaborator."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def register(self, name: Optional[str] = None) -> str:
        with self.store.transaction():
            user_id = self.store.insert(USERS, {"name": name, "created_at": utcnow()})
        LOGGER.info("Registered identity %s", user_id)
        return user_id

    def get(self, user_id: str) -> Optional[Document]:
        return self.store.get(USERS, user_id)

    def exists(self, user_id: str) -> bool:
        return self.get(user_id) is not None

    def remove(self, user_id: str) -> bool:
        """Delete the identity record; returns ``False`` when it was already gone."""

        if not self.exists(user_id):
            LOGGER.warning("Identity %s has no record to delete", user_id)
            return False
        self.store.delete(USERS, user_id)
        LOGGER.info("Deleted identity %s", user_id)
        return True


class HeaderIdentityProvider(IdentityProvider):
    """Resolve identities from a header set by the authentication gateway."""

    provider_name = "header"

    def __init__(self, directory: IdentityDirectory, header_name: str = "X-User-Id") -> None:
        self.directory = directory
        self.header_name = header_name

    def resolve(self, headers: Mapping[str, str]) -> Optional[str]:
        raw = headers.get(self.header_name) or headers.get(self.header_name.lower())
        if not raw or not raw.strip():
            return None
        user_id = raw.strip()
        if not self.directory.exists(user_id):
            LOGGER.warning("Header identity %s is not a known identity", user_id)
            return None
        return user_id
