"""Mini README: Caller identity and authorization for the ledger.

``identity`` adapts the external authentication service; ``guard`` turns a
resolved identity into a ``CallerContext`` and enforces access rules.
"""

from .guard import AuthorizationGuard, CallerContext
from .identity import HeaderIdentityProvider, IdentityDirectory, IdentityProvider

__all__ = [
    "AuthorizationGuard",
    "CallerContext",
    "HeaderIdentityProvider",
    "IdentityDirectory",
    "IdentityProvider",
]
