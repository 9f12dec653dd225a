"""Mini README: Account lifecycle for the ledger.

``profiles`` covers what every authenticated user may do with their own
profile; ``admin`` groups the administrator-only account management.
"""

from .admin import AccountAdministration
from .profiles import ProfileService

__all__ = ["AccountAdministration", "ProfileService"]
