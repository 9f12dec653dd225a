"""Mini README: Core package initializer for the daily ledger service.

Exposes the service facade and logger factory so callers can work with the
ledger without knowing the module layout. The HTTP interface lives in
``dailyledger.interface`` and is imported on demand, keeping FastAPI out of
pure library use.
"""

from .logging_utils import get_logger
from .service import LedgerService

__all__ = ["LedgerService", "get_logger"]
