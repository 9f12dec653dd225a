"""Mini README: Network interfaces for the daily ledger.

Exports the FastAPI application factory used by the CLI launcher and by
uvicorn's ``--factory`` mode.
"""

from .web_app import create_application

__all__ = ["create_application"]
