"""Mini README: Centralised configuration for the daily ledger service.

Structure:
    * LedgerSettings - Pydantic settings model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Every value can be overridden with a ``DAILYLEDGER_`` prefixed environment
    variable or a ``.env`` file. ``storage_path`` switches the web application
    from the volatile in-memory store to the JSON snapshot store; ``locale``
    selects the language of error messages and reset confirmation phrases.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings

SUPPORTED_LOCALES = ("en", "ar")


class LedgerSettings(BaseSettings):
    """Runtime configuration for the ledger backend."""

    environment: str = Field(
        "development",
        description="Environment label; anything other than 'production' enables auto-reload.",
    )
    log_level: str = Field(
        "INFO",
        description="Root logging level name (DEBUG, INFO, WARNING, ...).",
    )
    locale: str = Field(
        "en",
        description="Language used for caller-facing messages and confirmation phrases.",
    )
    storage_path: Optional[Path] = Field(
        None,
        description=(
            "JSON file used to persist documents between restarts."
            " Leave unset to keep all data in memory."
        ),
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the HTTP service to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the HTTP service exposes.",
        ge=1,
        le=65535,
    )
    identity_header: str = Field(
        "X-User-Id",
        description="Request header carrying the identity resolved by the auth gateway.",
    )

    class Config:
        env_prefix = "DAILYLEDGER_"
        env_file = ".env"
        case_sensitive = False

    @validator("locale")
    def _check_locale(cls, value: str) -> str:
        """Restrict the locale to languages the message catalog ships."""

        normalised = value.strip().lower()
        if normalised not in SUPPORTED_LOCALES:
            raise ValueError(f"Unsupported locale '{value}', expected one of {SUPPORTED_LOCALES}")
        return normalised

    @validator("storage_path", pre=True)
    def _expand_path(cls, value: Optional[str | Path]) -> Optional[Path]:
        """Expand user directories and make sure the parent directory exists."""

        if value in (None, ""):
            return None
        path = Path(value).expanduser().resolve()
        path.parent.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache()
def get_settings() -> LedgerSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return LedgerSettings()
