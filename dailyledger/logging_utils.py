"""Mini README: Application-wide logging helpers for the daily ledger service.

Structure:
    * configure_root_logger - installs one stream handler at the configured level.
    * get_logger - factory returning module loggers with baseline configuration.

Usage:
    Modules import ``get_logger`` once at import time and keep a module-level
    ``LOGGER``. The level defaults to ``LedgerSettings.log_level`` so operators
    can raise verbosity through ``DAILYLEDGER_LOG_LEVEL`` without code changes.
    Handlers are installed exactly once, so repeated application factory calls
    (tests, uvicorn reloads) do not duplicate output.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from .configuration import get_settings

_LOGGER_INITIALISED = False


def _resolve_level(level: Optional[Union[int, str]]) -> int:
    """Translate level names such as ``"debug"`` into logging constants."""

    if level is None:
        level = get_settings().log_level
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown logging level: {level}")
    return resolved


def configure_root_logger(level: Optional[Union[int, str]] = None) -> None:
    """Attach the ledger formatter to the root logger unless already done."""

    global _LOGGER_INITIALISED
    if _LOGGER_INITIALISED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(_resolve_level(level))
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    configure_root_logger()
    return logging.getLogger(name)
