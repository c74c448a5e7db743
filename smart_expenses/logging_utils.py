"""Logging helpers for the ``smart_expenses`` package.

Library modules only call :func:`get_logger`; entry points (the CLI and the
Flask app factory) call :func:`configure_logging` once at startup. Until that
happens the package root logger carries a ``NullHandler`` so embedding the
ledger stays silent.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO, Optional, Union

_PKG_LOGGER_NAME = "smart_expenses"
_LOG_LEVEL_ENV = "SMART_EXPENSES_LOG_LEVEL"
_CONFIGURED = False

logging.getLogger(_PKG_LOGGER_NAME).addHandler(logging.NullHandler())


def _level_from_name(name: str) -> Optional[int]:
    name = name.strip().upper()
    if name.isdigit():
        return int(name)
    numeric = getattr(logging, name, None)
    return numeric if isinstance(numeric, int) else None


def parse_level(level: Union[int, str, None]) -> int:
    """Resolve a level name or number; unknown or ``None`` falls back to the environment, then INFO."""
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        resolved = _level_from_name(level)
        if resolved is not None:
            return resolved
    env_value = os.getenv(_LOG_LEVEL_ENV)
    if env_value:
        resolved = _level_from_name(env_value)
        if resolved is not None:
            return resolved
    return logging.INFO


def configure_logging(
    level: Union[int, str, None] = None, *, stream: Optional[IO[str]] = None
) -> None:
    """Attach a single stream handler to the package root logger."""
    global _CONFIGURED
    root = logging.getLogger(_PKG_LOGGER_NAME)
    root.setLevel(parse_level(level))
    if _CONFIGURED:
        return

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)
    _CONFIGURED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the package root."""
    if not name or name == _PKG_LOGGER_NAME:
        return logging.getLogger(_PKG_LOGGER_NAME)
    if not name.startswith(_PKG_LOGGER_NAME + "."):
        name = f"{_PKG_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
