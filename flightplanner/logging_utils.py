"""Mini README: Application-wide logging helpers for the flight planner.

Structure:
    * get_logger - factory returning module loggers with shared formatting.
    * configure_root_logger - installs the root handler once, at a level taken
      from the argument or from ``FLIGHTPLANNER_LOG_LEVEL``.

Usage:
    Modules import ``get_logger`` and keep a module level ``LOGGER``. The root
    handler is only installed once so repeated imports (or reloads during
    development) never duplicate output lines.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False


def _resolve_level(level: Optional[Union[int, str]]) -> int:
    """Translate a level name or number, falling back to configuration."""

    if level is None:
        from .configuration import get_settings

        level = get_settings().log_level
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        return resolved if isinstance(resolved, int) else logging.INFO
    return level


def configure_root_logger(level: Optional[Union[int, str]] = None) -> None:
    """Configure the root logger with a debugging friendly formatter."""

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
