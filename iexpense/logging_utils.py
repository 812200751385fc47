"""Mini README: Application-wide logging helpers for iExpense.

Structure:
    * get_logger - factory returning module loggers with baseline configuration.
    * configure_root_logger - installs the root handler once, adjusts level later.
    * level_for_environment - maps the configured environment to a log level.

Usage:
    Modules keep a module-level ``LOGGER = get_logger(__name__)``. Entry
    points call ``configure_root_logger(level_for_environment(...))`` once
    settings are known; the handler itself is only ever installed once, so
    re-creating the web application in tests never stacks handlers.
"""

from __future__ import annotations

import logging
from typing import Optional

_LOGGER_INITIALISED = False

_ENVIRONMENT_LEVELS = {
    "development": logging.DEBUG,
    "test": logging.WARNING,
}


def level_for_environment(environment: str) -> int:
    """Return DEBUG for development, WARNING for tests, INFO otherwise."""

    return _ENVIRONMENT_LEVELS.get(environment.strip().lower(), logging.INFO)


def configure_root_logger(level: Optional[int] = None) -> None:
    """Install the timestamped root handler, or only change the level if present."""

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    if _LOGGER_INITIALISED:
        if level is not None:
            root_logger.setLevel(level)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.setLevel(logging.INFO if level is None else level)
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    configure_root_logger()
    return logging.getLogger(name)
