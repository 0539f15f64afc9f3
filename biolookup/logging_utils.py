# biolookup/logging_utils.py

"""
Package logging.

A single stdout handler is attached to the ``biolookup`` package logger;
module loggers obtained through ``get_logger(__name__)`` are its children and
propagate to it, so every module shares one format and one level.
"""

from __future__ import annotations

import logging
import os
import sys

PACKAGE_LOGGER = "biolookup"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _configure_package_logger() -> logging.Logger:
    root = logging.getLogger(PACKAGE_LOGGER)
    if root.handlers:
        return root

    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    root.setLevel(getattr(logging, level_name, logging.INFO))
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
    root.addHandler(handler)
    return root


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    """Return a logger under the ``biolookup`` namespace."""
    root = _configure_package_logger()
    if name == PACKAGE_LOGGER:
        return root
    if not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def set_log_level(level: str | int) -> None:
    """Change the level of the package logger at runtime."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    _configure_package_logger().setLevel(level)
