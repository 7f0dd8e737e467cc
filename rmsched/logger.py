"""Logging helpers for the schedulability analyzer."""
from __future__ import annotations

import logging
from typing import Optional

PROJECT_LOGGER = "rmsched"


def configure_logger(name: str = PROJECT_LOGGER, level: int = logging.WARNING) -> logging.Logger:
    """Configure and return the project-wide logger.

    Handlers are attached only once, so repeated imports from the package,
    the experiment scripts and the tests share the same configuration.
    """

    logger = logging.getLogger(name)
    if logger.handlers:
        logger.setLevel(level)
        return logger

    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        "[%(levelname)s] %(asctime)s - %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a child logger of the project logger."""

    parent = logging.getLogger(PROJECT_LOGGER)
    if not parent.handlers:
        parent = configure_logger()
    if name is None:
        return parent
    return parent.getChild(name)
