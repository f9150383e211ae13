"""Logging configuration for the storefront."""

from __future__ import annotations

import logging
import sys


def configure_logging(level: str = "INFO") -> None:
    """Attach a single stderr handler to the ``storefront`` logger tree.

    Safe to call more than once; earlier handlers are replaced.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )

    logger = logging.getLogger("storefront")
    logger.setLevel(level.upper())
    for old_handler in logger.handlers[:]:
        old_handler.close()
        logger.removeHandler(old_handler)
    logger.addHandler(handler)
    logger.propagate = False
