"""Logging configuration for the CLI and scripts."""

from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER = "sutra_pipeline"


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger with a readable format.

    Library modules only create loggers; handlers are installed here, by the
    CLI or by an embedding application.
    """
    numeric = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s [%(levelname)-7s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
    logging.getLogger(PACKAGE_LOGGER).setLevel(numeric)
