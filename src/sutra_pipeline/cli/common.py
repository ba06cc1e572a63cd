"""Shared start-up for CLI handlers."""

from __future__ import annotations

import logging
from typing import Any

import orjson
import typer

from sutra_pipeline.config.loader import load_config
from sutra_pipeline.config.runtime import set_config
from sutra_pipeline.utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)

DEFAULT_LOG_LEVEL = "WARNING"


def prepare(config_path: str | None, log_level: str | None) -> None:
    """Install logging and, if given, the classifier section of a config file.

    An explicit ``--log-level`` wins over the file's ``log_level``.
    """
    if config_path is None:
        setup_logging(log_level or DEFAULT_LOG_LEVEL)
        return
    cfg = load_config(config_path)
    setup_logging(log_level or cfg.log_level)
    set_config(cfg.classifier)
    logger.info("Loaded configuration from %s", config_path)


def emit(payload: Any) -> None:
    typer.echo(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode("utf-8"))
