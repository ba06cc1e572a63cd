"""CLI handler for the classify subcommand."""

from __future__ import annotations

import logging

from sutra_pipeline.classifier.blocking import classify_blocking, config_summary

from .common import emit, prepare

logger = logging.getLogger(__name__)


def run_classify(
    root: str, affix: str, mode: str | None, config_path: str | None, log_level: str | None
) -> None:
    prepare(config_path, log_level)
    decision = classify_blocking(root, affix, mode=mode)
    logger.info(
        "%s + %s: outcome=%s confidence=%.3f", root, affix, decision.outcome, decision.confidence
    )
    emit({"decision": decision.to_dict(), "config": config_summary()})
