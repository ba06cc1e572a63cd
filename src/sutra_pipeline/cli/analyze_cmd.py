"""CLI handlers for the analyze and batch subcommands."""

from __future__ import annotations

import logging
from pathlib import Path

import orjson

from sutra_pipeline.pipeline.presets import run_complete_preset
from sutra_pipeline.pipeline.requests import BatchRequest, BlockingRequest, analyze_request
from sutra_pipeline.pipeline.threader import create_state

from .common import emit, prepare

logger = logging.getLogger(__name__)


def run_analyze(
    root: str,
    affix: str,
    operation: str,
    mode: str | None,
    config_path: str | None,
    log_level: str | None,
) -> None:
    prepare(config_path, log_level)
    state = create_state(root, meta={"affix": affix, "operation": operation})
    state = run_complete_preset(state, root, affix, operation, mode=mode)
    logger.info("Applied %d rules to %s", len(state.history), root)
    emit(state.to_dict())


def read_requests(path: Path) -> list[BlockingRequest]:
    requests = []
    with path.open("rb") as fh:
        for line in fh:
            if not line.strip():
                continue
            requests.append(BlockingRequest.from_dict(orjson.loads(line)))
    return requests


def run_batch(
    requests_path: str, mode: str | None, config_path: str | None, log_level: str | None
) -> None:
    prepare(config_path, log_level)
    requests = read_requests(Path(requests_path))
    logger.info("Read %d requests from %s", len(requests), requests_path)
    result = analyze_request(BatchRequest(tuple(requests)), mode=mode)
    emit(result.to_dict())
