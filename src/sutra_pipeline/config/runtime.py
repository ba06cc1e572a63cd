"""Process-wide classifier configuration.

The current ``ClassifierConfig`` is a frozen pydantic model held in a module
global. Writers replace it wholesale through ``set_config`` / ``set_mode`` /
``reset_config``; readers take a snapshot with ``get_config`` and use that
single value for the whole call. There is no locking: configure once at
start-up (or inside ``scoped_config``) and read many times.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from pydantic import ValidationError

from sutra_pipeline.config.schema import ClassifierConfig, ClassifierMode
from sutra_pipeline.errors import ConfigurationError

logger = logging.getLogger(__name__)

_current: ClassifierConfig = ClassifierConfig()


def coerce_mode(mode: ClassifierMode | str) -> ClassifierMode:
    """Resolve a mode name or alias; unknown names raise ConfigurationError."""
    if isinstance(mode, ClassifierMode):
        return mode
    try:
        return ClassifierMode(mode)
    except ValueError as exc:
        raise ConfigurationError(f"Unknown classifier mode: {mode!r}") from exc


def _deep_merge(base: dict[str, Any], partial: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in partial.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def merge_config(
    base: ClassifierConfig, partial: Mapping[str, Any] | ClassifierConfig | None
) -> ClassifierConfig:
    """Return ``base`` updated by ``partial`` without touching either.

    Nested ``squashing`` and ``evidence_weights`` mappings merge key by key,
    so ``{"evidence_weights": {"nasal_final": 0.5}}`` keeps the other weights.
    """
    if partial is None:
        return base
    if isinstance(partial, ClassifierConfig):
        return partial
    raw = _deep_merge(base.model_dump(mode="python"), partial)
    if "mode" in raw:
        raw["mode"] = coerce_mode(raw["mode"])
    try:
        return ClassifierConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid classifier configuration: {exc}") from exc


def get_config() -> ClassifierConfig:
    return _current


def set_config(partial: Mapping[str, Any] | ClassifierConfig) -> ClassifierConfig:
    """Merge ``partial`` into the current configuration and return the result."""
    global _current
    _current = merge_config(_current, partial)
    logger.info(
        "Classifier config updated: mode=%s threshold=%.3f",
        _current.mode.value,
        _current.threshold,
    )
    return _current


def set_mode(mode: ClassifierMode | str) -> ClassifierConfig:
    return set_config({"mode": coerce_mode(mode)})


def reset_config() -> ClassifierConfig:
    global _current
    _current = ClassifierConfig()
    logger.info("Classifier config reset to defaults")
    return _current


@contextmanager
def scoped_config(
    partial: Mapping[str, Any] | ClassifierConfig | None = None,
) -> Iterator[ClassifierConfig]:
    """Apply ``partial`` for the duration of a ``with`` block.

    The previous configuration is restored on exit, including when the block
    raises.
    """
    global _current
    snapshot = _current
    _current = merge_config(snapshot, partial)
    try:
        yield _current
    finally:
        _current = snapshot
