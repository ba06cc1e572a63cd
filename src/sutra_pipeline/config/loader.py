"""Load and validate configuration from YAML."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError

from sutra_pipeline.config.schema import AppConfig
from sutra_pipeline.errors import ConfigurationError


def load_config(path: Path | str) -> AppConfig:
    """Read a YAML file and return a validated AppConfig."""
    path = Path(path)
    with path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh)
    if raw is None:
        raw = {}
    try:
        return AppConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration in {path}: {exc}") from exc
