"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from sutra_pipeline.classifier.diagnostics import reset_diagnostics
from sutra_pipeline.config.runtime import reset_config
from sutra_pipeline.pipeline.threader import create_state
from sutra_pipeline.pipeline.state import AnalysisState

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def clean_runtime() -> Iterator[None]:
    """Every test starts from default configuration and an empty decision log."""
    reset_config()
    reset_diagnostics()
    yield
    reset_config()
    reset_diagnostics()


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def config_path() -> Path:
    return FIXTURES_DIR / "config_test.yaml"


@pytest.fixture
def requests_path() -> Path:
    return FIXTURES_DIR / "requests.jsonl"


@pytest.fixture
def gam_state() -> AnalysisState:
    return create_state("gam")
