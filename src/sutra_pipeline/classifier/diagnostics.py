"""Process-wide record of blocking decisions.

Every classification appends to ``DECISION_LOG``; reading or resetting the
log never changes any Decision.
"""

from __future__ import annotations

import datetime
from collections import Counter, deque
from typing import Any

from sutra_pipeline.classifier.models import Decision, DecisionStage
from sutra_pipeline.config.runtime import get_config


class DecisionLog:
    """Call counters plus the last ``maxlen`` decisions."""

    def __init__(self, maxlen: int = 50) -> None:
        self._recent: deque[Decision] = deque(maxlen=max(0, maxlen))
        self.calls = 0
        self.stages: Counter[str] = Counter()
        self.outcomes: Counter[str] = Counter()
        self.invalid_inputs = 0

    def record(self, decision: Decision, maxlen: int | None = None) -> None:
        if maxlen is not None and maxlen != self._recent.maxlen:
            self._recent = deque(self._recent, maxlen=max(0, maxlen))
        self.calls += 1
        self.stages[decision.stage.value] += 1
        self.outcomes["lopa" if decision.outcome else "no_lopa"] += 1
        if decision.stage is DecisionStage.INVALID:
            self.invalid_inputs += 1
        self._recent.append(decision)

    def recent(self) -> list[Decision]:
        return list(self._recent)

    def metrics(self) -> dict[str, Any]:
        return {
            "calls": self.calls,
            "lookup_exclusions": self.stages.get("exclusion", 0),
            "lookup_inclusions": self.stages.get("inclusion", 0),
            "scored": self.stages.get("scoring", 0),
            "invalid_inputs": self.invalid_inputs,
            "lopa": self.outcomes.get("lopa", 0),
            "no_lopa": self.outcomes.get("no_lopa", 0),
        }

    def reset(self) -> None:
        self._recent.clear()
        self.calls = 0
        self.stages.clear()
        self.outcomes.clear()
        self.invalid_inputs = 0


DECISION_LOG = DecisionLog()


def get_metrics(reset: bool = False) -> dict[str, Any]:
    """Counter snapshot; ``reset=True`` zeroes the log after reading."""
    snapshot = DECISION_LOG.metrics()
    if reset:
        DECISION_LOG.reset()
    return snapshot


def get_diagnostics(
    include_config: bool = True,
    include_metrics: bool = True,
    include_recent: bool = True,
    reset: bool = False,
) -> dict[str, Any]:
    config = get_config()
    diagnostics: dict[str, Any] = {
        "timestamp": datetime.datetime.now(datetime.UTC).isoformat(),
        "enabled": config.diagnostics_enabled,
    }
    if include_config:
        diagnostics["config"] = config.model_dump(mode="json")
    if include_metrics:
        diagnostics["metrics"] = DECISION_LOG.metrics()
    if include_recent:
        diagnostics["recent"] = [d.to_dict() for d in DECISION_LOG.recent()]
    if reset:
        DECISION_LOG.reset()
    return diagnostics


def reset_diagnostics() -> None:
    DECISION_LOG.reset()
