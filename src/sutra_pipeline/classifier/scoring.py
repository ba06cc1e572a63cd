"""Weighted evidence scoring and logistic confidence mapping."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping

from sutra_pipeline.classifier.signals import SIGNALS_BY_NAME
from sutra_pipeline.config.schema import ClassifierConfig, SquashingConfig


def weighted_sum(
    signals: Iterable[tuple[str, bool]], weights: Mapping[str, float]
) -> tuple[float, list[tuple[str, float]]]:
    """Sum the weights of active signals.

    Returns the raw sum and the active ``(name, weight)`` pairs in signal
    order. Signals without a configured weight contribute nothing.
    """
    total = 0.0
    active: list[tuple[str, float]] = []
    for name, value in signals:
        if not value or name not in weights:
            continue
        weight = float(weights[name])
        total += weight
        active.append((name, weight))
    return total, active


def max_attainable_sum(config: ClassifierConfig) -> float:
    """Largest weighted sum any root + affix can reach.

    Weights under names with no registered signal can never fire and are
    left out.
    """
    return sum(
        w for name, w in config.evidence_weights.items() if w > 0 and name in SIGNALS_BY_NAME
    )


def squash(value: float, params: SquashingConfig) -> float:
    """Logistic map of the weighted sum, non-decreasing and bounded by ``cap``."""
    z = params.slope * (value - params.midpoint)
    # math.exp overflows for large negative z
    if z < -700.0:
        return 0.0
    return params.cap / (1.0 + math.exp(-z))


def _clamp(value: float) -> float:
    return min(1.0, max(0.0, value))


def lopa_floor(params: SquashingConfig) -> float:
    """Confidence floor for positive outcomes.

    Strictly above ``floor_non_lopa`` so a positive decision can always be
    told apart from a floored negative one.
    """
    floor = max(params.floor_lopa, params.floor_non_lopa + params.mapping_margin)
    if floor <= params.floor_non_lopa:
        floor = math.nextafter(params.floor_non_lopa, math.inf)
    return floor


def confidence_for(total: float, outcome: bool, params: SquashingConfig) -> float:
    floor = lopa_floor(params) if outcome else params.floor_non_lopa
    return _clamp(max(floor, squash(total, params)))


def decide(total: float, threshold: float) -> bool:
    """Threshold test on the raw (pre-squash) weighted sum."""
    return total >= threshold
