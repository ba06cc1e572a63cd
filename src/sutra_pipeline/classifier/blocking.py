"""Dhātu-lopa blocking classifier (sutra 1.1.4, na dhātulopa ārdhadhātuke).

Decides whether a root loses material before an affix, and therefore
whether guṇa/vṛddhi is blocked. Two stages are composed by the mode:

1. lookup (``lookup`` mode only): curated exclusions, then inclusions;
2. scoring: independent evidence signals, weighted sum, logistic squash.

The outcome is always ``weighted_sum >= threshold`` on the raw sum, so a
threshold above the attainable maximum forces ``False`` whatever the
displayed confidence.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sutra_pipeline.classifier import lookup, scoring
from sutra_pipeline.classifier.affixes import analyze_affix
from sutra_pipeline.classifier.diagnostics import DECISION_LOG
from sutra_pipeline.classifier.models import BlockingAnalysis, Decision, DecisionStage
from sutra_pipeline.classifier.signals import evaluate_signals
from sutra_pipeline.config.runtime import coerce_mode, get_config, merge_config
from sutra_pipeline.config.schema import ClassifierConfig, ClassifierMode
from sutra_pipeline.phonology.features import FormProfile, profile_form

logger = logging.getLogger(__name__)

GUNA_VRDDHI_OPERATIONS = ("guna", "vrddhi")


def resolve_config(
    mode: ClassifierMode | str | None = None,
    config: Mapping[str, Any] | ClassifierConfig | None = None,
) -> ClassifierConfig:
    """Snapshot of the effective configuration for one call.

    ``config`` is either a full ``ClassifierConfig`` or a partial mapping
    merged over the process-wide value; ``mode`` overrides both.
    """
    effective = merge_config(get_config(), config)
    if mode is not None:
        resolved = coerce_mode(mode)
        if resolved is not effective.mode:
            effective = effective.model_copy(update={"mode": resolved})
    return effective


def score_profiles(
    root: FormProfile, affix: FormProfile, config: ClassifierConfig
) -> Decision:
    """Scoring stage alone: signals, weighted sum, threshold, confidence."""
    signals = evaluate_signals(root, affix, config.evidence_weights.keys())
    total, active = scoring.weighted_sum(signals, config.evidence_weights)
    outcome = scoring.decide(total, config.threshold)
    confidence = scoring.confidence_for(total, outcome, config.squashing)
    verdict = "meets" if outcome else "is below"
    rationale = (
        f"evidence sum {total:.3f} {verdict} threshold {config.threshold:.3f}"
        f" ({', '.join(name for name, _ in active) or 'no active signals'})"
    )
    return Decision(
        outcome=outcome,
        confidence=confidence,
        contributing_signals=tuple(active),
        rationale=rationale,
        stage=DecisionStage.SCORING,
        weighted_sum=total,
        threshold=config.threshold,
        mode=config.mode,
        root=root.key,
        affix=affix.key,
    )


def _invalid_decision(root: object, affix: object, config: ClassifierConfig) -> Decision:
    return Decision(
        outcome=False,
        confidence=scoring.confidence_for(0.0, False, config.squashing),
        contributing_signals=(),
        rationale="invalid root or affix input; all signals treated as absent",
        stage=DecisionStage.INVALID,
        weighted_sum=0.0,
        threshold=config.threshold,
        mode=config.mode,
        root=root if isinstance(root, str) else "",
        affix=affix if isinstance(affix, str) else "",
    )


def classify_profiles(
    root: FormProfile, affix: FormProfile, config: ClassifierConfig
) -> Decision:
    """Compose the lookup and scoring stages for already-profiled input."""
    if not root.is_valid or not affix.is_valid:
        return _invalid_decision(root.text, affix.text, config)
    if config.mode is ClassifierMode.LOOKUP:
        curated = lookup.lookup_decision(root.key, affix.key, config)
        if curated is not None:
            return curated
    return score_profiles(root, affix, config)


def classify_blocking(
    root: object,
    affix: object,
    mode: ClassifierMode | str | None = None,
    config: Mapping[str, Any] | ClassifierConfig | None = None,
) -> Decision:
    """Classify whether ``root`` + ``affix`` triggers dhātu-lopa.

    Accepts IAST or Devanagari spellings. Malformed input (non-string,
    empty) never raises: it yields ``outcome=False`` at the lowest
    attainable confidence. Identical arguments under an identical
    configuration always produce an identical Decision.
    """
    effective = resolve_config(mode, config)
    decision = classify_profiles(profile_form(root), profile_form(affix), effective)
    if effective.diagnostics_enabled:
        DECISION_LOG.record(decision, maxlen=effective.history_size)
    logger.debug(
        "classify_blocking %s + %s -> %s (%.3f, %s)",
        decision.root,
        decision.affix,
        decision.outcome,
        decision.confidence,
        decision.stage.value,
    )
    return decision


def analyze_guna_vrddhi_block(
    root: object,
    affix: object,
    operation: str = "guna",
    mode: ClassifierMode | str | None = None,
    config: Mapping[str, Any] | ClassifierConfig | None = None,
) -> BlockingAnalysis:
    """Apply 1.1.4: guṇa/vṛddhi is blocked when an ārdhadhātuka affix
    causes dhātu-lopa."""
    decision = classify_blocking(root, affix, mode=mode, config=config)
    affix_class = analyze_affix(affix if isinstance(affix, str) else "")
    blocked = affix_class.is_ardhadhatuka and decision.outcome
    root_key, affix_key = decision.root, affix_class.affix
    if blocked:
        reasoning = (
            f"1.1.4 blocks {operation}: {affix_key} is ārdhadhātuka and causes"
            f" dhātu-lopa in {root_key}"
        )
    elif not affix_class.is_ardhadhatuka:
        reasoning = (
            f"{operation} not blocked: {affix_key or 'affix'} is"
            f" {affix_class.classification}, not ārdhadhātuka"
        )
    else:
        reasoning = f"{operation} not blocked: no dhātu-lopa detected in {root_key} + {affix_key}"
    return BlockingAnalysis(
        root=root_key,
        affix=affix_key,
        operation=operation,
        blocked=blocked,
        decision=decision,
        affix_class=affix_class,
        reasoning=reasoning,
    )


def config_summary(config: ClassifierConfig | None = None) -> dict[str, Any]:
    """Mode, threshold, weights and their total (the theoretical maximum)."""
    config = config or get_config()
    return {
        "mode": config.mode.value,
        "threshold": config.threshold,
        "weights": dict(config.evidence_weights),
        "weight_total": sum(config.evidence_weights.values()),
        "theoretical_max": scoring.max_attainable_sum(config),
        "squashing": config.squashing.model_dump(),
        "diagnostics_enabled": config.diagnostics_enabled,
    }
