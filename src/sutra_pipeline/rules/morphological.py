"""Morphological rules for a root + affix pair."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sutra_pipeline.classifier import affixes
from sutra_pipeline.classifier.blocking import analyze_guna_vrddhi_block
from sutra_pipeline.config.schema import ClassifierConfig, ClassifierMode
from sutra_pipeline.pipeline.state import AnalysisState, DiagnosticKind, RuleDiagnostic, RuleOutcome
from sutra_pipeline.pipeline.threader import rule


@rule("3.4.113:affix-class")
def affix_classification(state: AnalysisState, affix: str) -> RuleOutcome:
    """sārvadhātuka (3.4.113) versus ārdhadhātuka (3.4.114)."""
    result = affixes.analyze_affix(affix)
    definitions: dict[str, Any] = {}
    if result.classification != "unknown":
        definitions[result.classification] = result.affix
    return RuleOutcome(
        facts={
            "affix.form": result.affix,
            "affix.class": result.classification,
            "affix.is_ardhadhatuka": result.is_ardhadhatuka,
            "affix.class_confidence": result.confidence,
        },
        definitions=definitions,
        diagnostic=RuleDiagnostic(DiagnosticKind.NOTE, {"message": result.reasoning}),
    )


@rule("it-markers")
def it_markers(state: AnalysisState, affix: str) -> dict[str, bool]:
    markers = affixes.it_markers(affix)
    return {f"affix.{name}": value for name, value in markers.items()}


@rule("1.1.4:dhatu-lopa")
def dhatu_lopa_blocking(
    state: AnalysisState,
    root: str,
    affix: str,
    operation: str = "guna",
    mode: ClassifierMode | str | None = None,
    config: Mapping[str, Any] | ClassifierConfig | None = None,
) -> RuleOutcome:
    """na dhātulopa ārdhadhātuke: no guṇa/vṛddhi when an ārdhadhātuka affix
    causes loss of root material."""
    analysis = analyze_guna_vrddhi_block(root, affix, operation, mode=mode, config=config)
    decision = analysis.decision
    return RuleOutcome(
        facts={
            "blocking.outcome": decision.outcome,
            "blocking.confidence": decision.confidence,
            "blocking.stage": decision.stage.value,
            "blocking.operation": operation,
            "blocking.by_1_1_4": analysis.blocked,
        },
        diagnostic=RuleDiagnostic(DiagnosticKind.DECISION, decision.to_dict()),
        notes=analysis.reasoning,
    )


@rule("1.1.5:kniti")
def kniti_blocking(state: AnalysisState, affix: str, operation: str = "guna") -> RuleOutcome:
    """kṅiti ca: affixes marked with k, g or ṅ do not cause guṇa/vṛddhi.

    Combines its own verdict with a 1.1.4 verdict already in the state.
    """
    markers = affixes.it_markers(affix)
    by_kniti = any(markers.values())
    blocked = by_kniti or bool(state.fact("blocking.by_1_1_4", False))
    return RuleOutcome(
        facts={
            "blocking.by_1_1_5": by_kniti,
            f"{operation}.blocked": blocked,
        },
    )
