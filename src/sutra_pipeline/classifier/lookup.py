"""Curated root + affix tables for the lookup stage."""

from __future__ import annotations

from sutra_pipeline.classifier.models import Decision, DecisionStage
from sutra_pipeline.config.schema import ClassifierConfig, ClassifierMode

# documented dhātu-lopa combinations
INCLUSIONS: dict[str, frozenset[str]] = {
    "gam": frozenset({"ya", "tvā", "kta", "ktavat", "śa", "ka", "tavya"}),
    "han": frozenset({"ya", "kta", "ktavat", "śa", "ka", "tvā"}),
    "jan": frozenset({"ya", "ktavat", "śa", "ka"}),
    "vid": frozenset({"kta", "ya", "tvā"}),
    "khad": frozenset({"ya", "kta", "ktavat"}),
    "gad": frozenset({"ya", "tvā", "kta"}),
    "chad": frozenset({"ya", "kta"}),
}

# combinations that keep the root intact; checked before INCLUSIONS
EXCLUSIONS: dict[str, frozenset[str]] = {
    "pad": frozenset({"ya", "kta", "tvā"}),
    "sad": frozenset({"ya", "kta", "tvā"}),
    "mad": frozenset({"ya", "kta", "tvā"}),
    "jan": frozenset({"ta"}),
    "gam": frozenset({"tavya"}),
    "vid": frozenset({"ka", "śa"}),
}


def is_excluded(root: str, affix: str) -> bool:
    return affix in EXCLUSIONS.get(root, ())


def is_included(root: str, affix: str) -> bool:
    return affix in INCLUSIONS.get(root, ())


def lookup_decision(root: str, affix: str, config: ClassifierConfig) -> Decision | None:
    """Return a curated Decision for ``root`` + ``affix``, or None.

    ``root`` and ``affix`` are IAST keys. Exclusions take precedence, so a
    pair listed in both tables is never reported as lopa.
    """
    if is_excluded(root, affix):
        return Decision(
            outcome=False,
            confidence=config.squashing.floor_non_lopa,
            contributing_signals=(),
            rationale=f"explicit exclusion: {root} + {affix} retains the root",
            stage=DecisionStage.EXCLUSION,
            threshold=config.threshold,
            mode=ClassifierMode.LOOKUP,
            root=root,
            affix=affix,
        )
    if is_included(root, affix):
        return Decision(
            outcome=True,
            confidence=config.curated_confidence,
            contributing_signals=(),
            rationale=f"curated mapping: {root} + {affix} follows a documented dhātu-lopa pattern",
            stage=DecisionStage.INCLUSION,
            threshold=config.threshold,
            mode=ClassifierMode.LOOKUP,
            root=root,
            affix=affix,
        )
    return None
