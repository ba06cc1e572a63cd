"""Named rule sequences run through the state threader."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from sutra_pipeline.config.schema import ClassifierConfig, ClassifierMode
from sutra_pipeline.pipeline.state import AnalysisState
from sutra_pipeline.pipeline.threader import RuleInvocation, rule_id_of, run_rules
from sutra_pipeline.rules import morphological, phonological

logger = logging.getLogger(__name__)

PHONOLOGICAL_PRESET: tuple[Callable[..., Any], ...] = (
    phonological.vrddhi_designation,
    phonological.guna_designation,
    phonological.ik_vowels,
    phonological.syllable_profile,
)

MORPHOLOGICAL_PRESET: tuple[Callable[..., Any], ...] = (
    morphological.affix_classification,
    morphological.it_markers,
    morphological.dhatu_lopa_blocking,
    morphological.kniti_blocking,
)

PRESETS: dict[str, tuple[Callable[..., Any], ...]] = {
    "phonological": PHONOLOGICAL_PRESET,
    "morphological": MORPHOLOGICAL_PRESET,
    "complete": PHONOLOGICAL_PRESET + MORPHOLOGICAL_PRESET,
}


def preset_rule_ids(name: str) -> list[str]:
    """Rule ids of a registered preset, in application order."""
    if name not in PRESETS:
        raise KeyError(f"Unknown preset {name!r}; choose from {sorted(PRESETS)}")
    return [rule_id_of(fn) for fn in PRESETS[name]]


def run_phonological_preset(state: AnalysisState) -> AnalysisState:
    return run_rules(state, PHONOLOGICAL_PRESET)


def morphological_invocations(
    root: str,
    affix: str,
    operation: str = "guna",
    mode: ClassifierMode | str | None = None,
    config: Mapping[str, Any] | ClassifierConfig | None = None,
) -> list[RuleInvocation]:
    return [
        RuleInvocation(morphological.affix_classification, (affix,)),
        RuleInvocation(morphological.it_markers, (affix,)),
        RuleInvocation(
            morphological.dhatu_lopa_blocking,
            (root, affix, operation),
            {"mode": mode, "config": config},
        ),
        RuleInvocation(morphological.kniti_blocking, (affix, operation)),
    ]


def run_morphological_preset(
    state: AnalysisState,
    root: str,
    affix: str,
    operation: str = "guna",
    mode: ClassifierMode | str | None = None,
    config: Mapping[str, Any] | ClassifierConfig | None = None,
) -> AnalysisState:
    return run_rules(state, morphological_invocations(root, affix, operation, mode, config))


def run_complete_preset(
    state: AnalysisState,
    root: str,
    affix: str,
    operation: str = "guna",
    mode: ClassifierMode | str | None = None,
    config: Mapping[str, Any] | ClassifierConfig | None = None,
) -> AnalysisState:
    """Phonological designations of the surface, then the root + affix
    morphology. History holds one entry per rule in that order."""
    logger.debug("Complete preset on %r with %s + %s (%s)", state.surface, root, affix, operation)
    state = run_phonological_preset(state)
    return run_morphological_preset(state, root, affix, operation, mode=mode, config=config)
