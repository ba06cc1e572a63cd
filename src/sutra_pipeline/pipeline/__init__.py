"""Immutable analysis state and the rule threader."""

from sutra_pipeline.pipeline.state import AnalysisState, HistoryEntry, RuleDiagnostic, RuleOutcome
from sutra_pipeline.pipeline.threader import (
    RuleInvocation,
    apply_rule,
    create_state,
    rule,
    run_rules,
)
from sutra_pipeline.pipeline.presets import (
    PRESETS,
    preset_rule_ids,
    run_complete_preset,
    run_morphological_preset,
    run_phonological_preset,
)
from sutra_pipeline.pipeline.requests import (
    BatchRequest,
    BatchResult,
    BlockingRequest,
    BlockingResult,
    analyze_request,
)

__all__ = [
    "PRESETS",
    "AnalysisState",
    "BatchRequest",
    "BatchResult",
    "BlockingRequest",
    "BlockingResult",
    "HistoryEntry",
    "RuleDiagnostic",
    "RuleInvocation",
    "RuleOutcome",
    "analyze_request",
    "apply_rule",
    "create_state",
    "preset_rule_ids",
    "rule",
    "run_complete_preset",
    "run_morphological_preset",
    "run_phonological_preset",
    "run_rules",
]
