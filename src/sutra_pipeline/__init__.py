"""sutra_pipeline: Sanskrit script detection, phoneme tokenization and
dhātu-lopa blocking analysis over an immutable rule pipeline."""

from sutra_pipeline.classifier import (
    AffixClassification,
    BlockingAnalysis,
    Decision,
    DecisionStage,
    analyze_guna_vrddhi_block,
    classify_blocking,
    config_summary,
    get_diagnostics,
    get_metrics,
    reset_diagnostics,
)
from sutra_pipeline.classifier.affixes import analyze_affix
from sutra_pipeline.config.runtime import (
    get_config,
    reset_config,
    scoped_config,
    set_config,
    set_mode,
)
from sutra_pipeline.config.schema import ClassifierConfig, ClassifierMode
from sutra_pipeline.errors import ConfigurationError, InvalidInputError, SutraPipelineError
from sutra_pipeline.phonology.script import ScriptTag, classify_script
from sutra_pipeline.phonology.tokenizer import PhonemeStream, tokenize
from sutra_pipeline.pipeline import (
    AnalysisState,
    BatchRequest,
    BatchResult,
    BlockingRequest,
    BlockingResult,
    analyze_request,
    apply_rule,
    create_state,
    run_complete_preset,
    run_morphological_preset,
    run_phonological_preset,
    run_rules,
)

classify = classify_script

__version__ = "0.1.0"

__all__ = [
    "AffixClassification",
    "AnalysisState",
    "BatchRequest",
    "BatchResult",
    "BlockingAnalysis",
    "BlockingRequest",
    "BlockingResult",
    "ClassifierConfig",
    "ClassifierMode",
    "ConfigurationError",
    "Decision",
    "DecisionStage",
    "InvalidInputError",
    "PhonemeStream",
    "ScriptTag",
    "SutraPipelineError",
    "analyze_affix",
    "analyze_guna_vrddhi_block",
    "analyze_request",
    "apply_rule",
    "classify",
    "classify_blocking",
    "classify_script",
    "config_summary",
    "create_state",
    "get_config",
    "get_diagnostics",
    "get_metrics",
    "reset_config",
    "reset_diagnostics",
    "run_complete_preset",
    "run_morphological_preset",
    "run_phonological_preset",
    "run_rules",
    "scoped_config",
    "set_config",
    "set_mode",
    "tokenize",
]
