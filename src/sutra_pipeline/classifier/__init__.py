"""Evidence-weighted dhātu-lopa blocking classifier."""

from sutra_pipeline.classifier.blocking import (
    analyze_guna_vrddhi_block,
    classify_blocking,
    config_summary,
)
from sutra_pipeline.classifier.diagnostics import get_diagnostics, get_metrics, reset_diagnostics
from sutra_pipeline.classifier.models import (
    AffixClassification,
    BlockingAnalysis,
    Decision,
    DecisionStage,
)

__all__ = [
    "AffixClassification",
    "BlockingAnalysis",
    "Decision",
    "DecisionStage",
    "analyze_guna_vrddhi_block",
    "classify_blocking",
    "config_summary",
    "get_diagnostics",
    "get_metrics",
    "reset_diagnostics",
]
