"""Data models for blocking decisions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from sutra_pipeline.config.schema import ClassifierMode


class DecisionStage(str, Enum):
    EXCLUSION = "exclusion"
    INCLUSION = "inclusion"
    SCORING = "scoring"
    INVALID = "invalid"


@dataclass(frozen=True)
class Decision:
    """Outcome of one dhātu-lopa blocking classification.

    ``outcome`` is decided on the raw ``weighted_sum`` against ``threshold``;
    ``confidence`` is the squashed, floored value and always lies in [0, 1].
    """

    outcome: bool
    confidence: float
    contributing_signals: tuple[tuple[str, float], ...]
    rationale: str
    stage: DecisionStage
    weighted_sum: float = 0.0
    threshold: float = 0.0
    mode: ClassifierMode = ClassifierMode.LOOKUP
    root: str = ""
    affix: str = ""

    @property
    def signal_names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.contributing_signals)

    def to_dict(self) -> dict[str, Any]:
        return {
            "outcome": self.outcome,
            "confidence": self.confidence,
            "contributing_signals": [
                {"signal": name, "weight": weight}
                for name, weight in self.contributing_signals
            ],
            "rationale": self.rationale,
            "stage": self.stage.value,
            "weighted_sum": self.weighted_sum,
            "threshold": self.threshold,
            "mode": self.mode.value,
            "root": self.root,
            "affix": self.affix,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Decision:
        return cls(
            outcome=d["outcome"],
            confidence=d["confidence"],
            contributing_signals=tuple(
                (s["signal"], s["weight"]) for s in d.get("contributing_signals", [])
            ),
            rationale=d.get("rationale", ""),
            stage=DecisionStage(d.get("stage", DecisionStage.SCORING.value)),
            weighted_sum=d.get("weighted_sum", 0.0),
            threshold=d.get("threshold", 0.0),
            mode=ClassifierMode(d.get("mode", ClassifierMode.LOOKUP.value)),
            root=d.get("root", ""),
            affix=d.get("affix", ""),
        )


@dataclass(frozen=True)
class AffixClassification:
    """ārdhadhātuka / sārvadhātuka status of an affix."""

    affix: str
    classification: str  # ardhadhatuka | sarvadhatuka | unknown
    confidence: float
    reasoning: str

    @property
    def is_ardhadhatuka(self) -> bool:
        return self.classification == "ardhadhatuka"

    def to_dict(self) -> dict[str, Any]:
        return {
            "affix": self.affix,
            "classification": self.classification,
            "confidence": self.confidence,
            "reasoning": self.reasoning,
        }


@dataclass(frozen=True)
class BlockingAnalysis:
    """Whether guṇa/vṛddhi is blocked for a root + affix (sutra 1.1.4)."""

    root: str
    affix: str
    operation: str
    blocked: bool
    decision: Decision
    affix_class: AffixClassification
    reasoning: str

    @property
    def confidence(self) -> float:
        return self.decision.confidence

    def to_dict(self) -> dict[str, Any]:
        return {
            "root": self.root,
            "affix": self.affix,
            "operation": self.operation,
            "blocked": self.blocked,
            "confidence": self.confidence,
            "reasoning": self.reasoning,
            "affix_class": self.affix_class.to_dict(),
            "decision": self.decision.to_dict(),
        }
