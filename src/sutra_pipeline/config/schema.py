"""Pydantic v2 configuration models for the sutra pipeline."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class ClassifierMode(str, Enum):
    LOOKUP = "lookup"   # curated tables first, scoring as fallback
    RULES = "rules"     # scoring only

    @classmethod
    def _missing_(cls, value: object) -> ClassifierMode | None:
        if isinstance(value, str):
            return _MODE_ALIASES.get(value.strip().lower())
        return None


_MODE_ALIASES: dict[str, ClassifierMode] = {
    "lookup": ClassifierMode.LOOKUP,
    "hybrid": ClassifierMode.LOOKUP,
    "legacy": ClassifierMode.LOOKUP,
    "rules": ClassifierMode.RULES,
    "rules_only": ClassifierMode.RULES,
    "rulesonly": ClassifierMode.RULES,
}


DEFAULT_EVIDENCE_WEIGHTS: Mapping[str, float] = MappingProxyType({
    "nasal_final": 0.30,
    "monosyllabic": 0.10,
    "canonical_cvc": 0.10,
    "ardhadhatuka_affix": 0.15,
    "kit_affix": 0.15,
    "consonant_initial_affix": 0.05,
    "nasal_stop_junction": 0.10,
    "central_vowel_root": 0.05,
})


class SquashingConfig(BaseModel):
    """Logistic squashing of the weighted evidence sum into a confidence."""

    model_config = ConfigDict(frozen=True)

    slope: float = 6.0
    midpoint: float = 0.65
    cap: float = 0.97
    floor_lopa: float = 0.85
    floor_non_lopa: float = 0.71
    mapping_margin: float = 0.05


class ClassifierConfig(BaseModel):
    """Parameters read by every blocking classification.

    Numeric values are not range-checked: a negative weight or a threshold
    above the attainable maximum is accepted and shows up as an extreme
    (but still bounded) confidence.
    """

    model_config = ConfigDict(frozen=True)

    mode: ClassifierMode = ClassifierMode.LOOKUP
    evidence_weights: Mapping[str, float] = Field(
        default_factory=lambda: MappingProxyType(dict(DEFAULT_EVIDENCE_WEIGHTS))
    )
    threshold: float = 0.65
    squashing: SquashingConfig = Field(default_factory=SquashingConfig)
    curated_confidence: float = 0.9
    diagnostics_enabled: bool = True
    history_size: int = 50

    @field_validator("evidence_weights", mode="after")
    @classmethod
    def _freeze_weights(cls, value: Mapping[str, float]) -> Mapping[str, float]:
        # stored read-only; a new config comes from merge_config
        return MappingProxyType(dict(value))

    @field_serializer("evidence_weights")
    def _dump_weights(self, value: Mapping[str, float]) -> dict[str, float]:
        return dict(value)


class AppConfig(BaseModel):
    """Top-level configuration file."""

    log_level: str = "INFO"
    classifier: ClassifierConfig = Field(default_factory=ClassifierConfig)
