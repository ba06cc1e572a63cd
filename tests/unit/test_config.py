"""Tests for configuration schema, loader and runtime state."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from sutra_pipeline.classifier.blocking import classify_blocking
from sutra_pipeline.config.loader import load_config
from sutra_pipeline.config.runtime import (
    coerce_mode,
    get_config,
    merge_config,
    reset_config,
    scoped_config,
    set_config,
    set_mode,
)
from sutra_pipeline.config.schema import (
    DEFAULT_EVIDENCE_WEIGHTS,
    AppConfig,
    ClassifierConfig,
    ClassifierMode,
    SquashingConfig,
)
from sutra_pipeline.errors import ConfigurationError, SutraPipelineError


class TestClassifierMode:
    def test_values(self):
        assert ClassifierMode("lookup") is ClassifierMode.LOOKUP
        assert ClassifierMode("rules") is ClassifierMode.RULES

    @pytest.mark.parametrize(
        "alias,expected",
        [
            ("hybrid", ClassifierMode.LOOKUP),
            ("legacy", ClassifierMode.LOOKUP),
            ("rules_only", ClassifierMode.RULES),
            ("RulesOnly", ClassifierMode.RULES),
            (" Rules ", ClassifierMode.RULES),
        ],
    )
    def test_aliases(self, alias, expected):
        assert coerce_mode(alias) is expected

    def test_unknown_mode(self):
        with pytest.raises(ConfigurationError):
            coerce_mode("neural")

    def test_configuration_error_is_package_error(self):
        assert issubclass(ConfigurationError, SutraPipelineError)


class TestClassifierConfig:
    def test_defaults(self):
        cfg = ClassifierConfig()
        assert cfg.mode == ClassifierMode.LOOKUP
        assert cfg.threshold == 0.65
        assert cfg.evidence_weights == DEFAULT_EVIDENCE_WEIGHTS
        assert cfg.diagnostics_enabled is True

    def test_squashing_defaults(self):
        sq = SquashingConfig()
        assert (sq.slope, sq.midpoint, sq.cap) == (6.0, 0.65, 0.97)
        assert (sq.floor_lopa, sq.floor_non_lopa, sq.mapping_margin) == (0.85, 0.71, 0.05)

    def test_default_weights_sum_to_one(self):
        assert sum(DEFAULT_EVIDENCE_WEIGHTS.values()) == pytest.approx(1.0)

    def test_frozen(self):
        cfg = ClassifierConfig()
        with pytest.raises(ValidationError):
            cfg.threshold = 0.1

    def test_default_weights_not_shared(self):
        cfg = ClassifierConfig()
        assert cfg.evidence_weights is not DEFAULT_EVIDENCE_WEIGHTS

    def test_out_of_domain_numbers_accepted(self):
        cfg = ClassifierConfig(threshold=5.0)
        assert cfg.threshold == 5.0


class TestMergeConfig:
    def test_none_keeps_base(self):
        base = ClassifierConfig()
        assert merge_config(base, None) is base

    def test_partial_weights_merge_by_key(self):
        merged = merge_config(ClassifierConfig(), {"evidence_weights": {"nasal_final": 0.5}})
        assert merged.evidence_weights["nasal_final"] == 0.5
        assert merged.evidence_weights["kit_affix"] == 0.15

    def test_partial_squashing(self):
        merged = merge_config(ClassifierConfig(), {"squashing": {"slope": 10.0}})
        assert merged.squashing.slope == 10.0
        assert merged.squashing.cap == 0.97

    def test_mode_alias_in_mapping(self):
        merged = merge_config(ClassifierConfig(), {"mode": "rules_only"})
        assert merged.mode is ClassifierMode.RULES

    def test_full_config_replaces(self):
        replacement = ClassifierConfig(threshold=0.1)
        assert merge_config(ClassifierConfig(), replacement) is replacement

    def test_invalid_value(self):
        with pytest.raises(ConfigurationError):
            merge_config(ClassifierConfig(), {"threshold": "high"})

    def test_base_untouched(self):
        base = ClassifierConfig()
        merge_config(base, {"threshold": 0.2})
        assert base.threshold == 0.65


class TestRuntimeConfig:
    def test_set_config_merges(self):
        cfg = set_config({"threshold": 0.5})
        assert cfg.threshold == 0.5
        assert get_config().threshold == 0.5
        assert get_config().mode is ClassifierMode.LOOKUP

    def test_set_mode(self):
        set_mode("rules")
        assert get_config().mode is ClassifierMode.RULES

    def test_set_mode_unknown(self):
        with pytest.raises(ConfigurationError):
            set_mode("bogus")
        assert get_config().mode is ClassifierMode.LOOKUP

    def test_reset(self):
        set_config({"threshold": 0.1, "mode": "rules"})
        cfg = reset_config()
        assert cfg == ClassifierConfig()

    def test_scoped_config_restores(self):
        with scoped_config({"mode": "rules"}) as cfg:
            assert cfg.mode is ClassifierMode.RULES
            assert get_config().mode is ClassifierMode.RULES
        assert get_config().mode is ClassifierMode.LOOKUP

    def test_scoped_config_restores_on_error(self):
        with pytest.raises(RuntimeError):
            with scoped_config({"threshold": 0.0}):
                raise RuntimeError("boom")
        assert get_config().threshold == 0.65


class TestConfigImmutability:
    def test_weights_read_only(self):
        with pytest.raises(TypeError):
            get_config().evidence_weights["nasal_final"] = 0.0
        assert get_config().evidence_weights["nasal_final"] == 0.3

    def test_classification_unaffected_by_mutation_attempt(self):
        before = classify_blocking("sad", "kta", "rules")
        with pytest.raises(TypeError):
            get_config().evidence_weights["monosyllabic"] = 5.0
        assert classify_blocking("sad", "kta", "rules") == before

    def test_scoped_weights_read_only(self):
        with scoped_config(None) as cfg:
            with pytest.raises(TypeError):
                cfg.evidence_weights["monosyllabic"] = 5.0
        assert get_config().evidence_weights["monosyllabic"] == 0.1

    def test_scoped_weight_change_restored(self):
        with scoped_config({"evidence_weights": {"monosyllabic": 5.0}}) as cfg:
            assert cfg.evidence_weights["monosyllabic"] == 5.0
        assert get_config().evidence_weights["monosyllabic"] == 0.1

    def test_defaults_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_EVIDENCE_WEIGHTS["kit_affix"] = 1.0

    def test_explicit_weights_frozen(self):
        cfg = ClassifierConfig(evidence_weights={"nasal_final": 0.3})
        with pytest.raises(TypeError):
            cfg.evidence_weights["nasal_final"] = 1.0

    def test_dump_is_plain_dict(self):
        dumped = ClassifierConfig().model_dump()
        assert type(dumped["evidence_weights"]) is dict
        dumped["evidence_weights"]["nasal_final"] = 9.0
        assert get_config().evidence_weights["nasal_final"] == 0.3


class TestLoadConfig:
    def test_load_test_config(self, config_path: Path):
        cfg = load_config(config_path)
        assert isinstance(cfg, AppConfig)
        assert cfg.log_level == "DEBUG"
        assert cfg.classifier.mode is ClassifierMode.RULES
        assert cfg.classifier.threshold == 0.55
        assert cfg.classifier.evidence_weights["nasal_final"] == 0.4
        assert cfg.classifier.squashing.slope == 8.0
        assert cfg.classifier.squashing.midpoint == 0.65
        assert cfg.classifier.history_size == 10

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        cfg = load_config(path)
        assert cfg.classifier == ClassifierConfig()

    def test_invalid_file(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text("classifier:\n  threshold: high\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_config(path)
