"""Tests for named rule presets."""

from __future__ import annotations

import pytest

from sutra_pipeline.pipeline.presets import (
    PRESETS,
    preset_rule_ids,
    run_complete_preset,
    run_morphological_preset,
    run_phonological_preset,
)
from sutra_pipeline.pipeline.threader import create_state

PHONOLOGICAL_IDS = ["1.1.1:vrddhi", "1.1.2:guna", "1.1.3:ik", "phonology:syllables"]
MORPHOLOGICAL_IDS = ["3.4.113:affix-class", "it-markers", "1.1.4:dhatu-lopa", "1.1.5:kniti"]


class TestRegistry:
    def test_names(self):
        assert set(PRESETS) == {"phonological", "morphological", "complete"}

    def test_rule_ids(self):
        assert preset_rule_ids("phonological") == PHONOLOGICAL_IDS
        assert preset_rule_ids("morphological") == MORPHOLOGICAL_IDS
        assert preset_rule_ids("complete") == PHONOLOGICAL_IDS + MORPHOLOGICAL_IDS

    def test_unknown(self):
        with pytest.raises(KeyError):
            preset_rule_ids("syntax")


class TestPhonologicalPreset:
    def test_history(self):
        state = run_phonological_preset(create_state("kaurava"))
        assert list(state.rule_ids) == PHONOLOGICAL_IDS
        assert state.fact("vrddhi.present") is True
        assert state.fact("phonology.syllables") == 3


class TestMorphologicalPreset:
    def test_gam_ya_lookup(self, gam_state):
        state = run_morphological_preset(gam_state, "gam", "ya")
        assert list(state.rule_ids) == MORPHOLOGICAL_IDS
        assert state.fact("blocking.outcome") is True
        assert state.fact("blocking.confidence") == 0.9
        assert state.fact("blocking.stage") == "inclusion"
        assert state.fact("guna.blocked") is True

    def test_sad_kta_blocked_by_kit(self):
        state = run_morphological_preset(create_state("sad"), "sad", "kta")
        assert state.fact("blocking.by_1_1_4") is False
        assert state.fact("blocking.by_1_1_5") is True
        assert state.fact("guna.blocked") is True

    def test_config_passed_through(self, gam_state):
        state = run_morphological_preset(
            gam_state, "gam", "ya", mode="rules", config={"threshold": 1.5}
        )
        assert state.fact("blocking.outcome") is False
        assert state.fact("blocking.stage") == "scoring"


class TestCompletePreset:
    def test_history_in_order(self, gam_state):
        state = run_complete_preset(gam_state, "gam", "ya", "guna", mode="rules")
        assert list(state.rule_ids) == PHONOLOGICAL_IDS + MORPHOLOGICAL_IDS
        assert state.fact("blocking.outcome") is True
        assert state.fact("blocking.confidence") > 0.8
        assert state.fact("guna.present") is True

    def test_input_untouched(self, gam_state):
        run_complete_preset(gam_state, "gam", "ya")
        assert gam_state.history == ()
        assert dict(gam_state.facts) == {}
