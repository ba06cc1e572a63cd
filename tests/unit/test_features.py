"""Tests for phonological profiles."""

from __future__ import annotations

from sutra_pipeline.phonology.features import (
    profile_form,
    segment_class,
    syllable_count,
    to_segments,
)
from sutra_pipeline.phonology.script import ScriptTag
from sutra_pipeline.phonology.tokenizer import tokenize


class TestSegmentClass:
    def test_vowels(self):
        assert segment_class("a") == "vowel"
        assert segment_class("au") == "vowel"

    def test_consonants(self):
        assert segment_class("g") == "stop"
        assert segment_class("m") == "nasal"
        assert segment_class("y") == "semivowel"
        assert segment_class("r") == "liquid"
        assert segment_class("ś") == "fricative"

    def test_other(self):
        assert segment_class("x") == "other"


class TestToSegments:
    def test_iast_passthrough(self):
        assert to_segments(tokenize("bhū")) == ("bh", "ū")

    def test_inherent_vowel(self):
        assert to_segments(tokenize("य")) == ("y", "a")

    def test_virama_suppresses_vowel(self):
        assert to_segments(tokenize("गम्")) == ("g", "a", "m")

    def test_vowel_sign(self):
        assert to_segments(tokenize("कृ")) == ("k", "ṛ")

    def test_decomposed_and_iso_spellings(self):
        assert to_segments(tokenize("ra\u0304ma")) == ("r", "ā", "m", "a")
        assert to_segments(tokenize("kr\u0325")) == ("k", "ṛ")

    def test_punctuation_dropped(self):
        assert to_segments(tokenize("gam, gam")) == ("g", "a", "m", "g", "a", "m")


class TestProfileForm:
    def test_gam(self):
        profile = profile_form("gam")
        assert profile.key == "gam"
        assert profile.shape == "CVC"
        assert profile.syllable_count == 1
        assert profile.final_class == "nasal"
        assert profile.initial_class == "stop"
        assert profile.is_monosyllabic
        assert profile.is_canonical_cvc

    def test_cluster_onset_is_canonical(self):
        assert profile_form("svap").is_canonical_cvc

    def test_open_syllable_not_canonical(self):
        assert not profile_form("bhū").is_canonical_cvc

    def test_devanagari_matches_iast(self):
        deva = profile_form("गम्")
        assert deva.script == ScriptTag.DEVANAGARI
        assert deva.key == profile_form("gam").key

    def test_normalises_case_and_space(self):
        assert profile_form("  Gam ").key == "gam"

    def test_invalid(self):
        for value in (None, "", "   ", 3):
            profile = profile_form(value)
            assert not profile.is_valid
            assert profile.initial_class == "none"

    def test_edge_classes(self):
        profile = profile_form("gam")
        assert profile.final_class == "nasal"
        assert profile.initial_class == "stop"

    def test_to_dict(self):
        d = profile_form("gam").to_dict()
        assert d["segments"] == ["g", "a", "m"]
        assert d["script"] == "IAST"

    def test_syllable_count(self):
        assert syllable_count("kaurava") == 3
        assert syllable_count("") == 0
