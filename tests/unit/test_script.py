"""Tests for script classification."""

from __future__ import annotations

import pytest

from sutra_pipeline.errors import ConfigurationError
from sutra_pipeline.phonology.script import (
    ScriptTag,
    classify_script,
    coerce_script,
    is_devanagari_char,
    is_latin_char,
    is_neutral_char,
)


class TestCharacterClasses:
    def test_devanagari(self):
        assert is_devanagari_char("क")
        assert is_devanagari_char("्")
        assert not is_devanagari_char("k")

    def test_latin(self):
        assert is_latin_char("k")
        assert is_latin_char("ṛ")
        assert is_latin_char("\u0304")
        assert not is_latin_char("क")
        assert not is_latin_char("5")

    def test_neutral(self):
        assert is_neutral_char(" ")
        assert is_neutral_char(",")
        assert is_neutral_char("7")
        assert not is_neutral_char("a")


class TestClassifyScript:
    def test_plain_iast(self):
        assert classify_script("gam") == ScriptTag.IAST

    def test_iast_with_diacritics(self):
        assert classify_script("kṛṣṇa") == ScriptTag.IAST

    def test_decomposed_iast(self):
        assert classify_script("ra\u0304ma") == ScriptTag.IAST

    def test_devanagari(self):
        assert classify_script("गम्") == ScriptTag.DEVANAGARI

    def test_mixed(self):
        assert classify_script("gam गम्") == ScriptTag.MIXED

    def test_empty(self):
        assert classify_script("") == ScriptTag.UNKNOWN

    def test_only_punctuation(self):
        assert classify_script("12 ,.;") == ScriptTag.UNKNOWN

    def test_foreign_letters(self):
        assert classify_script("Привет") == ScriptTag.UNKNOWN

    def test_foreign_letter_inside_iast(self):
        assert classify_script("gamα") == ScriptTag.UNKNOWN

    @pytest.mark.parametrize("value", [None, 42, b"gam", ["gam"]])
    def test_non_string(self, value):
        assert classify_script(value) == ScriptTag.UNKNOWN

    def test_tag_values(self):
        assert ScriptTag.DEVANAGARI.value == "Devanagari"
        assert ScriptTag("Mixed") is ScriptTag.MIXED


class TestCoerceScript:
    def test_tag_passes_through(self):
        assert coerce_script(ScriptTag.MIXED) is ScriptTag.MIXED

    def test_name_ignores_case(self):
        assert coerce_script("IAST") is ScriptTag.IAST
        assert coerce_script("mixed") is ScriptTag.MIXED

    def test_unknown_name(self):
        with pytest.raises(ConfigurationError):
            coerce_script("cyrillic")
