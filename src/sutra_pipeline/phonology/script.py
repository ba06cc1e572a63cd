"""Script detection for IAST and Devanagari input."""

from __future__ import annotations

import unicodedata
from enum import Enum

from sutra_pipeline.errors import ConfigurationError


class ScriptTag(str, Enum):
    IAST = "IAST"                # Latin transliteration with diacritics
    DEVANAGARI = "Devanagari"    # native script
    MIXED = "Mixed"
    UNKNOWN = "Unknown"

    @classmethod
    def _missing_(cls, value: object) -> ScriptTag | None:
        if isinstance(value, str):
            key = value.strip().lower()
            for tag in cls:
                if tag.value.lower() == key:
                    return tag
        return None


def coerce_script(script: ScriptTag | str) -> ScriptTag:
    """Resolve a script name, ignoring case; unknown names raise ConfigurationError."""
    if isinstance(script, ScriptTag):
        return script
    try:
        return ScriptTag(script)
    except ValueError as exc:
        raise ConfigurationError(f"Unknown script: {script!r}") from exc


# Devanagari, Devanagari Extended, Vedic Extensions
_DEVANAGARI_RANGES: tuple[tuple[int, int], ...] = (
    (0x0900, 0x097F),
    (0xA8E0, 0xA8FF),
    (0x1CD0, 0x1CFF),
)

# Combining diacritics used by decomposed IAST / ISO 15919 input
_LATIN_COMBINING = (0x0300, 0x036F)


def is_devanagari_char(ch: str) -> bool:
    cp = ord(ch)
    return any(lo <= cp <= hi for lo, hi in _DEVANAGARI_RANGES)


def is_latin_char(ch: str) -> bool:
    """True for Latin letters (plain or precomposed with diacritics) and
    combining diacritical marks."""
    cp = ord(ch)
    if _LATIN_COMBINING[0] <= cp <= _LATIN_COMBINING[1]:
        return True
    if not ch.isalpha():
        return False
    return unicodedata.name(ch, "").startswith("LATIN")


def is_neutral_char(ch: str) -> bool:
    """Whitespace, digits, punctuation and symbols belong to no script."""
    if ch.isspace():
        return True
    category = unicodedata.category(ch)
    return category[0] in ("P", "S", "Z") or (category == "Nd" and ch.isascii())


def classify_script(text: object) -> ScriptTag:
    """Return the script of ``text``.

    Empty or non-string input yields ``UNKNOWN``; any letter outside Latin
    and Devanagari also yields ``UNKNOWN``.
    """
    if not isinstance(text, str) or not text:
        return ScriptTag.UNKNOWN

    has_devanagari = False
    has_latin = False
    for ch in text:
        if is_devanagari_char(ch):
            has_devanagari = True
        elif is_latin_char(ch):
            has_latin = True
        elif not is_neutral_char(ch):
            return ScriptTag.UNKNOWN

    if has_devanagari and has_latin:
        return ScriptTag.MIXED
    if has_devanagari:
        return ScriptTag.DEVANAGARI
    if has_latin:
        return ScriptTag.IAST
    return ScriptTag.UNKNOWN
