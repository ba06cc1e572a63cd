"""Phonological feature matrix and per-form profiles.

Tokens from either script are mapped to IAST-like segments (Devanagari
consonants receive their inherent ``a`` unless a virama or vowel sign
follows), then summarised as a ``FormProfile``: syllable count, CV shape,
and the class of the initial and final segment. Evidence signals for the
blocking classifier are computed from these profiles only.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from typing import Any

from sutra_pipeline.phonology.script import ScriptTag
from sutra_pipeline.phonology.tokenizer import (
    DEVANAGARI_NUKTA,
    DEVANAGARI_VIRAMA,
    PhonemeStream,
    tokenize,
)

# place / manner / voice / aspiration for every consonant segment
CONSONANT_FEATURES: dict[str, dict[str, str]] = {
    # velar
    "k": {"place": "velar", "manner": "stop", "voice": "-", "aspiration": "-"},
    "kh": {"place": "velar", "manner": "stop", "voice": "-", "aspiration": "+"},
    "g": {"place": "velar", "manner": "stop", "voice": "+", "aspiration": "-"},
    "gh": {"place": "velar", "manner": "stop", "voice": "+", "aspiration": "+"},
    "ṅ": {"place": "velar", "manner": "nasal", "voice": "+", "aspiration": "-"},
    # palatal
    "c": {"place": "palatal", "manner": "stop", "voice": "-", "aspiration": "-"},
    "ch": {"place": "palatal", "manner": "stop", "voice": "-", "aspiration": "+"},
    "j": {"place": "palatal", "manner": "stop", "voice": "+", "aspiration": "-"},
    "jh": {"place": "palatal", "manner": "stop", "voice": "+", "aspiration": "+"},
    "ñ": {"place": "palatal", "manner": "nasal", "voice": "+", "aspiration": "-"},
    # retroflex
    "ṭ": {"place": "retroflex", "manner": "stop", "voice": "-", "aspiration": "-"},
    "ṭh": {"place": "retroflex", "manner": "stop", "voice": "-", "aspiration": "+"},
    "ḍ": {"place": "retroflex", "manner": "stop", "voice": "+", "aspiration": "-"},
    "ḍh": {"place": "retroflex", "manner": "stop", "voice": "+", "aspiration": "+"},
    "ṇ": {"place": "retroflex", "manner": "nasal", "voice": "+", "aspiration": "-"},
    # dental
    "t": {"place": "dental", "manner": "stop", "voice": "-", "aspiration": "-"},
    "th": {"place": "dental", "manner": "stop", "voice": "-", "aspiration": "+"},
    "d": {"place": "dental", "manner": "stop", "voice": "+", "aspiration": "-"},
    "dh": {"place": "dental", "manner": "stop", "voice": "+", "aspiration": "+"},
    "n": {"place": "dental", "manner": "nasal", "voice": "+", "aspiration": "-"},
    # labial
    "p": {"place": "labial", "manner": "stop", "voice": "-", "aspiration": "-"},
    "ph": {"place": "labial", "manner": "stop", "voice": "-", "aspiration": "+"},
    "b": {"place": "labial", "manner": "stop", "voice": "+", "aspiration": "-"},
    "bh": {"place": "labial", "manner": "stop", "voice": "+", "aspiration": "+"},
    "m": {"place": "labial", "manner": "nasal", "voice": "+", "aspiration": "-"},
    # sonorants
    "y": {"place": "palatal", "manner": "semivowel", "voice": "+", "aspiration": "-"},
    "v": {"place": "labial", "manner": "semivowel", "voice": "+", "aspiration": "-"},
    "r": {"place": "retroflex", "manner": "liquid", "voice": "+", "aspiration": "-"},
    "l": {"place": "dental", "manner": "liquid", "voice": "+", "aspiration": "-"},
    "ḻ": {"place": "retroflex", "manner": "liquid", "voice": "+", "aspiration": "-"},
    # sibilants and h
    "ś": {"place": "palatal", "manner": "fricative", "voice": "-", "aspiration": "-"},
    "ṣ": {"place": "retroflex", "manner": "fricative", "voice": "-", "aspiration": "-"},
    "s": {"place": "dental", "manner": "fricative", "voice": "-", "aspiration": "-"},
    "h": {"place": "glottal", "manner": "fricative", "voice": "+", "aspiration": "-"},
    # anusvara / visarga
    "ṃ": {"place": "nasal", "manner": "nasal", "voice": "+", "aspiration": "-"},
    "ḥ": {"place": "glottal", "manner": "fricative", "voice": "-", "aspiration": "-"},
}

VOWELS: frozenset[str] = frozenset(
    {"a", "ā", "i", "ī", "u", "ū", "ṛ", "ṝ", "ḷ", "ḹ", "e", "ai", "o", "au"}
)
CENTRAL_VOWELS: frozenset[str] = frozenset({"a", "ā", "ṛ", "ṝ"})

# variant IAST / ISO 15919 spellings folded onto one segment
_IAST_EQUIVALENTS: dict[str, str] = {
    "r\u0325": "ṛ",
    "r\u0325\u0304": "ṝ",
    "l\u0325": "ḷ",
    "l\u0325\u0304": "ḹ",
    "ṁ": "ṃ",
}

DEVANAGARI_TO_IAST_CONSONANTS: dict[str, str] = {
    "क": "k", "ख": "kh", "ग": "g", "घ": "gh", "ङ": "ṅ",
    "च": "c", "छ": "ch", "ज": "j", "झ": "jh", "ञ": "ñ",
    "ट": "ṭ", "ठ": "ṭh", "ड": "ḍ", "ढ": "ḍh", "ण": "ṇ",
    "त": "t", "थ": "th", "द": "d", "ध": "dh", "न": "n",
    "प": "p", "फ": "ph", "ब": "b", "भ": "bh", "म": "m",
    "य": "y", "र": "r", "ल": "l", "व": "v",
    "श": "ś", "ष": "ṣ", "स": "s", "ह": "h", "ळ": "ḻ",
}
DEVANAGARI_TO_IAST_VOWELS: dict[str, str] = {
    "अ": "a", "आ": "ā", "इ": "i", "ई": "ī", "उ": "u", "ऊ": "ū",
    "ऋ": "ṛ", "ॠ": "ṝ", "ऌ": "ḷ", "ॡ": "ḹ",
    "ए": "e", "ऐ": "ai", "ओ": "o", "औ": "au",
}
DEVANAGARI_TO_IAST_SIGNS: dict[str, str] = {
    "ा": "ā", "ि": "i", "ी": "ī", "ु": "u", "ू": "ū",
    "ृ": "ṛ", "ॄ": "ṝ", "ॢ": "ḷ", "ॣ": "ḹ",
    "े": "e", "ै": "ai", "ो": "o", "ौ": "au",
}
DEVANAGARI_TO_IAST_MARKS: dict[str, str] = {
    "ं": "ṃ", "ँ": "ṃ", "ः": "ḥ",
}

_CVC_RE = re.compile(r"C+VC")


def segment_class(segment: str) -> str:
    """Broad class of one IAST segment.

    One of ``vowel``, ``stop``, ``nasal``, ``semivowel``, ``liquid``,
    ``fricative`` or ``other``.
    """
    if segment in VOWELS:
        return "vowel"
    features = CONSONANT_FEATURES.get(segment)
    if features is None:
        return "other"
    return features["manner"]


def _iast_segment(token: str) -> str | None:
    token = _IAST_EQUIVALENTS.get(token, token)
    token = unicodedata.normalize("NFC", token)
    token = _IAST_EQUIVALENTS.get(token, token)
    if token in VOWELS or token in CONSONANT_FEATURES:
        return token
    if token.isalpha():
        return token
    return None


def to_segments(stream: PhonemeStream) -> tuple[str, ...]:
    """Map a token stream onto IAST segments.

    Whitespace, punctuation, digits and the avagraha produce no segment.
    Unknown letters are passed through unchanged and classify as ``other``.
    """
    segments: list[str] = []
    tokens = stream.tokens
    i = 0
    while i < len(tokens):
        tok = tokens[i]
        i += 1
        base = tok[:-1] if tok.endswith(DEVANAGARI_NUKTA) and len(tok) > 1 else tok
        if base in DEVANAGARI_TO_IAST_CONSONANTS:
            segments.append(DEVANAGARI_TO_IAST_CONSONANTS[base])
            nxt = tokens[i] if i < len(tokens) else ""
            if nxt == DEVANAGARI_VIRAMA:
                i += 1
            elif nxt in DEVANAGARI_TO_IAST_SIGNS:
                segments.append(DEVANAGARI_TO_IAST_SIGNS[nxt])
                i += 1
            else:
                segments.append("a")
        elif tok in DEVANAGARI_TO_IAST_VOWELS:
            segments.append(DEVANAGARI_TO_IAST_VOWELS[tok])
        elif tok in DEVANAGARI_TO_IAST_SIGNS:
            # stray sign without a consonant
            segments.append(DEVANAGARI_TO_IAST_SIGNS[tok])
        elif tok in DEVANAGARI_TO_IAST_MARKS:
            segments.append(DEVANAGARI_TO_IAST_MARKS[tok])
        elif tok == DEVANAGARI_VIRAMA:
            continue
        else:
            seg = _iast_segment(tok)
            if seg is not None:
                segments.append(seg)
    return tuple(segments)


@dataclass(frozen=True)
class FormProfile:
    """Phonological summary of a root or affix."""

    text: str
    script: ScriptTag
    segments: tuple[str, ...]
    shape: str
    syllable_count: int
    initial_class: str
    final_class: str

    @property
    def key(self) -> str:
        """IAST spelling used for table lookups."""
        return "".join(self.segments)

    @property
    def is_valid(self) -> bool:
        return bool(self.segments)

    @property
    def initial(self) -> str:
        return self.segments[0] if self.segments else ""

    @property
    def final(self) -> str:
        return self.segments[-1] if self.segments else ""

    @property
    def vowels(self) -> tuple[str, ...]:
        return tuple(s for s in self.segments if s in VOWELS)

    @property
    def is_monosyllabic(self) -> bool:
        return self.syllable_count == 1

    @property
    def is_canonical_cvc(self) -> bool:
        """Consonant onset (possibly a cluster), one vowel, one coda consonant."""
        return _CVC_RE.fullmatch(self.shape) is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "script": self.script.value,
            "segments": list(self.segments),
            "key": self.key,
            "shape": self.shape,
            "syllable_count": self.syllable_count,
            "initial_class": self.initial_class,
            "final_class": self.final_class,
        }


def _shape_of(segments: tuple[str, ...]) -> str:
    out = []
    for seg in segments:
        if seg in VOWELS:
            out.append("V")
        elif seg in CONSONANT_FEATURES:
            out.append("C")
        else:
            out.append("X")
    return "".join(out)


def profile_form(text: object) -> FormProfile:
    """Build a ``FormProfile``; malformed input yields an empty profile."""
    if not isinstance(text, str) or not text.strip():
        return FormProfile(
            text=text if isinstance(text, str) else "",
            script=ScriptTag.UNKNOWN,
            segments=(),
            shape="",
            syllable_count=0,
            initial_class="none",
            final_class="none",
        )
    cleaned = text.strip().lower()
    stream = tokenize(cleaned)
    segments = to_segments(stream)
    return FormProfile(
        text=cleaned,
        script=stream.script,
        segments=segments,
        shape=_shape_of(segments),
        syllable_count=sum(1 for s in segments if s in VOWELS),
        initial_class=segment_class(segments[0]) if segments else "none",
        final_class=segment_class(segments[-1]) if segments else "none",
    )


def syllable_count(text: object) -> int:
    return profile_form(text).syllable_count
