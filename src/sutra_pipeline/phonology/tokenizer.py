"""Script-adaptive phoneme tokenizer.

Segments IAST or Devanagari text into phoneme tokens by greedy
leftmost-longest matching against an ordered candidate table. Multi-character
phonemes (diphthongs, aspirated stops, nukta consonants, decomposed vowels)
are always tried before their single-character prefixes, so ``tha`` splits
as ``th + a`` and ``aindra`` starts with ``ai``.

Characters that match no candidate (punctuation, whitespace, digits,
uppercase letters) become single-character tokens, which keeps the
round-trip property: ``"".join(tokenize(s).tokens) == s`` for every ``s``.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from sutra_pipeline.phonology.script import ScriptTag, classify_script, coerce_script


class CandidateTable:
    """Ordered phoneme candidates for one script.

    Candidates are kept sorted by length, longest first (stable within a
    length), which is the ordering greedy matching relies on.
    """

    __slots__ = ("name", "_candidates", "_lengths", "_by_length")

    def __init__(self, name: str, candidates: Iterable[str]) -> None:
        self.name = name
        seen: set[str] = set()
        unique: list[str] = []
        for cand in candidates:
            if cand and cand not in seen:
                seen.add(cand)
                unique.append(cand)
        unique.sort(key=len, reverse=True)
        self._candidates: tuple[str, ...] = tuple(unique)
        grouped: dict[int, set[str]] = {}
        for cand in unique:
            grouped.setdefault(len(cand), set()).add(cand)
        self._by_length: dict[int, frozenset[str]] = {
            length: frozenset(group) for length, group in grouped.items()
        }
        self._lengths: tuple[int, ...] = tuple(sorted(self._by_length, reverse=True))

    @property
    def candidates(self) -> tuple[str, ...]:
        return self._candidates

    def __contains__(self, item: object) -> bool:
        return isinstance(item, str) and item in self._by_length.get(len(item), ())

    def __len__(self) -> int:
        return len(self._candidates)

    def match(self, text: str, pos: int) -> str | None:
        """Return the longest candidate found verbatim at ``text[pos:]``."""
        remaining = len(text) - pos
        for length in self._lengths:
            if length > remaining:
                continue
            piece = text[pos:pos + length]
            if piece in self._by_length[length]:
                return piece
        return None

    def merge(self, other: CandidateTable, name: str | None = None) -> CandidateTable:
        """Union of two tables; duplicates keep their first occurrence."""
        return CandidateTable(
            name or f"{self.name}+{other.name}",
            self._candidates + other._candidates,
        )

    def __repr__(self) -> str:
        return f"CandidateTable({self.name!r}, {len(self)} candidates)"


def _with_decomposed(phonemes: Iterable[str]) -> list[str]:
    """Add the NFD spelling of every precomposed phoneme.

    Input typed with combining diacritics (``a`` + U+0304) then still
    tokenizes as one phoneme instead of ``a`` plus a stray mark.
    """
    out: list[str] = []
    for p in phonemes:
        out.append(p)
        decomposed = unicodedata.normalize("NFD", p)
        if decomposed != p:
            out.append(decomposed)
    return out


IAST_PHONEMES: tuple[str, ...] = (
    # diphthongs
    "ai", "au",
    # aspirated stops
    "kh", "gh", "ch", "jh", "ṭh", "ḍh", "th", "dh", "ph", "bh",
    # ISO 15919 syllabic liquids
    "r\u0325\u0304", "l\u0325\u0304", "r\u0325", "l\u0325",
    # vowels
    "ā", "ī", "ū", "ṛ", "ṝ", "ḷ", "ḹ", "a", "i", "u", "e", "o",
    # consonants and nasal/visarga marks
    "ṅ", "ñ", "ṭ", "ḍ", "ṇ", "ś", "ṣ", "ḥ", "ṃ", "ṁ",
    "k", "g", "c", "j", "t", "d", "n", "p", "b", "m",
    "y", "r", "l", "v", "s", "h", "ḻ",
)

DEVANAGARI_VIRAMA = "\u094d"
DEVANAGARI_NUKTA = "\u093c"

DEVANAGARI_INDEPENDENT_VOWELS: tuple[str, ...] = (
    "अ", "आ", "इ", "ई", "उ", "ऊ", "ऋ", "ॠ", "ऌ", "ॡ", "ए", "ऐ", "ओ", "औ",
)
DEVANAGARI_VOWEL_SIGNS: tuple[str, ...] = (
    "ा", "ि", "ी", "ु", "ू", "ृ", "ॄ", "ॢ", "ॣ", "े", "ै", "ो", "ौ",
)
DEVANAGARI_CONSONANTS: tuple[str, ...] = (
    "क", "ख", "ग", "घ", "ङ",
    "च", "छ", "ज", "झ", "ञ",
    "ट", "ठ", "ड", "ढ", "ण",
    "त", "थ", "द", "ध", "न",
    "प", "फ", "ब", "भ", "म",
    "य", "र", "ल", "व", "श", "ष", "स", "ह", "ळ",
)
DEVANAGARI_MARKS: tuple[str, ...] = (
    DEVANAGARI_VIRAMA,
    "ं",  # anusvara
    "ः",  # visarga
    "ँ",  # candrabindu
    "ऽ",  # avagraha
)
# consonant + nukta, spelled with the combining nukta
DEVANAGARI_NUKTA_CONSONANTS: tuple[str, ...] = tuple(
    base + DEVANAGARI_NUKTA for base in ("क", "ख", "ग", "ज", "ड", "ढ", "फ", "य")
)

IAST_TABLE = CandidateTable("IAST", _with_decomposed(IAST_PHONEMES))
DEVANAGARI_TABLE = CandidateTable(
    "Devanagari",
    DEVANAGARI_NUKTA_CONSONANTS
    + DEVANAGARI_INDEPENDENT_VOWELS
    + DEVANAGARI_VOWEL_SIGNS
    + DEVANAGARI_CONSONANTS
    + DEVANAGARI_MARKS,
)
MIXED_TABLE = IAST_TABLE.merge(DEVANAGARI_TABLE, name="Mixed")

_TABLES: dict[ScriptTag, CandidateTable] = {
    ScriptTag.IAST: IAST_TABLE,
    ScriptTag.DEVANAGARI: DEVANAGARI_TABLE,
    ScriptTag.MIXED: MIXED_TABLE,
    ScriptTag.UNKNOWN: MIXED_TABLE,
}


def table_for(script: ScriptTag) -> CandidateTable:
    return _TABLES[script]


@dataclass(frozen=True)
class PhonemeStream:
    """Ordered, immutable phoneme tokens plus the script used to cut them."""

    tokens: tuple[str, ...]
    script: ScriptTag

    @property
    def text(self) -> str:
        return "".join(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[str]:
        return iter(self.tokens)

    def __getitem__(self, index: int) -> str:
        return self.tokens[index]

    def to_dict(self) -> dict[str, Any]:
        return {
            "tokens": list(self.tokens),
            "script": self.script.value,
            "count": len(self.tokens),
        }


def segment(text: str, table: CandidateTable) -> tuple[str, ...]:
    """Greedy segmentation of ``text`` against ``table``.

    The cursor advances by at least one character per step, so this always
    terminates in O(len(text)) steps.
    """
    tokens: list[str] = []
    pos = 0
    n = len(text)
    while pos < n:
        found = table.match(text, pos)
        if found is None:
            found = text[pos]
        tokens.append(found)
        pos += len(found)
    return tuple(tokens)


def tokenize(text: object, script: ScriptTag | str | None = None) -> PhonemeStream:
    """Split ``text`` into phoneme tokens.

    ``script`` overrides detection; otherwise the script is classified from
    the text itself. Non-string input gives an empty ``UNKNOWN`` stream; an
    unknown script name raises ``ConfigurationError``.
    """
    if not isinstance(text, str):
        return PhonemeStream(tokens=(), script=ScriptTag.UNKNOWN)
    tag = coerce_script(script) if script is not None else classify_script(text)
    return PhonemeStream(tokens=segment(text, table_for(tag)), script=tag)


def tokenize_many(texts: Iterable[object]) -> list[PhonemeStream]:
    return [tokenize(t) for t in texts]
