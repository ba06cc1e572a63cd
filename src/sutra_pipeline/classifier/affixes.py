"""Affix classes: sārvadhātuka / ārdhadhātuka membership and it-markers."""

from __future__ import annotations

from sutra_pipeline.classifier.models import AffixClassification
from sutra_pipeline.phonology.features import FormProfile, profile_form

# tiṅ endings, sārvadhātuka by 3.4.113
SARVADHATUKA_ENDINGS: frozenset[str] = frozenset({
    # parasmaipada present
    "ti", "tas", "anti", "si", "thas", "tha", "mi", "vas", "mas",
    # ātmanepada present
    "te", "āte", "ante", "se", "sāthe", "dhve", "e", "vahe", "mahe",
    # imperative
    "tu", "tām", "antu", "hi", "tam", "thi",
})

# kṛt and taddhita affixes, ārdhadhātuka by 3.4.114
ARDHADHATUKA_AFFIXES: frozenset[str] = frozenset({
    "ya", "tvā", "kta", "ktavat", "śa", "ka", "na", "ta", "tra", "man",
    "tavya", "anīya", "anya", "van", "in", "itra", "uka", "ghañ", "ṇvul", "tṛc",
    "tva", "īya",
})

KIT_AFFIXES: frozenset[str] = frozenset({
    "kta", "ktvā", "ktva", "kvip", "kvan", "ktavat", "ktin", "ktu",
    "kmat", "kvi", "kvarap", "kvasuc",
})
# ya behaves as kit in the gerund/absolutive environment
CONTEXTUAL_KIT_AFFIXES: frozenset[str] = frozenset({"ya"})
GIT_AFFIXES: frozenset[str] = frozenset({
    "gha", "ghañ", "ghan", "ghaṇ", "ghasi", "ghāsi", "ga",
})
NGIT_AFFIXES: frozenset[str] = frozenset({
    "ṅa", "ṅīp", "ṅīn", "ṅīṣ", "ṅau", "aṅ", "iṅ", "uṅ",
})


def _profile(affix: str | FormProfile) -> FormProfile:
    return affix if isinstance(affix, FormProfile) else profile_form(affix)


def analyze_affix(affix: str | FormProfile) -> AffixClassification:
    """Classify an affix as ārdhadhātuka, sārvadhātuka or unknown.

    Explicit lists win over the initial-segment heuristics; the ambiguous
    ``ta`` is only in the ārdhadhātuka list.
    """
    profile = _profile(affix)
    key = profile.key
    if not profile.is_valid:
        return AffixClassification(key, "unknown", 0.0, "Invalid affix input")
    if key in SARVADHATUKA_ENDINGS:
        return AffixClassification(
            key, "sarvadhatuka", 0.95, "Primary verbal ending (tiṅ), sārvadhātuka"
        )
    if key in ARDHADHATUKA_AFFIXES:
        return AffixClassification(
            key, "ardhadhatuka", 0.95, "Recognised kṛt or taddhita affix, ārdhadhātuka"
        )
    if profile.initial_class == "vowel":
        return AffixClassification(
            key, "sarvadhatuka", 0.9, "Vowel-initial affixes are typically sārvadhātuka"
        )
    if profile.initial_class not in ("other", "none"):
        return AffixClassification(
            key, "ardhadhatuka", 0.8, "Consonant-initial affixes are typically ārdhadhātuka"
        )
    return AffixClassification(
        key, "unknown", 0.0, "Affix pattern not recognised"
    )


def it_markers(affix: str | FormProfile) -> dict[str, bool]:
    """k/g/ṅ it-marker flags for an affix."""
    key = _profile(affix).key
    return {
        "kit": key in KIT_AFFIXES,
        "git": key in GIT_AFFIXES,
        "ngit": key in NGIT_AFFIXES,
    }


def is_kit_like(affix: str | FormProfile) -> bool:
    key = _profile(affix).key
    return key in KIT_AFFIXES or key in CONTEXTUAL_KIT_AFFIXES
