"""Phonological designation rules (saṃjñā sutras 1.1.1 to 1.1.3).

Each rule reads the state's tokens and returns facts plus the definition
it establishes. None of them touch the state they receive.
"""

from __future__ import annotations

from sutra_pipeline.phonology.features import VOWELS, profile_form, to_segments
from sutra_pipeline.pipeline.state import AnalysisState, DiagnosticKind, RuleDiagnostic, RuleOutcome
from sutra_pipeline.pipeline.threader import rule

VRDDHI_VOWELS: tuple[str, ...] = ("ā", "ai", "au")
GUNA_VOWELS: tuple[str, ...] = ("a", "e", "o")
IK_VOWELS: tuple[str, ...] = ("i", "ī", "u", "ū", "ṛ", "ṝ", "ḷ", "ḹ")

GUNA_OF: dict[str, str] = {
    "i": "e", "ī": "e", "u": "o", "ū": "o",
    "ṛ": "ar", "ṝ": "ar", "ḷ": "al", "ḹ": "al",
}
VRDDHI_OF: dict[str, str] = {
    "i": "ai", "ī": "ai", "u": "au", "ū": "au",
    "ṛ": "ār", "ṝ": "ār", "ḷ": "āl", "ḹ": "āl",
}


def _vowel_segments(state: AnalysisState) -> list[str]:
    return [s for s in to_segments(state.tokens) if s in VOWELS]


def _designation(
    state: AnalysisState, name: str, members: tuple[str, ...]
) -> RuleOutcome:
    found = [v for v in _vowel_segments(state) if v in members]
    return RuleOutcome(
        facts={
            f"{name}.present": bool(found),
            f"{name}.count": len(found),
            f"{name}.members": " ".join(found),
        },
        definitions={name: members},
        diagnostic=RuleDiagnostic(
            DiagnosticKind.FACTS, {"designation": name, "found": list(found)}
        ),
    )


@rule("1.1.1:vrddhi")
def vrddhi_designation(state: AnalysisState) -> RuleOutcome:
    """vṛddhir ādaic: ā, ai, au are called vṛddhi."""
    return _designation(state, "vrddhi", VRDDHI_VOWELS)


@rule("1.1.2:guna")
def guna_designation(state: AnalysisState) -> RuleOutcome:
    """adeṅ guṇaḥ: a, e, o are called guṇa."""
    return _designation(state, "guna", GUNA_VOWELS)


@rule("1.1.3:ik")
def ik_vowels(state: AnalysisState) -> RuleOutcome:
    """iko guṇavṛddhī: guṇa and vṛddhi replace ik vowels.

    Also records the guṇa and vṛddhi substitutes of the last ik vowel, which
    is the one a following affix would strengthen.
    """
    outcome = _designation(state, "ik", IK_VOWELS)
    found = [v for v in _vowel_segments(state) if v in IK_VOWELS]
    facts = dict(outcome.facts)
    if found:
        facts["ik.guna_substitute"] = GUNA_OF[found[-1]]
        facts["ik.vrddhi_substitute"] = VRDDHI_OF[found[-1]]
    return RuleOutcome(
        facts=facts, definitions=outcome.definitions, diagnostic=outcome.diagnostic
    )


@rule("phonology:syllables")
def syllable_profile(state: AnalysisState) -> dict[str, object]:
    profile = profile_form(state.surface)
    return {
        "phonology.script": state.script.value,
        "phonology.token_count": len(state.tokens),
        "phonology.syllables": profile.syllable_count,
        "phonology.shape": profile.shape,
        "phonology.canonical_cvc": profile.is_canonical_cvc,
        "phonology.final_class": profile.final_class,
    }
