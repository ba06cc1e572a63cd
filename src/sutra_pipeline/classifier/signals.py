"""Evidence signals for dhātu-lopa.

Each signal is a pure predicate over the root and affix profiles. Signals
are evaluated in registry order and never see each other's results; the
scoring stage decides how much each one counts.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from sutra_pipeline.classifier.affixes import analyze_affix, is_kit_like
from sutra_pipeline.phonology.features import CENTRAL_VOWELS, FormProfile


@dataclass(frozen=True)
class EvidenceSignal:
    name: str
    description: str
    test: Callable[[FormProfile, FormProfile], bool]

    def evaluate(self, root: FormProfile, affix: FormProfile) -> bool:
        if not root.is_valid or not affix.is_valid:
            return False
        return bool(self.test(root, affix))


def _nasal_final(root: FormProfile, affix: FormProfile) -> bool:
    return root.final_class == "nasal"


def _monosyllabic(root: FormProfile, affix: FormProfile) -> bool:
    return root.is_monosyllabic


def _canonical_cvc(root: FormProfile, affix: FormProfile) -> bool:
    return root.is_canonical_cvc


def _ardhadhatuka_affix(root: FormProfile, affix: FormProfile) -> bool:
    return analyze_affix(affix).is_ardhadhatuka


def _kit_affix(root: FormProfile, affix: FormProfile) -> bool:
    return is_kit_like(affix)


def _consonant_initial_affix(root: FormProfile, affix: FormProfile) -> bool:
    return affix.initial_class not in ("vowel", "other", "none")


def _nasal_stop_junction(root: FormProfile, affix: FormProfile) -> bool:
    return root.final_class == "nasal" and affix.initial_class == "stop"


def _central_vowel_root(root: FormProfile, affix: FormProfile) -> bool:
    return any(v in CENTRAL_VOWELS for v in root.vowels)


SIGNALS: tuple[EvidenceSignal, ...] = (
    EvidenceSignal("nasal_final", "Root ends in a nasal", _nasal_final),
    EvidenceSignal("monosyllabic", "Root has exactly one syllable", _monosyllabic),
    EvidenceSignal("canonical_cvc", "Root has canonical C(C)VC shape", _canonical_cvc),
    EvidenceSignal("ardhadhatuka_affix", "Affix is ārdhadhātuka", _ardhadhatuka_affix),
    EvidenceSignal("kit_affix", "Affix is kit (or ya in kit environment)", _kit_affix),
    EvidenceSignal(
        "consonant_initial_affix", "Affix begins with a consonant", _consonant_initial_affix
    ),
    EvidenceSignal(
        "nasal_stop_junction",
        "Root-final nasal meets an affix-initial stop",
        _nasal_stop_junction,
    ),
    EvidenceSignal(
        "central_vowel_root", "Root vowel is a central vowel (a, ā, ṛ, ṝ)", _central_vowel_root
    ),
)

SIGNALS_BY_NAME: dict[str, EvidenceSignal] = {s.name: s for s in SIGNALS}


def evaluate_signals(
    root: FormProfile,
    affix: FormProfile,
    names: Iterable[str] | None = None,
) -> list[tuple[str, bool]]:
    """Evaluate signals in registry order.

    ``names`` restricts evaluation to those signals; names with no
    registered signal are skipped.
    """
    wanted = None if names is None else set(names)
    return [
        (signal.name, signal.evaluate(root, affix))
        for signal in SIGNALS
        if wanted is None or signal.name in wanted
    ]
