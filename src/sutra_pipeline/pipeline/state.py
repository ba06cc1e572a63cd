"""Analysis state threaded through rule applications."""

from __future__ import annotations

import datetime
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from sutra_pipeline.phonology.script import ScriptTag
from sutra_pipeline.phonology.tokenizer import PhonemeStream

FactValue = bool | str | int | float


def _utc_now() -> str:
    return datetime.datetime.now(datetime.UTC).isoformat()


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    if isinstance(value, set):
        return frozenset(value)
    return value


def frozen_mapping(data: Mapping[str, Any] | None = None) -> Mapping[str, Any]:
    """Read-only deep copy of ``data``.

    Nested mappings become read-only views and lists become tuples, so no
    value reachable from the result can be changed in place.
    """
    return _freeze(dict(data or {}))


class DiagnosticKind:
    """Tags for ``RuleDiagnostic.kind``."""

    DECISION = "decision"   # payload is Decision.to_dict()
    FACTS = "facts"         # payload summarises the facts a rule derived
    NOTE = "note"           # payload is {"message": str}


@dataclass(frozen=True)
class RuleDiagnostic:
    """Per-rule diagnostic, tagged so consumers can decode the payload."""

    kind: str
    payload: Mapping[str, Any] = field(default_factory=frozen_mapping)

    def __post_init__(self) -> None:
        object.__setattr__(self, "payload", frozen_mapping(self.payload))

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "payload": _plain(self.payload)}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> RuleDiagnostic:
        return cls(kind=d["kind"], payload=d.get("payload", {}))


@dataclass(frozen=True)
class HistoryEntry:
    """One rule application in the analysis history."""

    rule_id: str
    input: str
    output: str = ""
    notes: str = ""
    timestamp: str = field(default_factory=_utc_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "rule_id": self.rule_id,
            "timestamp": self.timestamp,
            "input": self.input,
            "output": self.output,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> HistoryEntry:
        return cls(
            rule_id=d["rule_id"],
            input=d.get("input", ""),
            output=d.get("output", ""),
            notes=d.get("notes", ""),
            timestamp=d.get("timestamp", ""),
        )


@dataclass(frozen=True)
class RuleOutcome:
    """What a rule function derives; merged into the state by the threader."""

    facts: Mapping[str, FactValue] = field(default_factory=frozen_mapping)
    definitions: Mapping[str, Any] = field(default_factory=frozen_mapping)
    diagnostic: RuleDiagnostic | None = None
    notes: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "facts", frozen_mapping(self.facts))
        object.__setattr__(self, "definitions", frozen_mapping(self.definitions))


@dataclass(frozen=True)
class AnalysisState:
    """Immutable analysis of one surface form.

    Pipeline operations never modify a state; they return a new one. The
    mappings are read-only views over private copies.
    """

    surface: str
    tokens: PhonemeStream
    history: tuple[HistoryEntry, ...] = ()
    facts: Mapping[str, FactValue] = field(default_factory=frozen_mapping)
    definitions: Mapping[str, Any] = field(default_factory=frozen_mapping)
    diagnostics: Mapping[str, RuleDiagnostic] = field(default_factory=frozen_mapping)
    meta: Mapping[str, Any] = field(default_factory=frozen_mapping)

    def __post_init__(self) -> None:
        object.__setattr__(self, "history", tuple(self.history))
        for name in ("facts", "definitions", "diagnostics", "meta"):
            object.__setattr__(self, name, frozen_mapping(getattr(self, name)))

    @property
    def script(self) -> ScriptTag:
        return self.tokens.script

    @property
    def rule_ids(self) -> tuple[str, ...]:
        return tuple(entry.rule_id for entry in self.history)

    def fact(self, key: str, default: Any = None) -> Any:
        return self.facts.get(key, default)

    def to_dict(self) -> dict[str, Any]:
        return {
            "surface": self.surface,
            "tokens": self.tokens.to_dict(),
            "history": [h.to_dict() for h in self.history],
            "facts": dict(self.facts),
            "definitions": _plain(self.definitions),
            "diagnostics": {k: v.to_dict() for k, v in self.diagnostics.items()},
            "meta": _plain(self.meta),
        }


def _plain(value: Any) -> Any:
    """Plain dict/list copy of a frozen value, for JSON output."""
    if isinstance(value, Mapping):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (frozenset, set)):
        return sorted(_plain(v) for v in value)
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value
