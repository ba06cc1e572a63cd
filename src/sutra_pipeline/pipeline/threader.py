"""Rule application over immutable analysis states.

``apply_rule`` runs one rule function and returns a new ``AnalysisState``:
facts and definitions are shallow-merged (new keys win), the rule's
diagnostic replaces any previous one under the same rule id (a rule that
returns none clears it), and exactly
one history entry is appended. Rule exceptions are not caught: the new
state is only built after the rule has returned.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from sutra_pipeline.errors import InvalidInputError
from sutra_pipeline.phonology.tokenizer import tokenize
from sutra_pipeline.pipeline.state import AnalysisState, HistoryEntry, RuleOutcome

logger = logging.getLogger(__name__)


@runtime_checkable
class RuleFunction(Protocol):
    """A side-effect-free collaborator: reads the state, returns facts."""

    def __call__(
        self, state: AnalysisState, *args: Any, **kwargs: Any
    ) -> RuleOutcome | Mapping[str, Any]: ...


def rule(rule_id: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Tag a rule function with the id used in history and diagnostics."""

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        func.rule_id = rule_id  # type: ignore[attr-defined]
        return func

    return decorator


def rule_id_of(rule_fn: Callable[..., Any]) -> str:
    return getattr(rule_fn, "rule_id", None) or getattr(rule_fn, "__name__", repr(rule_fn))


def create_state(surface: str, meta: Mapping[str, Any] | None = None) -> AnalysisState:
    """Fresh state for ``surface`` with its phoneme tokens and no history."""
    text = surface if isinstance(surface, str) else ""
    stream = tokenize(text)
    merged_meta = {"script": stream.script.value}
    merged_meta.update(meta or {})
    return AnalysisState(surface=text, tokens=stream, meta=merged_meta)


def _as_outcome(output: RuleOutcome | Mapping[str, Any] | None) -> RuleOutcome:
    if output is None:
        return RuleOutcome()
    if isinstance(output, RuleOutcome):
        return output
    if isinstance(output, Mapping):
        return RuleOutcome(facts=output)
    raise InvalidInputError(
        f"Rule returned {type(output).__name__}; expected RuleOutcome or a mapping"
    )


def _changed_keys(old: Mapping[str, Any], new: Mapping[str, Any]) -> list[str]:
    return [k for k, v in new.items() if k not in old or old[k] != v]


def apply_rule(
    state: AnalysisState,
    rule_fn: RuleFunction,
    *args: Any,
    rule_id: str | None = None,
    **kwargs: Any,
) -> AnalysisState:
    """Apply ``rule_fn(state, *args, **kwargs)`` and return the derived state."""
    if not isinstance(rule_fn, RuleFunction):
        raise InvalidInputError(f"Rule must be callable, got {type(rule_fn).__name__}")
    rid = rule_id or rule_id_of(rule_fn)

    outcome = _as_outcome(rule_fn(state, *args, **kwargs))

    changed_facts = _changed_keys(state.facts, outcome.facts)
    changed_defs = _changed_keys(state.definitions, outcome.definitions)
    facts = {**state.facts, **outcome.facts}
    definitions = {**state.definitions, **outcome.definitions}
    diagnostics = dict(state.diagnostics)
    if outcome.diagnostic is None:
        diagnostics.pop(rid, None)
    else:
        diagnostics[rid] = outcome.diagnostic

    notes = "changed: " + (", ".join(changed_facts + changed_defs) or "none")
    if outcome.notes:
        notes = f"{notes}; {outcome.notes}"
    entry = HistoryEntry(
        rule_id=rid,
        input=state.surface,
        output=", ".join(f"{k}={outcome.facts[k]}" for k in changed_facts),
        notes=notes,
    )
    logger.debug("Applied %s to %r: %s", rid, state.surface, notes)
    return AnalysisState(
        surface=state.surface,
        tokens=state.tokens,
        history=state.history + (entry,),
        facts=facts,
        definitions=definitions,
        diagnostics=diagnostics,
        meta=state.meta,
    )


@dataclass(frozen=True)
class RuleInvocation:
    """A rule plus the extra arguments it is called with."""

    rule_fn: Callable[..., Any]
    args: tuple[Any, ...] = ()
    kwargs: Mapping[str, Any] = field(default_factory=dict)
    rule_id: str | None = None

    @property
    def id(self) -> str:
        return self.rule_id or rule_id_of(self.rule_fn)


def run_rules(
    state: AnalysisState,
    invocations: Iterable[RuleInvocation | Callable[..., Any]],
) -> AnalysisState:
    """Left fold of ``apply_rule`` over ``invocations`` in the given order."""
    for inv in invocations:
        if not isinstance(inv, RuleInvocation):
            inv = RuleInvocation(inv)
        state = apply_rule(state, inv.rule_fn, *inv.args, rule_id=inv.rule_id, **inv.kwargs)
    return state
