"""Single and batch blocking requests.

The request type is resolved once here; everything below works on a
plain ``BlockingRequest``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from sutra_pipeline.classifier.blocking import analyze_guna_vrddhi_block, resolve_config
from sutra_pipeline.classifier.models import BlockingAnalysis
from sutra_pipeline.config.schema import ClassifierConfig, ClassifierMode

logger = logging.getLogger(__name__)

ALLOWED_CONFIDENCE = 0.5


@dataclass(frozen=True)
class BlockingRequest:
    root: str
    affix: str
    operation: str = "guna"

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> BlockingRequest:
        return cls(root=d["root"], affix=d["affix"], operation=d.get("operation", "guna"))


@dataclass(frozen=True)
class BatchRequest:
    items: tuple[BlockingRequest, ...] = ()

    def __post_init__(self) -> None:
        items = tuple(
            item if isinstance(item, BlockingRequest) else BlockingRequest.from_dict(item)
            for item in self.items
        )
        object.__setattr__(self, "items", items)

    @classmethod
    def of(cls, items: Iterable[BlockingRequest | Mapping[str, Any]]) -> BatchRequest:
        return cls(tuple(items))


@dataclass(frozen=True)
class BlockingResult:
    request: BlockingRequest
    analysis: BlockingAnalysis

    @property
    def blocked(self) -> bool:
        return self.analysis.blocked

    @property
    def confidence(self) -> float:
        return self.analysis.confidence

    def to_dict(self) -> dict[str, Any]:
        d = self.analysis.to_dict()
        d.update(
            root=self.request.root,
            affix=self.request.affix,
            operation=self.request.operation,
        )
        return d


@dataclass(frozen=True)
class BatchResult:
    results: tuple[BlockingResult, ...]
    summary: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "results": [r.to_dict() for r in self.results],
            "summary": dict(self.summary),
        }


def summarize(results: Iterable[BlockingResult]) -> dict[str, int]:
    """Counts of blocked, allowed (confidence above 0.5) and uncertain results."""
    summary = {"total": 0, "blocked": 0, "allowed": 0, "uncertain": 0}
    for result in results:
        summary["total"] += 1
        if result.blocked:
            summary["blocked"] += 1
        elif result.confidence > ALLOWED_CONFIDENCE:
            summary["allowed"] += 1
        else:
            summary["uncertain"] += 1
    return summary


def _analyze_one(request: BlockingRequest, config: ClassifierConfig) -> BlockingResult:
    analysis = analyze_guna_vrddhi_block(
        request.root, request.affix, request.operation, config=config
    )
    return BlockingResult(request=request, analysis=analysis)


def analyze_request(
    request: BlockingRequest | BatchRequest,
    mode: ClassifierMode | str | None = None,
    config: Mapping[str, Any] | ClassifierConfig | None = None,
) -> BlockingResult | BatchResult:
    """Analyze one request or a batch under a single configuration snapshot."""
    effective = resolve_config(mode, config)
    if isinstance(request, BlockingRequest):
        return _analyze_one(request, effective)
    if isinstance(request, BatchRequest):
        results = tuple(_analyze_one(item, effective) for item in request.items)
        summary = summarize(results)
        logger.info("Analyzed batch of %d: %s", summary["total"], summary)
        return BatchResult(results=results, summary=summary)
    raise TypeError(
        f"Expected BlockingRequest or BatchRequest, got {type(request).__name__}"
    )
