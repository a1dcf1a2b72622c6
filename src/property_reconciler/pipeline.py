from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from property_reconciler.exporters import export
from property_reconciler.extractors import DEFAULT_PRIORITIES, EXTRACTORS
from property_reconciler.merge import MergeResult, SourceInput, merge
from property_reconciler.report import CompletenessReport, report


logger = logging.getLogger("prc.pipeline")


@dataclass(frozen=True)
class RawSource:
    """One provider response as handed over by the retrieval layer."""

    name: str
    payload: Any
    priority: Optional[int] = None


@dataclass
class ReconcileResult:
    result: MergeResult
    sources: List[str] = field(default_factory=list)
    warnings: Dict[str, List[str]] = field(default_factory=dict)
    skipped: List[str] = field(default_factory=list)

    def report(self) -> CompletenessReport:
        return report(self.result.provenance)

    def export(self, fmt: str = "json") -> str:
        return export(self.result.merged, self.result.provenance, fmt)

    def to_dict(self) -> dict:
        return {
            **self.result.to_dict(),
            "sources": list(self.sources),
            "warnings": {k: list(v) for k, v in self.warnings.items()},
            "skipped": list(self.skipped),
            "conflicts": [c.to_dict() for c in self.result.conflicts],
        }


def reconcile(raw_sources: Iterable[RawSource], *, now: Optional[datetime] = None) -> ReconcileResult:
    """Extract every available provider response and merge the results.

    Responses with no payload are ignored; unknown source names are skipped
    with a warning rather than failing the whole reconciliation.
    """
    inputs: List[SourceInput] = []
    sources: List[str] = []
    warnings: Dict[str, List[str]] = {}
    skipped: List[str] = []

    for raw in raw_sources:
        if raw.payload is None:
            continue
        extractor = EXTRACTORS.get(raw.name)
        if extractor is None:
            logger.warning("no extractor for source %r; skipping", raw.name)
            skipped.append(raw.name)
            continue
        extracted = extractor(raw.payload)
        if extracted.warnings:
            warnings[raw.name] = list(extracted.warnings)
        priority = raw.priority if raw.priority is not None else DEFAULT_PRIORITIES.get(raw.name, 0)
        inputs.append(SourceInput(record=extracted.record, priority=priority, name=raw.name))
        sources.append(raw.name)

    result = merge(inputs, now=now)
    for conflict in result.tied_conflicts():
        logger.info(
            "%s resolved by input order: %s over %s",
            conflict.field_path,
            conflict.kept_source,
            conflict.rejected_source,
        )
    return ReconcileResult(result=result, sources=sources, warnings=warnings, skipped=skipped)
