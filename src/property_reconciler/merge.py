"""Priority-ordered deep merge of partial property records.

Sources are visited highest priority first; ties keep their input order
(``sorted`` is stable). A leaf is written when no source has claimed its
path yet, or when the claiming source had a strictly lower priority. Every
write records a provenance entry, so ``merged.get(path)`` always equals
``provenance[path].value``.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from property_reconciler.confidence import classify
from property_reconciler.feature_flags import get_flags
from property_reconciler.normalize import is_empty
from property_reconciler.report import report
from property_reconciler.schema.provenance import ProvenanceEntry, ProvenanceMap
from property_reconciler.schema.records import MergedRecord, PartialPropertyRecord, iter_leaves


logger = logging.getLogger("prc.merge")


@dataclass(frozen=True)
class SourceInput:
    record: PartialPropertyRecord
    priority: int
    name: str


@dataclass(frozen=True)
class MergeConflict:
    """A non-empty value that lost to a different, already-merged value."""

    field_path: str
    kept_source: str
    kept_value: Any
    kept_priority: int
    rejected_source: str
    rejected_value: Any
    rejected_priority: int

    @property
    def tied(self) -> bool:
        return self.kept_priority == self.rejected_priority

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fieldPath": self.field_path,
            "keptSource": self.kept_source,
            "keptValue": self.kept_value,
            "keptPriority": self.kept_priority,
            "rejectedSource": self.rejected_source,
            "rejectedValue": self.rejected_value,
            "rejectedPriority": self.rejected_priority,
            "tied": self.tied,
        }


@dataclass(frozen=True)
class MergeResult:
    merged: MergedRecord
    provenance: ProvenanceMap
    conflicts: List[MergeConflict] = field(default_factory=list)

    def tied_conflicts(self) -> List[MergeConflict]:
        """Conflicts settled only by input order."""
        return [c for c in self.conflicts if c.tied]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "data": self.merged.to_dict(),
            "sourceMap": {path: entry.to_dict() for path, entry in self.provenance.items()},
        }


def _stamp(now: Optional[datetime]) -> str:
    if now is None:
        now = datetime.now(timezone.utc)
    return now.isoformat()


def _set_path(data: Dict[str, Any], path: str, value: Any) -> None:
    *parents, leaf = path.split(".")
    node = data
    for segment in parents:
        node = node.setdefault(segment, {})
    node[leaf] = value


def _log_conflict(conflict: MergeConflict) -> None:
    if conflict.tied and get_flags().warn_on_tied_conflicts:
        logger.warning(
            "tied conflict at %s: kept %s=%r over %s=%r (priority %d)",
            conflict.field_path,
            conflict.kept_source,
            conflict.kept_value,
            conflict.rejected_source,
            conflict.rejected_value,
            conflict.kept_priority,
        )
        return
    logger.debug(
        "conflict at %s: kept %s (priority %d) over %s (priority %d)",
        conflict.field_path,
        conflict.kept_source,
        conflict.kept_priority,
        conflict.rejected_source,
        conflict.rejected_priority,
    )


def merge(sources: Iterable[SourceInput], *, now: Optional[datetime] = None) -> MergeResult:
    stamp = _stamp(now)
    ordered = sorted(sources, key=lambda s: s.priority, reverse=True)

    data: Dict[str, Any] = {}
    provenance: ProvenanceMap = {}
    winning_priority: Dict[str, int] = {}
    conflicts: List[MergeConflict] = []
    data_sources: Dict[str, bool] = {}

    for source in ordered:
        for path, value in iter_leaves(source.record):
            if is_empty(value):
                continue
            existing = provenance.get(path)
            if existing is None or winning_priority[path] < source.priority:
                value = copy.deepcopy(value)
                _set_path(data, path, value)
                provenance[path] = ProvenanceEntry(
                    field_path=path,
                    value=copy.deepcopy(value),
                    source=source.name,
                    confidence=classify(source.name, path),
                    last_updated=stamp,
                )
                winning_priority[path] = source.priority
            elif existing.value != value:
                conflict = MergeConflict(
                    field_path=path,
                    kept_source=existing.source,
                    kept_value=existing.value,
                    kept_priority=winning_priority[path],
                    rejected_source=source.name,
                    rejected_value=value,
                    rejected_priority=source.priority,
                )
                conflicts.append(conflict)
                _log_conflict(conflict)

        # Flags are unioned whether or not the source won any field.
        if source.record.data_sources is not None:
            for flag, enabled in source.record.data_sources.to_dict().items():
                data_sources[flag] = bool(data_sources.get(flag)) or bool(enabled)

    data["dataSources"] = data_sources
    data["lastUpdated"] = stamp
    data["dataCompleteness"] = report(provenance).completion_percentage
    merged = MergedRecord.model_validate(data)

    logger.debug(
        "merged %d sources into %d fields (%d conflicts)",
        len(ordered),
        len(provenance),
        len(conflicts),
    )
    return MergeResult(merged=merged, provenance=provenance, conflicts=conflicts)
