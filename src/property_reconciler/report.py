from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from property_reconciler.normalize import is_empty
from property_reconciler.schema.provenance import ProvenanceEntry


def round_half_up(value: float) -> int:
    # ``round()`` is banker's rounding; percentages round .5 up.
    return int(math.floor(value + 0.5))


def completion_percentage(populated: int, total: int) -> int:
    if total <= 0:
        return 0
    return round_half_up(100 * populated / total)


@dataclass(frozen=True)
class CompletenessReport:
    by_source: Dict[str, List[ProvenanceEntry]] = field(default_factory=dict)
    by_confidence: Dict[str, List[ProvenanceEntry]] = field(default_factory=dict)
    total_fields: int = 0
    populated_fields: int = 0
    completion_percentage: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bySource": {k: [e.to_dict() for e in v] for k, v in self.by_source.items()},
            "byConfidence": {k: [e.to_dict() for e in v] for k, v in self.by_confidence.items()},
            "totalFields": self.total_fields,
            "populatedFields": self.populated_fields,
            "completionPercentage": self.completion_percentage,
        }


def report(provenance: Mapping[str, ProvenanceEntry]) -> CompletenessReport:
    """Group the provenance map by source and confidence tier.

    Completeness is relative to the field paths some source mentioned, not
    to the full property schema.
    """
    by_source: Dict[str, List[ProvenanceEntry]] = {}
    by_confidence: Dict[str, List[ProvenanceEntry]] = {}
    populated = 0
    for entry in provenance.values():
        by_source.setdefault(entry.source, []).append(entry)
        by_confidence.setdefault(str(entry.confidence), []).append(entry)
        if not is_empty(entry.value):
            populated += 1
    total = len(provenance)
    return CompletenessReport(
        by_source=by_source,
        by_confidence=by_confidence,
        total_fields=total,
        populated_fields=populated,
        completion_percentage=completion_percentage(populated, total),
    )
