from __future__ import annotations

from enum import StrEnum
from typing import Any, Dict

from property_reconciler.schema.records import Section


class Confidence(StrEnum):
    """Static trust tier for a (source, field path) pair."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ProvenanceEntry(Section):
    """Which source supplied the merged value at one field path."""

    field_path: str
    value: Any
    source: str
    confidence: Confidence
    last_updated: str

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


ProvenanceMap = Dict[str, ProvenanceEntry]
