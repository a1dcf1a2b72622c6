"""Package initializer for `property_reconciler`."""

from .confidence import classify
from .exporters import export
from .merge import MergeConflict, MergeResult, SourceInput, merge
from .pipeline import RawSource, ReconcileResult, reconcile
from .report import CompletenessReport, report
from .schema import Confidence, MergedRecord, PartialPropertyRecord, ProvenanceEntry

__all__ = [
    "CompletenessReport",
    "Confidence",
    "MergeConflict",
    "MergeResult",
    "MergedRecord",
    "PartialPropertyRecord",
    "ProvenanceEntry",
    "RawSource",
    "ReconcileResult",
    "SourceInput",
    "classify",
    "export",
    "merge",
    "reconcile",
    "report",
]
