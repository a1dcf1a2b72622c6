from __future__ import annotations

from property_reconciler.schema.provenance import Confidence


def classify(source_name: str, field_path: str) -> Confidence:
    """Confidence tier for a value from ``source_name`` at ``field_path``.

    Section matching uses the top-level path segment. Unknown sources get
    ``MEDIUM``.
    """

    section = (field_path or "").split(".", 1)[0]

    if source_name == "propertyDetail":
        return Confidence.HIGH

    if source_name == "expandedProfile":
        return Confidence.HIGH if section == "building" else Confidence.MEDIUM

    if source_name in ("saleDetails", "expandedSaleDetails"):
        return Confidence.HIGH if section == "market" else Confidence.LOW

    if source_name == "basicProfile":
        return Confidence.MEDIUM

    return Confidence.MEDIUM
