from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from property_reconciler.normalize import is_empty
from property_reconciler.report import completion_percentage
from property_reconciler.schema.records import Building, PartialPropertyRecord


REQUIRED_FIELDS = ["propertyType", "yearBuilt", "livingAreaSqFt", "bedrooms", "bathrooms"]

OPTIONAL_FIELDS = [
    "propertySubType",
    "propertyClass",
    "standardUse",
    "stories",
    "constructionType",
    "heating",
    "cooling",
    "garageType",
]

_AREA_FIELDS = {
    "livingAreaSqFt",
    "grossAreaSqFt",
    "adjustedGrossAreaSqFt",
    "basementAreaSqFt",
    "garageAreaSqFt",
}
_FLAG_FIELDS = {"fireplace", "pool"}
_COUNT_FIELDS = {
    "yearBuilt",
    "stories",
    "units",
    "bedrooms",
    "bathrooms",
    "partialBaths",
    "fullBaths",
    "roomsTotal",
    "parkingSpaces",
}


def _number(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, (int, float)):
        return f"{value:,}"
    return str(value)


def _building_values(record: PartialPropertyRecord) -> Dict[str, Any]:
    building = record.building or Building()
    return building.to_dict()


def format_building_detail(key: str, value: Any) -> str:
    if is_empty(value):
        return "Not specified"
    if key in _AREA_FIELDS:
        return f"{_number(value)} sq ft"
    if key in _FLAG_FIELDS:
        return "Yes" if value else "No"
    if key == "yearBuilt":
        # Years read better without a thousands separator.
        return str(value)
    if key in _COUNT_FIELDS:
        return _number(value)
    return str(value)


def building_summary(record: PartialPropertyRecord) -> str:
    b = _building_values(record)
    parts: List[str] = []

    if b.get("yearBuilt"):
        parts.append(f"Built in {b['yearBuilt']}")
    if b.get("livingAreaSqFt"):
        parts.append(f"{_number(b['livingAreaSqFt'])} sq ft")

    bed = f"{_number(b['bedrooms'])} bed" if b.get("bedrooms") else ""
    bath = f"{_number(b['bathrooms'])} bath" if b.get("bathrooms") else ""
    bed_bath = ", ".join(p for p in (bed, bath) if p)
    if bed_bath:
        parts.append(bed_bath)

    if b.get("stories") and b["stories"] > 1:
        parts.append(f"{_number(b['stories'])} stories")
    if b.get("propertyType"):
        parts.append(str(b["propertyType"]).lower())

    return " • ".join(parts) or "Property details not available"


@dataclass(frozen=True)
class BuildingCompleteness:
    is_complete: bool
    missing_fields: List[str] = field(default_factory=list)
    completion_percentage: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isComplete": self.is_complete,
            "missingFields": list(self.missing_fields),
            "completionPercentage": self.completion_percentage,
        }


def validate_building_details(record: PartialPropertyRecord) -> BuildingCompleteness:
    b = _building_values(record)
    missing = [f for f in REQUIRED_FIELDS if is_empty(b.get(f))]
    present = [f for f in REQUIRED_FIELDS + OPTIONAL_FIELDS if not is_empty(b.get(f))]
    return BuildingCompleteness(
        is_complete=not missing,
        missing_fields=missing,
        completion_percentage=completion_percentage(len(present), len(REQUIRED_FIELDS + OPTIONAL_FIELDS)),
    )
