from __future__ import annotations

from typing import Any, Dict, List

from property_reconciler.extractors import basic_profile
from property_reconciler.extractors.base import (
    ExtractionResult,
    RecordBuilder,
    empty_result,
    finish,
    property_node,
    section,
)
from property_reconciler.normalize import as_flag, as_int, as_str, dig, first


SOURCE_NAME = "expandedProfile"


def _owner_names(owner: Dict[str, Any], assessment: Dict[str, Any]) -> List[str]:
    names = []
    for i in range(1, 5):
        name = as_str(dig(owner, f"owner{i}", f"owner{i}FullName"))
        if name:
            names.append(name)
    if names:
        return names
    for i in range(1, 5):
        name = as_str(dig(assessment, "owner", f"owner{i}", "fullName"))
        if name:
            names.append(name)
    return names


def collect(prop: Dict[str, Any], b: RecordBuilder, warnings: List[str]) -> None:
    basic_profile.collect(prop, b, warnings)

    building = section(prop, "building", warnings)
    b_summary = section(building, "summary", warnings, "property.building")
    construction = section(building, "construction", warnings, "property.building")
    interior = section(building, "interior", warnings, "property.building")
    parking = section(building, "parking", warnings, "property.building")
    owner = section(prop, "owner", warnings)
    utilities = section(prop, "utilities", warnings)
    area = section(prop, "area", warnings)
    assessment = section(prop, "assessment", warnings)
    summary = section(prop, "summary", warnings)
    lot = section(prop, "lot", warnings)

    b.put("building.constructionType", as_str(construction.get("constructionType")))
    b.put("building.wallType", as_str(construction.get("wallType")))
    b.put("building.roofType", as_str(first(construction.get("roofType"), construction.get("roofCover"))))
    b.put("building.foundationType", as_str(construction.get("foundationType")))
    b.put("building.exteriorWalls", as_str(construction.get("exteriorWalls")))

    b.put("building.heating", as_str(first(interior.get("heating"), utilities.get("heatingType"))))
    b.put("building.cooling", as_str(first(interior.get("cooling"), utilities.get("coolingType"))))
    b.put("building.fuel", as_str(first(interior.get("fuel"), utilities.get("heatingFuel"))))
    b.put("building.sewer", as_str(first(interior.get("sewer"), utilities.get("sewer"), utilities.get("sewerType"))))
    b.put("building.water", as_str(first(interior.get("water"), utilities.get("water"), utilities.get("waterType"))))

    # The building summary is authoritative for condition when present.
    b.put("building.condition", as_str(b_summary.get("condition")))
    b.put("building.quality", as_str(b_summary.get("quality")))

    b.put("building.garageType", as_str(parking.get("garageType")))
    b.put("building.parkingSpaces", as_int(parking.get("prkgSpaces")))
    b.put("building.parkingType", as_str(parking.get("prkgType")))

    b.put("building.fireplace", as_flag(first(interior.get("fireplaceInd"), interior.get("fplcInd"))))
    b.put("building.fireplaceType", as_str(first(interior.get("fireplaceType"), interior.get("fplcType"))))
    b.put("building.pool", as_flag(interior.get("poolInd")))
    b.put("building.poolType", as_str(interior.get("poolType")))

    b.put("owner.names", _owner_names(owner, assessment) or None)
    b.put("owner.ownershipType", as_str(owner.get("ownershipType")))
    b.put(
        "owner.mailingAddress.line1",
        as_str(first(owner.get("mailingAddressOneLine"), dig(assessment, "owner", "mailingAddressOneLine"))),
    )

    b.put("utilities.electricity", as_str(utilities.get("electric")))
    b.put("utilities.gas", as_str(utilities.get("gas")))
    b.put("utilities.water", as_str(first(utilities.get("water"), utilities.get("waterType"))))
    b.put("utilities.sewer", as_str(first(utilities.get("sewer"), utilities.get("sewerType"))))

    b.put("zoning.zoning", as_str(first(area.get("zoning"), lot.get("zoningType"))))
    b.put("zoning.landUse", as_str(first(area.get("landUse"), summary.get("propLandUse"))))


def extract(payload: Any) -> ExtractionResult:
    warnings: List[str] = []
    prop = property_node(payload, warnings)
    if prop is None:
        return empty_result(warnings)
    b = RecordBuilder()
    collect(prop, b, warnings)
    b.put("dataSources.expandedProfile", True)
    return finish(b, warnings, SOURCE_NAME)
