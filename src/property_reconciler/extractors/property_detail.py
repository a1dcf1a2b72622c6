from __future__ import annotations

from typing import Any, Dict, List

from property_reconciler.extractors import expanded_profile
from property_reconciler.extractors.base import (
    ExtractionResult,
    RecordBuilder,
    empty_result,
    finish,
    property_node,
    section,
)
from property_reconciler.normalize import as_flag, as_float, as_int, as_str, first


SOURCE_NAME = "propertyDetail"

SCHOOL_LEVELS = ("elementary", "middle", "high")


def _collect_schools(school: Dict[str, Any], b: RecordBuilder, warnings: List[str]) -> None:
    # Schools only appear when some level names a school or district.
    levels = {level: section(school, level, warnings, "property.school") for level in SCHOOL_LEVELS}
    if not any(as_str(n.get("schoolName")) or as_str(n.get("district")) for n in levels.values()):
        return
    for level, node in levels.items():
        b.put(f"schools.{level}.name", as_str(node.get("schoolName")))
        b.put(f"schools.{level}.district", as_str(node.get("district")))
        b.put(f"schools.{level}.rating", as_float(node.get("rating")))


def collect(prop: Dict[str, Any], b: RecordBuilder, warnings: List[str]) -> None:
    expanded_profile.collect(prop, b, warnings)

    building = section(prop, "building", warnings)
    b_summary = section(building, "summary", warnings, "property.building")
    b_size = section(building, "size", warnings, "property.building")
    b_rooms = section(building, "rooms", warnings, "property.building")
    interior = section(building, "interior", warnings, "property.building")
    parking = section(building, "parking", warnings, "property.building")
    lot = section(prop, "lot", warnings)
    area = section(prop, "area", warnings)
    summary = section(prop, "summary", warnings)
    utilities = section(prop, "utilities", warnings)
    school = section(prop, "school", warnings)

    b.put("lot.frontFootage", as_float(lot.get("frontFootage")))
    b.put("lot.depth", as_float(lot.get("depth")))
    b.put("lot.topography", as_str(lot.get("topography")))
    b.put("lot.waterfront", as_flag(lot.get("waterfrontInd")))
    b.put("lot.waterBody", as_str(lot.get("waterBody")))

    b.put("building.units", as_int(first(b_summary.get("unitsCount"), b_summary.get("units"))))
    b.put("building.partialBaths", as_int(b_rooms.get("bathsPartial")))
    b.put("building.grossAreaSqFt", as_float(first(b_size.get("grossAreaSqFt"), b_size.get("grossSize"))))
    b.put(
        "building.adjustedGrossAreaSqFt",
        as_float(first(b_size.get("adjustedGrossAreaSqFt"), b_size.get("grossSizeAdjusted"))),
    )
    b.put("building.basementAreaSqFt", as_float(first(b_size.get("basementAreaSqFt"), interior.get("bsmtSize"))))
    b.put("building.garageAreaSqFt", as_float(first(b_size.get("garageAreaSqFt"), parking.get("prkgSize"))))
    b.put("building.architecturalStyle", as_str(b_summary.get("archStyle")))
    b.put("building.buildingStyle", as_str(b_summary.get("bldgStyle")))

    # Detail payloads sometimes carry systems only under utilities.
    b.put_default("building.heating", as_str(utilities.get("heatingType")))
    b.put_default("building.fuel", as_str(utilities.get("heatingFuel")))
    b.put_default("building.water", as_str(utilities.get("water")))
    b.put_default("building.sewer", as_str(utilities.get("sewer")))

    b.put("location.censusTract", as_str(area.get("censusTract")))
    b.put("location.censusBlock", as_str(area.get("censusBlock")))

    b.put("legal.legalDescription", as_str(summary.get("legal1")))
    b.put("legal.subdivision", as_str(area.get("subdName")))

    _collect_schools(school, b, warnings)


def extract(payload: Any) -> ExtractionResult:
    warnings: List[str] = []
    prop = property_node(payload, warnings)
    if prop is None:
        return empty_result(warnings)
    b = RecordBuilder()
    collect(prop, b, warnings)
    b.put("dataSources.propertyDetail", True)
    return finish(b, warnings, SOURCE_NAME)
