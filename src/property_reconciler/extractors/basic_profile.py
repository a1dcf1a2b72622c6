from __future__ import annotations

from typing import Any, Dict, List

from property_reconciler.extractors.base import (
    ExtractionResult,
    RecordBuilder,
    empty_result,
    finish,
    property_node,
    section,
)
from property_reconciler.normalize import as_float, as_int, as_str, dig, first


SOURCE_NAME = "basicProfile"


def collect(prop: Dict[str, Any], b: RecordBuilder, warnings: List[str]) -> None:
    """Fields common to every profile-shaped response."""
    identifier = section(prop, "identifier", warnings)
    address = section(prop, "address", warnings)
    location = section(prop, "location", warnings)
    area = section(prop, "area", warnings)
    summary = section(prop, "summary", warnings)
    lot = section(prop, "lot", warnings)
    building = section(prop, "building", warnings)
    b_summary = section(building, "summary", warnings, "property.building")
    b_size = section(building, "size", warnings, "property.building")
    b_rooms = section(building, "rooms", warnings, "property.building")
    construction = section(building, "construction", warnings, "property.building")
    assessment = section(prop, "assessment", warnings)
    market = section(prop, "market", warnings)
    sale = section(prop, "sale", warnings)
    sale_amount = section(sale, "saleAmountData", warnings, "property.sale")

    b.put(
        "propertyId",
        as_str(first(identifier.get("obPropId"), identifier.get("attomId"), identifier.get("Id"))),
    )
    b.put("apn", as_str(identifier.get("apn")))
    b.put("fips", as_str(identifier.get("fips")))

    b.put("address.line1", as_str(address.get("line1")))
    b.put("address.line2", as_str(address.get("line2")))
    b.put("address.locality", as_str(address.get("locality")))
    b.put("address.adminArea1", as_str(first(address.get("adminArea1"), address.get("countrySubd"))))
    b.put("address.adminArea2", as_str(first(address.get("adminArea2"), area.get("countrySecSubd"))))
    b.put("address.postalCode", as_str(first(address.get("postalCode"), address.get("postal1"))))
    b.put("address.countryCode", as_str(first(address.get("country"), address.get("countryCode"))))
    b.put("address.formatted", as_str(address.get("oneLine")))

    # Providers send coordinates as numeric strings.
    b.put("location.latitude", as_float(location.get("latitude")))
    b.put("location.longitude", as_float(location.get("longitude")))
    b.put("location.geoId", as_str(first(location.get("geoId"), location.get("geoid"))))
    b.put("location.censusTract", as_str(area.get("censusTractIdent")))

    b.put("lot.lotSizeAcres", as_float(first(lot.get("lotSizeAcres"), lot.get("lotSize1"))))
    b.put("lot.lotSizeSqFt", as_float(first(lot.get("lotSizeSqFt"), lot.get("lotSize2"))))

    b.put("building.propertyType", as_str(first(summary.get("propertyType"), b_summary.get("propertyType"))))
    b.put("building.propertySubType", as_str(first(summary.get("propSubType"), b_summary.get("propSubType"))))
    b.put("building.propertyClass", as_str(first(summary.get("propClass"), b_summary.get("propClass"))))
    b.put("building.standardUse", as_str(first(summary.get("propLandUse"), b_summary.get("propLandUse"))))
    b.put("building.yearBuilt", as_int(first(summary.get("yearBuilt"), b_summary.get("yearBuilt"))))
    b.put("building.stories", as_float(b_summary.get("levels")))
    b.put("building.livingAreaSqFt", as_float(first(b_size.get("livingAreaSqFt"), b_size.get("livingSize"))))
    b.put("building.bedrooms", as_int(first(b_rooms.get("bedsCount"), b_rooms.get("beds"))))
    b.put("building.fullBaths", as_int(b_rooms.get("bathsFull")))
    b.put("building.bathrooms", as_float(b_rooms.get("bathsTotal")))
    b.put("building.roomsTotal", as_int(b_rooms.get("roomsTotal")))
    b.put("building.wallType", as_str(dig(prop, "utilities", "wallType")))
    b.put("building.condition", as_str(first(construction.get("condition"), b_summary.get("condition"))))

    b.put("assessment.assessedYear", as_int(dig(assessment, "assessed", "assdYear")))
    b.put("assessment.assessedValue", as_float(dig(assessment, "assessed", "assdTtlValue")))
    b.put("assessment.landValue", as_float(dig(assessment, "assessed", "assdLandValue")))
    b.put("assessment.improvementValue", as_float(dig(assessment, "assessed", "assdImprValue")))
    b.put("assessment.marketValue", as_float(dig(assessment, "market", "mktTtlValue")))
    b.put("assessment.taxAmount", as_float(dig(assessment, "tax", "taxAmt")))
    b.put("assessment.taxYear", as_int(dig(assessment, "tax", "taxYear")))

    b.put(
        "market.lastSaleDate",
        as_str(
            first(
                dig(market, "saleHistory", 0, "saleTransDate"),
                sale.get("saleTransDate"),
                sale_amount.get("saleRecDate"),
            )
        ),
    )
    b.put(
        "market.lastSalePrice",
        as_float(first(dig(market, "saleHistory", 0, "saleAmt"), sale_amount.get("saleAmt"))),
    )
    b.put(
        "market.lastSaleTransactionType",
        as_str(first(dig(market, "saleHistory", 0, "saleTransType"), sale_amount.get("saleTransType"))),
    )


def extract(payload: Any) -> ExtractionResult:
    warnings: List[str] = []
    prop = property_node(payload, warnings)
    if prop is None:
        return empty_result(warnings)
    b = RecordBuilder()
    collect(prop, b, warnings)
    b.put("dataSources.basicProfile", True)
    return finish(b, warnings, SOURCE_NAME)
