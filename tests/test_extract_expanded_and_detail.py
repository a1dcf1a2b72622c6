import pytest

from property_reconciler.extractors import (
    extract_basic_profile,
    extract_expanded_profile,
    extract_property_detail,
)
from property_reconciler.schema.records import iter_leaves


def _paths(result):
    return {path for path, _ in iter_leaves(result.record)}


def test_expanded_profile_fixture(attom_payload):
    result = extract_expanded_profile(attom_payload("expanded_profile"))
    rec = result.record

    assert result.warnings == []
    assert rec.property_id == "18471319136047"
    assert rec.building.living_area_sq_ft == 1850
    assert rec.building.bathrooms == 2.5
    assert rec.building.condition == "GOOD"
    assert rec.building.quality == "AVERAGE"
    assert rec.building.construction_type == "FRAME"
    assert rec.building.wall_type == "BRICK"
    assert rec.building.roof_type == "Asphalt"
    assert rec.building.fireplace is True
    assert rec.building.fireplace_type == "Masonry"
    assert rec.building.garage_type == "Detached"
    assert rec.building.parking_spaces == 1
    assert rec.building.heating == "HOT WATER"
    assert rec.building.fuel == "GAS"
    assert rec.building.cooling == "CENTRAL"
    assert rec.owner.names == ["JANE DOE", "JOHN DOE"]
    assert rec.owner.mailing_address.line1 == "PO BOX 1, BROOKLYN, NY 11217"
    assert rec.zoning.zoning == "R6B"
    assert rec.get("owner.mailingAddress.line1") == "PO BOX 1, BROOKLYN, NY 11217"


def test_each_profile_variant_flags_only_itself(attom_payload):
    payload = attom_payload("property_detail")
    assert extract_basic_profile(payload).record.data_sources.to_dict() == {"basicProfile": True}
    assert extract_expanded_profile(payload).record.data_sources.to_dict() == {"expandedProfile": True}
    assert extract_property_detail(payload).record.data_sources.to_dict() == {"propertyDetail": True}


@pytest.mark.parametrize("fixture", ["basic_profile", "expanded_profile", "property_detail"])
def test_richer_profiles_read_a_superset_of_fields(attom_payload, fixture):
    payload = attom_payload(fixture)
    basic = _paths(extract_basic_profile(payload))
    expanded = _paths(extract_expanded_profile(payload))
    detail = _paths(extract_property_detail(payload))
    assert basic <= expanded <= detail


def test_property_detail_fixture(attom_payload):
    rec = extract_property_detail(attom_payload("property_detail")).record

    assert rec.building.year_built == 1925
    assert rec.building.units == 1
    assert rec.building.partial_baths == 1
    assert rec.building.gross_area_sq_ft == 2400
    assert rec.building.adjusted_gross_area_sq_ft == 2200
    assert rec.building.basement_area_sq_ft == 600
    assert rec.building.architectural_style == "Brownstone"
    assert rec.building.building_style == "Row House"
    assert rec.lot.front_footage == 20
    assert rec.lot.depth == 100
    assert rec.lot.waterfront is False
    assert rec.location.census_tract == "016100"
    assert rec.location.census_block == "2001"
    assert rec.legal.legal_description == "BLOCK 1234 LOT 56"
    assert rec.legal.subdivision == "PARK SLOPE"


def test_property_detail_schools(attom_payload):
    schools = extract_property_detail(attom_payload("property_detail")).record.schools

    assert schools.elementary.name == "PS 9"
    assert schools.elementary.district == "District 13"
    assert schools.high.name is None
    assert schools.high.district == "District 13"
    assert schools.middle is None


def test_schools_absent_without_names_or_districts():
    payload = {"property": [{"school": {"elementary": {"rating": 7}}}]}
    assert extract_property_detail(payload).record.schools is None


def test_detail_falls_back_to_utilities_for_systems():
    payload = {"property": [{"utilities": {"heatingType": "RADIATOR", "water": "MUNICIPAL"}}]}
    rec = extract_property_detail(payload).record
    assert rec.building.heating == "RADIATOR"
    assert rec.building.water == "MUNICIPAL"
    assert rec.utilities.water == "MUNICIPAL"
