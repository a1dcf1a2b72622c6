import pytest

from property_reconciler.confidence import classify
from property_reconciler.schema import Confidence


@pytest.mark.parametrize(
    "source,path,expected",
    [
        ("propertyDetail", "building.yearBuilt", Confidence.HIGH),
        ("propertyDetail", "market.lastSalePrice", Confidence.HIGH),
        ("propertyDetail", "fips", Confidence.HIGH),
        ("expandedProfile", "building.heating", Confidence.HIGH),
        ("expandedProfile", "market.lastSaleDate", Confidence.MEDIUM),
        ("expandedProfile", "owner.names", Confidence.MEDIUM),
        ("saleDetails", "market.lastSalePrice", Confidence.HIGH),
        ("saleDetails", "building.livingAreaSqFt", Confidence.LOW),
        ("expandedSaleDetails", "market.pricePerSqFt", Confidence.HIGH),
        ("expandedSaleDetails", "address.locality", Confidence.LOW),
        ("basicProfile", "building.yearBuilt", Confidence.MEDIUM),
        ("basicProfile", "market.lastSalePrice", Confidence.MEDIUM),
        ("someOtherProvider", "building.yearBuilt", Confidence.MEDIUM),
    ],
)
def test_classify(source, path, expected):
    assert classify(source, path) == expected


def test_section_match_uses_top_level_segment():
    # "buildingPermits" is not the building section.
    assert classify("expandedProfile", "buildingPermits.count") == Confidence.MEDIUM
    assert classify("saleDetails", "marketing.channel") == Confidence.LOW


def test_confidence_values_are_lowercase_strings():
    assert [str(c) for c in Confidence] == ["high", "medium", "low"]


def test_classify_is_deterministic():
    pairs = [
        ("propertyDetail", "building.yearBuilt"),
        ("saleDetails", "market.lastSalePrice"),
        ("expandedProfile", "owner.names"),
        ("unknownSource", ""),
    ]
    assert [classify(s, p) for s, p in pairs] == [classify(s, p) for s, p in pairs]
