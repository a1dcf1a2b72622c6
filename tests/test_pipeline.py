from datetime import datetime, timezone

from property_reconciler import RawSource, reconcile


NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _all_sources(attom_payload, **priorities):
    return [
        RawSource(name, attom_payload(fixture), priorities.get(name))
        for name, fixture in [
            ("basicProfile", "basic_profile"),
            ("expandedProfile", "expanded_profile"),
            ("propertyDetail", "property_detail"),
            ("saleDetails", "sale_details"),
            ("expandedSaleDetails", "expanded_sale_details"),
        ]
    ]


def test_reconcile_all_sources(attom_payload):
    out = reconcile(_all_sources(attom_payload), now=NOW)
    merged = out.result.merged

    assert out.sources == [
        "basicProfile",
        "expandedProfile",
        "propertyDetail",
        "saleDetails",
        "expandedSaleDetails",
    ]
    assert out.skipped == []
    assert out.warnings == {}
    assert merged.data_sources.to_dict() == {
        "basicProfile": True,
        "expandedProfile": True,
        "propertyDetail": True,
        "saleDetails": True,
        "expandedSaleDetails": True,
    }
    assert merged.building.year_built == 1925
    assert merged.market.price_per_sq_ft == 1000.0
    assert merged.data_completeness == 100
    # expandedProfile, saleDetails and expandedSaleDetails share priority 2.
    assert out.result.provenance["market.lastSalePrice"].source == "saleDetails"
    assert merged.market.last_sale_price == 1275000
    assert any(c.field_path == "market.lastSalePrice" for c in out.result.tied_conflicts())


def test_priority_override(attom_payload):
    out = reconcile(_all_sources(attom_payload, basicProfile=10), now=NOW)
    assert out.result.merged.building.year_built == 1920
    assert out.result.provenance["building.yearBuilt"].source == "basicProfile"


def test_missing_and_unknown_sources_are_skipped(attom_payload):
    out = reconcile(
        [
            RawSource("basicProfile", attom_payload("basic_profile")),
            RawSource("saleDetails", None),
            RawSource("zillow", {"property": [{}]}),
        ],
        now=NOW,
    )
    assert out.sources == ["basicProfile"]
    assert out.skipped == ["zillow"]
    assert out.result.merged.data_sources.to_dict() == {"basicProfile": True}


def test_malformed_source_reports_warnings(attom_payload):
    out = reconcile(
        [
            RawSource("basicProfile", attom_payload("basic_profile")),
            RawSource("expandedProfile", {"data": {"property": []}}),
        ],
        now=NOW,
    )
    assert out.warnings == {"expandedProfile": ["'property' array is empty"]}
    assert out.result.merged.fips == "36047"
    assert "expandedProfile" not in out.result.merged.data_sources.to_dict()


def test_reconcile_to_dict_and_exports(attom_payload):
    out = reconcile(_all_sources(attom_payload), now=NOW)
    data = out.to_dict()

    assert set(data) == {"data", "sourceMap", "sources", "warnings", "skipped", "conflicts"}
    assert data["data"]["lastUpdated"] == NOW.isoformat()
    assert out.export("csv").split("\n")[0] == "Field,Value,Source,Confidence"
    assert out.report().total_fields == len(out.result.provenance)


def test_reconcile_nothing():
    out = reconcile([])
    assert out.result.provenance == {}
    assert out.result.merged.data_completeness == 0
