from __future__ import annotations

import typing
from functools import lru_cache
from typing import Any, Dict, Iterator, List, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from property_reconciler.normalize import is_empty


class Section(BaseModel):
    """Base for every nested record shape.

    Attributes are snake_case; the camelCase alias is the wire name and the
    segment used in dot-delimited field paths (``building.yearBuilt``).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class Address(Section):
    line1: Optional[str] = None
    line2: Optional[str] = None
    locality: Optional[str] = None
    admin_area1: Optional[str] = None
    admin_area2: Optional[str] = None
    postal_code: Optional[str] = None
    country_code: Optional[str] = None
    formatted: Optional[str] = None


class Location(Section):
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    geo_id: Optional[str] = None
    census_tract: Optional[str] = None
    census_block: Optional[str] = None


class Lot(Section):
    lot_size_acres: Optional[float] = None
    lot_size_sq_ft: Optional[float] = None
    front_footage: Optional[float] = None
    depth: Optional[float] = None
    topography: Optional[str] = None
    waterfront: Optional[bool] = None
    water_body: Optional[str] = None


class Building(Section):
    # summary
    property_type: Optional[str] = None
    property_sub_type: Optional[str] = None
    property_class: Optional[str] = None
    standard_use: Optional[str] = None
    year_built: Optional[int] = None
    stories: Optional[float] = None
    units: Optional[int] = None

    # size
    living_area_sq_ft: Optional[float] = None
    gross_area_sq_ft: Optional[float] = None
    adjusted_gross_area_sq_ft: Optional[float] = None
    basement_area_sq_ft: Optional[float] = None
    garage_area_sq_ft: Optional[float] = None

    # rooms
    bedrooms: Optional[int] = None
    bathrooms: Optional[float] = None
    partial_baths: Optional[int] = None
    full_baths: Optional[int] = None
    rooms_total: Optional[int] = None

    # construction
    construction_type: Optional[str] = None
    wall_type: Optional[str] = None
    roof_type: Optional[str] = None
    foundation_type: Optional[str] = None
    exterior_walls: Optional[str] = None

    # systems
    heating: Optional[str] = None
    cooling: Optional[str] = None
    fuel: Optional[str] = None
    sewer: Optional[str] = None
    water: Optional[str] = None

    condition: Optional[str] = None
    quality: Optional[str] = None

    # parking
    garage_type: Optional[str] = None
    parking_spaces: Optional[int] = None
    parking_type: Optional[str] = None

    # features
    fireplace: Optional[bool] = None
    fireplace_type: Optional[str] = None
    pool: Optional[bool] = None
    pool_type: Optional[str] = None

    architectural_style: Optional[str] = None
    building_style: Optional[str] = None


class Assessment(Section):
    assessed_year: Optional[int] = None
    assessed_value: Optional[float] = None
    market_value: Optional[float] = None
    tax_value: Optional[float] = None
    land_value: Optional[float] = None
    improvement_value: Optional[float] = None
    total_value: Optional[float] = None
    exemptions: Optional[float] = None
    tax_amount: Optional[float] = None
    tax_year: Optional[int] = None
    mill_rate: Optional[float] = None


class Market(Section):
    last_sale_date: Optional[str] = None
    last_sale_price: Optional[float] = None
    last_sale_transaction_type: Optional[str] = None
    prior_sale_date: Optional[str] = None
    prior_sale_price: Optional[float] = None
    estimated_value: Optional[float] = None
    estimated_value_date: Optional[str] = None
    price_per_sq_ft: Optional[float] = None
    market_trends: Optional[Dict[str, Any]] = None


class MailingAddress(Section):
    line1: Optional[str] = None
    line2: Optional[str] = None
    locality: Optional[str] = None
    admin_area1: Optional[str] = None
    postal_code: Optional[str] = None


class Owner(Section):
    names: Optional[List[str]] = None
    mailing_address: Optional[MailingAddress] = None
    ownership_type: Optional[str] = None
    ownership_transfer_date: Optional[str] = None


class Legal(Section):
    legal_description: Optional[str] = None
    subdivision: Optional[str] = None
    block: Optional[str] = None
    lot: Optional[str] = None
    section: Optional[str] = None
    township: Optional[str] = None
    range: Optional[str] = None


class Utilities(Section):
    electricity: Optional[str] = None
    gas: Optional[str] = None
    water: Optional[str] = None
    sewer: Optional[str] = None
    internet: Optional[str] = None
    cable: Optional[str] = None


class Zoning(Section):
    zoning: Optional[str] = None
    zoning_description: Optional[str] = None
    land_use: Optional[str] = None
    land_use_description: Optional[str] = None
    restrictions: Optional[List[str]] = None


class Environmental(Section):
    flood_zone: Optional[str] = None
    flood_risk: Optional[str] = None
    earthquake_risk: Optional[str] = None
    fire_risk: Optional[str] = None
    environmental_hazards: Optional[List[str]] = None


class School(Section):
    name: Optional[str] = None
    district: Optional[str] = None
    rating: Optional[float] = None


class Schools(Section):
    elementary: Optional[School] = None
    middle: Optional[School] = None
    high: Optional[School] = None


class DataSources(Section):
    basic_profile: Optional[bool] = None
    expanded_profile: Optional[bool] = None
    property_detail: Optional[bool] = None
    sale_details: Optional[bool] = None
    expanded_sale_details: Optional[bool] = None


class PartialPropertyRecord(Section):
    """What one provider endpoint said about one property.

    Every leaf is optional. ``None`` means the source did not mention the
    field, which is not the same as the source reporting an empty value.
    """

    property_id: Optional[str] = None
    apn: Optional[str] = None
    fips: Optional[str] = None

    address: Optional[Address] = None
    location: Optional[Location] = None
    lot: Optional[Lot] = None
    building: Optional[Building] = None
    assessment: Optional[Assessment] = None
    market: Optional[Market] = None
    owner: Optional[Owner] = None
    legal: Optional[Legal] = None
    utilities: Optional[Utilities] = None
    zoning: Optional[Zoning] = None
    environmental: Optional[Environmental] = None
    schools: Optional[Schools] = None

    data_sources: Optional[DataSources] = None

    def is_empty(self) -> bool:
        return not self.to_dict()

    def get(self, field_path: str) -> Any:
        """Value at a dot-delimited alias path, or ``None``."""
        node: Any = self
        for segment in (field_path or "").split("."):
            if not isinstance(node, Section):
                return None
            name = _alias_index(type(node)).get(segment)
            if name is None:
                return None
            node = getattr(node, name)
            if node is None:
                return None
        return node


class MergedRecord(PartialPropertyRecord):
    data_sources: DataSources = Field(default_factory=DataSources)
    last_updated: Optional[str] = None
    data_completeness: int = 0


# Top-level fields that describe the record rather than the property.
METADATA_FIELDS = frozenset({"data_sources", "last_updated", "data_completeness"})


def _section_type(annotation: Any) -> Optional[Type[Section]]:
    candidates = typing.get_args(annotation) or (annotation,)
    for arg in candidates:
        if isinstance(arg, type) and issubclass(arg, Section):
            return arg
    return None


@lru_cache(maxsize=None)
def section_fields(cls: Type[Section]) -> Tuple[Tuple[str, str, Optional[Type[Section]]], ...]:
    """``(attribute, alias, nested section type or None)`` for a section class.

    Resolved once per class from the declared annotations.
    """
    out = []
    for name, info in cls.model_fields.items():
        alias = info.alias or name
        out.append((name, alias, _section_type(info.annotation)))
    return tuple(out)


@lru_cache(maxsize=None)
def _alias_index(cls: Type[Section]) -> Dict[str, str]:
    return {alias: name for name, alias, _ in section_fields(cls)}


def iter_leaves(record: Section, prefix: str = "") -> Iterator[Tuple[str, Any]]:
    """Yield ``(field_path, value)`` for every non-empty leaf.

    Nested sections recurse; lists and mappings are atomic leaves.
    Record metadata (``dataSources`` and friends) is not walked.
    """
    for name, alias, nested in section_fields(type(record)):
        if not prefix and name in METADATA_FIELDS:
            continue
        value = getattr(record, name)
        if is_empty(value):
            continue
        path = f"{prefix}.{alias}" if prefix else alias
        if nested is not None:
            yield from iter_leaves(value, path)
        else:
            yield path, value
