from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from .base import ExtractionResult
from .basic_profile import extract as extract_basic_profile
from .expanded_profile import extract as extract_expanded_profile
from .property_detail import extract as extract_property_detail
from .sale_details import extract as extract_sale_details
from .sale_details import extract_expanded as extract_expanded_sale_details


Extractor = Callable[[Any], ExtractionResult]


EXTRACTORS: Dict[str, Extractor] = {
    "basicProfile": extract_basic_profile,
    "expandedProfile": extract_expanded_profile,
    "propertyDetail": extract_property_detail,
    "saleDetails": extract_sale_details,
    "expandedSaleDetails": extract_expanded_sale_details,
}

# Rank used by the dashboard when the caller does not supply one.
DEFAULT_PRIORITIES: Dict[str, int] = {
    "basicProfile": 1,
    "expandedProfile": 2,
    "propertyDetail": 3,
    "saleDetails": 2,
    "expandedSaleDetails": 2,
}

# Checked in order; ``expandedsale`` must win over ``sale`` and ``detail``.
_URL_HINTS = (
    ("expandedsale", "expandedSaleDetails"),
    ("sale", "saleDetails"),
    ("expandedprofile", "expandedProfile"),
    ("basicprofile", "basicProfile"),
    ("detail", "propertyDetail"),
)


def get_extractor(source_name: str) -> Extractor:
    extractor = EXTRACTORS.get(source_name)
    if extractor is None:
        raise KeyError(f"No extractor registered for source={source_name}")
    return extractor


def detect_source(payload: Any, url: Optional[str] = None) -> str:
    """Guess the source name from the request URL the payload came from.

    Falls back to the property-detail shape, which reads the most fields.
    """
    if url is None and isinstance(payload, dict):
        config = payload.get("config")
        candidate = payload.get("url") or (config.get("url") if isinstance(config, dict) else None)
        url = candidate if isinstance(candidate, str) else None
    lowered = (url or "").lower()
    for needle, source_name in _URL_HINTS:
        if needle in lowered:
            return source_name
    return "propertyDetail"


def extract_from_any(payload: Any, url: Optional[str] = None) -> ExtractionResult:
    return EXTRACTORS[detect_source(payload, url)](payload)


__all__ = [
    "DEFAULT_PRIORITIES",
    "EXTRACTORS",
    "ExtractionResult",
    "Extractor",
    "detect_source",
    "extract_basic_profile",
    "extract_expanded_profile",
    "extract_expanded_sale_details",
    "extract_from_any",
    "extract_property_detail",
    "extract_sale_details",
    "get_extractor",
]
