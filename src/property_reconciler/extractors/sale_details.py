from __future__ import annotations

from typing import Any, Dict, List, Optional

from property_reconciler.extractors.base import (
    ExtractionResult,
    RecordBuilder,
    empty_result,
    finish,
    property_node,
    section,
)
from property_reconciler.normalize import as_float, as_str, dig, first


SOURCE_NAME = "saleDetails"
EXPANDED_SOURCE_NAME = "expandedSaleDetails"


def _history(prop: Dict[str, Any]) -> List[Any]:
    # sale/detail, saleshistory and property/sale responses disagree on where
    # the history lives.
    for key in ("saleHistory", "saleHistories", "sale"):
        value = prop.get(key)
        if isinstance(value, list):
            return value
    return []


def _read_sale(sale: Any) -> Dict[str, Any]:
    if not isinstance(sale, dict):
        return {}
    amount = sale.get("amount")
    return {
        "date": as_str(
            first(
                sale.get("saleTransDate"),
                sale.get("saleRecDate"),
                sale.get("saleDate"),
                sale.get("saleRecordedDate"),
                dig(amount, "saleRecDate"),
                dig(sale, "saleAmountData", "saleRecDate"),
            )
        ),
        "amount": as_float(
            first(
                sale.get("saleAmt"),
                dig(amount, "saleAmt"),
                None if isinstance(amount, dict) else amount,
                sale.get("salePrice"),
                dig(sale, "saleAmountData", "saleAmt"),
            )
        ),
        "type": as_str(
            first(
                sale.get("saleTransType"),
                sale.get("transType"),
                sale.get("saleType"),
                dig(amount, "saleTransType"),
                dig(sale, "saleAmountData", "saleTransType"),
            )
        ),
    }


def _latest_and_prior(prop: Dict[str, Any]) -> tuple[Dict[str, Any], Dict[str, Any]]:
    history = _history(prop)
    latest = _read_sale(history[0]) if history else {}
    prior = _read_sale(history[1]) if len(history) > 1 else {}
    # Fall back to an object-valued ``sale`` when no history array exists.
    if not latest.get("date") and latest.get("amount") is None:
        single = prop.get("sale")
        if isinstance(single, dict):
            latest = _read_sale(single)
    return latest, prior


def collect(prop: Dict[str, Any], b: RecordBuilder, warnings: List[str]) -> None:
    latest, prior = _latest_and_prior(prop)
    if all(v is None for v in (*latest.values(), *prior.values())):
        warnings.append("no sale history found")
    b.put("market.lastSaleDate", latest.get("date"))
    b.put("market.lastSalePrice", latest.get("amount"))
    b.put("market.lastSaleTransactionType", latest.get("type"))
    b.put("market.priorSaleDate", prior.get("date"))
    b.put("market.priorSalePrice", prior.get("amount"))


def _price_per_sq_ft(prop: Dict[str, Any], sale_amount: Optional[float], warnings: List[str]) -> Optional[float]:
    sale = prop.get("sale") if isinstance(prop.get("sale"), dict) else {}
    reported = as_float(dig(sale, "calculation", "pricePerSizeUnit"))
    if reported is not None:
        return reported
    building = section(prop, "building", warnings)
    living = as_float(first(dig(building, "size", "livingSize"), dig(building, "size", "livingAreaSqFt")))
    if sale_amount is None or not living:
        return None
    return round(sale_amount / living, 2)


def extract(payload: Any) -> ExtractionResult:
    warnings: List[str] = []
    prop = property_node(payload, warnings)
    if prop is None:
        return empty_result(warnings)
    b = RecordBuilder()
    collect(prop, b, warnings)
    b.put("dataSources.saleDetails", True)
    return finish(b, warnings, SOURCE_NAME)


def extract_expanded(payload: Any) -> ExtractionResult:
    """Expanded sale responses: the sale reader plus price per square foot."""
    warnings: List[str] = []
    prop = property_node(payload, warnings)
    if prop is None:
        return empty_result(warnings)
    b = RecordBuilder()
    collect(prop, b, warnings)
    b.put("market.pricePerSqFt", _price_per_sq_ft(prop, b.get("market.lastSalePrice"), warnings))
    b.put("dataSources.expandedSaleDetails", True)
    return finish(b, warnings, EXPANDED_SOURCE_NAME)
