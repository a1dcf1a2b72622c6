from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from property_reconciler.normalize import is_empty
from property_reconciler.schema.records import PartialPropertyRecord


logger = logging.getLogger("prc.extract")


@dataclass(frozen=True)
class ExtractionResult:
    record: PartialPropertyRecord
    warnings: List[str] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return self.record.is_empty()


def empty_result(warnings: List[str]) -> ExtractionResult:
    return ExtractionResult(record=PartialPropertyRecord(), warnings=list(warnings))


def property_node(payload: Any, warnings: List[str]) -> Optional[Dict[str, Any]]:
    """First entry of the ``property`` collection, or ``None``.

    Provider responses arrive either wrapped (``{"data": {...}}``) or bare.
    """
    if not isinstance(payload, dict):
        warnings.append(f"payload is {type(payload).__name__}, expected object")
        return None
    root = payload.get("data") if payload.get("data") is not None else payload
    if not isinstance(root, dict):
        warnings.append("payload data is not an object")
        return None
    props = root.get("property")
    if props is None:
        warnings.append("expected 'property' array missing")
        return None
    if not isinstance(props, list):
        warnings.append("'property' is not an array")
        return None
    if not props:
        warnings.append("'property' array is empty")
        return None
    if not isinstance(props[0], dict):
        warnings.append("'property[0]' is not an object")
        return None
    return props[0]


def section(parent: Dict[str, Any], key: str, warnings: List[str], where: str = "property") -> Dict[str, Any]:
    """``parent[key]`` when it is an object; ``{}`` otherwise.

    A present but wrongly-typed node is reported, a missing one is not.
    """
    value = parent.get(key) if isinstance(parent, dict) else None
    if value is None:
        return {}
    if not isinstance(value, dict):
        warnings.append(f"'{where}.{key}' is {type(value).__name__}, expected object")
        return {}
    return value


class RecordBuilder:
    """Collects values by alias path and builds a ``PartialPropertyRecord``.

    Empty values are dropped on ``put`` so the record only carries fields the
    payload actually contained.
    """

    def __init__(self) -> None:
        self.data: Dict[str, Any] = {}

    def get(self, path: str) -> Any:
        node: Any = self.data
        for segment in path.split("."):
            if not isinstance(node, dict):
                return None
            node = node.get(segment)
        return node

    def put(self, path: str, value: Any) -> None:
        if is_empty(value):
            return
        *parents, leaf = path.split(".")
        node = self.data
        for segment in parents:
            node = node.setdefault(segment, {})
        node[leaf] = value

    def put_default(self, path: str, value: Any) -> None:
        """Like ``put`` but never replaces a value already collected."""
        if is_empty(self.get(path)):
            self.put(path, value)

    def build(self, warnings: List[str]) -> PartialPropertyRecord:
        data = self.data
        try:
            return PartialPropertyRecord.model_validate(data)
        except ValidationError as exc:
            for err in exc.errors():
                loc = ".".join(str(p) for p in err.get("loc", ()))
                warnings.append(f"dropped '{loc}': {err.get('msg')}")
                _drop(data, err.get("loc", ()))
        try:
            return PartialPropertyRecord.model_validate(data)
        except ValidationError as exc:
            warnings.append(f"record rejected: {exc.error_count()} validation errors")
            return PartialPropertyRecord()


def _drop(data: Dict[str, Any], loc: Any) -> None:
    keys = [k for k in loc if isinstance(k, str)]
    if not keys:
        return
    node: Any = data
    for key in keys[:-1]:
        if not isinstance(node, dict):
            return
        node = node.get(key)
    if isinstance(node, dict):
        node.pop(keys[-1], None)


def finish(builder: RecordBuilder, warnings: List[str], source_name: str) -> ExtractionResult:
    record = builder.build(warnings)
    # Richer extractors revisit the same nodes.
    warnings = list(dict.fromkeys(warnings))
    for w in warnings:
        logger.debug("%s: %s", source_name, w)
    return ExtractionResult(record=record, warnings=warnings)
