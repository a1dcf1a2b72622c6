from __future__ import annotations

import csv
import io
import json
import logging
import re
from typing import Any, Mapping

from property_reconciler.feature_flags import get_flags
from property_reconciler.report import report
from property_reconciler.schema.provenance import ProvenanceEntry
from property_reconciler.schema.records import MergedRecord


logger = logging.getLogger("prc.export")

FORMATS = ("json", "csv", "summary")
CSV_HEADER = ["Field", "Value", "Source", "Confidence"]

_FILENAME_UNSAFE_RE = re.compile(r"[^a-zA-Z0-9]")


def stringify(value: Any) -> str:
    """Cell text for a leaf value.

    Booleans are lowercase, integral floats drop the ``.0``, lists join on
    commas.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(v) for v in value)
    if isinstance(value, dict):
        return json.dumps(value, sort_keys=True, ensure_ascii=False)
    return str(value)


def neutralize_csv_field(value: Any) -> str:
    text = stringify(value)
    if isinstance(value, str) and text.startswith(("=", "+", "-", "@")):
        return "'" + text
    return text


def _csv_rows(provenance: Mapping[str, ProvenanceEntry]):
    for entry in provenance.values():
        yield [entry.field_path, entry.value, entry.source, str(entry.confidence)]


def to_csv(provenance: Mapping[str, ProvenanceEntry], *, quoting: bool = False) -> str:
    if not quoting:
        # Plain comma join; values containing commas are not escaped.
        lines = [",".join(CSV_HEADER)]
        lines.extend(
            ",".join([path, stringify(value), source, confidence])
            for path, value, source, confidence in _csv_rows(provenance)
        )
        return "\n".join(lines)

    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for path, value, source, confidence in _csv_rows(provenance):
        writer.writerow([path, neutralize_csv_field(value), source, confidence])
    return buf.getvalue().rstrip("\n")


def to_summary(provenance: Mapping[str, ProvenanceEntry]) -> str:
    rep = report(provenance)
    lines = [
        "Data Completeness Report",
        "",
        f"Total Fields: {rep.total_fields}",
        f"Populated Fields: {rep.populated_fields}",
        f"Completion: {rep.completion_percentage}%",
        "",
        "By Source:",
    ]
    lines.extend(f"{source}: {len(entries)} fields" for source, entries in rep.by_source.items())
    lines.extend(["", "By Confidence:"])
    lines.extend(f"{tier}: {len(entries)} fields" for tier, entries in rep.by_confidence.items())
    return "\n".join(lines)


def to_json(merged: MergedRecord, provenance: Mapping[str, ProvenanceEntry]) -> str:
    payload = {
        "data": merged.to_dict(),
        "sourceMap": {path: entry.to_dict() for path, entry in provenance.items()},
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)


def export(
    merged: MergedRecord,
    provenance: Mapping[str, ProvenanceEntry],
    fmt: str = "json",
) -> str:
    """Encode a merge result as ``json``, ``csv`` or ``summary`` text.

    Unknown formats fall back to JSON unless the ``strict_export_format``
    flag is on, in which case they raise ``ValueError``.
    """
    flags = get_flags()
    if fmt == "csv":
        return to_csv(provenance, quoting=flags.csv_quoting)
    if fmt == "summary":
        return to_summary(provenance)
    if fmt != "json":
        if flags.strict_export_format:
            raise ValueError(f"Unsupported export format: {fmt!r}")
        logger.warning("unsupported export format %r; using json", fmt)
    return to_json(merged, provenance)


def export_filename(address: str, fmt: str) -> str:
    """Download name for an exported file, e.g. ``property-data-1-Main-St.csv``."""
    return f"property-data-{_FILENAME_UNSAFE_RE.sub('-', address or '')}.{fmt}"
