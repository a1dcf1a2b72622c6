import argparse
import json
import logging
import sys
from pathlib import Path

from .exporters import FORMATS
from .extractors import DEFAULT_PRIORITIES
from .pipeline import RawSource, reconcile


SOURCE_ARGS = [
    ("basic_profile", "basicProfile", "Basic profile response (JSON file)"),
    ("expanded_profile", "expandedProfile", "Expanded profile response (JSON file)"),
    ("property_detail", "propertyDetail", "Property detail response (JSON file)"),
    ("sale_details", "saleDetails", "Sale detail response (JSON file)"),
    ("expanded_sale_details", "expandedSaleDetails", "Expanded sale detail response (JSON file)"),
]


def _parse_priorities(parser, values):
    priorities = {}
    for raw in values or []:
        name, sep, rank = raw.partition("=")
        name = name.strip()
        if not sep or name not in DEFAULT_PRIORITIES:
            parser.error(f"--priority expects SOURCE=N with a known source, got {raw!r}")
        try:
            priorities[name] = int(rank)
        except ValueError:
            parser.error(f"--priority rank must be an integer, got {rank!r}")
    return priorities


def _load_payload(parser, path_str):
    path = Path(path_str)
    if not path.exists():
        parser.error(f"payload file does not exist: {path_str}")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        parser.error(f"payload file is not valid JSON: {path_str} ({exc})")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Reconcile property data from several provider responses",
    )

    for dest, _name, help_text in SOURCE_ARGS:
        parser.add_argument(
            f"--{dest.replace('_', '-')}",
            dest=dest,
            default=None,
            help=help_text,
        )

    parser.add_argument(
        "--priority",
        action="append",
        default=None,
        help="Override a source rank, e.g. saleDetails=4 (repeatable)",
    )

    parser.add_argument(
        "--format",
        choices=list(FORMATS),
        default="json",
        help="Output encoding",
    )

    parser.add_argument(
        "--output",
        default=None,
        help="Write the export to a file instead of stdout",
    )

    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (DEBUG, INFO, etc.)",
    )

    parser.add_argument(
        "--log-json",
        action="store_true",
        help="Emit one JSON log line per source on stderr",
    )

    args = parser.parse_args(argv)

    if args.log_level:
        logging.basicConfig(level=args.log_level.upper(), stream=sys.stderr)

    priorities = _parse_priorities(parser, args.priority)

    raw_sources = []
    for dest, name, _help in SOURCE_ARGS:
        path_str = getattr(args, dest)
        if not path_str:
            continue
        raw_sources.append(
            RawSource(
                name=name,
                payload=_load_payload(parser, path_str),
                priority=priorities.get(name),
            )
        )
    if not raw_sources:
        parser.error("at least one provider response file is required")

    result = reconcile(raw_sources)
    rendered = result.export(args.format)

    if args.output:
        Path(args.output).write_text(rendered + "\n", encoding="utf-8")
    else:
        print(rendered)

    if args.log_json:
        won = result.report().by_source
        for raw in raw_sources:
            entry = {
                "source": raw.name,
                "priority": raw.priority if raw.priority is not None else DEFAULT_PRIORITIES[raw.name],
                "fields_won": len(won.get(raw.name, [])),
                "warnings": result.warnings.get(raw.name, []),
                "status": "won_fields" if won.get(raw.name) else "no_fields_won",
            }
            print(json.dumps(entry), file=sys.stderr)
        summary = {
            "total_sources": len(raw_sources),
            "total_fields": len(result.result.provenance),
            "completeness": result.result.merged.data_completeness,
            "conflicts": len(result.result.conflicts),
            "tied_conflicts": len(result.result.tied_conflicts()),
        }
        print(json.dumps(summary), file=sys.stderr)


def _safe_main():
    try:
        main()
    except SystemExit:
        raise
    except Exception as exc:
        print(json.dumps({"error": str(exc)}))
        raise SystemExit(1)


if __name__ == "__main__":
    _safe_main()
