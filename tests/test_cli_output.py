import json
import os
import subprocess
import sys
from pathlib import Path


REPO_ROOT = Path(__file__).resolve().parents[1]


def _run(*args):
    env = dict(os.environ)
    env["PYTHONPATH"] = str(REPO_ROOT / "src")
    for name in list(env):
        if name.startswith("PRC_FEATURE_"):
            env.pop(name)
    cmd = [sys.executable, "-m", "property_reconciler", *args]
    return subprocess.run(cmd, capture_output=True, text=True, check=False, env=env)


def test_cli_json_output(fixture_path):
    proc = _run(
        "--basic-profile",
        str(fixture_path("basic_profile")),
        "--property-detail",
        str(fixture_path("property_detail")),
    )
    assert proc.returncode == 0, proc.stderr
    payload = json.loads(proc.stdout)
    assert payload["data"]["building"]["yearBuilt"] == 1925
    assert payload["sourceMap"]["building.yearBuilt"]["source"] == "propertyDetail"


def test_cli_csv_output_to_file(fixture_path, tmp_path):
    output_path = tmp_path / "out.csv"
    proc = _run(
        "--sale-details",
        str(fixture_path("sale_details")),
        "--format",
        "csv",
        "--output",
        str(output_path),
    )
    assert proc.returncode == 0, proc.stderr
    assert proc.stdout == ""
    lines = output_path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "Field,Value,Source,Confidence"
    assert "market.lastSalePrice,1275000,saleDetails,high" in lines
    assert "market.priorSalePrice,800000,saleDetails,high" in lines


def test_cli_log_json(fixture_path):
    proc = _run(
        "--basic-profile",
        str(fixture_path("basic_profile")),
        "--property-detail",
        str(fixture_path("property_detail")),
        "--priority",
        "basicProfile=5",
        "--format",
        "summary",
        "--log-json",
    )
    assert proc.returncode == 0, proc.stderr
    assert proc.stdout.startswith("Data Completeness Report")
    entries = [json.loads(line) for line in proc.stderr.splitlines() if line.startswith("{")]
    by_source = {e["source"]: e for e in entries if "source" in e}
    assert by_source["basicProfile"]["priority"] == 5
    assert by_source["basicProfile"]["status"] == "won_fields"
    assert by_source["propertyDetail"]["priority"] == 3
    summary = entries[-1]
    assert summary["total_sources"] == 2
    assert summary["completeness"] == 100


def test_cli_requires_a_source():
    proc = _run("--format", "json")
    assert proc.returncode == 2
    assert "at least one" in proc.stderr


def test_cli_missing_file(tmp_path):
    proc = _run("--basic-profile", str(tmp_path / "nope.json"))
    assert proc.returncode == 2
    assert "does not exist" in proc.stderr


def test_cli_rejects_bad_priority(fixture_path):
    proc = _run("--basic-profile", str(fixture_path("basic_profile")), "--priority", "zillow=3")
    assert proc.returncode == 2
