import json
import os
import socket
import sys
import urllib.request
from pathlib import Path

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
SRC = REPO_ROOT / "src"
FIXTURES = REPO_ROOT / "tests" / "fixtures" / "attom"

# Prefer repo sources over any installed package.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def block_network(monkeypatch):
    if os.getenv("LIVE") == "1":
        return

    real_connect = socket.socket.connect

    def guarded_connect(sock, address):
        host = address[0]
        if host not in ("127.0.0.1", "localhost"):
            raise RuntimeError("Network access blocked in tests")
        return real_connect(sock, address)

    monkeypatch.setattr(socket.socket, "connect", guarded_connect)
    monkeypatch.setattr(
        urllib.request,
        "urlopen",
        lambda *args, **kwargs: (_ for _ in ()).throw(
            RuntimeError("Network access blocked in tests")
        ),
    )


@pytest.fixture(autouse=True)
def default_flags(monkeypatch):
    from property_reconciler.feature_flags import reset_flags_cache

    for name in (
        "PRC_FEATURE_CSV_QUOTING",
        "PRC_FEATURE_STRICT_EXPORT_FORMAT",
        "PRC_FEATURE_WARN_ON_TIED_CONFLICTS",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_flags_cache()
    yield
    reset_flags_cache()


@pytest.fixture
def attom_payload():
    def _load(name):
        return json.loads((FIXTURES / f"{name}.json").read_text(encoding="utf-8"))

    return _load


@pytest.fixture
def fixture_path():
    def _path(name):
        return FIXTURES / f"{name}.json"

    return _path
