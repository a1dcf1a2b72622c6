import socket
import urllib.request

import pytest


def test_extraction_runs_offline():
    with pytest.raises(RuntimeError):
        urllib.request.urlopen("https://api.gateway.attomdata.com/propertyapi/v1.0.0/property/detail", timeout=1)


def test_sockets_blocked_outside_localhost():
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        with pytest.raises(RuntimeError):
            sock.connect(("203.0.113.10", 443))
    finally:
        sock.close()
