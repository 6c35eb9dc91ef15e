"""Tests for the HTTP sidecar."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import json
import threading
import urllib.error
import urllib.request

import pytest

from promptfence.server import make_server


@pytest.fixture
def base_url():
    server = make_server(port=0, config={"preset": "finance"})
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[:2]
    yield f"http://{host}:{port}"
    server.shutdown()
    server.server_close()


def _request(url, payload=None, raw=None):
    data = raw if raw is not None else (json.dumps(payload).encode() if payload is not None else None)
    req = urllib.request.Request(url, data=data, headers={"Content-Type": "application/json"})
    try:
        with urllib.request.urlopen(req, timeout=5) as resp:
            return resp.status, json.loads(resp.read())
    except urllib.error.HTTPError as e:
        return e.code, json.loads(e.read())


def test_health(base_url):
    status, body = _request(f"{base_url}/health")
    assert status == 200
    assert body["status"] == "ok"


def test_presets(base_url):
    status, body = _request(f"{base_url}/presets")
    assert status == 200
    assert body["presets"]["finance"]["IBAN"] == "BLOCK"


def test_check_uses_server_preset(base_url):
    status, body = _request(f"{base_url}/check", {"text": "Pay DE89370400440532013000"})
    assert status == 200
    assert body["preset"] == "finance"
    assert body["action"] == "BLOCK"
    assert body["types"] == ["IBAN"]
    assert "text" not in body


def test_check_request_overrides(base_url):
    status, body = _request(f"{base_url}/check", {
        "text": "Pay DE89370400440532013000",
        "enableBlock": False,
    })
    assert status == 200
    assert body["action"] == "ALLOW"

    status, body = _request(f"{base_url}/check", {
        "text": "mail a@b.com",
        "preset": "developer",
        "rules": {"EMAIL": "BLOCK"},
        "anonymize": True,
    })
    assert body["preset"] == "developer"
    assert body["action"] == "BLOCK"
    assert body["text"] == "mail [EMAIL]"


def test_anonymize(base_url):
    status, body = _request(f"{base_url}/anonymize", {"text": "contact a@b.com now"})
    assert status == 200
    assert body == {"text": "contact [EMAIL] now"}


def test_bad_json(base_url):
    status, body = _request(f"{base_url}/check", raw=b"{not json")
    assert status == 400
    assert "error" in body


def test_text_must_be_string(base_url):
    status, _ = _request(f"{base_url}/check", {"text": 42})
    assert status == 400


def test_unknown_path(base_url):
    status, _ = _request(f"{base_url}/nope")
    assert status == 404
    status, _ = _request(f"{base_url}/nope", {"text": ""})
    assert status == 404
