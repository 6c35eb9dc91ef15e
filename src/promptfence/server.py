"""HTTP sidecar server for promptfence, used for server-side re-checks.

Runs a small stdlib HTTP server on localhost so a gateway can re-run the
same detection and policy logic the browser runs, without spawning a
process per request.

Endpoints:
    POST /check        — Detect + decide (JSON body)
    POST /anonymize    — Anonymize text (JSON body)
    GET  /presets      — Preset ids and rules
    GET  /health       — Health check

Body format for /check:
    {"text": "...", "preset": "finance", "rules": {"ADDRESS": "BLOCK"},
     "enable_warn": true, "enable_block": true, "anonymize": false}

Policy fields missing from the body fall back to the server's config.
Responses carry types and offsets, never the matched text.
"""

from __future__ import annotations
import json
import logging
import os
from http.server import HTTPServer, BaseHTTPRequestHandler
from typing import Any

from .config import build_policy, create_scanner, load_config, load_from_yaml
from .presets import PRESETS
from .scanner import Scanner

logger = logging.getLogger(__name__)

DEFAULT_PORT = int(os.environ.get("PROMPTFENCE_PORT", "18792"))

_POLICY_KEYS = (
    ("preset", "preset"),
    ("rules", "rules"),
    ("enable_warn", "enableWarn"),
    ("enable_block", "enableBlock"),
)

# Shared state, set by serve()
_config: dict[str, Any] = load_config({})
_scanner: Scanner | None = None


def _get_scanner() -> Scanner:
    global _scanner
    if _scanner is None:
        _scanner = create_scanner(_config)
    return _scanner


def _request_config(body: dict[str, Any]) -> dict[str, Any]:
    """Server config with the request's policy fields layered on top."""
    overrides: dict[str, Any] = {}
    for key, alias in _POLICY_KEYS:
        if key in body:
            overrides[key] = body[key]
        elif alias in body:
            overrides[key] = body[alias]
    return load_config({**_config, **overrides})


def _require_text(body: dict[str, Any]) -> str:
    text = body.get("text", "")
    if not isinstance(text, str):
        raise ValueError("text must be a string")
    return text


class CheckHandler(BaseHTTPRequestHandler):
    """HTTP request handler for the promptfence sidecar."""

    def _read_json(self) -> dict[str, Any]:
        length = int(self.headers.get("Content-Length", 0))
        body = self.rfile.read(length).decode("utf-8")
        data = json.loads(body) if body else {}
        if not isinstance(data, dict):
            raise ValueError("body must be a JSON object")
        return data

    def _respond(self, status: int, data: Any) -> None:
        body = json.dumps(data, ensure_ascii=False).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args: Any) -> None:
        logger.debug("%s - %s", self.address_string(), format % args)

    def do_GET(self) -> None:
        if self.path == "/health":
            self._respond(200, {"status": "ok", "presets": len(PRESETS)})
        elif self.path == "/presets":
            self._respond(200, {
                "presets": {
                    pid: {t.value: a.name for t, a in p.rules.items()}
                    for pid, p in PRESETS.items()
                },
            })
        else:
            self._respond(404, {"error": "not found"})

    def do_POST(self) -> None:
        try:
            body = self._read_json()
            scanner = _get_scanner()

            if self.path == "/check":
                text = _require_text(body)
                policy = build_policy(_request_config(body))
                result = scanner.check(text, policy)
                out = {"preset": policy.preset.id, **result.to_dict()}
                if body.get("anonymize"):
                    out["text"] = scanner.anonymize(text, result.matches)
                self._respond(200, out)

            elif self.path == "/anonymize":
                text = _require_text(body)
                self._respond(200, {"text": scanner.anonymize(text)})

            else:
                self._respond(404, {"error": "not found"})

        except ValueError as e:
            # json.JSONDecodeError is a ValueError
            self._respond(400, {"error": str(e)})
        except Exception as e:
            logger.exception("Unhandled error on %s", self.path)
            self._respond(500, {"error": str(e)})


def make_server(host: str = "127.0.0.1", port: int = DEFAULT_PORT,
                config: dict[str, Any] | None = None) -> HTTPServer:
    """Configure shared state and bind the server (port 0 picks a free port)."""
    global _config, _scanner
    _config = load_config(config or {})
    _scanner = None
    return HTTPServer((host, port), CheckHandler)


def serve(port: int = DEFAULT_PORT, config: dict[str, Any] | None = None) -> None:
    """Start the promptfence HTTP sidecar."""
    server = make_server(port=port, config=config)
    logger.info("promptfence sidecar listening on http://127.0.0.1:%d", port)
    logger.info("  default preset: %s", _config["preset"])
    logger.info("  presidio: %s", "enabled" if _config["use_presidio"] else "disabled")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down...")
    finally:
        server.server_close()


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="promptfence HTTP sidecar")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--config", default=None, help="YAML config file")
    args = parser.parse_args()
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s | %(message)s",
    )
    serve(port=args.port, config=load_from_yaml(args.config) if args.config else None)
