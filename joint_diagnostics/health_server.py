"""HTTP health endpoint for the diagnostics reporter."""

from __future__ import annotations

from http.server import BaseHTTPRequestHandler, HTTPServer
import json
from typing import Callable, Dict

LIVE_PATH = "/health/live"
READY_PATHS = ("/health", "/health/ready")


def readiness_code(snapshot: Dict[str, object]) -> int:
    """Return 200 when the last diagnostics cycle was healthy, 503 otherwise."""
    return 200 if snapshot.get("status") == "healthy" else 503


class HealthHandler(BaseHTTPRequestHandler):
    """
    Serves the runtime health snapshot as JSON.

    ``/health/live`` answers 200 while the process serves requests.
    ``/health`` and ``/health/ready`` answer 503 while joint diagnostics are degraded.
    """

    def do_GET(self) -> None:  # noqa: N802
        if self.path == LIVE_PATH:
            self._send_json(200, {"status": "alive"})
            return
        if self.path not in READY_PATHS:
            self.send_response(404)
            self.end_headers()
            return

        snapshot = self.server.get_health()  # type: ignore[attr-defined]
        self._send_json(readiness_code(snapshot), snapshot)

    def _send_json(self, code: int, payload: Dict[str, object]) -> None:
        body = json.dumps(payload, ensure_ascii=False).encode("utf-8")
        self.send_response(code)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args: object) -> None:  # noqa: A002
        return


class HealthServer(HTTPServer):
    """HTTP server that reads health from a runtime snapshot callback."""

    def __init__(self, host: str, port: int, get_health: Callable[[], Dict[str, object]]) -> None:
        self.get_health = get_health
        super().__init__((host, port), HealthHandler)
