"""HTTP byte server.

Endpoints:

    GET /api/random?count=N&source=urandom|lcg|math
    GET /api/health
    GET /api/sources
"""

from __future__ import annotations

import json
import logging
import time
from http.server import BaseHTTPRequestHandler, HTTPServer
from urllib.parse import parse_qs, urlparse

from randviz.config import DEFAULT_SOURCE
from randviz.service import ByteService

logger = logging.getLogger(__name__)


def _make_handler(service: ByteService):
    """Create request handler with service reference."""

    class RandomHandler(BaseHTTPRequestHandler):
        _service = service

        def do_GET(self) -> None:
            parsed = urlparse(self.path)
            path = parsed.path.rstrip("/")
            params = parse_qs(parsed.query)

            if path == "/api/random":
                self._handle_random(params)
            elif path == "/api/health":
                self._handle_health()
            elif path == "/api/sources":
                self._handle_sources()
            else:
                self._json_response(404, {"error": "not found"})

        def _handle_random(self, params: dict) -> None:
            source = params.get("source", [DEFAULT_SOURCE])[0]
            count = params.get("count", [None])[0]
            try:
                payload = self._service.fetch(source, count)
            except Exception as e:
                logger.error("failed to produce bytes from %r: %s", source, e)
                self._json_response(500, {
                    "error": "Failed to read random data",
                    "message": str(e),
                })
                return
            self._json_response(200, payload)

        def _handle_health(self) -> None:
            self._json_response(200, {"status": "ok", "timestamp": int(time.time() * 1000)})

        def _handle_sources(self) -> None:
            self._json_response(200, {"sources": self._service.describe_sources()})

        def _json_response(self, code: int, data: dict) -> None:
            body = json.dumps(data).encode()
            self.send_response(code)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(body)))
            self.send_header("Access-Control-Allow-Origin", "*")
            self.end_headers()
            self.wfile.write(body)

        def log_message(self, format, *args):
            logger.debug("%s - %s", self.address_string(), format % args)

    return RandomHandler


def make_server(service: ByteService, host: str = "127.0.0.1", port: int = 3000) -> HTTPServer:
    return HTTPServer((host, port), _make_handler(service))


def run_server(service: ByteService, host: str = "127.0.0.1", port: int = 3000) -> None:
    """Run the HTTP server until interrupted."""
    server = make_server(service, host, port)
    logger.info("serving on http://%s:%d", host, port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()
