"""HTTP server for feeds.

Routes:
- GET /rss/{token}, /atom/{token}, /json/{token}: rendered feed
- GET /health: service status
- POST /feeds: register a repository (only with server.allow_registration)
"""

import json
import logging
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from issuefeed.config import AppConfig
from issuefeed.errors import FeedRenderError, InvalidTokenError, RegistrationError
from issuefeed.feeds.render import FORMATS, render_feed
from issuefeed.scanner import RepoScanner

LOG = logging.getLogger("issuefeed.server")


class RegistrationRequest(BaseModel):
    """Body of POST /feeds."""

    owner: str = Field(min_length=1)
    repo: str = Field(min_length=1)
    labels: list[str] = Field(default_factory=list)


def feed_links(base_url: str, token: str) -> dict[str, str]:
    base = base_url.rstrip("/")
    return {fmt: f"{base}/{fmt}/{token}" for fmt in FORMATS}


class FeedHandler(BaseHTTPRequestHandler):
    """Serve feeds by token; bound to a scanner and config by make_server."""

    config: AppConfig
    scanner: RepoScanner

    def do_GET(self) -> None:
        path = self.path.split("?", 1)[0]
        if path in ("/health", "/"):
            self._send_json(200, {"status": "ok", "service": "issuefeed", "feeds": len(self.scanner.repositories)})
            return
        parts = path.strip("/").split("/")
        if len(parts) == 2 and parts[0] in FORMATS:
            self._serve_feed(parts[0], parts[1])
            return
        self._send_text(404, "not found")

    def do_POST(self) -> None:
        path = self.path.split("?", 1)[0].rstrip("/")
        if path == "/feeds" and self.config.server.allow_registration:
            self._register()
            return
        self._send_text(404, "not found")

    def _serve_feed(self, fmt: str, token: str) -> None:
        try:
            stream = self.scanner.resolve_feed(token)
        except InvalidTokenError as e:
            LOG.warning("Rejected %s feed request for token %r", fmt, token)
            self._send_text(404, str(e))
            return
        try:
            body, content_type = render_feed(stream, fmt)
        except FeedRenderError as e:
            LOG.exception("Rendering %s feed %s failed", fmt, token)
            self._send_text(500, str(e))
            return
        self._send(200, body.encode("utf-8"), content_type)

    def _register(self) -> None:
        try:
            length = int(self.headers.get("Content-Length", 0))
        except ValueError:
            length = -1
        if length < 0:
            self._send_json(400, {"error": "invalid Content-Length"})
            return
        body = self.rfile.read(length) if length else b""
        try:
            request = RegistrationRequest.model_validate_json(body or b"{}")
        except ValidationError as e:
            self._send_json(400, {"error": "invalid request", "details": json.loads(e.json(include_url=False))})
            return
        try:
            token = self.scanner.register_repository(request.owner, request.repo, request.labels)
        except RegistrationError as e:
            LOG.warning("Registration of %s/%s failed: %s", request.owner, request.repo, e)
            self._send_json(502, {"error": str(e)})
            return
        base_url = self.config.server.public_url or f"http://{self.headers.get('Host', 'localhost')}"
        self._send_json(201, {"token": token, **feed_links(base_url, token)})

    def _send_text(self, status: int, text: str) -> None:
        self._send(status, text.encode("utf-8"), "text/plain; charset=utf-8")

    def _send_json(self, status: int, payload: dict[str, Any]) -> None:
        self._send(status, json.dumps(payload).encode("utf-8"), "application/json")

    def _send(self, status: int, body: bytes, content_type: str) -> None:
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args: Any) -> None:
        LOG.debug(format, *args)


def make_server(config: AppConfig, scanner: RepoScanner) -> ThreadingHTTPServer:
    """Build a threaded server with a handler class bound to config and scanner."""
    handler = type("BoundFeedHandler", (FeedHandler,), {"config": config, "scanner": scanner})
    return ThreadingHTTPServer((config.server.host, config.server.port), handler)


def run_feed_server(config: AppConfig, scanner: RepoScanner) -> None:
    """Serve feeds until interrupted."""
    server = make_server(config, scanner)
    LOG.info("Feed server listening on %s:%s", config.server.host, config.server.port)
    try:
        server.serve_forever()
    finally:
        server.server_close()
