"""Glue between the handler chain and ``http.server``.

Every connection runs a :class:`DashRequestHandler`. It dispatches all
methods to the server's handler chain and exposes the small surface the
chain needs (pending headers, ``respond``, ``serve_file``).
"""

from __future__ import annotations

import logging
from functools import partial
from http import HTTPStatus
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union
from urllib.parse import unquote, urlsplit

from dashserve.config.settings import (
    IDLE_TIMEOUT,
    MAX_HEADER_BYTES,
    READ_TIMEOUT,
    WRITE_TIMEOUT,
)
from dashserve.core.types import Handler

logger = logging.getLogger(__name__)

INDEX_PAGE = "index.html"

# Larger unread bodies close the connection instead of being skipped.
MAX_DISCARD_BYTES = 256 * 1024


class DashRequestHandler(SimpleHTTPRequestHandler):
    """Request handler that hands every request to ``server.app``."""

    protocol_version = "HTTP/1.1"
    server_version = "dashserve"

    # Socket timeout for reading a request and writing its response.
    timeout = max(READ_TIMEOUT, WRITE_TIMEOUT)

    server: "DashHTTPServer"

    def setup(self) -> None:
        super().setup()
        self._requests_seen = 0
        self._reset_exchange()

    def _reset_exchange(self) -> None:
        self.header_overrides: Dict[str, str] = {}
        self.content_type_override: Optional[str] = None
        self.status_code: Optional[int] = None

    # ── connection lifecycle ────────────────────────────────────────
    def handle_one_request(self) -> None:
        # Between requests on a kept-alive connection the idle timeout applies.
        if self._requests_seen:
            self.connection.settimeout(IDLE_TIMEOUT)
        self._reset_exchange()
        super().handle_one_request()
        self._requests_seen += 1

    def parse_request(self) -> bool:
        self.connection.settimeout(self.timeout)
        if not super().parse_request():
            return False
        header_bytes = sum(len(k) + len(v) + 4 for k, v in self.headers.items())
        if header_bytes > MAX_HEADER_BYTES:
            self.send_error(HTTPStatus.REQUEST_HEADER_FIELDS_TOO_LARGE)
            return False
        return True

    # ── dispatch ────────────────────────────────────────────────────
    def _dispatch(self) -> None:
        self._discard_body()
        self.server.app(self)

    do_GET = _dispatch
    do_HEAD = _dispatch

    def __getattr__(self, name: str) -> Any:
        # Any other method token (POST, TRACE, PROPFIND, ...) goes through the chain too.
        if name.startswith("do_"):
            return self._dispatch
        raise AttributeError(name)

    def _discard_body(self) -> None:
        """Skip an unread request body so the connection can be reused."""
        if self.headers.get("Transfer-Encoding"):
            self.close_connection = True
            return
        try:
            length = int(self.headers.get("Content-Length", 0))
        except ValueError:
            self.close_connection = True
            return
        if length > MAX_DISCARD_BYTES:
            self.close_connection = True
        elif length > 0:
            self.rfile.read(length)

    # ── exchange surface used by handlers ───────────────────────────
    @property
    def url_path(self) -> str:
        return unquote(urlsplit(self.path).path) or "/"

    def respond(
        self,
        status: int,
        body: bytes = b"",
        content_type: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        self.send_response(status)
        if content_type is not None:
            self.send_header("Content-Type", content_type)
        for name, value in (headers or {}).items():
            self.send_header(name, value)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        if body and self.command != "HEAD":
            self.wfile.write(body)

    def serve_file(self) -> None:
        if self.url_path.endswith("/" + INDEX_PAGE):
            query = urlsplit(self.path).query
            location = "./" + ("?" + query if query else "")
            self.respond(HTTPStatus.MOVED_PERMANENTLY, headers={"Location": location})
            return
        if self.command == "HEAD":
            super().do_HEAD()
        else:
            super().do_GET()

    # ── http.server hooks ───────────────────────────────────────────
    def send_response(self, code: int, message: Optional[str] = None) -> None:
        self.status_code = int(code)
        super().send_response(code, message)

    def end_headers(self) -> None:
        for name, value in self.header_overrides.items():
            self.send_header(name, value)
        super().end_headers()

    def guess_type(self, path: str) -> str:  # type: ignore[override]
        if self.content_type_override:
            return self.content_type_override
        return super().guess_type(path)

    def log_message(self, format: str, *args: Any) -> None:  # noqa: A002
        logger.debug("%s - %s", self.address_string(), format % args)

    def log_error(self, format: str, *args: Any) -> None:  # noqa: A002
        logger.warning("%s - %s", self.address_string(), format % args)


class DashHTTPServer(ThreadingHTTPServer):
    """Threaded HTTP server serving ``directory`` through ``app``."""

    def __init__(
        self,
        server_address: Tuple[str, int],
        app: Handler,
        directory: Union[str, Path],
        bind_and_activate: bool = True,
    ) -> None:
        self.app = app
        self.directory = str(directory)
        handler_cls = partial(DashRequestHandler, directory=self.directory)
        super().__init__(server_address, handler_cls, bind_and_activate)  # type: ignore[arg-type]

    def handle_error(self, request: Any, client_address: Tuple[str, int]) -> None:
        logger.exception("Unhandled error while serving %s:%s", *client_address[:2])
