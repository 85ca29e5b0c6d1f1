"""Terminal handlers (health, static files) and the path router."""

from __future__ import annotations

import posixpath
from typing import Dict, Optional

from dashserve.core.types import Exchange, Handler
from dashserve.server.mime import content_type_for

HEALTH_BODY = b'{"status":"ok","message":"Server is running"}'

NO_CACHE_HEADERS: Dict[str, str] = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}

def health(exchange: Exchange) -> None:
    exchange.header_overrides.update(NO_CACHE_HEADERS)
    exchange.respond(200, HEALTH_BODY, content_type="application/json")


def static_files(exchange: Exchange) -> None:
    """Serve a file from the working directory with dev-friendly headers.

    The Content-Type comes from the URL path's extension when it is in the
    fixed table; otherwise the file server guesses. Caching is always off.
    Every method but HEAD gets the file body, as with GET.
    """
    exchange.header_overrides.update(NO_CACHE_HEADERS)
    ext = posixpath.splitext(exchange.url_path)[1]
    exchange.content_type_override = content_type_for(ext)
    exchange.serve_file()


class Router:
    """Exact-path routes plus a catch-all registered under ``/``."""

    def __init__(self) -> None:
        self._routes: Dict[str, Handler] = {}
        self._fallback: Optional[Handler] = None

    def add(self, path: str, handler: Handler) -> "Router":
        if path == "/":
            self._fallback = handler
        else:
            self._routes[path] = handler
        return self

    def __call__(self, exchange: Exchange) -> None:
        handler = self._routes.get(exchange.url_path, self._fallback)
        if handler is None:
            exchange.respond(404, b"404 page not found", content_type="text/plain; charset=utf-8")
            return
        handler(exchange)
