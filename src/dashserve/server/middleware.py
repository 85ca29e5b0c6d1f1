"""Cross-cutting wrappers. Each takes a handler and returns a new one."""

from __future__ import annotations

import logging
import time

from dashserve.core.types import Exchange, Handler

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


def with_logging(inner: Handler) -> Handler:
    """Log each request on entry and its duration on exit.

    The completion line is written even when ``inner`` raises; the
    exception itself is left to the HTTP stack.
    """

    def handler(exchange: Exchange) -> None:
        start = time.perf_counter()
        method, path = exchange.command, exchange.url_path
        host, port = exchange.client_address[:2]
        remote = f"{host}:{port}"
        logger.info(
            "%s %s from %s",
            method,
            path,
            remote,
            extra={"method": method, "path": path, "remote": remote},
        )
        try:
            inner(exchange)
        finally:
            duration_ms = (time.perf_counter() - start) * 1000.0
            logger.info(
                "Completed %s %s in %.3fms",
                method,
                path,
                duration_ms,
                extra={
                    "method": method,
                    "path": path,
                    "remote": remote,
                    "status": exchange.status_code,
                    "duration_ms": duration_ms,
                },
            )

    return handler


def with_cors(inner: Handler) -> Handler:
    """Allow every origin and answer preflight requests directly."""
    logger.warning(
        "CORS allows any origin together with the Authorization header; "
        "only suitable for local development"
    )

    def handler(exchange: Exchange) -> None:
        exchange.header_overrides.update(CORS_HEADERS)
        if exchange.command == "OPTIONS":
            exchange.respond(200)
            return
        inner(exchange)

    return handler
