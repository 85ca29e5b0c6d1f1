from __future__ import annotations

import json

from dashserve.server.handlers import (
    HEALTH_BODY,
    NO_CACHE_HEADERS,
    Router,
    health,
    static_files,
)

from helpers import FakeExchange


def test_health_body_and_type() -> None:
    ex = FakeExchange("GET", "/health")
    health(ex)
    (resp,) = ex.responses
    assert resp["status"] == 200
    assert resp["content_type"] == "application/json"
    assert resp["body"] == b'{"status":"ok","message":"Server is running"}'
    assert json.loads(HEALTH_BODY) == {"status": "ok", "message": "Server is running"}


def test_health_any_method() -> None:
    ex = FakeExchange("DELETE", "/health")
    health(ex)
    assert ex.responses[0]["status"] == 200


def test_static_sets_no_cache_and_content_type() -> None:
    ex = FakeExchange("GET", "/styles/main.css?v=2")
    static_files(ex)
    assert ex.files_served == 1
    assert ex.content_type_override == "text/css; charset=utf-8"
    for k, v in NO_CACHE_HEADERS.items():
        assert ex.header_overrides[k] == v


def test_static_unknown_extension_leaves_type_alone() -> None:
    ex = FakeExchange("GET", "/notes.txt")
    static_files(ex)
    assert ex.files_served == 1
    assert ex.content_type_override is None


def test_static_serves_any_method() -> None:
    for method in ("POST", "PUT", "DELETE"):
        ex = FakeExchange(method, "/index.html")
        static_files(ex)
        assert ex.files_served == 1
        assert ex.responses == []
        assert ex.header_overrides["Cache-Control"] == "no-cache, no-store, must-revalidate"


def test_router_exact_and_fallback() -> None:
    seen = []
    router = (
        Router()
        .add("/health", lambda ex: seen.append(("health", ex.path)))
        .add("/", lambda ex: seen.append(("files", ex.path)))
    )
    router(FakeExchange("GET", "/health"))
    router(FakeExchange("GET", "/health/extra"))
    router(FakeExchange("GET", "/"))
    router(FakeExchange("GET", "/health?probe=1"))
    assert seen == [
        ("health", "/health"),
        ("files", "/health/extra"),
        ("files", "/"),
        ("health", "/health?probe=1"),
    ]


def test_router_without_fallback_404s() -> None:
    router = Router().add("/health", health)
    ex = FakeExchange("GET", "/missing")
    router(ex)
    assert ex.responses[0]["status"] == 404
