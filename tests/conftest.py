from __future__ import annotations

import threading
from pathlib import Path
from typing import Iterator, Tuple

import pytest

from dashserve.server.bootstrap import create_server

SITE_FILES = {
    "index.html": b"<!doctype html><title>dash</title>",
    "about.html": b"<!doctype html><title>about</title>",
    "styles/main.css": b"body { margin: 0; }",
    "scripts/app.js": b"console.log('app');",
    "data.json": b'{"user": "demo"}',
    "logo.png": b"\x89PNG\r\n\x1a\n",
    "photo.jpg": b"\xff\xd8\xff",
    "photo.jpeg": b"\xff\xd8\xff",
    "icon.svg": b"<svg xmlns='http://www.w3.org/2000/svg'/>",
    "favicon.ico": b"\x00\x00\x01\x00",
    "notes.txt": b"plain text",
}


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    root = tmp_path / "site"
    for rel, data in SITE_FILES.items():
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(data)
    return root


@pytest.fixture
def server_address(site_dir: Path) -> Iterator[Tuple[str, int]]:
    httpd = create_server("0", site_dir, host="127.0.0.1")
    t = threading.Thread(target=httpd.serve_forever, daemon=True)
    t.start()
    try:
        yield httpd.server_address[0], httpd.server_address[1]
    finally:
        httpd.shutdown()
        httpd.server_close()
        t.join(timeout=5)
