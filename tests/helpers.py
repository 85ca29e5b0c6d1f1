from __future__ import annotations

import http.client
from typing import Dict, List, Optional, Tuple


class FakeExchange:
    """In-memory stand-in for DashRequestHandler."""

    def __init__(self, command: str = "GET", path: str = "/") -> None:
        self.command = command
        self.path = path
        self.client_address: Tuple[str, int] = ("127.0.0.1", 54321)
        self.header_overrides: Dict[str, str] = {}
        self.content_type_override: Optional[str] = None
        self.status_code: Optional[int] = None
        self.responses: List[dict] = []
        self.files_served = 0

    @property
    def url_path(self) -> str:
        return self.path.split("?", 1)[0]

    def respond(self, status, body=b"", content_type=None, headers=None) -> None:
        self.status_code = status
        self.responses.append(
            {
                "status": status,
                "body": body,
                "content_type": content_type,
                "headers": dict(headers or {}),
                "overrides": dict(self.header_overrides),
            }
        )

    def serve_file(self) -> None:
        self.status_code = 200
        self.files_served += 1


def request(
    address: Tuple[str, int],
    method: str,
    path: str,
    headers: Optional[Dict[str, str]] = None,
) -> Tuple[http.client.HTTPResponse, bytes]:
    conn = http.client.HTTPConnection(*address, timeout=5)
    try:
        conn.request(method, path, headers=headers or {})
        resp = conn.getresponse()
        body = resp.read()
        return resp, body
    finally:
        conn.close()
