from __future__ import annotations

from typing import Callable, Dict, Optional, Protocol, Tuple


class Exchange(Protocol):
    """One HTTP request/response pair as seen by handlers and middleware.

    ``header_overrides`` holds headers that are written when the response
    head is flushed, whoever ends up sending it.
    """

    command: str
    path: str
    client_address: Tuple[str, int]
    header_overrides: Dict[str, str]
    content_type_override: Optional[str]
    status_code: Optional[int]

    @property
    def url_path(self) -> str: ...

    def respond(
        self,
        status: int,
        body: bytes = b"",
        content_type: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None: ...

    def serve_file(self) -> None: ...


Handler = Callable[[Exchange], None]
