"""Fixed extension → MIME type table for served files."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

_UTF8 = "; charset=utf-8"

CONTENT_TYPES: Mapping[str, str] = MappingProxyType(
    {
        ".html": "text/html" + _UTF8,
        ".css": "text/css" + _UTF8,
        ".js": "application/javascript" + _UTF8,
        ".json": "application/json" + _UTF8,
        ".png": "image/png",
        ".jpg": "image/jpeg",
        ".jpeg": "image/jpeg",
        ".svg": "image/svg+xml",
        ".ico": "image/x-icon",
    }
)


def content_type_for(ext: str) -> Optional[str]:
    """Return the Content-Type for ``ext`` (e.g. ``".html"``), or None if unknown.

    Unknown extensions are left to the file server's own guess.
    """
    return CONTENT_TYPES.get(ext.lower())
