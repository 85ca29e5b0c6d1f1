"""Server startup: directory checks, handler chain assembly, listening."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

from dashserve.config.settings import ENTRY_FILE, HEALTH_PATH
from dashserve.core.errors import (
    EntryFileMissingError,
    ListenerBindError,
    WorkingDirectoryUnreadableError,
)
from dashserve.core.types import Handler
from dashserve.server.handlers import Router, health, static_files
from dashserve.server.httpd import DashHTTPServer
from dashserve.server.middleware import with_cors, with_logging

logger = logging.getLogger(__name__)


def check_working_directory(directory: Union[str, Path, None] = None) -> Path:
    """Resolve the served directory and make sure the entry file is in it.

    Raises
    ------
    WorkingDirectoryUnreadableError
        The directory cannot be resolved or listed.
    EntryFileMissingError
        ``index.html`` is not present.
    """
    try:
        root = Path(directory).resolve() if directory else Path.cwd()
        with os.scandir(root):
            pass
    except OSError as exc:
        raise WorkingDirectoryUnreadableError(
            f"failed to get current directory: {exc}"
        ) from exc

    logger.info("Current directory: %s", root)

    try:
        present = (root / ENTRY_FILE).exists()
    except OSError as exc:
        raise WorkingDirectoryUnreadableError(
            f"failed to stat {ENTRY_FILE}: {exc}"
        ) from exc
    if not present:
        raise EntryFileMissingError(f"{ENTRY_FILE} not found in current directory")
    return root


def build_app() -> Handler:
    router = Router().add(HEALTH_PATH, health).add("/", static_files)
    return with_logging(with_cors(router))


def _parse_port(port: str) -> int:
    try:
        number = int(port)
    except (TypeError, ValueError) as exc:
        raise ListenerBindError(f"invalid port {port!r}") from exc
    if not 0 <= number <= 65535:
        raise ListenerBindError(f"invalid port {port!r}: out of range")
    return number


def create_server(
    port: str,
    directory: Union[str, Path],
    host: str = "",
    app: Optional[Handler] = None,
) -> DashHTTPServer:
    """Bind a :class:`DashHTTPServer` on ``host:port``.

    An empty ``host`` listens on all interfaces.
    """
    address = (host, _parse_port(port))
    try:
        return DashHTTPServer(address, app or build_app(), directory)
    except OSError as exc:
        raise ListenerBindError(f"listen tcp {host}:{port}: {exc}") from exc


def start(port: str, directory: Union[str, Path, None] = None) -> None:
    """Check the directory, bind, and serve until interrupted.

    Returns normally on Ctrl+C. Any startup or listener failure is raised as
    a :class:`~dashserve.core.errors.ServerStartupError` subclass.
    """
    root = check_working_directory(directory)
    httpd = create_server(port, root)
    with httpd:
        logger.info("Server is ready and listening on port %s", port)
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            logger.info("Shutting down.")
        except OSError as exc:
            raise ListenerBindError(f"listener failed: {exc}") from exc
