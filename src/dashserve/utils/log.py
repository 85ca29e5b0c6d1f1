from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def configure_logging(level: int = logging.INFO) -> None:
    """Send dashserve logs to stderr. A no-op if the root logger is already set up."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
