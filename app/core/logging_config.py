"""Logging setup shared by the server and serverless entrypoints."""

from __future__ import annotations

import logging
import sys

from app.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging to stdout from settings unless a level is given."""

    resolved = (level or get_settings().log_level).upper()
    logging.basicConfig(level=resolved, format=LOG_FORMAT, stream=sys.stdout)
    logging.getLogger("app").setLevel(resolved)
