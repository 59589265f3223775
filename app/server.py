"""Run the API with uvicorn on the configured host and port."""

from __future__ import annotations

import logging

import uvicorn

from app.core.config import get_settings
from app.core.logging_config import configure_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Server listening on http://localhost:%s", settings.port)
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
