"""Entry point: ``python -m todo_api`` or the ``todo-api`` console script."""

from __future__ import annotations

import logging
import sys

import uvicorn

from .logging_utils import configure_logging
from .settings import get_settings

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(
        "Starting on %s:%s (STORAGE_BACKEND=%s)",
        settings.host,
        settings.port,
        settings.storage_backend,
    )
    try:
        uvicorn.run(
            "todo_api.main:app",
            host=settings.host,
            port=settings.port,
            log_level=settings.log_level.lower(),
        )
    except KeyboardInterrupt:
        logger.info("Shutdown requested...")
        sys.exit(0)


if __name__ == "__main__":
    main()
