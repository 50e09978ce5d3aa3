"""Logging configuration based on environment."""

import logging
import sys

from authstore.config import settings

# Development format: cleaner
DEV_FORMAT = "%(levelname)s:     %(name)s - %(message)s"

# Production format: full details for debugging
PROD_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configure logging for the process."""
    log_format = DEV_FORMAT if settings.is_development else PROD_FORMAT

    logging.basicConfig(
        level=getattr(logging, level or settings.log_level),
        format=log_format,
        stream=sys.stdout,
    )

    # Quiet noisy loggers
    if not settings.database_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("asyncpg").setLevel(logging.WARNING)
