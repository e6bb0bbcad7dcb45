"""Logging configuration for route modules and scripts.

Services report through logfire; the stdlib loggers here cover the HTTP
layer and the startup scripts.
"""

import logging
import sys

from sso.config import Settings

# Libraries whose INFO output drowns our own
NOISY_LOGGERS = ("httpx", "httpcore", "asyncpg", "sqlalchemy.engine")


def log_level(settings: Settings) -> int:
    if settings.debug:
        return logging.DEBUG
    if settings.environment == "production":
        return logging.WARNING
    return logging.INFO


def setup_logging(settings: Settings) -> None:
    """Configure the root logger from settings."""
    level = log_level(settings)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logging.getLogger(__name__).info(
        f"Logging configured: environment={settings.environment}, "
        f"level={logging.getLevelName(level)}"
    )
