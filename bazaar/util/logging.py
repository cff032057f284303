"""Stdlib logging setup for the API process.

Application code logs through logfire; this only sets levels for the
stdlib loggers that uvicorn, SQLAlchemy and alembic write to.
"""

import logging
import sys

from bazaar.config import Settings

QUIET_LOGGERS = ("sqlalchemy.engine", "uvicorn.access", "asyncpg")


def log_level_for(settings: Settings) -> int:
    """Debug when asked for, warnings only in production, info otherwise."""
    if settings.debug:
        return logging.DEBUG
    if settings.environment == "production":
        return logging.WARNING
    return logging.INFO


def setup_logging(settings: Settings) -> None:
    """Configure stdout logging for the current environment.

    Args:
        settings: Application settings
    """
    level = log_level_for(settings)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    # SQL echo is controlled by settings.debug on the engine instead
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logging.getLogger("bazaar").setLevel(level)
