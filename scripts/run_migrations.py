#!/usr/bin/env python3
"""Upgrade the Bazaar database schema to the latest revision."""

import sys
import logfire
from alembic import command
from alembic.config import Config

from bazaar.config import Settings
from bazaar.util.logging import setup_logging
from bazaar.util.observability import configure_logfire


def main() -> int:
    """Run ``alembic upgrade head`` and report failures to Logfire."""
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    try:
        with logfire.span("migrations.upgrade", environment=settings.environment):
            command.upgrade(Config("alembic.ini"), "head")
        logfire.info("Database schema is up to date")
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Fail the deploy rather than serve against a stale schema
        raise


if __name__ == "__main__":
    sys.exit(main())
