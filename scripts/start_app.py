#!/usr/bin/env python3
"""Start the Bazaar API, reporting startup failures to Logfire."""

import sys
import logfire
import uvicorn

from bazaar.config import Settings
from bazaar.util.logging import setup_logging
from bazaar.util.observability import configure_logfire


def main() -> int:
    """Serve the API until interrupted."""
    settings = Settings()

    # Configure before the app module is imported so startup errors are traced
    setup_logging(settings)
    configure_logfire(settings)

    try:
        logfire.info(
            "Starting Bazaar API",
            environment=settings.environment,
            realtime_enabled=settings.realtime_enabled,
        )
        uvicorn.run(
            "bazaar.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
        return 0

    except Exception as e:
        logfire.error(
            "API startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
