#!/usr/bin/env python3
"""Start the API server, reporting startup failures to Logfire."""

import sys

import logfire
import uvicorn

from idlink.config import Settings
from idlink.util.logging import setup_logging
from idlink.util.observability import configure_logfire


def main() -> int:
    """Configure logging, then serve the application."""
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    try:
        logfire.info("Starting idlink API", host=settings.host, port=settings.port)
        uvicorn.run(
            "idlink.interface.api.app:create_app",
            factory=True,
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
        return 0
    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
