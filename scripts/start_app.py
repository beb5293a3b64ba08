#!/usr/bin/env python3
"""Serve the Marquee API with uvicorn.

Logfire is configured before the app factory runs, so failures while
building the container or the routes are reported too.
"""

import sys

import logfire
import uvicorn

from marquee.config import Settings
from marquee.util.observability import configure_logfire

APP_FACTORY = "marquee.interface.api.app:create_app"


def main() -> int:
    settings = Settings()
    configure_logfire(settings)

    development = settings.environment in ("development", "test")
    logfire.info(
        "Starting Marquee API",
        port=settings.port,
        environment=settings.environment,
        reload=development,
        git_sha=settings.git_sha,
    )

    try:
        uvicorn.run(
            APP_FACTORY,
            factory=True,
            host="0.0.0.0",
            port=settings.port,
            reload=development,
            proxy_headers=not development,
            log_level="debug" if settings.debug else "info",
        )
    except Exception as e:
        logfire.error(
            "Marquee API failed to start",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise

    return 0


if __name__ == "__main__":
    sys.exit(main())
