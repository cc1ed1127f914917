"""Process entry point: `python -m jsonspark` or the `jsonspark` console script.

uvicorn owns the listener and signal handling: SIGTERM/SIGINT stop accepting
connections, in-flight requests drain for up to shutdown_grace_seconds, then
lifespan shutdown runs and the process exits.
"""

import logging
import sys

import uvicorn

from jsonspark.config import get_settings
from jsonspark.infrastructure.observability import setup_logging

logger = logging.getLogger("jsonspark")


def main() -> None:
    settings = get_settings()
    missing = settings.missing_firebase_credentials()
    if missing:
        setup_logging(settings.log_level, settings.log_format)
        logger.critical(
            f"Missing required Firebase environment variables: {', '.join(missing)}",
        )
        sys.exit(1)

    uvicorn.run(
        "jsonspark.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        timeout_graceful_shutdown=settings.shutdown_grace_seconds,
    )


if __name__ == "__main__":
    main()
