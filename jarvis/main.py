"""
Jarvis - Main Application Entry Point

Startup order:
    settings -> logging -> tracing -> app -> lifecycle.run(app)

Exit status is 0 after a signal-driven shutdown. Configuration errors,
application construction errors and run-loop errors exit with status 1.

Usage:
    python -m jarvis
    jarvis
"""

import asyncio
import sys

from jarvis.core.app import App, create_app
from jarvis.core.config import load_settings
from jarvis.core.exceptions import AppInitializationError, ConfigurationError
from jarvis.core.lifecycle import Lifecycle
from jarvis.core.logging import Logger, new_logger
from jarvis.core.tracing import configure_tracing


async def serve(app: App, logger: Logger) -> None:
    """Run the app under a fresh lifecycle until SIGINT/SIGTERM."""
    await Lifecycle(logger).run(app)


def main() -> None:
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        # Logging is not configured yet
        sys.exit(f"Failed to load configuration: {exc}")

    logger = new_logger(
        settings.log_level,
        json_output=settings.log_json,
        service_name=settings.service_name,
    )

    configure_tracing(settings)

    try:
        app = create_app(settings, logger)
    except AppInitializationError as exc:
        logger.fatal("application_init_failed", error=str(exc))

    try:
        asyncio.run(serve(app, logger))
    except Exception as exc:  # noqa: BLE001 - any run-loop error is fatal
        logger.fatal("application_error", error=str(exc))


if __name__ == "__main__":
    main()
