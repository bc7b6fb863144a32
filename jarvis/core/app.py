"""
Jarvis - Core Application

The App holds settings and a logger and nothing else. Its run loop is a
placeholder that waits for the shutdown signal; HTTP and WebSocket
servers are not part of this service yet.
"""

from typing import TYPE_CHECKING

from jarvis.core.config import Settings
from jarvis.core.logging import Logger

if TYPE_CHECKING:
    from jarvis.core.lifecycle import ShutdownSignal


class App:
    """Jarvis application."""

    def __init__(self, settings: Settings, logger: Logger) -> None:
        self._settings = settings
        self._logger = logger

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def logger(self) -> Logger:
        return self._logger

    async def run(self, shutdown: "ShutdownSignal") -> None:
        """Block until shutdown is requested, then return.

        Args:
            shutdown: Process-wide cancellation handle owned by the lifecycle
        """
        self._logger.info("application_starting", service=self._settings.service_name)

        await shutdown.wait()

        self._logger.info("application_stopped")


def create_app(settings: Settings, logger: Logger) -> App:
    """Create the application."""
    return App(settings, logger)
