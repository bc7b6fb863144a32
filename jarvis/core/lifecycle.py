"""
Jarvis - Process Lifecycle

Owns the process-wide shutdown handle, turns SIGINT/SIGTERM into a single
cooperative cancellation, and runs the application until it observes it.

Flow:
    signal -> handler resolves _received -> listener task logs and cancels
    -> App.run() returns -> handlers restored

The listener handles the first signal only. Later signals are swallowed
until run() returns; they do not restart shutdown or kill the process.
"""

import asyncio
import signal
from collections.abc import Iterable
from types import FrameType
from typing import Any

from jarvis.core.app import App
from jarvis.core.logging import Logger
from jarvis.core.tracing import RUN_SPAN_NAME, get_tracer, record_shutdown

DEFAULT_SIGNALS: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM)


class ShutdownSignal:
    """One-shot cancellation handle. Once cancelled it stays cancelled."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    async def wait(self) -> None:
        await self._event.wait()


class Lifecycle:
    """Signal-to-cancellation coordinator for one process run."""

    def __init__(
        self,
        logger: Logger,
        signals: Iterable[signal.Signals] = DEFAULT_SIGNALS,
        shutdown: ShutdownSignal | None = None,
        tracer: Any = None,
    ) -> None:
        self._logger = logger
        self._tracer = tracer if tracer is not None else get_tracer(__name__)
        self._signals = tuple(signals)
        self._shutdown = shutdown if shutdown is not None else ShutdownSignal()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._received: asyncio.Future[signal.Signals] | None = None
        self._listener: asyncio.Task[None] | None = None
        # Handlers replaced via signal.signal() on loops without add_signal_handler
        self._previous: dict[signal.Signals, Any] = {}

    @property
    def shutdown(self) -> ShutdownSignal:
        return self._shutdown

    def install(self) -> None:
        """Register signal handlers and start the listener task.

        Must be called from within the running event loop.
        """
        if self._listener is not None:
            raise RuntimeError("lifecycle already installed")

        loop = asyncio.get_running_loop()
        self._loop = loop
        received: asyncio.Future[signal.Signals] = loop.create_future()
        self._received = received

        for sig in self._signals:
            try:
                loop.add_signal_handler(sig, self._on_signal, sig)
            except NotImplementedError:
                # Windows event loops
                self._previous[sig] = signal.signal(sig, self._on_signal_threadsafe)

        self._listener = loop.create_task(self._listen(received), name="jarvis-signal-listener")

    async def uninstall(self) -> None:
        """Stop the listener and restore the previous signal handlers."""
        if self._listener is not None and not self._listener.done():
            self._listener.cancel()
        if self._listener is not None:
            await asyncio.gather(self._listener, return_exceptions=True)

        for sig in self._signals:
            if sig in self._previous:
                signal.signal(sig, self._previous.pop(sig))
            elif self._loop is not None:
                self._loop.remove_signal_handler(sig)

        self._listener = None
        self._received = None
        self._loop = None

    async def run(self, app: App) -> None:
        """Run the application until shutdown is requested.

        Exceptions raised by app.run() propagate after handlers are restored.
        The listener starts inside the run span so the shutdown event lands on it.
        """
        with self._tracer.start_as_current_span(RUN_SPAN_NAME):
            self.install()
            try:
                await app.run(self._shutdown)
            finally:
                await self.uninstall()

    def _on_signal(self, sig: signal.Signals) -> None:
        if self._received is not None and not self._received.done():
            self._received.set_result(sig)

    def _on_signal_threadsafe(self, signum: int, frame: FrameType | None) -> None:  # noqa: ARG002
        if self._loop is not None:
            self._loop.call_soon_threadsafe(self._on_signal, signal.Signals(signum))

    async def _listen(self, received: "asyncio.Future[signal.Signals]") -> None:
        sig = await received
        self._logger.info("shutting_down", signal=sig.name)
        record_shutdown(sig.name)
        self._shutdown.cancel()
