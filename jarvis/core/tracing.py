"""
Jarvis - OpenTelemetry Tracing Module

Each process run is traced as a single "app.run" span. The lifecycle
listener attaches a "shutting_down" event carrying the signal name, so a
trace shows when and why the service stopped.

Exporters:
- TRACING_CONSOLE_EXPORT=true prints finished spans to stdout
- Tests pass their own exporter (e.g. InMemorySpanExporter)
"""

from typing import Any

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    ConsoleSpanExporter,
    SimpleSpanProcessor,
    SpanExporter,
)

from jarvis import __version__
from jarvis.core.config import Settings

# Module-level flag for one-time configuration
_configured: bool = False

RUN_SPAN_NAME = "app.run"
SHUTDOWN_EVENT_NAME = "shutting_down"


def build_tracer_provider(
    service_name: str,
    exporters: list[SpanExporter] | None = None,
) -> TracerProvider:
    """Create a provider tagged with the service name and version.

    Args:
        service_name: Resource attribute service.name
        exporters: Span exporters, each behind a SimpleSpanProcessor
    """
    provider = TracerProvider(
        resource=Resource.create(
            {
                "service.name": service_name,
                "service.version": __version__,
            }
        )
    )
    for exporter in exporters or []:
        provider.add_span_processor(SimpleSpanProcessor(exporter))
    return provider


def configure_tracing(settings: Settings) -> TracerProvider | None:
    """Install the global tracer provider from settings, once.

    Returns:
        The installed provider, or None when tracing is disabled or
        was already configured
    """
    global _configured

    if _configured or not settings.tracing_enabled:
        return None

    exporters: list[SpanExporter] = []
    if settings.tracing_console_export:
        exporters.append(ConsoleSpanExporter())

    provider = build_tracer_provider(settings.service_name, exporters)
    trace.set_tracer_provider(provider)

    _configured = True
    return provider


def get_tracer(name: str) -> Any:
    """Get a tracer from the global provider (no-op until configured)."""
    return trace.get_tracer(name)


def record_shutdown(signal_name: str) -> None:
    """Attach the shutdown event to the span current in this context."""
    trace.get_current_span().add_event(SHUTDOWN_EVENT_NAME, {"signal": signal_name})


def reset_tracing() -> None:
    """Reset tracing configuration for testing."""
    global _configured
    _configured = False
