"""
Jarvis - Structured Logging Module

Line-delimited JSON records on stdout via structlog, plus a small Logger
facade (debug/info/warn/error/fatal) that the application and lifecycle
controller depend on.

Patterns Applied:
- One-time configure_logging() at startup, guarded by _configured
- structlog BoundLogger with JSON output
- Protocol for the logger capability set so tests can pass fakes
"""

import logging
import sys
from typing import Any, NoReturn, Protocol

import structlog
from structlog.typing import EventDict, Processor

# Module-level flag for one-time configuration
_configured: bool = False

_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def parse_log_level(name: str) -> int:
    """Map a LOG_LEVEL value to a stdlib level. Unknown names mean INFO."""
    return _LEVELS.get(name.strip().lower(), logging.INFO)


def service_info_adder(service_name: str) -> Processor:
    """Build a processor that stamps service_name on every log entry."""

    def add_service_info(
        logger: logging.Logger,  # noqa: ARG001 - Required by structlog interface
        method_name: str,  # noqa: ARG001 - Required by structlog interface
        event_dict: EventDict,
    ) -> EventDict:
        event_dict.setdefault("service", service_name)
        return event_dict

    return add_service_info


def configure_logging(
    log_level: str = "info",
    json_output: bool = True,
    service_name: str = "jarvis",
) -> None:
    """Configure structlog for the application.

    Must be called once at startup; later calls are no-ops.

    Args:
        log_level: debug, info, warn or error (anything else means info)
        json_output: Whether to use JSON renderer (True for production)
        service_name: Value of the "service" key on every record
    """
    global _configured

    if _configured:
        return

    level = parse_log_level(log_level)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    renderer: Any
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            service_info_adder(service_name),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _configured = True


def get_logger(name: str) -> Any:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically module name)

    Returns:
        structlog BoundLogger instance
    """
    return structlog.get_logger(name)


def reset_logging() -> None:
    """Reset logging configuration for testing."""
    global _configured
    _configured = False
    structlog.reset_defaults()


class Logger(Protocol):
    """Leveled structured logger. fatal() never returns."""

    def debug(self, event: str, **fields: Any) -> None: ...

    def info(self, event: str, **fields: Any) -> None: ...

    def warn(self, event: str, **fields: Any) -> None: ...

    def error(self, event: str, **fields: Any) -> None: ...

    def fatal(self, event: str, **fields: Any) -> NoReturn: ...


class StructLogger:
    """Logger backed by a structlog bound logger."""

    def __init__(self, logger: Any) -> None:
        self._logger = logger

    def debug(self, event: str, **fields: Any) -> None:
        self._logger.debug(event, **fields)

    def info(self, event: str, **fields: Any) -> None:
        self._logger.info(event, **fields)

    def warn(self, event: str, **fields: Any) -> None:
        self._logger.warning(event, **fields)

    def error(self, event: str, **fields: Any) -> None:
        self._logger.error(event, **fields)

    def fatal(self, event: str, **fields: Any) -> NoReturn:
        """Emit an error record, then exit with status 1."""
        self._logger.error(event, **fields)
        raise SystemExit(1)


def new_logger(
    level: str,
    json_output: bool = True,
    service_name: str = "jarvis",
    name: str = "jarvis",
) -> StructLogger:
    """Configure logging (once) and return the application logger."""
    configure_logging(log_level=level, json_output=json_output, service_name=service_name)
    return StructLogger(get_logger(name))
