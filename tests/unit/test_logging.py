"""
Tests for jarvis.core.logging

- One-time structlog configuration
- JSON line output on stdout
- Logger facade level mapping and fatal exit
"""

import json
import logging

import pytest
import structlog
from structlog.testing import capture_logs

from jarvis.core import logging as log_module
from jarvis.core.logging import (
    Logger,
    StructLogger,
    configure_logging,
    get_logger,
    new_logger,
    parse_log_level,
)


class TestParseLogLevel:
    """LOG_LEVEL names map to stdlib levels; unknown names mean INFO."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("debug", logging.DEBUG),
            ("info", logging.INFO),
            ("warn", logging.WARNING),
            ("warning", logging.WARNING),
            ("error", logging.ERROR),
            ("DEBUG", logging.DEBUG),
            ("verbose", logging.INFO),
            ("", logging.INFO),
        ],
    )
    def test_mapping(self, name: str, expected: int) -> None:
        assert parse_log_level(name) == expected


class TestConfigureLogging:
    """configure_logging() runs once and writes JSON lines to stdout."""

    def test_sets_configured_flag(self) -> None:
        configure_logging()
        assert log_module._configured is True

    def test_second_call_is_noop(self) -> None:
        configure_logging(log_level="error")
        configure_logging(log_level="debug")

        # Still filtering at ERROR from the first call
        assert structlog.get_config()["wrapper_class"] is structlog.make_filtering_bound_logger(
            logging.ERROR
        )

    def test_json_line_on_stdout(self, capsys) -> None:
        configure_logging(log_level="info", json_output=True)

        get_logger("test").info("hello", answer=42)

        record = json.loads(capsys.readouterr().out.strip())
        assert record["event"] == "hello"
        assert record["level"] == "info"
        assert record["answer"] == 42
        assert record["service"] == "jarvis"
        assert "timestamp" in record

    def test_service_name_on_every_record(self, capsys) -> None:
        configure_logging(service_name="jarvis-staging")

        get_logger("test").info("hello")

        record = json.loads(capsys.readouterr().out.strip())
        assert record["service"] == "jarvis-staging"

    def test_records_below_level_are_dropped(self, capsys) -> None:
        configure_logging(log_level="warn", json_output=True)

        logger = get_logger("test")
        logger.info("quiet")
        logger.warning("loud")

        lines = capsys.readouterr().out.strip().splitlines()
        assert [json.loads(line)["event"] for line in lines] == ["loud"]


class TestStructLogger:
    """Facade methods emit records at the matching level."""

    @pytest.mark.parametrize(
        ("method", "level"),
        [
            ("debug", "debug"),
            ("info", "info"),
            ("warn", "warning"),
            ("error", "error"),
        ],
    )
    def test_level_mapping(self, method: str, level: str) -> None:
        with capture_logs() as logs:
            logger = StructLogger(structlog.get_logger("test"))
            getattr(logger, method)("something_happened", key="value")

        assert logs == [{"event": "something_happened", "key": "value", "log_level": level}]

    def test_fatal_logs_then_exits(self) -> None:
        with capture_logs() as logs:
            logger = StructLogger(structlog.get_logger("test"))
            with pytest.raises(SystemExit) as exc_info:
                logger.fatal("boom", error="bad")

        assert exc_info.value.code == 1
        assert logs == [{"event": "boom", "error": "bad", "log_level": "error"}]

    def test_satisfies_logger_protocol(self) -> None:
        logger: Logger = StructLogger(structlog.get_logger("test"))
        assert callable(logger.fatal)

    def test_new_logger_configures_once(self) -> None:
        logger = new_logger("debug")

        assert isinstance(logger, StructLogger)
        assert log_module._configured is True
