"""Unit tests for logging setup and performance timing."""

import json
import logging
from pathlib import Path

import pytest

from css_analyzer.analyzer_logging import (
    LOGGER_NAME,
    JSONFormatter,
    LogCategory,
    debug_context,
    get_category_logger,
    get_logger,
    setup_logging,
)
from css_analyzer.performance import PerformanceTimer, timed


def _flush(logger: logging.Logger) -> None:
    for handler in logger.handlers:
        handler.flush()


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_levels(self) -> None:
        logger = setup_logging(level="info")
        console = logger.handlers[0]
        assert console.level == logging.INFO

        logger = setup_logging(level="info", quiet=True)
        assert logger.handlers[0].level == logging.ERROR

        logger = setup_logging(verbose=True)
        assert logger.handlers[0].level == logging.DEBUG

    def test_does_not_propagate(self) -> None:
        logger = setup_logging()
        assert logger.name == LOGGER_NAME
        assert logger.propagate is False

    def test_file_logging(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "analyzer.log"
        logger = setup_logging(log_file=log_file)

        get_category_logger(LogCategory.PARSER).debug("tokenized")
        _flush(logger)

        assert len(logger.handlers) == 2
        content = log_file.read_text()
        assert "css_analyzer.parser" in content
        assert "tokenized" in content

    def test_json_file_logging(self, tmp_path: Path) -> None:
        log_file = tmp_path / "analyzer.log"
        logger = setup_logging(log_file=log_file, log_format="json")

        get_category_logger(LogCategory.CLI).info(
            "reading", extra={"file_path": "a.css"}
        )
        _flush(logger)

        entry = json.loads(log_file.read_text().splitlines()[0])
        assert entry["logger"] == "css_analyzer.cli"
        assert entry["level"] == "INFO"
        assert entry["message"] == "reading"
        assert entry["file_path"] == "a.css"


class TestLoggers:
    """Tests for logger lookup helpers."""

    def test_category_logger_names(self) -> None:
        assert get_logger().name == "css_analyzer"
        assert get_category_logger(LogCategory.PARSER).name == "css_analyzer.parser"
        assert get_category_logger(LogCategory.PERFORMANCE).name == "css_analyzer.performance"

    def test_debug_context_restores_level(self) -> None:
        logger = setup_logging(level="WARNING")
        console = logger.handlers[0]

        with debug_context() as target:
            assert target is logger
            assert console.level == logging.DEBUG
        assert console.level == logging.WARNING
        assert logger.level == logging.DEBUG


class TestJSONFormatter:
    """Tests for the JSON formatter."""

    def test_extra_fields(self) -> None:
        record = logging.LogRecord(
            "css_analyzer.performance", logging.DEBUG, __file__, 1, "done", None, None
        )
        record.duration_ms = 1.5
        record.operation = "parse"

        entry = json.loads(JSONFormatter().format(record))

        assert entry["message"] == "done"
        assert entry["duration_ms"] == 1.5
        assert entry["operation"] == "parse"
        assert "timestamp" in entry


class TestPerformanceTimer:
    """Tests for PerformanceTimer and @timed."""

    def test_duration_is_measured(self) -> None:
        with PerformanceTimer("noop", auto_log=False) as timer:
            sum(range(1000))
        assert timer.duration_ms >= 0
        assert timer.end_time >= timer.start_time

    def test_logs_duration(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="css_analyzer.performance"):
            with PerformanceTimer("walk"):
                pass

        record = next(r for r in caplog.records if r.name == "css_analyzer.performance")
        assert record.operation == "walk"
        assert "[PERF] walk" in record.getMessage()

    def test_timed_returns_result(self) -> None:
        @timed()
        def double(value: int) -> int:
            return value * 2

        assert double(21) == 42
        assert double.__name__ == "double"

    def test_timed_reraises(self, caplog: pytest.LogCaptureFixture) -> None:
        @timed("explode")
        def explode() -> None:
            raise ValueError("boom")

        with caplog.at_level(logging.ERROR, logger="css_analyzer.performance"):
            with pytest.raises(ValueError, match="boom"):
                explode()
        assert any("explode failed" in r.getMessage() for r in caplog.records)
