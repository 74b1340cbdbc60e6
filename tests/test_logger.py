"""Tests for cicd_backup.logger module."""

import io
import json
import logging

import pytest

from cicd_backup.logger import (
    TRACE,
    Logger,
    StructuredLogger,
    create_logger,
    get_logger,
    parse_level,
)


class TestLoggerInterface:
    """Tests for the Logger abstract interface."""

    def test_logger_is_abstract(self):
        with pytest.raises(TypeError):
            Logger()  # type: ignore

    def test_logger_has_required_methods(self):
        for method in ("trace", "debug", "info", "warning", "error", "critical", "get_session_id"):
            assert hasattr(Logger, method)


class TestParseLevel:
    """Tests for level name parsing."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("trace", TRACE),
            ("DEBUG", logging.DEBUG),
            ("info", logging.INFO),
            ("warn", logging.WARNING),
            ("warning", logging.WARNING),
            ("fatal", logging.CRITICAL),
        ],
    )
    def test_known_names(self, name, expected):
        assert parse_level(name) == expected

    def test_order(self):
        names = ["all", "trace", "debug", "info", "warn", "error", "fatal", "mark", "off"]
        levels = [parse_level(n) for n in names]
        assert levels == sorted(levels)
        assert len(set(levels)) == len(levels)

    def test_numbers_pass_through(self):
        assert parse_level(logging.ERROR) == logging.ERROR

    def test_unknown_name(self):
        with pytest.raises(ValueError):
            parse_level("verbose")


class TestStructuredLogger:
    """Tests for StructuredLogger."""

    def test_text_output_includes_level_and_extras(self):
        stream = io.StringIO()
        logger = StructuredLogger(name="test-text", stream=stream)
        logger.info("Backup created", service="nexus")

        output = stream.getvalue()
        assert "[INFO]" in output
        assert "Backup created" in output
        assert "service=nexus" in output
        assert f"session:{logger.get_session_id()}" in output

    def test_json_output(self):
        stream = io.StringIO()
        logger = StructuredLogger(name="test-json", json_format=True, stream=stream)
        logger.warning("Size unknown", path="/srv")

        record = json.loads(stream.getvalue().strip())
        assert record["level"] == "WARNING"
        assert record["message"] == "Size unknown"
        assert record["path"] == "/srv"
        assert record["session_id"] == logger.get_session_id()

    def test_trace_hidden_at_debug(self):
        stream = io.StringIO()
        logger = StructuredLogger(name="test-trace-hidden", level=logging.DEBUG, stream=stream)
        logger.trace("fine detail")
        assert stream.getvalue() == ""

    def test_trace_shown_at_trace(self):
        stream = io.StringIO()
        logger = StructuredLogger(name="test-trace-shown", level=TRACE, stream=stream)
        logger.trace("fine detail")
        assert "[TRACE]" in stream.getvalue()

    def test_off_silences_everything(self):
        stream = io.StringIO()
        logger = StructuredLogger(name="test-off", level=parse_level("off"), stream=stream)
        logger.critical("boom")
        assert stream.getvalue() == ""

    def test_reserved_keys_are_prefixed(self):
        stream = io.StringIO()
        logger = StructuredLogger(name="test-reserved", stream=stream)
        logger.info("message", name="volume")
        assert "_name=volume" in stream.getvalue()

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "backup.log"
        logger = StructuredLogger(name="test-file", log_file=str(log_file), stream=io.StringIO())
        logger.error("written to file")
        for handler in logging.getLogger("test-file").handlers:
            handler.flush()
        assert "written to file" in log_file.read_text()


class TestFactories:
    """Tests for create_logger and get_logger."""

    def test_create_logger_level_name(self):
        logger = create_logger("test-create", level="warn")
        assert isinstance(logger, StructuredLogger)
        assert logger.level == logging.WARNING

    def test_get_logger_defaults_to_info(self, monkeypatch):
        monkeypatch.delenv("TEST_GET_LOG_FILE", raising=False)
        logger = get_logger("test-get")
        assert logger.level == logging.INFO

    def test_json_from_env(self, monkeypatch):
        monkeypatch.setenv("TEST_ENV_JSON_LOG_JSON", "true")
        logger = create_logger("test-env-json")
        handler = logging.getLogger("test-env-json").handlers[0]
        assert handler.formatter.__class__.__name__ == "JsonFormatter"
        assert isinstance(logger, StructuredLogger)
