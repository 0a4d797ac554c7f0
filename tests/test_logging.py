"""Tests for logging configuration."""

import io
import json
import logging
from unittest.mock import patch

import pytest

from sensitive_filter.logging.setup import (
    CorrelationFilter,
    CustomJsonFormatter,
    correlation_scope,
    current_correlation_id,
    get_logger,
    setup_logging,
)


def make_record():
    return logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname="test.py",
        lineno=1,
        msg="test message",
        args=(),
        exc_info=None,
    )


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way pytest configured it."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield root_logger
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


class TestCorrelationScope:
    """Tests for correlation_scope."""

    def test_explicit_id(self):
        with correlation_scope("req-123") as value:
            assert value == "req-123"
            assert current_correlation_id() == "req-123"

        assert current_correlation_id() == ""

    def test_generated_id(self):
        with correlation_scope() as first:
            pass
        with correlation_scope() as second:
            pass

        assert len(first) == 32
        assert first != second

    def test_nested_scopes_restore_outer(self):
        with correlation_scope("outer"):
            with correlation_scope("inner"):
                assert current_correlation_id() == "inner"
            assert current_correlation_id() == "outer"


class TestCorrelationFilter:
    """Tests for CorrelationFilter."""

    def test_adds_correlation_id(self):
        record = make_record()
        with correlation_scope("req-123"):
            assert CorrelationFilter().filter(record) is True

        assert record.correlation_id == "req-123"

    def test_default_correlation_id(self):
        record = make_record()
        CorrelationFilter().filter(record)

        assert record.correlation_id == "-"


class TestCustomJsonFormatter:
    """Tests for CustomJsonFormatter."""

    def test_adds_service_field(self):
        record = make_record()
        record.correlation_id = "req-1"

        log_record = {}
        CustomJsonFormatter().add_fields(log_record, record, {})

        assert log_record["service"] == "sensitive-filter"
        assert log_record["correlation_id"] == "req-1"

    def test_renames_levelname_to_level(self):
        log_record = {"levelname": "INFO"}
        CustomJsonFormatter().add_fields(log_record, make_record(), {})

        assert "levelname" not in log_record
        assert log_record["level"] == "INFO"


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_json_output(self, restore_root_logger):
        stream = io.StringIO()
        setup_logging(level="INFO", json_format=True, stream=stream)

        with correlation_scope("run-1"):
            get_logger("test_json").info("Trie rebuilt", extra={"event": "trie_reset"})

        line = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert line["message"] == "Trie rebuilt"
        assert line["event"] == "trie_reset"
        assert line["level"] == "INFO"
        assert line["correlation_id"] == "run-1"

    def test_text_output(self, restore_root_logger):
        stream = io.StringIO()
        setup_logging(level="debug", json_format=False, stream=stream)

        get_logger("test_text").debug("hello")

        assert "hello" in stream.getvalue()
        assert "[-]" in stream.getvalue()

    def test_from_environment(self, restore_root_logger):
        with patch.dict(
            "os.environ",
            {"SENSITIVE_LOG_LEVEL": "warning", "SENSITIVE_LOG_FORMAT": "text"},
        ):
            handler = setup_logging(stream=io.StringIO())

        assert restore_root_logger.level == logging.WARNING
        assert not isinstance(handler.formatter, CustomJsonFormatter)

    def test_replaces_existing_handlers(self, restore_root_logger):
        setup_logging(stream=io.StringIO())
        handler = setup_logging(stream=io.StringIO())

        assert restore_root_logger.handlers == [handler]

    def test_get_logger(self):
        logger = get_logger("sensitive_filter.test")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "sensitive_filter.test"
