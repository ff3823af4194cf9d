# tests/utils/test_logging.py
"""
Tests for logging configuration: JSON formatter, correlation filter,
level parsing and setup.
"""

import json
import logging
from decimal import Decimal

import pytest

from tradetracker.utils.context import clear_correlation_id, set_correlation_id
from tradetracker.utils.logging import (
    NO_CORRELATION_ID,
    CorrelationIdFilter,
    JsonFormatter,
    _get_log_level,
    setup_logging,
)


def make_record(message: str = "Recorded trade", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="tradetracker.services.trade_service",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestCorrelationIdFilter:
    """The filter stamps every record."""

    def test_uses_current_id(self):
        """The context value ends up on the record."""
        set_correlation_id("req-1")
        record = make_record()
        try:
            assert CorrelationIdFilter().filter(record) is True
            assert record.correlation_id == "req-1"
        finally:
            clear_correlation_id()

    def test_placeholder_without_id(self):
        """Outside a request a placeholder is used."""
        clear_correlation_id()
        record = make_record()
        CorrelationIdFilter().filter(record)
        assert record.correlation_id == NO_CORRELATION_ID


class TestJsonFormatter:
    """One JSON object per record."""

    def test_basic_fields(self):
        """timestamp, level, logger, correlation id and message are present."""
        record = make_record(correlation_id="abc")
        entry = json.loads(JsonFormatter().format(record))

        assert entry["level"] == "INFO"
        assert entry["logger"] == "tradetracker.services.trade_service"
        assert entry["correlation_id"] == "abc"
        assert entry["message"] == "Recorded trade"
        assert "timestamp" in entry

    def test_extra_fields_stringified_when_needed(self):
        """Non-JSON extras such as Decimal are rendered as strings."""
        record = make_record(correlation_id="abc", name_id=1001, unit_price=Decimal("2.5"))
        entry = json.loads(JsonFormatter().format(record))

        assert entry["extra"] == {"name_id": 1001, "unit_price": "2.5"}


class TestLogLevels:
    """Level name parsing."""

    @pytest.mark.parametrize("name,level", [("debug", logging.DEBUG), (" WARN ", logging.WARNING)])
    def test_known_levels(self, name, level):
        """Names are case-insensitive."""
        assert _get_log_level(name) == level

    def test_unknown_level(self):
        """Typos are configuration errors."""
        with pytest.raises(ValueError):
            _get_log_level("VERBOSE")


class TestSetupLogging:
    """setup_logging installs one handler on the root logger."""

    def test_json_setup(self):
        """The root handler gets the JSON formatter and the filter."""
        setup_logging(level="DEBUG", log_format="json")
        root = logging.getLogger()

        handlers = [h for h in root.handlers if isinstance(h.formatter, JsonFormatter)]
        assert len(handlers) == 1
        assert any(isinstance(f, CorrelationIdFilter) for f in handlers[0].filters)
        assert root.level == logging.DEBUG
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

        setup_logging(level="INFO", log_format="text")
