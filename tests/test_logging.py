"""Tests for the structured logging system (inventory_kernel/logging_config.py)."""

import json
import logging
from decimal import Decimal
from io import StringIO

import pytest

from inventory_kernel.exceptions import InsufficientStockError
from inventory_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    get_logger,
    reset_logging,
)


@pytest.fixture(autouse=True)
def _clean_logging():
    """Reset logging state between tests."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()
    configure_logging(level=logging.DEBUG)


def _make_handler() -> tuple[logging.Handler, StringIO]:
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    return handler, stream


def _parse_log(stream: StringIO) -> dict:
    """Parse the first JSON log line from a stream."""
    line = stream.getvalue().strip().split("\n")[0]
    return json.loads(line)


# ---------------------------------------------------------------------------
# StructuredFormatter tests
# ---------------------------------------------------------------------------


class TestStructuredFormatter:
    """Tests for JSON log output format."""

    def test_basic_json_output(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        logger = get_logger("test")
        logger.info("hello")

        record = _parse_log(stream)
        assert record["level"] == "INFO"
        assert record["message"] == "hello"
        assert record["logger"] == "inventory_kernel.test"
        assert "ts" in record

    def test_extra_fields_included(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        get_logger("test").info("applied", extra={"balance": 8, "price": Decimal("1.50")})

        record = _parse_log(stream)
        assert record["balance"] == 8
        assert record["price"] == "1.50"

    def test_context_fields_included(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        LogContext.set(session_id="s-1", product_id="p-1")
        get_logger("test").info("test_msg")

        record = _parse_log(stream)
        assert record["session_id"] == "s-1"
        assert record["product_id"] == "p-1"

    def test_kernel_exception_fields(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        try:
            raise InsufficientStockError("p-1", 2, 5)
        except InsufficientStockError:
            get_logger("test").error("failed", exc_info=True)

        record = _parse_log(stream)
        assert record["exc_type"] == "InsufficientStockError"
        assert record["exc_code"] == "INSUFFICIENT_STOCK"
        assert record["exc_available"] == 2
        assert record["exc_requested"] == 5
        assert "traceback" in record


class TestLogContext:

    def test_bind_restores_previous_values(self):
        LogContext.set(product_id="outer")
        with LogContext.bind(product_id="inner", movement_id="m-1"):
            assert LogContext.get_all() == {"product_id": "inner", "movement_id": "m-1"}
        assert LogContext.get_all() == {"product_id": "outer"}

    def test_clear(self):
        LogContext.set(session_id="s")
        LogContext.clear()
        assert LogContext.get_all() == {}


class TestConfigure:

    def test_configure_is_idempotent(self):
        handler, _ = _make_handler()
        configure_logging(handler=handler)
        configure_logging(handler=handler)
        assert len(logging.getLogger("inventory_kernel").handlers) == 1

    def test_reset_clears_handlers(self):
        configure_logging()
        reset_logging()
        assert logging.getLogger("inventory_kernel").handlers == []
