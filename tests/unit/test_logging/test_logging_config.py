"""Tests for sqlprep logging helpers."""

import io
import logging
from collections.abc import Iterator

import pytest

from sqlprep._serialization import decode_json
from sqlprep.utils.logging import (
    CorrelationIDFilter,
    StructuredFormatter,
    configure_logging,
    get_correlation_id,
    get_logger,
    log_with_context,
    set_correlation_id,
)


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    root = logging.getLogger("sqlprep")
    handlers, level, propagate = list(root.handlers), root.level, root.propagate
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    root.propagate = propagate
    set_correlation_id(None)


def test_get_logger_namespaces_names() -> None:
    assert get_logger().name == "sqlprep"
    assert get_logger("driver").name == "sqlprep.driver"
    assert get_logger("sqlprep.parameters").name == "sqlprep.parameters"


def test_get_logger_adds_single_correlation_filter() -> None:
    logger = get_logger("test.filters")
    get_logger("test.filters")

    assert sum(isinstance(f, CorrelationIDFilter) for f in logger.filters) == 1


def test_structured_formatter_emits_json(restore_root_logger: None) -> None:
    set_correlation_id("req-1")
    record = logging.LogRecord("sqlprep.driver", logging.INFO, __file__, 1, "Exec <%s>", ("SELECT 1",), None)
    record.extra_fields = {"parameter_style": "qmark"}

    entry = decode_json(StructuredFormatter().format(record))

    assert entry["message"] == "Exec <SELECT 1>"
    assert entry["level"] == "INFO"
    assert entry["correlation_id"] == "req-1"
    assert entry["parameter_style"] == "qmark"


def test_configure_logging_structured_output(restore_root_logger: None) -> None:
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())

    configure_logging(level="DEBUG", extra_handlers=[handler])
    log_with_context(get_logger("driver"), logging.INFO, "Query <SELECT 1>", operation="query")

    lines = [decode_json(line) for line in stream.getvalue().splitlines()]
    assert lines[-1]["message"] == "Query <SELECT 1>"
    assert lines[-1]["operation"] == "query"
    assert logging.getLogger("sqlprep").propagate is False


def test_log_with_context_skips_disabled_levels(restore_root_logger: None) -> None:
    stream = io.StringIO()
    configure_logging(level="WARNING", format_style="simple", extra_handlers=[logging.StreamHandler(stream)])

    log_with_context(get_logger("driver"), logging.INFO, "hidden")

    assert "hidden" not in stream.getvalue()
    assert get_correlation_id() is None
