from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
from rich.logging import RichHandler

from calltracer import TraceIdFilter, configure_logging, trace
from calltracer.core import TRACE
from calltracer.exceptions import CalltracerConfigError
from calltracer.logconfig import MISSING_TRACE_ID

CONSOLE_LOGGER = "calltracer.tests.console"


def make_record(message: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(CONSOLE_LOGGER, logging.INFO, __file__, 1, message, None, None)


@pytest.fixture
def console_logger() -> Iterator[logging.Logger]:
    logger = logging.getLogger(CONSOLE_LOGGER)
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def test_trace_level_is_registered() -> None:
    assert logging.getLevelName(TRACE) == "TRACE"


def test_filter_marks_records_outside_a_scope() -> None:
    record = make_record()

    assert TraceIdFilter().filter(record) is True
    assert getattr(record, "traceId") == MISSING_TRACE_ID


def test_filter_copies_bound_trace_id() -> None:
    record = make_record()

    with trace("abc123") as context:
        TraceIdFilter().filter(record)

    assert getattr(record, "traceId") == context.trace_id.value == "abc123"


def test_filter_uses_custom_key() -> None:
    record = make_record()

    TraceIdFilter("requestId").filter(record)

    assert getattr(record, "requestId") == MISSING_TRACE_ID


def test_plain_console_formats_trace_id(console_logger: logging.Logger) -> None:
    handler = configure_logging(logging.INFO, logger_name=CONSOLE_LOGGER)
    record = make_record("Request GET https://api.example.org/")

    with trace("t1"):
        handler.filter(record)
    line = handler.format(record)

    assert isinstance(handler, logging.StreamHandler)
    assert "[t1]" in line
    assert line.endswith("Request GET https://api.example.org/")
    assert console_logger.level == logging.INFO


def test_rich_console_uses_rich_handler(console_logger: logging.Logger) -> None:
    handler = configure_logging(console="rich", logger_name=CONSOLE_LOGGER)

    assert isinstance(handler, RichHandler)
    assert console_logger.handlers == [handler]


def test_configure_logging_replaces_previous_handler(console_logger: logging.Logger) -> None:
    foreign = logging.NullHandler()
    console_logger.addHandler(foreign)

    first = configure_logging(logger_name=CONSOLE_LOGGER)
    second = configure_logging(console="rich", logger_name=CONSOLE_LOGGER)

    assert first not in console_logger.handlers
    assert console_logger.handlers == [foreign, second]


def test_unknown_console_mode_raises(console_logger: logging.Logger) -> None:
    with pytest.raises(CalltracerConfigError, match="Unsupported console mode"):
        configure_logging(console="json", logger_name=CONSOLE_LOGGER)  # type: ignore[arg-type]

    assert console_logger.handlers == []
