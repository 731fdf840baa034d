from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

import httpx
import pytest
from helpers import LOGGER_NAME, ip_handler
from structlog.contextvars import clear_contextvars

import calltracer
from calltracer import (
    ClientLoggingConfig,
    ClientLoggingInterceptor,
    LoggingTransport,
    TraceIdFilter,
)
from calltracer.core import TRACE
from calltracer.core.context import clear_context


def reset_calltracer_config() -> None:
    """Reset the default tracing and any leaked context between tests."""
    calltracer._reset_default_tracing()
    clear_context()
    clear_contextvars()


@pytest.fixture(autouse=True)
def _reset_config() -> None:
    reset_calltracer_config()


@pytest.fixture
def logger(caplog: pytest.LogCaptureFixture) -> Iterator[logging.Logger]:
    """A logger open down to TRACE whose records carry the structlog context."""
    test_logger = logging.getLogger(LOGGER_NAME)
    trace_filter = TraceIdFilter()
    test_logger.addFilter(trace_filter)
    caplog.set_level(TRACE, logger=LOGGER_NAME)
    yield test_logger
    test_logger.removeFilter(trace_filter)


@pytest.fixture
def make_client(logger: logging.Logger) -> Callable[..., httpx.Client]:
    def factory(
        config: ClientLoggingConfig | None = None,
        handler: Callable[[httpx.Request], httpx.Response] = ip_handler,
    ) -> httpx.Client:
        interceptor = ClientLoggingInterceptor(config, logger=logger)
        transport = LoggingTransport(httpx.MockTransport(handler), interceptor=interceptor)
        return httpx.Client(transport=transport)

    return factory
