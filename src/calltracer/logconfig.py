"""Logging helpers: the TRACE level, trace id record filter, console setup."""

from __future__ import annotations

import logging
import sys
from typing import Literal

from rich.logging import RichHandler
from structlog.contextvars import get_contextvars

from .core.config import TRACE
from .exceptions import CalltracerConfigError

ConsoleMode = Literal["plain", "rich"]
MISSING_TRACE_ID = "-"

logging.addLevelName(TRACE, "TRACE")


class TraceIdFilter(logging.Filter):
    """Copy the structlog context-local values onto every record.

    Records emitted outside a trace scope get ``MISSING_TRACE_ID`` under
    ``trace_id_key`` so format strings referencing it never fail.
    """

    def __init__(self, trace_id_key: str = "traceId") -> None:
        super().__init__()
        self.trace_id_key = trace_id_key

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in get_contextvars().items():
            setattr(record, key, value)
        if not hasattr(record, self.trace_id_key):
            setattr(record, self.trace_id_key, MISSING_TRACE_ID)
        return True


def configure_logging(
    level: int | str = logging.DEBUG,
    *,
    console: ConsoleMode = "plain",
    trace_id_key: str = "traceId",
    logger_name: str = "calltracer",
) -> logging.Handler:
    """Attach one console handler to ``logger_name``. Calling again replaces it."""
    if console == "rich":
        handler: logging.Handler = RichHandler(show_path=False, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter(f"[%({trace_id_key})s] %(message)s"))
    elif console == "plain":
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(
                f"%(asctime)s %(levelname)-7s [%({trace_id_key})s] %(name)s: %(message)s"
            )
        )
    else:
        raise CalltracerConfigError(f"Unsupported console mode {console!r}. Use 'plain' or 'rich'.")
    handler.addFilter(TraceIdFilter(trace_id_key))
    handler._calltracer_handler = True  # type: ignore[attr-defined]

    logger = logging.getLogger(logger_name)
    for existing in list(logger.handlers):
        if getattr(existing, "_calltracer_handler", False):
            logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler
