"""Tracing: scoped trace contexts mirrored into the logging context."""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import Token
from types import TracebackType
from typing import Any

from structlog.contextvars import bind_contextvars, reset_contextvars

from ..models import TraceContext, TraceId
from .config import TracingConfig
from .context import push_current_trace_context, reset_current_trace_context


class Tracing:
    """Opens trace scopes and tags log lines with the scope's trace id.

    The trace id is bound into ``structlog.contextvars`` under
    ``config.trace_id_key`` for the duration of a scope, so any component
    logging through structlog's ``merge_contextvars`` (or a stdlib handler
    with ``TraceIdFilter``) is tagged, not only the HTTP interceptor.
    """

    _default: Tracing | None = None

    def __init__(self, config: TracingConfig | None = None) -> None:
        self.config = config or TracingConfig()

    @classmethod
    def default(cls) -> Tracing:
        if cls._default is None:
            cls._default = cls()
        return cls._default

    @property
    def trace_id_key(self) -> str:
        return self.config.trace_id_key

    def scope(self, trace_id: TraceId | str | None = None) -> TraceScope:
        return TraceScope(self, _coerce_trace_id(trace_id))

    @contextmanager
    def bind(self, context: TraceContext) -> Iterator[TraceContext]:
        """Mirror ``context`` into the logging context only."""
        tokens = bind_contextvars(**{self.trace_id_key: context.trace_id.value})
        try:
            yield context
        finally:
            reset_contextvars(**tokens)

    async def run(
        self,
        func: Callable[..., Any],
        *args: Any,
        trace_id: TraceId | str | None = None,
        **kwargs: Any,
    ) -> Any:
        """Call ``func`` inside a fresh scope, awaiting it when it is a coroutine function."""
        async with self.scope(trace_id):
            result = func(*args, **kwargs)
            if inspect.isawaitable(result):
                result = await result
            return result


class TraceScope:
    """Sync + async context manager for one trace scope."""

    def __init__(self, tracing: Tracing, trace_id: TraceId) -> None:
        self._tracing = tracing
        self.context = TraceContext(trace_id=trace_id)
        self._context_token: Token[TraceContext | None] | None = None
        self._logging_tokens: dict[str, Token[Any]] | None = None

    @property
    def trace_id(self) -> TraceId:
        return self.context.trace_id

    def __enter__(self) -> TraceContext:
        self._context_token = push_current_trace_context(self.context)
        self._logging_tokens = dict(
            bind_contextvars(**{self._tracing.trace_id_key: self.context.trace_id.value})
        )
        return self.context

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        try:
            if self._logging_tokens is not None:
                reset_contextvars(**self._logging_tokens)
        finally:
            self._logging_tokens = None
            if self._context_token is not None:
                reset_current_trace_context(self._context_token)
                self._context_token = None
        return False

    async def __aenter__(self) -> TraceContext:
        return self.__enter__()

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        return self.__exit__(exc_type, exc, tb)


def _coerce_trace_id(trace_id: TraceId | str | None) -> TraceId:
    if trace_id is None:
        return TraceId.generate()
    if isinstance(trace_id, TraceId):
        return trace_id
    return TraceId(value=trace_id)
