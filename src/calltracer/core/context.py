"""Ambient propagation of the active trace context."""

from __future__ import annotations

import contextvars
from collections.abc import Callable
from typing import ParamSpec, TypeVar

from ..models import TraceContext

P = ParamSpec("P")
R = TypeVar("R")

_current_trace_context: contextvars.ContextVar[TraceContext | None] = contextvars.ContextVar(
    "calltracer_current_trace_context",
    default=None,
)


def get_current_trace_context() -> TraceContext | None:
    return _current_trace_context.get()


def push_current_trace_context(
    context: TraceContext | None,
) -> contextvars.Token[TraceContext | None]:
    return _current_trace_context.set(context)


def reset_current_trace_context(token: contextvars.Token[TraceContext | None]) -> None:
    _current_trace_context.reset(token)


def clear_context() -> None:
    _current_trace_context.set(None)


def propagate_context(func: Callable[P, R]) -> Callable[P, R]:
    """Copy contextvars to a callable for thread execution."""
    copied_context = contextvars.copy_context()

    def wrapped(*args: P.args, **kwargs: P.kwargs) -> R:
        return copied_context.run(func, *args, **kwargs)

    return wrapped
