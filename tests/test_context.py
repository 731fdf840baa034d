from __future__ import annotations

import threading

from calltracer.core.context import (
    clear_context,
    get_current_trace_context,
    propagate_context,
    push_current_trace_context,
    reset_current_trace_context,
)
from calltracer.models import TraceContext, TraceId


def test_push_and_reset_context() -> None:
    context = TraceContext(trace_id=TraceId.generate())

    token = push_current_trace_context(context)
    assert get_current_trace_context() is context

    reset_current_trace_context(token)
    assert get_current_trace_context() is None


def test_nested_push_restores_outer_context() -> None:
    outer = TraceContext(trace_id=TraceId(value="outer"))
    inner = TraceContext(trace_id=TraceId(value="inner"))

    outer_token = push_current_trace_context(outer)
    inner_token = push_current_trace_context(inner)
    assert get_current_trace_context() is inner

    reset_current_trace_context(inner_token)
    assert get_current_trace_context() is outer
    reset_current_trace_context(outer_token)
    assert get_current_trace_context() is None


def test_propagate_context_copies_trace_context_into_thread() -> None:
    context = TraceContext(trace_id=TraceId.generate())
    token = push_current_trace_context(context)
    seen: list[TraceContext | None] = []

    def inspect_context() -> None:
        seen.append(get_current_trace_context())

    wrapped = threading.Thread(target=propagate_context(inspect_context))
    wrapped.start()
    wrapped.join()

    assert seen == [context]
    reset_current_trace_context(token)
    clear_context()
