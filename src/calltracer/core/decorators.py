"""Function decorators that run each call in its own trace scope."""

from __future__ import annotations

import inspect
import warnings
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import ParamSpec, TypeVar, cast

from pydantic import ValidationError

from ..models import TraceId
from .tracing import Tracing

P = ParamSpec("P")
R = TypeVar("R")


def with_trace_id(
    tracing: Tracing | None = None,
    trace_id_arg: str | None = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Wrap every call of a function in a new trace scope.

    When ``trace_id_arg`` names a keyword argument and the caller passes a
    value for it, that value becomes the scope's trace id instead of a
    generated one. The argument is still forwarded to the function. A value
    that is not a valid trace id is reported with ``warnings.warn`` and a
    generated id is used instead.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        def scope_for(kwargs: dict[str, object]):
            requested = kwargs.get(trace_id_arg) if trace_id_arg else None
            trace_id = requested if isinstance(requested, (str, TraceId)) else None
            active = tracing or Tracing.default()
            try:
                return active.scope(trace_id)
            except ValidationError:
                warnings.warn(
                    f"calltracer: invalid trace id {requested!r} in {trace_id_arg!r}, "
                    "using a generated one",
                    stacklevel=3,
                )
                return active.scope()

        if inspect.iscoroutinefunction(func):
            async_func = cast(Callable[P, Awaitable[R]], func)

            @wraps(func)
            async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
                async with scope_for(kwargs):
                    return await async_func(*args, **kwargs)

            return cast(Callable[P, R], async_wrapper)

        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            with scope_for(kwargs):
                return func(*args, **kwargs)

        return wrapper

    return decorator
