"""calltracer: trace-correlated request/response logging for httpx.

Convenience API (delegates to a default Tracing instance):
    calltracer.configure(...)        -> set the default trace id key
    calltracer.trace(...)            -> open a trace scope
    calltracer.with_trace_id(...)    -> decorator, one scope per call

DI API (construct your own interceptor):
    from calltracer import ClientLoggingConfig, ClientLoggingInterceptor, LoggingTransport
    interceptor = ClientLoggingInterceptor(ClientLoggingConfig(level="info"))
    client = httpx.Client(transport=LoggingTransport(interceptor=interceptor))
    with calltracer.trace():
        client.get("https://api.example.org/")
"""

from __future__ import annotations

from .core import (
    ClientLoggingConfig,
    Confidentiality,
    Level,
    RequestConfig,
    ResponseConfig,
    TraceScope,
    Tracing,
    TracingConfig,
    get_current_trace_context,
    match_hosts,
    match_methods,
    match_path_prefix,
    propagate_context,
    with_trace_id,
)
from .interceptor import ClientLoggingInterceptor
from .logconfig import TraceIdFilter, configure_logging
from .models import TraceContext, TraceId
from .transport import AsyncLoggingTransport, LoggingTransport


def configure(*, trace_id_key: str = "traceId") -> Tracing:
    """Configure and return the default global Tracing instance."""
    Tracing._default = Tracing(TracingConfig(trace_id_key=trace_id_key))
    return Tracing._default


def trace(trace_id: TraceId | str | None = None) -> TraceScope:
    """Open a trace scope using the default Tracing."""
    return Tracing.default().scope(trace_id)


def _reset_default_tracing() -> None:
    """Reset the default tracing. Used by test fixtures."""
    Tracing._default = None


__all__ = [
    "AsyncLoggingTransport",
    "ClientLoggingConfig",
    "ClientLoggingInterceptor",
    "Confidentiality",
    "Level",
    "LoggingTransport",
    "RequestConfig",
    "ResponseConfig",
    "TraceContext",
    "TraceId",
    "TraceIdFilter",
    "TraceScope",
    "Tracing",
    "TracingConfig",
    "configure",
    "configure_logging",
    "get_current_trace_context",
    "match_hosts",
    "match_methods",
    "match_path_prefix",
    "propagate_context",
    "trace",
    "with_trace_id",
]
