"""Core tracing, policy and redaction runtime."""

from .config import (
    EMITTING_LEVELS,
    TRACE,
    ClientLoggingConfig,
    Confidentiality,
    Level,
    RequestConfig,
    ResponseConfig,
    TracingConfig,
)
from .context import clear_context, get_current_trace_context, propagate_context
from .decorators import with_trace_id
from .filters import (
    OutboundRequest,
    RequestFilter,
    is_eligible,
    match_hosts,
    match_methods,
    match_path_prefix,
)
from .printers import (
    Credentials,
    HeaderPrinter,
    ObfuscatedPasswordPrinter,
    UsernameOnlyPrinter,
    decode_credentials,
    printer_for,
)
from .tracing import TraceScope, Tracing

__all__ = [
    "EMITTING_LEVELS",
    "TRACE",
    "ClientLoggingConfig",
    "Confidentiality",
    "Credentials",
    "HeaderPrinter",
    "Level",
    "ObfuscatedPasswordPrinter",
    "OutboundRequest",
    "RequestConfig",
    "RequestFilter",
    "ResponseConfig",
    "TraceScope",
    "Tracing",
    "TracingConfig",
    "UsernameOnlyPrinter",
    "clear_context",
    "decode_credentials",
    "get_current_trace_context",
    "is_eligible",
    "match_hosts",
    "match_methods",
    "match_path_prefix",
    "printer_for",
    "propagate_context",
    "with_trace_id",
]
