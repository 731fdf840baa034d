"""Data models for trace correlation."""

from .trace import TRACE_ID_ALPHABET, TRACE_ID_LENGTH, TraceContext, TraceId

__all__ = [
    "TRACE_ID_ALPHABET",
    "TRACE_ID_LENGTH",
    "TraceContext",
    "TraceId",
]
