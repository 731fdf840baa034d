"""Public exception types for calltracer."""

from __future__ import annotations


class CalltracerError(Exception):
    """Base class for all calltracer exceptions."""


class CalltracerConfigError(CalltracerError, ValueError):
    """Raised when logging or tracing is configured with an unsupported value."""
