"""Configuration for a ClientLoggingInterceptor instance."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from .filters import OutboundRequest

TRACE = 5
AUTHORIZATION_HEADER = "Authorization"


class Level(StrEnum):
    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    def to_logging(self) -> int:
        return _LOGGING_LEVELS[self]


_LOGGING_LEVELS = {
    Level.TRACE: TRACE,
    Level.DEBUG: logging.DEBUG,
    Level.INFO: logging.INFO,
    Level.WARNING: logging.WARNING,
    Level.ERROR: logging.ERROR,
}

# WARNING and ERROR are reserved for failure reporting.
EMITTING_LEVELS = frozenset({Level.TRACE, Level.DEBUG, Level.INFO})


class Confidentiality(StrEnum):
    EXCLUDE = "exclude"
    USERNAME_ONLY = "username_only"
    OBFUSCATE_PASSWORD = "obfuscate_password"


class RequestConfig(BaseModel):
    """Request phase policy. ``level=None`` falls back to the global level."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    level: Level | None = None
    confidentiality: Confidentiality = Confidentiality.EXCLUDE
    excluded_headers: frozenset[str] = Field(default=frozenset(), validate_default=True)
    enabled: bool = True

    @field_validator("excluded_headers")
    @classmethod
    def _exclude_authorization(cls, value: frozenset[str], info: ValidationInfo) -> frozenset[str]:
        if info.data.get("confidentiality") == Confidentiality.EXCLUDE:
            return value | {AUTHORIZATION_HEADER}
        return value


class ResponseConfig(BaseModel):
    """Response phase policy. ``level=None`` falls back to the global level."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    level: Level | None = None
    enabled: bool = True


class TracingConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    trace_id_key: str = Field(default="traceId", min_length=1)


class ClientLoggingConfig(BaseModel):
    """Validated configuration for an interceptor. Passed via DI at construction."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    level: Level = Level.DEBUG
    request: RequestConfig = Field(default_factory=RequestConfig)
    response: ResponseConfig = Field(default_factory=ResponseConfig)
    tracing: TracingConfig = Field(default_factory=TracingConfig)
    filters: tuple[Callable[[OutboundRequest], bool], ...] = ()

    @property
    def request_level(self) -> Level:
        return self.request.level or self.level

    @property
    def response_level(self) -> Level:
        return self.response.level or self.level
