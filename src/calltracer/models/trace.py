"""TraceId and TraceContext models."""

from __future__ import annotations

import secrets
import string

from pydantic import BaseModel, ConfigDict, Field

TRACE_ID_ALPHABET = string.ascii_lowercase + string.digits
TRACE_ID_LENGTH = 11


class TraceId(BaseModel):
    """Opaque correlation token for one logical outbound call."""

    model_config = ConfigDict(frozen=True, strict=True)

    value: str = Field(min_length=1, pattern=r"^\S+$")

    @classmethod
    def generate(cls) -> TraceId:
        return cls(value="".join(secrets.choice(TRACE_ID_ALPHABET) for _ in range(TRACE_ID_LENGTH)))

    def __str__(self) -> str:
        return self.value


class TraceContext(BaseModel):
    """Propagation cell carrying one TraceId through a scoped unit of work."""

    model_config = ConfigDict(frozen=True, strict=True)

    trace_id: TraceId
