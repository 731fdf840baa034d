"""Eligibility filters evaluated once per outbound call."""

from __future__ import annotations

import warnings
from collections.abc import Callable, Iterable

import httpx
from pydantic import BaseModel, ConfigDict


class OutboundRequest(BaseModel):
    """Read-only view of a request at filter time."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    method: str
    url: httpx.URL
    headers: httpx.Headers

    @classmethod
    def from_request(cls, request: httpx.Request) -> OutboundRequest:
        return cls(method=request.method, url=request.url, headers=httpx.Headers(request.headers))


RequestFilter = Callable[[OutboundRequest], bool]


def is_eligible(filters: Iterable[RequestFilter], request: OutboundRequest) -> bool:
    """Log if no filters are configured or any filter matches.

    A filter that raises counts as non-matching.
    """
    filters = tuple(filters)
    if not filters:
        return True
    for request_filter in filters:
        try:
            if request_filter(request):
                return True
        except Exception:
            warnings.warn(
                f"calltracer: request filter {request_filter!r} raised, treating as no match",
                stacklevel=2,
            )
    return False


def match_methods(*methods: str) -> RequestFilter:
    wanted = {method.upper() for method in methods}
    return lambda request: request.method.upper() in wanted


def match_hosts(*hosts: str) -> RequestFilter:
    wanted = {host.lower() for host in hosts}
    return lambda request: request.url.host.lower() in wanted


def match_path_prefix(prefix: str) -> RequestFilter:
    return lambda request: request.url.path.startswith(prefix)
