"""ClientLoggingInterceptor: request/response logging with redaction and trace correlation."""

from __future__ import annotations

import logging
import warnings
from collections.abc import Iterator
from contextlib import contextmanager
from operator import itemgetter

import httpx

from .core.config import AUTHORIZATION_HEADER, EMITTING_LEVELS, ClientLoggingConfig, Level
from .core.context import get_current_trace_context
from .core.filters import OutboundRequest, is_eligible
from .core.printers import printer_for
from .core.tracing import Tracing
from .models import TraceContext

DEFAULT_LOGGER_NAME = "calltracer.client"
TRACE_CONTEXT_EXTENSION = "trace_context"

REQUEST_BODY_OMITTED = "[request body omitted]"
RESPONSE_BODY_OMITTED = "[response body omitted]"
MISSING_TRACE_CONTEXT = "no trace context found"

_TEXT_SUBTYPES = frozenset(
    {
        "json",
        "xml",
        "javascript",
        "x-www-form-urlencoded",
        "x-ndjson",
        "x-yaml",
        "yaml",
        "graphql",
    }
)

Headers = list[tuple[str, list[str]]]


class ClientLoggingInterceptor:
    """Formats and emits one line per request and one per response.

    Error-handling contract
    -----------------------
    - Configuration errors raise at construction (``pydantic.ValidationError``).
    - Failures while formatting or emitting a line (bad credentials, unreadable
      or undecodable bodies, a broken handler) are swallowed with
      ``warnings.warn``; the HTTP call is never affected.
    - Failures of the call itself are logged by ``log_failure``; re-raising is
      left to the transport so the original exception keeps its identity.
    """

    def __init__(
        self,
        config: ClientLoggingConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config or ClientLoggingConfig()
        self.logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self.tracing = Tracing(self.config.tracing)
        self._authorization_printer = printer_for(self.config.request.confidentiality)

    @property
    def logs_requests(self) -> bool:
        return self.config.request.enabled and self._enabled_for(self.config.request_level)

    @property
    def logs_responses(self) -> bool:
        return self.config.response.enabled and self._enabled_for(self.config.response_level)

    def is_eligible(self, request: httpx.Request) -> bool:
        if not self.config.filters:
            return True
        return is_eligible(self.config.filters, OutboundRequest.from_request(request))

    def resolve_trace_context(self, request: httpx.Request) -> TraceContext | None:
        """An explicit ``trace_context`` request extension wins over the ambient one."""
        context = request.extensions.get(TRACE_CONTEXT_EXTENSION)
        if isinstance(context, TraceContext):
            return context
        return get_current_trace_context()

    def log_request(self, request: httpx.Request) -> None:
        if not self.logs_requests:
            return
        with _best_effort("request"), self._phase_scope(request):
            self._log(self.config.request_level, self.format_request(request))

    def log_response(self, response: httpx.Response, request: httpx.Request) -> None:
        if not self.logs_responses:
            return
        with _best_effort("response"), self._phase_scope(request):
            self._log(self.config.response_level, self.format_response(response, request))

    def log_failure(self, request: httpx.Request, cause: BaseException) -> None:
        with _best_effort("failure"), self._phase_scope(request, warn_missing=False):
            self.logger.error(f"Request {request.url} failed!", exc_info=cause)

    def format_request(self, request: httpx.Request) -> str:
        headers = _render_headers(self.request_headers(request))
        body = _request_body(request)
        return f"Request {request.method} {request.url}, headers: {headers}, body: {body}"

    def format_response(self, response: httpx.Response, request: httpx.Request) -> str:
        headers = _render_headers(self.response_headers(response))
        line = (
            f"Response from: {request.method} {request.url}, "
            f"statusCode: {response.status_code} {response.reason_phrase}, headers: {headers}"
        )
        body = _response_body(response)
        return line if body is None else f"{line}, body: {body}"

    def request_headers(self, request: httpx.Request) -> Headers:
        """Excluded headers dropped, Authorization redacted, sorted by name."""
        excluded = self.config.request.excluded_headers
        kept: Headers = []
        for name, values in _group_headers(request.headers):
            if name in excluded:
                continue
            if name.lower() == AUTHORIZATION_HEADER.lower():
                printed = (
                    self._authorization_printer.print(values)
                    if self._authorization_printer is not None
                    else None
                )
                if printed is None:
                    continue
                values = [printed]
            kept.append((name, values))
        return sorted(kept, key=itemgetter(0))

    def response_headers(self, response: httpx.Response) -> Headers:
        """Excluded headers dropped, sorted by name. No redaction."""
        excluded = self.config.request.excluded_headers
        kept = [item for item in _group_headers(response.headers) if item[0] not in excluded]
        return sorted(kept, key=itemgetter(0))

    def reads_response_body(self, response: httpx.Response) -> bool:
        """Whether the response line renders a body, so the transport must buffer it."""
        return is_textual(response.headers.get("content-type"))

    def _enabled_for(self, level: Level) -> bool:
        return level in EMITTING_LEVELS and self.logger.isEnabledFor(level.to_logging())

    def _log(self, level: Level, message: str) -> None:
        self.logger.log(level.to_logging(), message)

    @contextmanager
    def _phase_scope(
        self, request: httpx.Request, *, warn_missing: bool = True
    ) -> Iterator[TraceContext | None]:
        context = self.resolve_trace_context(request)
        if context is None:
            if warn_missing:
                self.logger.warning(MISSING_TRACE_CONTEXT)
            yield None
            return
        with self.tracing.bind(context):
            yield context


@contextmanager
def _best_effort(phase: str) -> Iterator[None]:
    try:
        yield
    except Exception:
        warnings.warn(
            f"calltracer: failed to log {phase}. The call is unaffected.",
            stacklevel=3,
        )


def is_textual(content_type: str | None) -> bool:
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    main_type, _, subtype = media_type.partition("/")
    if main_type == "text":
        return True
    return subtype in _TEXT_SUBTYPES or subtype.endswith(("+json", "+xml"))


def charset_of(content_type: str | None, default: str = "utf-8") -> str:
    for param in (content_type or "").split(";")[1:]:
        key, _, value = param.partition("=")
        if key.strip().lower() == "charset" and value.strip():
            return value.strip().strip("'\"")
    return default


def _group_headers(headers: httpx.Headers) -> Headers:
    """Values grouped per raw header name, in order of first appearance."""
    grouped: dict[str, list[str]] = {}
    for raw_name, raw_value in headers.raw:
        name = raw_name.decode(headers.encoding)
        grouped.setdefault(name, []).append(raw_value.decode(headers.encoding))
    return list(grouped.items())


def _render_headers(headers: Headers) -> str:
    return "[" + ", ".join(f"{name}=[{', '.join(values)}]" for name, values in headers) + "]"


def _request_body(request: httpx.Request) -> str:
    content_type = request.headers.get("content-type")
    if not is_textual(content_type):
        return REQUEST_BODY_OMITTED
    try:
        return request.content.decode(charset_of(content_type))
    except (httpx.RequestNotRead, ValueError, LookupError):
        return REQUEST_BODY_OMITTED


def _response_body(response: httpx.Response) -> str | None:
    content_type = response.headers.get("content-type")
    if not is_textual(content_type):
        return None
    try:
        content = response.content if response.is_stream_consumed else response.read()
        return content.decode(charset_of(content_type))
    except (httpx.HTTPError, httpx.StreamError, ValueError, LookupError):
        return RESPONSE_BODY_OMITTED
