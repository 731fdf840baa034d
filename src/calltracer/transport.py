"""httpx transports that route every call through a ClientLoggingInterceptor."""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator

import httpx

from .interceptor import ClientLoggingInterceptor


class LoggingTransport(httpx.BaseTransport):
    """Wraps a sync transport. Pass as ``httpx.Client(transport=...)``."""

    def __init__(
        self,
        transport: httpx.BaseTransport | None = None,
        interceptor: ClientLoggingInterceptor | None = None,
    ) -> None:
        self._transport = transport or httpx.HTTPTransport()
        self.interceptor = interceptor or ClientLoggingInterceptor()

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        if not self.interceptor.is_eligible(request):
            return self._transport.handle_request(request)

        self.interceptor.log_request(request)
        try:
            response = self._transport.handle_request(request)
        except Exception as exc:
            self.interceptor.log_failure(request, exc)
            raise
        if not self.interceptor.logs_responses:
            return response

        logging_copy = response
        if self.interceptor.reads_response_body(response) and not response.is_stream_consumed:
            logging_copy, response = _duplicate(response, request)
        self.interceptor.log_response(logging_copy, request)
        return response

    def close(self) -> None:
        self._transport.close()


class AsyncLoggingTransport(httpx.AsyncBaseTransport):
    """Wraps an async transport. Pass as ``httpx.AsyncClient(transport=...)``."""

    def __init__(
        self,
        transport: httpx.AsyncBaseTransport | None = None,
        interceptor: ClientLoggingInterceptor | None = None,
    ) -> None:
        self._transport = transport or httpx.AsyncHTTPTransport()
        self.interceptor = interceptor or ClientLoggingInterceptor()

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        if not self.interceptor.is_eligible(request):
            return await self._transport.handle_async_request(request)

        self.interceptor.log_request(request)
        try:
            response = await self._transport.handle_async_request(request)
        except Exception as exc:
            self.interceptor.log_failure(request, exc)
            raise
        if not self.interceptor.logs_responses:
            return response

        logging_copy = response
        if self.interceptor.reads_response_body(response) and not response.is_stream_consumed:
            logging_copy, response = await _aduplicate(response, request)
        self.interceptor.log_response(logging_copy, request)
        return response

    async def aclose(self) -> None:
        await self._transport.aclose()


class _ReplayStream(httpx.SyncByteStream, httpx.AsyncByteStream):
    """Replays drained raw chunks, then raises the error that cut the drain short."""

    def __init__(self, chunks: list[bytes], error: Exception | None = None) -> None:
        self._chunks = chunks
        self._error = error

    def __iter__(self) -> Iterator[bytes]:
        yield from self._chunks
        if self._error is not None:
            raise self._error

    async def __aiter__(self) -> AsyncIterator[bytes]:
        for chunk in self._chunks:
            yield chunk
        if self._error is not None:
            raise self._error


def _duplicate(
    response: httpx.Response, request: httpx.Request
) -> tuple[httpx.Response, httpx.Response]:
    """Return ``(logging_copy, caller_copy)`` over independent body streams.

    A failure while draining the upstream body is not raised here; both
    copies replay what was read and then raise it when their body is read.
    """
    chunks: list[bytes] = []
    error: Exception | None = None
    try:
        for chunk in response.iter_raw():
            chunks.append(chunk)
    except Exception as exc:
        error = exc
    finally:
        response.close()
    return _replay(response, chunks, error, request), _replay(response, chunks, error, request)


async def _aduplicate(
    response: httpx.Response, request: httpx.Request
) -> tuple[httpx.Response, httpx.Response]:
    chunks: list[bytes] = []
    error: Exception | None = None
    try:
        async for chunk in response.aiter_raw():
            chunks.append(chunk)
    except Exception as exc:
        error = exc
    finally:
        await response.aclose()
    return _replay(response, chunks, error, request), _replay(response, chunks, error, request)


def _replay(
    response: httpx.Response,
    chunks: list[bytes],
    error: Exception | None,
    request: httpx.Request,
) -> httpx.Response:
    # Raw bytes keep their Content-Encoding; each copy decodes on its own read.
    return httpx.Response(
        response.status_code,
        headers=response.headers,
        stream=_ReplayStream(chunks, error),
        request=request,
        extensions=response.extensions,
    )
