"""Parallel calls.

Fans out three requests with asyncio.gather(), each inside its own trace
scope, and checks that every captured log line carries the id of the
scope that issued it.
"""

from __future__ import annotations

import asyncio
import logging

import httpx

from calltracer import AsyncLoggingTransport, ClientLoggingInterceptor, TraceIdFilter, Tracing


class Capture(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.lines: list[tuple[str, str]] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.lines.append((getattr(record, "traceId"), record.getMessage()))


async def search_service(request: httpx.Request) -> httpx.Response:
    await asyncio.sleep(0.01)
    return httpx.Response(200, json={"source": request.url.path.strip("/")})


async def main() -> None:
    capture = Capture()
    capture.addFilter(TraceIdFilter())
    logger = logging.getLogger("calltracer.example")
    logger.addHandler(capture)
    logger.setLevel(logging.DEBUG)

    tracing = Tracing()
    transport = AsyncLoggingTransport(
        httpx.MockTransport(search_service),
        interceptor=ClientLoggingInterceptor(logger=logger),
    )

    async with httpx.AsyncClient(transport=transport) as client:

        async def search(source: str) -> tuple[str, str]:
            async with tracing.scope() as context:
                await client.get(f"https://search.example.org/{source}")
                return source, context.trace_id.value

        issued = dict(await asyncio.gather(search("web"), search("docs"), search("arxiv")))

    # -- Assertions --
    assert len(set(issued.values())) == 3, "Each scope must get its own trace id"
    assert len(capture.lines) == 6
    for trace_id, message in capture.lines:
        source = next(s for s in issued if f"search.example.org/{s}" in message)
        assert trace_id == issued[source], f"{message!r} tagged with a foreign trace id"

    for trace_id, message in capture.lines:
        print(f"[{trace_id}] {message}")


if __name__ == "__main__":
    asyncio.run(main())
