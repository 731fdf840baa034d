"""Basic usage example using the convenience API."""

from __future__ import annotations

import httpx

from calltracer import (
    ClientLoggingConfig,
    ClientLoggingInterceptor,
    Confidentiality,
    LoggingTransport,
    RequestConfig,
    configure_logging,
    trace,
    with_trace_id,
)


def ip_service(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"ip": "127.0.0.1"})


@with_trace_id()
def lookup_ip(client: httpx.Client) -> str:
    return client.get("https://api.example.org/?format=json").json()["ip"]


def main() -> None:
    configure_logging(console="rich")

    config = ClientLoggingConfig(
        level="debug",
        request=RequestConfig(
            confidentiality=Confidentiality.USERNAME_ONLY,
            excluded_headers=frozenset({"X-Api-Key"}),
        ),
    )
    transport = LoggingTransport(
        httpx.MockTransport(ip_service), interceptor=ClientLoggingInterceptor(config)
    )

    with httpx.Client(transport=transport, auth=("demo", "s3cret")) as client:
        with trace() as context:
            client.get("https://api.example.org/", headers={"X-Api-Key": "hidden"})
            print(f"Logged under trace id {context.trace_id}")

        print(f"Resolved ip {lookup_ip(client)} in its own trace")


if __name__ == "__main__":
    main()
