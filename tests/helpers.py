"""Shared constants and log-capture helpers for the test suite."""

from __future__ import annotations

import logging

import httpx
import pytest

IP_URL = "https://api.example.org/?format=json"
IP_BODY = b'{"ip":"127.0.0.1"}'
LOGGER_NAME = "calltracer.tests"


def ip_handler(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, headers={"Content-Type": "application/json"}, content=IP_BODY)


def messages(caplog: pytest.LogCaptureFixture, prefix: str = "") -> list[str]:
    return [record.getMessage() for record in records(caplog, prefix)]


def records(caplog: pytest.LogCaptureFixture, prefix: str = "") -> list[logging.LogRecord]:
    return [
        record
        for record in caplog.records
        if record.name == LOGGER_NAME and record.getMessage().startswith(prefix)
    ]
