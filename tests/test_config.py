from __future__ import annotations

import pytest
from pydantic import ValidationError

from calltracer import ClientLoggingConfig, Confidentiality, Level, RequestConfig, ResponseConfig


def test_exclude_mode_implicitly_excludes_authorization() -> None:
    config = RequestConfig(excluded_headers={"X-Secret"})

    assert config.confidentiality == Confidentiality.EXCLUDE
    assert config.excluded_headers == frozenset({"X-Secret", "Authorization"})


def test_default_request_config_excludes_authorization() -> None:
    assert "Authorization" in RequestConfig().excluded_headers


@pytest.mark.parametrize(
    "mode", [Confidentiality.USERNAME_ONLY, Confidentiality.OBFUSCATE_PASSWORD]
)
def test_redacting_modes_keep_authorization(mode: Confidentiality) -> None:
    config = RequestConfig(confidentiality=mode, excluded_headers={"X-Secret"})

    assert config.excluded_headers == frozenset({"X-Secret"})


def test_phase_levels_fall_back_to_global_level() -> None:
    config = ClientLoggingConfig(level=Level.INFO, request=RequestConfig(level=Level.TRACE))

    assert config.request_level == Level.TRACE
    assert config.response_level == Level.INFO


def test_levels_accept_plain_strings() -> None:
    config = ClientLoggingConfig(level="info", response=ResponseConfig(level="trace"))

    assert config.level is Level.INFO
    assert config.response_level is Level.TRACE


def test_config_is_immutable() -> None:
    config = ClientLoggingConfig()

    with pytest.raises(ValidationError):
        config.level = Level.INFO  # type: ignore[misc]


def test_invalid_values_raise_at_construction() -> None:
    with pytest.raises(ValidationError):
        ClientLoggingConfig(level="verbose")
    with pytest.raises(ValidationError):
        RequestConfig(confidentiality="plaintext")
    with pytest.raises(ValidationError):
        ResponseConfig(enabeld=False)
