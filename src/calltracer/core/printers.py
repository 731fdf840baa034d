"""Authorization header printers.

Each printer takes the header's values and returns the text to log, or
``None`` when nothing should be logged. Printers never raise.
"""

from __future__ import annotations

import base64
import binascii
import re
from collections.abc import Sequence
from typing import NamedTuple, Protocol

from .config import Confidentiality

_BASIC_PREFIX = re.compile(r"^basic ", re.IGNORECASE)
_ASTERISK = "*"


class Credentials(NamedTuple):
    username: str
    password: str


class HeaderPrinter(Protocol):
    def print(self, values: Sequence[str]) -> str | None: ...


def decode_credentials(values: Sequence[str]) -> Credentials | None:
    """Decode Basic credentials from the first header value."""
    if not values:
        return None
    encoded = _BASIC_PREFIX.sub("", values[0].strip(), count=1)
    # Unpadded tokens are accepted.
    encoded += "=" * (-len(encoded) % 4)
    try:
        decoded = base64.b64decode(encoded, validate=True).decode("utf-8")
    except (binascii.Error, ValueError):
        return None
    username, colon, password = decoded.partition(":")
    if not colon:
        return None
    return Credentials(username, password)


def obfuscate(password: str) -> str:
    """Keep the first and last character, star everything in between."""
    if len(password) < 2:
        return _ASTERISK
    return f"{password[0]}{_ASTERISK * (len(password) - 2)}{password[-1]}"


class UsernameOnlyPrinter:
    def print(self, values: Sequence[str]) -> str | None:
        credentials = decode_credentials(values)
        return credentials.username if credentials is not None else None


class ObfuscatedPasswordPrinter:
    def print(self, values: Sequence[str]) -> str | None:
        credentials = decode_credentials(values)
        if credentials is None:
            return None
        return f"{credentials.username},{obfuscate(credentials.password)}"


_PRINTERS: dict[Confidentiality, HeaderPrinter] = {
    Confidentiality.USERNAME_ONLY: UsernameOnlyPrinter(),
    Confidentiality.OBFUSCATE_PASSWORD: ObfuscatedPasswordPrinter(),
}


def printer_for(confidentiality: Confidentiality) -> HeaderPrinter | None:
    """Return the printer for a mode. ``EXCLUDE`` has none: the header is dropped."""
    return _PRINTERS.get(confidentiality)
