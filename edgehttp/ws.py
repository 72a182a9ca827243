"""WebSocket upgrade handshake helpers."""

from __future__ import annotations

import base64
import hashlib
import logging
from collections.abc import Iterable

from edgehttp.methods import Method

__all__ = [
    "NONCE_LEN",
    "MAX_BASE64_KEY_LEN",
    "MAX_BASE64_KEY_RESPONSE_LEN",
    "UPGRADE_REQUEST_HEADERS_LEN",
    "UPGRADE_RESPONSE_HEADERS_LEN",
    "UpgradeError",
    "NoVersionError",
    "NoSecKeyError",
    "UnsupportedVersionError",
    "sec_key_encode",
    "sec_key_response",
    "upgrade_request_headers",
    "is_upgrade_request",
    "upgrade_response_headers",
    "is_upgrade_accepted",
]

_log = logging.getLogger(__name__)

NONCE_LEN = 16
MAX_BASE64_KEY_LEN = 28
MAX_BASE64_KEY_RESPONSE_LEN = 33

UPGRADE_REQUEST_HEADERS_LEN = 7
UPGRADE_RESPONSE_HEADERS_LEN = 4

DEFAULT_VERSION = "13"

_WS_MAGIC_GUID = "258EAFA5-E914-47DA-95CA-C5AB0DC85B11"

HeaderPairs = Iterable[tuple[str, str]]


class UpgradeError(Exception):
    """A WebSocket upgrade request cannot be accepted."""


class NoVersionError(UpgradeError):
    """No (acceptable) ``Sec-WebSocket-Version`` header."""

    def __init__(self) -> None:
        super().__init__("No Sec-WebSocket-Version header")


class NoSecKeyError(UpgradeError):
    """No ``Sec-WebSocket-Key`` header."""

    def __init__(self) -> None:
        super().__init__("No Sec-WebSocket-Key header")


class UnsupportedVersionError(UpgradeError):
    """Unsupported ``Sec-WebSocket-Version``."""

    def __init__(self) -> None:
        super().__init__("Unsupported Sec-WebSocket-Version")


def sec_key_encode(nonce: bytes) -> str:
    """Return the ``Sec-WebSocket-Key`` value for a 16-byte nonce."""
    if len(nonce) != NONCE_LEN:
        raise ValueError(f"nonce must be {NONCE_LEN} bytes, got {len(nonce)}")
    return base64.b64encode(bytes(nonce)).decode("ascii")


def sec_key_response(sec_key: str) -> str:
    """Compute the ``Sec-WebSocket-Accept`` value for a given ``Sec-WebSocket-Key``."""
    _log.debug("Computing response for key: %s", sec_key)
    digest = hashlib.sha1((sec_key + _WS_MAGIC_GUID).encode("utf-8")).digest()
    response = base64.b64encode(digest).decode("ascii")
    _log.debug("Computed response: %s", response)
    return response


def upgrade_request_headers(
    host: str | None,
    origin: str | None,
    version: str | None,
    nonce: bytes,
) -> tuple[tuple[str, str], ...]:
    """Return the seven headers of a WebSocket upgrade request.

    A missing host or origin is given as an empty ``("", "")`` pair.
    """
    return (
        ("Host", host) if host is not None else ("", ""),
        ("Origin", origin) if origin is not None else ("", ""),
        ("Content-Length", "0"),
        ("Connection", "Upgrade"),
        ("Upgrade", "websocket"),
        ("Sec-WebSocket-Version", version if version is not None else DEFAULT_VERSION),
        ("Sec-WebSocket-Key", sec_key_encode(nonce)),
    )


def is_upgrade_request(method: Method | None, request_headers: HeaderPairs) -> bool:
    """Return True if the request is a WebSocket upgrade request."""
    if method is not Method.GET:
        return False

    connection = False
    upgrade = False
    for name, value in request_headers:
        lname = name.lower()
        if lname == "connection":
            connection = value.lower() == "upgrade"
        elif lname == "upgrade":
            upgrade = value.lower() == "websocket"

    return connection and upgrade


def upgrade_response_headers(
    request_headers: HeaderPairs, version: str | None
) -> tuple[tuple[str, str], ...]:
    """Return the four headers of a WebSocket upgrade response.

    Raises NoVersionError if the version header is missing or differs from
    ``version`` (default "13"), and NoSecKeyError if the key is missing.
    """
    expected_version = (version if version is not None else DEFAULT_VERSION).lower()
    version_ok = False
    accept: str | None = None

    for name, value in request_headers:
        lname = name.lower()
        if lname == "sec-websocket-version":
            if value.lower() != expected_version:
                raise NoVersionError()
            version_ok = True
        elif lname == "sec-websocket-key":
            accept = sec_key_response(value)

    if not version_ok:
        raise NoVersionError()
    if accept is None:
        raise NoSecKeyError()

    return (
        ("Content-Length", "0"),
        ("Connection", "Upgrade"),
        ("Upgrade", "websocket"),
        ("Sec-WebSocket-Accept", accept),
    )


def is_upgrade_accepted(
    code: int | None, response_headers: HeaderPairs, nonce: bytes
) -> bool:
    """Return True if the response accepts the upgrade requested with ``nonce``."""
    if code != 101:
        return False

    connection = False
    upgrade = False
    accepted = False
    for name, value in response_headers:
        lname = name.lower()
        if lname == "connection":
            connection = value.lower() == "upgrade"
        elif lname == "upgrade":
            upgrade = value.lower() == "websocket"
        elif lname == "sec-websocket-accept":
            accepted = value == sec_key_response(sec_key_encode(nonce))

    return connection and upgrade and accepted