"""HTTP header collections and request/response heads."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from edgehttp.connection import BodyType
from edgehttp.methods import Method
from edgehttp.ws import is_upgrade_accepted, is_upgrade_request, upgrade_request_headers, upgrade_response_headers

__all__ = [
    "DEFAULT_MAX_HEADERS_COUNT",
    "Headers",
    "RequestHeaders",
    "ResponseHeaders",
]

DEFAULT_MAX_HEADERS_COUNT = 64


def _decode(value: bytes) -> str:
    return value.decode("utf-8", errors="surrogateescape")


class Headers:
    """An ordered, bounded set of headers with case-insensitive names.

    Setting a header that already exists replaces its value in place;
    setting a new one appends it. Adding beyond ``capacity`` raises
    OverflowError.
    """

    def __init__(self, capacity: int = DEFAULT_MAX_HEADERS_COUNT) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self.capacity = capacity
        self._entries: list[tuple[str, bytes]] = []

    def __repr__(self) -> str:
        return f"Headers({list(self)!r})"

    def __iter__(self) -> Iterator[tuple[str, str]]:
        """Iterate over ``(name, value)`` pairs, values decoded as text."""
        for name, value in self._entries:
            yield name, _decode(value)

    def __len__(self) -> int:
        return len(self._entries)

    def iter_raw(self) -> Iterator[tuple[str, bytes]]:
        """Iterate over ``(name, value)`` pairs with the values as bytes."""
        yield from self._entries

    def _find(self, name: str) -> int | None:
        lname = name.lower()
        return next(
            (pos for pos, (hname, _) in enumerate(self._entries) if hname.lower() == lname),
            None,
        )

    def get(self, name: str) -> str | None:
        """Return the value of the header ``name``, or None."""
        raw = self.get_raw(name)
        return None if raw is None else _decode(raw)

    def get_raw(self, name: str) -> bytes | None:
        """Return the value of the header ``name`` as bytes, or None."""
        pos = self._find(name)
        return None if pos is None else self._entries[pos][1]

    def set(self, name: str, value: str) -> Headers:
        """Set a header; an empty name is ignored."""
        return self.set_raw(name, value.encode("utf-8", errors="surrogateescape"))

    def set_raw(self, name: str, value: bytes) -> Headers:
        """Set a header with a bytes value; an empty name is ignored."""
        if not name:
            return self.remove(name)
        entry = (name, bytes(value))
        pos = self._find(name)
        if pos is not None:
            self._entries[pos] = entry
        elif len(self._entries) < self.capacity:
            self._entries.append(entry)
        else:
            raise OverflowError("No space left")
        return self

    def remove(self, name: str) -> Headers:
        """Remove the header ``name`` if present."""
        pos = self._find(name)
        if pos is not None:
            del self._entries[pos]
        return self

    def content_len(self) -> int | None:
        """Return the ``Content-Length`` value, or None.

        Raises ValueError if the value is not a number.
        """
        value = self.get("Content-Length")
        if value is None:
            return None
        body = BodyType.from_header("Content-Length", value)
        return body.length if body is not None else None

    def content_type(self) -> str | None:
        return self.get("Content-Type")

    def content_encoding(self) -> str | None:
        return self.get("Content-Encoding")

    def transfer_encoding(self) -> str | None:
        return self.get("Transfer-Encoding")

    def host(self) -> str | None:
        return self.get("Host")

    def connection(self) -> str | None:
        return self.get("Connection")

    def cache_control(self) -> str | None:
        return self.get("Cache-Control")

    def upgrade(self) -> str | None:
        return self.get("Upgrade")

    def set_content_len(self, content_len: int) -> Headers:
        """Set ``Content-Length``; the length must fit in 64 unsigned bits."""
        body = BodyType.content_len(content_len)
        return self.set("Content-Length", str(body.length))

    def set_content_type(self, content_type: str) -> Headers:
        return self.set("Content-Type", content_type)

    def set_content_encoding(self, content_encoding: str) -> Headers:
        return self.set("Content-Encoding", content_encoding)

    def set_transfer_encoding(self, transfer_encoding: str) -> Headers:
        return self.set("Transfer-Encoding", transfer_encoding)

    def set_transfer_encoding_chunked(self) -> Headers:
        return self.set_transfer_encoding("Chunked")

    def set_host(self, host: str) -> Headers:
        return self.set("Host", host)

    def set_connection(self, connection: str) -> Headers:
        return self.set("Connection", connection)

    def set_connection_close(self) -> Headers:
        return self.set_connection("Close")

    def set_connection_keep_alive(self) -> Headers:
        return self.set_connection("Keep-Alive")

    def set_connection_upgrade(self) -> Headers:
        return self.set_connection("Upgrade")

    def set_cache_control(self, cache: str) -> Headers:
        return self.set("Cache-Control", cache)

    def set_cache_control_no_cache(self) -> Headers:
        return self.set_cache_control("No-Cache")

    def set_upgrade(self, upgrade: str) -> Headers:
        return self.set("Upgrade", upgrade)

    def set_upgrade_websocket(self) -> Headers:
        return self.set_upgrade("websocket")

    def set_ws_upgrade_request_headers(
        self,
        host: str | None,
        origin: str | None,
        version: str | None,
        nonce: bytes,
    ) -> Headers:
        """Set all WebSocket upgrade request headers, including the key for ``nonce``."""
        for name, value in upgrade_request_headers(host, origin, version, nonce):
            self.set(name, value)
        return self

    def set_ws_upgrade_response_headers(
        self, request_headers: Iterable[tuple[str, str]], version: str | None
    ) -> Headers:
        """Set all WebSocket upgrade response headers for the given request headers.

        Raises UpgradeError if the request cannot be accepted.
        """
        for name, value in upgrade_response_headers(request_headers, version):
            self.set(name, value)
        return self


def _header_lines(headers: Headers) -> str:
    return "".join(f"{name}: {value}\n" for name, value in headers)


@dataclass
class RequestHeaders:
    """A request line (protocol, method, path) and its headers."""

    http11: bool | None = True
    method: Method | None = None
    path: str | None = None
    headers: Headers = field(default_factory=Headers)

    def is_ws_upgrade_request(self) -> bool:
        """Return True if this is a WebSocket upgrade request."""
        return is_upgrade_request(self.method, self.headers)

    def __str__(self) -> str:
        parts = []
        if self.http11 is not None:
            parts.append("HTTP/1.1 " if self.http11 else "HTTP/1.0 ")
        if self.method is not None:
            parts.append(f"{self.method} {self.path or ''}\n")
        parts.append(_header_lines(self.headers))
        return "".join(parts)


@dataclass
class ResponseHeaders:
    """A status line (protocol, code, reason) and its headers."""

    http11: bool | None = True
    code: int | None = None
    reason: str | None = None
    headers: Headers = field(default_factory=Headers)

    def is_ws_upgrade_accepted(self, nonce: bytes) -> bool:
        """Return True if this response accepts the upgrade requested with ``nonce``."""
        return is_upgrade_accepted(self.code, self.headers, nonce)

    def __str__(self) -> str:
        parts = []
        if self.http11 is not None:
            parts.append(f"{'HTTP/1.1 ' if self.http11 else 'HTTP/1.0'} \n")
        if self.code is not None:
            parts.append(f"{self.code} {self.reason or ''}\n")
        parts.append(_header_lines(self.headers))
        return "".join(parts)