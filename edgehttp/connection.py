"""Connection and body type resolution from HTTP headers."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

__all__ = [
    "HeadersMismatchError",
    "ResponseConnectionTypeMismatchError",
    "BodyTypeError",
    "ConnectionType",
    "BodyKind",
    "BodyType",
]

_log = logging.getLogger(__name__)

_U64_MAX = 2**64 - 1
_CONTENT_LEN_RE = re.compile(r"\+?[0-9]+")

HeaderPairs = Iterable[tuple[str, str]]


class HeadersMismatchError(Exception):
    """The connection type and body type in the headers do not fit together."""


class ResponseConnectionTypeMismatchError(HeadersMismatchError):
    """A Keep-Alive response was given to a request that asked for Close."""

    def __init__(self) -> None:
        super().__init__(
            "Response connection type is different from the request connection type"
        )


class BodyTypeError(HeadersMismatchError):
    """The body type cannot be used with the connection type and protocol."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Body type mismatch: {detail}")
        self.detail = detail


def _fail_body(detail: str) -> BodyTypeError:
    _log.warning("%s", detail)
    return BodyTypeError(detail)


def _parse_content_len(value: str) -> int:
    if not _CONTENT_LEN_RE.fullmatch(value) or not value.isascii():
        raise ValueError(f"invalid Content-Length value: {value!r}")
    length = int(value)
    if length > _U64_MAX:
        raise ValueError(f"Content-Length value out of range: {value!r}")
    return length


class ConnectionType(Enum):
    """Whether the connection is kept open after the exchange."""

    KEEP_ALIVE = "Keep-Alive"
    CLOSE = "Close"

    def __str__(self) -> str:
        return self.value

    @staticmethod
    def resolve(
        headers_connection_type: ConnectionType | None,
        carry_over_connection_type: ConnectionType | None,
        http11: bool,
    ) -> ConnectionType:
        """Resolve the connection type from the headers, the carry-over, or the protocol.

        Raises ResponseConnectionTypeMismatchError for Keep-Alive over a Close carry-over.
        """
        if headers_connection_type is not None:
            if (
                headers_connection_type is ConnectionType.KEEP_ALIVE
                and carry_over_connection_type is ConnectionType.CLOSE
            ):
                _log.warning(
                    "Cannot set a Keep-Alive connection when the peer requested Close"
                )
                raise ResponseConnectionTypeMismatchError()
            return headers_connection_type

        if carry_over_connection_type is not None:
            return carry_over_connection_type
        return ConnectionType.KEEP_ALIVE if http11 else ConnectionType.CLOSE

    @staticmethod
    def from_header(name: str, value: str) -> ConnectionType | None:
        """Return the connection type named by a ``Connection`` header, or None."""
        if name.lower() != "connection":
            return None
        lvalue = value.lower()
        if lvalue == "close":
            return ConnectionType.CLOSE
        if lvalue == "keep-alive":
            return ConnectionType.KEEP_ALIVE
        return None

    @staticmethod
    def from_headers(headers: HeaderPairs) -> ConnectionType | None:
        """Return the connection type of the last ``Connection`` header, or None."""
        connection: ConnectionType | None = None
        for name, value in headers:
            found = ConnectionType.from_header(name, value)
            if found is None:
                continue
            if connection is not None:
                _log.warning(
                    "Multiple Connection headers found. Current %s and new %s",
                    connection,
                    found,
                )
            connection = found
        return connection

    def raw_header(self) -> tuple[str, bytes]:
        """Return the ``Connection`` header for this type."""
        return ("Connection", self.value.encode("ascii"))


class BodyKind(Enum):
    """How the length of a message body is determined."""

    CHUNKED = "Chunked"
    CONTENT_LEN = "Content-Length"
    RAW = "Raw"


@dataclass(frozen=True)
class BodyType:
    """A body type; ``length`` is set only for CONTENT_LEN."""

    kind: BodyKind
    length: int | None = None

    def __post_init__(self) -> None:
        if self.kind is BodyKind.CONTENT_LEN:
            if self.length is None or not 0 <= self.length <= _U64_MAX:
                raise ValueError("a Content-Length body needs a length in u64 range")
        elif self.length is not None:
            raise ValueError(f"a {self.kind.value} body has no length")

    @classmethod
    def chunked(cls) -> BodyType:
        """A chunked body (``Transfer-Encoding: Chunked``)."""
        return cls(BodyKind.CHUNKED)

    @classmethod
    def content_len(cls, length: int) -> BodyType:
        """A body of a known length (``Content-Length``)."""
        return cls(BodyKind.CONTENT_LEN, length)

    @classmethod
    def raw(cls) -> BodyType:
        """A body that runs until the connection closes (responses only)."""
        return cls(BodyKind.RAW)

    def __str__(self) -> str:
        if self.kind is BodyKind.CONTENT_LEN:
            return f"Content-Length: {self.length}"
        return self.kind.value

    @staticmethod
    def resolve(
        headers_body_type: BodyType | None,
        connection_type: ConnectionType,
        request: bool,
        http11: bool,
        chunked_if_unspecified: bool,
    ) -> BodyType:
        """Resolve the body type from the headers, connection type and protocol.

        Raises BodyTypeError for combinations the protocol does not allow.
        """
        if headers_body_type is not None:
            if headers_body_type.kind is BodyKind.RAW:
                if request:
                    raise _fail_body("Raw body in a request. This is not allowed.")
                if connection_type is not ConnectionType.CLOSE:
                    raise _fail_body(
                        "Raw body response with a Keep-Alive connection. "
                        "This is not allowed."
                    )
            elif headers_body_type.kind is BodyKind.CHUNKED and not http11:
                raise _fail_body(
                    "Chunked body with an HTTP/1.0 connection. This is not allowed."
                )
            return headers_body_type

        if request:
            if chunked_if_unspecified and http11:
                return BodyType.chunked()
            _log.debug("Unknown body type in a request. Assuming Content-Length=0.")
            return BodyType.content_len(0)
        if connection_type is ConnectionType.CLOSE:
            return BodyType.raw()
        if chunked_if_unspecified and http11:
            return BodyType.chunked()
        raise _fail_body(
            "Unknown body type in a response with a Keep-Alive connection. "
            "This is not allowed."
        )

    @staticmethod
    def from_header(name: str, value: str) -> BodyType | None:
        """Return the body type named by a header, or None.

        Raises ValueError for a ``Content-Length`` value that is not a number.
        """
        lname = name.lower()
        if lname == "transfer-encoding":
            if value.lower() == "chunked":
                return BodyType.chunked()
        elif lname == "content-length":
            return BodyType.content_len(_parse_content_len(value))
        return None

    @staticmethod
    def from_headers(headers: HeaderPairs) -> BodyType | None:
        """Return the body type of the last body header, or None."""
        body: BodyType | None = None
        for name, value in headers:
            found = BodyType.from_header(name, value)
            if found is None:
                continue
            if body is not None:
                _log.warning(
                    "Multiple body type headers found. Current %s and new %s",
                    body,
                    found,
                )
            body = found
        return body

    def raw_header(self) -> tuple[str, bytes] | None:
        """Return the header for this body type; None for a raw body."""
        if self.kind is BodyKind.CHUNKED:
            return ("Transfer-Encoding", b"Chunked")
        if self.kind is BodyKind.CONTENT_LEN:
            return ("Content-Length", str(self.length).encode("ascii"))
        return None