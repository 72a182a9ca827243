"""HTTP request methods."""

from __future__ import annotations

from enum import Enum

__all__ = ["Method", "parse_method"]


class Method(Enum):
    """An HTTP request method. The value is its name as sent on the wire."""

    DELETE = "DELETE"
    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    CONNECT = "CONNECT"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    COPY = "COPY"
    LOCK = "LOCK"
    MKCOL = "MKCOL"
    MOVE = "MOVE"
    PROPFIND = "PROPFIND"
    PROPPATCH = "PROPPATCH"
    SEARCH = "SEARCH"
    UNLOCK = "UNLOCK"
    BIND = "BIND"
    REBIND = "REBIND"
    UNBIND = "UNBIND"
    ACL = "ACL"
    REPORT = "REPORT"
    MKACTIVITY = "MKACTIVITY"
    CHECKOUT = "CHECKOUT"
    MERGE = "MERGE"
    MSEARCH = "MSEARCH"
    NOTIFY = "NOTIFY"
    SUBSCRIBE = "SUBSCRIBE"
    UNSUBSCRIBE = "UNSUBSCRIBE"
    PATCH = "PATCH"
    PURGE = "PURGE"
    MKCALENDAR = "MKCALENDAR"
    LINK = "LINK"
    UNLINK = "UNLINK"

    def __str__(self) -> str:
        return self.value


_BY_LOWER_NAME = {method.value.lower(): method for method in Method}


def parse_method(name: str) -> Method | None:
    """Return the method whose name matches ``name`` ignoring ASCII case, or None."""
    if not name.isascii():
        return None
    return _BY_LOWER_NAME.get(name.lower())