# edgehttp

A small library for working with the heads of HTTP/1.0 and HTTP/1.1 messages. It uses only the standard library.

## Modules

- `edgehttp.methods` provides the `Method` enum. `parse_method(name)` returns the matching `Method`, ignoring ASCII case, or `None` if there is no match.
- `edgehttp.connection` provides `ConnectionType` (`KEEP_ALIVE` or `CLOSE`) and `BodyType` (`BodyType.chunked()`, `BodyType.content_len(n)` or `BodyType.raw()`, with the kind given by `BodyKind`).
  - `from_header` reads a type from a single header, and `from_headers` reads it from a sequence of `(name, value)` pairs. When a header appears more than once, the last one wins.
  - `resolve` applies the protocol rules. An invalid combination raises `ResponseConnectionTypeMismatchError` or `BodyTypeError`, both subclasses of `HeadersMismatchError`.
  - A `Content-Length` value that is not a number raises `ValueError`.
- `edgehttp.headers` provides `Headers`, an ordered header table with case-insensitive names and a fixed capacity (64 by default).
  - Setting a name that is already present replaces its value in place. Adding a header past the capacity raises `OverflowError`.
  - The table has getters such as `content_len()` and `host()`, and chainable setters such as `set_connection_close()` and `set_content_len(n)`.
  - `RequestHeaders` and `ResponseHeaders` are dataclasses that pair a request line or a status line with a `Headers` table.
- `edgehttp.ws` provides helpers for the WebSocket upgrade handshake:
  - `sec_key_encode` and `sec_key_response`.
  - `upgrade_request_headers` and `upgrade_response_headers`.
  - `is_upgrade_request` and `is_upgrade_accepted`.

## Installation

```
pip install edgehttp
```

## Examples

Resolving the connection type and body type of a request:

```python
from edgehttp.connection import BodyType, ConnectionType

headers = [("Connection", "Keep-Alive"), ("Content-Length", "12")]

conn = ConnectionType.resolve(ConnectionType.from_headers(headers), None, True)
body = BodyType.resolve(BodyType.from_headers(headers), conn, True, True, False)
print(conn, body)   # Keep-Alive Content-Length: 12
```

Building headers:

```python
from edgehttp.headers import Headers

h = Headers(64)
h.set_host("example.com").set_connection_keep_alive().set_content_len(42)
print(h.get("content-length"))  # 42
print(list(h))
```

The WebSocket handshake:

```python
from edgehttp.ws import sec_key_response, upgrade_response_headers

print(sec_key_response("dGhlIHNhbXBsZSBub25jZQ=="))
# s3pPLMBiTxaQ9kYGzzhZRbK+xOo=

request = [
    ("Sec-WebSocket-Version", "13"),
    ("Sec-WebSocket-Key", "dGhlIHNhbXBsZSBub25jZQ=="),
]
print(upgrade_response_headers(request, None))
```

`upgrade_response_headers` raises `NoVersionError` when the `Sec-WebSocket-Version` header is missing or does not match the expected version (by default "13"). It raises `NoSecKeyError` when the `Sec-WebSocket-Key` header is missing. Both are subclasses of `UpgradeError`.

## What it does not do

This package does no network I/O. It has no HTTP client or server and no connection state machine. It does not parse raw bytes into a request or a response, and it does not read or write message bodies. It only models headers and decides how a message's connection and body should be handled.

## Running the tests

```
pip install -e .[test]
pytest
```