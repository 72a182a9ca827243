import pytest

from edgehttp.headers import DEFAULT_MAX_HEADERS_COUNT, Headers, RequestHeaders, ResponseHeaders
from edgehttp.methods import Method
from edgehttp.ws import NoSecKeyError, NoVersionError, sec_key_encode

NONCE = bytes(range(16))


def test_default_capacity():
    assert Headers().capacity == DEFAULT_MAX_HEADERS_COUNT == 64


def test_set_and_get_case_insensitive():
    headers = Headers()
    headers.set("Content-Type", "text/plain")
    assert headers.get("content-type") == "text/plain"
    assert headers.get_raw("CONTENT-TYPE") == b"text/plain"
    assert headers.content_type() == "text/plain"
    assert headers.get("Host") is None


def test_set_replaces_in_place():
    headers = Headers()
    headers.set("A", "1").set("B", "2").set("a", "3")
    assert list(headers) == [("a", "3"), ("B", "2")]
    assert len(headers) == 2


def test_set_empty_name_ignored():
    headers = Headers()
    headers.set("", "x")
    assert len(headers) == 0


def test_set_raw_and_iter_raw():
    headers = Headers()
    headers.set_raw("X-Data", b"\x01\x02")
    assert list(headers.iter_raw()) == [("X-Data", b"\x01\x02")]


def test_capacity_overflow():
    headers = Headers(2)
    headers.set("A", "1").set("B", "2")
    with pytest.raises(OverflowError):
        headers.set("C", "3")
    headers.set("A", "4")
    assert headers.get("A") == "4"


def test_remove_shifts_following():
    headers = Headers()
    headers.set("A", "1").set("B", "2").set("C", "3")
    headers.remove("b")
    assert list(headers) == [("A", "1"), ("C", "3")]
    headers.remove("missing")
    assert len(headers) == 2


def test_content_len_round_trip():
    headers = Headers()
    assert headers.content_len() is None
    headers.set_content_len(1234)
    assert headers.get("Content-Length") == "1234"
    assert headers.content_len() == 1234


def test_content_len_invalid():
    headers = Headers()
    headers.set("Content-Length", "abc")
    with pytest.raises(ValueError):
        headers.content_len()


def test_set_content_len_negative():
    with pytest.raises(ValueError):
        Headers().set_content_len(-1)


def test_convenience_setters():
    headers = Headers()
    headers.set_transfer_encoding_chunked()
    headers.set_connection_close()
    headers.set_cache_control_no_cache()
    headers.set_upgrade_websocket()
    headers.set_host("example.com")
    headers.set_content_encoding("gzip")
    assert headers.transfer_encoding() == "Chunked"
    assert headers.connection() == "Close"
    assert headers.cache_control() == "No-Cache"
    assert headers.upgrade() == "websocket"
    assert headers.host() == "example.com"
    assert headers.content_encoding() == "gzip"
    headers.set_connection_keep_alive()
    assert headers.connection() == "Keep-Alive"
    headers.set_connection_upgrade()
    assert headers.connection() == "Upgrade"


def test_ws_request_headers():
    headers = Headers()
    headers.set_ws_upgrade_request_headers(None, None, None, NONCE)
    assert headers.get("Host") is None
    assert headers.get("Origin") is None
    assert headers.get("Sec-WebSocket-Version") == "13"
    assert headers.get("Sec-WebSocket-Key") == sec_key_encode(NONCE)
    assert headers.get("Content-Length") == "0"
    assert len(headers) == 5


def test_ws_response_headers_known_key():
    headers = Headers()
    request = [("Sec-WebSocket-Version", "13"), ("Sec-WebSocket-Key", "dGhlIHNhbXBsZSBub25jZQ==")]
    headers.set_ws_upgrade_response_headers(request, None)
    assert headers.get("Sec-WebSocket-Accept") == "s3pPLMBiTxaQ9kYGzzhZRbK+xOo="
    assert headers.get("Upgrade") == "websocket"


def test_ws_response_headers_errors():
    with pytest.raises(NoVersionError):
        Headers().set_ws_upgrade_response_headers([("Sec-WebSocket-Key", "k")], None)
    with pytest.raises(NoSecKeyError):
        Headers().set_ws_upgrade_response_headers([("Sec-WebSocket-Version", "13")], None)


def test_request_is_ws_upgrade():
    request = RequestHeaders(method=Method.GET, path="/ws")
    request.headers.set_ws_upgrade_request_headers("example.com", None, None, NONCE)
    assert request.is_ws_upgrade_request()
    request.method = Method.POST
    assert not request.is_ws_upgrade_request()


def test_ws_handshake_round_trip():
    request = RequestHeaders(method=Method.GET, path="/")
    request.headers.set_ws_upgrade_request_headers(None, None, None, NONCE)
    response = ResponseHeaders(code=101)
    response.headers.set_ws_upgrade_response_headers(request.headers, None)
    assert response.is_ws_upgrade_accepted(NONCE)
    assert not response.is_ws_upgrade_accepted(bytes(16))
    response.code = 200
    assert not response.is_ws_upgrade_accepted(NONCE)


def test_request_str():
    request = RequestHeaders(method=Method.GET, path="/index")
    request.headers.set_host("example.com")
    assert str(request) == "HTTP/1.1 GET /index\nHost: example.com\n"


def test_response_str():
    response = ResponseHeaders(http11=False, code=200, reason="OK")
    response.headers.set_connection_close()
    assert str(response) == "HTTP/1.0 \n200 OK\nConnection: Close\n"


def test_defaults():
    request = RequestHeaders()
    response = ResponseHeaders()
    assert request.http11 is True and request.method is None and len(request.headers) == 0
    assert response.http11 is True and response.code is None and response.reason is None