import pytest

from edgehttp.methods import Method, parse_method

_KNOWN_NAMES = [
    "Delete",
    "Get",
    "Head",
    "Post",
    "Put",
    "Connect",
    "Options",
    "Trace",
    "Copy",
    "Lock",
    "MkCol",
    "Move",
    "Propfind",
    "Proppatch",
    "Search",
    "Unlock",
    "Bind",
    "Rebind",
    "Unbind",
    "Acl",
    "Report",
    "MkActivity",
    "Checkout",
    "Merge",
    "MSearch",
    "Notify",
    "Subscribe",
    "Unsubscribe",
    "Patch",
    "Purge",
    "MkCalendar",
    "Link",
    "Unlink",
]


@pytest.mark.parametrize("method", list(Method))
def test_round_trip_through_str(method):
    assert parse_method(str(method)) is method


@pytest.mark.parametrize("method", list(Method))
def test_lower_case_names_parse(method):
    assert parse_method(str(method).lower()) is method


def test_mixed_case_names_parse():
    assert parse_method("Get") is Method.GET
    assert parse_method("MkCol") is Method.MKCOL
    assert parse_method("MSearch") is Method.MSEARCH
    assert parse_method("mKcAlEnDaR") is Method.MKCALENDAR


def test_str_is_upper_case_wire_name():
    assert str(parse_method("get")) == "GET"
    assert str(parse_method("MkCol")) == "MKCOL"
    assert str(parse_method("msearch")) == "MSEARCH"
    assert str(parse_method("Unsubscribe")) == "UNSUBSCRIBE"


@pytest.mark.parametrize("name", _KNOWN_NAMES)
def test_parsed_str_values_are_upper_case(name):
    parsed = parse_method(name)
    assert str(parsed) == name.upper()


def test_method_count():
    parsed = {parse_method(name) for name in _KNOWN_NAMES}
    assert len(parsed) == 33
    assert parsed == set(Method)


@pytest.mark.parametrize("name", ["", "GE", "GETS", "M-SEARCH", " GET", "GET "])
def test_unknown_names_give_none(name):
    assert parse_method(name) is None


def test_non_ascii_case_folding_is_not_applied():
    # U+212A KELVIN SIGN lower-cases to "k" but is not ASCII.
    assert parse_method("LOC\u212a") is None
    assert parse_method("LOCK") is Method.LOCK