"""Tests for RequestHeaders."""

from reverse_proxy_url.core.headers import RequestHeaders


def test_lookup_is_case_insensitive():
    headers = RequestHeaders([(b"X-Forwarded-Host", b"thing")])
    assert headers.get_raw("x-forwarded-host") == [b"thing"]
    assert headers.get_raw("X-FORWARDED-HOST") == [b"thing"]
    assert "x-Forwarded-host" in headers


def test_missing_header():
    headers = RequestHeaders([(b"host", b"localhost")])
    assert headers.get_raw("x-forwarded-host") is None
    assert "x-forwarded-host" not in headers


def test_repeated_header_keeps_arrival_order():
    headers = RequestHeaders(
        [
            (b"x-forwarded-host", b"first"),
            (b"host", b"localhost"),
            (b"X-Forwarded-Host", b"second"),
        ]
    )
    assert headers.get_raw("x-forwarded-host") == [b"first", b"second"]


def test_values_stay_raw_bytes():
    headers = RequestHeaders([(b"x-forwarded-host", b"\xff\xfe")])
    assert headers.get_raw("x-forwarded-host") == [b"\xff\xfe"]


def test_get_raw_returns_a_copy():
    headers = RequestHeaders([(b"x-forwarded-port", b"80")])
    values = headers.get_raw("x-forwarded-port")
    values.append(b"443")
    assert headers.get_raw("x-forwarded-port") == [b"80"]


def test_from_mapping_accepts_str_bytes_and_lists():
    headers = RequestHeaders.from_mapping(
        {
            "X-Forwarded-Host": "thing",
            "X-Forwarded-Port": b"80",
            "X-Forwarded-Proto": ["https", b"http"],
        }
    )
    assert headers.get_raw("x-forwarded-host") == [b"thing"]
    assert headers.get_raw("x-forwarded-port") == [b"80"]
    assert headers.get_raw("x-forwarded-proto") == [b"https", b"http"]
    assert len(headers) == 3
    assert sorted(headers) == ["x-forwarded-host", "x-forwarded-port", "x-forwarded-proto"]


def test_from_scope(make_scope):
    scope = make_scope(headers=[(b"host", b"localhost:3000"), (b"x-forwarded-host", b"thing")])
    headers = RequestHeaders.from_scope(scope)
    assert headers.get_raw("Host") == [b"localhost:3000"]
    assert headers.get_raw("X-Forwarded-Host") == [b"thing"]


def test_from_scope_without_headers():
    headers = RequestHeaders.from_scope({"type": "http"})
    assert len(headers) == 0


def test_contains_non_string():
    headers = RequestHeaders([(b"host", b"localhost")])
    assert b"host" not in headers
