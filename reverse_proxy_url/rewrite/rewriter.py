# Rewrites the request URL from X-Forwarded-* headers.

import re
from typing import Optional, Type

from reverse_proxy_url.core.headers import RequestHeaders
from reverse_proxy_url.core.url import HostParseError, PortParseError, RequestUrl, SchemeParseError
from reverse_proxy_url.rewrite.exceptions import (
    InvalidHostEncodingError,
    InvalidHostError,
    InvalidPortEncodingError,
    InvalidPortValueError,
    InvalidSchemeEncodingError,
    InvalidSchemeError,
    RewriteError,
)

FORWARDED_HOST_HEADER = "X-Forwarded-Host"
FORWARDED_PROTO_HEADER = "X-Forwarded-Proto"
FORWARDED_PORT_HEADER = "X-Forwarded-Port"

# (scheme, port) pairs that serialize without an explicit port.
ELIDED_DEFAULT_PORTS = frozenset([("http", 80), ("https", 443)])

_PORT_PATTERN = re.compile(r"[0-9]{1,5}")


def _first_value(headers: RequestHeaders, name: str) -> Optional[bytes]:
    # Later values of a repeated header are ignored, valid or not.
    values = headers.get_raw(name)
    if values is None:
        return None
    return values[0]


def _decode(value: bytes, header: str, error_cls: Type[RewriteError]) -> str:
    try:
        return value.decode("utf-8")
    except UnicodeDecodeError as e:
        raise error_cls(f"{header} is not valid UTF-8: {e}", header=header) from e


def _parse_port(text: str) -> int:
    if not _PORT_PATTERN.fullmatch(text):
        raise InvalidPortValueError(
            f"{FORWARDED_PORT_HEADER} is not a port number: {text!r}", header=FORWARDED_PORT_HEADER
        )
    port = int(text)
    if not 1 <= port <= 65535:
        raise InvalidPortValueError(
            f"{FORWARDED_PORT_HEADER} is out of range 1-65535: {port}", header=FORWARDED_PORT_HEADER
        )
    return port


def rewrite(headers: RequestHeaders, url: RequestUrl) -> RequestUrl:
    """Applies the X-Forwarded-* headers of a request to its URL.

    X-Forwarded-Host gates everything: without it the URL is returned as is and
    the other headers are ignored. When present, the host, then the scheme
    (X-Forwarded-Proto), then the port (X-Forwarded-Port) are applied in that
    order. A forwarded port that is the default for the final scheme
    (80 for http, 443 for https) clears the port instead of setting it.

    Only the first value of a repeated header is used.

    Args:
        headers: The request headers.
        url: The request URL as seen by the server. It is not modified.

    Returns:
        The rewritten URL, or ``url`` itself if X-Forwarded-Host is absent.

    Raises:
        RewriteError: If any present header cannot be decoded or applied.
    """
    raw_host = _first_value(headers, FORWARDED_HOST_HEADER)
    if raw_host is None:
        return url

    new_url = url.model_copy()

    host = _decode(raw_host, FORWARDED_HOST_HEADER, InvalidHostEncodingError)
    try:
        new_url.set_host(host)
    except HostParseError as e:
        raise InvalidHostError(f"Invalid {FORWARDED_HOST_HEADER}: {e}", header=FORWARDED_HOST_HEADER) from e

    raw_proto = _first_value(headers, FORWARDED_PROTO_HEADER)
    if raw_proto is not None:
        proto = _decode(raw_proto, FORWARDED_PROTO_HEADER, InvalidSchemeEncodingError)
        try:
            new_url.set_scheme(proto)
        except SchemeParseError as e:
            raise InvalidSchemeError(f"Invalid {FORWARDED_PROTO_HEADER}: {e}", header=FORWARDED_PROTO_HEADER) from e

    raw_port = _first_value(headers, FORWARDED_PORT_HEADER)
    if raw_port is not None:
        port = _parse_port(_decode(raw_port, FORWARDED_PORT_HEADER, InvalidPortEncodingError))
        # Elision must see the scheme after X-Forwarded-Proto was applied.
        try:
            if (new_url.scheme, port) in ELIDED_DEFAULT_PORTS:
                new_url.set_port(None)
            else:
                new_url.set_port(port)
        except PortParseError as e:
            raise InvalidPortValueError(f"Invalid {FORWARDED_PORT_HEADER}: {e}", header=FORWARDED_PORT_HEADER) from e

    return new_url
