"""Conversions between ASGI connection scopes and request values."""

from starlette.datastructures import URL
from starlette.types import Scope

from reverse_proxy_url.core.headers import RequestHeaders
from reverse_proxy_url.core.url import RequestUrl

WEBSOCKET_SCHEMES = {"http": "ws", "https": "wss"}


def request_headers_from_scope(scope: Scope) -> RequestHeaders:
    return RequestHeaders.from_scope(scope)


def request_url_from_scope(scope: Scope) -> RequestUrl:
    """Builds the absolute URL the server saw for this connection.

    Uses the same resolution as Starlette's ``Request.url``: the Host header if
    present, otherwise the ``server`` address.

    Raises:
        UrlParseError: If the scope does not yield an absolute URL.
    """
    return RequestUrl.parse(str(URL(scope=scope)))


def apply_request_url_to_scope(scope: Scope, url: RequestUrl) -> None:
    """Writes scheme, host and port of ``url`` back into ``scope`` in place.

    Sets ``scheme``, ``server`` and the ``host`` header so that ``request.url``,
    ``request.base_url`` and ``request.url_for()`` all resolve to ``url``'s
    origin. Path and query string are left alone.
    """
    scheme = url.scheme
    if scope["type"] == "websocket":
        scheme = WEBSOCKET_SCHEMES.get(scheme, scheme)

    scope["scheme"] = scheme
    scope["server"] = (url.host.strip("[]"), url.effective_port)

    headers = [(key, value) for key, value in scope.get("headers", []) if key.lower() != b"host"]
    headers.append((b"host", url.netloc.encode("latin-1")))
    scope["headers"] = headers
