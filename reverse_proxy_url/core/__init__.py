from .headers import RequestHeaders
from .request_context import RequestContext
from .url import (
    HostParseError,
    PortParseError,
    RequestUrl,
    SchemeParseError,
    UrlError,
    UrlParseError,
)

__all__ = [
    "HostParseError",
    "PortParseError",
    "RequestContext",
    "RequestHeaders",
    "RequestUrl",
    "SchemeParseError",
    "UrlError",
    "UrlParseError",
]
