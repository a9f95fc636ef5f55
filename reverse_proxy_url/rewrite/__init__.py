"""X-Forwarded-* request URL rewriting and the before-hook that applies it."""

from .exceptions import (
    HookError,
    InvalidHostEncodingError,
    InvalidHostError,
    InvalidPortEncodingError,
    InvalidPortValueError,
    InvalidRequestUrlError,
    InvalidSchemeEncodingError,
    InvalidSchemeError,
    RewriteError,
)
from .hook import BeforeHook, ReverseProxyHook
from .rewriter import rewrite

__all__ = [
    "BeforeHook",
    "HookError",
    "InvalidHostEncodingError",
    "InvalidHostError",
    "InvalidPortEncodingError",
    "InvalidPortValueError",
    "InvalidRequestUrlError",
    "InvalidSchemeEncodingError",
    "InvalidSchemeError",
    "ReverseProxyHook",
    "RewriteError",
    "rewrite",
]
