"""Correct the request URL of an ASGI app deployed behind a reverse proxy.

```
from fastapi import FastAPI
from reverse_proxy_url import ReverseProxyMiddleware

app = FastAPI()
app.add_middleware(ReverseProxyMiddleware)
```

Requests carrying ``X-Forwarded-Host`` (and optionally ``X-Forwarded-Proto``
and ``X-Forwarded-Port``) then expose the client-facing URL through
``request.url`` and ``request.url_for()``.
"""

from .core import RequestContext, RequestHeaders, RequestUrl
from .proxy import ReverseProxyMiddleware
from .rewrite import BeforeHook, ReverseProxyHook, RewriteError, rewrite

__all__ = [
    "BeforeHook",
    "RequestContext",
    "RequestHeaders",
    "RequestUrl",
    "ReverseProxyHook",
    "ReverseProxyMiddleware",
    "RewriteError",
    "rewrite",
]
