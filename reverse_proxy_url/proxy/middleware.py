"""
ASGI middleware that runs before-hooks on each connection ahead of routing.

With the default ReverseProxyHook, a server deployed behind a reverse proxy
sees the client-facing host, scheme and port from the X-Forwarded-Host,
X-Forwarded-Proto and X-Forwarded-Port headers in ``request.url``,
``request.base_url`` and ``request.url_for()``.

Only deploy it behind a proxy that sets (or strips) these headers itself.
"""

import logging
import time
from typing import Optional, Sequence

from fastapi import status
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send
from starlette.websockets import WebSocketClose

from reverse_proxy_url.core.request_context import RequestContext
from reverse_proxy_url.core.url import UrlParseError
from reverse_proxy_url.proxy.debugging import create_error_response, log_hook_execution
from reverse_proxy_url.proxy.utils import (
    apply_request_url_to_scope,
    request_headers_from_scope,
    request_url_from_scope,
)
from reverse_proxy_url.rewrite.exceptions import HookError, InvalidRequestUrlError
from reverse_proxy_url.rewrite.hook import BeforeHook, ReverseProxyHook
from reverse_proxy_url.rewrite.rewriter import FORWARDED_HOST_HEADER
from reverse_proxy_url.settings import Settings

logger = logging.getLogger(__name__)


class ReverseProxyMiddleware:
    """Runs ``hooks`` in order on every http and websocket connection.

    If a hook raises a HookError the wrapped app is never called: http
    requests get a JSON error response and websocket connections are closed
    with code 1008. Otherwise the final context URL is written back to the
    scope before the app runs.

    Args:
        app: The ASGI application to wrap.
        hooks: The hooks to run. Defaults to a single ReverseProxyHook.
        error_status_code: Overrides the status code sent for rejected http requests.
    """

    def __init__(
        self,
        app: ASGIApp,
        hooks: Optional[Sequence[BeforeHook]] = None,
        error_status_code: Optional[int] = None,
    ) -> None:
        self.app = app
        self.hooks = list(hooks) if hooks is not None else [ReverseProxyHook()]
        self.error_status_code = error_status_code
        if not self.hooks:
            logger.warning("ReverseProxyMiddleware initialized with an empty hook list.")

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        try:
            self._run_hooks(scope)
        except HookError as e:
            await self._reject(scope, receive, send, e)
            return

        await self.app(scope, receive, send)

    def _run_hooks(self, scope: Scope) -> Optional[RequestContext]:
        headers = request_headers_from_scope(scope)
        try:
            url = request_url_from_scope(scope)
        except UrlParseError as e:
            if FORWARDED_HOST_HEADER not in headers:
                logger.debug(f"Request URL could not be determined, passing through unchanged: {e}")
                return None
            raise InvalidRequestUrlError(f"Request URL could not be determined: {e}") from e

        original_url = url.model_copy()
        context = RequestContext(headers=headers, url=url)
        request_id = str(context.request_id)

        for hook in self.hooks:
            hook_name = hook.name or hook.__class__.__name__
            start_time = time.time()
            try:
                hook.before(context)
            except HookError as e:
                e.hook_name = e.hook_name or hook_name
                log_hook_execution(
                    request_id,
                    hook_name,
                    "error",
                    duration=time.time() - start_time,
                    error=str(e),
                    details={
                        "error_type": e.__class__.__name__,
                        "header": getattr(e, "header", None),
                        "path": scope.get("path"),
                    },
                )
                e.request_id = request_id
                raise
            log_hook_execution(request_id, hook_name, "completed", duration=time.time() - start_time)

        if context.url != original_url:
            apply_request_url_to_scope(scope, context.url)
        return context

    async def _reject(self, scope: Scope, receive: Receive, send: Send, error: HookError) -> None:
        if scope["type"] == "websocket":
            await WebSocketClose(code=1008, reason=str(error.detail or ""))(scope, receive, send)
            return

        status_code = self.error_status_code or error.status_code or status.HTTP_400_BAD_REQUEST
        hook_name = error.hook_name or "unknown"

        settings = Settings()
        debug_details = None
        if settings.dev_mode() and error.__cause__ is not None:
            debug_details = {"cause": repr(error.__cause__)}

        content = create_error_response(
            message=f"Hook error in '{hook_name}': {error.detail}",
            request_id=error.request_id or "unknown",
            error_type=error.__class__.__name__,
            details=debug_details,
            include_debug_info=settings.dev_mode(),
        )
        response = JSONResponse(status_code=status_code, content=content)
        await response(scope, receive, send)
