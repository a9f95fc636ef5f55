# Interfaces for hooks that run before request routing.

import abc
import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from reverse_proxy_url.core.request_context import RequestContext
from reverse_proxy_url.rewrite.exceptions import HookError
from reverse_proxy_url.rewrite.rewriter import rewrite


class BeforeHook(BaseModel, abc.ABC):
    """Abstract Base Class for a step run on every request before routing.

    Attributes:
        name (Optional[str]): An optional name for the hook instance, used for
            logging and in error responses.
    """

    name: Optional[str] = Field(default=None)
    logger: logging.Logger = Field(default_factory=lambda: logging.getLogger(__name__), exclude=True)

    @abc.abstractmethod
    def before(self, context: RequestContext) -> None:
        """
        Inspect and possibly modify the in-flight request.

        Args:
            context: The request context. Hooks correct the request by replacing
                ``context.url``.

        Raises:
            HookError: To abort processing of this request.
        """
        raise NotImplementedError

    model_config = ConfigDict(arbitrary_types_allowed=True)


class ReverseProxyHook(BeforeHook):
    """Applies X-Forwarded-Host, X-Forwarded-Proto and X-Forwarded-Port to the request URL.

    The rewritten URL is assigned to the context only when the whole rewrite
    succeeds; on error the context keeps the URL the server originally saw.
    """

    def __init__(self, name: Optional[str] = None):
        super().__init__(name=name or self.__class__.__name__)

    def before(self, context: RequestContext) -> None:
        try:
            new_url = rewrite(context.headers, context.url)
        except HookError as e:
            e.hook_name = e.hook_name or self.name
            raise

        if new_url is not context.url:
            self.logger.debug(f"[{context.request_id}] Request URL rewritten from {context.url} to {new_url}")
            context.url = new_url
