from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from reverse_proxy_url.core.headers import RequestHeaders
from reverse_proxy_url.core.url import RequestUrl


class RequestContext(BaseModel):
    """The in-flight request as seen by before-hooks.

    Headers are read-only; ``url`` is replaced by hooks that correct it and is
    written back to the host framework once every hook has succeeded.
    """

    request_id: UUID = Field(default_factory=uuid4)
    headers: RequestHeaders = Field()
    url: RequestUrl = Field()

    model_config = ConfigDict(arbitrary_types_allowed=True)
