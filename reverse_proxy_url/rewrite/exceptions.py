# Before-hook and URL rewrite exceptions


class HookError(Exception):
    """Base exception for errors that abort the before-hook chain."""

    def __init__(
        self, *args, hook_name: str | None = None, status_code: int | None = None, detail: str | None = None
    ):
        super().__init__(*args)
        self.hook_name = hook_name
        self.request_id: str | None = None
        self.status_code = status_code
        # Use the first arg as detail if detail kwarg is not provided and args exist
        self.detail = detail or (args[0] if args else None)


class InvalidRequestUrlError(HookError):
    """Exception raised when the host framework's request URL cannot be parsed."""

    def __init__(self, detail: str, status_code: int = 400):
        super().__init__(detail, status_code=status_code, detail=detail)


class RewriteError(HookError):
    """Base exception for a forwarded header that cannot be applied to the request URL.

    Attributes:
        header: The name of the header whose value was rejected.
    """

    def __init__(self, detail: str, header: str | None = None, status_code: int = 400):
        super().__init__(detail, status_code=status_code, detail=detail)
        self.header = header


class InvalidHostEncodingError(RewriteError):
    """X-Forwarded-Host is not valid UTF-8."""

    pass


class InvalidHostError(RewriteError):
    """X-Forwarded-Host is not acceptable as a URL host."""

    pass


class InvalidSchemeEncodingError(RewriteError):
    """X-Forwarded-Proto is not valid UTF-8."""

    pass


class InvalidSchemeError(RewriteError):
    """X-Forwarded-Proto is not acceptable as a URL scheme."""

    pass


class InvalidPortEncodingError(RewriteError):
    """X-Forwarded-Port is not valid UTF-8."""

    pass


class InvalidPortValueError(RewriteError):
    """X-Forwarded-Port is not a port number the URL accepts."""

    pass
