# Absolute request URL value type with validating component setters.

import ipaddress
import re
from typing import Optional
from urllib.parse import unquote, urlsplit

import idna
from pydantic import BaseModel, Field, field_validator, model_validator

# Schemes with a well-known default port.
DEFAULT_PORTS = {
    "ftp": 21,
    "http": 80,
    "https": 443,
    "ws": 80,
    "wss": 443,
}

SPECIAL_SCHEMES = frozenset(["ftp", "file", "http", "https", "ws", "wss"])

MAX_PORT = 65535

_SCHEME_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")

# Code points that can never appear in a domain host.
_FORBIDDEN_HOST_CHARS = frozenset(" #%/:<>?@[\\]^|")


class UrlError(ValueError):
    """Base exception for invalid URLs and URL components."""

    pass


class UrlParseError(UrlError):
    """Raised when a string is not a valid absolute URL."""

    pass


class HostParseError(UrlError):
    """Raised when a value is not acceptable as a URL host."""

    pass


class SchemeParseError(UrlError):
    """Raised when a value is not acceptable as a URL scheme."""

    pass


class PortParseError(UrlError):
    """Raised when a value is not acceptable as a URL port."""

    pass


def parse_host(host: str) -> str:
    """Validates and normalizes a host.

    Percent-encoded octets are decoded first. ASCII domains are then
    lowercased, non-ASCII domains are encoded with UTS #46 IDNA processing and
    IPv6 literals must be bracketed. The returned IPv6 form keeps its brackets.

    Args:
        host: The candidate host, e.g. "example.com" or "[::1]".

    Returns:
        The normalized host.

    Raises:
        HostParseError: If the host is empty or malformed.
    """
    if not host:
        raise HostParseError("Host must not be empty")

    if host.startswith("["):
        if not host.endswith("]"):
            raise HostParseError(f"Unterminated IPv6 literal: {host!r}")
        try:
            address = ipaddress.IPv6Address(host[1:-1])
        except ValueError as e:
            raise HostParseError(f"Invalid IPv6 literal {host!r}: {e}") from e
        return f"[{address.compressed}]"

    host = unquote(host)

    if not host.isascii():
        try:
            host = idna.encode(host, uts46=True).decode("ascii")
        except (idna.IDNAError, UnicodeError) as e:
            raise HostParseError(f"Host {host!r} cannot be IDNA-encoded: {e}") from e

    for char in host:
        if char in _FORBIDDEN_HOST_CHARS or ord(char) < 0x20 or ord(char) == 0x7F:
            raise HostParseError(f"Invalid character {char!r} in host {host!r}")

    return host.lower()


def parse_scheme(scheme: str) -> str:
    """Validates a scheme against the URL scheme grammar and lowercases it."""
    if not _SCHEME_PATTERN.fullmatch(scheme):
        raise SchemeParseError(f"Invalid scheme: {scheme!r}")
    return scheme.lower()


def check_port(port: Optional[int]) -> Optional[int]:
    """Ensures an explicit port is within the 16-bit port range."""
    if port is None:
        return None
    if isinstance(port, bool) or not isinstance(port, int):
        raise PortParseError(f"Port must be an integer, got {type(port).__name__}")
    if not 0 <= port <= MAX_PORT:
        raise PortParseError(f"Port {port} is out of range 0-{MAX_PORT}")
    return port


class RequestUrl(BaseModel):
    """An absolute request URL.

    Only scheme, host and port are meant to change after parsing; path, query
    and fragment are carried through untouched. Use the ``set_*`` methods to
    mutate components so that every change is validated.

    A port equal to the scheme's default port is never stored, so
    ``ws://thing:80/`` and ``ws://thing/`` are the same URL.
    """

    scheme: str = Field()
    host: str = Field()
    port: Optional[int] = Field(default=None)
    path: str = Field(default="/")
    query: Optional[str] = Field(default=None)
    fragment: Optional[str] = Field(default=None)

    @field_validator("scheme")
    @classmethod
    def validate_scheme(cls, value: str) -> str:
        return parse_scheme(value)

    @field_validator("host")
    @classmethod
    def validate_host(cls, value: str) -> str:
        return parse_host(value)

    @field_validator("port")
    @classmethod
    def validate_port(cls, value: Optional[int]) -> Optional[int]:
        return check_port(value)

    @model_validator(mode="after")
    def drop_default_port(self) -> "RequestUrl":
        if self.port is not None and self.port == DEFAULT_PORTS.get(self.scheme):
            self.port = None
        return self

    @classmethod
    def parse(cls, text: str) -> "RequestUrl":
        """Parses an absolute URL string.

        Raises:
            UrlParseError: If the text has no scheme or host, or an invalid component.
        """
        try:
            parts = urlsplit(text)
            port = parts.port
        except ValueError as e:
            raise UrlParseError(f"Invalid URL {text!r}: {e}") from e

        if not parts.scheme or not parts.hostname:
            raise UrlParseError(f"URL {text!r} is not absolute")

        hostname = parts.hostname
        if ":" in hostname:
            hostname = f"[{hostname}]"

        try:
            return cls(
                scheme=parse_scheme(parts.scheme),
                host=parse_host(hostname),
                port=port,
                path=parts.path or "/",
                query=parts.query or None,
                fragment=parts.fragment or None,
            )
        except UrlError as e:
            raise UrlParseError(f"Invalid URL {text!r}: {e}") from e

    def set_host(self, host: str) -> None:
        """Replaces the host.

        Raises:
            HostParseError: If the host is empty or contains forbidden characters.
        """
        self.host = parse_host(host)

    def set_scheme(self, scheme: str) -> None:
        """Replaces the scheme.

        A special scheme (http, https, ws, wss, ftp, file) can only be swapped
        for another special scheme, and a non-special one for a non-special one.

        Raises:
            SchemeParseError: If the scheme is malformed or the switch is not allowed.
        """
        new_scheme = parse_scheme(scheme)
        if (new_scheme in SPECIAL_SCHEMES) != (self.scheme in SPECIAL_SCHEMES):
            raise SchemeParseError(f"Cannot change scheme from {self.scheme!r} to {new_scheme!r}")
        if new_scheme == "file" and self.port is not None:
            raise SchemeParseError("Cannot change scheme to 'file' while a port is set")
        self.scheme = new_scheme
        if self.port == DEFAULT_PORTS.get(new_scheme):
            self.port = None

    def set_port(self, port: Optional[int]) -> None:
        """Sets an explicit port, or clears it when ``port`` is None.

        The scheme's default port is stored as no port.

        Raises:
            PortParseError: If the port is out of range or the URL cannot carry a port.
        """
        if port is not None and self.scheme == "file":
            raise PortParseError("'file' URLs cannot have a port")
        port = check_port(port)
        if port is not None and port == DEFAULT_PORTS.get(self.scheme):
            port = None
        self.port = port

    @property
    def effective_port(self) -> Optional[int]:
        """The explicit port, or the scheme's default port if none is set."""
        if self.port is not None:
            return self.port
        return DEFAULT_PORTS.get(self.scheme)

    @property
    def netloc(self) -> str:
        if self.port is None:
            return self.host
        return f"{self.host}:{self.port}"

    def __str__(self) -> str:
        url = f"{self.scheme}://{self.netloc}{self.path}"
        if self.query is not None:
            url += f"?{self.query}"
        if self.fragment is not None:
            url += f"#{self.fragment}"
        return url
