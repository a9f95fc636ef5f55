# Case-insensitive, multi-value view over raw request headers.

from typing import Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from starlette.types import Scope

RawHeaders = List[Tuple[bytes, bytes]]
HeaderValue = Union[str, bytes]


def _to_bytes(value: HeaderValue) -> bytes:
    if isinstance(value, bytes):
        return value
    return value.encode("latin-1")


class RequestHeaders:
    """Read-only request headers keyed by case-insensitive name.

    Values are kept as the raw bytes the server received and in the order they
    arrived, so a repeated header yields several values for the same name.
    """

    def __init__(self, raw: Optional[Iterable[Tuple[bytes, bytes]]] = None):
        self._values: dict[bytes, List[bytes]] = {}
        for name, value in raw or []:
            self._values.setdefault(name.lower(), []).append(value)

    @classmethod
    def from_scope(cls, scope: Scope) -> "RequestHeaders":
        """Builds headers from an ASGI connection scope."""
        return cls(scope.get("headers", []))

    @classmethod
    def from_mapping(cls, headers: Mapping[str, Union[HeaderValue, List[HeaderValue]]]) -> "RequestHeaders":
        """Builds headers from a mapping; a list value becomes repeated headers.

        String names and values are encoded as latin-1, matching how ASGI
        servers hand header bytes to the application.
        """
        raw: RawHeaders = []
        for name, value in headers.items():
            values = value if isinstance(value, list) else [value]
            raw.extend((_to_bytes(name), _to_bytes(v)) for v in values)
        return cls(raw)

    def get_raw(self, name: str) -> Optional[List[bytes]]:
        """Returns every raw value for ``name`` in arrival order, or None if absent."""
        values = self._values.get(name.lower().encode("latin-1"))
        if not values:
            return None
        return list(values)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return name.lower().encode("latin-1") in self._values

    def __iter__(self) -> Iterator[str]:
        return (name.decode("latin-1") for name in self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({sorted(self)!r})"
