from dataclasses import dataclass, field
from typing import Mapping, Protocol, runtime_checkable

from starlette.datastructures import Headers


@runtime_checkable
class RequestView(Protocol):
    """Read-only view of an incoming request, as seen by source extractors."""

    @property
    def remote_address(self) -> str: ...

    @property
    def host(self) -> str: ...

    def header(self, name: str) -> str: ...


@dataclass(frozen=True)
class SimpleRequest:
    """
    Plain request view for callers that are not running inside an ASGI app.

    Usage:
        SimpleRequest(remote_address="203.0.113.7:54321", headers={"X-Api-Key": "abc"})
    """

    remote_address: str = ""
    host: str = ""
    headers: Headers = field(default_factory=Headers)

    def __post_init__(self):
        if not isinstance(self.headers, Headers):
            object.__setattr__(self, "headers", Headers(headers=dict(self.headers)))

    def header(self, name: str) -> str:
        return self.headers.get(name, "")


def headers_from_pairs(pairs) -> Mapping[str, str]:
    """Build a header mapping from ``Name: value`` strings."""
    headers = {}
    for pair in pairs:
        name, sep, value = pair.partition(":")
        if not sep or not name.strip():
            raise ValueError(f"Malformed header: {pair!r}")
        headers[name.strip()] = value.strip()
    return headers
