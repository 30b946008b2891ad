"""Immutable HTTP request.

Frozen metadata built from the ASGI scope. Middleware that needs to pass
extra information inward builds a new request with ``with_header()``;
method and path never change on the way down the chain.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from boilerplate.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Every route is ``GET``, so the request body is never read.
    """

    method: str
    path: str
    headers: Headers
    query_string: bytes
    path_params: dict[str, str]
    client: tuple[str, int] | None

    @property
    def url(self) -> str:
        """Full request URL (path + query string)."""
        if self.query_string:
            return f"{self.path}?{self.query_string.decode('latin-1')}"
        return self.path

    @property
    def remote_addr(self) -> str:
        """Client address as ``host:port``, or ``"-"`` when unknown."""
        if self.client is None:
            return "-"
        host, port = self.client
        return f"{host}:{port}"

    def with_header(self, name: str, value: str) -> Request:
        """Return a copy whose *name* header is set to *value*."""
        return replace(self, headers=self.headers.replace(name, value))

    def with_path_params(self, params: dict[str, str]) -> Request:
        """Return a copy carrying the router's captured path parameters."""
        return replace(self, path_params=params)

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: dict[str, Any]) -> Request:
        """Create a Request from an ASGI scope."""
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query_string=scope.get("query_string", b""),
            path_params={},
            client=tuple(client) if client else None,
        )
