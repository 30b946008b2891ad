"""Gzip compression for a single route handler.

Compression is not global middleware: it wraps only the handlers that
opt in (the static asset route). A response is compressed when the
client accepts gzip, the status is 200, the body is not empty and no
``Content-Encoding`` is set yet. ``Vary: Accept-Encoding`` is always
added so caches keep compressed and plain copies apart.
"""

import gzip

from boilerplate._internal.invoke import invoke
from boilerplate._internal.types import Handler
from boilerplate.http.request import Request
from boilerplate.http.response import Response


def _quality(params: str) -> float:
    for param in params.split(";"):
        key, _, value = param.strip().partition("=")
        if key.lower() == "q":
            try:
                return float(value)
            except ValueError:
                return 0.0
    return 1.0


def accepts_gzip(accept_encoding: str | None) -> bool:
    """True if an ``Accept-Encoding`` value admits gzip with q > 0.

    An explicit ``gzip`` entry decides on its own; ``*`` only counts when
    gzip is not listed.
    """
    if not accept_encoding:
        return False
    gzip_q: float | None = None
    wildcard_q: float | None = None
    for item in accept_encoding.split(","):
        coding, _, params = item.strip().partition(";")
        coding = coding.strip().lower()
        if coding == "gzip":
            gzip_q = _quality(params)
        elif coding == "*":
            wildcard_q = _quality(params)
    if gzip_q is not None:
        return gzip_q > 0
    return wildcard_q is not None and wildcard_q > 0


class GZipHandler:
    """Wrap a route handler and gzip its eligible responses.

    Usage::

        router.handle(r"^/static", ["GET"], GZipHandler(static_assets))
    """

    __slots__ = ("handler", "level")

    def __init__(self, handler: Handler, level: int = 6) -> None:
        self.handler = handler
        self.level = level

    async def __call__(self, request: Request) -> Response:
        response: Response = await invoke(self.handler, request)
        response = response.with_header("Vary", "Accept-Encoding")
        if not accepts_gzip(request.headers.get("accept-encoding")):
            return response
        if response.status != 200 or response.get_header("content-encoding") is not None:
            return response
        body = response.body_bytes
        if not body:
            return response
        compressed = gzip.compress(body, compresslevel=self.level)
        return response.with_body(compressed).with_header("Content-Encoding", "gzip")
