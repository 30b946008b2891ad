"""Built-in middleware: request IDs, the Server header, request timing."""

import time
import uuid

from boilerplate.http.request import Request
from boilerplate.http.response import Response
from boilerplate.middleware.protocol import Next

REQUEST_ID_HEADER = "X-Request-Id"
DURATION_HEADER = "X-Request-Duration"


def _is_uuid(value: str) -> bool:
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


class RequestID:
    """Give every request a UUID in ``X-Request-Id``.

    A well-formed incoming ID is kept; anything else is replaced with a
    fresh UUID4. Inner layers see the ID as a request header, and it is
    echoed back on the response.
    """

    __slots__ = ()

    async def __call__(self, request: Request, next: Next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER)
        if request_id is None or not _is_uuid(request_id):
            request_id = str(uuid.uuid4())
            request = request.with_header(REQUEST_ID_HEADER, request_id)
        response = await next(request)
        return response.with_header(REQUEST_ID_HEADER, request_id)


class ServerHeader:
    """Set the ``Server`` response header."""

    __slots__ = ("server",)

    def __init__(self, server: str) -> None:
        self.server = server

    async def __call__(self, request: Request, next: Next) -> Response:
        response = await next(request)
        return response.with_header("Server", self.server)


class Duration:
    """Report time spent in the inner handler as ``X-Request-Duration``."""

    __slots__ = ()

    async def __call__(self, request: Request, next: Next) -> Response:
        start = time.perf_counter()
        response = await next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        return response.with_header(DURATION_HEADER, f"{elapsed_ms:.3f}ms")
