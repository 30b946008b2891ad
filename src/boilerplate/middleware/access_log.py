"""Structured access logging."""

import logging
import time

from boilerplate.http.request import Request
from boilerplate.http.response import Response
from boilerplate.log import fields
from boilerplate.middleware.builtin import REQUEST_ID_HEADER
from boilerplate.middleware.protocol import Next

logger = logging.getLogger("boilerplate.access")


class RequestLogger:
    """Log one line per completed request.

    Logged after the inner layer returns, with method, path, status,
    response size, elapsed time, remote address and request ID.
    """

    __slots__ = ("logger",)

    def __init__(self, logger: logging.Logger = logger) -> None:
        self.logger = logger

    async def __call__(self, request: Request, next: Next) -> Response:
        start = time.perf_counter()
        response = await next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        self.logger.info(
            "%s %s",
            request.method,
            request.path,
            extra=fields(
                method=request.method,
                path=request.url,
                status=response.status,
                bytes=len(response.body_bytes),
                duration=f"{elapsed_ms:.3f}ms",
                remote_addr=request.remote_addr,
                request_id=request.headers.get(REQUEST_ID_HEADER, "-"),
            ),
        )
        return response
