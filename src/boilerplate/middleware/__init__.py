"""Middleware: protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Built-in middleware, in default chain order:
    RequestID -- assign or propagate X-Request-Id
    ServerHeader -- set the Server response header
    RequestLogger -- one structured log line per request
    Duration -- X-Request-Duration for time spent in the router
"""

from boilerplate.middleware.access_log import RequestLogger
from boilerplate.middleware.builtin import (
    DURATION_HEADER,
    REQUEST_ID_HEADER,
    Duration,
    RequestID,
    ServerHeader,
)
from boilerplate.middleware.chain import SERVER_NAME, compose, default_middleware
from boilerplate.middleware.protocol import Middleware, Next

__all__ = [
    "DURATION_HEADER",
    "REQUEST_ID_HEADER",
    "SERVER_NAME",
    "Duration",
    "Middleware",
    "Next",
    "RequestID",
    "RequestLogger",
    "ServerHeader",
    "compose",
    "default_middleware",
]
