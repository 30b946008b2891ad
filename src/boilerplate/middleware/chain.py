"""Middleware chain composition.

The chain is an explicit ordered tuple, outermost first. ``compose``
wraps a handler so that the first middleware in the tuple runs first
and sees the final response last::

    handler = compose(dispatch, default_middleware())
    response = await handler(request)
"""

from collections.abc import Sequence
from typing import Any

from boilerplate.http.request import Request
from boilerplate.http.response import Response
from boilerplate.middleware.access_log import RequestLogger
from boilerplate.middleware.builtin import Duration, RequestID, ServerHeader
from boilerplate.middleware.protocol import Middleware, Next

SERVER_NAME = "go-html-boilerplate"


def default_middleware(server_name: str = SERVER_NAME) -> tuple[Middleware, ...]:
    """The standard chain: request ID, Server header, access log, timing."""
    return (
        RequestID(),
        ServerHeader(server_name),
        RequestLogger(),
        Duration(),
    )


def compose(handler: Next, middleware: Sequence[Middleware]) -> Next:
    """Wrap *handler* in *middleware*, first element outermost."""
    wrapped = handler
    for mw in reversed(middleware):
        outer = wrapped

        async def make_next(req: Request, _mw: Any = mw, _next: Next = outer) -> Response:
            return await _mw(req, _next)

        wrapped = make_next
    return wrapped
