"""ASGI handler: translates ASGI scope/messages to boilerplate types.

The only component that touches raw ASGI directly. Builds a Request,
runs it through the middleware chain around router dispatch, and sends
the Response back through ASGI send().
"""

from collections.abc import Sequence

from boilerplate._internal.asgi import Receive, Scope, Send
from boilerplate._internal.invoke import invoke
from boilerplate.errors import HTTPError
from boilerplate.http.request import Request
from boilerplate.http.response import Response
from boilerplate.middleware.chain import compose
from boilerplate.middleware.protocol import Middleware
from boilerplate.routing.router import Router
from boilerplate.server.errors import handle_http_error, handle_internal_error
from boilerplate.server.sender import send_response


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    middleware: Sequence[Middleware],
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope)

    # HTTP errors become responses inside the middleware chain
    async def dispatch(req: Request) -> Response:
        try:
            match = router.match(req.method, req.path)
            return await invoke(match.route.handler, req.with_path_params(match.path_params))
        except HTTPError as exc:
            return handle_http_error(exc, req)

    handler = compose(dispatch, middleware)
    try:
        response = await handler(request)
    except Exception as exc:
        response = handle_internal_error(exc, request)

    await send_response(response, send, head=request.method == "HEAD")
