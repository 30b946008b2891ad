"""ASGI response sending: translates a Response into ASGI messages."""

from boilerplate._internal.asgi import Send
from boilerplate.http.response import Response


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC 9110: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


async def send_response(response: Response, send: Send, *, head: bool = False) -> None:
    """Translate a Response into ASGI send() calls.

    For ``HEAD`` requests the headers, including ``Content-Length``,
    describe the body a ``GET`` would get, but no body is sent.

    Bodyless statuses (1xx, 204, 304) carry neither ``Content-Type`` nor
    ``Content-Length``.
    """
    body_allowed = _body_allowed(response.status)
    raw_headers: list[tuple[bytes, bytes]] = []
    if body_allowed:
        raw_headers.append((b"content-type", response.content_type.encode("latin-1")))
    for name, value in response.headers:
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

    body = response.body_bytes if body_allowed else b""
    if body_allowed:
        raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": b"" if head else body,
        }
    )
