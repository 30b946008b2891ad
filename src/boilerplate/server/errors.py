"""Error responses for the request pipeline.

Maps ``HTTPError`` exceptions and unexpected failures to plain-text
responses with the standard reason phrase as the body.
"""

import logging
from http import HTTPStatus

from boilerplate.errors import HTTPError
from boilerplate.http.request import Request
from boilerplate.http.response import Response

logger = logging.getLogger("boilerplate.server")

_TEXT = "text/plain; charset=utf-8"


def _phrase(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return f"Error {status}"


def handle_http_error(exc: HTTPError, request: Request) -> Response:
    """Map an HTTPError to its standard response."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)
    response = Response(body=_phrase(exc.status), status=exc.status, content_type=_TEXT)
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


def handle_internal_error(exc: Exception, request: Request) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.error("500 %s %s", request.method, request.path, exc_info=exc)
    return Response(body=_phrase(500), status=500, content_type=_TEXT)
