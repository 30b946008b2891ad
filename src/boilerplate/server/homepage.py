"""Homepage handler."""

import logging

from kida import Environment

from boilerplate.http.request import Request
from boilerplate.http.response import Response
from boilerplate.templating.integration import render_template

logger = logging.getLogger("boilerplate.server")

HOMEPAGE_TEMPLATE = "index.html"
STYLESHEET_PATH = "/static/style.css"


class Homepage:
    """Render the homepage template.

    The stylesheet is announced with a ``Link: rel=preload`` header so
    the browser (or an HTTP/2 proxy that supports early hints) can fetch
    it before parsing the page.

    A render failure answers 500 with the template error as the body.
    That is a debugging aid, not something to expose on a public site.
    """

    __slots__ = ("env", "template_name")

    def __init__(self, env: Environment, template_name: str = HOMEPAGE_TEMPLATE) -> None:
        self.env = env
        self.template_name = template_name

    def __call__(self, request: Request) -> Response:
        try:
            html = render_template(self.env, self.template_name)
        except Exception as exc:
            logger.exception("template render failed: %s", self.template_name)
            return Response(
                body=str(exc),
                status=500,
                content_type="text/plain; charset=utf-8",
            )
        return Response(body=html).with_header(
            "Link", f"<{STYLESHEET_PATH}>; rel=preload; as=style"
        )
