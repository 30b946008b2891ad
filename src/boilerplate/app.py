"""Boilerplate application.

Built from a ``StartupContext``. The route table and middleware chain are
compiled on first use and frozen from then on.
"""

import threading
from collections.abc import Sequence

from boilerplate._internal.asgi import Receive, Scope, Send
from boilerplate.context import StartupContext
from boilerplate.middleware.chain import default_middleware
from boilerplate.middleware.protocol import Middleware
from boilerplate.routing.router import Router
from boilerplate.server.compression import GZipHandler
from boilerplate.server.handler import handle_request
from boilerplate.server.homepage import Homepage
from boilerplate.server.static import StaticAssets

# Match order matters: the first pattern that matches decides the route.
STATIC_PATTERN = r"(^/static|^/favicon.ico$)"
HOMEPAGE_PATTERN = r"^/$"


class App:
    """The boilerplate ASGI application.

    Routes:
        ``GET /static/*``, ``GET /favicon.ico``  gzip-wrapped static assets
        ``GET /``                                rendered homepage

    Thread safety:
        The freeze uses a Lock + double-check so that exactly one thread
        compiles the app, even when several workers take their first
        request at the same time.
    """

    __slots__ = ("_freeze_lock", "_frozen", "_middleware", "_router", "context")

    def __init__(
        self,
        context: StartupContext,
        *,
        middleware: Sequence[Middleware] | None = None,
    ) -> None:
        self.context = context
        self._middleware: tuple[Middleware, ...] = (
            default_middleware() if middleware is None else tuple(middleware)
        )
        self._router: Router | None = None
        self._frozen = False
        self._freeze_lock = threading.Lock()

    @property
    def router(self) -> Router:
        """The compiled route table."""
        self._ensure_frozen()
        assert self._router is not None
        return self._router

    @property
    def middleware(self) -> tuple[Middleware, ...]:
        """The middleware chain, outermost first."""
        return self._middleware

    # -- Server --

    def run(self) -> None:
        """Serve over TLS on the configured loopback address and port."""
        from boilerplate.server.production import run_tls_server

        self._ensure_frozen()
        config = self.context.config
        run_tls_server(
            self,
            config.host,
            config.port,
            certfile=config.cert_file,
            keyfile=config.key_file,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        await handle_request(
            scope,
            receive,
            send,
            router=self.router,
            middleware=self._middleware,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Freeze at startup so the first request pays no compile cost."""
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Build the route table. MUST only be called holding _freeze_lock."""
        static = StaticAssets(self.context.bundle, modified=self.context.started_at)
        router = Router()
        router.handle(STATIC_PATTERN, ["GET"], GZipHandler(static), name="static")
        router.handle(HOMEPAGE_PATTERN, ["GET"], Homepage(self.context.templates), name="homepage")
        router.compile()
        self._router = router
        self._frozen = True
