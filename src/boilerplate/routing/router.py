"""Ordered regexp router.

Routes are tried in registration order and the first pattern that
matches the path wins, whatever the method. Register specific patterns
before catch-alls.
"""

import re
from collections.abc import Iterable

from boilerplate._internal.types import Handler
from boilerplate.errors import MethodNotAllowed, NotFound
from boilerplate.routing.route import Route, RouteMatch


class Router:
    """Regexp router with method checking.

    Usage::

        router = Router()
        router.handle(r"^/$", ["GET"], index)
        router.compile()
        match = router.match("GET", "/")
    """

    __slots__ = ("_compiled", "_routes")

    def __init__(self) -> None:
        self._routes: list[Route] = []
        self._compiled = False

    def add(self, route: Route) -> None:
        """Append a route to the table. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        self._routes.append(route)

    def handle(
        self,
        pattern: str | re.Pattern[str],
        methods: Iterable[str],
        handler: Handler,
        *,
        name: str | None = None,
    ) -> Route:
        """Compile *pattern* if needed and register a route for it."""
        compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
        route = Route(
            pattern=compiled,
            handler=handler,
            methods=frozenset(m.upper() for m in methods),
            name=name,
        )
        self.add(route)
        return route

    @property
    def routes(self) -> tuple[Route, ...]:
        """All registered routes, in match order."""
        return tuple(self._routes)

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request against the route table.

        Returns a ``RouteMatch`` for the first route whose pattern matches
        *path*. Raises ``MethodNotAllowed`` if that route does not accept
        *method*; later routes are not consulted. Raises ``NotFound`` if
        no pattern matches.
        """
        for route in self._routes:
            found = route.pattern.search(path)
            if found is None:
                continue
            if not route.allows(method):
                raise MethodNotAllowed(route.methods)
            params = {k: v for k, v in found.groupdict().items() if v is not None}
            return RouteMatch(route=route, path_params=params)
        raise NotFound(f"No route matches {method} {path!r}")
