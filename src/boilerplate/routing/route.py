"""Route and RouteMatch frozen dataclasses."""

import re
from dataclasses import dataclass

from boilerplate._internal.types import Handler


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    ``pattern`` is searched against the request path only, so anchors in
    the pattern decide how exact the match is.
    """

    pattern: re.Pattern[str]
    handler: Handler
    methods: frozenset[str]
    name: str | None = None

    def allows(self, method: str) -> bool:
        """True if *method* may be dispatched to this route.

        ``HEAD`` is allowed wherever ``GET`` is.
        """
        if method in self.methods:
            return True
        return method == "HEAD" and "GET" in self.methods


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, str]
