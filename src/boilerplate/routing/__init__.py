"""Routing: an ordered table of regexp routes.

Routes are registered during setup and frozen when the app compiles.
"""

from boilerplate.routing.route import Route, RouteMatch
from boilerplate.routing.router import Router

__all__ = ["Route", "RouteMatch", "Router"]
