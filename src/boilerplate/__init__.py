"""Boilerplate: a minimal HTTPS server for an HTML site.

Serves a rendered homepage and an embedded static asset bundle through a
regexp router wrapped in request-ID, Server-header, logging and timing
middleware.

Basic usage::

    from boilerplate import App, build_startup_context

    app = App(build_startup_context("config.yml"))
    app.run()

Or from the shell::

    html-boilerplate --config config.yml
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AssetBundle",
    "BoilerplateError",
    "HTTPError",
    "MethodNotAllowed",
    "Middleware",
    "Next",
    "NotFound",
    "Request",
    "Response",
    "RuntimeConfig",
    "StartupContext",
    "StartupError",
    "build_startup_context",
    "resolve_config",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import boilerplate`` fast and free of the kida import.
    """
    if name == "App":
        from boilerplate.app import App

        return App

    if name == "AssetBundle":
        from boilerplate.assets import AssetBundle

        return AssetBundle

    if name in ("StartupContext", "build_startup_context"):
        from boilerplate import context as _ctx

        return getattr(_ctx, name)

    if name in ("RuntimeConfig", "resolve_config"):
        from boilerplate import config as _config

        return getattr(_config, name)

    if name == "Request":
        from boilerplate.http.request import Request

        return Request

    if name == "Response":
        from boilerplate.http.response import Response

        return Response

    if name in ("Middleware", "Next"):
        from boilerplate.middleware import protocol as _mw

        return getattr(_mw, name)

    if name in ("BoilerplateError", "HTTPError", "MethodNotAllowed", "NotFound", "StartupError"):
        from boilerplate import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
