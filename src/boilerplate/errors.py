"""Boilerplate exception hierarchy.

Startup errors are fatal: the CLI logs them with their structured context
and exits with ``StartupError.exit_code``. HTTP errors are per-request
outcomes turned into responses by the ASGI handler.
"""

from dataclasses import dataclass
from typing import Any


class BoilerplateError(Exception):
    """Base for all boilerplate-specific errors."""


class ConfigurationError(BoilerplateError):
    """Raised when the server cannot be configured."""


class StartupError(ConfigurationError):
    """A failure in the startup pipeline. Never retried.

    ``message`` is the fixed log line for the failure class, ``detail``
    describes this particular failure and ``field`` names the config
    field (or file) involved, when there is one.
    """

    exit_code: int = 2
    message: str = "Startup failed"

    def __init__(self, detail: str, *, field: str | None = None, value: Any = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.field = field
        self.value = value

    @property
    def context(self) -> dict[str, Any]:
        """Key/value pairs for structured logging."""
        ctx: dict[str, Any] = {}
        if self.field is not None:
            ctx[self.field] = self.value
        return ctx


class ConfigReadError(StartupError):
    """The config file is missing or unreadable."""

    message = "Couldn't find config file"


class ConfigParseError(StartupError):
    """The config file is not a valid config document."""

    message = "Couldn't parse config file"


class InvalidSecretKeyError(StartupError):
    """The secret key is not a 64-character hex string."""

    message = "Error getting secret key"


class InvalidPortError(StartupError):
    """The port is not a valid TCP port number."""

    message = "Invalid port"


class MissingCertificateError(StartupError):
    """The TLS certificate file does not exist."""

    message = "Could not find a cert file; generate using 'make generate_cert'"


class MissingKeyError(StartupError):
    """The TLS private key file does not exist."""

    message = "Could not find a key file; generate using 'make generate_cert'"


@dataclass(frozen=True, slots=True)
class HTTPError(BoilerplateError):
    """An error that maps directly to an HTTP status code.

    Raised by the router and by handlers. The ASGI handler catches these
    and turns them into a standard error response.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404: no route or asset matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405: a route matched the path but not the method.

    Carries an ``Allow`` header listing the methods the route accepts.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )
