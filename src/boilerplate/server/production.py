"""TLS server.

Starts a pounce server bound to the configured address, serving HTTPS
only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from boilerplate.app import App


def run_tls_server(
    app: App,
    host: str,
    port: int,
    *,
    certfile: str,
    keyfile: str,
    workers: int = 1,
) -> None:
    """Serve *app* over TLS until the server stops.

    Args:
        app: Boilerplate App instance.
        host: Bind address.
        port: Bind port (0 picks a free port).
        certfile: Path to the PEM certificate (chain).
        keyfile: Path to the PEM private key.
        workers: Worker count.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=workers,
        ssl_certfile=certfile,
        ssl_keyfile=keyfile,
    )
    server = Server(config, app)
    server.run()
