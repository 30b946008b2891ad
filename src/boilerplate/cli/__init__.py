"""Command-line entry point.

Registered as ``html-boilerplate`` in ``pyproject.toml``::

    [project.scripts]
    html-boilerplate = "boilerplate.cli:main"

Startup is fail-fast: any configuration problem is logged and the
process exits with status 2 before a socket is opened.
"""

import argparse
import logging

from boilerplate.config import DEFAULT_CONFIG_FILE
from boilerplate.errors import StartupError
from boilerplate.log import configure_logging, fields

logger = logging.getLogger("boilerplate.cli")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``html-boilerplate`` command."""
    parser = argparse.ArgumentParser(
        prog="html-boilerplate",
        description="Serve the HTML boilerplate site over HTTPS.",
    )
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_FILE,
        help="Path to a config file (default: %(default)s)",
    )
    args = parser.parse_args(argv)

    configure_logging()

    from boilerplate.app import App
    from boilerplate.context import build_startup_context

    try:
        context = build_startup_context(args.config)
    except StartupError as exc:
        logger.error(exc.message, extra=fields(err=exc.detail, **exc.context))
        raise SystemExit(exc.exit_code) from exc

    config = context.config
    if config.key_generated:
        logger.warning(
            "No secret key configured; generated one for this process only",
            extra=fields(config=args.config),
        )

    app = App(context)
    logger.info("Starting server", extra=fields(host=config.host, port=config.port))
    try:
        app.run()
    except OSError as exc:
        logger.error("server shut down", extra=fields(err=exc))
        return
    logger.info("server shut down")
