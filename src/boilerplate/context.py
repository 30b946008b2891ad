"""Startup context.

Everything the server needs, resolved once before listening and then
passed explicitly to the ``App``. Nothing here changes after startup.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

from kida import Environment

from boilerplate.assets import AssetBundle
from boilerplate.config import DEFAULT_CONFIG_FILE, RuntimeConfig, resolve_config
from boilerplate.templating.integration import create_environment


@dataclass(frozen=True, slots=True)
class StartupContext:
    """Resolved configuration plus the read-only resources built from it.

    ``started_at`` doubles as the ``Last-Modified`` time of every asset.
    """

    config: RuntimeConfig
    bundle: AssetBundle
    templates: Environment
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))


def build_startup_context(
    config_path: str | Path = DEFAULT_CONFIG_FILE,
    environ: Mapping[str, str] | None = None,
) -> StartupContext:
    """Resolve configuration and load assets and templates.

    Raises a ``StartupError`` subclass if configuration is invalid.
    """
    config = resolve_config(config_path, environ)
    return StartupContext(
        config=config,
        bundle=AssetBundle.from_package(),
        templates=create_environment(),
    )
