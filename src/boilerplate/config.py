"""Server configuration.

``FileConfig`` is the record parsed from the YAML config file.
``RuntimeConfig`` is what the server actually runs with: the file values
merged with the environment and hardcoded defaults. Both are frozen
dataclasses, immutable after creation.

Resolution is a fixed, fail-fast sequence (see ``resolve_config``). Each
step raises a ``StartupError`` subclass; nothing is retried.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from boilerplate.errors import (
    ConfigParseError,
    ConfigReadError,
    InvalidPortError,
    MissingCertificateError,
    MissingKeyError,
    StartupError,
)
from boilerplate.secret import get_secret_key

DEFAULT_CONFIG_FILE = "config.yml"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 7065
DEFAULT_CERT_FILE = "cert.pem"
DEFAULT_KEY_FILE = "key.pem"
PORT_ENV = "PORT"

_MAX_PORT = 65535


@dataclass(frozen=True, slots=True)
class FileConfig:
    """The data in a config file.

    ``port`` is ``None`` when the file does not set one; ``0`` asks the OS
    for a random port. Empty strings mean "use the default".
    """

    secret_key: str = ""
    port: int | None = None
    cert_file: str = ""
    key_file: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "FileConfig":
        """Build a FileConfig from a parsed YAML mapping.

        Unknown keys are ignored. Raises ``ConfigParseError`` when a known
        key has the wrong type.
        """
        port = data.get("port")
        # bool is an int subclass; "port: yes" is not a port
        if port is not None and (isinstance(port, bool) or not isinstance(port, int)):
            msg = f"port must be an integer, got {type(port).__name__}"
            raise ConfigParseError(msg, field="port", value=port)
        return cls(
            secret_key=_string_field(data, "secret_key"),
            port=port,
            cert_file=_string_field(data, "cert_file"),
            key_file=_string_field(data, "key_file"),
        )


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """Resolved runtime configuration. Shared read-only by every request."""

    secret_key: bytes = field(repr=False)
    port: int = DEFAULT_PORT
    cert_file: str = DEFAULT_CERT_FILE
    key_file: str = DEFAULT_KEY_FILE
    host: str = DEFAULT_HOST
    key_generated: bool = False


def _string_field(data: Mapping[str, Any], name: str) -> str:
    value = data.get(name)
    if value is None:
        return ""
    if not isinstance(value, str):
        msg = f"{name} must be a string, got {type(value).__name__}"
        raise ConfigParseError(msg, field=name, value=value)
    return value


def read_config(path: str | Path) -> bytes:
    """Read the raw config file. Raises ``ConfigReadError``."""
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise ConfigReadError(str(exc), field="file", value=str(path)) from exc


def parse_config(data: bytes, source: str = DEFAULT_CONFIG_FILE) -> FileConfig:
    """Parse YAML bytes into a FileConfig. Raises ``ConfigParseError``.

    An empty document is an empty config, not an error.
    """
    try:
        raw = yaml.safe_load(data)
    except yaml.YAMLError as exc:
        raise ConfigParseError(str(exc), field="file", value=source) from exc
    if raw is None:
        return FileConfig()
    if not isinstance(raw, Mapping):
        msg = f"config must be a mapping, got {type(raw).__name__}"
        raise ConfigParseError(msg, field="file", value=source)
    return FileConfig.from_mapping(raw)


def resolve_port(explicit: int | None, environ: Mapping[str, str]) -> int:
    """Pick the listening port: config, then ``$PORT``, then the default."""
    if explicit is not None:
        port = explicit
    elif PORT_ENV in environ:
        raw = environ[PORT_ENV]
        try:
            port = int(raw)
        except ValueError as exc:
            raise InvalidPortError(str(exc), field="port", value=raw) from exc
    else:
        return DEFAULT_PORT

    if not 0 <= port <= _MAX_PORT:
        msg = f"port must be between 0 and {_MAX_PORT}"
        raise InvalidPortError(msg, field="port", value=port)
    return port


def resolve_file(explicit: str, default: str, error: type[StartupError]) -> str:
    """Return *explicit* or *default*, requiring the file to exist."""
    path = explicit or default
    if not Path(path).exists():
        raise error(f"{path}: no such file", field="file", value=path)
    return path


def resolve_config(
    path: str | Path = DEFAULT_CONFIG_FILE,
    environ: Mapping[str, str] | None = None,
) -> RuntimeConfig:
    """Run the startup configuration pipeline.

    1. read the config file            (``ConfigReadError``)
    2. parse it                         (``ConfigParseError``)
    3. validate or generate secret key  (``InvalidSecretKeyError``)
    4. resolve the port                 (``InvalidPortError``)
    5. resolve cert and key files       (``MissingCertificateError`` /
                                         ``MissingKeyError``)
    """
    env = os.environ if environ is None else environ
    file_config = parse_config(read_config(path), source=str(path))
    secret_key = get_secret_key(file_config.secret_key)
    port = resolve_port(file_config.port, env)
    cert_file = resolve_file(file_config.cert_file, DEFAULT_CERT_FILE, MissingCertificateError)
    key_file = resolve_file(file_config.key_file, DEFAULT_KEY_FILE, MissingKeyError)
    return RuntimeConfig(
        secret_key=secret_key,
        port=port,
        cert_file=cert_file,
        key_file=key_file,
        key_generated=not file_config.secret_key,
    )
