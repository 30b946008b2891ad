"""Tests for boilerplate.config: parsing and the startup resolution pipeline."""

from pathlib import Path

import pytest

from boilerplate.config import (
    DEFAULT_CERT_FILE,
    DEFAULT_PORT,
    FileConfig,
    RuntimeConfig,
    parse_config,
    read_config,
    resolve_config,
    resolve_file,
    resolve_port,
)
from boilerplate.errors import (
    ConfigParseError,
    ConfigReadError,
    InvalidPortError,
    InvalidSecretKeyError,
    MissingCertificateError,
    MissingKeyError,
)

VALID_KEY = "d7211b215341871968869d0b5e8c0ff1789fc88e0ac6e296ba36703edf8a1c2b"


def _write_config(path: Path, text: str) -> Path:
    path.write_text(text)
    return path


class TestParseConfig:
    def test_all_fields(self) -> None:
        cfg = parse_config(
            b'secret_key: "abc"\nport: 8443\ncert_file: c.pem\nkey_file: k.pem\n'
        )
        assert cfg == FileConfig(secret_key="abc", port=8443, cert_file="c.pem", key_file="k.pem")

    def test_missing_fields_use_defaults(self) -> None:
        cfg = parse_config(b'secret_key: ""\n')
        assert cfg.port is None
        assert cfg.cert_file == ""
        assert cfg.key_file == ""

    def test_empty_document(self) -> None:
        assert parse_config(b"") == FileConfig()

    def test_null_secret_key_is_empty(self) -> None:
        assert parse_config(b"secret_key:\n").secret_key == ""

    def test_unknown_keys_ignored(self) -> None:
        assert parse_config(b"color: blue\n") == FileConfig()

    def test_port_zero_kept(self) -> None:
        assert parse_config(b"port: 0\n").port == 0

    def test_malformed_yaml(self) -> None:
        with pytest.raises(ConfigParseError):
            parse_config(b"secret_key: [unclosed\n")

    def test_non_mapping_document(self) -> None:
        with pytest.raises(ConfigParseError, match="mapping"):
            parse_config(b"- a\n- b\n")

    @pytest.mark.parametrize("value", ['"8080"', "yes", "80.5"])
    def test_non_integer_port(self, value: str) -> None:
        with pytest.raises(ConfigParseError, match="port"):
            parse_config(f"port: {value}\n".encode())

    def test_non_string_cert_file(self) -> None:
        with pytest.raises(ConfigParseError, match="cert_file"):
            parse_config(b"cert_file: [a, b]\n")


class TestReadConfig:
    def test_reads_bytes(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path / "config.yml", "port: 1\n")
        assert read_config(path) == b"port: 1\n"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigReadError) as exc_info:
            read_config(tmp_path / "nope.yml")
        assert exc_info.value.field == "file"

    def test_directory(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigReadError):
            read_config(tmp_path)


class TestResolvePort:
    def test_explicit_wins_over_environment(self) -> None:
        assert resolve_port(8443, {"PORT": "9090"}) == 8443

    def test_environment_used_when_unset(self) -> None:
        assert resolve_port(None, {"PORT": "9090"}) == 9090

    def test_default_when_nothing_set(self) -> None:
        assert resolve_port(None, {}) == DEFAULT_PORT == 7065

    def test_explicit_zero_is_not_unset(self) -> None:
        assert resolve_port(0, {"PORT": "9090"}) == 0

    def test_invalid_environment_port(self) -> None:
        with pytest.raises(InvalidPortError) as exc_info:
            resolve_port(None, {"PORT": "http"})
        assert exc_info.value.context == {"port": "http"}

    @pytest.mark.parametrize("port", [-1, 65536])
    def test_out_of_range(self, port: int) -> None:
        with pytest.raises(InvalidPortError):
            resolve_port(port, {})

    def test_out_of_range_environment(self) -> None:
        with pytest.raises(InvalidPortError):
            resolve_port(None, {"PORT": "70000"})


class TestResolveFile:
    def test_explicit_path(self, tmp_path: Path) -> None:
        path = tmp_path / "mine.pem"
        path.write_text("x")
        assert resolve_file(str(path), DEFAULT_CERT_FILE, MissingCertificateError) == str(path)

    def test_default_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / DEFAULT_CERT_FILE).write_text("x")
        assert resolve_file("", DEFAULT_CERT_FILE, MissingCertificateError) == DEFAULT_CERT_FILE

    def test_missing_raises_given_error(self, tmp_path: Path) -> None:
        missing = str(tmp_path / "missing.pem")
        with pytest.raises(MissingKeyError) as exc_info:
            resolve_file(missing, "key.pem", MissingKeyError)
        assert exc_info.value.context == {"file": missing}


class TestResolveConfig:
    def test_full_config(self, tmp_path: Path, tls_files: tuple[Path, Path]) -> None:
        cert, key = tls_files
        path = _write_config(
            tmp_path / "config.yml",
            f"secret_key: {VALID_KEY}\nport: 8443\ncert_file: {cert}\nkey_file: {key}\n",
        )
        cfg = resolve_config(path, environ={"PORT": "9090"})
        assert cfg == RuntimeConfig(
            secret_key=bytes.fromhex(VALID_KEY),
            port=8443,
            cert_file=str(cert),
            key_file=str(key),
        )
        assert cfg.host == "127.0.0.1"
        assert cfg.key_generated is False

    def test_defaults(
        self, tmp_path: Path, tls_files: tuple[Path, Path], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        path = _write_config(tmp_path / "config.yml", 'secret_key: ""\n')
        cfg = resolve_config(path, environ={})
        assert cfg.port == 7065
        assert cfg.cert_file == "cert.pem"
        assert cfg.key_file == "key.pem"
        assert cfg.key_generated is True
        assert len(cfg.secret_key) == 32

    def test_environment_port(
        self, tmp_path: Path, tls_files: tuple[Path, Path], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("PORT", "9090")
        path = _write_config(tmp_path / "config.yml", 'secret_key: ""\n')
        assert resolve_config(path).port == 9090

    def test_secret_key_checked_before_files(self, tmp_path: Path) -> None:
        path = _write_config(
            tmp_path / "config.yml",
            'secret_key: "00"\ncert_file: /nonexistent/cert.pem\n',
        )
        with pytest.raises(InvalidSecretKeyError):
            resolve_config(path, environ={})

    def test_port_checked_before_files(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path / "config.yml", "cert_file: /nonexistent/cert.pem\n")
        with pytest.raises(InvalidPortError):
            resolve_config(path, environ={"PORT": "abc"})

    def test_missing_certificate(self, tmp_path: Path, tls_files: tuple[Path, Path]) -> None:
        _, key = tls_files
        path = _write_config(
            tmp_path / "config.yml",
            f"cert_file: {tmp_path / 'gone.pem'}\nkey_file: {key}\n",
        )
        with pytest.raises(MissingCertificateError):
            resolve_config(path, environ={})

    def test_missing_key(self, tmp_path: Path, tls_files: tuple[Path, Path]) -> None:
        cert, _ = tls_files
        path = _write_config(
            tmp_path / "config.yml",
            f"cert_file: {cert}\nkey_file: {tmp_path / 'gone.pem'}\n",
        )
        with pytest.raises(MissingKeyError):
            resolve_config(path, environ={})


class TestRuntimeConfig:
    def test_frozen(self) -> None:
        cfg = RuntimeConfig(secret_key=bytes(32))
        with pytest.raises(AttributeError):
            cfg.port = 1  # type: ignore[misc]

    def test_repr_hides_secret_key(self) -> None:
        cfg = RuntimeConfig(secret_key=b"\xaa" * 32)
        assert "secret_key" not in repr(cfg)
