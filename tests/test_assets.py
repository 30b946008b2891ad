"""Tests for boilerplate.assets: the embedded bundle."""

import pytest

from boilerplate.assets import AssetBlob, AssetBundle


class TestAssetBundle:
    def test_contains_shipped_assets(self, bundle: AssetBundle) -> None:
        assert "static/style.css" in bundle
        assert "static/favicon.ico" in bundle
        assert "templates/index.html" in bundle

    def test_python_files_excluded(self, bundle: AssetBundle) -> None:
        assert not any(name.endswith((".py", ".pyc")) for name in bundle)
        assert not any("__pycache__" in name for name in bundle)

    def test_favicon_is_ico(self, bundle: AssetBundle) -> None:
        assert bundle["static/favicon.ico"][:4] == b"\x00\x00\x01\x00"

    def test_missing_asset_raises_key_error(self, bundle: AssetBundle) -> None:
        with pytest.raises(KeyError):
            bundle["static/missing.css"]
        assert bundle.get("static/missing.css") is None

    def test_read_only(self, bundle: AssetBundle) -> None:
        with pytest.raises(TypeError):
            bundle["static/new.css"] = b""  # type: ignore[index]

    def test_source_mapping_copied(self) -> None:
        source = {"static/a.txt": b"a"}
        bundle = AssetBundle(source)
        source["static/b.txt"] = b"b"
        assert list(bundle) == ["static/a.txt"]
        assert len(bundle) == 1

    def test_blob(self) -> None:
        bundle = AssetBundle({"static/a.txt": b"a"})
        assert bundle.blob("static/a.txt") == AssetBlob(path="static/a.txt", data=b"a")

    def test_repr_lists_names(self) -> None:
        assert repr(AssetBundle({"b": b"", "a": b""})) == "AssetBundle(['a', 'b'])"
