"""Embedded asset bundle.

Every file shipped in this package directory (``static/``, ``templates/``)
is read once at startup into an ``AssetBundle``: an immutable mapping from
slash-separated names such as ``"static/style.css"`` to bytes. The bundle
is never mutated afterwards, so request handlers share it without locks.

To add an asset, drop the file under ``static/`` and reinstall the package.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from importlib import resources
from importlib.resources.abc import Traversable
from types import MappingProxyType

_SKIP_SUFFIXES = (".py", ".pyc")
_SKIP_DIRS = ("__pycache__",)


@dataclass(frozen=True, slots=True)
class AssetBlob:
    """A named, immutable byte blob."""

    path: str
    data: bytes


class AssetBundle(Mapping[str, bytes]):
    """Read-only mapping of asset names to their contents.

    Usage::

        bundle = AssetBundle.from_package()
        css = bundle["static/style.css"]
        "static/missing.css" in bundle  # False
    """

    __slots__ = ("_blobs",)

    def __init__(self, blobs: Mapping[str, bytes]) -> None:
        self._blobs: Mapping[str, bytes] = MappingProxyType(dict(blobs))

    def __getitem__(self, name: str) -> bytes:
        return self._blobs[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._blobs)

    def __len__(self) -> int:
        return len(self._blobs)

    def __repr__(self) -> str:
        return f"AssetBundle({sorted(self._blobs)!r})"

    def blob(self, name: str) -> AssetBlob:
        """Return the named asset as an ``AssetBlob``. Raises ``KeyError``."""
        return AssetBlob(path=name, data=self._blobs[name])

    @classmethod
    def from_package(cls, package: str = "boilerplate.assets") -> "AssetBundle":
        """Load every data file under *package* into a bundle."""
        blobs: dict[str, bytes] = {}
        _collect(resources.files(package), "", blobs)
        return cls(blobs)


def _collect(node: Traversable, prefix: str, blobs: dict[str, bytes]) -> None:
    for entry in node.iterdir():
        name = f"{prefix}{entry.name}"
        if entry.is_dir():
            if entry.name not in _SKIP_DIRS:
                _collect(entry, f"{name}/", blobs)
        elif not entry.name.endswith(_SKIP_SUFFIXES):
            blobs[name] = entry.read_bytes()
