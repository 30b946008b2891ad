"""Static asset serving from the embedded bundle.

``/favicon.ico`` is an alias for ``/static/favicon.ico``. Every other path
is looked up in the bundle with its leading slash removed, so
``/static/style.css`` serves the ``static/style.css`` asset.

All assets share one ``Last-Modified`` time: the moment the server
started. The bundle cannot change while the process runs, so per-file
times would add nothing.

Conditional requests (``If-Modified-Since``, ``If-Unmodified-Since``) and
single byte ranges (``Range``, ``If-Range``) are honoured. Multi-range
requests get the full body.
"""

import mimetypes
import re
from collections.abc import Mapping
from datetime import UTC, datetime
from email.utils import format_datetime, parsedate_to_datetime

from boilerplate.errors import BoilerplateError, NotFound
from boilerplate.http.request import Request
from boilerplate.http.response import Response

FAVICON_PATH = "/favicon.ico"
FAVICON_ASSET_PATH = "/static/favicon.ico"

_RANGE_RE = re.compile(r"^bytes=(\d*)-(\d*)$")


class RangeNotSatisfiable(BoilerplateError):  # noqa: N818
    """The requested range lies outside the asset."""


def _parse_http_date(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def parse_range(header: str, size: int) -> tuple[int, int] | None:
    """Parse a single-range ``Range`` header into inclusive ``(start, end)``.

    Returns ``None`` when the header should be ignored (malformed or
    multi-range) and the full body served. Raises ``RangeNotSatisfiable``
    when the range cannot overlap an asset of *size* bytes.
    """
    found = _RANGE_RE.match(header.strip())
    if found is None:
        return None
    first, last = found.groups()
    if not first and not last:
        return None

    if not first:
        # Suffix range: the final N bytes
        length = int(last)
        if length == 0 or size == 0:
            raise RangeNotSatisfiable(header)
        return max(size - length, 0), size - 1

    start = int(first)
    if start >= size:
        raise RangeNotSatisfiable(header)
    end = int(last) if last else size - 1
    if end < start:
        raise RangeNotSatisfiable(header)
    return start, min(end, size - 1)


class StaticAssets:
    """Route handler serving assets from a bundle.

    Usage::

        static = StaticAssets(bundle, modified=datetime.now(UTC))
        router.handle(r"^/static", ["GET"], static)
    """

    __slots__ = ("_bundle", "_last_modified", "_modified")

    def __init__(self, bundle: Mapping[str, bytes], modified: datetime) -> None:
        self._bundle = bundle
        if modified.tzinfo is None:
            modified = modified.replace(tzinfo=UTC)
        # HTTP dates have one-second resolution
        self._modified = modified.astimezone(UTC).replace(microsecond=0)
        self._last_modified = format_datetime(self._modified, usegmt=True)

    @property
    def last_modified(self) -> str:
        """The ``Last-Modified`` value sent with every asset."""
        return self._last_modified

    def resolve(self, path: str) -> str:
        """Map a request path to a bundle key."""
        if path == FAVICON_PATH:
            path = FAVICON_ASSET_PATH
        return path.removeprefix("/")

    def __call__(self, request: Request) -> Response:
        key = self.resolve(request.path)
        try:
            data = self._bundle[key]
        except KeyError:
            raise NotFound(f"No asset named {key!r}") from None

        content_type, _ = mimetypes.guess_type(key)
        if content_type is None:
            content_type = "application/octet-stream"
        elif content_type.startswith("text/"):
            content_type = f"{content_type}; charset=utf-8"

        response = Response(body=data, content_type=content_type).with_header(
            "Last-Modified", self._last_modified
        )

        precondition = self._check_preconditions(request)
        if precondition is not None:
            return response.with_body(b"").with_status(precondition)

        response = response.with_header("Accept-Ranges", "bytes")
        range_header = request.headers.get("range")
        if range_header is None or not self._range_applies(request):
            return response

        size = len(data)
        try:
            byte_range = parse_range(range_header, size)
        except RangeNotSatisfiable:
            return (
                response.with_body("invalid range: failed to overlap")
                .with_content_type("text/plain; charset=utf-8")
                .with_status(416)
                .with_header("Content-Range", f"bytes */{size}")
            )
        if byte_range is None:
            return response
        start, end = byte_range
        return (
            response.with_body(data[start : end + 1])
            .with_status(206)
            .with_header("Content-Range", f"bytes {start}-{end}/{size}")
        )

    def _check_preconditions(self, request: Request) -> int | None:
        """Return 412 or 304 when a conditional header says so."""
        unmodified_since = _parse_http_date(request.headers.get("if-unmodified-since"))
        if unmodified_since is not None and self._modified > unmodified_since:
            return 412

        if request.method in ("GET", "HEAD"):
            modified_since = _parse_http_date(request.headers.get("if-modified-since"))
            if modified_since is not None and self._modified <= modified_since:
                return 304
        return None

    def _range_applies(self, request: Request) -> bool:
        """``If-Range`` disables range handling unless it names our date."""
        if_range = request.headers.get("if-range")
        if if_range is None:
            return True
        return _parse_http_date(if_range) == self._modified
