"""Static file fallback.

Serves files from a directory for requests that no mount matched, the
way a local gateway serves a ``public`` folder next to the functions.
Mounts always take priority.
"""

import mimetypes
from pathlib import Path

from sluice.http.response import Response


class StaticFiles:
    """Serve files from *directory* at the URL root.

    Security: resolves symlinks and verifies the final path
    is within the configured directory to prevent path traversal.

    Usage::

        static = StaticFiles("./public")
        response = static.lookup("GET", "/css/site.css")  # Response or None
    """

    __slots__ = ("_cache_control", "_directory", "_index")

    def __init__(
        self,
        directory: str | Path,
        *,
        index: str = "index.html",
        cache_control: str = "no-cache",
    ) -> None:
        self._directory = Path(directory).resolve()
        self._index = index
        self._cache_control = cache_control

    @property
    def directory(self) -> Path:
        return self._directory

    def lookup(self, method: str, path: str) -> Response | None:
        """Return a response for *path*, or ``None`` to fall through."""
        if method.upper() not in ("GET", "HEAD"):
            return None

        relative = path.lstrip("/")
        try:
            file_path = (self._directory / relative).resolve() if relative else self._directory
        except (ValueError, OSError):
            # Embedded NUL bytes or names the filesystem cannot represent
            return None
        if not file_path.is_relative_to(self._directory):
            return Response(body="Forbidden", status=403)

        if file_path.is_dir():
            index_path = file_path / self._index
            if not index_path.is_file():
                return None
            # Directory without trailing slash: redirect so relative links resolve
            if relative and not path.endswith("/"):
                return Response(body="", status=301).with_header("Location", path + "/")
            file_path = index_path

        if not file_path.is_file():
            return None
        return self._serve_file(file_path)

    def _serve_file(self, file_path: Path) -> Response:
        content_type, _ = mimetypes.guess_type(str(file_path))
        if content_type is None:
            content_type = "application/octet-stream"

        return Response(
            body=file_path.read_bytes(),
            content_type=content_type,
        ).with_header("Cache-Control", self._cache_control)
