"""Static file serving middleware.

Serves files from a directory for paths under a URL prefix and falls
through to the next handler for everything else.
"""

import mimetypes
from pathlib import Path

from perch.http.request import Request
from perch.http.response import Response
from perch.middleware.protocol import AnyResponse, Next


class StaticFiles:
    """Middleware that serves static files from a directory.

    Files are served for paths matching the configured prefix.
    Non-matching paths, and missing files, fall through to the next
    handler (so the router produces the usual 404).

    Security: resolves symlinks and verifies the final path
    is within the configured directory to prevent path traversal.

    Usage::

        app.add_middleware(StaticFiles(
            directory="./static",
            prefix="/static",
        ))
    """

    __slots__ = ("_cache_control", "_directory", "_prefix")

    def __init__(
        self,
        directory: str | Path,
        prefix: str = "/static",
        *,
        cache_control: str = "public, max-age=3600",
    ) -> None:
        self._directory = Path(directory).resolve()
        self._cache_control = cache_control
        self._prefix = "/" + prefix.strip("/")

    @property
    def directory(self) -> Path:
        return self._directory

    async def __call__(self, request: Request, next: Next) -> AnyResponse:
        """Serve a static file or fall through."""
        if request.method not in ("GET", "HEAD"):
            return await next(request)

        path = request.path
        if not path.startswith(self._prefix + "/"):
            return await next(request)

        relative = path[len(self._prefix) :].lstrip("/")
        file_path = (self._directory / relative).resolve()
        if not file_path.is_relative_to(self._directory):
            return Response(body="Forbidden", status=403, content_type="text/plain; charset=utf-8")

        if not file_path.is_file():
            return await next(request)

        return self._serve_file(file_path)

    def _serve_file(self, file_path: Path) -> Response:
        """Read a file and build a response."""
        content_type, _ = mimetypes.guess_type(str(file_path))
        if content_type is None:
            content_type = "application/octet-stream"
        elif content_type.startswith("text/") or content_type.endswith("javascript"):
            content_type += "; charset=utf-8"

        body = file_path.read_bytes()

        return Response(body=body, content_type=content_type).with_header(
            "Cache-Control", self._cache_control
        )
