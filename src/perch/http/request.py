"""Immutable HTTP request.

Frozen metadata with async body access. The body is read from the ASGI
receive channel at most once and cached with its parsed form.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from perch._internal.asgi import Receive, Scope
from perch.errors import HTTPError
from perch.http.headers import Headers

if TYPE_CHECKING:
    from perch.http.forms import FormData


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Metadata (method, path, headers) is frozen at creation. The body is
    accessed asynchronously via ``.body()`` and ``.form()``.
    """

    method: str
    path: str
    headers: Headers
    query_string: bytes
    client: tuple[str, int] | None

    # Private: ASGI receive callable for body streaming
    _receive: Receive

    # Private: mutable cache for body and parsed form data
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    async def body(self) -> bytes:
        """Read the full request body (cached after the first call)."""
        if "_body" not in self._cache:
            self._cache["_body"] = b"".join([chunk async for chunk in self.stream()])
        return self._cache["_body"]

    async def stream(self) -> AsyncGenerator[bytes]:
        """Stream the request body in chunks."""
        while True:
            message = await self._receive()
            if message["type"] == "http.disconnect":
                break
            chunk = message.get("body", b"")
            if chunk:
                yield chunk
            if not message.get("more_body", False):
                break

    async def form(self) -> FormData:
        """Parse the body as form data (URL-encoded or multipart).

        Raises:
            HTTPError: 400 when the body is not a decodable form encoding.
        """
        if "_form" in self._cache:
            return self._cache["_form"]

        from perch.http.forms import parse_form_data

        ct = self.content_type or "application/x-www-form-urlencoded"
        try:
            result = await parse_form_data(await self.body(), ct)
        except (ValueError, UnicodeDecodeError) as exc:
            raise HTTPError(status=400, detail=f"Bad form submission: {exc}") from exc

        self._cache["_form"] = result
        return result

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        client = scope.get("client")
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query_string=scope.get("query_string", b""),
            client=tuple(client) if client else None,
            _receive=receive,
        )
