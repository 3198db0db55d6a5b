"""Form data parsing — URL-encoded and multipart.

URL-encoded bodies use stdlib ``urllib.parse``. Multipart bodies are
parsed with ``python-multipart``; file parts are ignored since none of
the perch forms accept uploads.
"""

from collections.abc import Iterator, Mapping
from typing import Any
from urllib.parse import parse_qs

from python_multipart.multipart import MultipartParser, parse_options_header


class FormData(Mapping[str, str]):
    """Immutable parsed form data.

    ``__getitem__`` returns the first value for a key.
    ``get_list`` returns all values for a key (checkbox groups,
    multi-selects).

    Usage::

        form = await request.form()
        email = form.get("email", "")
        hobbies = form.get_list("hobbies")
    """

    __slots__ = ("_data",)

    def __init__(self, data: dict[str, list[str]] | None = None) -> None:
        object.__setattr__(self, "_data", data or {})

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self.get_list(k)!r}" for k in self)
        return f"FormData({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._data.get(key)
        if values:
            return values[0]
        return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*, in submission order."""
        return list(self._data.get(key, []))


async def parse_form_data(body: bytes, content_type: str) -> FormData:
    """Parse a form body into ``FormData``.

    Supports ``application/x-www-form-urlencoded`` and
    ``multipart/form-data``.

    Raises:
        ValueError: If the content type is not a form encoding, or a
            multipart body has no boundary.
    """
    ct_lower = content_type.lower().split(";")[0].strip()

    if ct_lower == "application/x-www-form-urlencoded":
        return FormData(parse_qs(body.decode("utf-8"), keep_blank_values=True))

    if ct_lower == "multipart/form-data":
        return _parse_multipart(body, content_type)

    msg = f"Unsupported form content type: {content_type!r}"
    raise ValueError(msg)


def _parse_multipart(body: bytes, content_type: str) -> FormData:
    """Collect the plain fields of a multipart body."""
    _, options = parse_options_header(content_type.encode("latin-1"))
    boundary = options.get(b"boundary")
    if boundary is None:
        msg = "Multipart form data missing boundary parameter"
        raise ValueError(msg)

    data: dict[str, list[str]] = {}
    part: dict[str, Any] = {}
    pending_header = ""

    def on_part_begin() -> None:
        part.clear()
        part["chunks"] = bytearray()

    def on_part_data(chunk: bytes, start: int, end: int) -> None:
        part["chunks"].extend(chunk[start:end])

    def on_part_end() -> None:
        name = part.get("name")
        if name is None or part.get("is_file"):
            return
        data.setdefault(name, []).append(part["chunks"].decode("utf-8", errors="replace"))

    def on_header_field(chunk: bytes, start: int, end: int) -> None:
        nonlocal pending_header
        pending_header += chunk[start:end].decode("latin-1").lower()

    def on_header_value(chunk: bytes, start: int, end: int) -> None:
        part.setdefault("header_value", bytearray()).extend(chunk[start:end])

    def on_header_end() -> None:
        nonlocal pending_header
        value = bytes(part.pop("header_value", b""))
        if pending_header == "content-disposition":
            _, params = parse_options_header(value)
            if b"name" in params:
                part["name"] = params[b"name"].decode("utf-8")
            part["is_file"] = b"filename" in params
        pending_header = ""

    parser = MultipartParser(
        boundary,
        {
            "on_part_begin": on_part_begin,
            "on_part_data": on_part_data,
            "on_part_end": on_part_end,
            "on_header_field": on_header_field,
            "on_header_value": on_header_value,
            "on_header_end": on_header_end,
        },
    )
    parser.write(body)
    parser.finalize()
    return FormData(data)
