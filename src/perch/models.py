"""Accepted form entries.

Instances are only built from input that already passed validation.
Password fields are never part of an accepted entry.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from perch.validation import normalize_hobbies


def utcnow() -> datetime:
    return datetime.now(UTC)


def format_iso(value: datetime) -> str:
    """ISO-8601 in UTC with a ``Z`` suffix (``2025-01-01T12:00:00.123456Z``)."""
    return value.astimezone(UTC).isoformat().replace("+00:00", "Z")


def parse_iso(value: str) -> datetime:
    """Inverse of ``format_iso``; naive timestamps are taken as UTC."""
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


@dataclass(frozen=True, slots=True)
class Submission:
    """A persisted registration.

    Serialized with the camelCase ``submittedAt`` key::

        {"fullname": "Ada Lovelace", "email": "ada@example.com",
         "gender": "f", "hobbies": ["reading"], "city": "NYC",
         "agreed": true, "submittedAt": "2025-01-01T12:00:00Z"}
    """

    fullname: str
    email: str
    gender: str
    hobbies: tuple[str, ...]
    city: str
    agreed: bool
    submitted_at: datetime = field(default_factory=utcnow)

    @classmethod
    def from_form(cls, form: Mapping[str, Any], *, submitted_at: datetime | None = None) -> Submission:
        """Build from a validated form; ``terms`` becomes ``agreed``."""
        return cls(
            fullname=form.get("fullname") or "",
            email=form.get("email") or "",
            gender=form.get("gender") or "",
            hobbies=tuple(normalize_hobbies(form)),
            city=form.get("city") or "",
            agreed=bool(form.get("terms")),
            submitted_at=submitted_at or utcnow(),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Submission:
        """Rebuild from the stored JSON shape.

        Raises:
            KeyError: A required key is missing.
            TypeError, ValueError: A value has the wrong shape.
        """
        hobbies = data.get("hobbies") or ()
        if isinstance(hobbies, str) or not isinstance(hobbies, Sequence):
            msg = f"hobbies must be a list, got {type(hobbies).__name__}"
            raise TypeError(msg)
        return cls(
            fullname=str(data["fullname"]),
            email=str(data["email"]),
            gender=str(data.get("gender") or ""),
            hobbies=tuple(str(h) for h in hobbies),
            city=str(data.get("city") or ""),
            agreed=bool(data.get("agreed", False)),
            submitted_at=parse_iso(data["submittedAt"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "fullname": self.fullname,
            "email": self.email,
            "gender": self.gender,
            "hobbies": list(self.hobbies),
            "city": self.city,
            "agreed": self.agreed,
            "submittedAt": format_iso(self.submitted_at),
        }


@dataclass(frozen=True, slots=True)
class ContactMessage:
    """An accepted contact form entry. Shown once, never stored."""

    name: str
    email: str
    message: str
    submitted_at: datetime = field(default_factory=utcnow)

    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> ContactMessage:
        return cls(
            name=(form.get("name") or "").strip(),
            email=form.get("email") or "",
            message=(form.get("message") or "").strip(),
        )
