"""Per-request form state: what the user typed and what went wrong.

``FormState`` is built on every GET and POST and discarded with the
response. Templates read ``values`` to re-populate inputs and
``errors`` to annotate fields::

    state = FormState.from_submission("Registration Form", form, result.errors)
    return state.template("registration/form.html"), 400
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from perch.templating.returns import Template
from perch.validation import normalize_hobbies

# Never echoed back into the page
SECRET_FIELDS = frozenset({"password", "confirmPassword"})

# Fields re-populated as lists
MULTI_FIELDS = frozenset({"hobbies"})


@dataclass(frozen=True, slots=True)
class FormState:
    """Title, submitted values, and field errors for one render."""

    title: str
    values: dict[str, Any] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)

    @classmethod
    def empty(cls, title: str, fields: Iterable[str]) -> FormState:
        """A blank form: every field present with an empty value."""
        return cls(title, {name: [] if name in MULTI_FIELDS else "" for name in fields})

    @classmethod
    def from_submission(
        cls,
        title: str,
        form: Mapping[str, Any],
        errors: Mapping[str, str] | None = None,
        *,
        fields: Iterable[str] = (),
    ) -> FormState:
        """Echo a submitted form, minus secrets, with its *errors*.

        *fields* lists names that must be present even if the browser
        omitted them (unchecked boxes, empty radio groups).
        """
        values: dict[str, Any] = {}
        for name in (*fields, *form):
            if name in SECRET_FIELDS or name in values:
                continue
            if name in MULTI_FIELDS:
                values[name] = normalize_hobbies(form, name)
            else:
                values[name] = form.get(name) or ""
        return cls(title, values, dict(errors or {}))

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def context(self) -> dict[str, Any]:
        return {"title": self.title, "values": self.values, "errors": self.errors}

    def template(self, name: str, /, **extra: Any) -> Template:
        """Bundle this state into a ``Template`` return value."""
        return Template(name, **self.context(), **extra)
