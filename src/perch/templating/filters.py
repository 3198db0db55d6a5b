"""Built-in perch template filters and globals.

Registered automatically on every perch kida Environment. They cover
the repetitive parts of form templates: echoing values back into
inputs, marking fields with their error message, and handing the
validation rule table to the browser.
"""

import html
import json
from collections.abc import Collection, Mapping
from datetime import UTC, datetime
from typing import Any

from kida.template import Markup

from perch.validation import RuleSet, client_rules


def field_error(errors: Any, field_name: str) -> str:
    """Return the error message for *field_name*, or ``""``.

    Example:
        <small id="email-feedback">{{ errors | field_error("email") }}</small>
    """
    if isinstance(errors, Mapping):
        return errors.get(field_name) or ""
    return ""


def error_class(errors: Any, field_name: str, cls: str = "invalid") -> str:
    """CSS class for a field that failed validation, else ``""``."""
    return cls if field_error(errors, field_name) else ""


def checked_if(value: Any, expected: Any = None) -> str | Markup:
    """Emit `` checked`` for radios and checkboxes.

    With *expected*, compares against the submitted value (or membership
    when the value is a collection, as for checkbox groups). Without it,
    any truthy value counts.

    Example:
        <input type="checkbox" name="hobbies" value="music"{{ values["hobbies"] | checked_if("music") }}>
    """
    if expected is None:
        hit = bool(value)
    elif isinstance(value, Collection) and not isinstance(value, str):
        hit = expected in value
    else:
        hit = value == expected
    return Markup(" checked") if hit else ""


def selected_if(value: Any, expected: Any) -> str | Markup:
    """Emit `` selected`` for the ``<option>`` matching the submitted value."""
    return Markup(" selected") if value == expected else ""


def format_timestamp(value: datetime | None) -> str:
    """Format an aware datetime as ``YYYY-MM-DD HH:MM:SS UTC``."""
    if value is None:
        return ""
    return value.astimezone(UTC).strftime("%Y-%m-%d %H:%M:%S UTC")


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """Pluralize a word based on count.

    Example:
        {{ submissions | length | pluralize("submission") }}  -> "3 submissions"
    """
    if plural is None:
        plural = singular + "s"
    word = singular if count == 1 else plural
    return f"{count} {word}"


def client_rules_json(rules: RuleSet) -> Markup:
    """Serialize a rule set for a ``data-rules`` attribute.

    Returns HTML-escaped JSON so templates can embed it directly::

        <form data-rules="{{ client_rules_json(rules) }}">
    """
    payload = json.dumps(client_rules(rules), separators=(",", ":"), ensure_ascii=True)
    return Markup(html.escape(payload, quote=True))


BUILTIN_GLOBALS: dict[str, Any] = {
    "client_rules_json": client_rules_json,
}

BUILTIN_FILTERS: dict[str, Any] = {
    "checked_if": checked_if,
    "error_class": error_class,
    "field_error": field_error,
    "format_timestamp": format_timestamp,
    "pluralize": pluralize,
    "selected_if": selected_if,
}
