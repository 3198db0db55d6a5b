"""Validation rules — one table for the server and the browser.

A ``Rule`` pairs a server-side predicate with a client-evaluable
description of the same check::

    Rule(rule_id="length", kind="min_length", message="...",
         predicate=..., params={"min": 2, "trim": True})

The server calls the predicate; ``client_rules()`` ships ``kind`` and
``params`` to ``validation.js``, which evaluates the identical rule.
Only kinds the browser script understands are produced here, so the two
enforcement points cannot drift apart.

Rules are also plain validator callables ``(value) -> message | None``.
"""

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

# (value, whole form) -> passes?
type Predicate = Callable[[str, Mapping[str, Any]], bool]

_NO_DATA: Mapping[str, Any] = {}


@dataclass(frozen=True, slots=True)
class Rule:
    """A single named check with its failure message."""

    rule_id: str
    kind: str
    message: str
    predicate: Predicate = field(compare=False)
    params: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def test(self, value: str, data: Mapping[str, Any] | None = None) -> bool:
        """True when *value* satisfies the rule."""
        return self.predicate(value, _NO_DATA if data is None else data)

    def __call__(self, value: str) -> str | None:
        return None if self.test(value) else self.message

    def to_client(self) -> dict[str, Any]:
        """JSON-ready description consumed by ``validation.js``."""
        return {"id": self.rule_id, "kind": self.kind, "message": self.message, **self.params}


# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------


def required(message: str = "This field is required", *, rule_id: str = "required") -> Rule:
    """Field must be present and not blank."""
    return Rule(rule_id, "required", message, lambda value, _: bool(value.strip()))


def checked(message: str = "This box must be checked", *, rule_id: str = "checked") -> Rule:
    """Checkbox must be ticked (any non-empty submitted value)."""
    return Rule(rule_id, "checked", message, lambda value, _: bool(value))


# ---------------------------------------------------------------------------
# Length
# ---------------------------------------------------------------------------


def min_length(n: int, message: str | None = None, *, trim: bool = False, rule_id: str = "length") -> Rule:
    """String must be at least *n* characters (after stripping when *trim*)."""

    def predicate(value: str, _: Mapping[str, Any]) -> bool:
        return len(value.strip() if trim else value) >= n

    return Rule(
        rule_id,
        "min_length",
        message or f"Must be at least {n} characters",
        predicate,
        {"min": n, "trim": trim},
    )


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------


def matches(pattern: str, message: str | None = None, *, rule_id: str = "pattern") -> Rule:
    """Value must contain a match for *pattern* (search semantics, as in JS ``test``).

    Patterns must stay within the syntax shared by Python ``re`` and
    JavaScript ``RegExp``; anchor them explicitly when needed. A trailing
    ``$`` matches only at the very end of the value, as in JavaScript
    (compiled as ``\\Z``, so a final newline does not slip through).
    """
    compiled = re.compile(_server_pattern(pattern))
    return Rule(
        rule_id,
        "pattern",
        message or f"Must match pattern: {pattern}",
        lambda value, _: compiled.search(value) is not None,
        {"pattern": pattern},
    )


def _server_pattern(pattern: str) -> str:
    """Swap an unescaped trailing ``$`` for ``\\Z``."""
    stem = pattern[:-1]
    if pattern.endswith("$") and (len(stem) - len(stem.rstrip("\\"))) % 2 == 0:
        return stem + r"\Z"
    return pattern


# Structural check only: one "@", no whitespace, a dot in the domain
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


def email(message: str = "Must be a valid email address", *, rule_id: str = "email") -> Rule:
    """Value must look like ``local@domain.tld``."""
    return matches(EMAIL_PATTERN, message, rule_id=rule_id)


# ---------------------------------------------------------------------------
# Choice and cross-field
# ---------------------------------------------------------------------------


def one_of(*choices: str, message: str | None = None, rule_id: str = "choice") -> Rule:
    """Value must be one of the given choices."""
    allowed = frozenset(choices)
    return Rule(
        rule_id,
        "one_of",
        message or f"Must be one of: {', '.join(sorted(allowed))}",
        lambda value, _: value in allowed,
        {"choices": list(choices)},
    )


def equals(other: str, message: str | None = None, *, rule_id: str = "match") -> Rule:
    """Value must equal the submitted value of field *other*."""

    def predicate(value: str, data: Mapping[str, Any]) -> bool:
        return value == (data.get(other) or "")

    return Rule(rule_id, "equals", message or f"Must match {other}", predicate, {"field": other})
