"""Form validation — a shared rule table and a pure validator.

Usage::

    from perch.validation import validate
    from perch.validation.rulesets import CONTACT_RULES

    form = await request.form()
    result = validate(form, CONTACT_RULES)
    if not result:
        ...  # result.errors == {"email": "Enter a valid email"}
"""

from collections.abc import Mapping
from typing import Any

from perch.validation.result import ValidationResult
from perch.validation.rules import (
    EMAIL_PATTERN,
    Rule,
    checked,
    email,
    equals,
    matches,
    min_length,
    one_of,
    required,
)

# Ordered field name -> ordered rules
type RuleSet = Mapping[str, tuple[Rule, ...]]

__all__ = [
    "EMAIL_PATTERN",
    "Rule",
    "RuleSet",
    "ValidationResult",
    "checked",
    "client_rules",
    "email",
    "equals",
    "matches",
    "min_length",
    "normalize_hobbies",
    "one_of",
    "required",
    "validate",
]


def validate(data: Mapping[str, Any], rules: RuleSet) -> ValidationResult:
    """Validate *data* against *rules*.

    Fields are checked in rule-set order and each field's rules in their
    listed order. The first failing rule supplies the field's message and
    the remaining rules for that field are skipped, so a short password
    reports its length before any character-class requirement.

    Missing fields are validated as the empty string. The function is
    pure: same input, same result.

    Args:
        data: ``FormData`` or a plain mapping. A list value (as from
            ``parse_qs``) is validated by its first element.
        rules: Field name to ordered rules.

    Returns:
        A ``ValidationResult``; empty ``errors`` means valid.
    """
    flat = {name: _first(data.get(name)) for name in data}
    errors: dict[str, str] = {}
    cleaned: dict[str, str] = {}

    for field_name, field_rules in rules.items():
        value = flat.get(field_name, "")
        for rule in field_rules:
            if not rule.test(value, flat):
                errors[field_name] = rule.message
                break
        else:
            cleaned[field_name] = value

    return ValidationResult(data=cleaned, errors=errors)


def _first(value: Any) -> str:
    """Collapse one submitted value to a string, like ``FormData.get``."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return _first(value[0]) if value else ""
    return str(value)


def normalize_hobbies(data: Any, field_name: str = "hobbies") -> list[str]:
    """Normalize a checkbox group (``hobbies`` by default) to a list.

    Absent -> ``[]``; one value -> ``[value]``; several -> all of them in
    submission order. Accepts ``FormData`` (via ``get_list``) or a plain
    mapping holding a string or a list.
    """
    if hasattr(data, "get_list"):
        return [v for v in data.get_list(field_name) if v]
    raw = data.get(field_name)
    if not raw:
        return []
    if isinstance(raw, str):
        return [raw]
    return [str(v) for v in raw]


def client_rules(rules: RuleSet) -> dict[str, list[dict[str, Any]]]:
    """Export *rules* in the shape ``validation.js`` evaluates."""
    return {name: [rule.to_client() for rule in field_rules] for name, field_rules in rules.items()}
