"""Validation result — immutable container for cleaned data or errors."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """The outcome of validating form data against a rule set.

    The result is falsy when invalid, so you can write::

        result = validate(form, rules)
        if not result:
            return state.template("form.html"), 400

    ``errors`` maps each failing field to the message of its first
    failing rule; fields that passed are absent::

        {"email": "Enter a valid email address"}

    ``data`` holds the raw values of the fields that passed.
    """

    data: dict[str, str]
    errors: dict[str, str]

    @property
    def is_valid(self) -> bool:
        """True if validation passed with no errors."""
        return not self.errors

    def __bool__(self) -> bool:
        """Falsy when invalid — enables ``if not result:``."""
        return self.is_valid
