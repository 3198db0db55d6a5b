"""Rule sets for the perch form apps.

Each app validates against exactly one of these tables; the live app
also ships its table to the browser, so the messages here are the only
copy.
"""

from typing import NamedTuple

from perch.validation import RuleSet
from perch.validation.rules import checked, email, equals, matches, min_length, one_of, required


class Choice(NamedTuple):
    value: str
    label: str


GENDERS: tuple[Choice, ...] = (
    Choice("m", "Male"),
    Choice("f", "Female"),
    Choice("other", "Other"),
)

CITIES: tuple[Choice, ...] = (
    Choice("NYC", "New York"),
    Choice("LA", "Los Angeles"),
    Choice("CHI", "Chicago"),
    Choice("SF", "San Francisco"),
)

HOBBIES: tuple[Choice, ...] = (
    Choice("reading", "Reading"),
    Choice("music", "Music"),
    Choice("sports", "Sports"),
    Choice("travel", "Travel"),
)

SPECIAL_CHARACTERS = r'[!@#$%^&*(),.?":{}|<>]'


CONTACT_RULES: RuleSet = {
    "name": (min_length(2, "Name must be at least 2 chars", trim=True),),
    "email": (email("Enter a valid email"),),
    "message": (min_length(5, "Message must be at least 5 chars", trim=True),),
}

_CONFIRM = (
    required("Please confirm your password"),
    equals("password", "Passwords do not match"),
)

_TAIL: RuleSet = {
    "gender": (
        required("Please select a gender"),
        one_of(*(c.value for c in GENDERS), message="Please select a gender"),
    ),
    "city": (required("Please select a city"),),
    "terms": (checked("You must agree to the terms"),),
}

REGISTRATION_RULES: RuleSet = {
    "fullname": (min_length(2, "Full name must be at least 2 characters", trim=True),),
    "email": (email("Enter a valid email address"),),
    "password": (min_length(6, "Password must be at least 6 characters"),),
    "confirmPassword": _CONFIRM,
    **_TAIL,
}

# rule_ids of the last four password rules name the #hint-<id> elements
STRICT_REGISTRATION_RULES: RuleSet = {
    **REGISTRATION_RULES,
    "password": (
        required("Password is required"),
        min_length(8, "Password must be at least 8 characters"),
        matches("[A-Z]", "Password must contain at least 1 uppercase letter", rule_id="uppercase"),
        matches("[0-9]", "Password must contain at least 1 number", rule_id="number"),
        matches(SPECIAL_CHARACTERS, "Password must contain at least 1 special character", rule_id="special"),
    ),
}

# Checklist under the strict password input; ids are ``hint-<value>``
PASSWORD_HINTS: tuple[Choice, ...] = (
    Choice("length", "At least 8 characters"),
    Choice("uppercase", "At least 1 uppercase letter"),
    Choice("number", "At least 1 number"),
    Choice("special", "At least 1 special character"),
)
