"""Tests for perch.validation — rules, validate(), and the client export."""

from perch.http.forms import FormData
from perch.validation import (
    EMAIL_PATTERN,
    Rule,
    ValidationResult,
    checked,
    client_rules,
    email,
    equals,
    matches,
    min_length,
    normalize_hobbies,
    one_of,
    required,
    validate,
)


class TestRules:
    def test_required_rejects_blank(self) -> None:
        rule = required("Needed")
        assert rule("") == "Needed"
        assert rule("   ") == "Needed"
        assert rule("x") is None

    def test_checked_accepts_any_value(self) -> None:
        rule = checked("Tick it")
        assert rule("") == "Tick it"
        assert rule("on") is None

    def test_min_length_counts_raw_value_by_default(self) -> None:
        rule = min_length(6)
        assert rule("  abc ") is None
        assert rule("abcde") == "Must be at least 6 characters"

    def test_min_length_trim(self) -> None:
        rule = min_length(2, "Too short", trim=True)
        assert rule(" a ") == "Too short"
        assert rule(" ab ") is None

    def test_matches_uses_search(self) -> None:
        rule = matches("[A-Z]", "Need uppercase")
        assert rule("abcD") is None
        assert rule("abcd") == "Need uppercase"

    def test_email(self) -> None:
        rule = email("Bad email")
        assert rule("a@b.co") is None
        for bad in ("", "bad", "a@b", "a b@c.d", "@b.c", "a@@b.c"):
            assert rule(bad) == "Bad email", bad

    def test_email_rejects_surrounding_and_embedded_whitespace(self) -> None:
        rule = email("Bad email")
        for bad in ("a@b.co\n", "a@b.co ", " a@b.co", "a@b .co", "a@b.c o", "a@b.co\nx@y.zz"):
            assert rule(bad) == "Bad email", repr(bad)

    def test_trailing_dollar_is_end_of_value(self) -> None:
        rule = matches(r"^[0-9]+$", "Digits only")
        assert rule("123") is None
        assert rule("123\n") == "Digits only"
        assert rule.to_client()["pattern"] == r"^[0-9]+$"

    def test_escaped_dollar_is_literal(self) -> None:
        rule = matches(r"costs \$", "Need price")
        assert rule("costs $") is None
        assert rule("costs 5") == "Need price"

    def test_one_of(self) -> None:
        rule = one_of("m", "f", message="Pick one")
        assert rule("m") is None
        assert rule("x") == "Pick one"

    def test_equals_reads_other_field(self) -> None:
        rule = equals("password", "Mismatch")
        assert rule.test("abc", {"password": "abc"})
        assert not rule.test("abc", {"password": "abd"})
        assert not rule.test("abc")

    def test_rules_compare_by_identity_fields(self) -> None:
        assert required("A") == required("A")
        assert required("A") != required("B")

    def test_to_client_carries_params(self) -> None:
        assert min_length(8, "Short").to_client() == {
            "id": "length",
            "kind": "min_length",
            "message": "Short",
            "min": 8,
            "trim": False,
        }
        assert equals("password", "No").to_client()["field"] == "password"
        assert email("E").to_client()["pattern"] == EMAIL_PATTERN


class TestValidate:
    RULES = {
        "name": (min_length(2, "Name short", trim=True),),
        "password": (
            required("Password required"),
            min_length(8, "Password short"),
            matches("[0-9]", "Password needs a number", rule_id="number"),
        ),
        "confirm": (required("Confirm it"), equals("password", "Mismatch")),
    }

    def test_valid_input_has_no_errors(self) -> None:
        result = validate({"name": "Ada", "password": "abcdefg1", "confirm": "abcdefg1"}, self.RULES)
        assert isinstance(result, ValidationResult)
        assert result.is_valid
        assert result
        assert result.errors == {}
        assert result.data["name"] == "Ada"

    def test_first_failing_rule_wins(self) -> None:
        result = validate({"name": "Ada", "password": "short", "confirm": "short"}, self.RULES)
        assert result.errors == {"password": "Password short"}

    def test_later_rule_reported_when_earlier_pass(self) -> None:
        result = validate({"name": "Ada", "password": "abcdefgh", "confirm": "abcdefgh"}, self.RULES)
        assert result.errors == {"password": "Password needs a number"}

    def test_missing_fields_are_empty_strings(self) -> None:
        result = validate({}, self.RULES)
        assert not result
        assert result.errors == {
            "name": "Name short",
            "password": "Password required",
            "confirm": "Confirm it",
        }

    def test_unrelated_fields_not_flagged(self) -> None:
        result = validate({"name": "Ada", "password": "abcdefg1"}, self.RULES)
        assert set(result.errors) == {"confirm"}

    def test_cross_field_mismatch(self) -> None:
        result = validate({"name": "Ada", "password": "abcdefg1", "confirm": "abcdefg2"}, self.RULES)
        assert result.errors == {"confirm": "Mismatch"}

    def test_idempotent(self) -> None:
        data = {"name": "A", "password": "x"}
        assert validate(data, self.RULES) == validate(data, self.RULES)

    def test_accepts_form_data(self) -> None:
        form = FormData({"name": ["Ada"], "password": ["abcdefg1"], "confirm": ["abcdefg1"]})
        assert validate(form, self.RULES).is_valid

    def test_list_values_use_first_element(self) -> None:
        data = {"name": ["Ada", "ignored"], "password": ["abcdefg1"], "confirm": ("abcdefg1",)}
        result = validate(data, self.RULES)
        assert result.is_valid
        assert result.data["name"] == "Ada"

    def test_empty_list_is_missing(self) -> None:
        result = validate({"name": []}, self.RULES)
        assert "name" in result.errors

    def test_custom_rule(self) -> None:
        no_admin = Rule("reserved", "custom", "Reserved name", lambda value, _: value != "admin")
        result = validate({"user": "admin"}, {"user": (no_admin,)})
        assert result.errors == {"user": "Reserved name"}


class TestNormalizeHobbies:
    def test_absent(self) -> None:
        assert normalize_hobbies(FormData({})) == []
        assert normalize_hobbies({}) == []

    def test_single(self) -> None:
        assert normalize_hobbies(FormData({"hobbies": ["music"]})) == ["music"]
        assert normalize_hobbies({"hobbies": "music"}) == ["music"]

    def test_many_keep_order(self) -> None:
        form = FormData({"hobbies": ["travel", "reading"]})
        assert normalize_hobbies(form) == ["travel", "reading"]
        assert normalize_hobbies({"hobbies": ["travel", "reading"]}) == ["travel", "reading"]


class TestClientRules:
    def test_shape(self) -> None:
        exported = client_rules({"email": (required("Req"), email("Bad"))})
        assert list(exported) == ["email"]
        assert [r["kind"] for r in exported["email"]] == ["required", "pattern"]
        assert exported["email"][1]["message"] == "Bad"
