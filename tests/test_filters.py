"""Tests for perch.templating.filters and the kida environment."""

import html
import json
from datetime import UTC, datetime, timedelta, timezone
from pathlib import Path

from kida.template import Markup

from perch.config import AppConfig
from perch.forms import FormState
from perch.templating import create_environment, render_form
from perch.templating.filters import (
    checked_if,
    client_rules_json,
    error_class,
    field_error,
    format_timestamp,
    pluralize,
    selected_if,
)
from perch.validation import min_length, required


class TestFieldFilters:
    def test_field_error(self) -> None:
        errors = {"email": "Enter a valid email"}
        assert field_error(errors, "email") == "Enter a valid email"
        assert field_error(errors, "name") == ""
        assert field_error(None, "name") == ""

    def test_error_class(self) -> None:
        assert error_class({"email": "x"}, "email") == "invalid"
        assert error_class({"email": "x"}, "email", "is-bad") == "is-bad"
        assert error_class({}, "email") == ""

    def test_checked_if_scalar(self) -> None:
        assert checked_if("m", "m") == " checked"
        assert checked_if("f", "m") == ""

    def test_checked_if_collection(self) -> None:
        assert checked_if(["music", "travel"], "music") == " checked"
        assert checked_if(["music"], "sports") == ""

    def test_checked_if_truthy(self) -> None:
        assert checked_if("on") == " checked"
        assert checked_if("") == ""

    def test_checked_if_returns_markup(self) -> None:
        assert isinstance(checked_if("on"), Markup)

    def test_selected_if(self) -> None:
        assert selected_if("NYC", "NYC") == " selected"
        assert selected_if("", "NYC") == ""


class TestDisplayFilters:
    def test_format_timestamp(self) -> None:
        stamp = datetime(2025, 1, 2, 5, 6, 7, tzinfo=timezone(timedelta(hours=-5)))
        assert format_timestamp(stamp) == "2025-01-02 10:06:07 UTC"
        assert format_timestamp(None) == ""

    def test_format_timestamp_utc(self) -> None:
        assert format_timestamp(datetime(2025, 1, 2, tzinfo=UTC)) == "2025-01-02 00:00:00 UTC"

    def test_pluralize(self) -> None:
        assert pluralize(0, "submission") == "0 submissions"
        assert pluralize(1, "submission") == "1 submission"
        assert pluralize(2, "entry", "entries") == "2 entries"


class TestClientRulesJson:
    def test_escaped_json(self) -> None:
        out = client_rules_json({"name": (required('Say "hi"'),)})
        assert isinstance(out, Markup)
        assert '"' not in str(out)
        decoded = json.loads(html.unescape(str(out)))
        assert decoded["name"][0]["message"] == 'Say "hi"'


class TestEnvironment:
    def test_render_form_echoes_and_annotates(self, tmp_path: Path) -> None:
        (tmp_path / "form.html").write_text(
            '<input name="name" value="{{ values["name"] }}" class="{{ errors | error_class("name") }}">'
            '<small>{{ errors | field_error("name") }}</small>',
            encoding="utf-8",
        )
        env = create_environment(AppConfig(template_dir=tmp_path), {}, {})
        result = min_length(2, "Too short")("A")
        state = FormState("T", {"name": '<A>'}, {"name": result})
        out = render_form(env, "form.html", state)
        assert 'value="&lt;A&gt;"' in out
        assert 'class="invalid"' in out
        assert "<small>Too short</small>" in out

    def test_app_filters_override_builtins(self, tmp_path: Path) -> None:
        (tmp_path / "p.html").write_text("{{ 3 | pluralize('x') }}", encoding="utf-8")
        env = create_environment(
            AppConfig(template_dir=tmp_path),
            {"pluralize": lambda n, word: f"{word}*{n}"},
            {},
        )
        assert env.get_template("p.html").render({}) == "x*3"
