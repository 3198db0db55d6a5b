"""Tests for the registration app."""

import json

import pytest

from perch.apps.registration import choice_label, create_app
from perch.store import SubmissionStore
from perch.testing import TestClient
from perch.validation.rulesets import GENDERS


@pytest.fixture
def app(config, store):
    return create_app(config, store=store)


class TestForm:
    async def test_form_renders(self, app) -> None:
        async with TestClient(app) as client:
            response = await client.get("/")
        assert response.status == 200
        text = response.text
        assert "<h1>Registration Form</h1>" in text
        for name in ("fullname", "email", "password", "confirmPassword", "gender", "hobbies", "city", "terms"):
            assert f'name="{name}"' in text
        assert "data-rules" not in text
        assert "validation.js" not in text

    async def test_empty_submission(self, app, store: SubmissionStore) -> None:
        async with TestClient(app) as client:
            response = await client.submit("/submit", {})
        assert response.status == 400
        for message in (
            "Full name must be at least 2 characters",
            "Enter a valid email address",
            "Password must be at least 6 characters",
            "Please confirm your password",
            "Please select a gender",
            "Please select a city",
            "You must agree to the terms",
        ):
            assert message in response.text
        assert len(store) == 0


class TestSubmit:
    async def test_valid_submission_is_stored(self, app, store, store_path, registration_form) -> None:
        async with TestClient(app) as client:
            response = await client.submit("/submit", registration_form)
        assert response.status == 200
        assert "Submission Successful" in response.text
        assert "Ada Lovelace" in response.text
        assert "Female" in response.text

        saved = store.list()
        assert len(saved) == 1
        assert saved[0].agreed is True
        assert saved[0].hobbies == ("reading", "music")

        raw = store_path.read_text(encoding="utf-8")
        assert "Secret#123" not in raw
        assert "password" not in json.loads(raw)[0]

    async def test_invalid_submission_echoes_values_not_passwords(self, app, store, registration_form) -> None:
        registration_form["confirmPassword"] = "Nope#9999"
        async with TestClient(app) as client:
            response = await client.submit("/submit", registration_form)
        assert response.status == 400
        text = response.text
        assert "Passwords do not match" in text
        assert 'value="Ada Lovelace"' in text
        assert "Secret#123" not in text
        assert "Nope#9999" not in text
        assert 'value="music" checked' in text
        assert 'value="sports" checked' not in text
        assert 'value="NYC" selected' in text
        assert len(store) == 0

    async def test_single_hobby(self, app, store, registration_form) -> None:
        registration_form["hobbies"] = "travel"
        async with TestClient(app) as client:
            await client.submit("/submit", registration_form)
        assert store.list()[-1].hobbies == ("travel",)

    async def test_no_hobbies(self, app, store, registration_form) -> None:
        del registration_form["hobbies"]
        async with TestClient(app) as client:
            response = await client.submit("/submit", registration_form)
        assert response.status == 200
        assert store.list()[-1].hobbies == ()

    async def test_basic_password_rules(self, app, registration_form) -> None:
        registration_form["password"] = registration_form["confirmPassword"] = "simple"
        async with TestClient(app) as client:
            response = await client.submit("/submit", registration_form)
        assert response.status == 200

    async def test_get_submit_not_allowed(self, app) -> None:
        async with TestClient(app) as client:
            response = await client.get("/submit")
        assert response.status == 405


class TestSubmissions:
    async def test_empty_listing(self, app) -> None:
        async with TestClient(app) as client:
            response = await client.get("/submissions")
        assert response.status == 200
        assert "0 submissions" in response.text
        assert "No submissions yet" in response.text

    async def test_listing_in_order(self, app, registration_form) -> None:
        async with TestClient(app) as client:
            await client.submit("/submit", registration_form)
            second = registration_form | {"fullname": "Grace Hopper", "email": "grace@example.com"}
            await client.submit("/submit", second)
            response = await client.get("/submissions")
        text = response.text
        assert "2 submissions" in text
        assert text.index("Ada Lovelace") < text.index("Grace Hopper")

    async def test_existing_records_loaded_at_startup(self, config, store_path, registration_form) -> None:
        async with TestClient(create_app(config, store=SubmissionStore(store_path))) as client:
            await client.submit("/submit", registration_form)

        restarted = create_app(config, store=SubmissionStore(store_path))
        async with TestClient(restarted) as client:
            response = await client.get("/submissions")
        assert "1 submission" in response.text
        assert "Ada Lovelace" in response.text

    async def test_corrupt_store_still_serves(self, app, store_path) -> None:
        store_path.parent.mkdir(parents=True)
        store_path.write_text("not json", encoding="utf-8")
        async with TestClient(app) as client:
            response = await client.get("/submissions")
        assert response.status == 200
        assert "0 submissions" in response.text


class TestDefaultStore:
    async def test_store_path_from_config(self, config, store_path, registration_form) -> None:
        async with TestClient(create_app(config)) as client:
            await client.submit("/submit", registration_form)
        assert store_path.is_file()


def test_choice_label() -> None:
    assert choice_label("f", GENDERS) == "Female"
    assert choice_label("zz", GENDERS) == "zz"
