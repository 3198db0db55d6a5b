"""Tests for the contact app."""

import pytest

from perch.apps.contact import create_app
from perch.testing import TestClient


@pytest.fixture
def app(config):
    return create_app(config)


class TestContactForm:
    async def test_form_renders_empty(self, app) -> None:
        async with TestClient(app) as client:
            response = await client.get("/")
        assert response.status == 200
        assert "<h1>Contact Form</h1>" in response.text
        assert 'name="name" value=""' in response.text
        assert 'action="/submit"' in response.text

    async def test_invalid_submission_rerenders(self, app) -> None:
        async with TestClient(app) as client:
            response = await client.submit("/submit", {"name": "A", "email": "bad", "message": "hi"})
        assert response.status == 400
        text = response.text
        assert "Name must be at least 2 chars" in text
        assert "Enter a valid email" in text
        assert "Message must be at least 5 chars" in text
        assert 'value="bad"' in text
        assert ">hi</textarea>" in text

    async def test_only_failing_fields_flagged(self, app) -> None:
        async with TestClient(app) as client:
            response = await client.submit(
                "/submit", {"name": "Ada", "email": "bad", "message": "Hello there"}
            )
        assert response.status == 400
        assert "Enter a valid email" in response.text
        assert "Name must be at least 2 chars" not in response.text

    async def test_submitted_values_are_escaped(self, app) -> None:
        async with TestClient(app) as client:
            response = await client.submit(
                "/submit", {"name": "<script>", "email": "x", "message": "hi"}
            )
        assert "<script>" not in response.text
        assert "&lt;script&gt;" in response.text

    async def test_valid_submission_shows_result(self, app) -> None:
        async with TestClient(app) as client:
            response = await client.submit(
                "/submit",
                {"name": "Ada", "email": "ada@example.com", "message": "Hello there"},
            )
        assert response.status == 200
        assert "Submission Received" in response.text
        assert "ada@example.com" in response.text
        assert "Hello there" in response.text
        assert "UTC" in response.text

    async def test_unknown_path_is_404(self, app) -> None:
        async with TestClient(app) as client:
            response = await client.get("/submissions")
        assert response.status == 404
        assert response.text == "Not Found"

    async def test_nothing_persisted(self, app, store_path) -> None:
        async with TestClient(app) as client:
            await client.submit(
                "/submit",
                {"name": "Ada", "email": "ada@example.com", "message": "Hello there"},
            )
        assert not store_path.exists()
