"""Shared fixtures for perch tests."""

from pathlib import Path

import pytest

from perch.config import AppConfig
from perch.store import SubmissionStore


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "submissions.json"


@pytest.fixture
def store(store_path: Path) -> SubmissionStore:
    return SubmissionStore(store_path)


@pytest.fixture
def config(store_path: Path) -> AppConfig:
    """Config isolated from the process environment."""
    return AppConfig.from_env({}, store_path=store_path)


@pytest.fixture
def registration_form() -> dict[str, str | list[str]]:
    """A submission that satisfies the basic and the strict rules."""
    return {
        "fullname": "Ada Lovelace",
        "email": "ada@example.com",
        "password": "Secret#123",
        "confirmPassword": "Secret#123",
        "gender": "f",
        "hobbies": ["reading", "music"],
        "city": "NYC",
        "terms": "on",
    }
