"""Pytest configuration and fixtures for firestore_codec.

Settings are read from the environment, so every test starts from a clean
FIRESTORE_CODEC_* environment and an empty get_settings() cache. All
imports use firestore_codec.*.
"""

import os

import pytest

from firestore_codec.application.services.serializer import Serializer
from firestore_codec.core.config import Settings, get_settings
from firestore_codec.domain.value_objects import DatabaseId, FieldValue, Timestamp

TEST_PROJECT_ID = "test-project"
TEST_DATABASE_ID = "(default)"


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch):
    """Drop FIRESTORE_CODEC_* env vars and clear the settings cache around each test."""
    for name in list(os.environ):
        if name.upper().startswith("FIRESTORE_CODEC_"):
            monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Default settings, ignoring any .env file in the working directory."""
    return Settings(_env_file=None)


@pytest.fixture
def database_id() -> DatabaseId:
    return DatabaseId(TEST_PROJECT_ID, TEST_DATABASE_ID)


@pytest.fixture
def serializer(database_id: DatabaseId, settings: Settings) -> Serializer:
    """Serializer for the test database with default settings."""
    return Serializer(database_id, settings)


@pytest.fixture
def sample_values() -> list[FieldValue]:
    """One value per wire-supported type, including nested objects and edge integers."""
    return [
        FieldValue.null(),
        FieldValue.boolean(True),
        FieldValue.boolean(False),
        FieldValue.integer(0),
        FieldValue.integer(42),
        FieldValue.integer(-1),
        FieldValue.integer(2**63 - 1),
        FieldValue.integer(-(2**63)),
        FieldValue.string(""),
        FieldValue.string("hi"),
        FieldValue.string("héllo wörld ✓"),
        FieldValue.string("x" * 300),
        FieldValue.timestamp(Timestamp(0, 0)),
        FieldValue.timestamp(Timestamp(1, 2)),
        FieldValue.timestamp(Timestamp(-62135596800, 0)),
        FieldValue.timestamp(Timestamp(253402300799, 999_999_999)),
        FieldValue.object(),
        FieldValue.object({"a": FieldValue.boolean(True)}),
        FieldValue.from_python(
            {
                "name": "Ada",
                "age": 36,
                "active": None,
                "address": {"city": "London", "zip": {"code": "N1", "n": -7}},
            }
        ),
    ]
