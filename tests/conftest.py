"""Shared test fixtures."""

import pytest

from sendgrid_rest.client import SendGridRestClient
from sendgrid_rest.config import load_settings

_ENV_VARS = (
    "SENDGRID_API_KEY",
    "SENDGRID_REST_API_HOST",
    "SENDGRID_LOG_LEVEL",
    "SENDGRID_LOG_FILE_PATH",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate tests from SENDGRID_* variables and cached settings."""
    for name in _ENV_VARS:
        # setenv first so the variable is removed again on undo even if a
        # test loads it from a .env file.
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()


@pytest.fixture
def client():
    """Client using the default httpx transport against the production host."""
    return SendGridRestClient("test-token")


@pytest.fixture
def template_payload():
    """A template as returned by GET /templates/{id}."""
    return {
        "id": "d-abc123",
        "name": "My Template",
        "generation": "dynamic",
        "updated_at": "2024-05-01 10:00:00",
        "versions": [
            {
                "id": "v-1",
                "template_id": "d-abc123",
                "active": 0,
                "name": "First",
                "subject": "Hello {{name}}",
                "html_content": "<p>Hello {{name}}</p>",
                "plain_content": "Hello {{name}}",
                "editor": "code",
            },
            {
                "id": "v-2",
                "template_id": "d-abc123",
                "active": 1,
                "name": "Second",
                "subject": "Hi {{name}}",
                "html_content": "<p>Hi {{name}}</p>",
                "plain_content": "Hi {{name}}",
                "editor": "code",
            },
        ],
    }
