"""Configure environment and fixtures for the contact relay tests."""

import os

import pytest

# app.main refuses to import without these, so they are set before collection
os.environ.setdefault("EMAIL_USER", "sender@example.com")
os.environ.setdefault("EMAIL_APP_PASSWORD", "app-password")
os.environ.setdefault("RECEIVER_EMAIL", "owner@example.com")

from fastapi.testclient import TestClient  # noqa: E402

from app.api.endpoints.contact import get_mail_dispatcher  # noqa: E402
from app.core.config import Settings, get_settings  # noqa: E402
from app.main import app  # noqa: E402
from app.models.contact import DispatchOutcome  # noqa: E402

ALLOWED_ORIGIN = "http://localhost:3000"


class FakeDispatcher:
    """Records messages instead of sending them; fails the kinds it is told to."""

    def __init__(self, fail_kinds=()):
        self.fail_kinds = set(fail_kinds)
        self.sent = []

    async def send(self, message):
        self.sent.append(message)
        if message.kind in self.fail_kinds:
            return DispatchOutcome(message=message, success=False, error="550 mailbox unavailable")
        return DispatchOutcome(message=message, success=True)


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop the cached settings around every test so env changes take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        email_user="sender@example.com",
        email_app_password="app-password",
        receiver_email="owner@example.com",
    )


@pytest.fixture
def dispatcher():
    return FakeDispatcher()


@pytest.fixture
def client(dispatcher):
    app.dependency_overrides[get_mail_dispatcher] = lambda: dispatcher
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def valid_payload():
    return {"name": "Jane Doe", "email": "jane@example.com", "message": "Hello <there>"}
