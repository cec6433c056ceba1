"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from contact_store_api.app.core.config import Settings
from contact_store_api.app.main import create_app


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a fresh SQLite file for each test."""
    return Settings(database_url=str(tmp_path / "contacts.db"))


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """Create a test FastAPI client; entering it runs the startup hook."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def create_contact(client):
    """Factory that creates a contact through the API and returns its body."""

    def _create(name="John Doe", email="john.doe@example.com", phone="+1234567890"):
        response = client.post(
            "/api/contacts",
            json={"name": name, "email": email, "phone": phone},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create
