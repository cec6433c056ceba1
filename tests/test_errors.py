"""Tests for mapping datastore and unexpected failures to responses."""

import sqlite3

from fastapi.testclient import TestClient

from contact_store_api.app.core.errors import DatastoreError, DuplicateEmailError, NotFoundError
from contact_store_api.app.services.contact_service import ContactService


def drop_contacts_table(app):
    conn = sqlite3.connect(app.state.db.path)
    try:
        conn.execute("DROP TABLE contacts")
        conn.commit()
    finally:
        conn.close()


def test_database_error_returns_500_with_details(app, client):
    drop_contacts_table(app)
    response = client.get("/api/contacts")
    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Database error"
    assert "no such table" in body["details"]


def test_database_error_on_write(app, client):
    drop_contacts_table(app)
    response = client.post(
        "/api/contacts",
        json={"name": "John Doe", "email": "john@example.com", "phone": "+1234567890"},
    )
    assert response.status_code == 500
    assert response.json()["error"] == "Database error"


def test_schema_creation_is_idempotent(app, client, create_contact):
    contact = create_contact()
    app.state.db.init_schema()
    assert client.get(f"/api/contacts/{contact['id']}").status_code == 200


def test_unhandled_exception_returns_generic_500(app, monkeypatch):
    async def explode(self, contact_id):
        raise RuntimeError("boom")

    monkeypatch.setattr(ContactService, "get_contact", explode)
    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/api/contacts/1")
    assert response.status_code == 500
    assert response.json() == {"error": "Something went wrong!", "details": "boom"}


def test_malformed_json_body_is_a_validation_error(client):
    response = client.post(
        "/api/contacts",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Validation failed"


def test_error_payloads():
    assert NotFoundError().to_payload() == {"error": "Contact not found"}
    assert DuplicateEmailError().to_payload() == {
        "error": "Validation failed",
        "errors": {"email": "Email already exists"},
    }
    assert DatastoreError("disk I/O error").to_payload() == {
        "error": "Database error",
        "details": "disk I/O error",
    }
