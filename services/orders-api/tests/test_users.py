"""
Tests for the users endpoints.
"""

import pytest
from sqlalchemy import text


class TestCreateUser:
    """POST /api/users"""

    def test_create_user_returns_id(self, client):
        response = client.post("/api/users", json={"name": "Ana", "email": "ana@x.com"})
        assert response.status_code == 201
        data = response.json()
        assert data == {"message": "User added successfully", "id": 1}

    def test_created_user_is_listed(self, client):
        response = client.post("/api/users", json={"name": "Ana", "email": "ana@x.com"})
        user_id = response.json()["id"]

        users = client.get("/api/users").json()["users"]
        assert len(users) == 1
        assert users[0]["id"] == user_id
        assert users[0]["name"] == "Ana"
        assert users[0]["email"] == "ana@x.com"
        assert users[0]["created_at"]

    def test_ids_are_distinct_positive_integers(self, client):
        first = client.post("/api/users", json={"name": "Ana", "email": "ana@x.com"}).json()["id"]
        second = client.post("/api/users", json={"name": "Ion", "email": "ion@x.com"}).json()["id"]
        assert first > 0
        assert second > 0
        assert first != second

    def test_duplicate_email_conflicts(self, client):
        payload = {"name": "Ana", "email": "ana@x.com"}
        assert client.post("/api/users", json=payload).status_code == 201

        response = client.post("/api/users", json=payload)
        assert response.status_code == 409
        assert response.json() == {"error": "Email already registered."}
        assert len(client.get("/api/users").json()["users"]) == 1

    def test_duplicate_email_with_other_name_conflicts(self, client):
        client.post("/api/users", json={"name": "Ana", "email": "ana@x.com"})
        response = client.post("/api/users", json={"name": "Someone Else", "email": "ana@x.com"})
        assert response.status_code == 409

    @pytest.mark.parametrize("payload", [
        {"name": "", "email": "ana@x.com"},
        {"name": "Ana", "email": ""},
        {"name": "Ana"},
        {"email": "ana@x.com"},
        {"name": None, "email": "ana@x.com"},
        {},
    ])
    def test_missing_fields_rejected(self, client, payload):
        response = client.post("/api/users", json=payload)
        assert response.status_code == 400
        assert response.json() == {"error": "Name and email are required."}
        assert client.get("/api/users").json()["users"] == []

    def test_missing_body_rejected(self, client):
        response = client.post("/api/users")
        assert response.status_code == 400
        assert response.json() == {"error": "Name and email are required."}

    def test_wrongly_typed_field_rejected(self, client):
        response = client.post("/api/users", json={"name": 123, "email": "ana@x.com"})
        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid request body")
        assert client.get("/api/users").json()["users"] == []

    def test_datastore_failure_is_server_error(self, app, client):
        with app.state.database.engine.begin() as conn:
            conn.execute(text("DROP TABLE users"))

        response = client.post("/api/users", json={"name": "Ana", "email": "ana@x.com"})
        assert response.status_code == 500
        assert "no such table" in response.json()["error"]


class TestListUsers:
    """GET /api/users"""

    def test_empty(self, client):
        response = client.get("/api/users")
        assert response.status_code == 200
        assert response.json() == {"users": []}

    def test_lists_every_user(self, client):
        emails = {"a@x.com", "b@x.com", "c@x.com"}
        for email in emails:
            client.post("/api/users", json={"name": "N", "email": email})

        users = client.get("/api/users").json()["users"]
        assert {u["email"] for u in users} == emails

    def test_datastore_failure_is_server_error(self, app, client):
        with app.state.database.engine.begin() as conn:
            conn.execute(text("DROP TABLE users"))

        response = client.get("/api/users")
        assert response.status_code == 500
        assert "no such table" in response.json()["error"]
