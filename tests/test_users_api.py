"""Tests for account, bulk user-data and owner access rules."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from cloudhub.api.main import app


@pytest.fixture
def client() -> TestClient:
    """Create a test client for the API."""
    return TestClient(app)


def _as(email: str) -> dict[str, str]:
    return {"X-User-Email": email}


class TestGetUser:
    """Tests for GET /api/users/{email}."""

    def test_get_own_account(self, client: TestClient, create_account) -> None:
        create_account("kim@uni.edu", status="pending")

        response = client.get("/api/users/kim@uni.edu", headers=_as("KIM@uni.edu"))

        assert response.status_code == 200
        data = response.json()
        assert data["email"] == "kim@uni.edu"
        assert data["accountStatus"] == "pending"
        assert "passwordHash" not in data

    def test_missing_header(self, client: TestClient) -> None:
        response = client.get("/api/users/kim@uni.edu")

        assert response.status_code == 401
        assert "X-User-Email" in response.json()["error"]

    def test_other_users_account(self, client: TestClient, create_account) -> None:
        create_account("kim@uni.edu")

        response = client.get("/api/users/kim@uni.edu", headers=_as("lee@uni.edu"))

        assert response.status_code == 403

    def test_unknown_account(self, client: TestClient) -> None:
        response = client.get("/api/users/ghost@uni.edu", headers=_as("ghost@uni.edu"))

        assert response.status_code == 404
        assert response.json() == {"error": "User not found"}


class TestUpdateUser:
    """Tests for PUT /api/users/{email}."""

    def test_partial_update(self, client: TestClient, create_account) -> None:
        create_account("kim@uni.edu")

        response = client.put(
            "/api/users/kim@uni.edu",
            json={"fullName": "Kim Park", "yearSemester": "4th Year - Sem 7"},
            headers=_as("kim@uni.edu"),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Kim Park"
        assert data["yearSemester"] == "4th Year - Sem 7"
        assert data["department"] == "Computer Science"

    def test_blank_name_rejected(self, client: TestClient, create_account) -> None:
        create_account("kim@uni.edu")

        response = client.put(
            "/api/users/kim@uni.edu", json={"fullName": " "}, headers=_as("kim@uni.edu")
        )

        assert response.status_code == 400


class TestUserData:
    """Tests for GET /api/user-data/{email}."""

    def test_bulk_load(self, client: TestClient, create_account) -> None:
        create_account("kim@uni.edu")
        client.post(
            "/api/projects/kim@uni.edu",
            json=[{"name": "Drone", "githubLink": "https://github.com/kim/drone"}],
            headers=_as("kim@uni.edu"),
        )

        response = client.get("/api/user-data/kim@uni.edu", headers=_as("kim@uni.edu"))

        assert response.status_code == 200
        data = response.json()
        assert data["user"]["email"] == "kim@uni.edu"
        assert data["projects"][0]["title"] == "Drone"
        assert data["projects"][0]["githubUrl"] == "https://github.com/kim/drone"
        assert data["certificates"] == []
        assert data["notes"] == []
        assert data["resumes"] == []
        assert data["portfolio"] is None
        assert data["profile"] is None

    def test_pending_user_cannot_load_data(self, client: TestClient, create_account) -> None:
        create_account("new@uni.edu", status="pending")

        response = client.get("/api/user-data/new@uni.edu", headers=_as("new@uni.edu"))

        assert response.status_code == 403
        assert response.json() == {"error": "Account pending approval"}

    def test_rejected_user_cannot_load_data(self, client: TestClient, create_account) -> None:
        create_account("no@uni.edu", status="rejected")

        response = client.get("/api/user-data/no@uni.edu", headers=_as("no@uni.edu"))

        assert response.status_code == 403
