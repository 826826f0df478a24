"""Tests for the full-overwrite collection endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from cloudhub.api.main import app

OWNER = "ana@uni.edu"
HEADERS = {"X-User-Email": OWNER}


@pytest.fixture
def client(create_account) -> TestClient:
    """Create a test client with an approved owner account."""
    create_account(OWNER)
    return TestClient(app)


@pytest.mark.parametrize("kind", ["projects", "certificates", "notes", "resumes"])
def test_save_and_list_each_collection(client: TestClient, kind: str) -> None:
    saved = client.post(
        f"/api/{kind}/{OWNER}", json=[{"title": "First"}, {"title": "Second"}], headers=HEADERS
    )

    assert saved.status_code == 200
    assert saved.json() == {"success": True, "count": 2}

    listed = client.get(f"/api/{kind}/{OWNER}", headers=HEADERS)
    assert listed.status_code == 200
    assert [item["title"] for item in listed.json()] == ["First", "Second"]


@pytest.mark.parametrize("kind", ["projects", "certificates", "notes", "resumes"])
def test_saving_empty_list_clears(client: TestClient, kind: str) -> None:
    client.post(f"/api/{kind}/{OWNER}", json=[{"title": "Old"}], headers=HEADERS)

    cleared = client.post(f"/api/{kind}/{OWNER}", json=[], headers=HEADERS)

    assert cleared.json()["count"] == 0
    assert client.get(f"/api/{kind}/{OWNER}", headers=HEADERS).json() == []


def test_project_fields_round_trip_in_camel_case(client: TestClient) -> None:
    client.post(
        f"/api/projects/{OWNER}",
        json=[
            {
                "title": "Parser",
                "description": "LL(1) parser",
                "technologies": ["Python"],
                "liveUrl": "https://parser.dev",
                "startDate": "2024-01-10",
                "branch": "draft",
                "progress": 60,
                "tags": ["compilers"],
            }
        ],
        headers=HEADERS,
    )

    project = client.get(f"/api/projects/{OWNER}", headers=HEADERS).json()[0]

    assert project["liveUrl"] == "https://parser.dev"
    assert project["startDate"] == "2024-01-10"
    assert project["branch"] == "draft"
    assert project["progress"] == 60
    assert project["technologies"] == ["Python"]
    assert "createdAt" in project


def test_certificate_and_note_aliases(client: TestClient) -> None:
    client.post(
        f"/api/certificates/{OWNER}",
        json=[
            {
                "name": "Cloud Practitioner",
                "organization": "AWS",
                "date": "2024-05-01",
                "certificateLink": "https://aws.example/cert",
                "uploadType": "link",
            }
        ],
        headers=HEADERS,
    )
    client.post(
        f"/api/notes/{OWNER}",
        json=[{"name": "DBMS", "category": "Databases", "url": "https://files/dbms.pdf"}],
        headers=HEADERS,
    )

    certificate = client.get(f"/api/certificates/{OWNER}", headers=HEADERS).json()[0]
    note = client.get(f"/api/notes/{OWNER}", headers=HEADERS).json()[0]

    assert certificate["title"] == "Cloud Practitioner"
    assert certificate["issuer"] == "AWS"
    assert certificate["issueDate"] == "2024-05-01"
    assert certificate["credentialUrl"] == "https://aws.example/cert"
    assert certificate["uploadType"] == "link"
    assert note["title"] == "DBMS"
    assert note["subject"] == "Databases"
    assert note["fileUrl"] == "https://files/dbms.pdf"
    assert note["fileType"] == "pdf"


def test_invalid_body_is_rejected(client: TestClient) -> None:
    not_a_list = client.post(f"/api/projects/{OWNER}", json={"title": "x"}, headers=HEADERS)
    bad_progress = client.post(
        f"/api/projects/{OWNER}", json=[{"progress": 500}], headers=HEADERS
    )

    assert not_a_list.status_code == 400
    assert bad_progress.status_code == 400
    assert "error" in bad_progress.json()


def test_other_user_cannot_save(client: TestClient, create_account) -> None:
    create_account("eve@uni.edu")

    response = client.post(
        f"/api/projects/{OWNER}", json=[], headers={"X-User-Email": "eve@uni.edu"}
    )

    assert response.status_code == 403


def test_pending_user_cannot_save(client: TestClient, create_account) -> None:
    create_account("wait@uni.edu", status="pending")

    response = client.post(
        "/api/notes/wait@uni.edu", json=[], headers={"X-User-Email": "wait@uni.edu"}
    )

    assert response.status_code == 403


@pytest.mark.parametrize("kind", ["projects", "certificates", "notes", "resumes"])
def test_resaving_loaded_list_keeps_created_at(client: TestClient, kind: str) -> None:
    client.post(f"/api/{kind}/{OWNER}", json=[{"title": "Kept"}], headers=HEADERS)
    loaded = client.get(f"/api/{kind}/{OWNER}", headers=HEADERS).json()

    client.post(f"/api/{kind}/{OWNER}", json=loaded + [{"title": "New"}], headers=HEADERS)
    reloaded = client.get(f"/api/{kind}/{OWNER}", headers=HEADERS).json()

    assert reloaded[0]["createdAt"] == loaded[0]["createdAt"]
