"""Shared fixtures: an app bound to a throwaway SQLite database."""

import pytest
from fastapi.testclient import TestClient

from door_control.config.settings import settings
from door_control.main import app

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "Password123!"


@pytest.fixture
def client(tmp_path, monkeypatch):
    """TestClient running the full lifespan against a fresh database."""
    monkeypatch.setattr(settings, "DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    monkeypatch.setattr(settings, "SEED_ADMIN_USERNAME", ADMIN_USERNAME)
    monkeypatch.setattr(settings, "SEED_ADMIN_PASSWORD", ADMIN_PASSWORD)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client):
    response = client.post(
        "/auth/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD}
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def create_door(client, auth_headers):
    def _create(name="Front", client_id="door-1", **extra):
        response = client.post(
            "/doors", json={"name": name, "clientId": client_id, **extra}, headers=auth_headers
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def create_tag(client, auth_headers):
    def _create(tag_id="T1", **extra):
        response = client.post("/tags", json={"tagId": tag_id, **extra}, headers=auth_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def assign(client, auth_headers):
    def _assign(tag, door):
        response = client.post(f"/tags/{tag['id']}/doors/{door['id']}", headers=auth_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _assign


@pytest.fixture
def validate(client):
    def _validate(tag_id, client_id, **extra):
        response = client.post("/tags/validate", json={"tagId": tag_id, "clientId": client_id, **extra})
        assert response.status_code == 200, response.text
        return response.json()

    return _validate
