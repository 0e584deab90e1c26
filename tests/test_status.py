"""Unit tests for the health endpoints."""

import os
from unittest.mock import patch

from fastapi.testclient import TestClient

from door_control.config.logger import app_logger
from door_control.config.settings import DEFAULT_AUTH_SECRET, settings
from door_control.main import app


class TestStatusEndpoint:
    """Test cases for the /status endpoint."""

    def test_status_endpoint_basic(self, client):
        response = client.get("/status")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        for key in ("build", "sha", "env"):
            assert key in data

    def test_status_endpoint_with_environment_variables(self, client):
        test_env_vars = {
            "BUILD_NUMBER": "123",
            "GIT_SHA": "abc123def456",
            "ENVIRONMENT": "production"
        }

        with patch.dict(os.environ, test_env_vars):
            data = client.get("/status").json()

        assert data["build"] == "123"
        assert data["sha"] == "abc123def456"
        assert data["env"] == "production"

    def test_status_endpoint_priority_order(self, client):
        """GIT_SHA takes priority over GITHUB_SHA, ENVIRONMENT over ENV."""
        test_env_vars = {
            "BUILD_NUMBER": "789",
            "GIT_SHA": "priority_sha",
            "GITHUB_SHA": "fallback_sha",
            "ENVIRONMENT": "priority_env",
            "ENV": "fallback_env",
        }

        with patch.dict(os.environ, test_env_vars):
            data = client.get("/status").json()

        assert data["sha"] == "priority_sha"
        assert data["env"] == "priority_env"


class TestHealthEndpoints:

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "operational"

    def test_database_health(self, client):
        response = client.get("/health/db")

        assert response.status_code == 200
        assert response.json()["db"] == "available"


class TestStartupWarnings:

    def _startup_warnings(self, tmp_path, monkeypatch, secret):
        monkeypatch.setattr(settings, "DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
        monkeypatch.setattr(settings, "LOCAL_AUTH_SECRET", secret)
        messages = []
        sink_id = app_logger.add(messages.append, level="WARNING")
        try:
            with TestClient(app):
                pass
        finally:
            app_logger.remove(sink_id)
        return messages

    def test_default_auth_secret_warns(self, tmp_path, monkeypatch):
        messages = self._startup_warnings(tmp_path, monkeypatch, DEFAULT_AUTH_SECRET)

        assert any("LOCAL_AUTH_SECRET" in m for m in messages)

    def test_configured_auth_secret_is_silent(self, tmp_path, monkeypatch):
        messages = self._startup_warnings(tmp_path, monkeypatch, "a-real-secret")

        assert not any("LOCAL_AUTH_SECRET" in m for m in messages)
