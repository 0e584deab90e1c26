"""Tests for operator authentication."""

from conftest import ADMIN_PASSWORD, ADMIN_USERNAME


class TestLogin:

    def test_login_returns_token_and_user(self, client):
        response = client.post(
            "/auth/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["access_token"]
        assert data["token_type"] == "bearer"
        assert data["user"]["username"] == ADMIN_USERNAME
        assert data["user"]["role"] == "admin"
        assert "hashed_password" not in data["user"]

    def test_wrong_password_is_rejected(self, client):
        response = client.post("/auth/login", json={"username": ADMIN_USERNAME, "password": "nope"})

        assert response.status_code == 401
        assert response.json()["error"] == "Unauthorized"

    def test_unknown_user_is_rejected(self, client):
        response = client.post("/auth/login", json={"username": "ghost", "password": "whatever"})

        assert response.status_code == 401


class TestBearerToken:

    def test_profile_requires_token(self, client):
        response = client.get("/auth/profile")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_invalid_token_is_rejected(self, client):
        response = client.get("/auth/profile", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401

    def test_profile_returns_current_user(self, client, auth_headers):
        response = client.get("/auth/profile", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["username"] == ADMIN_USERNAME

    def test_operator_endpoints_require_token(self, client):
        for path in ("/doors", "/tags", "/access-history", "/access-history/stats", "/alarm/tamper"):
            assert client.get(path).status_code == 401, path


class TestRegister:

    def test_register_creates_usable_account(self, client, auth_headers):
        response = client.post(
            "/auth/register",
            json={"username": "operator", "password": "longenough1"},
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert response.json()["username"] == "operator"

        login = client.post("/auth/login", json={"username": "operator", "password": "longenough1"})
        assert login.status_code == 200

    def test_register_duplicate_username_conflicts(self, client, auth_headers):
        response = client.post(
            "/auth/register",
            json={"username": ADMIN_USERNAME, "password": "longenough1"},
            headers=auth_headers,
        )

        assert response.status_code == 409

    def test_register_requires_token(self, client):
        response = client.post("/auth/register", json={"username": "operator", "password": "longenough1"})

        assert response.status_code == 401
