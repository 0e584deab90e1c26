"""Tests for tag registry, permission links and the validation endpoint."""

import sqlite3

from door_control.config.settings import settings


class TestTagCrud:

    def test_create_tag(self, client, auth_headers):
        response = client.post(
            "/tags",
            json={"tagId": "04A224B2", "name": "Blue fob", "ownerName": "Jane"},
            headers=auth_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["tagId"] == "04A224B2"
        assert data["ownerName"] == "Jane"
        assert data["isActive"] is True

    def test_duplicate_tag_id_conflicts(self, client, auth_headers, create_tag):
        create_tag("T1")

        response = client.post("/tags", json={"tagId": "T1"}, headers=auth_headers)

        assert response.status_code == 409

    def test_get_tag_lists_doors(self, client, auth_headers, create_door, create_tag, assign):
        door = create_door()
        tag = create_tag()
        assign(tag, door)

        data = client.get(f"/tags/{tag['id']}", headers=auth_headers).json()

        assert [p["door"]["clientId"] for p in data["permissions"]] == ["door-1"]

    def test_list_tags(self, client, auth_headers, create_tag):
        create_tag("T1")
        create_tag("T2")

        tags = client.get("/tags", headers=auth_headers).json()

        assert [t["tagId"] for t in tags] == ["T1", "T2"]

    def test_update_tag(self, client, auth_headers, create_tag):
        tag = create_tag(ownerName="Jane")

        response = client.patch(f"/tags/{tag['id']}", json={"isActive": False}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["isActive"] is False
        assert response.json()["ownerName"] == "Jane"

    def test_tag_id_cannot_be_patched(self, client, auth_headers, create_tag):
        tag = create_tag()

        response = client.patch(f"/tags/{tag['id']}", json={"tagId": "T9"}, headers=auth_headers)

        assert response.status_code == 400

    def test_delete_tag(self, client, auth_headers, create_door, create_tag, assign):
        door = create_door()
        tag = create_tag()
        assign(tag, door)

        assert client.delete(f"/tags/{tag['id']}", headers=auth_headers).status_code == 204
        assert client.get(f"/tags/{tag['id']}", headers=auth_headers).status_code == 404
        assert client.get(f"/doors/{door['id']}", headers=auth_headers).json()["permissions"] == []

    def test_delete_missing_tag(self, client, auth_headers):
        assert client.delete("/tags/999", headers=auth_headers).status_code == 404


class TestPermissions:

    def test_repeated_assignment_creates_rows_and_removal_deletes_all(
        self, client, auth_headers, create_door, create_tag, assign
    ):
        door = create_door()
        tag = create_tag()
        first = assign(tag, door)
        second = assign(tag, door)

        assert first["id"] != second["id"]
        assert first["isActive"] is True

        response = client.delete(f"/tags/{tag['id']}/doors/{door['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"count": 2}
        assert client.get(f"/tags/{tag['id']}", headers=auth_headers).json()["permissions"] == []

    def test_removing_absent_permission_is_not_an_error(self, client, auth_headers, create_door, create_tag):
        door = create_door()
        tag = create_tag()

        response = client.delete(f"/tags/{tag['id']}/doors/{door['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"count": 0}

    def test_assign_to_missing_door(self, client, auth_headers, create_tag):
        tag = create_tag()

        response = client.post(f"/tags/{tag['id']}/doors/999", headers=auth_headers)

        assert response.status_code == 404


class TestValidateEndpoint:

    def test_granted(self, create_door, create_tag, assign, validate):
        door = create_door()
        tag = create_tag("T1")
        assign(tag, door)

        assert validate("T1", "door-1") == {"allowed": True, "doorId": door["id"]}

    def test_revoked_permission_is_denied(self, client, auth_headers, create_door, create_tag, assign, validate):
        door = create_door()
        tag = create_tag("T1")
        assign(tag, door)
        client.delete(f"/tags/{tag['id']}/doors/{door['id']}", headers=auth_headers)

        assert validate("T1", "door-1") == {"allowed": False, "doorId": door["id"]}

    def test_inactive_tag_is_denied(self, client, auth_headers, create_door, create_tag, assign, validate):
        door = create_door()
        tag = create_tag("T1")
        assign(tag, door)
        client.patch(f"/tags/{tag['id']}", json={"isActive": False}, headers=auth_headers)

        assert validate("T1", "door-1")["allowed"] is False

    def test_inactive_door_is_denied_and_audited(
        self, client, auth_headers, create_door, create_tag, assign, validate
    ):
        door = create_door()
        tag = create_tag("T1")
        assign(tag, door)
        client.patch(f"/doors/{door['id']}", json={"isActive": False}, headers=auth_headers)

        assert validate("T1", "door-1") == {"allowed": False, "doorId": door["id"]}

        history = client.get("/access-history", headers=auth_headers).json()
        assert history["total"] == 1
        assert history["data"][0]["accessGranted"] is False

    def test_unknown_client_is_denied_without_audit(self, client, auth_headers, create_door, validate):
        create_door()

        assert validate("T1", "no-such-door") == {"allowed": False}
        assert client.get("/access-history", headers=auth_headers).json()["total"] == 0

    def test_validate_needs_no_token(self, client):
        response = client.post("/tags/validate", json={"tagId": "T1", "clientId": "door-1"})

        assert response.status_code == 200

    def test_validate_rejects_missing_fields(self, client):
        response = client.post("/tags/validate", json={"tagId": "T1"})

        assert response.status_code == 400

    def test_client_ip_is_not_recorded_by_default(self, client, auth_headers, create_door, validate):
        create_door()
        validate("T1", "door-1")

        entry = client.get("/access-history", headers=auth_headers).json()["data"][0]
        assert entry["clientIp"] is None

    def test_client_ip_recorded_when_enabled(self, client, auth_headers, create_door, validate, monkeypatch):
        monkeypatch.setattr(settings, "RECORD_CLIENT_IP", True)
        create_door()
        validate("T1", "door-1", image="aGVsbG8=")

        entry = client.get("/access-history", headers=auth_headers).json()["data"][0]
        assert entry["clientIp"] == "testclient"
        assert entry["image"] == "aGVsbG8="

    def test_failed_history_write_keeps_the_decision(
        self, client, tmp_path, create_door, create_tag, assign, validate
    ):
        door = create_door()
        tag = create_tag("T1")
        assign(tag, door)
        with sqlite3.connect(tmp_path / "test.db") as conn:
            conn.execute("DROP TABLE access_history")

        assert validate("T1", "door-1") == {"allowed": True, "doorId": door["id"]}

    def test_failed_history_write_at_inactive_door(
        self, client, auth_headers, tmp_path, create_door, validate
    ):
        door = create_door()
        client.patch(f"/doors/{door['id']}", json={"isActive": False}, headers=auth_headers)
        with sqlite3.connect(tmp_path / "test.db") as conn:
            conn.execute("DROP TABLE access_history")

        assert validate("T1", "door-1") == {"allowed": False, "doorId": door["id"]}
