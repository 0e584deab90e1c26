"""Tests for access history paging, filtering and statistics."""

import pytest

from door_control.utils.responses import page_count


class TestPagination:

    @pytest.fixture
    def seven_attempts(self, create_door, validate):
        door = create_door()
        for i in range(7):
            validate(f"T{i}", "door-1")
        return door

    def test_last_page_holds_remainder(self, client, auth_headers, seven_attempts):
        data = client.get("/access-history?page=3&limit=3", headers=auth_headers).json()

        assert data["total"] == 7
        assert data["pages"] == 3
        assert data["page"] == 3
        assert len(data["data"]) == 7 - (3 - 1) * 3

    def test_newest_first_with_door(self, client, auth_headers, seven_attempts):
        data = client.get("/access-history?page=1&limit=3", headers=auth_headers).json()

        assert [row["tagId"] for row in data["data"]] == ["T6", "T5", "T4"]
        assert data["data"][0]["door"]["clientId"] == "door-1"

    def test_page_past_the_end_is_empty(self, client, auth_headers, seven_attempts):
        data = client.get("/access-history?page=5&limit=3", headers=auth_headers).json()

        assert data["data"] == []
        assert data["total"] == 7

    def test_default_page_size(self, client, auth_headers, seven_attempts):
        data = client.get("/access-history", headers=auth_headers).json()

        assert data["page"] == 1
        assert data["pages"] == 1
        assert len(data["data"]) == 7

    def test_invalid_page_is_rejected(self, client, auth_headers):
        response = client.get("/access-history?page=0", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"][0].startswith("page")

    def test_page_count(self):
        assert page_count(0, 50) == 0
        assert page_count(50, 50) == 1
        assert page_count(51, 50) == 2


class TestFilters:

    def test_by_door(self, client, auth_headers, create_door, validate):
        front = create_door(name="Front", client_id="door-1")
        create_door(name="Back", client_id="door-2")
        validate("T1", "door-1")
        validate("T1", "door-2")
        validate("T2", "door-2")

        data = client.get(f"/access-history/door/{front['id']}", headers=auth_headers).json()

        assert data["total"] == 1
        assert data["data"][0]["doorId"] == front["id"]

    def test_by_tag_includes_unregistered_tags(self, client, auth_headers, create_door, validate):
        create_door()
        validate("GHOST", "door-1")
        validate("T1", "door-1")
        validate("GHOST", "door-1")

        data = client.get("/access-history/tag/GHOST?limit=1", headers=auth_headers).json()

        assert data["total"] == 2
        assert data["pages"] == 2
        assert data["data"][0]["tagId"] == "GHOST"


class TestStats:

    def test_empty_stats(self, client, auth_headers):
        stats = client.get("/access-history/stats", headers=auth_headers).json()

        assert stats == {"totalAccess": 0, "successfulAccess": 0, "failedAccess": 0, "successRate": 0}

    def test_grant_scenario(self, client, auth_headers, create_door, create_tag, assign, validate):
        door = create_door(name="Front", client_id="door-1")
        tag = create_tag("T1")
        assign(tag, door)

        assert validate("T1", "door-1") == {"allowed": True, "doorId": door["id"]}

        stats = client.get("/access-history/stats", headers=auth_headers).json()
        assert stats["totalAccess"] == 1
        assert stats["successfulAccess"] == 1
        assert stats["failedAccess"] == 0
        assert stats["successRate"] == 100

    def test_mixed_success_rate(self, client, auth_headers, create_door, create_tag, assign, validate):
        door = create_door()
        assign(create_tag("T1"), door)
        validate("T1", "door-1")
        validate("T2", "door-1")
        validate("T3", "door-1")
        validate("T1", "door-1")

        stats = client.get("/access-history/stats", headers=auth_headers).json()

        assert stats["successfulAccess"] == 2
        assert stats["failedAccess"] == 2
        assert stats["successRate"] == 50


class TestDeleteEntry:

    def test_delete_entry(self, client, auth_headers, create_door, validate):
        create_door()
        validate("T1", "door-1")
        entry = client.get("/access-history", headers=auth_headers).json()["data"][0]

        assert client.delete(f"/access-history/{entry['id']}", headers=auth_headers).status_code == 204
        assert client.get("/access-history", headers=auth_headers).json()["total"] == 0

    def test_delete_missing_entry(self, client, auth_headers, create_door, validate):
        create_door()
        validate("T1", "door-1")

        response = client.delete("/access-history/999", headers=auth_headers)

        assert response.status_code == 404
        assert client.get("/access-history", headers=auth_headers).json()["total"] == 1
