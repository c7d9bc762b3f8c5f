"""Tests for sync endpoints."""

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from lingonotes.infrastructure.subscription.repositories import InMemorySubscriptionRepository
from lingonotes.infrastructure.sync.repositories import InMemorySyncRepository
from tests.factories import (
    TEST_USER_ID,
    FakeClock,
    make_sentence,
    make_sheet,
    record_event_loop_calls,
)


def push_body(last_local_update: int, sheets: list[dict] | None = None) -> dict:
    return {
        "languageSheets": sheets if sheets is not None else [make_sheet()],
        "settings": {"nativeLanguage": "en"},
        "lastLocalUpdate": last_local_update,
    }


class TestSyncPush:
    """Test suite for POST /sync."""

    def test_requires_premium(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        """Test that sync push is a premium feature."""
        response = client.post("/sync", json=push_body(100), headers=auth_headers)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["code"] == "SUBSCRIPTION_REQUIRED"

    def test_first_push_is_stored_with_server_time(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        premium_user: str,
        clock: FakeClock,
    ) -> None:
        """Test that the stored snapshot is stamped with the server clock."""
        sheet = make_sheet(sentences=[make_sentence()])

        response = client.post("/sync", json=push_body(42, [sheet]), headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["success"] is True
        assert "conflict" not in data
        assert data["data"]["updatedAt"] == clock.now
        assert data["data"]["settings"] == {"nativeLanguage": "en"}
        assert data["data"]["languageSheets"][0]["sentences"][0]["original"] == "Hola"

    def test_older_push_conflicts_and_keeps_server_data(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        premium_user: str,
        clock: FakeClock,
        sync_repository: InMemorySyncRepository,
    ) -> None:
        """Test that a push older than the stored snapshot is rejected."""
        clock.now = 100
        first = client.post(
            "/sync", json=push_body(100, [make_sheet("sheet-a")]), headers=auth_headers
        )
        assert first.json()["data"]["updatedAt"] == 100

        clock.now = 200
        response = client.post(
            "/sync", json=push_body(50, [make_sheet("sheet-b")]), headers=auth_headers
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["conflict"] is True
        assert data["message"] == "Server has newer data"
        assert "success" not in data
        assert data["serverData"]["updatedAt"] == 100
        assert data["serverData"]["languageSheets"][0]["id"] == "sheet-a"

        stored = sync_repository.get(TEST_USER_ID)
        assert stored is not None
        assert stored.updated_at == 100
        assert stored.language_sheets[0]["id"] == "sheet-a"

    def test_push_with_equal_timestamp_overwrites(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        premium_user: str,
        clock: FakeClock,
    ) -> None:
        """Test that ties go to the pushing client."""
        clock.now = 100
        client.post("/sync", json=push_body(100, [make_sheet("sheet-a")]), headers=auth_headers)

        clock.now = 300
        response = client.post(
            "/sync", json=push_body(100, [make_sheet("sheet-b")]), headers=auth_headers
        )

        data = response.json()
        assert data["success"] is True
        assert data["data"]["updatedAt"] == 300
        assert data["data"]["languageSheets"][0]["id"] == "sheet-b"

    def test_newer_push_overwrites(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        premium_user: str,
        clock: FakeClock,
    ) -> None:
        clock.now = 100
        client.post("/sync", json=push_body(100), headers=auth_headers)

        clock.now = 500
        response = client.post("/sync", json=push_body(400, []), headers=auth_headers)

        data = response.json()
        assert data["success"] is True
        assert data["data"]["languageSheets"] == []

    def test_invalid_body_returns_400(
        self, client: TestClient, auth_headers: dict[str, str], premium_user: str
    ) -> None:
        """Test request validation of the pushed sheets."""
        body = push_body(100, [{"id": "sheet-1", "targetLanguage": "xx"}])

        response = client.post("/sync", json=body, headers=auth_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "Invalid request"

    def test_negative_last_local_update_returns_400(
        self, client: TestClient, auth_headers: dict[str, str], premium_user: str
    ) -> None:
        response = client.post("/sync", json=push_body(-1), headers=auth_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestSyncPull:
    """Test suite for GET /sync."""

    def test_pull_without_data(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        """Test that a user who never pushed gets nulls."""
        response = client.get("/sync", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"data": None, "lastSync": None}

    def test_pull_after_push(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        premium_user: str,
        clock: FakeClock,
    ) -> None:
        client.post("/sync", json=push_body(1), headers=auth_headers)

        response = client.get("/sync", headers=auth_headers)

        data = response.json()
        assert data["lastSync"] == clock.now
        assert data["data"]["updatedAt"] == clock.now
        assert data["data"]["languageSheets"][0]["targetLanguage"] == "es"

    def test_pull_does_not_require_premium(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        premium_user: str,
        clock: FakeClock,
    ) -> None:
        """Test that a lapsed subscriber can still download their data."""
        client.post("/sync", json=push_body(1), headers=auth_headers)
        clock.advance(60 * 24 * 60 * 60 * 1000)

        response = client.get("/sync", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"] is not None

    def test_pull_requires_authentication(self, client: TestClient) -> None:
        response = client.get("/sync")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestSyncDelete:
    """Test suite for DELETE /sync."""

    def test_delete_removes_snapshot(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        premium_user: str,
    ) -> None:
        client.post("/sync", json=push_body(1), headers=auth_headers)

        response = client.delete("/sync", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"success": True}
        assert client.get("/sync", headers=auth_headers).json() == {
            "data": None,
            "lastSync": None,
        }

    def test_delete_without_snapshot_succeeds(
        self, client: TestClient, auth_headers: dict[str, str]
    ) -> None:
        response = client.delete("/sync", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"success": True}


class TestSyncRunsInThreadpool:
    """Repository calls block on the database backend, so they must stay off the event loop."""

    def test_push_and_premium_gate(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        premium_user: str,
        sync_repository: InMemorySyncRepository,
        subscription_repository: InMemorySubscriptionRepository,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        update_calls = record_event_loop_calls(monkeypatch, sync_repository, "update")
        gate_calls = record_event_loop_calls(monkeypatch, subscription_repository, "get")

        response = client.post("/sync", json=push_body(1), headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert update_calls == [False]
        assert gate_calls == [False]

    def test_pull_and_delete(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        sync_repository: InMemorySyncRepository,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        get_calls = record_event_loop_calls(monkeypatch, sync_repository, "get")
        delete_calls = record_event_loop_calls(monkeypatch, sync_repository, "delete")

        client.get("/sync", headers=auth_headers)
        client.delete("/sync", headers=auth_headers)

        assert get_calls == [False]
        assert delete_calls == [False]
