"""Tests for subscription endpoints."""

from collections.abc import Generator

import pytest
from dependency_injector import providers
from fastapi import status
from fastapi.testclient import TestClient

from lingonotes.application.subscription.use_cases.subscription_use_case import (
    SubscriptionUseCase,
)
from lingonotes.constants import DAY_MS
from lingonotes.core import container
from lingonotes.infrastructure.subscription.repositories import InMemorySubscriptionRepository
from tests.factories import TEST_USER_ID, FakeClock, record_event_loop_calls

VERIFY_BODY = {"platform": "ios", "receipt": "base64-receipt", "productId": "premium_monthly"}


class TestSubscriptionStatus:
    """Test suite for GET /subscription."""

    def test_new_user_is_free(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        """Test that users without a record are on the free plan."""
        response = client.get("/subscription", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"status": "free"}

    def test_premium_user(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        premium_user: str,
        clock: FakeClock,
    ) -> None:
        response = client.get("/subscription", headers=auth_headers)

        assert response.json() == {
            "status": "premium",
            "expiresAt": clock.now + 30 * DAY_MS,
            "plan": "lingonotes_premium_monthly",
        }

    def test_expired_premium_is_downgraded(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        premium_user: str,
        clock: FakeClock,
        subscription_repository: InMemorySubscriptionRepository,
    ) -> None:
        """Test that reading an expired subscription downgrades it to free."""
        clock.advance(30 * DAY_MS)

        response = client.get("/subscription", headers=auth_headers)

        assert response.json()["status"] == "free"
        stored = subscription_repository.get(TEST_USER_ID)
        assert stored is not None
        assert stored.status == "free"

    def test_requires_authentication(self, client: TestClient) -> None:
        response = client.get("/subscription")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestVerifyPurchase:
    """Test suite for POST /subscription/verify."""

    def test_grants_thirty_days_of_premium(
        self, client: TestClient, auth_headers: dict[str, str], clock: FakeClock
    ) -> None:
        """Test that the non-production stub grants premium without checking the receipt."""
        response = client.post("/subscription/verify", json=VERIFY_BODY, headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "success": True,
            "subscription": {
                "status": "premium",
                "expiresAt": clock.now + 30 * DAY_MS,
                "plan": "premium_monthly",
            },
        }

    def test_grant_unlocks_premium_routes(
        self, client: TestClient, auth_headers: dict[str, str]
    ) -> None:
        """Test that the gate and the subscription routes share state."""
        client.post("/subscription/verify", json=VERIFY_BODY, headers=auth_headers)

        response = client.post(
            "/sync",
            json={"languageSheets": [], "settings": {}, "lastLocalUpdate": 0},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["success"] is True

    def test_unknown_platform_returns_400(
        self, client: TestClient, auth_headers: dict[str, str]
    ) -> None:
        body = {**VERIFY_BODY, "platform": "windows"}

        response = client.post("/subscription/verify", json=body, headers=auth_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    @pytest.fixture
    def production_use_case(
        self, subscription_repository: InMemorySubscriptionRepository, clock: FakeClock
    ) -> Generator[None, None, None]:
        container.subscription_use_case.override(
            providers.Factory(
                SubscriptionUseCase,
                repository=subscription_repository,
                clock=clock,
                grant_days=30,
                allow_unverified_grants=False,
            )
        )
        yield
        container.subscription_use_case.reset_override()

    def test_production_returns_501(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        production_use_case: None,
        subscription_repository: InMemorySubscriptionRepository,
    ) -> None:
        """Test that production refuses to grant premium without receipt verification."""
        response = client.post("/subscription/verify", json=VERIFY_BODY, headers=auth_headers)

        assert response.status_code == status.HTTP_501_NOT_IMPLEMENTED
        assert response.json() == {"error": "Receipt verification not implemented"}
        assert subscription_repository.get(TEST_USER_ID) is None


class TestSubscriptionRunsInThreadpool:
    """Repository calls block on the database backend, so they must stay off the event loop."""

    def test_status_and_verify(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        subscription_repository: InMemorySubscriptionRepository,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        update_calls = record_event_loop_calls(monkeypatch, subscription_repository, "update")

        client.get("/subscription", headers=auth_headers)
        client.post("/subscription/verify", json=VERIFY_BODY, headers=auth_headers)

        assert update_calls == [False, False]


class TestWebhook:
    """Test suite for POST /subscription/webhook."""

    def test_acknowledges_event(self, client: TestClient) -> None:
        response = client.post("/subscription/webhook", json={"type": "RENEWAL"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"received": True}

    def test_acknowledges_non_json_body(self, client: TestClient) -> None:
        response = client.post(
            "/subscription/webhook",
            content=b"not json",
            headers={"Content-Type": "text/plain"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"received": True}
