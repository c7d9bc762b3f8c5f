"""Pytest configuration and fixtures."""

import os

# Settings are read once at import time, so configure them before importing the app
os.environ.update(
    {
        "ENVIRONMENT": "test",
        "SECRET_KEY": "test-secret-key-with-at-least-32-bytes!",
        "RATE_LIMIT_ENABLED": "false",
        "STORAGE_BACKEND": "memory",
        "AI_PROVIDER": "openai",
        "AI_MODEL_NAME": "gpt-4o-mini",
        "OPENAI_API_KEY": "sk-test",
    }
)

from collections.abc import Generator  # noqa: E402
from typing import Any  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
from dependency_injector import providers  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from lingonotes.core import container  # noqa: E402
from lingonotes.infrastructure.identity.services.token_service import (  # noqa: E402
    create_session_token,
)
from lingonotes.infrastructure.subscription.repositories import (  # noqa: E402
    InMemorySubscriptionRepository,
)
from lingonotes.infrastructure.sync.repositories import InMemorySyncRepository  # noqa: E402
from lingonotes.main import app  # noqa: E402
from tests.factories import TEST_USER_EMAIL, TEST_USER_ID, FakeClock  # noqa: E402


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def subscription_repository() -> InMemorySubscriptionRepository:
    return InMemorySubscriptionRepository()


@pytest.fixture
def sync_repository() -> InMemorySyncRepository:
    return InMemorySyncRepository()


@pytest.fixture
def google_provider() -> MagicMock:
    """Google identity provider stub; set ``verify`` per test."""
    provider = MagicMock()
    provider.verify = AsyncMock()
    return provider


@pytest.fixture
def apple_provider() -> MagicMock:
    provider = MagicMock()
    provider.verify = AsyncMock()
    return provider


@pytest.fixture
def ai_service() -> MagicMock:
    """AI service stub so no test talks to a model provider."""
    service = MagicMock()
    service.translate = AsyncMock()
    service.suggest = AsyncMock()
    return service


@pytest.fixture(autouse=True)
def container_overrides(
    clock: FakeClock,
    subscription_repository: InMemorySubscriptionRepository,
    sync_repository: InMemorySyncRepository,
    google_provider: MagicMock,
    apple_provider: MagicMock,
    ai_service: MagicMock,
) -> Generator[None, None, None]:
    """Give every test fresh repositories, a fake clock and stubbed external services."""
    container.clock.override(providers.Object(clock))
    container.subscription_repository.override(providers.Object(subscription_repository))
    container.sync_repository.override(providers.Object(sync_repository))
    container.google_identity_provider.override(providers.Object(google_provider))
    container.apple_identity_provider.override(providers.Object(apple_provider))
    container.ai_service.override(providers.Object(ai_service))
    yield
    container.reset_override()


@pytest.fixture
def client() -> Generator[TestClient, Any, None]:
    """Create a test client for the API."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_token() -> str:
    return create_session_token(TEST_USER_ID, TEST_USER_EMAIL)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def premium_user(
    subscription_repository: InMemorySubscriptionRepository, clock: FakeClock
) -> str:
    """Give the test user 30 days of premium; returns the user id."""

    def grant(subscription: Any) -> bool:
        subscription.grant_premium(clock(), days=30, plan="lingonotes_premium_monthly")
        return True

    subscription_repository.update(TEST_USER_ID, grant)
    return TEST_USER_ID

