"""Sign-in session: keeps the auth token and mirrors the profile into the store."""

import structlog

from lingonotes.client.api_client import LingoNotesClient
from lingonotes.client.storage import KeyValueStorage
from lingonotes.client.store import LocalStore
from lingonotes.constants import AUTH_TOKEN_KEY
from lingonotes.schemas.auth_schemas import AppleUserInfo, AuthResponse
from lingonotes.schemas.subscription_schemas import SubscriptionResponse
from lingonotes.schemas.user_schemas import User
from lingonotes.utils import now_ms

logger = structlog.get_logger(__name__)


class AuthSession:
    """
    Signed-in state of the app.

    The session token is stored under ``authToken`` next to the store blob and
    attached to every API request. Signing out removes it and resets the store.
    """

    def __init__(self, store: LocalStore, storage: KeyValueStorage, api: LingoNotesClient) -> None:
        self.store = store
        self.storage = storage
        self.api = api
        self.api.set_token(self.storage.get_item(AUTH_TOKEN_KEY))

    @property
    def token(self) -> str | None:
        return self.api.token

    @property
    def is_signed_in(self) -> bool:
        return self.api.token is not None and self.store.user is not None

    async def sign_in_with_google(self, id_token: str) -> User:
        return self._start(await self.api.sign_in_with_google(id_token))

    async def sign_in_with_apple(self, id_token: str, user: AppleUserInfo | None = None) -> User:
        return self._start(await self.api.sign_in_with_apple(id_token, user))

    def _start(self, auth: AuthResponse) -> User:
        self.storage.set_item(AUTH_TOKEN_KEY, auth.token)
        self.api.set_token(auth.token)

        previous = self.store.user
        known = previous if previous is not None and previous.id == auth.user.id else None
        user = User(
            id=auth.user.id,
            email=auth.user.email or "",
            native_language=previous.native_language if previous else "en",
            has_completed_onboarding=True,
            subscription_status=known.subscription_status if known else "free",
            subscription_expires_at=known.subscription_expires_at if known else None,
            created_at=known.created_at if known else now_ms(),
        )
        self.store.set_user(user)
        self.store.complete_onboarding()
        logger.info("signed_in", user_id=user.id)
        return user

    async def verify(self) -> bool:
        """Whether the stored token is still accepted by the server."""
        if self.api.token is None:
            return False
        response = await self.api.verify()
        return response.valid

    async def refresh_subscription(self) -> SubscriptionResponse:
        subscription = await self.api.subscription_status()
        self._apply_subscription(subscription)
        return subscription

    async def verify_purchase(
        self, platform: str, receipt: str, product_id: str
    ) -> SubscriptionResponse:
        response = await self.api.verify_purchase(platform, receipt, product_id)
        self._apply_subscription(response.subscription)
        return response.subscription

    def _apply_subscription(self, subscription: SubscriptionResponse) -> None:
        self.store.update_user(
            subscription_status=subscription.status,
            subscription_expires_at=subscription.expires_at,
        )

    def sign_out(self) -> None:
        user_id = self.store.user.id if self.store.user else None
        self.storage.remove_item(AUTH_TOKEN_KEY)
        self.api.set_token(None)
        self.store.reset()
        logger.info("signed_out", user_id=user_id)
