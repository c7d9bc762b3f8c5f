"""LingoNotes REST API client with bearer authentication."""

from types import TracebackType
from typing import Any, Self

import httpx
import structlog

from lingonotes.constants import SUBSCRIPTION_REQUIRED_CODE
from lingonotes.schemas.auth_schemas import (
    AppleSignInRequest,
    AppleUserInfo,
    AuthResponse,
    GoogleSignInRequest,
    VerifyResponse,
)
from lingonotes.schemas.learning_schemas import LanguageSheet
from lingonotes.schemas.subscription_schemas import (
    SubscriptionResponse,
    VerifyPurchaseRequest,
    VerifyPurchaseResponse,
)
from lingonotes.schemas.sync_schemas import (
    SyncDeleteResponse,
    SyncPullResponse,
    SyncPushRequest,
    SyncPushResponse,
    SyncSettings,
)
from lingonotes.schemas.translation_schemas import (
    SuggestRequest,
    SuggestResponse,
    TranslateRequest,
    TranslateResponse,
)

logger = structlog.get_logger(__name__)


class ApiRequestError(Exception):
    """Non-2xx response from the API, carrying its error envelope."""

    def __init__(self, status_code: int, message: str, code: str | None = None) -> None:
        self.status_code = status_code
        self.message = message
        self.code = code
        super().__init__(f"{status_code}: {message}")

    @property
    def subscription_required(self) -> bool:
        return self.status_code == 403 and self.code == SUBSCRIPTION_REQUIRED_CODE


class LingoNotesClient:
    """
    HTTP client for the LingoNotes API.

    Attaches ``Authorization: Bearer <token>`` once a token is set and turns
    error responses into ApiRequestError.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self._client = httpx.AsyncClient(
            base_url=self.base_url, timeout=timeout, transport=transport
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    def set_token(self, token: str | None) -> None:
        self.token = token

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        response = await self._client.request(method, path, headers=headers, **kwargs)
        if response.is_success:
            return response.json()

        message = response.reason_phrase or "Request failed"
        code = None
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = body.get("error", message)
            code = body.get("code")
        logger.warning(
            "api_request_failed",
            method=method,
            path=path,
            status_code=response.status_code,
            code=code,
        )
        raise ApiRequestError(response.status_code, message, code)

    # --- Auth endpoints ---

    async def sign_in_with_google(self, id_token: str) -> AuthResponse:
        body = GoogleSignInRequest(id_token=id_token).to_json_dict()
        return AuthResponse.model_validate(await self._request("POST", "/auth/google", json=body))

    async def sign_in_with_apple(
        self, id_token: str, user: AppleUserInfo | None = None
    ) -> AuthResponse:
        body = AppleSignInRequest(id_token=id_token, user=user).to_json_dict()
        return AuthResponse.model_validate(await self._request("POST", "/auth/apple", json=body))

    async def verify(self) -> VerifyResponse:
        """Check the current session token."""
        return VerifyResponse.model_validate(await self._request("GET", "/auth/verify"))

    # --- Translation endpoints ---

    async def translate(self, text: str, source: str, target: str) -> TranslateResponse:
        body = TranslateRequest(text=text, from_=source, to=target).model_dump(by_alias=True)
        return TranslateResponse.model_validate(
            await self._request("POST", "/translate", json=body)
        )

    async def suggest(self, sentence: str, target_language: str) -> SuggestResponse:
        body = SuggestRequest(sentence=sentence, target_language=target_language).to_json_dict()
        return SuggestResponse.model_validate(
            await self._request("POST", "/translate/suggest", json=body)
        )

    # --- Sync endpoints ---

    async def pull_sync(self) -> SyncPullResponse:
        return SyncPullResponse.model_validate(await self._request("GET", "/sync"))

    async def push_sync(
        self,
        language_sheets: list[LanguageSheet],
        settings: SyncSettings,
        last_local_update: int,
    ) -> SyncPushResponse:
        body = SyncPushRequest(
            language_sheets=language_sheets,
            settings=settings,
            last_local_update=last_local_update,
        ).to_json_dict()
        return SyncPushResponse.model_validate(await self._request("POST", "/sync", json=body))

    async def delete_sync(self) -> SyncDeleteResponse:
        return SyncDeleteResponse.model_validate(await self._request("DELETE", "/sync"))

    # --- Subscription endpoints ---

    async def subscription_status(self) -> SubscriptionResponse:
        return SubscriptionResponse.model_validate(await self._request("GET", "/subscription"))

    async def verify_purchase(
        self, platform: str, receipt: str, product_id: str
    ) -> VerifyPurchaseResponse:
        body = VerifyPurchaseRequest.model_validate(
            {"platform": platform, "receipt": receipt, "productId": product_id}
        ).to_json_dict()
        return VerifyPurchaseResponse.model_validate(
            await self._request("POST", "/subscription/verify", json=body)
        )
