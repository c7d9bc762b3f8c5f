"""Subscription status and purchase routes."""

from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Depends, Request

from lingonotes.application.subscription.use_cases.subscription_use_case import (
    SubscriptionUseCase,
)
from lingonotes.core import container
from lingonotes.domain.subscription.entities.subscription import Subscription
from lingonotes.domain.subscription.exceptions import ReceiptVerificationUnavailableError
from lingonotes.exceptions import NotImplementedFeatureError
from lingonotes.infrastructure.common.di import inject_use_case
from lingonotes.infrastructure.identity.dependencies import CurrentPrincipal
from lingonotes.schemas.subscription_schemas import (
    SubscriptionResponse,
    VerifyPurchaseRequest,
    VerifyPurchaseResponse,
    WebhookResponse,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/subscription", tags=["subscription"])

SubscriptionUseCaseDep = Annotated[
    SubscriptionUseCase, Depends(inject_use_case(container.subscription_use_case))
]


def _to_response(subscription: Subscription) -> SubscriptionResponse:
    return SubscriptionResponse(
        status=subscription.status,
        expires_at=subscription.expires_at,
        plan=subscription.plan,
    )


@router.get("", response_model=SubscriptionResponse, response_model_exclude_none=True)
def get_subscription(
    principal: CurrentPrincipal, use_case: SubscriptionUseCaseDep
) -> SubscriptionResponse:
    """Current subscription status; expired premium reads as free."""
    return _to_response(use_case.get_status(principal.user_id))


@router.post("/verify", response_model=VerifyPurchaseResponse, response_model_exclude_none=True)
def verify_purchase(
    body: VerifyPurchaseRequest,
    principal: CurrentPrincipal,
    use_case: SubscriptionUseCaseDep,
) -> VerifyPurchaseResponse:
    """
    Verify an App Store / Play Store purchase.

    Outside production this is a stub that grants premium for 30 days
    without looking at the receipt; in production it answers 501.
    """
    try:
        subscription = use_case.verify_purchase(
            principal.user_id, body.platform, body.receipt, body.product_id
        )
    except ReceiptVerificationUnavailableError as e:
        raise NotImplementedFeatureError(e.message) from e

    return VerifyPurchaseResponse(success=True, subscription=_to_response(subscription))


@router.post("/webhook")
async def subscription_webhook(
    request: Request, use_case: SubscriptionUseCaseDep
) -> WebhookResponse:
    """Acknowledge billing provider events."""
    try:
        payload: Any = await request.json()
    except ValueError:
        payload = {}
    use_case.handle_webhook(payload if isinstance(payload, dict) else {})
    return WebhookResponse(received=True)
