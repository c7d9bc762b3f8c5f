"""Use case for subscription status, purchases and the premium gate."""

from typing import Any

import structlog

from lingonotes.application.common.clock import Clock
from lingonotes.application.subscription.protocols.subscription_repository import (
    SubscriptionRepositoryProtocol,
)
from lingonotes.constants import SubscriptionStatus
from lingonotes.domain.subscription.entities.subscription import Subscription
from lingonotes.domain.subscription.exceptions import ReceiptVerificationUnavailableError

logger = structlog.get_logger(__name__)


class SubscriptionUseCase:
    """
    Subscription operations.

    Receipt verification is a placeholder: outside production every receipt
    is accepted and grants premium for ``grant_days`` days.
    """

    def __init__(
        self,
        repository: SubscriptionRepositoryProtocol,
        clock: Clock,
        grant_days: int,
        allow_unverified_grants: bool,
    ) -> None:
        self.repository = repository
        self.clock = clock
        self.grant_days = grant_days
        self.allow_unverified_grants = allow_unverified_grants

    def get_status(self, user_id: str) -> Subscription:
        """Current subscription, downgrading an expired premium one to free."""
        now = self.clock()
        downgraded = False

        def expire(subscription: Subscription) -> bool:
            nonlocal downgraded
            downgraded = subscription.downgrade_if_expired(now)
            return downgraded

        subscription = self.repository.update(user_id, expire)
        if downgraded:
            logger.info("subscription_expired", user_id=user_id, plan=subscription.plan)
        return subscription

    def has_active_premium(self, user_id: str) -> bool:
        subscription = self.repository.get(user_id)
        return subscription is not None and subscription.is_active_premium(self.clock())

    def verify_purchase(
        self, user_id: str, platform: str, receipt: str, product_id: str
    ) -> Subscription:
        """
        Activate premium after a store purchase.

        Raises:
            ReceiptVerificationUnavailableError: In production, where no store
                verification is wired up yet
        """
        if not self.allow_unverified_grants:
            logger.warning("receipt_verification_unavailable", user_id=user_id, platform=platform)
            raise ReceiptVerificationUnavailableError(platform)

        now = self.clock()

        def grant(subscription: Subscription) -> bool:
            subscription.grant_premium(now, self.grant_days, plan=product_id)
            return True

        subscription = self.repository.update(user_id, grant)
        logger.info(
            "premium_granted_without_receipt_check",
            user_id=user_id,
            platform=platform,
            product_id=product_id,
            receipt_length=len(receipt),
            expires_at=subscription.expires_at,
        )
        return subscription

    def set_subscription(
        self,
        user_id: str,
        status: SubscriptionStatus,
        expires_at: int | None = None,
        plan: str | None = None,
    ) -> Subscription:
        """Overwrite a user's subscription (internal use and store webhooks)."""

        def overwrite(subscription: Subscription) -> bool:
            subscription.status = status
            subscription.expires_at = expires_at
            subscription.plan = plan
            return True

        return self.repository.update(user_id, overwrite)

    def handle_webhook(self, payload: dict[str, Any]) -> None:
        # TODO: verify the billing provider's signature and apply the event via set_subscription
        logger.info("subscription_webhook_received", event_type=payload.get("type"))
