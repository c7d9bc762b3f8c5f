"""Subscription entity."""

from dataclasses import dataclass

from lingonotes.constants import DAY_MS, SubscriptionStatus
from lingonotes.domain.common.exceptions import ValidationError


@dataclass
class Subscription:
    """
    A user's subscription state.

    Business Rules:
    - A user without a stored subscription is on the free plan
    - Premium is active while ``expires_at`` is absent or in the future
    - An expired premium subscription reads as free
    """

    user_id: str
    status: SubscriptionStatus = "free"
    expires_at: int | None = None
    plan: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.user_id:
            raise ValidationError("User id cannot be empty", field="user_id")
        if self.expires_at is not None and self.expires_at < 0:
            raise ValidationError(
                "Expiry cannot be negative", field="expires_at", value=self.expires_at
            )

    def is_active_premium(self, now: int) -> bool:
        """Check whether premium features are unlocked at ``now`` (epoch ms)."""
        return self.status == "premium" and (self.expires_at is None or self.expires_at > now)

    def is_expired(self, now: int) -> bool:
        return self.status == "premium" and not self.is_active_premium(now)

    def downgrade_if_expired(self, now: int) -> bool:
        """
        Drop an expired premium subscription back to free.

        Returns:
            True if the subscription was downgraded
        """
        if not self.is_expired(now):
            return False
        self.status = "free"
        return True

    def grant_premium(self, now: int, days: int, plan: str | None = None) -> None:
        """Activate premium for ``days`` days starting at ``now``."""
        if days <= 0:
            raise ValidationError("Grant period must be positive", field="days", value=days)
        self.status = "premium"
        self.expires_at = now + days * DAY_MS
        self.plan = plan

    @classmethod
    def free(cls, user_id: str) -> "Subscription":
        """Default subscription for users with no stored record."""
        return cls(user_id=user_id)
