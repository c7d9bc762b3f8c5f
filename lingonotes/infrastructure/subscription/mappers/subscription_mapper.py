"""Mapper for Subscription ORM ↔ Domain conversion."""

from typing import cast

from lingonotes.constants import SubscriptionStatus
from lingonotes.domain.subscription.entities.subscription import Subscription
from lingonotes.models import SubscriptionRow


class SubscriptionMapper:
    """Mapper for Subscription ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: SubscriptionRow) -> Subscription:
        """Convert ORM model to domain entity."""
        return Subscription(
            user_id=orm_model.user_id,
            status=cast(SubscriptionStatus, orm_model.status),
            expires_at=orm_model.expires_at,
            plan=orm_model.plan,
        )

    def to_orm(
        self, domain_entity: Subscription, orm_model: SubscriptionRow | None = None
    ) -> SubscriptionRow:
        """Convert domain entity to ORM model."""
        if orm_model:
            orm_model.status = domain_entity.status
            orm_model.expires_at = domain_entity.expires_at
            orm_model.plan = domain_entity.plan
            return orm_model

        return SubscriptionRow(
            user_id=domain_entity.user_id,
            status=domain_entity.status,
            expires_at=domain_entity.expires_at,
            plan=domain_entity.plan,
        )
