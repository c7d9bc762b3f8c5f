"""Repository for Subscription domain entities."""

from collections.abc import Callable

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from lingonotes.domain.subscription.entities.subscription import Subscription
from lingonotes.infrastructure.subscription.mappers.subscription_mapper import (
    SubscriptionMapper,
)
from lingonotes.models import SubscriptionRow

logger = structlog.get_logger(__name__)


class SubscriptionRepository:
    """Subscriptions stored as one row per user."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self.session_factory = session_factory
        self.mapper = SubscriptionMapper()

    def get(self, user_id: str) -> Subscription | None:
        """
        Find a user's subscription.

        Args:
            user_id: The user ID

        Returns:
            Subscription entity if stored, None otherwise
        """
        with self.session_factory() as db:
            stmt = select(SubscriptionRow).where(SubscriptionRow.user_id == user_id)
            orm_model = db.execute(stmt).scalar_one_or_none()
            return self.mapper.to_domain(orm_model) if orm_model else None

    def update(self, user_id: str, mutate: Callable[[Subscription], bool]) -> Subscription:
        """
        Load, mutate and save a subscription inside one transaction.

        The row is locked with SELECT ... FOR UPDATE so concurrent requests
        for the same user are serialized. A missing row cannot be locked, so
        when a concurrent request inserts it first the mutation is applied
        again on top of that row.
        """
        try:
            return self._update_locked(user_id, mutate)
        except IntegrityError:
            logger.info("subscription_insert_race", user_id=user_id)
            return self._update_locked(user_id, mutate)

    def _update_locked(
        self, user_id: str, mutate: Callable[[Subscription], bool]
    ) -> Subscription:
        with self.session_factory() as db, db.begin():
            stmt = (
                select(SubscriptionRow)
                .where(SubscriptionRow.user_id == user_id)
                .with_for_update()
            )
            orm_model = db.execute(stmt).scalar_one_or_none()
            subscription = (
                self.mapper.to_domain(orm_model) if orm_model else Subscription.free(user_id)
            )
            if mutate(subscription):
                if orm_model is None:
                    db.add(self.mapper.to_orm(subscription))
                else:
                    self.mapper.to_orm(subscription, orm_model)
                logger.debug(
                    "subscription_saved", user_id=user_id, status=subscription.status
                )
        return subscription
