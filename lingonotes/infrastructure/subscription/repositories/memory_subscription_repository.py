"""Process-local subscription repository."""

from collections.abc import Callable
from dataclasses import replace

from lingonotes.domain.subscription.entities.subscription import Subscription
from lingonotes.infrastructure.common.keyed_lock import KeyedLock


class InMemorySubscriptionRepository:
    """
    Subscriptions held in process memory.

    State is lost on restart and is not shared between processes; use the
    database backend for anything beyond a single instance.
    """

    def __init__(self) -> None:
        self._subscriptions: dict[str, Subscription] = {}
        self._locks = KeyedLock()

    def get(self, user_id: str) -> Subscription | None:
        subscription = self._subscriptions.get(user_id)
        # Callers get a copy so they cannot mutate stored state outside update()
        return replace(subscription) if subscription else None

    def update(self, user_id: str, mutate: Callable[[Subscription], bool]) -> Subscription:
        with self._locks.hold(user_id):
            stored = self._subscriptions.get(user_id)
            subscription = replace(stored) if stored else Subscription.free(user_id)
            if mutate(subscription):
                self._subscriptions[user_id] = replace(subscription)
            return subscription
