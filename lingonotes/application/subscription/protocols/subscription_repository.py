from collections.abc import Callable
from typing import Protocol

from lingonotes.domain.subscription.entities.subscription import Subscription


class SubscriptionRepositoryProtocol(Protocol):
    def get(self, user_id: str) -> Subscription | None: ...

    def update(self, user_id: str, mutate: Callable[[Subscription], bool]) -> Subscription:
        """
        Atomically load, mutate and store a user's subscription.

        ``mutate`` receives the stored subscription (or a fresh free one) and
        returns whether it changed; unchanged subscriptions are not written.
        """
        ...
