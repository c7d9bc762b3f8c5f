from .memory_subscription_repository import InMemorySubscriptionRepository
from .subscription_repository import SubscriptionRepository

__all__ = [
    "InMemorySubscriptionRepository",
    "SubscriptionRepository",
]
