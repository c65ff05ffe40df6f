from subtrack.repositories.subscription_repository import (
    InMemorySubscriptionStore,
    SqlSubscriptionStore,
    SubscriptionStore,
)

__all__ = [
    "InMemorySubscriptionStore",
    "SqlSubscriptionStore",
    "SubscriptionStore",
]
