from subtrack.models.subscription import (
    PriceHistoryEntry,
    StatusHistoryEntry,
    Subscription,
    SubscriptionStatus,
    SubscriptionType,
)
from subtrack.models.subscription_record import SubscriptionRecord

__all__ = [
    "PriceHistoryEntry",
    "StatusHistoryEntry",
    "Subscription",
    "SubscriptionRecord",
    "SubscriptionStatus",
    "SubscriptionType",
]
