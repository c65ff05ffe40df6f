"""Pure selection helpers over a subscription collection."""

from collections.abc import Sequence
from datetime import date
from enum import Enum

from subtrack.core.exceptions import ValidationError
from subtrack.models.subscription import Subscription, SubscriptionStatus, SubscriptionType


class TypeFilter(str, Enum):
    ALL = "all"
    PERSONAL = "personal"
    BUSINESS = "business"


def _normalize(value: Enum | str) -> str:
    raw = value.value if isinstance(value, Enum) else value
    return str(raw).strip().lower()


def parse_type_filter(value: TypeFilter | SubscriptionType | str) -> TypeFilter:
    try:
        return TypeFilter(_normalize(value))
    except ValueError:
        raise ValidationError(f"Unknown subscription filter: {value!r}") from None


def filter_by_type(
    subscriptions: Sequence[Subscription], type_filter: TypeFilter | SubscriptionType | str
) -> Sequence[Subscription]:
    """Select subscriptions of one type; ``all`` returns the input unchanged."""
    selected = parse_type_filter(type_filter)
    if selected is TypeFilter.ALL:
        return subscriptions
    return [s for s in subscriptions if s.type.value == selected.value]


def filter_by_status(
    subscriptions: Sequence[Subscription], status: SubscriptionStatus
) -> list[Subscription]:
    return [s for s in subscriptions if s.status == status]


def filter_active(subscriptions: Sequence[Subscription]) -> list[Subscription]:
    return filter_by_status(subscriptions, SubscriptionStatus.ACTIVE)


def subscriptions_of_type(
    subscriptions: Sequence[Subscription], subscription_type: SubscriptionType | str
) -> list[Subscription]:
    """Every subscription of one type, whatever its status, in insertion order."""
    selected = parse_type_filter(subscription_type)
    if selected is TypeFilter.ALL:
        raise ValidationError("A subscription type is required")
    return list(filter_by_type(subscriptions, selected))


def dashboard_subscriptions(
    subscriptions: Sequence[Subscription], type_filter: TypeFilter | str = TypeFilter.ALL
) -> list[Subscription]:
    """Active subscriptions matching the filter, soonest renewal first.

    Subscriptions without a renewal date go last; ties keep insertion order.
    """
    active = filter_active(filter_by_type(subscriptions, type_filter))
    return sorted(active, key=lambda s: (s.renewal_date is None, s.renewal_date or date.min))
