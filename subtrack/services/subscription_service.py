"""Per-user unit of work: load the collection, apply one operation, save it back."""

import logging
from collections.abc import Callable
from datetime import datetime
from decimal import Decimal
from typing import TypeVar
from uuid import UUID

from subtrack.core.auth import UserSession
from subtrack.models.shared import utc_now
from subtrack.models.subscription import Subscription, SubscriptionStatus
from subtrack.repositories.subscription_repository import SubscriptionStore
from subtrack.schemas.subscription import SubscriptionCreate
from subtrack.services.subscription_filters import TypeFilter, filter_by_type
from subtrack.services.subscription_lifecycle import SubscriptionLifecycleService

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SubscriptionService:
    """Service for one user's subscriptions.

    Each mutating call saves the whole collection once the operation has
    succeeded; a failed operation saves nothing.
    """

    def __init__(
        self,
        store: SubscriptionStore,
        session: UserSession,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.session = session
        self.clock = clock

    def load(self) -> list[Subscription]:
        return self.store.load(self.session.user_id)

    def list_subscriptions(self, type_filter: TypeFilter | str = TypeFilter.ALL) -> list[Subscription]:
        return list(filter_by_type(self.load(), type_filter))

    def get(self, subscription_id: UUID | str) -> Subscription:
        return SubscriptionLifecycleService(self.load(), self.clock).get(subscription_id)

    def create(self, data: SubscriptionCreate) -> Subscription:
        subscription = self._apply(lambda lifecycle: lifecycle.create(data))
        logger.info("Created subscription %s for user %s", subscription.id, self.session.user_id)
        return subscription

    def change_status(
        self,
        subscription_id: UUID | str,
        new_status: SubscriptionStatus | str,
        note: str | None = None,
    ) -> Subscription:
        subscription = self._apply(
            lambda lifecycle: lifecycle.change_status(subscription_id, new_status, note)
        )
        logger.info(
            "Subscription %s status changed to %s for user %s",
            subscription.id,
            subscription.status.value,
            self.session.user_id,
        )
        return subscription

    def change_price(
        self,
        subscription_id: UUID | str,
        new_amount: Decimal | str | int | float,
        note: str | None = None,
    ) -> Subscription:
        subscription = self._apply(
            lambda lifecycle: lifecycle.change_price(subscription_id, new_amount, note)
        )
        logger.info(
            "Subscription %s price changed to %s for user %s",
            subscription.id,
            subscription.amount,
            self.session.user_id,
        )
        return subscription

    def delete(self, subscription_id: UUID | str) -> bool:
        removed = self._apply(lambda lifecycle: lifecycle.delete(subscription_id))
        if removed:
            logger.info("Deleted subscription %s for user %s", subscription_id, self.session.user_id)
        return removed

    def _apply(self, operation: Callable[[SubscriptionLifecycleService], T]) -> T:
        subscriptions = self.load()
        result = operation(SubscriptionLifecycleService(subscriptions, self.clock))
        self.store.save(self.session.user_id, subscriptions)
        return result
