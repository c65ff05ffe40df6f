"""Service for subscription lifecycle management: creation, status changes, price revisions."""

import logging
from collections.abc import Callable, Sequence
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any
from uuid import UUID

from subtrack.core.exceptions import NotFoundError, ValidationError
from subtrack.models.shared import ensure_utc, generate_uuid, utc_now
from subtrack.models.subscription import (
    CREATED_NOTE,
    INITIAL_PRICE_NOTE,
    PRICE_UPDATED_NOTE,
    PriceHistoryEntry,
    StatusHistoryEntry,
    Subscription,
    SubscriptionStatus,
)
from subtrack.schemas.subscription import SubscriptionCreate

logger = logging.getLogger(__name__)


def parse_amount(value: object) -> Decimal:
    """Parse a non-negative, finite decimal amount."""
    if value is None or isinstance(value, bool):
        raise ValidationError("Amount is required")
    text = str(value).strip()
    if "_" in text:
        raise ValidationError(f"Invalid amount: {value!r}")
    try:
        amount = Decimal(text)
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Invalid amount: {value!r}") from None
    if not amount.is_finite():
        raise ValidationError(f"Invalid amount: {value!r}")
    if amount < 0:
        raise ValidationError("Amount must not be negative")
    return amount


def parse_status(value: SubscriptionStatus | str) -> SubscriptionStatus:
    if isinstance(value, SubscriptionStatus):
        return value
    try:
        return SubscriptionStatus(str(value).strip().lower())
    except ValueError:
        raise ValidationError(f"Unknown status: {value!r}") from None


def _replace(subscription: Subscription, **changes: Any) -> Subscription:
    """Copy with changes applied, re-running the entity validators."""
    return Subscription.model_validate({**dict(subscription), **changes})


class SubscriptionLifecycleService:
    """Creates and mutates the subscriptions of one user's collection.

    Entities are never edited in place: each operation builds the updated
    entity completely, then swaps it into the list, so a mirrored field and
    its history entry always change together.
    """

    def __init__(
        self,
        subscriptions: list[Subscription],
        clock: Callable[[], datetime] = utc_now,
    ):
        self.subscriptions = subscriptions
        self.clock = clock

    def get(self, subscription_id: UUID | str) -> Subscription:
        return self.subscriptions[self._index_of(subscription_id)]

    def create(self, data: SubscriptionCreate) -> Subscription:
        """Create an active subscription and append it to the collection.

        1. Validate name (non-blank) and amount (present, > 0)
        2. Seed price history with the initial price
        3. Seed status history with the creation entry
        """
        name = (data.name or "").strip()
        if not name:
            raise ValidationError("Name is required")
        if data.amount is None:
            raise ValidationError("Amount is required")
        amount = parse_amount(data.amount)
        if amount <= 0:
            raise ValidationError("Amount must be greater than zero")

        now = self.clock()
        subscription = Subscription(
            id=generate_uuid(),
            name=name,
            type=data.type,
            status=SubscriptionStatus.ACTIVE,
            amount=amount,
            renewal_date=data.renewal_date,
            payment_method=data.payment_method,
            created_at=now,
            price_history=[PriceHistoryEntry(amount=amount, date=now, note=INITIAL_PRICE_NOTE)],
            status_history=[
                StatusHistoryEntry(status=SubscriptionStatus.ACTIVE, date=now, note=CREATED_NOTE)
            ],
        )
        self.subscriptions.append(subscription)
        return subscription

    def change_status(
        self,
        subscription_id: UUID | str,
        new_status: SubscriptionStatus | str,
        note: str | None = None,
    ) -> Subscription:
        """Move a subscription to any status, recording the transition.

        Every transition is allowed, including re-confirming the current status
        and reactivating a cancelled subscription.
        """
        index = self._index_of(subscription_id)
        status = parse_status(new_status)
        current = self.subscriptions[index]
        entry = StatusHistoryEntry(
            status=status,
            date=self._entry_date(current.status_history),
            note=note or f"Status changed to {status.value}",
        )
        updated = _replace(current, status=status, status_history=[*current.status_history, entry])
        self.subscriptions[index] = updated
        return updated

    def change_price(
        self,
        subscription_id: UUID | str,
        new_amount: Decimal | str | int | float,
        note: str | None = None,
    ) -> Subscription:
        """Revise the price of a subscription, recording the revision."""
        index = self._index_of(subscription_id)
        amount = parse_amount(new_amount)
        current = self.subscriptions[index]
        entry = PriceHistoryEntry(
            amount=amount,
            date=self._entry_date(current.price_history),
            note=note or PRICE_UPDATED_NOTE,
        )
        updated = _replace(current, amount=amount, price_history=[*current.price_history, entry])
        self.subscriptions[index] = updated
        return updated

    def delete(self, subscription_id: UUID | str) -> bool:
        """Remove a subscription. Unknown ids are ignored."""
        remaining = [s for s in self.subscriptions if str(s.id) != str(subscription_id)]
        removed = len(remaining) != len(self.subscriptions)
        if not removed:
            logger.warning("Subscription %s not found for deletion", subscription_id)
        self.subscriptions[:] = remaining
        return removed

    def _entry_date(self, history: Sequence[PriceHistoryEntry | StatusHistoryEntry]) -> datetime:
        """Clock time, never earlier than the last entry of the history."""
        return max(ensure_utc(self.clock()), history[-1].date)

    def _index_of(self, subscription_id: UUID | str) -> int:
        for index, subscription in enumerate(self.subscriptions):
            if str(subscription.id) == str(subscription_id):
                return index
        raise NotFoundError("Subscription", subscription_id)
