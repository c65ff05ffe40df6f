"""Subscription entity and its append-only price and status histories."""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator, model_validator
from pydantic.alias_generators import to_camel

from subtrack.models.shared import ensure_utc

INITIAL_PRICE_NOTE = "Initial price"
CREATED_NOTE = "Subscription created"
PRICE_UPDATED_NOTE = "Price updated"


class SubscriptionStatus(str, Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    CANCELLED = "cancelled"


class SubscriptionType(str, Enum):
    PERSONAL = "personal"
    BUSINESS = "business"


class _Record(BaseModel):
    """Stored records use camelCase keys; snake_case is accepted on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PriceHistoryEntry(_Record):
    amount: Decimal = Field(..., ge=0)
    date: datetime
    note: str = ""

    @field_validator("date")
    @classmethod
    def _utc_date(cls, value: datetime) -> datetime:
        return ensure_utc(value)


class StatusHistoryEntry(_Record):
    status: SubscriptionStatus
    date: datetime
    note: str = ""

    @field_validator("date")
    @classmethod
    def _utc_date(cls, value: datetime) -> datetime:
        return ensure_utc(value)


class Subscription(_Record):
    """A recurring payment tracked for one user.

    ``amount`` and ``status`` mirror the last entry of ``price_history`` and
    ``status_history``; the validator rejects records where they disagree.
    """

    id: UUID
    name: str = Field(..., min_length=1)
    type: SubscriptionType
    status: SubscriptionStatus
    amount: Decimal = Field(..., ge=0)
    renewal_date: date | None = None
    payment_method: str = ""
    created_at: datetime
    price_history: list[PriceHistoryEntry] = Field(..., min_length=1)
    status_history: list[StatusHistoryEntry] = Field(..., min_length=1)

    @field_validator("created_at")
    @classmethod
    def _utc_created_at(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @model_validator(mode="after")
    def _check_history(self) -> "Subscription":
        if self.amount != self.price_history[-1].amount:
            raise ValueError("amount must equal the latest price history entry")
        if self.status != self.status_history[-1].status:
            raise ValueError("status must equal the latest status history entry")
        for history in (self.price_history, self.status_history):
            dates = [entry.date for entry in history]
            if any(later < earlier for earlier, later in zip(dates, dates[1:], strict=False)):
                raise ValueError("history entries must be in chronological order")
        return self


subscription_list_adapter = TypeAdapter(list[Subscription])


def dump_subscriptions(subscriptions: list[Subscription]) -> list[dict]:
    """Serialize a collection to JSON-compatible records."""
    return subscription_list_adapter.dump_python(subscriptions, mode="json", by_alias=True)


def load_subscriptions(records: list[dict]) -> list[Subscription]:
    """Validate stored records back into entities."""
    return subscription_list_adapter.validate_python(records)
