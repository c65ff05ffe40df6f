from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from subtrack.models.subscription import SubscriptionStatus, SubscriptionType


class SubscriptionCreate(BaseModel):
    """Input for a new subscription.

    Name and amount rules are enforced by the lifecycle service so that the
    same checks apply whatever the entry point.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = ""
    amount: Decimal | None = None
    type: SubscriptionType = SubscriptionType.PERSONAL
    renewal_date: date | None = None
    payment_method: str = ""


class StatusChangeRequest(BaseModel):
    """Request body for a status transition."""

    status: SubscriptionStatus
    note: str | None = Field(default=None, max_length=500)


class PriceChangeRequest(BaseModel):
    """Request body for a price revision."""

    amount: Decimal | str
    note: str | None = Field(default=None, max_length=500)
