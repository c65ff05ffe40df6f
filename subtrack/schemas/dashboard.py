from pydantic import BaseModel

from subtrack.models.subscription import Subscription


class TotalsResponse(BaseModel):
    type: str
    monthly: float
    yearly: float
    currency: str


class DashboardOverviewResponse(BaseModel):
    filter: str
    monthly: float
    yearly: float
    active_count: int
    currency: str
    subscriptions: list[Subscription]


class TrendDataPoint(BaseModel):
    label: str
    personal: float
    business: float
    total: float


class TrendResponse(BaseModel):
    range: str
    currency: str
    buckets: list[TrendDataPoint]
