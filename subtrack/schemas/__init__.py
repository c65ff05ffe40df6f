from subtrack.schemas.dashboard import (
    DashboardOverviewResponse,
    TotalsResponse,
    TrendDataPoint,
    TrendResponse,
)
from subtrack.schemas.subscription import (
    PriceChangeRequest,
    StatusChangeRequest,
    SubscriptionCreate,
)

__all__ = [
    "DashboardOverviewResponse",
    "PriceChangeRequest",
    "StatusChangeRequest",
    "SubscriptionCreate",
    "TotalsResponse",
    "TrendDataPoint",
    "TrendResponse",
]
