"""Dashboard totals and month-bucketed spending trends."""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from subtrack.core.exceptions import ValidationError
from subtrack.models.shared import ensure_utc, utc_now
from subtrack.models.subscription import Subscription, SubscriptionStatus, SubscriptionType
from subtrack.services.subscription_dates import (
    add_months,
    month_label,
    month_start,
    months_between,
)
from subtrack.services.subscription_filters import (
    TypeFilter,
    filter_active,
    filter_by_type,
    parse_type_filter,
)

MONTHS_PER_YEAR = 12


class ReportRange(str, Enum):
    ONE_MONTH = "1m"
    THREE_MONTHS = "3m"
    SIX_MONTHS = "6m"
    ONE_YEAR = "1y"

    @property
    def months(self) -> int:
        return _RANGE_MONTHS[self]


_RANGE_MONTHS = {
    ReportRange.ONE_MONTH: 1,
    ReportRange.THREE_MONTHS: 3,
    ReportRange.SIX_MONTHS: 6,
    ReportRange.ONE_YEAR: 12,
}


@dataclass
class Totals:
    monthly: Decimal
    yearly: Decimal


@dataclass
class DashboardTotals:
    monthly: Decimal
    yearly: Decimal
    count: int


@dataclass
class TrendBucket:
    label: str
    personal: Decimal
    business: Decimal
    total: Decimal


def _sum_amounts(subscriptions: Sequence[Subscription]) -> Decimal:
    return sum((s.amount for s in subscriptions), Decimal("0"))


def totals(
    subscriptions: Sequence[Subscription], subscription_type: TypeFilter | SubscriptionType | str
) -> Totals:
    """Monthly spend on active subscriptions of one type, and its yearly run-rate."""
    selected = parse_type_filter(subscription_type)
    if selected is TypeFilter.ALL:
        raise ValidationError("A subscription type is required")
    monthly = _sum_amounts(filter_active(filter_by_type(subscriptions, selected)))
    return Totals(monthly=monthly, yearly=monthly * MONTHS_PER_YEAR)


def dashboard_totals(
    subscriptions: Sequence[Subscription], type_filter: TypeFilter | str = TypeFilter.ALL
) -> DashboardTotals:
    """Totals for the dashboard filter: type first, then active only."""
    active = filter_active(filter_by_type(subscriptions, type_filter))
    monthly = _sum_amounts(active)
    return DashboardTotals(monthly=monthly, yearly=monthly * MONTHS_PER_YEAR, count=len(active))


@dataclass(frozen=True)
class MonthlyTrend:
    """Month buckets from ``start`` to ``end``, computed on iteration.

    Iterating again recomputes the same buckets from the snapshot taken when
    the trend was built. Each bucket counts a subscription when it was
    created on or before the first of that month and its *current* status is
    active, so a status change today also changes past buckets.
    """

    subscriptions: tuple[Subscription, ...]
    start: datetime
    end: datetime

    def bucket_dates(self) -> Iterator[datetime]:
        current = month_start(self.start)
        while current <= self.end:
            yield current
            current = add_months(current, 1)

    def __iter__(self) -> Iterator[TrendBucket]:
        for bucket_date in self.bucket_dates():
            yield self._bucket(bucket_date)

    def __len__(self) -> int:
        return months_between(self.start, self.end)

    def _bucket(self, bucket_date: datetime) -> TrendBucket:
        personal = Decimal("0")
        business = Decimal("0")
        for subscription in self.subscriptions:
            if subscription.created_at > bucket_date:
                continue
            if subscription.status != SubscriptionStatus.ACTIVE:
                continue
            if subscription.type == SubscriptionType.PERSONAL:
                personal += subscription.amount
            else:
                business += subscription.amount
        return TrendBucket(
            label=month_label(bucket_date),
            personal=personal,
            business=business,
            total=personal + business,
        )


def parse_report_range(value: ReportRange | str) -> ReportRange:
    try:
        return ReportRange(value.value if isinstance(value, Enum) else str(value).strip().lower())
    except ValueError:
        raise ValidationError(f"Unknown report range: {value!r}") from None


def time_series(
    subscriptions: Sequence[Subscription],
    range_spec: ReportRange | str = ReportRange.ONE_YEAR,
    now: datetime | None = None,
) -> MonthlyTrend:
    """Trend from the first of the month ``range_spec`` months back, up to now."""
    report_range = parse_report_range(range_spec)
    end = ensure_utc(now) if now is not None else utc_now()
    start = add_months(month_start(end), -report_range.months)
    return MonthlyTrend(subscriptions=tuple(subscriptions), start=start, end=end)


def custom_time_series(
    subscriptions: Sequence[Subscription],
    start: date | datetime | None = None,
    end: date | datetime | None = None,
    now: datetime | None = None,
) -> MonthlyTrend:
    """Trend over an explicit range.

    ``start`` defaults to the earliest creation date in the collection and
    ``end`` defaults to now. An end before the start gives an empty trend.
    """
    current = ensure_utc(now) if now is not None else utc_now()
    range_end = ensure_utc(end) if end is not None else current
    if start is not None:
        range_start = ensure_utc(start)
    elif subscriptions:
        range_start = min(s.created_at for s in subscriptions)
    else:
        range_start = current
    return MonthlyTrend(
        subscriptions=tuple(subscriptions), start=month_start(range_start), end=range_end
    )
