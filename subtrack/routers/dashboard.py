from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from subtrack.core.config import settings
from subtrack.core.exceptions import ValidationError
from subtrack.routers.subscriptions import get_subscription_service
from subtrack.schemas.dashboard import (
    DashboardOverviewResponse,
    TotalsResponse,
    TrendDataPoint,
    TrendResponse,
)
from subtrack.services.dashboard_service import (
    MonthlyTrend,
    custom_time_series,
    dashboard_totals,
    parse_report_range,
    time_series,
    totals,
)
from subtrack.services.subscription_filters import dashboard_subscriptions, parse_type_filter
from subtrack.services.subscription_service import SubscriptionService

router = APIRouter()


def _trend_response(label: str, trend: MonthlyTrend) -> TrendResponse:
    return TrendResponse(
        range=label,
        currency=settings.CURRENCY,
        buckets=[
            TrendDataPoint(
                label=bucket.label,
                personal=float(bucket.personal),
                business=float(bucket.business),
                total=float(bucket.total),
            )
            for bucket in trend
        ],
    )


@router.get(
    "/overview",
    response_model=DashboardOverviewResponse,
    summary="Get dashboard overview",
    responses={401: {"description": "Unauthorized – missing user session"}},
)
async def get_overview(
    filter: str = Query(default="all", description="all, personal or business"),
    service: SubscriptionService = Depends(get_subscription_service),
) -> DashboardOverviewResponse:
    """Totals and upcoming renewals for active subscriptions matching the filter."""
    subscriptions = service.load()
    try:
        selected = parse_type_filter(filter)
        summary = dashboard_totals(subscriptions, selected)
        upcoming = dashboard_subscriptions(subscriptions, selected)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return DashboardOverviewResponse(
        filter=selected.value,
        monthly=float(summary.monthly),
        yearly=float(summary.yearly),
        active_count=summary.count,
        currency=settings.CURRENCY,
        subscriptions=upcoming,
    )


@router.get(
    "/totals/{subscription_type}",
    response_model=TotalsResponse,
    summary="Get totals for one subscription type",
    responses={401: {"description": "Unauthorized – missing user session"}},
)
async def get_totals(
    subscription_type: str,
    service: SubscriptionService = Depends(get_subscription_service),
) -> TotalsResponse:
    """Monthly spend and yearly run-rate of active subscriptions of one type."""
    try:
        selected = parse_type_filter(subscription_type)
        result = totals(service.load(), selected)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return TotalsResponse(
        type=selected.value,
        monthly=float(result.monthly),
        yearly=float(result.yearly),
        currency=settings.CURRENCY,
    )


@router.get(
    "/trend",
    response_model=TrendResponse,
    summary="Get monthly spending trend",
    responses={401: {"description": "Unauthorized – missing user session"}},
)
async def get_trend(
    range_spec: str | None = Query(default=None, alias="range", description="1m, 3m, 6m or 1y"),
    service: SubscriptionService = Depends(get_subscription_service),
) -> TrendResponse:
    """Month-by-month spending on active subscriptions, oldest month first."""
    try:
        report_range = parse_report_range(range_spec or settings.DEFAULT_REPORT_RANGE)
        trend = time_series(service.load(), report_range)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return _trend_response(report_range.value, trend)


@router.get(
    "/trend/custom",
    response_model=TrendResponse,
    summary="Get spending trend for a custom period",
    responses={401: {"description": "Unauthorized – missing user session"}},
)
async def get_custom_trend(
    start_date: date | None = Query(None, description="Period start date (YYYY-MM-DD)"),
    end_date: date | None = Query(None, description="Period end date (YYYY-MM-DD)"),
    service: SubscriptionService = Depends(get_subscription_service),
) -> TrendResponse:
    """Spending trend from the first subscription (or start_date) to today (or end_date)."""
    trend = custom_time_series(service.load(), start=start_date, end=end_date)
    return _trend_response("custom", trend)
