from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from subtrack.core.auth import UserSession, get_current_user
from subtrack.core.database import get_db
from subtrack.core.exceptions import NotFoundError, ValidationError
from subtrack.models.subscription import Subscription
from subtrack.repositories.subscription_repository import SqlSubscriptionStore
from subtrack.schemas.subscription import (
    PriceChangeRequest,
    StatusChangeRequest,
    SubscriptionCreate,
)
from subtrack.services.subscription_service import SubscriptionService

router = APIRouter()


def get_subscription_service(
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_user),
) -> SubscriptionService:
    return SubscriptionService(SqlSubscriptionStore(db), session)


@router.get(
    "/",
    response_model=list[Subscription],
    summary="List subscriptions",
    responses={401: {"description": "Unauthorized – missing user session"}},
)
async def list_subscriptions(
    type: str = Query(default="all", description="all, personal or business"),
    service: SubscriptionService = Depends(get_subscription_service),
) -> list[Subscription]:
    """List subscriptions of every status, in the order they were added."""
    try:
        return service.list_subscriptions(type)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


@router.post(
    "/",
    response_model=Subscription,
    status_code=201,
    summary="Create subscription",
    responses={
        401: {"description": "Unauthorized – missing user session"},
        422: {"description": "Invalid name or amount"},
    },
)
async def create_subscription(
    data: SubscriptionCreate,
    service: SubscriptionService = Depends(get_subscription_service),
) -> Subscription:
    """Create an active subscription with its initial price and status entries."""
    try:
        return service.create(data)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


@router.get(
    "/{subscription_id}",
    response_model=Subscription,
    summary="Get subscription",
    responses={
        401: {"description": "Unauthorized – missing user session"},
        404: {"description": "Subscription not found"},
    },
)
async def get_subscription(
    subscription_id: UUID,
    service: SubscriptionService = Depends(get_subscription_service),
) -> Subscription:
    """Get a subscription by ID, including its full history."""
    try:
        return service.get(subscription_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.post(
    "/{subscription_id}/status",
    response_model=Subscription,
    summary="Change subscription status",
    responses={
        401: {"description": "Unauthorized – missing user session"},
        404: {"description": "Subscription not found"},
    },
)
async def change_subscription_status(
    subscription_id: UUID,
    data: StatusChangeRequest,
    service: SubscriptionService = Depends(get_subscription_service),
) -> Subscription:
    """Move a subscription to any status; every transition is recorded."""
    try:
        return service.change_status(subscription_id, data.status, data.note)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.post(
    "/{subscription_id}/price",
    response_model=Subscription,
    summary="Change subscription price",
    responses={
        401: {"description": "Unauthorized – missing user session"},
        404: {"description": "Subscription not found"},
        422: {"description": "Invalid amount"},
    },
)
async def change_subscription_price(
    subscription_id: UUID,
    data: PriceChangeRequest,
    service: SubscriptionService = Depends(get_subscription_service),
) -> Subscription:
    """Record a new price for a subscription."""
    try:
        return service.change_price(subscription_id, data.amount, data.note)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


@router.delete(
    "/{subscription_id}",
    status_code=204,
    summary="Delete subscription",
    responses={401: {"description": "Unauthorized – missing user session"}},
)
async def delete_subscription(
    subscription_id: UUID,
    service: SubscriptionService = Depends(get_subscription_service),
) -> None:
    """Delete a subscription and its history. Unknown IDs are ignored."""
    service.delete(subscription_id)
