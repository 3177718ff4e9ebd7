"""구독 라우터 — 채널 구독 토글, 구독자/구독 채널 조회.

Subscriptions Router — Toggle a subscription to a channel, read the
subscription status, and list subscribers or subscribed channels.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, get_optional_user
from app.database import get_db
from app.models.user import User
from app.schemas.common import OwnerSummary
from app.schemas.engagement import SubscriptionStatusResponse, SubscriptionToggleResponse
from app.services.subscription_service import subscription_service

router: APIRouter = APIRouter()


@router.post("/c/{channel_id}", response_model=SubscriptionToggleResponse)
async def toggle_subscription(
    channel_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> SubscriptionToggleResponse:
    """구독 토글 — {"state": "subscribed" | "unsubscribed"}."""
    result: SubscriptionToggleResponse = await subscription_service.toggle_subscription(
        db, current_user, channel_id
    )
    await db.commit()
    return result


@router.get("/c/{channel_id}", response_model=list[OwnerSummary])
async def get_channel_subscribers(
    channel_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[OwnerSummary]:
    """채널 구독자 목록 — Subscribers of a channel."""
    return await subscription_service.get_channel_subscribers(db, channel_id)


@router.get("/c/{channel_id}/status", response_model=SubscriptionStatusResponse)
async def get_subscription_status(
    channel_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    viewer: Annotated[User | None, Depends(get_optional_user)],
) -> SubscriptionStatusResponse:
    return await subscription_service.get_status(db, channel_id, viewer)


@router.get("/u/{subscriber_id}", response_model=list[OwnerSummary])
async def get_subscribed_channels(
    subscriber_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[OwnerSummary]:
    """사용자가 구독한 채널 목록 — Channels a user subscribes to."""
    return await subscription_service.get_subscribed_channels(db, subscriber_id)
