"""구독 서비스 — 채널 구독 토글과 구독자/구독 채널 조회.

Subscription Service — Business logic for channel subscriptions.
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.subscription_repository import subscription_repository
from app.repositories.user_repository import user_repository
from app.schemas.common import OwnerSummary
from app.schemas.engagement import SubscriptionStatusResponse, SubscriptionToggleResponse
from app.services.user_service import to_owner_summary
from app.utils.exceptions import BadRequestError, NotFoundError
from app.utils.ids import parse_id

logger = logging.getLogger(__name__)


class SubscriptionService:
    """구독 비즈니스 로직 서비스.

    Service for (subscriber, channel) edges. Every user is a channel.
    """

    async def _get_channel(self, db: AsyncSession, channel_id: str) -> User:
        parsed_id: UUID = parse_id(channel_id, "channel")
        channel: User | None = await user_repository.get_by_id(db, parsed_id)
        if channel is None:
            raise NotFoundError("Channel not found")
        return channel

    async def toggle_subscription(
        self,
        db: AsyncSession,
        subscriber: User,
        channel_id: str,
    ) -> SubscriptionToggleResponse:
        """채널 구독을 토글합니다.

        Flip the subscription from the current user to a channel.

        Raises:
            BadRequestError: 잘못된 id 또는 자기 자신 구독 (Malformed id or self-subscription)
            NotFoundError: 채널 없음 (Channel does not exist)
        """
        parsed_id: UUID = parse_id(channel_id, "channel")
        if parsed_id == subscriber.id:
            raise BadRequestError("Cannot subscribe to your own channel")
        channel: User = await self._get_channel(db, channel_id)

        subscribed: bool = await subscription_repository.toggle(db, subscriber.id, channel.id)
        logger.debug(
            "User %s %s channel %s",
            subscriber.id,
            "subscribed to" if subscribed else "unsubscribed from",
            channel.id,
        )
        return SubscriptionToggleResponse(state="subscribed" if subscribed else "unsubscribed")

    async def count_subscribers(self, db: AsyncSession, channel_id: UUID) -> int:
        return await subscription_repository.count_subscribers(db, channel_id)

    async def get_status(
        self,
        db: AsyncSession,
        channel_id: str,
        viewer: User | None,
    ) -> SubscriptionStatusResponse:
        """채널 구독 상태 — 구독자 수와 조회자 구독 여부 (익명이면 False)."""
        channel: User = await self._get_channel(db, channel_id)
        is_subscribed: bool = False
        if viewer is not None:
            is_subscribed = await subscription_repository.is_subscribed(db, viewer.id, channel.id)
        return SubscriptionStatusResponse(
            channel_id=str(channel.id),
            subscribers_count=await self.count_subscribers(db, channel.id),
            is_subscribed=is_subscribed,
        )

    async def get_channel_subscribers(
        self,
        db: AsyncSession,
        channel_id: str,
    ) -> list[OwnerSummary]:
        """채널 구독자 프로필 목록 — Subscriber profiles of a channel."""
        channel: User = await self._get_channel(db, channel_id)
        subscribers: list[User] = await subscription_repository.get_subscribers(db, channel.id)
        return [to_owner_summary(u) for u in subscribers]

    async def get_subscribed_channels(
        self,
        db: AsyncSession,
        subscriber_id: str,
    ) -> list[OwnerSummary]:
        """사용자가 구독한 채널 프로필 목록 — Channels a user subscribes to."""
        parsed_id: UUID = parse_id(subscriber_id, "subscriber")
        subscriber: User | None = await user_repository.get_by_id(db, parsed_id)
        if subscriber is None:
            raise NotFoundError("User not found")
        channels: list[User] = await subscription_repository.get_subscribed_channels(db, parsed_id)
        return [to_owner_summary(u) for u in channels]


# 싱글턴 인스턴스 — Singleton instance
subscription_service: SubscriptionService = SubscriptionService()
