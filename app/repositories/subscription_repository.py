"""구독 레포지토리 — 구독 엣지의 원자적 토글과 채널 집계.

Subscription Repository — Atomic toggle over (subscriber, channel) edges and
channel-side aggregations.
"""

from uuid import UUID

from sqlalchemy import Select, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.engagement import Subscription
from app.models.user import User
from app.repositories.base import BaseRepository, insert_ignoring_conflict


class SubscriptionRepository(BaseRepository[Subscription]):
    """구독 엣지 레포지토리.

    Extends:
        BaseRepository[Subscription]
    """

    def __init__(self) -> None:
        super().__init__(Subscription)

    async def toggle(
        self,
        db: AsyncSession,
        subscriber_id: UUID,
        channel_id: UUID,
    ) -> bool:
        """구독 엣지를 원자적으로 토글합니다.

        Atomically flip the (subscriber, channel) edge.

        Returns:
            bool: 토글 후 구독 중이면 True (True if subscribed afterwards)
        """
        deleted = await db.execute(
            delete(Subscription).where(
                Subscription.subscriber_id == subscriber_id,
                Subscription.channel_id == channel_id,
            ).execution_options(synchronize_session=False)
        )
        if (deleted.rowcount or 0) > 0:
            return False

        await insert_ignoring_conflict(
            db,
            Subscription,
            {"subscriber_id": subscriber_id, "channel_id": channel_id},
            ["subscriber_id", "channel_id"],
        )
        return True

    async def is_subscribed(
        self,
        db: AsyncSession,
        subscriber_id: UUID,
        channel_id: UUID,
    ) -> bool:
        return await self.exists(
            db, {"subscriber_id": subscriber_id, "channel_id": channel_id}
        )

    async def count_subscribers(self, db: AsyncSession, channel_id: UUID) -> int:
        """채널의 구독자 수 — Subscriber count of a channel."""
        query: Select = select(func.count()).select_from(Subscription).where(
            Subscription.channel_id == channel_id
        )
        return (await db.execute(query)).scalar() or 0

    async def count_subscriptions(self, db: AsyncSession, subscriber_id: UUID) -> int:
        """사용자가 구독 중인 채널 수 — Number of channels a user subscribes to."""
        query: Select = select(func.count()).select_from(Subscription).where(
            Subscription.subscriber_id == subscriber_id
        )
        return (await db.execute(query)).scalar() or 0

    async def get_subscribers(self, db: AsyncSession, channel_id: UUID) -> list[User]:
        """채널 구독자 목록 (최근 구독 순).

        Subscribers of a channel, most recent subscription first.
        """
        query: Select = (
            select(User)
            .join(Subscription, Subscription.subscriber_id == User.id)
            .where(Subscription.channel_id == channel_id)
            .order_by(Subscription.created_at.desc(), Subscription.id.desc())
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_subscribed_channels(self, db: AsyncSession, subscriber_id: UUID) -> list[User]:
        """사용자가 구독한 채널 목록 (최근 구독 순).

        Channels a user subscribes to, most recent subscription first.
        """
        query: Select = (
            select(User)
            .join(Subscription, Subscription.channel_id == User.id)
            .where(Subscription.subscriber_id == subscriber_id)
            .order_by(Subscription.created_at.desc(), Subscription.id.desc())
        )
        result = await db.execute(query)
        return list(result.scalars().all())


# 싱글턴 인스턴스 — Singleton instance
subscription_repository: SubscriptionRepository = SubscriptionRepository()
