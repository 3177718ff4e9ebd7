"""채널 서비스 — 채널 프로필, 시청 기록, 대시보드 통계.

Channel Service — Read-side aggregations over a user's channel: the channel
profile with subscription counts, the watch-history view, and the owner
dashboard.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.subscription_repository import subscription_repository
from app.repositories.user_repository import user_repository
from app.repositories.video_repository import video_repository
from app.schemas.content import VideoResponse
from app.schemas.engagement import ChannelStatsResponse
from app.schemas.user import ChannelProfileResponse
from app.services.video_service import video_service
from app.utils.exceptions import BadRequestError, NotFoundError


class ChannelService:
    """채널 집계 서비스."""

    async def get_channel_profile(
        self,
        db: AsyncSession,
        username: str,
        viewer: User | None = None,
    ) -> ChannelProfileResponse:
        """사용자명으로 채널 프로필을 조회합니다.

        Channel view of a user: subscriber count, the number of channels the
        user subscribes to, and whether the viewer is subscribed (False when
        anonymous).

        Raises:
            BadRequestError: 빈 사용자명 (Blank username)
            NotFoundError: 채널 없음 (Unknown channel)
        """
        if not username or not username.strip():
            raise BadRequestError("Username is missing")
        channel: User | None = await user_repository.get_by_username(db, username.strip())
        if channel is None:
            raise NotFoundError("Channel does not exist")

        is_subscribed: bool = False
        if viewer is not None:
            is_subscribed = await subscription_repository.is_subscribed(db, viewer.id, channel.id)

        return ChannelProfileResponse(
            id=str(channel.id),
            username=channel.username,
            full_name=channel.full_name,
            email=channel.email,
            avatar=channel.avatar,
            cover_image=channel.cover_image,
            subscribers_count=await subscription_repository.count_subscribers(db, channel.id),
            channels_subscribed_to_count=await subscription_repository.count_subscriptions(
                db, channel.id
            ),
            is_subscribed=is_subscribed,
        )

    async def get_watch_history(self, db: AsyncSession, user: User) -> list[VideoResponse]:
        """시청 기록을 동영상 정보와 함께 반환합니다.

        The user's watch history joined with videos and owners, in stored
        order. Entries whose video no longer exists are skipped.
        """
        video_ids: list[UUID] = await user_repository.get_watch_history_ids(db, user.id)
        return await video_service.get_videos_in_order(db, video_ids, user.id)

    async def get_stats(self, db: AsyncSession, user: User) -> ChannelStatsResponse:
        """채널 대시보드 통계 — Views, subscribers, videos, and likes received."""
        total_videos, total_views = await video_repository.channel_totals(db, user.id)
        return ChannelStatsResponse(
            total_views=total_views,
            total_subscribers=await subscription_repository.count_subscribers(db, user.id),
            total_videos=total_videos,
            total_likes=await video_repository.channel_video_likes(db, user.id),
        )

    async def get_videos(self, db: AsyncSession, user: User) -> list[VideoResponse]:
        """채널의 모든 동영상 (비공개 포함, 최신순)."""
        return await video_service.get_channel_videos(db, user.id, user.id)


# 싱글턴 인스턴스 — Singleton instance
channel_service: ChannelService = ChannelService()
