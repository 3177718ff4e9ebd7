"""동영상 레포지토리 — 동영상 조회/목록/통계 쿼리.

Video Repository — Video lookups with the owner joined, filtered listing
queries, view counting, and per-channel statistics.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.content import Comment, PlaylistVideo, Video
from app.models.engagement import Like, LikeTargetKind
from app.repositories.base import BaseRepository


class VideoRepository(BaseRepository[Video]):
    """동영상 레포지토리.

    Extends:
        BaseRepository[Video]
    """

    def __init__(self) -> None:
        super().__init__(Video)

    async def get_with_owner(self, db: AsyncSession, video_id: UUID) -> Video | None:
        """소유자 프로필을 함께 로드하여 동영상을 조회합니다.

        Retrieve a video with its owner eager-loaded.
        """
        query: Select = (
            select(Video)
            .options(selectinload(Video.owner))
            .where(Video.id == video_id)
            .execution_options(populate_existing=True)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_many_with_owner(
        self,
        db: AsyncSession,
        video_ids: Sequence[UUID],
    ) -> dict[UUID, Video]:
        """여러 동영상을 id → Video 딕셔너리로 조회합니다.

        Batch-load videos with owners, keyed by id. Missing ids are absent.
        """
        if not video_ids:
            return {}
        query: Select = (
            select(Video)
            .options(selectinload(Video.owner))
            .where(Video.id.in_(list(set(video_ids))))
        )
        result = await db.execute(query)
        return {v.id: v for v in result.scalars().all()}

    def build_list_query(
        self,
        order_by: list,
        search: str | None = None,
        owner_id: UUID | None = None,
        published_only: bool = True,
    ) -> Select:
        """목록 쿼리를 구성합니다.

        Build the listing query: optional case-insensitive search over title
        and description, optional owner filter, and the caller's total order.

        Args:
            order_by: 정렬 절 (ORDER BY clauses, must end with an id tie-break)
            search: 검색어 (Free-text filter)
            owner_id: 소유자 필터 (Owner filter)
            published_only: 공개 동영상만 (Only published videos)

        Returns:
            Select: 구성된 쿼리 (Built query)
        """
        query: Select = select(Video).options(selectinload(Video.owner))
        if search:
            query = query.where(
                or_(
                    Video.title.icontains(search, autoescape=True),
                    Video.description.icontains(search, autoescape=True),
                )
            )
        if owner_id is not None:
            query = query.where(Video.owner_id == owner_id)
        if published_only:
            query = query.where(Video.is_published.is_(True))
        return query.order_by(*order_by)

    async def get_trending(self, db: AsyncSession, limit: int) -> Sequence[Video]:
        """인기 동영상 — 조회수 내림차순, 최신 업로드 우선.

        Trending: published videos by views desc, then newest, then id.
        """
        query: Select = (
            select(Video)
            .options(selectinload(Video.owner))
            .where(Video.is_published.is_(True))
            .order_by(Video.views.desc(), Video.created_at.desc(), Video.id.desc())
            .limit(limit)
        )
        result = await db.execute(query)
        return result.scalars().all()

    async def increment_views(self, db: AsyncSession, video_id: UUID) -> bool:
        """조회수를 원자적으로 1 증가시킵니다.

        Atomically increment the view counter in a single UPDATE. A view is
        not an edit, so `updated_at` is left as it was. Loaded instances are
        not synchronized; refresh them to read the new value.
        """
        result = await db.execute(
            update(Video)
            .where(Video.id == video_id)
            .values(views=Video.views + 1, updated_at=Video.updated_at)
            .execution_options(synchronize_session=False)
        )
        return (result.rowcount or 0) > 0

    async def get_by_owner(self, db: AsyncSession, owner_id: UUID) -> Sequence[Video]:
        """채널의 모든 동영상 (최신순) — All videos of a channel, newest first."""
        query: Select = (
            select(Video)
            .options(selectinload(Video.owner))
            .where(Video.owner_id == owner_id)
            .order_by(Video.created_at.desc(), Video.id.desc())
        )
        result = await db.execute(query)
        return result.scalars().all()

    async def channel_totals(self, db: AsyncSession, owner_id: UUID) -> tuple[int, int]:
        """채널의 (동영상 수, 총 조회수) — (video count, total views) of a channel."""
        query: Select = select(
            func.count(Video.id), func.coalesce(func.sum(Video.views), 0)
        ).where(Video.owner_id == owner_id)
        total_videos, total_views = (await db.execute(query)).one()
        return int(total_videos or 0), int(total_views or 0)

    async def channel_video_likes(self, db: AsyncSession, owner_id: UUID) -> int:
        """채널 동영상들이 받은 총 좋아요 수 — Likes received by a channel's videos."""
        query: Select = (
            select(func.count(Like.id))
            .select_from(Like)
            .join(Video, Video.id == Like.target_id)
            .where(
                Like.target_kind == LikeTargetKind.VIDEO.value,
                Video.owner_id == owner_id,
            )
        )
        return (await db.execute(query)).scalar() or 0

    async def delete_with_dependents(self, db: AsyncSession, video: Video) -> None:
        """동영상과 딸린 댓글/좋아요/재생목록 항목을 함께 삭제합니다.

        Delete a video together with its comments, the likes on the video and
        on its comments, and its playlist entries.
        """
        comment_ids = select(Comment.id).where(Comment.video_id == video.id)
        await db.execute(
            delete(Like)
            .where(Like.target_kind == LikeTargetKind.COMMENT.value, Like.target_id.in_(comment_ids))
            .execution_options(synchronize_session=False)
        )
        await db.execute(
            delete(Like)
            .where(Like.target_kind == LikeTargetKind.VIDEO.value, Like.target_id == video.id)
            .execution_options(synchronize_session=False)
        )
        await db.execute(
            delete(Comment).where(Comment.video_id == video.id).execution_options(synchronize_session=False)
        )
        await db.execute(
            delete(PlaylistVideo).where(PlaylistVideo.video_id == video.id).execution_options(synchronize_session=False)
        )
        await db.execute(delete(Video).where(Video.id == video.id).execution_options(synchronize_session=False))
        db.expunge(video)
        await db.flush()


# 싱글턴 인스턴스 — Singleton instance
video_repository: VideoRepository = VideoRepository()
