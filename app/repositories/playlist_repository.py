"""재생목록 레포지토리 — 재생목록과 멤버 동영상 관리.

Playlist Repository — Playlist lookups with ordered member videos, and
membership add/remove over the (playlist, video) pair.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.content import Playlist, PlaylistVideo, Video
from app.repositories.base import BaseRepository, insert_ignoring_conflict


class PlaylistRepository(BaseRepository[Playlist]):
    """재생목록 레포지토리.

    Extends:
        BaseRepository[Playlist]
    """

    def __init__(self) -> None:
        super().__init__(Playlist)

    async def get_with_owner(self, db: AsyncSession, playlist_id: UUID) -> Playlist | None:
        query: Select = (
            select(Playlist)
            .options(selectinload(Playlist.owner))
            .where(Playlist.id == playlist_id)
            .execution_options(populate_existing=True)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_by_owner(self, db: AsyncSession, owner_id: UUID) -> Sequence[Playlist]:
        """사용자의 재생목록 (최신순) — A user's playlists, newest first."""
        return await self.find(
            db,
            filters={"owner_id": owner_id},
            order_by=[Playlist.created_at.desc(), Playlist.id.desc()],
        )

    async def get_videos(self, db: AsyncSession, playlist_id: UUID) -> list[Video]:
        """재생목록의 동영상을 추가 순서대로 조회합니다.

        Member videos of a playlist in insertion order, owners eager-loaded.
        """
        query: Select = (
            select(Video)
            .join(PlaylistVideo, PlaylistVideo.video_id == Video.id)
            .options(selectinload(Video.owner))
            .where(PlaylistVideo.playlist_id == playlist_id)
            .order_by(PlaylistVideo.position.asc(), PlaylistVideo.id.asc())
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def count_videos(self, db: AsyncSession, playlist_ids: Sequence[UUID]) -> dict[UUID, int]:
        """재생목록별 동영상 수 — Video count per playlist; absent ids count 0."""
        if not playlist_ids:
            return {}
        query: Select = (
            select(PlaylistVideo.playlist_id, func.count(PlaylistVideo.id))
            .where(PlaylistVideo.playlist_id.in_(list(set(playlist_ids))))
            .group_by(PlaylistVideo.playlist_id)
        )
        rows = (await db.execute(query)).all()
        return {playlist_id: count for playlist_id, count in rows}

    async def add_video(self, db: AsyncSession, playlist_id: UUID, video_id: UUID) -> bool:
        """재생목록 끝에 동영상을 추가합니다. 이미 있으면 아무것도 하지 않습니다.

        Append a video at the end of the playlist. Adding an existing member
        is a no-op.

        Returns:
            bool: 새로 추가되었으면 True (True if the video was newly added)
        """
        last_position: int = (
            await db.execute(
                select(func.coalesce(func.max(PlaylistVideo.position), 0)).where(
                    PlaylistVideo.playlist_id == playlist_id
                )
            )
        ).scalar() or 0
        return await insert_ignoring_conflict(
            db,
            PlaylistVideo,
            {"playlist_id": playlist_id, "video_id": video_id, "position": last_position + 1},
            ["playlist_id", "video_id"],
        )

    async def remove_video(self, db: AsyncSession, playlist_id: UUID, video_id: UUID) -> bool:
        """재생목록에서 동영상을 제거합니다 — Returns False if it was not a member."""
        result = await db.execute(
            delete(PlaylistVideo)
            .where(PlaylistVideo.playlist_id == playlist_id, PlaylistVideo.video_id == video_id)
            .execution_options(synchronize_session=False)
        )
        return (result.rowcount or 0) > 0

    async def delete_with_entries(self, db: AsyncSession, playlist: Playlist) -> None:
        """재생목록과 멤버십 행을 함께 삭제합니다 — Delete a playlist and its entries."""
        await db.execute(
            delete(PlaylistVideo)
            .where(PlaylistVideo.playlist_id == playlist.id)
            .execution_options(synchronize_session=False)
        )
        await db.execute(
            delete(Playlist).where(Playlist.id == playlist.id).execution_options(synchronize_session=False)
        )
        db.expunge(playlist)
        await db.flush()


# 싱글턴 인스턴스 — Singleton instance
playlist_repository: PlaylistRepository = PlaylistRepository()
