"""재생목록 서비스 — 재생목록 CRUD와 동영상 추가/제거.

Playlist Service — Business logic for playlists: CRUD with ownership checks,
and idempotent add/remove of member videos.
"""

import logging
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.content import Playlist, Video
from app.models.user import User
from app.repositories.playlist_repository import playlist_repository
from app.repositories.user_repository import user_repository
from app.repositories.video_repository import video_repository
from app.schemas.content import (
    PlaylistCreate,
    PlaylistDetailResponse,
    PlaylistResponse,
    PlaylistUpdate,
    VideoResponse,
)
from app.services.user_service import to_owner_summary
from app.services.video_service import video_service
from app.utils.exceptions import BadRequestError, ForbiddenError, NotFoundError
from app.utils.ids import parse_id

logger = logging.getLogger(__name__)


class PlaylistService:
    """재생목록 비즈니스 로직 서비스."""

    def _to_response(self, playlist: Playlist, video_count: int = 0) -> PlaylistResponse:
        return PlaylistResponse(
            id=str(playlist.id),
            name=playlist.name,
            description=playlist.description,
            owner_id=str(playlist.owner_id),
            video_count=video_count,
            created_at=playlist.created_at,
            updated_at=playlist.updated_at,
        )

    async def _get(self, db: AsyncSession, playlist_id: str) -> Playlist:
        parsed_id: UUID = parse_id(playlist_id, "playlist")
        playlist: Playlist | None = await playlist_repository.get_with_owner(db, parsed_id)
        if playlist is None:
            raise NotFoundError("Playlist not found")
        return playlist

    async def _get_owned(self, db: AsyncSession, playlist_id: str, user: User) -> Playlist:
        playlist: Playlist = await self._get(db, playlist_id)
        if playlist.owner_id != user.id:
            raise ForbiddenError("Only the owner can modify this playlist")
        return playlist

    async def _to_detail(
        self,
        db: AsyncSession,
        playlist: Playlist,
        viewer_id: UUID | None,
    ) -> PlaylistDetailResponse:
        """재생목록 상세 — 다른 사용자의 비공개 동영상은 제외합니다.

        Playlist detail with member videos in insertion order. Unpublished
        videos are shown to their owner only.
        """
        members: list[Video] = await playlist_repository.get_videos(db, playlist.id)
        visible: list[Video] = [
            v for v in members if v.is_published or v.owner_id == viewer_id
        ]
        videos: list[VideoResponse] = await video_service.to_responses(db, visible, viewer_id)
        summary: PlaylistResponse = self._to_response(playlist, video_count=len(videos))
        return PlaylistDetailResponse(
            **summary.model_dump(),
            owner=to_owner_summary(playlist.owner),
            videos=videos,
        )

    async def create_playlist(
        self,
        db: AsyncSession,
        user: User,
        data: PlaylistCreate,
    ) -> PlaylistResponse:
        """재생목록을 생성합니다 — Owner is the current user; name required."""
        if not data.name.strip():
            raise BadRequestError("Playlist name is required")
        playlist: Playlist = await playlist_repository.create(
            db,
            {
                "owner_id": user.id,
                "name": data.name.strip(),
                "description": data.description.strip(),
            },
        )
        return self._to_response(playlist)

    async def list_user_playlists(self, db: AsyncSession, user_id: str) -> list[PlaylistResponse]:
        """사용자의 재생목록 목록 (최신순) — A user's playlists, newest first."""
        owner_id: UUID = parse_id(user_id, "user")
        if await user_repository.get_by_id(db, owner_id) is None:
            raise NotFoundError("User not found")

        playlists: Sequence[Playlist] = await playlist_repository.get_by_owner(db, owner_id)
        counts: dict[UUID, int] = await playlist_repository.count_videos(
            db, [p.id for p in playlists]
        )
        return [self._to_response(p, counts.get(p.id, 0)) for p in playlists]

    async def get_playlist(
        self,
        db: AsyncSession,
        playlist_id: str,
        viewer: User | None = None,
    ) -> PlaylistDetailResponse:
        playlist: Playlist = await self._get(db, playlist_id)
        return await self._to_detail(db, playlist, viewer.id if viewer else None)

    async def update_playlist(
        self,
        db: AsyncSession,
        user: User,
        playlist_id: str,
        data: PlaylistUpdate,
    ) -> PlaylistDetailResponse:
        """재생목록 이름/설명을 수정합니다 (소유자만)."""
        playlist: Playlist = await self._get_owned(db, playlist_id, user)
        if data.name is None and data.description is None:
            raise BadRequestError("At least one field is required")
        update_data: dict[str, str] = {}
        if data.name is not None:
            if not data.name.strip():
                raise BadRequestError("Playlist name must not be blank")
            update_data["name"] = data.name.strip()
        if data.description is not None:
            update_data["description"] = data.description.strip()

        await playlist_repository.update(db, playlist, update_data)
        return await self._to_detail(db, playlist, user.id)

    async def delete_playlist(self, db: AsyncSession, user: User, playlist_id: str) -> None:
        playlist: Playlist = await self._get_owned(db, playlist_id, user)
        await playlist_repository.delete_with_entries(db, playlist)
        logger.info("User %s deleted playlist %s", user.id, playlist_id)

    async def add_video(
        self,
        db: AsyncSession,
        user: User,
        video_id: str,
        playlist_id: str,
    ) -> PlaylistDetailResponse:
        """재생목록에 동영상을 추가합니다 (소유자만). 이미 있으면 그대로 둡니다.

        Owner-only, idempotent append of a video to the playlist.

        Raises:
            NotFoundError: 재생목록 또는 동영상 없음 (Unknown playlist or video)
            ForbiddenError: 소유자가 아님 (Not the owner)
        """
        parsed_video_id: UUID = parse_id(video_id, "video")
        playlist: Playlist = await self._get_owned(db, playlist_id, user)
        if await video_repository.get_by_id(db, parsed_video_id) is None:
            raise NotFoundError("Video not found")

        await playlist_repository.add_video(db, playlist.id, parsed_video_id)
        return await self._to_detail(db, playlist, user.id)

    async def remove_video(
        self,
        db: AsyncSession,
        user: User,
        video_id: str,
        playlist_id: str,
    ) -> PlaylistDetailResponse:
        """재생목록에서 동영상을 제거합니다 (소유자만) — Owner-only, idempotent."""
        parsed_video_id: UUID = parse_id(video_id, "video")
        playlist: Playlist = await self._get_owned(db, playlist_id, user)

        await playlist_repository.remove_video(db, playlist.id, parsed_video_id)
        return await self._to_detail(db, playlist, user.id)


# 싱글턴 인스턴스 — Singleton instance
playlist_service: PlaylistService = PlaylistService()
