"""동영상 서비스 — 업로드, 조회, 목록, 수정, 삭제, 공개 전환.

Video Service — Business logic for videos: publishing through the media
store, profile-joined reads, paginated listings, owner-only mutations,
trending, and liked videos.
"""

import logging
from typing import Sequence
from uuid import UUID

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.content import Video
from app.models.engagement import LikeTargetKind
from app.models.user import User
from app.repositories.like_repository import like_repository
from app.repositories.user_repository import user_repository
from app.repositories.video_repository import video_repository
from app.schemas.common import PaginatedResponse
from app.schemas.content import VideoResponse
from app.services.like_service import like_service
from app.services.storage_service import MediaUpload, storage_service
from app.services.user_service import to_owner_summary
from app.utils.exceptions import BadRequestError, ForbiddenError, NotFoundError
from app.utils.ids import parse_id
from app.utils.pagination import PageParams, build_order_by, validate_page

logger = logging.getLogger(__name__)

# 허용된 정렬 키 — Whitelisted sort keys
SORTABLE_FIELDS = {
    "created_at": Video.created_at,
    "createdAt": Video.created_at,
    "updated_at": Video.updated_at,
    "views": Video.views,
    "title": Video.title,
    "duration": Video.duration,
}


class VideoService:
    """동영상 비즈니스 로직 서비스.

    Service for video publishing, reads, listings, and owner mutations.
    """

    def _to_response(
        self,
        video: Video,
        like_count: int = 0,
        is_liked: bool | None = None,
    ) -> VideoResponse:
        return VideoResponse(
            id=str(video.id),
            video_file=video.video_file,
            thumbnail=video.thumbnail,
            title=video.title,
            description=video.description,
            duration=video.duration,
            views=video.views,
            is_published=video.is_published,
            owner=to_owner_summary(video.owner),
            like_count=like_count,
            is_liked=is_liked,
            created_at=video.created_at,
            updated_at=video.updated_at,
        )

    async def to_responses(
        self,
        db: AsyncSession,
        videos: Sequence[Video],
        viewer_id: UUID | None = None,
    ) -> list[VideoResponse]:
        """동영상 목록에 좋아요 수와 조회자 좋아요 여부를 붙여 변환합니다.

        Convert videos (owners loaded) to responses decorated with like
        counts and, for an authenticated viewer, the like flag.
        """
        counts, liked = await like_service.summarize(
            db, LikeTargetKind.VIDEO, [v.id for v in videos], viewer_id
        )
        return [
            self._to_response(
                v,
                like_count=counts.get(v.id, 0),
                is_liked=(v.id in liked) if liked is not None else None,
            )
            for v in videos
        ]

    async def _get_owned(self, db: AsyncSession, video_id: str, user: User) -> Video:
        """소유자 확인 후 동영상을 반환합니다 — Load a video the user owns."""
        parsed_id: UUID = parse_id(video_id, "video")
        video: Video | None = await video_repository.get_with_owner(db, parsed_id)
        if video is None:
            raise NotFoundError("Video not found")
        if video.owner_id != user.id:
            raise ForbiddenError("Only the owner can modify this video")
        return video

    async def list_videos(
        self,
        db: AsyncSession,
        page: int,
        limit: int,
        query: str | None = None,
        sort_by: str = "created_at",
        sort_type: str = "desc",
        user_id: str | None = None,
        viewer: User | None = None,
    ) -> PaginatedResponse:
        """동영상 목록을 조회합니다 (페이지네이션).

        Paginated listing. Only published videos are shown, except when the
        viewer lists their own channel.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            page: 페이지 번호 (1-based page)
            limit: 페이지 크기 (Page size)
            query: 제목/설명 검색어 (Case-insensitive search over title and description)
            sort_by: 정렬 키 (Whitelisted sort key)
            sort_type: "asc" | "desc"
            user_id: 채널 필터 (Owner filter)
            viewer: 조회자 (Authenticated viewer, optional)

        Returns:
            PaginatedResponse: {items, page, limit, total}
        """
        params: PageParams = validate_page(page, limit)
        order_by: list = build_order_by(SORTABLE_FIELDS, Video.id, sort_by, sort_type)

        owner_id: UUID | None = parse_id(user_id, "user") if user_id else None
        published_only: bool = not (viewer is not None and owner_id == viewer.id)

        stmt: Select = video_repository.build_list_query(
            order_by, search=query, owner_id=owner_id, published_only=published_only
        )
        videos, total = await video_repository.get_paginated(db, stmt, params)
        items: list[VideoResponse] = await self.to_responses(
            db, videos, viewer.id if viewer else None
        )
        return PaginatedResponse(items=items, page=params.page, limit=params.limit, total=total)

    async def list_my_videos(
        self,
        db: AsyncSession,
        user: User,
        page: int,
        limit: int,
        query: str | None = None,
        sort_by: str = "created_at",
        sort_type: str = "desc",
    ) -> PaginatedResponse:
        """내 동영상 목록 (비공개 포함) — The user's own videos, unpublished included."""
        return await self.list_videos(
            db, page, limit, query, sort_by, sort_type, user_id=str(user.id), viewer=user
        )

    async def get_trending(
        self,
        db: AsyncSession,
        limit: int,
        viewer: User | None = None,
    ) -> list[VideoResponse]:
        """인기 동영상 — Published videos ranked by views."""
        params: PageParams = validate_page(1, limit)
        videos: Sequence[Video] = await video_repository.get_trending(db, params.limit)
        return await self.to_responses(db, videos, viewer.id if viewer else None)

    async def get_video(
        self,
        db: AsyncSession,
        video_id: str,
        viewer: User | None = None,
    ) -> VideoResponse:
        """동영상을 조회하고 조회수를 올립니다.

        Read a video with its owner. Counts a view and, for an authenticated
        viewer, appends the video to their watch history. Unpublished videos
        are visible to their owner only.

        Raises:
            BadRequestError: 잘못된 id 형식 (Malformed id)
            NotFoundError: 동영상 없음 (Unknown or hidden video)
        """
        parsed_id: UUID = parse_id(video_id, "video")
        video: Video | None = await video_repository.get_with_owner(db, parsed_id)
        if video is None:
            raise NotFoundError("Video not found")
        if not video.is_published and (viewer is None or viewer.id != video.owner_id):
            raise NotFoundError("Video not found")

        await video_repository.increment_views(db, video.id)
        await db.refresh(video, attribute_names=["views", "updated_at"])
        if viewer is not None:
            await user_repository.append_watch_history(db, viewer.id, video.id)

        responses: list[VideoResponse] = await self.to_responses(
            db, [video], viewer.id if viewer else None
        )
        return responses[0]

    async def publish_video(
        self,
        db: AsyncSession,
        user: User,
        title: str,
        description: str,
        video_file: MediaUpload | None,
        thumbnail: MediaUpload | None,
        duration: float = 0.0,
    ) -> VideoResponse:
        """동영상을 업로드하고 게시합니다.

        Store the video file and thumbnail and create a published video.

        Raises:
            BadRequestError: 제목/설명 누락, 파일 누락, 음수 재생 시간
                             (Blank title/description, missing file, negative duration)
        """
        if not title or not title.strip() or not description or not description.strip():
            raise BadRequestError("Title and description are required")
        if video_file is None or not video_file.data:
            raise BadRequestError("Video file is required")
        if thumbnail is None or not thumbnail.data:
            raise BadRequestError("Thumbnail is required")
        if duration < 0:
            raise BadRequestError("Duration must not be negative")

        video_url: str = storage_service.store_upload(video_file, "videos")
        thumbnail_url: str = storage_service.store_upload(thumbnail, "thumbnails")

        video: Video = await video_repository.create(
            db,
            {
                "owner_id": user.id,
                "title": title.strip(),
                "description": description.strip(),
                "video_file": video_url,
                "thumbnail": thumbnail_url,
                "duration": duration,
                "is_published": True,
            },
        )
        logger.info("User %s published video %s", user.id, video.id)
        loaded: Video | None = await video_repository.get_with_owner(db, video.id)
        return self._to_response(loaded)

    async def update_video(
        self,
        db: AsyncSession,
        user: User,
        video_id: str,
        title: str | None = None,
        description: str | None = None,
        thumbnail: MediaUpload | None = None,
    ) -> VideoResponse:
        """동영상 정보를 수정합니다 (소유자만).

        Owner-only update of title, description, and/or thumbnail.

        Raises:
            BadRequestError: 수정할 내용이 없거나 빈 값 (Nothing to update, or blank value)
            ForbiddenError: 소유자가 아님 (Not the owner)
        """
        video: Video = await self._get_owned(db, video_id, user)

        has_thumbnail: bool = thumbnail is not None and bool(thumbnail.data)
        if title is None and description is None and not has_thumbnail:
            raise BadRequestError("At least one field is required")
        if title is not None:
            if not title.strip():
                raise BadRequestError("Title must not be blank")
            video.title = title.strip()
        if description is not None:
            if not description.strip():
                raise BadRequestError("Description must not be blank")
            video.description = description.strip()

        previous_thumbnail: str | None = None
        if has_thumbnail:
            previous_thumbnail = video.thumbnail
            video.thumbnail = storage_service.store_upload(thumbnail, "thumbnails")

        await db.flush()
        await db.refresh(video, attribute_names=["updated_at"])
        storage_service.remove_after_commit(db, previous_thumbnail)

        responses: list[VideoResponse] = await self.to_responses(db, [video], user.id)
        return responses[0]

    async def delete_video(self, db: AsyncSession, user: User, video_id: str) -> None:
        """동영상과 딸린 댓글/좋아요/재생목록 항목을 삭제합니다 (소유자만).

        Owner-only delete; comments, likes, and playlist entries go with it.
        """
        video: Video = await self._get_owned(db, video_id, user)
        files: list[str] = [video.video_file, video.thumbnail]
        deleted_id: UUID = video.id

        await video_repository.delete_with_dependents(db, video)
        for file_url in files:
            storage_service.remove_after_commit(db, file_url)
        logger.info("User %s deleted video %s", user.id, deleted_id)

    async def toggle_publish(self, db: AsyncSession, user: User, video_id: str) -> VideoResponse:
        """공개 여부를 전환합니다 (소유자만) — Flip the published flag."""
        video: Video = await self._get_owned(db, video_id, user)
        video.is_published = not video.is_published
        await db.flush()
        await db.refresh(video, attribute_names=["updated_at"])

        responses: list[VideoResponse] = await self.to_responses(db, [video], user.id)
        return responses[0]

    async def get_channel_videos(
        self,
        db: AsyncSession,
        owner_id: UUID,
        viewer_id: UUID | None = None,
    ) -> list[VideoResponse]:
        """채널의 모든 동영상 (최신순) — All videos of a channel, newest first."""
        videos: Sequence[Video] = await video_repository.get_by_owner(db, owner_id)
        owner: User | None = await user_repository.get_by_id(db, owner_id)
        if owner is None:
            raise NotFoundError("User not found")
        return await self.to_responses(db, videos, viewer_id)

    async def get_liked_videos(self, db: AsyncSession, user: User) -> list[VideoResponse]:
        """사용자가 좋아요한 동영상 (최근 좋아요 순).

        Videos the user liked, most recent like first. Likes on videos that
        no longer exist are skipped.
        """
        video_ids: list[UUID] = await like_repository.liked_target_ids(
            db, user.id, LikeTargetKind.VIDEO
        )
        found: dict[UUID, Video] = await video_repository.get_many_with_owner(db, video_ids)
        videos: list[Video] = [found[vid] for vid in video_ids if vid in found]
        return await self.to_responses(db, videos, user.id)

    async def get_videos_in_order(
        self,
        db: AsyncSession,
        video_ids: Sequence[UUID],
        viewer_id: UUID | None = None,
    ) -> list[VideoResponse]:
        """주어진 순서대로 동영상을 조회합니다. 없는 id는 건너뜁니다.

        Load videos in the given order, skipping ids with no video.
        """
        found: dict[UUID, Video] = await video_repository.get_many_with_owner(db, video_ids)
        videos: list[Video] = [found[vid] for vid in video_ids if vid in found]
        return await self.to_responses(db, videos, viewer_id)


# 싱글턴 인스턴스 — Singleton instance
video_service: VideoService = VideoService()
