"""댓글 서비스 — 동영상 댓글 목록, 작성, 수정, 삭제.

Comment Service — Business logic for video comments.
"""

import logging
from typing import Sequence
from uuid import UUID

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.content import Comment
from app.models.engagement import LikeTargetKind
from app.models.user import User
from app.repositories.comment_repository import comment_repository
from app.repositories.like_repository import like_repository
from app.repositories.video_repository import video_repository
from app.schemas.common import PaginatedResponse
from app.schemas.content import CommentResponse
from app.services.like_service import like_service
from app.services.user_service import to_owner_summary
from app.utils.exceptions import BadRequestError, ForbiddenError, NotFoundError
from app.utils.ids import parse_id
from app.utils.pagination import PageParams, build_order_by, validate_page

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = {
    "created_at": Comment.created_at,
    "createdAt": Comment.created_at,
    "updated_at": Comment.updated_at,
}


class CommentService:
    """댓글 비즈니스 로직 서비스."""

    def _to_response(
        self,
        comment: Comment,
        like_count: int = 0,
        is_liked: bool | None = None,
    ) -> CommentResponse:
        return CommentResponse(
            id=str(comment.id),
            video_id=str(comment.video_id),
            content=comment.content,
            owner=to_owner_summary(comment.owner),
            like_count=like_count,
            is_liked=is_liked,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )

    async def _to_responses(
        self,
        db: AsyncSession,
        comments: Sequence[Comment],
        viewer_id: UUID | None,
    ) -> list[CommentResponse]:
        counts, liked = await like_service.summarize(
            db, LikeTargetKind.COMMENT, [c.id for c in comments], viewer_id
        )
        return [
            self._to_response(
                c,
                like_count=counts.get(c.id, 0),
                is_liked=(c.id in liked) if liked is not None else None,
            )
            for c in comments
        ]

    async def _get_video_id(self, db: AsyncSession, video_id: str) -> UUID:
        parsed_id: UUID = parse_id(video_id, "video")
        if await video_repository.get_by_id(db, parsed_id) is None:
            raise NotFoundError("Video not found")
        return parsed_id

    async def _get_owned(self, db: AsyncSession, comment_id: str, user: User) -> Comment:
        parsed_id: UUID = parse_id(comment_id, "comment")
        comment: Comment | None = await comment_repository.get_with_owner(db, parsed_id)
        if comment is None:
            raise NotFoundError("Comment not found")
        if comment.owner_id != user.id:
            raise ForbiddenError("Only the owner can modify this comment")
        return comment

    async def list_comments(
        self,
        db: AsyncSession,
        video_id: str,
        page: int,
        limit: int,
        query: str | None = None,
        sort_by: str = "created_at",
        sort_type: str = "desc",
        viewer: User | None = None,
    ) -> PaginatedResponse:
        """동영상 댓글 목록 (페이지네이션) — Paginated comments of a video."""
        params: PageParams = validate_page(page, limit)
        order_by: list = build_order_by(SORTABLE_FIELDS, Comment.id, sort_by, sort_type)
        parsed_video_id: UUID = await self._get_video_id(db, video_id)

        stmt: Select = comment_repository.build_list_query(parsed_video_id, order_by, search=query)
        comments, total = await comment_repository.get_paginated(db, stmt, params)
        items: list[CommentResponse] = await self._to_responses(
            db, comments, viewer.id if viewer else None
        )
        return PaginatedResponse(items=items, page=params.page, limit=params.limit, total=total)

    async def add_comment(
        self,
        db: AsyncSession,
        user: User,
        video_id: str,
        content: str,
    ) -> CommentResponse:
        """동영상에 댓글을 작성합니다 — The video must exist."""
        if not content or not content.strip():
            raise BadRequestError("Content is required")
        parsed_video_id: UUID = await self._get_video_id(db, video_id)

        comment: Comment = await comment_repository.create(
            db,
            {"video_id": parsed_video_id, "owner_id": user.id, "content": content.strip()},
        )
        loaded: Comment | None = await comment_repository.get_with_owner(db, comment.id)
        return self._to_response(loaded, is_liked=False)

    async def update_comment(
        self,
        db: AsyncSession,
        user: User,
        comment_id: str,
        content: str,
    ) -> CommentResponse:
        """댓글을 수정합니다 (작성자만) — Owner-only content update."""
        if not content or not content.strip():
            raise BadRequestError("Content is required")
        comment: Comment = await self._get_owned(db, comment_id, user)
        await comment_repository.update(db, comment, {"content": content.strip()})

        responses: list[CommentResponse] = await self._to_responses(db, [comment], user.id)
        return responses[0]

    async def delete_comment(self, db: AsyncSession, user: User, comment_id: str) -> None:
        """댓글과 댓글에 대한 좋아요를 삭제합니다 (작성자만)."""
        comment: Comment = await self._get_owned(db, comment_id, user)
        await like_repository.delete_for_targets(db, LikeTargetKind.COMMENT, [comment.id])
        await comment_repository.delete(db, comment.id)
        logger.info("User %s deleted comment %s", user.id, comment_id)


# 싱글턴 인스턴스 — Singleton instance
comment_service: CommentService = CommentService()
