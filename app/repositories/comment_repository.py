"""댓글 레포지토리 — 동영상별 댓글 목록 쿼리.

Comment Repository — Comment lookups and per-video listing queries.
"""

from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.content import Comment
from app.repositories.base import BaseRepository


class CommentRepository(BaseRepository[Comment]):
    """댓글 레포지토리.

    Extends:
        BaseRepository[Comment]
    """

    def __init__(self) -> None:
        super().__init__(Comment)

    async def get_with_owner(self, db: AsyncSession, comment_id: UUID) -> Comment | None:
        query: Select = (
            select(Comment)
            .options(selectinload(Comment.owner))
            .where(Comment.id == comment_id)
            .execution_options(populate_existing=True)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    def build_list_query(
        self,
        video_id: UUID,
        order_by: list,
        search: str | None = None,
    ) -> Select:
        """동영상 댓글 목록 쿼리 — Listing query for a video's comments."""
        query: Select = (
            select(Comment)
            .options(selectinload(Comment.owner))
            .where(Comment.video_id == video_id)
        )
        if search:
            query = query.where(Comment.content.icontains(search, autoescape=True))
        return query.order_by(*order_by)


# 싱글턴 인스턴스 — Singleton instance
comment_repository: CommentRepository = CommentRepository()
