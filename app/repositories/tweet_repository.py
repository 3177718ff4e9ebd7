"""트윗 레포지토리 — 소유자 조인 조회와 목록 쿼리.

Tweet Repository — Tweet lookups with the owner joined and listing queries.
"""

from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.content import Tweet
from app.repositories.base import BaseRepository


class TweetRepository(BaseRepository[Tweet]):
    """트윗 레포지토리.

    Extends:
        BaseRepository[Tweet]
    """

    def __init__(self) -> None:
        super().__init__(Tweet)

    async def get_with_owner(self, db: AsyncSession, tweet_id: UUID) -> Tweet | None:
        query: Select = (
            select(Tweet)
            .options(selectinload(Tweet.owner))
            .where(Tweet.id == tweet_id)
            .execution_options(populate_existing=True)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    def build_list_query(
        self,
        order_by: list,
        search: str | None = None,
        owner_id: UUID | None = None,
    ) -> Select:
        """트윗 목록 쿼리 — content 대소문자 무시 검색, 소유자 필터.

        Build the tweet listing query with optional search and owner filter.
        """
        query: Select = select(Tweet).options(selectinload(Tweet.owner))
        if search:
            query = query.where(Tweet.content.icontains(search, autoescape=True))
        if owner_id is not None:
            query = query.where(Tweet.owner_id == owner_id)
        return query.order_by(*order_by)


# 싱글턴 인스턴스 — Singleton instance
tweet_repository: TweetRepository = TweetRepository()
