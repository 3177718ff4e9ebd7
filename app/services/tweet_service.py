"""트윗 서비스 — 트윗 CRUD, 목록, 좋아요 순위.

Tweet Service — Business logic for tweets: create, paginated listings,
owner-only update/delete, and the top-liked leaderboard.
"""

import logging
from typing import Sequence
from uuid import UUID

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.content import Tweet
from app.models.engagement import LikeTargetKind
from app.models.user import User
from app.repositories.like_repository import like_repository
from app.repositories.tweet_repository import tweet_repository
from app.repositories.user_repository import user_repository
from app.schemas.common import PaginatedResponse
from app.schemas.content import LeaderboardEntry, TweetResponse
from app.services.like_service import like_service
from app.services.user_service import to_owner_summary
from app.utils.exceptions import BadRequestError, ForbiddenError, NotFoundError
from app.utils.ids import parse_id
from app.utils.pagination import PageParams, build_order_by, validate_page

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = {
    "created_at": Tweet.created_at,
    "createdAt": Tweet.created_at,
    "updated_at": Tweet.updated_at,
}


class TweetService:
    """트윗 비즈니스 로직 서비스."""

    def _to_response(
        self,
        tweet: Tweet,
        like_count: int = 0,
        is_liked: bool | None = None,
    ) -> TweetResponse:
        return TweetResponse(
            id=str(tweet.id),
            content=tweet.content,
            owner=to_owner_summary(tweet.owner),
            like_count=like_count,
            is_liked=is_liked,
            created_at=tweet.created_at,
            updated_at=tweet.updated_at,
        )

    async def _to_responses(
        self,
        db: AsyncSession,
        tweets: Sequence[Tweet],
        viewer_id: UUID | None,
    ) -> list[TweetResponse]:
        counts, liked = await like_service.summarize(
            db, LikeTargetKind.TWEET, [t.id for t in tweets], viewer_id
        )
        return [
            self._to_response(
                t,
                like_count=counts.get(t.id, 0),
                is_liked=(t.id in liked) if liked is not None else None,
            )
            for t in tweets
        ]

    async def _get_owned(self, db: AsyncSession, tweet_id: str, user: User) -> Tweet:
        parsed_id: UUID = parse_id(tweet_id, "tweet")
        tweet: Tweet | None = await tweet_repository.get_with_owner(db, parsed_id)
        if tweet is None:
            raise NotFoundError("Tweet not found")
        if tweet.owner_id != user.id:
            raise ForbiddenError("Only the owner can modify this tweet")
        return tweet

    async def create_tweet(self, db: AsyncSession, user: User, content: str) -> TweetResponse:
        """트윗을 작성합니다 — Create a tweet owned by the current user."""
        if not content or not content.strip():
            raise BadRequestError("Content is required")

        tweet: Tweet = await tweet_repository.create(
            db, {"owner_id": user.id, "content": content.strip()}
        )
        loaded: Tweet | None = await tweet_repository.get_with_owner(db, tweet.id)
        return self._to_response(loaded, is_liked=False)

    async def list_tweets(
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
        """트윗 목록을 조회합니다 (페이지네이션, 기본 최신순).

        Paginated tweet listing, newest first by default.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            page: 페이지 번호 (1-based page)
            limit: 페이지 크기 (Page size)
            query: 내용 검색어 (Case-insensitive search over content)
            sort_by: 정렬 키 (Whitelisted sort key)
            sort_type: "asc" | "desc"
            user_id: 작성자 필터 (Owner filter)
            viewer: 조회자 (Authenticated viewer, optional)
        """
        params: PageParams = validate_page(page, limit)
        order_by: list = build_order_by(SORTABLE_FIELDS, Tweet.id, sort_by, sort_type)

        owner_id: UUID | None = None
        if user_id is not None:
            owner_id = parse_id(user_id, "user")
            if await user_repository.get_by_id(db, owner_id) is None:
                raise NotFoundError("User not found")

        stmt: Select = tweet_repository.build_list_query(order_by, search=query, owner_id=owner_id)
        tweets, total = await tweet_repository.get_paginated(db, stmt, params)
        items: list[TweetResponse] = await self._to_responses(
            db, tweets, viewer.id if viewer else None
        )
        return PaginatedResponse(items=items, page=params.page, limit=params.limit, total=total)

    async def update_tweet(
        self,
        db: AsyncSession,
        user: User,
        tweet_id: str,
        content: str,
    ) -> TweetResponse:
        """트윗 내용을 수정합니다 (작성자만) — Owner-only content update."""
        if not content or not content.strip():
            raise BadRequestError("Content is required")
        tweet: Tweet = await self._get_owned(db, tweet_id, user)
        await tweet_repository.update(db, tweet, {"content": content.strip()})

        responses: list[TweetResponse] = await self._to_responses(db, [tweet], user.id)
        return responses[0]

    async def delete_tweet(self, db: AsyncSession, user: User, tweet_id: str) -> None:
        """트윗과 트윗에 대한 좋아요를 삭제합니다 (작성자만)."""
        tweet: Tweet = await self._get_owned(db, tweet_id, user)
        await like_repository.delete_for_targets(db, LikeTargetKind.TWEET, [tweet.id])
        await tweet_repository.delete(db, tweet.id)
        logger.info("User %s deleted tweet %s", user.id, tweet_id)

    async def get_top_liked(
        self,
        db: AsyncSession,
        limit: int | None = None,
    ) -> list[LeaderboardEntry]:
        """좋아요가 가장 많은 트윗 N개를 반환합니다.

        Top-N liked tweets ranked by like count desc, then newest, then id.
        Always returns exactly N entries: when fewer tweets have likes, the
        board is padded with placeholders (like_count 0, content fields null).

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            limit: 순위 크기 (Board size, default LEADERBOARD_DEFAULT_LIMIT)

        Raises:
            BadRequestError: 범위를 벗어난 limit (limit < 1 or above MAX_PAGE_SIZE)
        """
        size: int = settings.LEADERBOARD_DEFAULT_LIMIT if limit is None else limit
        if size < 1 or size > settings.MAX_PAGE_SIZE:
            raise BadRequestError(f"limit must be between 1 and {settings.MAX_PAGE_SIZE}")

        ranked: list[tuple[Tweet, int]] = await like_repository.top_liked_tweets(db, size)
        board: list[LeaderboardEntry] = [
            LeaderboardEntry(
                id=str(tweet.id),
                content=tweet.content,
                owner=to_owner_summary(tweet.owner),
                created_at=tweet.created_at,
                like_count=count,
            )
            for tweet, count in ranked
        ]
        # 빈 자리 채우기 — Pad to exactly `size` entries
        board.extend(LeaderboardEntry() for _ in range(size - len(board)))
        return board


# 싱글턴 인스턴스 — Singleton instance
tweet_service: TweetService = TweetService()
