"""트윗 라우터 — 트윗 작성, 목록, 좋아요 순위, 수정, 삭제.

Tweets Router — Create, list, leaderboard, update, and delete tweets.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, get_optional_user
from app.config import settings
from app.database import get_db
from app.models.user import User
from app.schemas.common import MessageResponse, PaginatedResponse
from app.schemas.content import LeaderboardEntry, TweetCreate, TweetResponse, TweetUpdate
from app.services.tweet_service import tweet_service

router: APIRouter = APIRouter()


@router.post("", response_model=TweetResponse, status_code=201)
async def create_tweet(
    data: TweetCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> TweetResponse:
    result: TweetResponse = await tweet_service.create_tweet(db, current_user, data.content)
    await db.commit()
    return result


@router.get("", response_model=PaginatedResponse)
async def list_tweets(
    db: Annotated[AsyncSession, Depends(get_db)],
    viewer: Annotated[User | None, Depends(get_optional_user)],
    page: Annotated[int, Query()] = 1,
    limit: Annotated[int, Query()] = settings.DEFAULT_PAGE_SIZE,
    query: Annotated[str | None, Query()] = None,
    sort_by: Annotated[str, Query()] = "created_at",
    sort_type: Annotated[str, Query()] = "desc",
) -> PaginatedResponse:
    """전체 트윗 목록 (페이지네이션, 기본 최신순)."""
    return await tweet_service.list_tweets(
        db, page, limit, query, sort_by, sort_type, viewer=viewer
    )


@router.get("/top-liked", response_model=list[LeaderboardEntry])
async def get_top_liked(
    db: Annotated[AsyncSession, Depends(get_db)],
    limit: Annotated[int | None, Query()] = None,
) -> list[LeaderboardEntry]:
    """좋아요 상위 트윗 — 항상 정확히 limit개 (빈 자리는 placeholder).

    Top-liked tweets; always exactly `limit` entries, padded with
    placeholders.
    """
    return await tweet_service.get_top_liked(db, limit)


@router.get("/user/{user_id}", response_model=PaginatedResponse)
async def list_user_tweets(
    user_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    viewer: Annotated[User | None, Depends(get_optional_user)],
    page: Annotated[int, Query()] = 1,
    limit: Annotated[int, Query()] = settings.DEFAULT_PAGE_SIZE,
    sort_type: Annotated[str, Query()] = "desc",
) -> PaginatedResponse:
    """사용자의 트윗 목록 — Tweets of one user."""
    return await tweet_service.list_tweets(
        db, page, limit, sort_type=sort_type, user_id=user_id, viewer=viewer
    )


@router.patch("/{tweet_id}", response_model=TweetResponse)
async def update_tweet(
    tweet_id: str,
    data: TweetUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> TweetResponse:
    result: TweetResponse = await tweet_service.update_tweet(
        db, current_user, tweet_id, data.content
    )
    await db.commit()
    return result


@router.delete("/{tweet_id}", response_model=MessageResponse)
async def delete_tweet(
    tweet_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> MessageResponse:
    await tweet_service.delete_tweet(db, current_user, tweet_id)
    await db.commit()
    return MessageResponse(message="Tweet deleted successfully")
