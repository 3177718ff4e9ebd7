"""좋아요 라우터 — 좋아요 토글, 상태/개수 조회, 좋아요한 동영상.

Likes Router — Toggle likes on videos, comments, and tweets; read like
status and counts; list liked videos and the tweet leaderboard.

대상 종류는 경로에서 약칭(v, c, t) 또는 전체 이름(video, comment, tweet)으로 지정합니다.
The target kind in the path is either short (v, c, t) or the full name.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.content import LeaderboardEntry, VideoResponse
from app.schemas.engagement import LikeCountResponse, LikeStatusResponse, LikeToggleResponse
from app.services.like_service import like_service, parse_kind
from app.services.tweet_service import tweet_service
from app.services.video_service import video_service

router: APIRouter = APIRouter()


@router.post("/toggle/{kind}/{target_id}", response_model=LikeToggleResponse)
async def toggle_like(
    kind: str,
    target_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> LikeToggleResponse:
    """좋아요 토글 — {"state": "liked" | "unliked"}."""
    result: LikeToggleResponse = await like_service.toggle_like(
        db, current_user.id, parse_kind(kind), target_id
    )
    await db.commit()
    return result


@router.get("/is-liked/{kind}/{target_id}", response_model=LikeStatusResponse)
async def is_liked(
    kind: str,
    target_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> LikeStatusResponse:
    return await like_service.is_liked(db, current_user.id, parse_kind(kind), target_id)


@router.get("/count/{kind}/{target_id}", response_model=LikeCountResponse)
async def count_likes(
    kind: str,
    target_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> LikeCountResponse:
    return await like_service.count_likes(db, parse_kind(kind), target_id)


@router.get("/videos", response_model=list[VideoResponse])
async def get_liked_videos(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> list[VideoResponse]:
    """좋아요한 동영상 (최근 좋아요 순) — Liked videos, most recent like first."""
    return await video_service.get_liked_videos(db, current_user)


@router.get("/top-liked", response_model=list[LeaderboardEntry])
async def get_top_liked(
    db: Annotated[AsyncSession, Depends(get_db)],
    limit: Annotated[int | None, Query()] = None,
) -> list[LeaderboardEntry]:
    return await tweet_service.get_top_liked(db, limit)
