"""대시보드 라우터 — 내 채널 통계와 동영상.

Dashboard Router — Channel statistics and videos for the current user.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.content import VideoResponse
from app.schemas.engagement import ChannelStatsResponse
from app.services.channel_service import channel_service

router: APIRouter = APIRouter()


@router.get("/stats", response_model=ChannelStatsResponse)
async def get_channel_stats(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ChannelStatsResponse:
    """채널 통계 — 총 조회수, 구독자 수, 동영상 수, 받은 좋아요 수.

    Channel statistics: total views, subscribers, videos, and likes
    received on the channel's videos.
    """
    return await channel_service.get_stats(db, current_user)


@router.get("/videos", response_model=list[VideoResponse])
async def get_channel_videos(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> list[VideoResponse]:
    return await channel_service.get_videos(db, current_user)
