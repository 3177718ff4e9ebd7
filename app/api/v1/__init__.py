"""API v1 라우터 패키지 — 모든 엔드포인트 통합.

API v1 Router package — Aggregates every feature router into a single
router mounted at /api/v1 by the FastAPI application.

Included routers:
    - users: 인증, 계정, 채널 프로필, 시청 기록 (Auth, account, channel, history)
    - videos: 동영상 (Videos)
    - tweets: 트윗 (Tweets)
    - comments: 댓글 (Comments)
    - likes: 좋아요 (Likes)
    - subscriptions: 구독 (Subscriptions)
    - playlists: 재생목록 (Playlists)
    - dashboard: 채널 대시보드 (Channel dashboard)
"""

from fastapi import APIRouter

from app.api.v1.comments import router as comments_router
from app.api.v1.dashboard import router as dashboard_router
from app.api.v1.likes import router as likes_router
from app.api.v1.playlists import router as playlists_router
from app.api.v1.subscriptions import router as subscriptions_router
from app.api.v1.tweets import router as tweets_router
from app.api.v1.users import router as users_router
from app.api.v1.videos import router as videos_router

api_router: APIRouter = APIRouter()

api_router.include_router(users_router, prefix="/users", tags=["Users"])
api_router.include_router(videos_router, prefix="/videos", tags=["Videos"])
api_router.include_router(tweets_router, prefix="/tweets", tags=["Tweets"])
api_router.include_router(comments_router, prefix="/comments", tags=["Comments"])
api_router.include_router(likes_router, prefix="/likes", tags=["Likes"])
api_router.include_router(subscriptions_router, prefix="/subscriptions", tags=["Subscriptions"])
api_router.include_router(playlists_router, prefix="/playlists", tags=["Playlists"])
api_router.include_router(dashboard_router, prefix="/dashboard", tags=["Dashboard"])
