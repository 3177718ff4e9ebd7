"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations and
relationship resolution.

Modules:
    user: 사용자/채널 (Users, credentials, refresh-token slot, watch history)
    content: 동영상, 트윗, 댓글, 재생목록 (Videos, tweets, comments, playlists)
    engagement: 좋아요, 구독 엣지 (Like and subscription edges)
"""

from app.models.user import User, WatchHistoryEntry
from app.models.content import Video, Tweet, Comment, Playlist, PlaylistVideo
from app.models.engagement import Like, LikeTargetKind, Subscription

__all__ = [
    "User", "WatchHistoryEntry",
    "Video", "Tweet", "Comment", "Playlist", "PlaylistVideo",
    "Like", "LikeTargetKind", "Subscription",
]
