"""콘텐츠(동영상/트윗/댓글/재생목록) Pydantic 스키마 정의.

Content Pydantic request/response schema definitions for videos, tweets,
comments, and playlists. Joined responses embed the owner summary, the
on-demand like count, and the viewer's like flag when authenticated.
"""

from datetime import datetime
from pydantic import BaseModel, Field

from app.schemas.common import OwnerSummary


# === 동영상 (Video) 스키마 ===

class VideoResponse(BaseModel):
    """동영상 응답 스키마.

    Attributes:
        like_count: 좋아요 수 — 요청 시 계산 (Like count, computed on demand)
        is_liked: 조회자 좋아요 여부 (Viewer's like flag; None when anonymous)
    """

    id: str
    video_file: str
    thumbnail: str
    title: str
    description: str
    duration: float
    views: int
    is_published: bool
    owner: OwnerSummary
    like_count: int = 0
    is_liked: bool | None = None
    created_at: datetime
    updated_at: datetime


# === 트윗 (Tweet) 스키마 ===

class TweetCreate(BaseModel):
    content: str = Field(..., min_length=1)


class TweetUpdate(BaseModel):
    content: str = Field(..., min_length=1)


class TweetResponse(BaseModel):
    """트윗 응답 스키마."""

    id: str
    content: str
    owner: OwnerSummary
    like_count: int = 0
    is_liked: bool | None = None
    created_at: datetime
    updated_at: datetime


class LeaderboardEntry(BaseModel):
    """좋아요 순위 항목.

    Leaderboard entry. Placeholder entries padding the board to N have
    like_count 0 and every content field null.
    """

    id: str | None = None
    content: str | None = None
    owner: OwnerSummary | None = None
    created_at: datetime | None = None
    like_count: int = 0


# === 댓글 (Comment) 스키마 ===

class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1)


class CommentUpdate(BaseModel):
    content: str = Field(..., min_length=1)


class CommentResponse(BaseModel):
    """댓글 응답 스키마."""

    id: str
    video_id: str
    content: str
    owner: OwnerSummary
    like_count: int = 0
    is_liked: bool | None = None
    created_at: datetime
    updated_at: datetime


# === 재생목록 (Playlist) 스키마 ===

class PlaylistCreate(BaseModel):
    """재생목록 생성 요청.

    Attributes:
        name: 재생목록 이름 (Playlist name, required)
        description: 설명 (Description, optional)
    """

    name: str = Field(..., min_length=1)
    description: str = ""


class PlaylistUpdate(BaseModel):
    name: str | None = None
    description: str | None = None


class PlaylistResponse(BaseModel):
    """재생목록 응답 스키마 (목록용) — Playlist summary with its video count."""

    id: str
    name: str
    description: str
    owner_id: str
    video_count: int = 0
    created_at: datetime
    updated_at: datetime


class PlaylistDetailResponse(PlaylistResponse):
    """재생목록 상세 응답 — 추가 순서대로 정렬된 동영상 포함.

    Playlist detail with member videos in insertion order.
    """

    owner: OwnerSummary
    videos: list[VideoResponse] = []
