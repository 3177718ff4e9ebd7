"""사용자 및 채널 관련 Pydantic 요청/응답 스키마 정의.

User and channel Pydantic request/response schema definitions.
Covers the public user view, account updates, the channel profile,
and watch history entries.
"""

from datetime import datetime
from pydantic import BaseModel


class UserResponse(BaseModel):
    """사용자 응답 스키마 — 비밀번호 해시와 리프레시 토큰 제외.

    Public user representation. Never carries the password hash or the
    refresh token.
    """

    id: str
    username: str
    email: str
    full_name: str
    avatar: str
    cover_image: str | None
    created_at: datetime


class AccountUpdate(BaseModel):
    """계정 정보 수정 요청 스키마 (부분 업데이트).

    Attributes:
        full_name: 표시 이름 (New display name, optional)
        email: 이메일 (New email, optional, must stay unique)
    """

    full_name: str | None = None
    email: str | None = None


class ChannelProfileResponse(BaseModel):
    """채널 프로필 응답 스키마.

    Channel view of a user: profile plus subscription aggregates relative
    to the viewer.

    Attributes:
        subscribers_count: 구독자 수 (Number of subscribers)
        channels_subscribed_to_count: 이 채널이 구독한 채널 수 (Channels this user subscribes to)
        is_subscribed: 조회자 구독 여부 (Whether the viewer subscribes; False if anonymous)
    """

    id: str
    username: str
    full_name: str
    email: str
    avatar: str
    cover_image: str | None
    subscribers_count: int
    channels_subscribed_to_count: int
    is_subscribed: bool
