"""좋아요/구독/대시보드 Pydantic 응답 스키마 정의.

Engagement Pydantic response schema definitions: toggle results, like and
subscription status, and channel dashboard statistics.
"""

from typing import Literal
from pydantic import BaseModel


class LikeToggleResponse(BaseModel):
    """좋아요 토글 결과 — Resulting state after a like toggle."""

    state: Literal["liked", "unliked"]


class SubscriptionToggleResponse(BaseModel):
    """구독 토글 결과 — Resulting state after a subscription toggle."""

    state: Literal["subscribed", "unsubscribed"]


class LikeStatusResponse(BaseModel):
    is_liked: bool


class LikeCountResponse(BaseModel):
    like_count: int


class SubscriptionStatusResponse(BaseModel):
    """채널 구독 상태 — 구독자 수와 조회자 구독 여부.

    Subscription status of a channel relative to the viewer.
    """

    channel_id: str
    subscribers_count: int
    is_subscribed: bool


class ChannelStatsResponse(BaseModel):
    """채널 대시보드 통계.

    Attributes:
        total_views: 모든 동영상의 조회수 합 (Sum of views across the channel's videos)
        total_subscribers: 구독자 수 (Subscriber count)
        total_videos: 동영상 수 (Number of videos)
        total_likes: 채널 동영상이 받은 좋아요 수 (Likes received by the channel's videos)
    """

    total_views: int
    total_subscribers: int
    total_videos: int
    total_likes: int
