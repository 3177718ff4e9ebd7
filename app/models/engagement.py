"""참여(좋아요/구독) 관계 SQLAlchemy ORM 모델 정의.

Engagement edge SQLAlchemy ORM model definitions.
Edges are existence-only: a like or a subscription is a presence bit, and the
unique constraints below are what the atomic toggles rely on.

Tables:
    - likes: 좋아요 (actor → video/comment/tweet)
    - subscriptions: 구독 (subscriber → channel)
"""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class LikeTargetKind(str, enum.Enum):
    """좋아요 대상 종류 — Kind of entity a like points at."""

    VIDEO = "video"
    COMMENT = "comment"
    TWEET = "tweet"


class Like(Base):
    """좋아요 엣지.

    Like edge. target_id is polymorphic (no foreign key); target_kind says
    which table it refers to.

    Constraints:
        uq_like_actor_target: (actor_id, target_kind, target_id) 당 최대 1개
                              (At most one edge per triple)
    """

    __tablename__ = "likes"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    actor_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    target_kind: Mapped[str] = mapped_column(String(16), nullable=False)
    target_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("actor_id", "target_kind", "target_id", name="uq_like_actor_target"),
        # 대상별 카운트/리더보드 집계용 — Per-target counting and leaderboard grouping
        Index("ix_likes_target", "target_kind", "target_id"),
    )


class Subscription(Base):
    """구독 엣지.

    Subscription edge from a subscriber to a channel (both users).

    Constraints:
        uq_subscription_pair: (subscriber_id, channel_id) 당 최대 1개
                              (At most one edge per ordered pair)
    """

    __tablename__ = "subscriptions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    subscriber_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    channel_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("subscriber_id", "channel_id", name="uq_subscription_pair"),
    )
