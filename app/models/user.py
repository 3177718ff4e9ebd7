"""사용자(채널) SQLAlchemy ORM 모델 정의.

User (principal / channel) SQLAlchemy ORM model definition.
Every user is also a channel that others can subscribe to.

Tables:
    - users: 사용자 계정 (User accounts, credentials, and the live refresh token)
    - watch_history: 시청 기록 (Append-only video visits, one row per view)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import BigInteger, DateTime, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class User(Base):
    """사용자 모델 — 계정, 자격 증명, 세션 슬롯.

    User model — Account, credentials, and the single refresh-token slot.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        username: 로그인 아이디, 소문자 저장 (Login username, stored lowercase, globally unique)
        email: 이메일 (Email address, globally unique)
        full_name: 표시 이름 (Display name)
        password_hash: bcrypt 해시된 비밀번호 (bcrypt-hashed password)
        refresh_token: 현재 유효한 리프레시 토큰 값 (Current refresh token value; None = no session)
        avatar: 아바타 URL (Avatar image URL)
        cover_image: 커버 이미지 URL (Cover image URL, optional)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 로그인 아이디 — 전역 고유 (unique across the platform)
    username: Mapped[str] = mapped_column(String(100), unique=True, index=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    # 비밀번호 해시 — 평문 저장 금지 (never store plaintext)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    # 리프레시 토큰 슬롯 — 한 번에 하나의 값만 유효 (at most one live value)
    refresh_token: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    avatar: Mapped[str] = mapped_column(String(1024), nullable=False)
    cover_image: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # 관계 — Relationships
    videos = relationship("Video", back_populates="owner", cascade="all, delete-orphan")
    tweets = relationship("Tweet", back_populates="owner", cascade="all, delete-orphan")
    playlists = relationship("Playlist", back_populates="owner", cascade="all, delete-orphan")


class WatchHistoryEntry(Base):
    """시청 기록 항목 — 조회 한 번에 한 행.

    One video visit. Rows are only ever inserted, so concurrent views by the
    same user never overwrite each other; `id` increases with insertion and
    gives the visit order. video_id has no foreign key: entries outlive
    deleted videos and are skipped when read.
    """

    __tablename__ = "watch_history"

    # SQLite는 INTEGER PRIMARY KEY만 자동 증가 (only INTEGER autoincrements on SQLite)
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True
    )
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    video_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    watched_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
