"""사용자 레포지토리 — 사용자 조회, 리프레시 토큰 슬롯, 시청 기록.

User Repository — User lookups by credential, the refresh-token slot, and
watch history. The refresh-token writes are single conditional UPDATEs so the
"one live value" invariant holds without locks held across I/O.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User, WatchHistoryEntry
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """사용자 레포지토리.

    User repository with credential lookups and session-slot operations.

    Extends:
        BaseRepository[User]
    """

    def __init__(self) -> None:
        super().__init__(User)

    async def get_by_username(self, db: AsyncSession, username: str) -> User | None:
        """사용자명으로 사용자를 조회합니다 (대소문자 무시).

        Retrieve a user by username (stored lowercase).
        """
        query: Select = select(User).where(User.username == username.lower())
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_by_username_or_email(
        self,
        db: AsyncSession,
        username: str | None,
        email: str | None,
    ) -> User | None:
        """사용자명 또는 이메일로 사용자를 조회합니다.

        Retrieve the first user matching either the username or the email.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            username: 사용자명 (Username, may be None)
            email: 이메일 (Email, may be None)

        Returns:
            User | None: 조회된 사용자 또는 None (Found user or None)
        """
        conditions = []
        if username:
            conditions.append(User.username == username.lower())
        if email:
            conditions.append(User.email == email)
        if not conditions:
            return None

        result = await db.execute(select(User).where(or_(*conditions)).limit(1))
        return result.scalar_one_or_none()

    async def get_many(self, db: AsyncSession, user_ids: Sequence[UUID]) -> dict[UUID, User]:
        """여러 사용자를 id → User 딕셔너리로 조회합니다.

        Batch-load users keyed by id.
        """
        if not user_ids:
            return {}
        result = await db.execute(select(User).where(User.id.in_(list(set(user_ids)))))
        return {u.id: u for u in result.scalars().all()}

    async def set_refresh_token(
        self,
        db: AsyncSession,
        user_id: UUID,
        token: str | None,
    ) -> bool:
        """리프레시 토큰 슬롯을 무조건 덮어씁니다 (로그인/로그아웃).

        Unconditionally overwrite the refresh-token slot (login, logout).

        Returns:
            bool: 사용자가 존재했으면 True (True if the user row exists)
        """
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(refresh_token=token)
        )
        result = await db.execute(stmt)
        return (result.rowcount or 0) > 0

    async def swap_refresh_token(
        self,
        db: AsyncSession,
        user_id: UUID,
        expected: str,
        replacement: str,
    ) -> bool:
        """저장된 값이 expected와 같을 때만 새 토큰으로 교체합니다 (compare-and-swap).

        Replace the stored refresh token only if it still equals `expected`.
        Two rotations racing on the same value cannot both succeed.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 사용자 UUID (User UUID)
            expected: 제시된 리프레시 토큰 (Presented refresh token)
            replacement: 새 리프레시 토큰 (Newly minted refresh token)

        Returns:
            bool: 교체 성공 여부 (Whether the swap happened)
        """
        stmt = (
            update(User)
            .where(User.id == user_id, User.refresh_token == expected)
            .values(refresh_token=replacement)
        )
        result = await db.execute(stmt)
        return (result.rowcount or 0) == 1

    async def append_watch_history(
        self,
        db: AsyncSession,
        user_id: UUID,
        video_id: UUID,
    ) -> None:
        """시청 기록 끝에 video id를 추가합니다 (단일 INSERT).

        Append a visit to the user's watch history with a single INSERT.
        """
        await db.execute(insert(WatchHistoryEntry).values(user_id=user_id, video_id=video_id))

    async def get_watch_history_ids(self, db: AsyncSession, user_id: UUID) -> list[UUID]:
        """시청 기록의 video id 목록 (방문 순서, 최근 항목이 마지막).

        Visited video ids in visit order, most recent last. Repeat visits
        appear once per visit.
        """
        query: Select = (
            select(WatchHistoryEntry.video_id)
            .where(WatchHistoryEntry.user_id == user_id)
            .order_by(WatchHistoryEntry.id.asc())
        )
        result = await db.execute(query)
        return list(result.scalars().all())


# 싱글턴 인스턴스 — Singleton instance
user_repository: UserRepository = UserRepository()
