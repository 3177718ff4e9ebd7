"""좋아요 레포지토리 — 좋아요 엣지의 원자적 토글과 집계 쿼리.

Like Repository — Atomic toggle and read-side aggregations over like edges.

토글은 조건부 DELETE 후 ON CONFLICT DO NOTHING INSERT로 처리하므로
동시에 들어온 두 요청이 모두 엣지를 만들거나 지우는 일이 없습니다.
Toggle is a conditional DELETE followed, only if nothing was deleted, by an
INSERT ... ON CONFLICT DO NOTHING. No read-then-write window exists.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.content import Tweet
from app.models.engagement import Like, LikeTargetKind
from app.repositories.base import BaseRepository, insert_ignoring_conflict

_LIKE_KEY: list[str] = ["actor_id", "target_kind", "target_id"]


class LikeRepository(BaseRepository[Like]):
    """좋아요 엣지 레포지토리.

    Extends:
        BaseRepository[Like]
    """

    def __init__(self) -> None:
        super().__init__(Like)

    async def toggle(
        self,
        db: AsyncSession,
        actor_id: UUID,
        target_kind: LikeTargetKind,
        target_id: UUID,
    ) -> bool:
        """좋아요 엣지를 원자적으로 토글합니다.

        Atomically flip the presence of the (actor, kind, target) edge.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            actor_id: 좋아요를 누른 사용자 (Acting user)
            target_kind: 대상 종류 (Target kind)
            target_id: 대상 id (Target id)

        Returns:
            bool: 토글 후 엣지가 존재하면 True (True if the edge exists afterwards)
        """
        deleted = await db.execute(
            delete(Like).where(
                Like.actor_id == actor_id,
                Like.target_kind == target_kind.value,
                Like.target_id == target_id,
            ).execution_options(synchronize_session=False)
        )
        if (deleted.rowcount or 0) > 0:
            return False

        # 충돌 = 동시 요청이 먼저 생성함 → 이미 좋아요 상태 (conflict means already liked)
        await insert_ignoring_conflict(
            db,
            Like,
            {"actor_id": actor_id, "target_kind": target_kind.value, "target_id": target_id},
            _LIKE_KEY,
        )
        return True

    async def is_liked(
        self,
        db: AsyncSession,
        actor_id: UUID,
        target_kind: LikeTargetKind,
        target_id: UUID,
    ) -> bool:
        return await self.exists(
            db,
            {"actor_id": actor_id, "target_kind": target_kind.value, "target_id": target_id},
        )

    async def count_for_target(
        self,
        db: AsyncSession,
        target_kind: LikeTargetKind,
        target_id: UUID,
    ) -> int:
        """대상의 좋아요 수를 계산합니다 (저장된 카운터 없음).

        Count edges pointing at a target. Computed on demand.
        """
        query: Select = select(func.count()).select_from(Like).where(
            Like.target_kind == target_kind.value,
            Like.target_id == target_id,
        )
        return (await db.execute(query)).scalar() or 0

    async def count_for_targets(
        self,
        db: AsyncSession,
        target_kind: LikeTargetKind,
        target_ids: Sequence[UUID],
    ) -> dict[UUID, int]:
        """여러 대상의 좋아요 수를 한 번에 계산합니다.

        Batch count for a page of targets. Targets without likes are absent
        from the result.
        """
        if not target_ids:
            return {}
        query: Select = (
            select(Like.target_id, func.count())
            .where(Like.target_kind == target_kind.value, Like.target_id.in_(list(set(target_ids))))
            .group_by(Like.target_id)
        )
        result = await db.execute(query)
        return {target_id: count for target_id, count in result.all()}

    async def liked_subset(
        self,
        db: AsyncSession,
        actor_id: UUID,
        target_kind: LikeTargetKind,
        target_ids: Sequence[UUID],
    ) -> set[UUID]:
        """주어진 대상 중 actor가 좋아요한 id 집합을 반환합니다.

        Return which of the given targets the actor has liked.
        """
        if not target_ids:
            return set()
        query: Select = select(Like.target_id).where(
            Like.actor_id == actor_id,
            Like.target_kind == target_kind.value,
            Like.target_id.in_(list(set(target_ids))),
        )
        result = await db.execute(query)
        return set(result.scalars().all())

    async def liked_target_ids(
        self,
        db: AsyncSession,
        actor_id: UUID,
        target_kind: LikeTargetKind,
    ) -> list[UUID]:
        """actor가 좋아요한 대상 id 목록 (최근 좋아요 순).

        Target ids liked by the actor, most recent like first.
        """
        query: Select = (
            select(Like.target_id)
            .where(Like.actor_id == actor_id, Like.target_kind == target_kind.value)
            .order_by(Like.created_at.desc(), Like.id.desc())
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def top_liked_tweets(
        self,
        db: AsyncSession,
        limit: int,
    ) -> list[tuple[Tweet, int]]:
        """좋아요가 가장 많은 트윗을 조회합니다.

        Group tweet likes by target and rank by count desc, then tweet
        created_at desc, then tweet id desc. Only tweets with at least one
        like are returned.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            limit: 최대 개수 (Maximum number of rows)

        Returns:
            list[tuple[Tweet, int]]: (트윗, 좋아요 수) 목록 (Tweet and its like count)
        """
        like_counts = (
            select(Like.target_id.label("tweet_id"), func.count().label("like_count"))
            .where(Like.target_kind == LikeTargetKind.TWEET.value)
            .group_by(Like.target_id)
            .subquery()
        )
        query: Select = (
            select(Tweet, like_counts.c.like_count)
            .options(selectinload(Tweet.owner))
            .join(like_counts, like_counts.c.tweet_id == Tweet.id)
            .order_by(
                like_counts.c.like_count.desc(),
                Tweet.created_at.desc(),
                Tweet.id.desc(),
            )
            .limit(limit)
        )
        result = await db.execute(query)
        return [(tweet, count) for tweet, count in result.all()]

    async def delete_for_targets(
        self,
        db: AsyncSession,
        target_kind: LikeTargetKind,
        target_ids: Sequence[UUID],
    ) -> int:
        """삭제된 콘텐츠를 가리키는 좋아요 엣지를 제거합니다.

        Remove edges pointing at deleted content.
        """
        if not target_ids:
            return 0
        result = await db.execute(
            delete(Like).where(
                Like.target_kind == target_kind.value,
                Like.target_id.in_(list(set(target_ids))),
            ).execution_options(synchronize_session=False)
        )
        return result.rowcount or 0


# 싱글턴 인스턴스 — Singleton instance
like_repository: LikeRepository = LikeRepository()
