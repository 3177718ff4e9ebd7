"""좋아요 서비스 — 좋아요 토글, 상태/개수 조회, 목록 응답용 집계.

Like Service — Business logic for like edges: atomic toggle, status and
count reads, and the batch like summary used to decorate listings.
"""

import logging
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.engagement import LikeTargetKind
from app.repositories.comment_repository import comment_repository
from app.repositories.like_repository import like_repository
from app.repositories.tweet_repository import tweet_repository
from app.repositories.video_repository import video_repository
from app.schemas.engagement import LikeCountResponse, LikeStatusResponse, LikeToggleResponse
from app.utils.exceptions import BadRequestError, NotFoundError
from app.utils.ids import parse_id

logger = logging.getLogger(__name__)

# URL 경로의 대상 종류 별칭 — Path aliases for target kinds
_KIND_ALIASES: dict[str, LikeTargetKind] = {
    "v": LikeTargetKind.VIDEO,
    "video": LikeTargetKind.VIDEO,
    "c": LikeTargetKind.COMMENT,
    "comment": LikeTargetKind.COMMENT,
    "t": LikeTargetKind.TWEET,
    "tweet": LikeTargetKind.TWEET,
}

_TARGET_REPOSITORIES = {
    LikeTargetKind.VIDEO: video_repository,
    LikeTargetKind.COMMENT: comment_repository,
    LikeTargetKind.TWEET: tweet_repository,
}


def parse_kind(raw: str) -> LikeTargetKind:
    """경로의 대상 종류를 파싱합니다 ("v", "video" 등).

    Parse a target kind from its path form.

    Raises:
        BadRequestError: 알 수 없는 종류 (Unknown kind)
    """
    kind: LikeTargetKind | None = _KIND_ALIASES.get(raw.lower())
    if kind is None:
        raise BadRequestError(f"Invalid like target kind: {raw}")
    return kind


class LikeService:
    """좋아요 비즈니스 로직 서비스.

    Service for like edges over videos, comments, and tweets.
    """

    async def _ensure_target_exists(
        self,
        db: AsyncSession,
        kind: LikeTargetKind,
        target_id: UUID,
    ) -> None:
        target = await _TARGET_REPOSITORIES[kind].get_by_id(db, target_id)
        if target is None:
            raise NotFoundError(f"{kind.value.capitalize()} not found")

    async def toggle_like(
        self,
        db: AsyncSession,
        actor_id: UUID,
        kind: LikeTargetKind,
        target_id: str,
    ) -> LikeToggleResponse:
        """좋아요를 토글합니다.

        Flip the actor's like on a target. Two toggles by the same actor
        return the edge to its original state.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            actor_id: 사용자 UUID (Acting user)
            kind: 대상 종류 (Target kind)
            target_id: 대상 id 문자열 (Raw target id)

        Returns:
            LikeToggleResponse: {"state": "liked"|"unliked"}

        Raises:
            BadRequestError: 잘못된 id 형식 (Malformed id)
            NotFoundError: 대상 없음 (Target does not exist)
        """
        parsed_id: UUID = parse_id(target_id, kind.value)
        await self._ensure_target_exists(db, kind, parsed_id)

        liked: bool = await like_repository.toggle(db, actor_id, kind, parsed_id)
        logger.debug("User %s %s %s %s", actor_id, "liked" if liked else "unliked", kind.value, parsed_id)
        return LikeToggleResponse(state="liked" if liked else "unliked")

    async def is_liked(
        self,
        db: AsyncSession,
        actor_id: UUID,
        kind: LikeTargetKind,
        target_id: str,
    ) -> LikeStatusResponse:
        parsed_id: UUID = parse_id(target_id, kind.value)
        return LikeStatusResponse(
            is_liked=await like_repository.is_liked(db, actor_id, kind, parsed_id)
        )

    async def count_likes(
        self,
        db: AsyncSession,
        kind: LikeTargetKind,
        target_id: str,
    ) -> LikeCountResponse:
        """대상의 좋아요 수 — 요청 시 계산 (Computed on demand)."""
        parsed_id: UUID = parse_id(target_id, kind.value)
        await self._ensure_target_exists(db, kind, parsed_id)
        return LikeCountResponse(
            like_count=await like_repository.count_for_target(db, kind, parsed_id)
        )

    async def summarize(
        self,
        db: AsyncSession,
        kind: LikeTargetKind,
        target_ids: Sequence[UUID],
        viewer_id: UUID | None,
    ) -> tuple[dict[UUID, int], set[UUID] | None]:
        """목록 응답용 좋아요 수와 조회자 좋아요 여부를 한 번에 조회합니다.

        Batch like counts for a page of targets, plus the subset the viewer
        has liked (None when anonymous).
        """
        counts: dict[UUID, int] = await like_repository.count_for_targets(db, kind, target_ids)
        liked: set[UUID] | None = None
        if viewer_id is not None:
            liked = await like_repository.liked_subset(db, viewer_id, kind, target_ids)
        return counts, liked


# 싱글턴 인스턴스 — Singleton instance
like_service: LikeService = LikeService()
