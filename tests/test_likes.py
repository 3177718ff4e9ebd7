"""좋아요 API 테스트 — 토글, 상태, 개수, 좋아요한 동영상.

Like API tests — Toggle parity, status and count reads, target validation,
and the liked-videos view.
"""

import asyncio
import uuid

from httpx import AsyncClient

from app.models.engagement import LikeTargetKind
from app.repositories.like_repository import like_repository
from tests.conftest import auth_header, create_comment, create_tweet, create_user, create_video

LIKES = "/api/v1/likes"


class TestToggleLike:
    """좋아요 토글 테스트."""

    async def test_toggle_twice_restores_state(self, client: AsyncClient, db, alice, bob):
        """두 번 토글하면 원래 상태로."""
        video = await create_video(db, alice)

        first = await client.post(f"{LIKES}/toggle/v/{video.id}", headers=auth_header(bob))
        assert first.status_code == 200
        assert first.json()["state"] == "liked"

        second = await client.post(f"{LIKES}/toggle/v/{video.id}", headers=auth_header(bob))
        assert second.json()["state"] == "unliked"

        count = await client.get(f"{LIKES}/count/v/{video.id}")
        assert count.json()["like_count"] == 0

    async def test_one_like_per_actor(self, client: AsyncClient, db, alice, bob, carol):
        """사용자당 대상별 좋아요는 최대 1개."""
        tweet = await create_tweet(db, alice)

        await client.post(f"{LIKES}/toggle/t/{tweet.id}", headers=auth_header(bob))
        await client.post(f"{LIKES}/toggle/t/{tweet.id}", headers=auth_header(carol))
        await client.post(f"{LIKES}/toggle/t/{tweet.id}", headers=auth_header(carol))
        await client.post(f"{LIKES}/toggle/t/{tweet.id}", headers=auth_header(carol))

        count = await client.get(f"{LIKES}/count/tweet/{tweet.id}")
        assert count.json()["like_count"] == 2

    async def test_like_comment(self, client: AsyncClient, db, alice, bob):
        """댓글 좋아요 — 전체 이름 경로 사용."""
        video = await create_video(db, alice)
        comment = await create_comment(db, bob, video)

        res = await client.post(f"{LIKES}/toggle/comment/{comment.id}", headers=auth_header(alice))
        assert res.json()["state"] == "liked"

        status = await client.get(f"{LIKES}/is-liked/c/{comment.id}", headers=auth_header(alice))
        assert status.json()["is_liked"] is True

        other = await client.get(f"{LIKES}/is-liked/c/{comment.id}", headers=auth_header(bob))
        assert other.json()["is_liked"] is False

    async def test_invalid_kind(self, client: AsyncClient, db, alice):
        """알 수 없는 대상 종류 400."""
        res = await client.post(f"{LIKES}/toggle/x/{uuid.uuid4()}", headers=auth_header(alice))
        assert res.status_code == 400

    async def test_malformed_target_id(self, client: AsyncClient, alice):
        """형식이 잘못된 id 400."""
        res = await client.post(f"{LIKES}/toggle/v/not-a-uuid", headers=auth_header(alice))
        assert res.status_code == 400

    async def test_missing_target(self, client: AsyncClient, alice):
        """존재하지 않는 대상 404."""
        res = await client.post(f"{LIKES}/toggle/v/{uuid.uuid4()}", headers=auth_header(alice))
        assert res.status_code == 404

    async def test_same_id_different_kind_is_distinct(self, client: AsyncClient, db, alice, bob):
        """같은 사용자가 동영상과 트윗에 각각 좋아요 — 서로 독립."""
        video = await create_video(db, alice)
        tweet = await create_tweet(db, alice)

        await client.post(f"{LIKES}/toggle/v/{video.id}", headers=auth_header(bob))
        status = await client.get(f"{LIKES}/is-liked/t/{tweet.id}", headers=auth_header(bob))
        assert status.json()["is_liked"] is False

    async def test_toggle_requires_auth(self, client: AsyncClient, db, alice):
        """인증 없이 토글 401."""
        video = await create_video(db, alice)
        res = await client.post(f"{LIKES}/toggle/v/{video.id}")
        assert res.status_code == 401


class TestLikeReads:
    """좋아요 조회 테스트."""

    async def test_count_missing_target(self, client: AsyncClient):
        """존재하지 않는 대상의 개수 조회 404."""
        res = await client.get(f"{LIKES}/count/t/{uuid.uuid4()}")
        assert res.status_code == 404

    async def test_liked_videos_most_recent_first(self, client: AsyncClient, db, alice, bob):
        """좋아요한 동영상 — 최근 좋아요 순."""
        first = await create_video(db, alice, title="first")
        second = await create_video(db, alice, title="second")

        await client.post(f"{LIKES}/toggle/v/{first.id}", headers=auth_header(bob))
        await client.post(f"{LIKES}/toggle/v/{second.id}", headers=auth_header(bob))

        res = await client.get(f"{LIKES}/videos", headers=auth_header(bob))
        assert res.status_code == 200
        assert [item["title"] for item in res.json()] == ["second", "first"]
        assert all(item["is_liked"] for item in res.json())


class TestConcurrentToggle:
    """동시 토글 테스트 — 세션마다 별도 연결."""

    async def test_overlapping_toggles_leave_at_most_one_edge(self, session_factory):
        """동시에 여러 번 토글해도 엣지는 0개 또는 1개."""
        async with session_factory() as session:
            owner = await create_user(session, "alice")
            fan = await create_user(session, "bob")
            video = await create_video(session, owner)
            await session.commit()

        async def toggle_once() -> None:
            async with session_factory() as session:
                await like_repository.toggle(session, fan.id, LikeTargetKind.VIDEO, video.id)
                await session.commit()

        await asyncio.gather(*(toggle_once() for _ in range(7)))

        async with session_factory() as session:
            count = await like_repository.count_for_target(session, LikeTargetKind.VIDEO, video.id)
        assert count in (0, 1)
