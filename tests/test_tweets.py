"""트윗 API 테스트 — 작성, 목록, 수정, 삭제, 좋아요 순위.

Tweet API tests — CRUD, per-user listing, and the padded top-liked
leaderboard.
"""

import uuid

from httpx import AsyncClient
from sqlalchemy import select

from app.models.engagement import Like, LikeTargetKind
from tests.conftest import auth_header, create_tweet

TWEETS = "/api/v1/tweets"


async def _like(db, actor, tweet) -> None:
    db.add(Like(actor_id=actor.id, target_kind=LikeTargetKind.TWEET.value, target_id=tweet.id))
    await db.flush()


class TestTweetCrud:
    """트윗 CRUD 테스트."""

    async def test_create_tweet(self, client: AsyncClient, alice):
        """트윗 작성 성공."""
        res = await client.post(TWEETS, json={"content": "hello world"}, headers=auth_header(alice))
        assert res.status_code == 201
        data = res.json()
        assert data["content"] == "hello world"
        assert data["owner"]["username"] == "alice"
        assert data["like_count"] == 0

    async def test_create_blank_tweet(self, client: AsyncClient, alice):
        """공백만 있는 트윗 400."""
        res = await client.post(TWEETS, json={"content": "   "}, headers=auth_header(alice))
        assert res.status_code == 400

    async def test_list_user_tweets(self, client: AsyncClient, db, alice, bob):
        """사용자별 트윗 목록 — 최신순."""
        await create_tweet(db, alice, "first")
        await create_tweet(db, alice, "second")
        await create_tweet(db, bob, "other")

        res = await client.get(f"{TWEETS}/user/{alice.id}")
        assert res.status_code == 200
        data = res.json()
        assert data["total"] == 2
        assert [item["content"] for item in data["items"]] == ["second", "first"]

    async def test_list_tweets_of_unknown_user(self, client: AsyncClient):
        """존재하지 않는 사용자의 트윗 목록 404."""
        res = await client.get(f"{TWEETS}/user/{uuid.uuid4()}")
        assert res.status_code == 404

    async def test_update_tweet_owner_only(self, client: AsyncClient, db, alice, bob):
        """트윗 수정 — 작성자만."""
        tweet = await create_tweet(db, alice)

        res = await client.patch(
            f"{TWEETS}/{tweet.id}", json={"content": "edited"}, headers=auth_header(alice)
        )
        assert res.status_code == 200
        assert res.json()["content"] == "edited"

        other = await client.patch(
            f"{TWEETS}/{tweet.id}", json={"content": "hijack"}, headers=auth_header(bob)
        )
        assert other.status_code == 403

    async def test_delete_tweet_removes_likes(self, client: AsyncClient, db, alice, bob):
        """트윗 삭제 시 좋아요도 삭제."""
        tweet = await create_tweet(db, alice)
        await _like(db, bob, tweet)

        forbidden = await client.delete(f"{TWEETS}/{tweet.id}", headers=auth_header(bob))
        assert forbidden.status_code == 403

        res = await client.delete(f"{TWEETS}/{tweet.id}", headers=auth_header(alice))
        assert res.status_code == 200
        assert (await db.execute(select(Like))).first() is None

        missing = await client.delete(f"{TWEETS}/{tweet.id}", headers=auth_header(alice))
        assert missing.status_code == 404


class TestTopLiked:
    """좋아요 순위 테스트."""

    async def test_padded_to_exact_size(self, client: AsyncClient, db, alice, bob):
        """좋아요 받은 트윗이 1개면 나머지 2자리는 placeholder."""
        tweet = await create_tweet(db, alice, "liked one")
        await create_tweet(db, alice, "unliked")
        await _like(db, bob, tweet)

        res = await client.get(f"{TWEETS}/top-liked")
        assert res.status_code == 200
        board = res.json()
        assert len(board) == 3
        assert board[0]["id"] == str(tweet.id)
        assert board[0]["like_count"] == 1
        for placeholder in board[1:]:
            assert placeholder["id"] is None
            assert placeholder["content"] is None
            assert placeholder["like_count"] == 0

    async def test_empty_board(self, client: AsyncClient):
        """좋아요가 하나도 없으면 placeholder만."""
        res = await client.get(f"{TWEETS}/top-liked", params={"limit": 2})
        assert res.json() == [
            {"id": None, "content": None, "owner": None, "created_at": None, "like_count": 0},
            {"id": None, "content": None, "owner": None, "created_at": None, "like_count": 0},
        ]

    async def test_ranked_by_like_count(self, client: AsyncClient, db, alice, bob, carol):
        """좋아요 수 내림차순 정렬."""
        popular = await create_tweet(db, alice, "popular")
        modest = await create_tweet(db, bob, "modest")
        await _like(db, bob, popular)
        await _like(db, carol, popular)
        await _like(db, alice, modest)

        res = await client.get("/api/v1/likes/top-liked", params={"limit": 2})
        board = res.json()
        assert [entry["content"] for entry in board] == ["popular", "modest"]
        assert [entry["like_count"] for entry in board] == [2, 1]

    async def test_invalid_limit(self, client: AsyncClient):
        """limit 0 400."""
        res = await client.get(f"{TWEETS}/top-liked", params={"limit": 0})
        assert res.status_code == 400
