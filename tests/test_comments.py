"""댓글 API 테스트 — 동영상 댓글 목록, 작성, 수정, 삭제.

Comment API tests.
"""

import uuid

from httpx import AsyncClient

from tests.conftest import auth_header, create_comment, create_video

COMMENTS = "/api/v1/comments"


class TestComments:
    """댓글 테스트."""

    async def test_add_and_list(self, client: AsyncClient, db, alice, bob):
        """댓글 작성 후 목록에 표시."""
        video = await create_video(db, alice)

        res = await client.post(
            f"{COMMENTS}/{video.id}", json={"content": "great video"}, headers=auth_header(bob)
        )
        assert res.status_code == 201
        assert res.json()["video_id"] == str(video.id)
        assert res.json()["owner"]["username"] == "bob"

        listing = await client.get(f"{COMMENTS}/{video.id}")
        data = listing.json()
        assert data["total"] == 1
        assert data["items"][0]["content"] == "great video"

    async def test_list_paginated(self, client: AsyncClient, db, alice, bob):
        """댓글 페이지네이션."""
        video = await create_video(db, alice)
        for i in range(5):
            await create_comment(db, bob, video, f"comment {i}")

        res = await client.get(f"{COMMENTS}/{video.id}", params={"page": 2, "limit": 2})
        data = res.json()
        assert data["total"] == 5
        assert len(data["items"]) == 2

    async def test_comment_on_missing_video(self, client: AsyncClient, alice):
        """존재하지 않는 동영상에 댓글 404."""
        res = await client.post(
            f"{COMMENTS}/{uuid.uuid4()}", json={"content": "hello"}, headers=auth_header(alice)
        )
        assert res.status_code == 404

    async def test_list_missing_video(self, client: AsyncClient):
        """존재하지 않는 동영상의 댓글 목록 404."""
        res = await client.get(f"{COMMENTS}/{uuid.uuid4()}")
        assert res.status_code == 404

    async def test_update_owner_only(self, client: AsyncClient, db, alice, bob):
        """댓글 수정 — 작성자만."""
        video = await create_video(db, alice)
        comment = await create_comment(db, bob, video)

        other = await client.patch(
            f"{COMMENTS}/c/{comment.id}", json={"content": "edited"}, headers=auth_header(alice)
        )
        assert other.status_code == 403

        res = await client.patch(
            f"{COMMENTS}/c/{comment.id}", json={"content": "edited"}, headers=auth_header(bob)
        )
        assert res.status_code == 200
        assert res.json()["content"] == "edited"

    async def test_delete_comment(self, client: AsyncClient, db, alice, bob):
        """댓글 삭제 후 목록에서 제거."""
        video = await create_video(db, alice)
        comment = await create_comment(db, bob, video)

        res = await client.delete(f"{COMMENTS}/c/{comment.id}", headers=auth_header(bob))
        assert res.status_code == 200
        assert res.json()["message"] == "Comment deleted successfully"

        listing = await client.get(f"{COMMENTS}/{video.id}")
        assert listing.json()["total"] == 0
