"""동영상 API 테스트 — 목록/페이지네이션, 조회, 업로드, 수정, 삭제, 공개 전환.

Video API tests — Paginated listing with search and sort, reads with view
counting and watch history, multipart publish, owner-only mutations.
"""

import uuid

from httpx import AsyncClient
from sqlalchemy import select

from app.models.content import Comment, Video
from app.models.engagement import Like, LikeTargetKind
from tests.conftest import auth_header, create_comment, create_video

VIDEOS = "/api/v1/videos"


# ===== Listing =====

class TestListVideos:
    """동영상 목록 테스트."""

    async def test_pages_partition_the_result(self, client: AsyncClient, db, alice):
        """25개 동영상을 10개씩 — 페이지가 겹치거나 빠지지 않음."""
        for i in range(25):
            await create_video(db, alice, title=f"video {i:02d}")

        seen: list[str] = []
        for page in (1, 2, 3):
            res = await client.get(VIDEOS, params={"page": page, "limit": 10})
            assert res.status_code == 200
            data = res.json()
            assert data["total"] == 25
            assert data["page"] == page
            assert data["limit"] == 10
            seen.extend(item["id"] for item in data["items"])

        assert len(seen) == 25
        assert len(set(seen)) == 25

    async def test_page_past_the_end_is_empty(self, client: AsyncClient, db, alice):
        """마지막 페이지 이후는 빈 목록."""
        await create_video(db, alice)
        res = await client.get(VIDEOS, params={"page": 5, "limit": 10})
        assert res.status_code == 200
        assert res.json()["items"] == []
        assert res.json()["total"] == 1

    async def test_sort_by_views(self, client: AsyncClient, db, alice):
        """조회수 오름차순 정렬."""
        await create_video(db, alice, title="popular", views=100)
        await create_video(db, alice, title="quiet", views=1)
        await create_video(db, alice, title="middle", views=50)

        res = await client.get(VIDEOS, params={"sort_by": "views", "sort_type": "asc"})
        titles = [item["title"] for item in res.json()["items"]]
        assert titles == ["quiet", "middle", "popular"]

    async def test_search_title_and_description(self, client: AsyncClient, db, alice):
        """제목/설명 대소문자 무시 검색."""
        await create_video(db, alice, title="Cooking Pasta")
        await create_video(db, alice, title="Travel", description="a cooking trip")
        await create_video(db, alice, title="Music")

        res = await client.get(VIDEOS, params={"query": "COOKING"})
        assert res.json()["total"] == 2

    async def test_search_treats_wildcards_literally(self, client: AsyncClient, db, alice):
        """검색어의 % 문자는 와일드카드가 아님."""
        await create_video(db, alice, title="100% fun")
        await create_video(db, alice, title="boring")

        res = await client.get(VIDEOS, params={"query": "%"})
        assert res.json()["total"] == 1

    async def test_invalid_sort_key(self, client: AsyncClient):
        """허용되지 않은 정렬 키 400."""
        res = await client.get(VIDEOS, params={"sort_by": "password_hash"})
        assert res.status_code == 400

    async def test_invalid_sort_type(self, client: AsyncClient):
        """잘못된 정렬 방향 400."""
        res = await client.get(VIDEOS, params={"sort_type": "sideways"})
        assert res.status_code == 400

    async def test_invalid_page(self, client: AsyncClient):
        """page 0 또는 limit 범위 초과 400."""
        assert (await client.get(VIDEOS, params={"page": 0})).status_code == 400
        assert (await client.get(VIDEOS, params={"limit": 0})).status_code == 400
        assert (await client.get(VIDEOS, params={"limit": 1000})).status_code == 400

    async def test_unpublished_hidden_from_others(self, client: AsyncClient, db, alice, bob):
        """비공개 동영상은 다른 사용자 목록에 나타나지 않음."""
        await create_video(db, alice, title="public")
        await create_video(db, alice, title="draft", is_published=False)

        res = await client.get(VIDEOS, params={"user_id": str(alice.id)}, headers=auth_header(bob))
        assert [item["title"] for item in res.json()["items"]] == ["public"]

        mine = await client.get(f"{VIDEOS}/me", headers=auth_header(alice))
        assert mine.json()["total"] == 2

    async def test_listing_includes_like_data(self, client: AsyncClient, db, alice, bob):
        """목록 항목에 좋아요 수와 조회자 좋아요 여부 포함."""
        video = await create_video(db, alice)
        db.add(Like(actor_id=bob.id, target_kind=LikeTargetKind.VIDEO.value, target_id=video.id))
        await db.flush()

        res = await client.get(VIDEOS, headers=auth_header(bob))
        item = res.json()["items"][0]
        assert item["like_count"] == 1
        assert item["is_liked"] is True
        assert item["owner"]["username"] == "alice"

        anonymous = await client.get(VIDEOS)
        assert anonymous.json()["items"][0]["is_liked"] is None


# ===== Read =====

class TestGetVideo:
    """동영상 조회 테스트."""

    async def test_get_counts_view_and_history(self, client: AsyncClient, db, alice, bob):
        """조회 시 조회수 +1, 시청 기록 추가."""
        video = await create_video(db, alice)

        res = await client.get(f"{VIDEOS}/{video.id}", headers=auth_header(bob))
        assert res.status_code == 200
        assert res.json()["views"] == 1

        res = await client.get(f"{VIDEOS}/{video.id}", headers=auth_header(bob))
        assert res.json()["views"] == 2

        history = await client.get("/api/v1/users/me/history", headers=auth_header(bob))
        assert [item["id"] for item in history.json()] == [str(video.id), str(video.id)]

    async def test_view_does_not_touch_updated_at(self, client: AsyncClient, db, alice, bob):
        """조회는 수정이 아니므로 updated_at 유지."""
        video = await create_video(db, alice)
        before = (await db.execute(select(Video.updated_at).where(Video.id == video.id))).scalar_one()

        res = await client.get(f"{VIDEOS}/{video.id}", headers=auth_header(bob))
        assert res.status_code == 200

        after = (await db.execute(select(Video.updated_at).where(Video.id == video.id))).scalar_one()
        assert after == before

    async def test_anonymous_view(self, client: AsyncClient, db, alice):
        """익명 조회도 조회수 증가."""
        video = await create_video(db, alice)
        res = await client.get(f"{VIDEOS}/{video.id}")
        assert res.status_code == 200
        assert res.json()["views"] == 1

    async def test_get_missing_video(self, client: AsyncClient):
        """존재하지 않는 동영상 404."""
        res = await client.get(f"{VIDEOS}/{uuid.uuid4()}")
        assert res.status_code == 404

    async def test_get_malformed_id(self, client: AsyncClient):
        """형식이 잘못된 id 400."""
        res = await client.get(f"{VIDEOS}/not-a-uuid")
        assert res.status_code == 400

    async def test_unpublished_visible_to_owner_only(self, client: AsyncClient, db, alice, bob):
        """비공개 동영상은 소유자만 조회."""
        video = await create_video(db, alice, is_published=False)
        assert (await client.get(f"{VIDEOS}/{video.id}", headers=auth_header(bob))).status_code == 404
        assert (await client.get(f"{VIDEOS}/{video.id}", headers=auth_header(alice))).status_code == 200

    async def test_trending_orders_by_views(self, client: AsyncClient, db, alice):
        """인기 동영상 — 조회수 내림차순, 비공개 제외."""
        await create_video(db, alice, title="low", views=3)
        await create_video(db, alice, title="high", views=30)
        await create_video(db, alice, title="hidden", views=999, is_published=False)

        res = await client.get(f"{VIDEOS}/trending", params={"limit": 5})
        assert [item["title"] for item in res.json()] == ["high", "low"]


# ===== Publish =====

class TestPublishVideo:
    """동영상 업로드 테스트."""

    async def test_publish_success(self, client: AsyncClient, alice, local_storage):
        """multipart 업로드 성공."""
        res = await client.post(
            VIDEOS,
            data={"title": "My clip", "description": "First upload", "duration": "12.5"},
            files={
                "video_file": ("clip.mp4", b"fake video bytes", "video/mp4"),
                "thumbnail": ("thumb.jpg", b"fake thumb", "image/jpeg"),
            },
            headers=auth_header(alice),
        )
        assert res.status_code == 201
        data = res.json()
        assert data["title"] == "My clip"
        assert data["duration"] == 12.5
        assert data["views"] == 0
        assert data["is_published"] is True
        assert data["owner"]["id"] == str(alice.id)
        assert "/uploads/videos/" in data["video_file"]
        assert len(list(local_storage.rglob("*.mp4"))) == 1

    async def test_publish_missing_file(self, client: AsyncClient, alice):
        """동영상 파일 없으면 400."""
        res = await client.post(
            VIDEOS,
            data={"title": "No file", "description": "d"},
            files={"thumbnail": ("thumb.jpg", b"fake thumb", "image/jpeg")},
            headers=auth_header(alice),
        )
        assert res.status_code == 400

    async def test_publish_blank_title(self, client: AsyncClient, alice):
        """빈 제목 400."""
        res = await client.post(
            VIDEOS,
            data={"title": " ", "description": "d"},
            files={
                "video_file": ("clip.mp4", b"v", "video/mp4"),
                "thumbnail": ("thumb.jpg", b"t", "image/jpeg"),
            },
            headers=auth_header(alice),
        )
        assert res.status_code == 400

    async def test_publish_requires_auth(self, client: AsyncClient):
        """인증 없이 업로드 401."""
        res = await client.post(VIDEOS, data={"title": "x", "description": "y"})
        assert res.status_code == 401


# ===== Owner mutations =====

class TestVideoMutations:
    """동영상 수정/삭제/공개 전환 테스트."""

    async def test_update_by_owner(self, client: AsyncClient, db, alice):
        """소유자 제목 수정."""
        video = await create_video(db, alice)
        res = await client.patch(
            f"{VIDEOS}/{video.id}", data={"title": "Renamed"}, headers=auth_header(alice)
        )
        assert res.status_code == 200
        assert res.json()["title"] == "Renamed"

    async def test_update_by_other_user(self, client: AsyncClient, db, alice, bob):
        """다른 사용자 수정 시 403."""
        video = await create_video(db, alice)
        res = await client.patch(
            f"{VIDEOS}/{video.id}", data={"title": "Hijacked"}, headers=auth_header(bob)
        )
        assert res.status_code == 403

    async def test_update_nothing(self, client: AsyncClient, db, alice):
        """수정할 필드가 없으면 400."""
        video = await create_video(db, alice)
        res = await client.patch(f"{VIDEOS}/{video.id}", headers=auth_header(alice))
        assert res.status_code == 400

    async def test_toggle_publish(self, client: AsyncClient, db, alice, bob):
        """공개 전환 — 소유자만."""
        video = await create_video(db, alice)
        res = await client.patch(f"{VIDEOS}/toggle/publish/{video.id}", headers=auth_header(alice))
        assert res.status_code == 200
        assert res.json()["is_published"] is False

        other = await client.patch(f"{VIDEOS}/toggle/publish/{video.id}", headers=auth_header(bob))
        assert other.status_code == 403

    async def test_delete_removes_dependents(self, client: AsyncClient, db, alice, bob):
        """삭제 시 댓글과 좋아요도 함께 삭제."""
        video = await create_video(db, alice)
        video_id = video.id
        comment = await create_comment(db, bob, video)
        db.add(Like(actor_id=bob.id, target_kind=LikeTargetKind.VIDEO.value, target_id=video_id))
        db.add(Like(actor_id=alice.id, target_kind=LikeTargetKind.COMMENT.value, target_id=comment.id))
        await db.flush()

        res = await client.delete(f"{VIDEOS}/{video_id}", headers=auth_header(alice))
        assert res.status_code == 200
        assert res.json()["message"] == "Video deleted successfully"

        assert (await db.execute(select(Video).where(Video.id == video_id))).first() is None
        assert (await db.execute(select(Comment).where(Comment.video_id == video_id))).first() is None
        assert (await db.execute(select(Like))).first() is None

    async def test_delete_by_other_user(self, client: AsyncClient, db, alice, bob):
        """다른 사용자 삭제 시 403."""
        video = await create_video(db, alice)
        res = await client.delete(f"{VIDEOS}/{video.id}", headers=auth_header(bob))
        assert res.status_code == 403
