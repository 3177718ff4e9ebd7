"""재생목록 API 테스트 — 생성, 조회, 수정, 삭제, 동영상 추가/제거.

Playlist API tests.
"""

import uuid

from httpx import AsyncClient

from tests.conftest import auth_header, create_video

PLAYLISTS = "/api/v1/playlists"


async def _create_playlist(client: AsyncClient, user, name: str = "Favorites") -> dict:
    res = await client.post(
        PLAYLISTS, json={"name": name, "description": "my picks"}, headers=auth_header(user)
    )
    assert res.status_code == 201
    return res.json()


class TestPlaylistCrud:
    """재생목록 CRUD 테스트."""

    async def test_create_and_get(self, client: AsyncClient, alice):
        """재생목록 생성 후 상세 조회."""
        playlist = await _create_playlist(client, alice)
        assert playlist["owner_id"] == str(alice.id)
        assert playlist["video_count"] == 0

        res = await client.get(f"{PLAYLISTS}/{playlist['id']}")
        assert res.status_code == 200
        assert res.json()["name"] == "Favorites"
        assert res.json()["videos"] == []

    async def test_create_blank_name(self, client: AsyncClient, alice):
        """공백 이름 400."""
        res = await client.post(PLAYLISTS, json={"name": "  "}, headers=auth_header(alice))
        assert res.status_code == 400

    async def test_list_user_playlists(self, client: AsyncClient, db, alice):
        """사용자의 재생목록 목록과 동영상 수."""
        video = await create_video(db, alice)
        first = await _create_playlist(client, alice, "first")
        await _create_playlist(client, alice, "second")
        await client.patch(f"{PLAYLISTS}/add/{video.id}/{first['id']}", headers=auth_header(alice))

        res = await client.get(f"{PLAYLISTS}/user/{alice.id}")
        assert res.status_code == 200
        counts = {p["name"]: p["video_count"] for p in res.json()}
        assert counts == {"first": 1, "second": 0}

    async def test_update_owner_only(self, client: AsyncClient, alice, bob):
        """재생목록 수정 — 소유자만."""
        playlist = await _create_playlist(client, alice)

        other = await client.patch(
            f"{PLAYLISTS}/{playlist['id']}", json={"name": "Stolen"}, headers=auth_header(bob)
        )
        assert other.status_code == 403

        res = await client.patch(
            f"{PLAYLISTS}/{playlist['id']}", json={"name": "Renamed"}, headers=auth_header(alice)
        )
        assert res.status_code == 200
        assert res.json()["name"] == "Renamed"

    async def test_delete_playlist(self, client: AsyncClient, db, alice):
        """재생목록 삭제 후 404."""
        video = await create_video(db, alice)
        playlist = await _create_playlist(client, alice)
        await client.patch(f"{PLAYLISTS}/add/{video.id}/{playlist['id']}", headers=auth_header(alice))

        res = await client.delete(f"{PLAYLISTS}/{playlist['id']}", headers=auth_header(alice))
        assert res.status_code == 200

        missing = await client.get(f"{PLAYLISTS}/{playlist['id']}")
        assert missing.status_code == 404

    async def test_get_missing_playlist(self, client: AsyncClient):
        """존재하지 않는 재생목록 404."""
        res = await client.get(f"{PLAYLISTS}/{uuid.uuid4()}")
        assert res.status_code == 404


class TestPlaylistMembership:
    """재생목록 동영상 추가/제거 테스트."""

    async def test_add_is_idempotent_and_ordered(self, client: AsyncClient, db, alice):
        """같은 동영상 두 번 추가해도 1개, 추가 순서 유지."""
        first = await create_video(db, alice, title="first")
        second = await create_video(db, alice, title="second")
        playlist = await _create_playlist(client, alice)
        pid = playlist["id"]

        await client.patch(f"{PLAYLISTS}/add/{second.id}/{pid}", headers=auth_header(alice))
        await client.patch(f"{PLAYLISTS}/add/{first.id}/{pid}", headers=auth_header(alice))
        res = await client.patch(f"{PLAYLISTS}/add/{second.id}/{pid}", headers=auth_header(alice))

        assert res.status_code == 200
        assert [v["title"] for v in res.json()["videos"]] == ["second", "first"]
        assert res.json()["video_count"] == 2

    async def test_remove_is_idempotent(self, client: AsyncClient, db, alice):
        """제거는 멤버가 아니어도 성공."""
        video = await create_video(db, alice)
        playlist = await _create_playlist(client, alice)
        pid = playlist["id"]

        await client.patch(f"{PLAYLISTS}/add/{video.id}/{pid}", headers=auth_header(alice))
        for _ in range(2):
            res = await client.patch(f"{PLAYLISTS}/remove/{video.id}/{pid}", headers=auth_header(alice))
            assert res.status_code == 200
            assert res.json()["videos"] == []

    async def test_add_missing_video(self, client: AsyncClient, alice):
        """존재하지 않는 동영상 추가 404."""
        playlist = await _create_playlist(client, alice)
        res = await client.patch(
            f"{PLAYLISTS}/add/{uuid.uuid4()}/{playlist['id']}", headers=auth_header(alice)
        )
        assert res.status_code == 404

    async def test_add_to_someone_elses_playlist(self, client: AsyncClient, db, alice, bob):
        """다른 사용자의 재생목록에 추가 403."""
        video = await create_video(db, bob)
        playlist = await _create_playlist(client, alice)
        res = await client.patch(
            f"{PLAYLISTS}/add/{video.id}/{playlist['id']}", headers=auth_header(bob)
        )
        assert res.status_code == 403

    async def test_unpublished_member_hidden_from_others(self, client: AsyncClient, db, alice, bob):
        """다른 사용자의 비공개 동영상은 상세에서 제외."""
        draft = await create_video(db, bob, title="draft", is_published=False)
        public = await create_video(db, bob, title="public")
        playlist = await _create_playlist(client, alice)
        pid = playlist["id"]
        await client.patch(f"{PLAYLISTS}/add/{draft.id}/{pid}", headers=auth_header(alice))
        await client.patch(f"{PLAYLISTS}/add/{public.id}/{pid}", headers=auth_header(alice))

        res = await client.get(f"{PLAYLISTS}/{pid}", headers=auth_header(alice))
        assert [v["title"] for v in res.json()["videos"]] == ["public"]

        owner_view = await client.get(f"{PLAYLISTS}/{pid}", headers=auth_header(bob))
        assert [v["title"] for v in owner_view.json()["videos"]] == ["draft", "public"]
