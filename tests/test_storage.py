"""스토리지 서비스 테스트 — 로컬 모드 저장/삭제와 S3 모드 호출.

Storage service tests. S3 mode is exercised against a stubbed boto3 client.
"""

from unittest.mock import MagicMock

from app.config import settings
from app.services.storage_service import MediaUpload, StorageService


class TestLocalStorage:
    """로컬 모드 테스트."""

    def test_store_writes_file_and_returns_url(self, local_storage):
        """파일 저장 후 공개 URL 반환."""
        service = StorageService()
        url = service.store(b"data", "clip.MP4", "videos")

        assert url.startswith(f"{settings.PUBLIC_BASE_URL}/uploads/videos/")
        assert url.endswith(".mp4")
        files = list(local_storage.rglob("*.mp4"))
        assert len(files) == 1
        assert files[0].read_bytes() == b"data"

    def test_each_store_gets_new_key(self, local_storage):
        """같은 파일명이라도 매번 새 키."""
        service = StorageService()
        first = service.store(b"a", "a.png", "avatars")
        second = service.store(b"b", "a.png", "avatars")
        assert first != second

    def test_file_without_extension(self, local_storage):
        """확장자 없는 파일은 .bin."""
        url = StorageService().store(b"x", "noext", "misc")
        assert url.endswith(".bin")

    def test_remove_stored_file(self, local_storage):
        """저장된 파일 삭제."""
        service = StorageService()
        url = service.store_upload(MediaUpload(data=b"img", filename="a.png"), "avatars")

        assert service.remove(url) is True
        assert not list(local_storage.rglob("*.png"))
        assert service.remove(url) is False

    def test_remove_foreign_url_ignored(self, local_storage):
        """다른 저장소의 URL은 무시."""
        service = StorageService()
        assert service.remove("https://elsewhere.example.com/a.png") is False
        assert service.remove(None) is False

    async def test_removal_waits_for_commit(self, db, alice, local_storage):
        """커밋 후에만 삭제, 롤백 시 예약 취소 (alice 생성으로 트랜잭션 시작)."""
        service = StorageService()
        kept = service.store(b"kept", "kept.png", "avatars")
        dropped = service.store(b"dropped", "dropped.png", "avatars")

        service.remove_after_commit(db, kept)
        await db.rollback()
        service.remove_after_commit(db, dropped)
        assert len(list(local_storage.rglob("*.png"))) == 2

        await db.commit()
        remaining = list(local_storage.rglob("*.png"))
        assert len(remaining) == 1
        assert kept.endswith(remaining[0].name)


class TestS3Storage:
    """S3 모드 테스트."""

    def test_store_and_remove_call_s3(self, monkeypatch):
        """S3 put_object / delete_object 호출."""
        monkeypatch.setattr(settings, "AWS_ACCESS_KEY_ID", "key")
        monkeypatch.setattr(settings, "AWS_SECRET_ACCESS_KEY", "secret")
        monkeypatch.setattr(settings, "AWS_S3_BUCKET", "media-bucket")
        monkeypatch.setattr(settings, "AWS_S3_REGION", "us-east-1")

        service = StorageService()
        fake_client = MagicMock()
        service._client = fake_client

        url = service.store(b"bytes", "thumb.jpg", "thumbnails", "image/jpeg")
        assert url.startswith("https://media-bucket.s3.us-east-1.amazonaws.com/thumbnails/")

        put_kwargs = fake_client.put_object.call_args.kwargs
        assert put_kwargs["Bucket"] == "media-bucket"
        assert put_kwargs["ContentType"] == "image/jpeg"
        assert url.endswith(put_kwargs["Key"])

        assert service.remove(url) is True
        fake_client.delete_object.assert_called_once_with(Bucket="media-bucket", Key=put_kwargs["Key"])
