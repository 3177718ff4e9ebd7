"""스토리지 서비스 — S3 또는 로컬 파일 저장.

Storage Service — Stores uploaded media (video files, thumbnails, avatars,
cover images) on S3 or on local disk and returns the public URL.
AWS 키가 비어있으면 자동으로 로컬 모드로 전환됩니다.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from app.config import settings

logger = logging.getLogger(__name__)

_SERVER_ROOT: Path = Path(__file__).resolve().parent.parent.parent

# 커밋 후 삭제할 URL 목록을 담는 Session.info 키 (Session.info key of URLs to delete after commit)
_PENDING_REMOVALS: str = "pending_media_removals"


@dataclass(frozen=True)
class MediaUpload:
    """업로드된 파일 — Uploaded file contents read from a multipart form."""

    data: bytes
    filename: str
    content_type: str | None = None


class StorageService:
    """파일 업로드 서비스 — S3 또는 로컬 모드 자동 선택."""

    def __init__(self) -> None:
        self._client = None

    @property
    def is_local(self) -> bool:
        return not settings.AWS_ACCESS_KEY_ID or not settings.AWS_S3_BUCKET

    @property
    def uploads_dir(self) -> Path:
        # 로컬 업로드 디렉토리 — .env의 LOCAL_UPLOADS_DIR 또는 server/uploads/
        if settings.LOCAL_UPLOADS_DIR:
            return Path(settings.LOCAL_UPLOADS_DIR)
        return _SERVER_ROOT / "uploads"

    @property
    def client(self):
        if self.is_local:
            return None
        if self._client is None:
            import boto3
            from botocore.config import Config as BotoConfig

            self._client = boto3.client(
                "s3",
                region_name=settings.AWS_S3_REGION,
                aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
                aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
                config=BotoConfig(signature_version="s3v4"),
            )
        return self._client

    @property
    def _public_prefix(self) -> str:
        if self.is_local:
            return f"{settings.PUBLIC_BASE_URL.rstrip('/')}/uploads/"
        return f"https://{settings.AWS_S3_BUCKET}.s3.{settings.AWS_S3_REGION}.amazonaws.com/"

    def _generate_key(self, filename: str, folder: str) -> str:
        ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else "bin"
        date_prefix = datetime.now(timezone.utc).strftime("%Y/%m/%d")
        return f"{folder}/{date_prefix}/{uuid.uuid4().hex}.{ext}"

    def store(
        self,
        data: bytes,
        filename: str,
        folder: str,
        content_type: str | None = None,
    ) -> str:
        """파일을 저장하고 공개 URL을 반환합니다.

        Persist the bytes under a fresh key inside `folder` and return the
        public URL. Each call yields a new key, so replacing an avatar never
        overwrites the previous object.

        Args:
            data: 파일 내용 (File contents)
            filename: 원본 파일명 — 확장자만 사용 (Original name, only the extension is kept)
            folder: 저장 폴더 (Folder such as "videos", "thumbnails", "avatars")
            content_type: MIME 타입 (MIME type, S3 only)

        Returns:
            str: 공개 URL (Public URL of the stored object)
        """
        key = self._generate_key(filename, folder)

        if self.is_local:
            path = self.uploads_dir / key
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        else:
            extra: dict[str, str] = {"ContentType": content_type} if content_type else {}
            self.client.put_object(
                Bucket=settings.AWS_S3_BUCKET,
                Key=key,
                Body=data,
                **extra,
            )

        logger.info("Stored %d bytes at %s", len(data), key)
        return f"{self._public_prefix}{key}"

    def store_upload(self, upload: MediaUpload, folder: str) -> str:
        """MediaUpload를 저장하고 공개 URL을 반환합니다 — Store a form upload."""
        return self.store(upload.data, upload.filename, folder, upload.content_type)

    def _extract_key(self, file_url: str) -> str | None:
        """file URL에서 storage key를 추출합니다."""
        prefix = self._public_prefix
        if file_url.startswith(prefix):
            return file_url[len(prefix):]
        return None

    def remove(self, file_url: str | None) -> bool:
        """저장된 파일을 삭제합니다. 이 스토리지의 URL이 아니면 무시합니다.

        Delete a previously stored object. URLs that do not belong to this
        store are ignored.
        """
        if not file_url:
            return False
        key = self._extract_key(file_url)
        if not key:
            return False

        if self.is_local:
            path = self.uploads_dir / key
            if not path.is_file():
                return False
            path.unlink()
        else:
            self.client.delete_object(Bucket=settings.AWS_S3_BUCKET, Key=key)

        logger.info("Removed stored object %s", key)
        return True

    def remove_after_commit(self, db: AsyncSession, file_url: str | None) -> None:
        """트랜잭션이 커밋된 뒤에 파일을 삭제하도록 예약합니다.

        Schedule a stored object for deletion once the session commits.
        On rollback the schedule is dropped and the object stays, so rows
        never point at files that were already deleted.
        """
        if file_url:
            db.sync_session.info.setdefault(_PENDING_REMOVALS, []).append(file_url)


storage_service: StorageService = StorageService()


@event.listens_for(Session, "after_commit")
def _remove_pending_media(session: Session) -> None:
    for file_url in session.info.pop(_PENDING_REMOVALS, []):
        storage_service.remove(file_url)


@event.listens_for(Session, "after_rollback")
def _discard_pending_media(session: Session) -> None:
    session.info.pop(_PENDING_REMOVALS, None)
