"""사용자 서비스 — 계정 정보, 아바타/커버 이미지 관리.

User Service — Business logic for the authenticated user's account:
profile read, account detail updates, and avatar/cover image replacement.
Also exposes the shared user → response converters.
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.user_repository import user_repository
from app.schemas.common import OwnerSummary
from app.schemas.user import AccountUpdate, UserResponse
from app.services.storage_service import MediaUpload, storage_service
from app.utils.exceptions import BadRequestError, DuplicateError


def to_user_response(user: User) -> UserResponse:
    """User ORM → 공개 응답 변환 (비밀번호 해시, 리프레시 토큰 제외)."""
    return UserResponse(
        id=str(user.id),
        username=user.username,
        email=user.email,
        full_name=user.full_name,
        avatar=user.avatar,
        cover_image=user.cover_image,
        created_at=user.created_at,
    )


def to_owner_summary(user: User) -> OwnerSummary:
    """User ORM → 콘텐츠 소유자 요약 변환."""
    return OwnerSummary(
        id=str(user.id),
        username=user.username,
        full_name=user.full_name,
        avatar=user.avatar,
    )


class UserService:
    """계정 관리 비즈니스 로직 서비스.

    Service for self-service account management.
    """

    def get_me(self, user: User) -> UserResponse:
        return to_user_response(user)

    async def update_account(
        self,
        db: AsyncSession,
        user: User,
        data: AccountUpdate,
    ) -> UserResponse:
        """계정 정보(표시 이름, 이메일)를 수정합니다.

        Update full name and/or email. Email must stay unique.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user: 현재 사용자 (Authenticated user)
            data: 수정 데이터 (Fields to update)

        Returns:
            UserResponse: 수정된 사용자 (Updated user)

        Raises:
            BadRequestError: 수정할 필드가 없거나 빈 값 (Nothing to update, or blank value)
            DuplicateError: 다른 사용자가 사용 중인 이메일 (Email taken by another user)
        """
        update_data: dict[str, str] = {}
        if data.full_name is not None:
            if not data.full_name.strip():
                raise BadRequestError("Full name must not be blank")
            update_data["full_name"] = data.full_name.strip()
        if data.email is not None:
            email: str = data.email.strip()
            if not email:
                raise BadRequestError("Email must not be blank")
            if email != user.email:
                owner: User | None = await user_repository.get_by_username_or_email(db, None, email)
                if owner is not None and owner.id != user.id:
                    raise DuplicateError("Email is already in use")
            update_data["email"] = email
        if not update_data:
            raise BadRequestError("At least one field is required")

        try:
            await user_repository.update(db, user, update_data)
        except IntegrityError as exc:
            await db.rollback()
            raise DuplicateError("Email is already in use") from exc
        return to_user_response(user)

    async def update_avatar(
        self,
        db: AsyncSession,
        user: User,
        upload: MediaUpload | None,
    ) -> UserResponse:
        """아바타 이미지를 교체합니다 — Replace the avatar image."""
        if upload is None or not upload.data:
            raise BadRequestError("Avatar file is missing")
        previous: str = user.avatar
        user.avatar = storage_service.store_upload(upload, "avatars")
        await db.flush()
        storage_service.remove_after_commit(db, previous)
        return to_user_response(user)

    async def update_cover_image(
        self,
        db: AsyncSession,
        user: User,
        upload: MediaUpload | None,
    ) -> UserResponse:
        """커버 이미지를 교체합니다 — Replace the cover image."""
        if upload is None or not upload.data:
            raise BadRequestError("Cover image file is missing")
        previous: str | None = user.cover_image
        user.cover_image = storage_service.store_upload(upload, "covers")
        await db.flush()
        storage_service.remove_after_commit(db, previous)
        return to_user_response(user)


# 싱글턴 인스턴스 — Singleton instance
user_service: UserService = UserService()
