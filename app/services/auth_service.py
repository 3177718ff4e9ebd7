"""인증 서비스 — 회원가입, 로그인, 토큰 발급/교체/폐기, 비밀번호 변경.

Auth Service — Business logic for registration, login, the JWT token
lifecycle, and password change.

세션 상태는 사용자 행의 refresh_token 슬롯 하나로 표현됩니다.
Session state is the single refresh_token slot on the user row:
    - 로그인: 슬롯 덮어쓰기 (login overwrites the slot)
    - 교체: 제시된 값과 같을 때만 새 값으로 교체 (rotation is compare-and-swap)
    - 로그아웃: 슬롯 비우기 (logout clears the slot)
Access tokens are verified statelessly and stay valid until expiry.
"""

import logging
from uuid import UUID

import jwt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.user_repository import user_repository
from app.schemas.auth import LoginRequest, LoginResponse, TokenResponse
from app.schemas.user import UserResponse
from app.services.storage_service import MediaUpload, storage_service
from app.services.user_service import to_user_response
from app.utils.exceptions import (
    BadRequestError,
    DuplicateError,
    InvalidCredentialError,
    NotFoundError,
    SessionInvalidatedError,
    UnauthorizedError,
)
from app.utils.jwt import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    decode_token,
)
from app.utils.password import hash_password, verify_password

logger = logging.getLogger(__name__)


class AuthService:
    """인증 관련 비즈니스 로직을 처리하는 서비스.

    Service handling authentication business logic.
    Manages registration, login, token issuance and rotation, logout,
    and credential changes.
    """

    def _build_jwt_payload(self, user_id: UUID) -> dict[str, str]:
        return {"sub": str(user_id)}

    def _decode(self, token: str, expected_type: str) -> UUID:
        """토큰을 검증하고 principal id를 반환합니다.

        Verify signature, expiry, and token type, and return the subject.

        Raises:
            UnauthorizedError: 만료, 서명 오류, 잘못된 유형 (Expired, bad signature, wrong type)
        """
        try:
            payload: dict = decode_token(token)
        except jwt.ExpiredSignatureError:
            raise UnauthorizedError(f"{expected_type.capitalize()} token expired")
        except jwt.InvalidTokenError:
            raise UnauthorizedError(f"Invalid {expected_type} token")

        # 토큰 타입 검증 — Reject refresh tokens used as access tokens and vice versa
        if payload.get("type") != expected_type:
            raise UnauthorizedError("Invalid token type")
        try:
            return UUID(str(payload["sub"]))
        except ValueError:
            raise UnauthorizedError(f"Invalid {expected_type} token")

    async def issue_tokens(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> TokenResponse:
        """액세스/리프레시 토큰 쌍을 발급하고 리프레시 토큰을 저장합니다.

        Mint a token pair and store the refresh value on the user,
        overwriting any previous session.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 사용자 UUID (Principal id)

        Returns:
            TokenResponse: 토큰 응답 (Token pair)

        Raises:
            NotFoundError: 사용자가 없을 때 (Unknown user)
        """
        payload: dict[str, str] = self._build_jwt_payload(user_id)
        access_token: str = create_access_token(payload)
        refresh_token: str = create_refresh_token(payload)

        if not await user_repository.set_refresh_token(db, user_id, refresh_token):
            raise NotFoundError("User not found")

        return TokenResponse(access_token=access_token, refresh_token=refresh_token)

    def verify_access(self, token: str | None) -> UUID:
        """액세스 토큰을 검증합니다 (무상태).

        Stateless access-token check: signature, expiry, and type.

        Raises:
            UnauthorizedError: 토큰 누락/만료/오류 (Missing, expired, or invalid token)
        """
        if not token:
            raise UnauthorizedError("Unauthorized request")
        return self._decode(token, ACCESS_TOKEN_TYPE)

    async def rotate(
        self,
        db: AsyncSession,
        presented: str | None,
    ) -> TokenResponse:
        """리프레시 토큰을 교체하고 새 토큰 쌍을 발급합니다.

        Exchange the current refresh token for a new pair. The swap is a
        single conditional UPDATE, so of two rotations presenting the same
        value at most one succeeds.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            presented: 제시된 리프레시 토큰 (Presented refresh token)

        Returns:
            TokenResponse: 새 토큰 응답 (New token pair)

        Raises:
            UnauthorizedError: 서명/만료/유형 오류 (Invalid signature, expiry, or type)
            SessionInvalidatedError: 이미 교체되었거나 폐기된 토큰 (Stale or revoked token)
        """
        if not presented:
            raise UnauthorizedError("Refresh token is required")
        user_id: UUID = self._decode(presented, REFRESH_TOKEN_TYPE)

        payload: dict[str, str] = self._build_jwt_payload(user_id)
        access_token: str = create_access_token(payload)
        refresh_token: str = create_refresh_token(payload)

        swapped: bool = await user_repository.swap_refresh_token(
            db, user_id, expected=presented, replacement=refresh_token
        )
        if not swapped:
            logger.warning("Rejected stale refresh token for user %s", user_id)
            raise SessionInvalidatedError()

        logger.info("Rotated refresh token for user %s", user_id)
        return TokenResponse(access_token=access_token, refresh_token=refresh_token)

    async def revoke(self, db: AsyncSession, user_id: UUID) -> None:
        """세션을 폐기합니다. 이미 로그아웃 상태여도 성공합니다.

        Clear the stored refresh token. Idempotent.
        """
        await user_repository.set_refresh_token(db, user_id, None)
        logger.info("Revoked session for user %s", user_id)

    async def change_credential(
        self,
        db: AsyncSession,
        user: User,
        old_password: str,
        new_password: str,
    ) -> None:
        """비밀번호를 변경합니다. 기존 세션은 유지됩니다.

        Replace the password hash after checking the current password.
        Existing sessions are left untouched.

        Raises:
            InvalidCredentialError: 기존 비밀번호 불일치 (Wrong current password)
            BadRequestError: 새 비밀번호가 비어 있음 (Blank new password)
        """
        if not verify_password(old_password, user.password_hash):
            raise InvalidCredentialError()
        if not new_password or not new_password.strip():
            raise BadRequestError("New password must not be blank")

        user.password_hash = hash_password(new_password)
        await db.flush()
        logger.info("Password changed for user %s", user.id)

    async def register(
        self,
        db: AsyncSession,
        username: str,
        email: str,
        full_name: str,
        password: str,
        avatar: MediaUpload | None,
        cover_image: MediaUpload | None = None,
    ) -> UserResponse:
        """회원가입을 처리합니다.

        Register a new user. The username is stored lowercase.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            username: 사용자명 (Username)
            email: 이메일 (Email)
            full_name: 표시 이름 (Display name)
            password: 비밀번호 (Plain text password)
            avatar: 아바타 파일 — 필수 (Avatar upload, required)
            cover_image: 커버 이미지 파일 (Cover image upload, optional)

        Returns:
            UserResponse: 생성된 사용자 (Created user)

        Raises:
            BadRequestError: 빈 필드 또는 아바타 누락 (Blank field or missing avatar)
            DuplicateError: 사용자명 또는 이메일 중복 (Username or email already taken)
        """
        fields: list[str] = [username, email, full_name, password]
        if any(value is None or not value.strip() for value in fields):
            raise BadRequestError("All fields are required")

        username = username.strip().lower()
        email = email.strip()

        # 사용자명/이메일 중복 확인 — Check username and email uniqueness
        existing: User | None = await user_repository.get_by_username_or_email(db, username, email)
        if existing is not None:
            raise DuplicateError("User with email or username already exists")

        if avatar is None or not avatar.data:
            raise BadRequestError("Avatar file is required")

        avatar_url: str = storage_service.store_upload(avatar, "avatars")
        cover_url: str | None = None
        if cover_image is not None and cover_image.data:
            cover_url = storage_service.store_upload(cover_image, "covers")

        try:
            user: User = await user_repository.create(
                db,
                {
                    "username": username,
                    "email": email,
                    "full_name": full_name.strip(),
                    "password_hash": hash_password(password),
                    "avatar": avatar_url,
                    "cover_image": cover_url,
                },
            )
        except IntegrityError as exc:
            # 확인 이후 동시 가입이 먼저 삽입됨 (a concurrent registration won the unique key)
            await db.rollback()
            storage_service.remove(avatar_url)
            storage_service.remove(cover_url)
            raise DuplicateError("User with email or username already exists") from exc
        logger.info("Registered user %s", user.id)
        return to_user_response(user)

    async def login(
        self,
        db: AsyncSession,
        data: LoginRequest,
    ) -> LoginResponse:
        """로그인을 처리합니다.

        Authenticate by username or email and open a new session,
        replacing any previous one.

        Raises:
            BadRequestError: 사용자명/이메일 모두 누락 (Neither username nor email)
            NotFoundError: 존재하지 않는 사용자 (Unknown user)
            UnauthorizedError: 비밀번호 불일치 (Wrong password)
        """
        if not data.username and not data.email:
            raise BadRequestError("Username or email is required")

        user: User | None = await user_repository.get_by_username_or_email(
            db, data.username, data.email
        )
        if user is None:
            raise NotFoundError("User does not exist")
        if not verify_password(data.password, user.password_hash):
            raise UnauthorizedError("Invalid user credentials")

        tokens: TokenResponse = await self.issue_tokens(db, user.id)
        logger.info("User %s logged in", user.id)
        return LoginResponse(
            user=to_user_response(user),
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
        )


# 싱글턴 인스턴스 — Singleton instance
auth_service: AuthService = AuthService()
