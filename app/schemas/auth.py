"""인증 관련 Pydantic 요청/응답 스키마 정의.

Authentication-related Pydantic request/response schema definitions.
Covers login, token issuance/rotation, and password change.
Registration is a multipart form and is declared on the router.
"""

from pydantic import BaseModel

from app.schemas.user import UserResponse


class LoginRequest(BaseModel):
    """로그인 요청 스키마.

    Login request schema. Either username or email identifies the user.

    Attributes:
        username: 사용자명 (Username, optional if email given)
        email: 이메일 (Email, optional if username given)
        password: 비밀번호 (Plain text password, verified against bcrypt hash)
    """

    username: str | None = None
    email: str | None = None
    password: str  # 비밀번호 — 평문, 서버에서 bcrypt 해시와 비교 (Plain text, compared to bcrypt hash)


class TokenResponse(BaseModel):
    """JWT 토큰 발급 응답 스키마.

    JWT token pair returned after login or rotation.

    Attributes:
        access_token: JWT 액세스 토큰 (Short-lived access token)
        refresh_token: JWT 리프레시 토큰 (Long-lived refresh token)
        token_type: 토큰 유형 (Always "bearer" for Authorization header)
    """

    access_token: str  # JWT 액세스 토큰 — 만료: 15분 기본 (Access token, default TTL: 15min)
    refresh_token: str  # JWT 리프레시 토큰 — 만료: 10일 기본 (Refresh token, default TTL: 10 days)
    token_type: str = "bearer"


class LoginResponse(TokenResponse):
    """로그인 응답 스키마 — 토큰 쌍 + 사용자 정보.

    Login response: token pair plus the logged-in user.
    """

    user: UserResponse


class RefreshRequest(BaseModel):
    """토큰 갱신 요청 스키마.

    Token rotation request. The token may instead arrive in the
    refresh_token cookie, so the body field is optional.
    """

    refresh_token: str | None = None


class ChangePasswordRequest(BaseModel):
    """비밀번호 변경 요청 스키마.

    Attributes:
        old_password: 현재 비밀번호 (Current password)
        new_password: 새 비밀번호 (New password)
    """

    old_password: str
    new_password: str
