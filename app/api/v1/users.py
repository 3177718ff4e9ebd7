"""사용자 라우터 — 회원가입, 로그인, 토큰 교체, 로그아웃, 계정 관리.

Users Router — Registration, login, token rotation, logout, password change,
account management, channel profile, and watch history endpoints.
Tokens are returned in the body and also set as httpOnly cookies.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Request, Response, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import (
    ACCESS_TOKEN_COOKIE,
    REFRESH_TOKEN_COOKIE,
    get_current_user,
    get_optional_user,
    read_upload,
)
from app.config import settings
from app.database import get_db
from app.models.user import User
from app.schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    RefreshRequest,
    TokenResponse,
)
from app.schemas.common import MessageResponse
from app.schemas.content import VideoResponse
from app.schemas.user import AccountUpdate, ChannelProfileResponse, UserResponse
from app.services.auth_service import auth_service
from app.services.channel_service import channel_service
from app.services.user_service import user_service

router: APIRouter = APIRouter()


def _set_auth_cookies(response: Response, tokens: TokenResponse) -> None:
    options: dict = {
        "httponly": True,
        "secure": settings.AUTH_COOKIE_SECURE,
        "samesite": "lax",
    }
    response.set_cookie(ACCESS_TOKEN_COOKIE, tokens.access_token, **options)
    response.set_cookie(REFRESH_TOKEN_COOKIE, tokens.refresh_token, **options)


def _clear_auth_cookies(response: Response) -> None:
    response.delete_cookie(ACCESS_TOKEN_COOKIE)
    response.delete_cookie(REFRESH_TOKEN_COOKIE)


@router.post("/register", response_model=UserResponse, status_code=201)
async def register(
    db: Annotated[AsyncSession, Depends(get_db)],
    username: Annotated[str, Form()] = "",
    email: Annotated[str, Form()] = "",
    full_name: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
    avatar: Annotated[UploadFile | None, File()] = None,
    cover_image: Annotated[UploadFile | None, File()] = None,
) -> UserResponse:
    """회원가입 — multipart 폼, 아바타 필수.

    Register a new user from a multipart form. The avatar is required.
    """
    result: UserResponse = await auth_service.register(
        db,
        username=username,
        email=email,
        full_name=full_name,
        password=password,
        avatar=await read_upload(avatar),
        cover_image=await read_upload(cover_image),
    )
    await db.commit()
    return result


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> LoginResponse:
    """로그인 — 사용자명 또는 이메일 + 비밀번호.

    Login with username or email. Opens a new session, replacing any
    previous one.
    """
    result: LoginResponse = await auth_service.login(db, data)
    await db.commit()
    _set_auth_cookies(response, result)
    return result


@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> MessageResponse:
    """로그아웃 — 저장된 리프레시 토큰 폐기, 쿠키 삭제."""
    await auth_service.revoke(db, current_user.id)
    await db.commit()
    _clear_auth_cookies(response)
    return MessageResponse(message="User logged out")


@router.post("/refresh-token", response_model=TokenResponse)
async def refresh_token(
    request: Request,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
    data: RefreshRequest | None = None,
) -> TokenResponse:
    """토큰 교체 — 현재 리프레시 토큰으로 새 토큰 쌍 발급.

    Rotate the refresh token from the body or the refresh_token cookie.
    A token that was already rotated or revoked is rejected.
    """
    presented: str | None = data.refresh_token if data and data.refresh_token else None
    if presented is None:
        presented = request.cookies.get(REFRESH_TOKEN_COOKIE)

    result: TokenResponse = await auth_service.rotate(db, presented)
    await db.commit()
    _set_auth_cookies(response, result)
    return result


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    data: ChangePasswordRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> MessageResponse:
    await auth_service.change_credential(
        db, current_user, data.old_password, data.new_password
    )
    await db.commit()
    return MessageResponse(message="Password changed successfully")


@router.get("/me", response_model=UserResponse)
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
) -> UserResponse:
    """현재 사용자 조회 — Get the authenticated user."""
    return user_service.get_me(current_user)


@router.patch("/me", response_model=UserResponse)
async def update_account(
    data: AccountUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> UserResponse:
    """계정 정보 수정 — Update full name and/or email."""
    result: UserResponse = await user_service.update_account(db, current_user, data)
    await db.commit()
    return result


@router.patch("/me/avatar", response_model=UserResponse)
async def update_avatar(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    avatar: Annotated[UploadFile | None, File()] = None,
) -> UserResponse:
    result: UserResponse = await user_service.update_avatar(
        db, current_user, await read_upload(avatar)
    )
    await db.commit()
    return result


@router.patch("/me/cover-image", response_model=UserResponse)
async def update_cover_image(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    cover_image: Annotated[UploadFile | None, File()] = None,
) -> UserResponse:
    result: UserResponse = await user_service.update_cover_image(
        db, current_user, await read_upload(cover_image)
    )
    await db.commit()
    return result


@router.get("/c/{username}", response_model=ChannelProfileResponse)
async def get_channel_profile(
    username: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    viewer: Annotated[User | None, Depends(get_optional_user)],
) -> ChannelProfileResponse:
    """채널 프로필 — 구독자 수, 구독 채널 수, 조회자 구독 여부.

    Channel profile by username, with subscription counts relative to
    the viewer.
    """
    return await channel_service.get_channel_profile(db, username, viewer)


@router.get("/me/history", response_model=list[VideoResponse])
async def get_watch_history(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> list[VideoResponse]:
    """시청 기록 — Watch history in visit order."""
    return await channel_service.get_watch_history(db, current_user)
