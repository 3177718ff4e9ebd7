"""FastAPI 의존성 주입 모듈 — 인증.

FastAPI dependency injection module — Authentication.
Provides reusable dependencies for resolving the current user from an
access token.

Authentication Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더 또는 access_token 쿠키를 전송
       (Client sends Authorization: Bearer <token> or the access_token cookie)
    2. auth_service.verify_access()가 서명, 만료, 토큰 유형을 검증
       (Signature, expiry, and token type are verified statelessly)
    3. 페이로드의 "sub" 필드로 DB에서 사용자를 조회
       (User is fetched from DB using payload "sub" field)
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Request, UploadFile
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.user import User
from app.repositories.user_repository import user_repository
from app.services.auth_service import auth_service
from app.services.storage_service import MediaUpload
from app.utils.exceptions import UnauthorizedError

# HTTP Bearer 토큰 추출기 — 토큰이 없어도 403 대신 None 반환 (쿠키 fallback)
# (Extracts the bearer token; returns None when absent so the cookie can be used)
security: HTTPBearer = HTTPBearer(auto_error=False)

ACCESS_TOKEN_COOKIE: str = "access_token"
REFRESH_TOKEN_COOKIE: str = "refresh_token"


def _extract_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
) -> str | None:
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(ACCESS_TOKEN_COOKIE)


async def _resolve_user(db: AsyncSession, token: str | None) -> User:
    user_id: UUID = auth_service.verify_access(token)
    user: User | None = await user_repository.get_by_id(db, user_id)
    if user is None:
        raise UnauthorizedError("Invalid access token")
    return user


async def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """액세스 토큰에서 현재 인증된 사용자를 추출합니다.

    Resolve the authenticated user from the access token in the
    Authorization header or the access_token cookie.

    Args:
        request: 요청 객체 — 쿠키 조회용 (Request, for the cookie fallback)
        credentials: HTTP Bearer 토큰 자격 증명 (Bearer token credentials from header)
        db: 비동기 DB 세션 (Async database session)

    Returns:
        User: 인증된 사용자 ORM 인스턴스 (Authenticated user ORM instance)

    Raises:
        UnauthorizedError: 토큰 누락/만료/오류 또는 사용자 없음
                           (Missing, expired, or invalid token, or unknown user)
    """
    return await _resolve_user(db, _extract_token(request, credentials))


async def get_optional_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User | None:
    """토큰이 있으면 사용자를, 없으면 None을 반환합니다.

    Like get_current_user, but anonymous requests resolve to None.
    A token that is present but invalid is still rejected with 401.
    """
    token: str | None = _extract_token(request, credentials)
    if not token:
        return None
    return await _resolve_user(db, token)


async def read_upload(file: UploadFile | None) -> MediaUpload | None:
    """multipart 파일을 MediaUpload로 읽습니다. 비어 있으면 None.

    Read a multipart file into a MediaUpload; None when absent or empty.
    """
    if file is None:
        return None
    data: bytes = await file.read()
    if not data:
        return None
    return MediaUpload(data=data, filename=file.filename or "", content_type=file.content_type)
