"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for the API error taxonomy.
Services raise these directly; FastAPI renders them as {"detail": ...}.

Usage:
    from app.utils.exceptions import NotFoundError, DuplicateError
    raise NotFoundError("Video not found")
    raise DuplicateError("User with this email or username already exists")
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    404 Not Found exception.
    Raised when an id is well-formed but no record matches it.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class DuplicateError(HTTPException):
    """409 Conflict 예외 — 중복 리소스 생성 시도 시 사용.

    409 Conflict exception.
    Raised when a write violates a uniqueness constraint
    (e.g. duplicate username or email on registration).

    Args:
        detail: 오류 메시지 (Error message, default: "Resource already exists")
    """

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ForbiddenError(HTTPException):
    """403 Forbidden 예외 — 소유자가 아닌 사용자의 변경 시도.

    403 Forbidden exception.
    Raised when the authenticated user does not own the content being modified.

    Args:
        detail: 오류 메시지 (Error message, default: "Insufficient permissions")
    """

    def __init__(self, detail: str = "Insufficient permissions") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized 예외 — 인증 실패 시 사용.

    401 Unauthorized exception.
    Raised when a token is missing, malformed, expired, or has a bad signature.
    The client must re-authenticate.

    Args:
        detail: 오류 메시지 (Error message, default: "Authentication required")
    """

    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class SessionInvalidatedError(HTTPException):
    """401 세션 무효화 예외 — 이미 교체되었거나 폐기된 리프레시 토큰.

    401 raised when a refresh token is validly signed but is no longer the
    user's current stored value (already rotated, or logged out).
    Terminal for the presented token; the client must log in again.
    """

    def __init__(self, detail: str = "Refresh token is expired or already used") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class InvalidCredentialError(HTTPException):
    """400 기존 비밀번호 불일치 예외.

    400 raised when a password change presents a wrong current password.
    """

    def __init__(self, detail: str = "Invalid old password") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 잘못된 요청 데이터 시 사용.

    400 Bad Request exception.
    Raised for client-correctable input problems beyond what Pydantic catches
    (malformed ids, blank required fields, out-of-range page/limit).

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
