"""식별자 검증 유틸리티.

Identifier validation helpers. Path ids arrive as strings and are parsed here
so that a malformed id yields a 400 with a message naming its kind.
"""

from uuid import UUID

from app.utils.exceptions import BadRequestError


def parse_id(value: str | None, kind: str) -> UUID:
    """문자열 id를 UUID로 변환합니다. 형식 검사만 수행 (존재 여부는 확인하지 않음).

    Parse a string id into a UUID. Format check only.

    Args:
        value: 요청에서 받은 id 문자열 (Raw id string)
        kind: 오류 메시지에 쓰일 대상 종류 (Entity kind for the error message, e.g. "video")

    Returns:
        UUID: 파싱된 UUID (Parsed UUID)

    Raises:
        BadRequestError: 형식이 잘못된 id (Malformed id)
    """
    if not value:
        raise BadRequestError(f"Valid {kind} id required")
    try:
        return UUID(value)
    except (ValueError, AttributeError, TypeError):
        raise BadRequestError(f"Invalid {kind} id")
