"""공통 Pydantic 요청/응답 스키마 정의.

Common Pydantic request/response schema definitions shared across
API domains: the owner summary embedded in content responses, the
paginated listing wrapper, and generic messages.
"""

from typing import Any
from pydantic import BaseModel


class OwnerSummary(BaseModel):
    """콘텐츠에 포함되는 소유자 프로필 요약.

    Owner profile embedded in joined content responses.

    Attributes:
        id: 사용자 UUID (User identifier)
        username: 사용자명 (Username)
        full_name: 표시 이름 (Display name)
        avatar: 아바타 URL (Avatar image URL)
    """

    id: str  # 사용자 UUID 문자열 (User UUID as string)
    username: str
    full_name: str
    avatar: str


class PaginatedResponse(BaseModel):
    """페이지네이션 응답 스키마.

    Paginated response wrapper schema.
    Wraps a list of items with pagination metadata.

    Attributes:
        items: 항목 목록 (List of result items)
        page: 현재 페이지 번호 (Current page number, 1-based)
        limit: 페이지당 항목 수 (Items per page)
        total: 전체 항목 수 (Total count across all pages)
    """

    items: list[Any]  # 결과 항목 목록 (List of items for the current page)
    page: int  # 현재 페이지 — 1부터 시작 (Current page, 1-indexed)
    limit: int  # 페이지당 항목 수 (Items per page)
    total: int  # 전체 항목 수 (Total item count)


class MessageResponse(BaseModel):
    """범용 메시지 응답 스키마.

    Generic message response schema for simple confirmations such as
    delete operations and logout.

    Attributes:
        message: 응답 메시지 (Response message string)
    """

    message: str  # 응답 메시지 (Human-readable confirmation message)
