"""페이지네이션 유틸리티 모듈.

Pagination utility module for SQLAlchemy async queries.
Provides request validation for page/limit/sort parameters, a deterministic
ORDER BY builder, and a generic paginate function shared by every listing.

정렬 키가 같은 행이 여러 개일 때 id를 같은 방향으로 덧붙여 전체 순서를 고정합니다.
Rows sharing a sort key are tie-broken on id in the same direction, so that
OFFSET/LIMIT pages never overlap or leave gaps.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from pydantic import BaseModel
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from app.config import settings
from app.utils.exceptions import BadRequestError

SORT_TYPES: frozenset[str] = frozenset({"asc", "desc"})


class Page(BaseModel):
    """페이지네이션 결과 모델.

    Pagination result model for typed responses.

    Attributes:
        items: 현재 페이지 항목 목록 (Items for the current page)
        page: 현재 페이지 번호 (Current page number, 1-based)
        limit: 페이지당 항목 수 (Items per page)
        total: 전체 항목 수 (Total count across all pages)
    """

    items: list[Any]
    page: int
    limit: int
    total: int


@dataclass(frozen=True)
class PageParams:
    """검증된 페이지 요청 파라미터 — Validated page request parameters."""

    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def validate_page(page: int, limit: int) -> PageParams:
    """page/limit 범위를 검증합니다.

    Validate page and limit. page must be >= 1 and 1 <= limit <= MAX_PAGE_SIZE.

    Raises:
        BadRequestError: 범위를 벗어난 값 (Out-of-range value)
    """
    if page < 1 or limit < 1:
        raise BadRequestError("Invalid page or limit number")
    if limit > settings.MAX_PAGE_SIZE:
        raise BadRequestError(f"limit must not exceed {settings.MAX_PAGE_SIZE}")
    return PageParams(page=page, limit=limit)


def build_order_by(
    sortable: Mapping[str, InstrumentedAttribute],
    id_column: InstrumentedAttribute,
    sort_by: str,
    sort_type: str,
) -> list[Any]:
    """정렬 키 + id 타이브레이크로 ORDER BY 절을 만듭니다.

    Build a total-order ORDER BY clause: the whitelisted sort column followed
    by the id column, both in the requested direction.

    Args:
        sortable: 허용된 정렬 키 → 컬럼 매핑 (Whitelisted sort keys)
        id_column: 타이브레이크 컬럼 (Tie-break column)
        sort_by: 요청된 정렬 키 (Requested sort key)
        sort_type: "asc" 또는 "desc" (Sort direction)

    Raises:
        BadRequestError: 허용되지 않은 정렬 키/방향 (Unknown key or direction)
    """
    column = sortable.get(sort_by)
    if column is None:
        raise BadRequestError(f"Unsupported sort_by: {sort_by}")
    direction: str = sort_type.lower()
    if direction not in SORT_TYPES:
        raise BadRequestError("sort_type must be 'asc' or 'desc'")
    if direction == "asc":
        return [column.asc(), id_column.asc()]
    return [column.desc(), id_column.desc()]


async def paginate(
    db: AsyncSession,
    query: Select[Any],
    params: PageParams,
) -> tuple[Sequence[Any], int]:
    """SQLAlchemy 쿼리에 대한 페이지네이션을 수행합니다.

    Execute a paginated SQLAlchemy query, returning items and total count.
    The query must already carry a total ORDER BY (see build_order_by).

    Args:
        db: 비동기 DB 세션 (Async database session)
        query: 정렬이 적용된 SELECT 쿼리 (Ordered SELECT query)
        params: 검증된 페이지 파라미터 (Validated page parameters)

    Returns:
        tuple[Sequence[Any], int]: (항목 목록, 전체 개수) 튜플
    """
    # 전체 개수 조회 — 서브쿼리로 감싸서 COUNT 실행 (Count total via subquery)
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    total: int = (await db.execute(count_query)).scalar() or 0

    result = await db.execute(query.offset(params.offset).limit(params.limit))
    items: Sequence[Any] = result.scalars().all()

    return items, total
