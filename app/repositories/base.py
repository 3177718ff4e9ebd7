"""기본 CRUD 레포지토리 — 모든 레포지토리의 부모 클래스.

Base CRUD Repository — Parent class for all domain repositories.
Provides id lookup, filtered find, create, update, delete, existence checks and
pagination, plus a dialect-aware conflict-tolerant insert used by the edge
repositories (likes, subscriptions, playlist entries).

Usage:
    class TweetRepository(BaseRepository[Tweet]):
        def __init__(self) -> None:
            super().__init__(Tweet)
"""

from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import Select, exists, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base
from app.utils.pagination import PageParams, paginate

# 제네릭 타입 변수 — SQLAlchemy 모델을 나타냄
# Generic type variable representing a SQLAlchemy model
ModelType = TypeVar("ModelType", bound=Base)


async def insert_ignoring_conflict(
    db: AsyncSession,
    model: type[Base],
    values: dict[str, Any],
    conflict_columns: list[str],
) -> bool:
    """유니크 제약 충돌 시 아무것도 하지 않는 INSERT를 실행합니다.

    Execute INSERT ... ON CONFLICT (conflict_columns) DO NOTHING.
    The check and the write happen in one statement at the storage layer.

    Args:
        db: 비동기 데이터베이스 세션 (Async database session)
        model: 대상 모델 (Target model)
        values: 삽입할 컬럼 값 (Column values)
        conflict_columns: 유니크 제약 컬럼 (Columns of the unique constraint)

    Returns:
        bool: 행이 삽입되었으면 True, 이미 존재하면 False
              (True if a row was inserted, False if it already existed)
    """
    dialect_name: str = db.get_bind().dialect.name
    if dialect_name == "postgresql":
        stmt = postgresql.insert(model)
    elif dialect_name == "sqlite":
        stmt = sqlite.insert(model)
    else:
        raise NotImplementedError(f"Conflict-tolerant insert not supported for {dialect_name}")

    stmt = stmt.values(**values).on_conflict_do_nothing(index_elements=conflict_columns)
    result = await db.execute(stmt)
    return (result.rowcount or 0) > 0


class BaseRepository(Generic[ModelType]):
    """제네릭 CRUD 레포지토리.

    Generic repository over one model: lookup by id, equality-filtered
    find, create, update, delete, existence checks, and paginated listing.

    Attributes:
        model: SQLAlchemy 모델 클래스 (The SQLAlchemy model class)
    """

    def __init__(self, model: type[ModelType]) -> None:
        self.model: type[ModelType] = model

    async def get_by_id(
        self,
        db: AsyncSession,
        record_id: UUID,
    ) -> ModelType | None:
        """id로 레코드를 조회합니다. 관계는 로드하지 않습니다.

        Fetch one row by primary key without eager-loading relationships.
        """
        query: Select = select(self.model).where(self.model.id == record_id)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def find(
        self,
        db: AsyncSession,
        filters: dict[str, Any] | None = None,
        order_by: list[Any] | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> Sequence[ModelType]:
        """등호 조건으로 레코드 목록을 조회합니다.

        Rows matching every `column == value` pair in `filters`, in the
        given order. Unknown column names are ignored.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            filters: 필터 딕셔너리 {'컬럼명': 값} (Filter dict {'column_name': value})
            order_by: 정렬 절 목록 (ORDER BY clauses)
            skip: 건너뛸 행 수 (Rows to skip)
            limit: 최대 행 수, None이면 제한 없음 (Max rows, None for no limit)
        """
        query: Select = select(self.model)

        for column_name, value in (filters or {}).items():
            if hasattr(self.model, column_name):
                query = query.where(getattr(self.model, column_name) == value)
        if order_by:
            query = query.order_by(*order_by)
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)

        result = await db.execute(query)
        return result.scalars().all()

    async def create(
        self,
        db: AsyncSession,
        obj_data: dict[str, Any],
    ) -> ModelType:
        """레코드를 추가하고 flush 후 DB 기본값까지 반영된 객체를 반환합니다.

        Insert a row and return it with database defaults populated. The
        transaction is left open for the router to commit.
        """
        db_obj: ModelType = self.model(**obj_data)
        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def update(
        self,
        db: AsyncSession,
        db_obj: ModelType,
        update_data: dict[str, Any],
    ) -> ModelType:
        """로드된 레코드에 변경 사항을 적용하고 flush합니다.

        Apply `update_data` to an already loaded row, flush, and reload
        `updated_at`. Unknown field names are ignored.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            db_obj: 수정할 레코드 (Row to update, usually after an ownership check)
            update_data: 변경할 필드와 값 (Fields and values to set)

        Returns:
            ModelType: 수정된 레코드 (The updated row)
        """
        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)
        await db.flush()
        if hasattr(db_obj, "updated_at"):
            await db.refresh(db_obj, attribute_names=["updated_at"])
        return db_obj

    async def delete(
        self,
        db: AsyncSession,
        record_id: UUID,
    ) -> bool:
        """id로 레코드를 삭제합니다 — False if no such row."""
        db_obj: ModelType | None = await self.get_by_id(db, record_id)
        if db_obj is None:
            return False

        await db.delete(db_obj)
        await db.flush()
        return True

    async def exists(
        self,
        db: AsyncSession,
        filters: dict[str, Any],
    ) -> bool:
        """조건에 맞는 레코드가 있는지 EXISTS 쿼리로 확인합니다.

        True if any row matches every `column == value` pair.
        """
        criteria = [
            getattr(self.model, column_name) == value
            for column_name, value in filters.items()
            if hasattr(self.model, column_name)
        ]
        query: Select = select(exists().where(*criteria))
        return bool((await db.execute(query)).scalar())

    async def get_paginated(
        self,
        db: AsyncSession,
        query: Select,
        params: PageParams,
    ) -> tuple[Sequence[ModelType], int]:
        """정렬된 쿼리에 페이지네이션을 적용합니다.

        Apply OFFSET/LIMIT to an already totally-ordered query.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            query: 정렬이 적용된 SELECT 쿼리 (Ordered SELECT query)
            params: 검증된 페이지 파라미터 (Validated page parameters)

        Returns:
            tuple[Sequence[ModelType], int]: (항목 목록, 전체 개수) 튜플
        """
        return await paginate(db, query, params)
