"""공통 레포지토리 — 도메인 레포지토리가 상속하는 CRUD 기반 클래스.

Shared repository base for every table of the foundation backend
(news, prestations, demandes, avis, ...). Domain repositories add their
own query builders on top and expose a module-level singleton.

Writes only flush: the router that owns the request commits.
"""

from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import ColumnElement, Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.database import Base
from foundation.utils.pagination import paginate

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """UUID 기본 키를 가진 모델용 CRUD 레포지토리.

    Attributes:
        model: 관리 대상 모델 클래스 (Mapped model class)
    """

    def __init__(self, model: type[ModelType]) -> None:
        self.model: type[ModelType] = model

    def _where_equal(self, query: Select, filters: dict[str, Any]) -> Select:
        """{'컬럼': 값} 동등 조건 — Unknown column names are ignored."""
        for column_name, value in filters.items():
            if hasattr(self.model, column_name):
                query = query.where(getattr(self.model, column_name) == value)
        return query

    async def get_by_id(self, db: AsyncSession, record_id: UUID) -> ModelType | None:
        return await db.get(self.model, record_id)

    async def get_paginated(
        self,
        db: AsyncSession,
        query: Select,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[ModelType], int]:
        """목록 쿼리 한 페이지와 전체 건수 — (rows of the page, total row count)."""
        return await paginate(db, query, page, per_page)

    async def count(self, db: AsyncSession, *conditions: ColumnElement[bool]) -> int:
        """조건별 건수 — Row count, used by the dashboard and delete guards."""
        query: Select = select(func.count()).select_from(self.model)
        if conditions:
            query = query.where(*conditions)
        return (await db.execute(query)).scalar() or 0

    async def exists(self, db: AsyncSession, filters: dict[str, Any]) -> bool:
        """중복 검사 — e.g. a slug in use, an avis already written for a demande."""
        query: Select = self._where_equal(select(func.count()).select_from(self.model), filters)
        return ((await db.execute(query)).scalar() or 0) > 0

    async def create(self, db: AsyncSession, obj_data: dict[str, Any]) -> ModelType:
        """레코드 생성 후 DB 기본값(id, created_at)을 다시 읽어 반환합니다."""
        db_obj: ModelType = self.model(**obj_data)
        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def apply(
        self,
        db: AsyncSession,
        db_obj: ModelType,
        update_data: dict[str, Any],
    ) -> ModelType:
        """로드된 레코드에 변경 반영.

        Write the given fields onto a loaded row. Values are written as
        given, so an explicit None clears the column. Keys that are not
        model attributes are skipped.
        """
        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def update(
        self,
        db: AsyncSession,
        record_id: UUID,
        update_data: dict[str, Any],
    ) -> ModelType | None:
        """ID로 조회 후 변경 — None when no row has this id."""
        db_obj: ModelType | None = await self.get_by_id(db, record_id)
        if db_obj is None:
            return None
        return await self.apply(db, db_obj, update_data)

    async def delete(self, db: AsyncSession, record_id: UUID) -> bool:
        """레코드 삭제 — False when no row has this id."""
        db_obj: ModelType | None = await self.get_by_id(db, record_id)
        if db_obj is None:
            return False
        await db.delete(db_obj)
        await db.flush()
        return True
