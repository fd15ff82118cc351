"""지원 서비스 레포지토리 — 카탈로그 조회 및 정렬 쿼리.

Prestation Repository — Catalogue listings, ordering, and demand ranking.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.models.social import Demande, Prestation
from foundation.repositories.base import BaseRepository


class PrestationRepository(BaseRepository[Prestation]):
    """지원 서비스 테이블 쿼리 레포지토리.

    Repository handling database queries for the prestations table.
    """

    def __init__(self) -> None:
        super().__init__(Prestation)

    def build_active_query(
        self,
        category: str | None = None,
        search: str | None = None,
    ) -> Select:
        """공개 카탈로그 쿼리 — Active prestations ordered by display_order.

        Args:
            category: 카테고리 필터 (Category filter)
            search: 제목/요약/설명 부분 일치 (Partial match on title, short description, description)
        """
        query: Select = select(Prestation).where(Prestation.is_active.is_(True))
        if category:
            query = query.where(Prestation.category == category)
        if search:
            pattern: str = f"%{search}%"
            query = query.where(
                or_(
                    Prestation.title.ilike(pattern),
                    Prestation.short_description.ilike(pattern),
                    Prestation.description.ilike(pattern),
                )
            )
        return query.order_by(Prestation.display_order, Prestation.title)

    def build_admin_query(
        self,
        category: str | None = None,
        prestation_type: str | None = None,
        is_active: bool | None = None,
    ) -> Select:
        query: Select = select(Prestation)
        if category:
            query = query.where(Prestation.category == category)
        if prestation_type:
            query = query.where(Prestation.prestation_type == prestation_type)
        if is_active is not None:
            query = query.where(Prestation.is_active.is_(is_active))
        return query.order_by(Prestation.display_order, Prestation.title)

    async def get_max_display_order(self, db: AsyncSession) -> int:
        query: Select = select(func.max(Prestation.display_order))
        return (await db.execute(query)).scalar() or 0

    async def get_by_ids(self, db: AsyncSession, ids: list[UUID]) -> Sequence[Prestation]:
        query: Select = select(Prestation).where(Prestation.id.in_(ids))
        return (await db.execute(query)).scalars().all()

    async def get_most_requested(
        self,
        db: AsyncSession,
        limit: int = 5,
    ) -> list[tuple[Prestation, int]]:
        """신청 건수 기준 상위 지원 서비스를 조회합니다.

        Active prestations ranked by number of demandes, most requested first.
        Prestations without any demande are left out.

        Returns:
            list[tuple[Prestation, int]]: (지원 서비스, 신청 건수) 목록
        """
        demande_count = func.count(Demande.id).label("demande_count")
        query: Select = (
            select(Prestation, demande_count)
            .join(Demande, Demande.prestation_id == Prestation.id)
            .where(Prestation.is_active.is_(True))
            .group_by(Prestation.id)
            .order_by(demande_count.desc(), Prestation.display_order)
            .limit(limit)
        )
        result = await db.execute(query)
        return [(row[0], row[1]) for row in result.all()]


# 싱글턴 인스턴스 — Singleton instance
prestation_repository: PrestationRepository = PrestationRepository()
