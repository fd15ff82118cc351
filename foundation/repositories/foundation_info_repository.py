"""재단 소개 레포지토리 — 유형별 정렬 조회 및 순서 관리.

Foundation Info Repository — Ordered listings per info type and
display order bookkeeping.
"""

from typing import Sequence

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.models.content import FoundationInfo
from foundation.repositories.base import BaseRepository


class FoundationInfoRepository(BaseRepository[FoundationInfo]):
    """재단 소개 블록 쿼리 레포지토리.

    Repository for foundation info blocks.
    """

    def __init__(self) -> None:
        super().__init__(FoundationInfo)

    async def list_blocks(
        self,
        db: AsyncSession,
        info_types: list[str] | None = None,
        active_only: bool = True,
    ) -> Sequence[FoundationInfo]:
        """재단 소개 블록 목록을 조회합니다.

        List blocks ordered by type then display_order.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            info_types: 유형 필터, None이면 전체 (Type filter; None means all types)
            active_only: 활성 블록만 조회 (Only active blocks)

        Returns:
            Sequence[FoundationInfo]: 정렬된 블록 목록 (Ordered blocks)
        """
        query: Select = select(FoundationInfo)
        if active_only:
            query = query.where(FoundationInfo.is_active.is_(True))
        if info_types:
            query = query.where(FoundationInfo.info_type.in_(info_types))
        query = query.order_by(FoundationInfo.info_type, FoundationInfo.display_order)
        return (await db.execute(query)).scalars().all()

    async def get_max_display_order(self, db: AsyncSession, info_type: str) -> int:
        """유형 내 최대 표시 순서 — Highest display_order within a type (0 if none)."""
        query: Select = select(func.max(FoundationInfo.display_order)).where(
            FoundationInfo.info_type == info_type
        )
        return (await db.execute(query)).scalar() or 0

    async def get_by_ids(self, db: AsyncSession, ids: list) -> Sequence[FoundationInfo]:
        query: Select = select(FoundationInfo).where(FoundationInfo.id.in_(ids))
        return (await db.execute(query)).scalars().all()


# 싱글턴 인스턴스 — Singleton instance
foundation_info_repository: FoundationInfoRepository = FoundationInfoRepository()
