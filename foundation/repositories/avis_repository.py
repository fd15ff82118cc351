"""후기 레포지토리 — 공개/관리자 후기 조회 및 평점 집계.

Avis Repository — Public and moderation listings, rating aggregates.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.models.social import Avis
from foundation.repositories.base import BaseRepository


class AvisRepository(BaseRepository[Avis]):
    """후기 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the avis table.
    """

    def __init__(self) -> None:
        super().__init__(Avis)

    def build_public_query(
        self,
        prestation_id: UUID | None = None,
        avis_type: str | None = None,
    ) -> Select:
        query: Select = select(Avis).where(Avis.is_approved.is_(True))
        if prestation_id is not None:
            query = query.where(Avis.prestation_id == prestation_id)
        if avis_type:
            query = query.where(Avis.avis_type == avis_type)
        return query.order_by(Avis.created_at.desc())

    async def get_featured(self, db: AsyncSession, limit: int = 10) -> Sequence[Avis]:
        query: Select = (
            select(Avis)
            .where(Avis.is_approved.is_(True), Avis.is_featured.is_(True))
            .order_by(Avis.approved_at.desc())
            .limit(limit)
        )
        return (await db.execute(query)).scalars().all()

    def build_user_query(self, user_id: UUID) -> Select:
        return select(Avis).where(Avis.user_id == user_id).order_by(Avis.created_at.desc())

    def build_admin_query(
        self,
        status: str | None = None,
        min_rating: int | None = None,
        max_rating: int | None = None,
        avis_type: str | None = None,
        prestation_id: UUID | None = None,
        q: str | None = None,
        needs_response: bool = False,
    ) -> Select:
        """관리자 후기 검색 쿼리를 생성합니다.

        Build the admin moderation query, newest first.

        Args:
            status: 검수 상태 필터 (PENDING, PUBLISHED, REJECTED)
            min_rating / max_rating: 평점 범위, 포함 (Inclusive rating bounds)
            avis_type: 후기 유형 필터 (Avis type filter)
            prestation_id: 지원 서비스 필터 (Prestation filter)
            q: 작성자/코멘트 부분 일치 (Partial match on author name or comment)
            needs_response: 답변이 없는 승인 후기만 (Approved avis still waiting for a reply)
        """
        query: Select = select(Avis)
        if status:
            query = query.where(Avis.status == status)
        if min_rating is not None:
            query = query.where(Avis.rating >= min_rating)
        if max_rating is not None:
            query = query.where(Avis.rating <= max_rating)
        if avis_type:
            query = query.where(Avis.avis_type == avis_type)
        if prestation_id is not None:
            query = query.where(Avis.prestation_id == prestation_id)
        if q:
            pattern: str = f"%{q}%"
            query = query.where(or_(Avis.user_name.ilike(pattern), Avis.comment.ilike(pattern)))
        if needs_response:
            query = query.where(Avis.is_approved.is_(True), Avis.admin_response.is_(None))
        return query.order_by(Avis.created_at.desc())

    async def average_rating(
        self,
        db: AsyncSession,
        prestation_id: UUID | None = None,
    ) -> tuple[float | None, int]:
        """승인된 후기의 평균 평점과 개수 — Average rating and count of approved avis."""
        query: Select = select(func.avg(Avis.rating), func.count(Avis.id)).where(
            Avis.is_approved.is_(True)
        )
        if prestation_id is not None:
            query = query.where(Avis.prestation_id == prestation_id)
        avg, count = (await db.execute(query)).one()
        return (float(avg) if avg is not None else None), int(count or 0)


# 싱글턴 인스턴스 — Singleton instance
avis_repository: AvisRepository = AvisRepository()
