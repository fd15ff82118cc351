"""지원 신청 레포지토리 — 신청 검색, 한도 계산, 통계 쿼리.

Demande Repository — Search queries, yearly limit counting, deadline
tracking, and aggregate figures for the dashboard.
"""

from datetime import datetime
from decimal import Decimal
from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.models.social import PENDING_DEMANDE_STATUSES, Demande
from foundation.repositories.base import BaseRepository


class DemandeRepository(BaseRepository[Demande]):
    """지원 신청 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the demandes table.
    """

    def __init__(self) -> None:
        super().__init__(Demande)

    async def count_user_requests_since(
        self,
        db: AsyncSession,
        user_id: UUID,
        prestation_id: UUID,
        since: datetime,
    ) -> int:
        """사용자의 특정 지원 서비스 신청 건수를 기간 기준으로 셉니다.

        Count a user's demandes for one prestation created at or after `since`.
        Every status counts, drafts and cancelled ones included.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 신청자 ID (Requesting user UUID)
            prestation_id: 지원 서비스 ID (Prestation UUID)
            since: 집계 시작 시각, 보통 올해 1월 1일 (Window start, usually Jan 1st)

        Returns:
            int: 신청 건수 (Number of demandes)
        """
        return await self.count(
            db,
            Demande.user_id == user_id,
            Demande.prestation_id == prestation_id,
            Demande.created_at >= since,
        )

    def build_user_query(self, user_id: UUID, status: str | None = None) -> Select:
        query: Select = select(Demande).where(Demande.user_id == user_id)
        if status:
            query = query.where(Demande.status == status)
        return query.order_by(Demande.created_at.desc())

    def build_admin_query(
        self,
        status: str | None = None,
        email: str | None = None,
        prestation_id: UUID | None = None,
        q: str | None = None,
    ) -> Select:
        """관리자 신청 검색 쿼리를 생성합니다.

        Build the admin demande search query, newest first.

        Args:
            status: 상태 필터 (Status filter)
            email: 신청자 이메일 부분 일치 (Partial match on requester email)
            prestation_id: 지원 서비스 필터 (Prestation filter)
            q: 신청자 이름/이메일/사유 키워드 (Keyword over user name, email, justification)
        """
        query: Select = select(Demande)
        if status:
            query = query.where(Demande.status == status)
        if email:
            query = query.where(Demande.user_email.ilike(f"%{email}%"))
        if prestation_id is not None:
            query = query.where(Demande.prestation_id == prestation_id)
        if q:
            pattern: str = f"%{q}%"
            query = query.where(
                or_(
                    Demande.user_name.ilike(pattern),
                    Demande.user_email.ilike(pattern),
                    Demande.justification.ilike(pattern),
                )
            )
        return query.order_by(Demande.created_at.desc())

    def build_pending_query(self) -> Select:
        """처리 대기 신청 — SUBMITTED/IN_REVIEW, oldest submission first."""
        return (
            select(Demande)
            .where(Demande.status.in_(PENDING_DEMANDE_STATUSES))
            .order_by(Demande.submitted_at.asc())
        )

    async def get_overdue(self, db: AsyncSession, now: datetime) -> Sequence[Demande]:
        """처리 기한 초과 신청 — Pending demandes whose expected date has passed."""
        query: Select = (
            select(Demande)
            .where(
                Demande.status.in_(PENDING_DEMANDE_STATUSES),
                Demande.expected_processing_date.is_not(None),
                Demande.expected_processing_date < now,
            )
            .order_by(Demande.expected_processing_date.asc())
        )
        return (await db.execute(query)).scalars().all()

    async def get_due_between(
        self,
        db: AsyncSession,
        start: datetime,
        end: datetime,
    ) -> Sequence[Demande]:
        """기한 임박 신청 — Pending demandes due within [start, end]."""
        query: Select = (
            select(Demande)
            .where(
                Demande.status.in_(PENDING_DEMANDE_STATUSES),
                Demande.expected_processing_date >= start,
                Demande.expected_processing_date <= end,
            )
            .order_by(Demande.expected_processing_date.asc())
        )
        return (await db.execute(query)).scalars().all()

    async def count_by_status(self, db: AsyncSession) -> dict[str, int]:
        query: Select = select(Demande.status, func.count(Demande.id)).group_by(Demande.status)
        return {status: count for status, count in (await db.execute(query)).all()}

    async def sum_amount(
        self,
        db: AsyncSession,
        column_name: str,
        statuses: Sequence[str] | None = None,
    ) -> Decimal:
        """금액 합계 — Sum of an amount column, optionally restricted to statuses."""
        column = getattr(Demande, column_name)
        query: Select = select(func.coalesce(func.sum(column), 0))
        if statuses:
            query = query.where(Demande.status.in_(statuses))
        return Decimal(str((await db.execute(query)).scalar() or 0))

    async def get_processing_windows(self, db: AsyncSession) -> list[tuple[datetime, datetime]]:
        """처리 완료 신청의 (제출, 처리) 시각 쌍 — (submitted_at, processed_at) pairs."""
        query: Select = select(Demande.submitted_at, Demande.processed_at).where(
            Demande.submitted_at.is_not(None),
            Demande.processed_at.is_not(None),
        )
        return [(row[0], row[1]) for row in (await db.execute(query)).all()]


# 싱글턴 인스턴스 — Singleton instance
demande_repository: DemandeRepository = DemandeRepository()
