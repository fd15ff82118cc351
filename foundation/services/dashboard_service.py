"""대시보드 서비스 — 관리자 대시보드 집계 비즈니스 로직.

Dashboard Service — Aggregation logic for the admin dashboard.
Provides demande counts and amounts, catalogue size, avis sentiment,
processing delay, and site content figures.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from foundation.models.content import Contact, ContactStatus, Event, News
from foundation.models.social import (
    PENDING_DEMANDE_STATUSES,
    Avis,
    AvisStatus,
    DemandeStatus,
    Prestation,
)
from foundation.models.user import User
from foundation.repositories.avis_repository import avis_repository
from foundation.repositories.contact_repository import contact_repository
from foundation.repositories.demande_repository import demande_repository
from foundation.repositories.event_repository import event_repository
from foundation.repositories.news_repository import news_repository
from foundation.repositories.prestation_repository import prestation_repository
from foundation.repositories.user_repository import user_repository
from foundation.schemas.dashboard import DashboardStats
from foundation.services.avis_service import NEGATIVE_MAX_RATING, POSITIVE_MIN_RATING
from foundation.utils.dates import ensure_utc, utcnow


class DashboardService:
    """대시보드 서비스.

    Dashboard aggregation service for admin dashboard views.
    """

    async def get_average_processing_days(self, db: AsyncSession) -> float | None:
        """평균 처리 기간(일) — Mean of processed_at - submitted_at over processed demandes."""
        windows = await demande_repository.get_processing_windows(db)
        if not windows:
            return None
        total_seconds: float = sum(
            (ensure_utc(processed) - ensure_utc(submitted)).total_seconds()
            for submitted, processed in windows
        )
        return round(total_seconds / len(windows) / 86400, 2)

    async def get_stats(self, db: AsyncSession) -> DashboardStats:
        """관리자 대시보드 통계 집계."""
        by_status: dict[str, int] = await demande_repository.count_by_status(db)
        for status in DemandeStatus:
            by_status.setdefault(status.value, 0)

        average_rating, _ = await avis_repository.average_rating(db)

        return DashboardStats(
            total_demandes=sum(by_status.values()),
            pending_demandes=sum(by_status[s] for s in PENDING_DEMANDE_STATUSES),
            approved_demandes=by_status[DemandeStatus.APPROVED.value],
            rejected_demandes=by_status[DemandeStatus.REJECTED.value],
            paid_demandes=by_status[DemandeStatus.PAID.value],
            demandes_by_status=by_status,
            total_requested_amount=float(await demande_repository.sum_amount(db, "requested_amount")),
            total_approved_amount=float(
                await demande_repository.sum_amount(
                    db, "approved_amount", (DemandeStatus.APPROVED.value, DemandeStatus.PAID.value)
                )
            ),
            total_paid_amount=float(
                await demande_repository.sum_amount(db, "approved_amount", (DemandeStatus.PAID.value,))
            ),
            total_prestations=await prestation_repository.count(db),
            active_prestations=await prestation_repository.count(db, Prestation.is_active.is_(True)),
            total_avis=await avis_repository.count(db),
            pending_avis=await avis_repository.count(db, Avis.status == AvisStatus.PENDING.value),
            average_rating=round(average_rating, 2) if average_rating is not None else None,
            positive_avis=await avis_repository.count(db, Avis.rating >= POSITIVE_MIN_RATING),
            negative_avis=await avis_repository.count(db, Avis.rating <= NEGATIVE_MAX_RATING),
            average_processing_days=await self.get_average_processing_days(db),
            total_users=await user_repository.count(db, User.deleted_at.is_(None)),
            published_news=await news_repository.count(db, News.published.is_(True)),
            upcoming_events=await event_repository.count(
                db, Event.published.is_(True), Event.start_date >= utcnow()
            ),
            new_contacts=await contact_repository.count(db, Contact.status == ContactStatus.NEW.value),
        )


# 싱글턴 인스턴스 — Singleton instance
dashboard_service: DashboardService = DashboardService()
