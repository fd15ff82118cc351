"""후기(Avis) 서비스 — 후기 작성, 검수, 공개 조회 비즈니스 로직.

Avis Service — Business logic for user reviews: authoring, admin
moderation (approve, reject, respond, feature), public listings and
rating statistics.
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from foundation.models.social import Avis, AvisStatus, AvisType, Demande, Prestation
from foundation.models.user import User
from foundation.repositories.avis_repository import avis_repository
from foundation.repositories.demande_repository import demande_repository
from foundation.repositories.prestation_repository import prestation_repository
from foundation.schemas.avis import AvisCreate, AvisPublicResponse, AvisReply, AvisResponse, AvisStats
from foundation.utils.dates import utcnow
from foundation.utils.exceptions import (
    BadRequestError,
    DuplicateError,
    ForbiddenError,
    NotFoundError,
)
from foundation.utils.ids import parse_uuid
from foundation.utils.pagination import Page, build_page

logger = logging.getLogger(__name__)

# 익명 후기 작성자 표시 이름 — Display name stored for anonymous avis
ANONYMOUS_NAME: str = "Utilisateur anonyme"

# 긍정/부정 평점 기준 — Rating thresholds
POSITIVE_MIN_RATING: int = 4
NEGATIVE_MAX_RATING: int = 2


class AvisService:
    """후기 관련 비즈니스 로직을 처리하는 서비스.

    Service handling avis business logic.
    """

    def _to_response(self, avis: Avis) -> AvisResponse:
        return AvisResponse(
            id=str(avis.id),
            user_id=str(avis.user_id),
            user_name=avis.user_name,
            is_anonymous=avis.is_anonymous,
            prestation_id=str(avis.prestation_id) if avis.prestation_id else None,
            demande_id=str(avis.demande_id) if avis.demande_id else None,
            avis_type=avis.avis_type,
            rating=avis.rating,
            comment=avis.comment,
            status=avis.status,
            is_approved=avis.is_approved,
            is_featured=avis.is_featured,
            moderated_at=avis.moderated_at,
            approved_by=avis.approved_by,
            approved_at=avis.approved_at,
            admin_response=avis.admin_response,
            response_date=avis.response_date,
            created_at=avis.created_at,
        )

    def _to_public(self, avis: Avis) -> AvisPublicResponse:
        """공개용 변환 — user_name is already masked for anonymous avis."""
        return AvisPublicResponse(
            id=str(avis.id),
            user_name=avis.user_name,
            is_anonymous=avis.is_anonymous,
            prestation_id=str(avis.prestation_id) if avis.prestation_id else None,
            avis_type=avis.avis_type,
            rating=avis.rating,
            comment=avis.comment,
            is_featured=avis.is_featured,
            admin_response=avis.admin_response,
            response_date=avis.response_date,
            created_at=avis.created_at,
        )

    async def _get_or_404(self, db: AsyncSession, avis_id: UUID) -> Avis:
        avis: Avis | None = await avis_repository.get_by_id(db, avis_id)
        if avis is None:
            raise NotFoundError("Avis not found")
        return avis

    # --- 작성자 — Author ---

    async def create_avis(self, db: AsyncSession, user: User, data: AvisCreate) -> AvisResponse:
        """후기를 작성합니다.

        Create a PENDING avis for the current user.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user: 작성자 (Author)
            data: 후기 데이터 (Avis payload)

        Returns:
            AvisResponse: 작성된 후기 (Created avis, pending moderation)

        Raises:
            NotFoundError: 지원 서비스 또는 신청이 없을 때 (Unknown prestation or demande)
            ForbiddenError: 다른 사용자의 신청일 때 (Demande owned by someone else)
            DuplicateError: 같은 대상에 이미 후기를 작성함 (Already reviewed this prestation or demande)
        """
        prestation_id: UUID | None = None
        demande_id: UUID | None = None

        if data.prestation_id:
            prestation_id = parse_uuid(data.prestation_id, "prestation_id")
            prestation: Prestation | None = await prestation_repository.get_by_id(db, prestation_id)
            if prestation is None:
                raise NotFoundError("Prestation not found")
            if await avis_repository.exists(db, {"user_id": user.id, "prestation_id": prestation_id}):
                raise DuplicateError("You have already reviewed this prestation")

        if data.demande_id:
            demande_id = parse_uuid(data.demande_id, "demande_id")
            demande: Demande | None = await demande_repository.get_by_id(db, demande_id)
            if demande is None:
                raise NotFoundError("Demande not found")
            if demande.user_id != user.id:
                raise ForbiddenError("This demande belongs to another user")
            if await avis_repository.exists(db, {"user_id": user.id, "demande_id": demande_id}):
                raise DuplicateError("You have already reviewed this demande")

        avis: Avis = await avis_repository.create(
            db,
            {
                "user_id": user.id,
                "user_name": ANONYMOUS_NAME if data.is_anonymous else user.full_name,
                "user_email": user.email,
                "is_anonymous": data.is_anonymous,
                "prestation_id": prestation_id,
                "demande_id": demande_id,
                "avis_type": data.avis_type.value,
                "rating": data.rating,
                "comment": data.comment,
                "status": AvisStatus.PENDING.value,
                "is_approved": False,
                "is_featured": False,
            },
        )
        logger.info("Avis created id=%s user=%s rating=%d", avis.id, user.id, avis.rating)
        return self._to_response(avis)

    async def list_my_avis(self, db: AsyncSession, user: User, page: int = 1, per_page: int = 20) -> Page:
        query = avis_repository.build_user_query(user.id)
        items, total = await avis_repository.get_paginated(db, query, page, per_page)
        return build_page([self._to_response(a) for a in items], total, page, per_page)

    async def delete_my_avis(self, db: AsyncSession, avis_id: UUID, user: User) -> None:
        avis: Avis = await self._get_or_404(db, avis_id)
        if avis.user_id != user.id:
            raise ForbiddenError("This avis belongs to another user")
        await avis_repository.delete(db, avis.id)

    # --- 검수 — Moderation ---

    async def approve(self, db: AsyncSession, avis_id: UUID, admin: User) -> AvisResponse:
        avis: Avis = await self._get_or_404(db, avis_id)
        now = utcnow()
        avis = await avis_repository.apply(
            db,
            avis,
            {
                "status": AvisStatus.PUBLISHED.value,
                "is_approved": True,
                "approved_by": admin.email,
                "approved_at": now,
                "moderated_at": now,
            },
        )
        return self._to_response(avis)

    async def reject(self, db: AsyncSession, avis_id: UUID) -> AvisResponse:
        """후기 거절 — clears approval and featured flags."""
        avis: Avis = await self._get_or_404(db, avis_id)
        avis = await avis_repository.apply(
            db,
            avis,
            {
                "status": AvisStatus.REJECTED.value,
                "is_approved": False,
                "is_featured": False,
                "approved_by": None,
                "approved_at": None,
                "moderated_at": utcnow(),
            },
        )
        return self._to_response(avis)

    async def respond(self, db: AsyncSession, avis_id: UUID, data: AvisReply) -> AvisResponse:
        avis: Avis = await self._get_or_404(db, avis_id)
        avis = await avis_repository.apply(
            db, avis, {"admin_response": data.admin_response, "response_date": utcnow()}
        )
        return self._to_response(avis)

    async def toggle_featured(self, db: AsyncSession, avis_id: UUID) -> AvisResponse:
        """추천 토글 — only approved avis can be featured.

        Raises:
            BadRequestError: 승인되지 않은 후기 (Avis not approved)
        """
        avis: Avis = await self._get_or_404(db, avis_id)
        if not avis.is_approved:
            raise BadRequestError("Only approved avis can be featured")
        avis = await avis_repository.apply(db, avis, {"is_featured": not avis.is_featured})
        return self._to_response(avis)

    async def delete_avis(self, db: AsyncSession, avis_id: UUID) -> None:
        if not await avis_repository.delete(db, avis_id):
            raise NotFoundError("Avis not found")

    async def get_avis(self, db: AsyncSession, avis_id: UUID) -> AvisResponse:
        return self._to_response(await self._get_or_404(db, avis_id))

    async def list_admin(
        self,
        db: AsyncSession,
        status: AvisStatus | None = None,
        sentiment: str | None = None,
        min_rating: int | None = None,
        max_rating: int | None = None,
        avis_type: AvisType | None = None,
        prestation_id: UUID | None = None,
        q: str | None = None,
        needs_response: bool = False,
        page: int = 1,
        per_page: int = 20,
    ) -> Page:
        """관리자 후기 목록.

        Admin listing. `sentiment` is a shortcut for the rating range:
        "positive" means rating ≥ 4, "negative" means rating ≤ 2.
        """
        if sentiment == "positive":
            min_rating = POSITIVE_MIN_RATING
        elif sentiment == "negative":
            max_rating = NEGATIVE_MAX_RATING

        query = avis_repository.build_admin_query(
            status.value if status else None,
            min_rating,
            max_rating,
            avis_type.value if avis_type else None,
            prestation_id,
            q,
            needs_response,
        )
        items, total = await avis_repository.get_paginated(db, query, page, per_page)
        return build_page([self._to_response(a) for a in items], total, page, per_page)

    # --- 공개 — Public ---

    async def list_public(
        self,
        db: AsyncSession,
        prestation_id: UUID | None = None,
        avis_type: AvisType | None = None,
        page: int = 1,
        per_page: int = 10,
    ) -> Page:
        query = avis_repository.build_public_query(prestation_id, avis_type.value if avis_type else None)
        items, total = await avis_repository.get_paginated(db, query, page, per_page)
        return build_page([self._to_public(a) for a in items], total, page, per_page)

    async def list_featured(self, db: AsyncSession) -> list[AvisPublicResponse]:
        return [self._to_public(a) for a in await avis_repository.get_featured(db)]

    async def get_stats(self, db: AsyncSession, prestation_id: UUID | None = None) -> AvisStats:
        """평점 통계 — global or per-prestation average over approved avis."""
        average, count = await avis_repository.average_rating(db, prestation_id)
        return AvisStats(
            prestation_id=str(prestation_id) if prestation_id else None,
            average_rating=round(average, 2) if average is not None else None,
            count=count,
        )


# 싱글턴 인스턴스 — Singleton instance
avis_service: AvisService = AvisService()
