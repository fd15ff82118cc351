"""지원 서비스(Prestation) 서비스 — 카탈로그 관리 비즈니스 로직.

Prestation Service — Business logic for the social aid catalogue:
creation with amount bounds, activation, ordering, and demand ranking.
"""

import logging
from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from foundation.models.social import Demande, Prestation, PrestationCategory, PrestationType
from foundation.repositories.demande_repository import demande_repository
from foundation.repositories.prestation_repository import prestation_repository
from foundation.schemas.prestation import (
    PrestationCreate,
    PrestationRanking,
    PrestationResponse,
    PrestationUpdate,
)
from foundation.utils.exceptions import BadRequestError, NotFoundError
from foundation.utils.ids import parse_uuids
from foundation.utils.pagination import Page, build_page

logger = logging.getLogger(__name__)


def _as_float(value: Decimal | None) -> float | None:
    return float(value) if value is not None else None


def check_amount_bounds(min_amount: Decimal | None, max_amount: Decimal | None) -> None:
    """금액 범위 검증 — 400 when both bounds are set and min > max."""
    if min_amount is not None and max_amount is not None and min_amount > max_amount:
        raise BadRequestError("min_amount must not exceed max_amount")


class PrestationService:
    """지원 서비스 카탈로그 비즈니스 로직을 처리하는 서비스.

    Service handling the prestation catalogue.
    """

    def _to_response(self, prestation: Prestation) -> PrestationResponse:
        """지원 서비스 모델을 응답 스키마로 변환합니다.

        Convert a Prestation model to its response schema; amounts are
        exposed as floats.
        """
        return PrestationResponse(
            id=str(prestation.id),
            title=prestation.title,
            short_description=prestation.short_description,
            description=prestation.description,
            prestation_type=prestation.prestation_type,
            category=prestation.category,
            min_amount=_as_float(prestation.min_amount),
            max_amount=_as_float(prestation.max_amount),
            duration_label=prestation.duration_label,
            conditions=prestation.conditions,
            is_active=prestation.is_active,
            requires_documents=prestation.requires_documents,
            required_documents=prestation.required_documents,
            eligibility_criteria=prestation.eligibility_criteria,
            processing_time_days=prestation.processing_time_days,
            max_requests_per_year=prestation.max_requests_per_year,
            image_url=prestation.image_url,
            display_order=prestation.display_order,
            created_at=prestation.created_at,
        )

    async def get_or_404(self, db: AsyncSession, prestation_id: UUID) -> Prestation:
        prestation: Prestation | None = await prestation_repository.get_by_id(db, prestation_id)
        if prestation is None:
            raise NotFoundError("Prestation not found")
        return prestation

    async def get_prestation(self, db: AsyncSession, prestation_id: UUID) -> PrestationResponse:
        return self._to_response(await self.get_or_404(db, prestation_id))

    async def get_active_prestation(self, db: AsyncSession, prestation_id: UUID) -> PrestationResponse:
        """공개 상세 — Inactive prestations are hidden from the public catalogue."""
        prestation: Prestation = await self.get_or_404(db, prestation_id)
        if not prestation.is_active:
            raise NotFoundError("Prestation not found")
        return self._to_response(prestation)

    async def list_active(
        self,
        db: AsyncSession,
        category: PrestationCategory | None = None,
        search: str | None = None,
    ) -> list[PrestationResponse]:
        query = prestation_repository.build_active_query(category.value if category else None, search)
        prestations = (await db.execute(query)).scalars().all()
        return [self._to_response(p) for p in prestations]

    async def list_all(
        self,
        db: AsyncSession,
        category: PrestationCategory | None = None,
        prestation_type: PrestationType | None = None,
        is_active: bool | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> Page:
        query = prestation_repository.build_admin_query(
            category.value if category else None,
            prestation_type.value if prestation_type else None,
            is_active,
        )
        items, total = await prestation_repository.get_paginated(db, query, page, per_page)
        return build_page([self._to_response(p) for p in items], total, page, per_page)

    async def most_requested(self, db: AsyncSession, limit: int = 5) -> list[PrestationRanking]:
        ranking = await prestation_repository.get_most_requested(db, limit)
        return [
            PrestationRanking(prestation=self._to_response(p), demande_count=count)
            for p, count in ranking
        ]

    async def create_prestation(self, db: AsyncSession, data: PrestationCreate) -> PrestationResponse:
        """지원 서비스를 생성합니다.

        Create a prestation at the end of the display order.

        Raises:
            BadRequestError: min_amount > max_amount
        """
        check_amount_bounds(data.min_amount, data.max_amount)
        max_order: int = await prestation_repository.get_max_display_order(db)

        create_data: dict[str, Any] = data.model_dump()
        create_data["prestation_type"] = data.prestation_type.value
        create_data["category"] = data.category.value
        create_data["display_order"] = max_order + 1

        prestation: Prestation = await prestation_repository.create(db, create_data)
        logger.info("Prestation created id=%s title=%r", prestation.id, prestation.title)
        return self._to_response(prestation)

    async def update_prestation(
        self,
        db: AsyncSession,
        prestation_id: UUID,
        data: PrestationUpdate,
    ) -> PrestationResponse:
        """지원 서비스 부분 수정 — bounds are re-checked against the stored values."""
        prestation: Prestation = await self.get_or_404(db, prestation_id)
        update_data: dict[str, Any] = data.model_dump(exclude_unset=True)

        check_amount_bounds(
            update_data.get("min_amount", prestation.min_amount),
            update_data.get("max_amount", prestation.max_amount),
        )
        for key in ("prestation_type", "category"):
            if update_data.get(key) is not None:
                update_data[key] = update_data[key].value

        prestation = await prestation_repository.apply(db, prestation, update_data)
        return self._to_response(prestation)

    async def set_active(self, db: AsyncSession, prestation_id: UUID, is_active: bool) -> PrestationResponse:
        prestation: Prestation = await self.get_or_404(db, prestation_id)
        prestation = await prestation_repository.apply(db, prestation, {"is_active": is_active})
        return self._to_response(prestation)

    async def reorder(self, db: AsyncSession, ids: list[str]) -> list[PrestationResponse]:
        """카탈로그 순서 재배치 — display_order = position + 1.

        Raises:
            BadRequestError: 없는 ID 포함 (Unknown prestation id)
        """
        uuid_ids: list[UUID] = parse_uuids(ids)
        prestations = {p.id: p for p in await prestation_repository.get_by_ids(db, uuid_ids)}
        if len(prestations) != len(set(uuid_ids)):
            raise BadRequestError("Ids must reference existing prestations")

        for position, prestation_id in enumerate(uuid_ids):
            prestations[prestation_id].display_order = position + 1
        await db.flush()

        return [self._to_response(prestations[pid]) for pid in uuid_ids]

    async def delete_prestation(self, db: AsyncSession, prestation_id: UUID) -> None:
        """지원 서비스 삭제 — refused while demandes reference it.

        Raises:
            NotFoundError: 지원 서비스가 없을 때 (Prestation not found)
            BadRequestError: 연결된 신청이 있을 때 (Demandes still reference it)
        """
        prestation: Prestation = await self.get_or_404(db, prestation_id)
        if await demande_repository.count(db, Demande.prestation_id == prestation.id):
            raise BadRequestError("Prestation has demandes; deactivate it instead")
        await prestation_repository.delete(db, prestation.id)


# 싱글턴 인스턴스 — Singleton instance
prestation_service: PrestationService = PrestationService()
