"""공개 지원 서비스 라우터 — 활성 카탈로그 조회.

Public Prestation Router — The active prestation catalogue.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.database import get_db
from foundation.models.social import PrestationCategory
from foundation.schemas.prestation import PrestationRanking, PrestationResponse
from foundation.services.prestation_service import prestation_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[PrestationResponse])
async def list_active_prestations(
    db: Annotated[AsyncSession, Depends(get_db)],
    category: Annotated[PrestationCategory | None, Query(description="분야 필터")] = None,
    search: Annotated[str | None, Query(description="제목/설명 검색")] = None,
) -> list[PrestationResponse]:
    """활성 지원 서비스 목록 — ordered by display_order."""
    return await prestation_service.list_active(db, category, search)


@router.get("/most-requested", response_model=list[PrestationRanking])
async def list_most_requested(
    db: Annotated[AsyncSession, Depends(get_db)],
    limit: Annotated[int, Query(ge=1, le=50)] = 5,
) -> list[PrestationRanking]:
    return await prestation_service.most_requested(db, limit)


@router.get("/{prestation_id}", response_model=PrestationResponse)
async def get_prestation(
    prestation_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PrestationResponse:
    return await prestation_service.get_active_prestation(db, prestation_id)
