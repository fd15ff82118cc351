"""공개 후기 라우터 — 승인된 후기 및 평점 통계.

Public Avis Router — Approved avis, featured avis and rating statistics.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.database import get_db
from foundation.models.social import AvisType
from foundation.schemas.avis import AvisPublicResponse, AvisStats
from foundation.services.avis_service import avis_service
from foundation.utils.pagination import Page, PageQuery, PerPageQuery

router: APIRouter = APIRouter()


@router.get("", response_model=Page)
async def list_approved_avis(
    db: Annotated[AsyncSession, Depends(get_db)],
    prestation_id: Annotated[UUID | None, Query(description="지원 서비스 필터")] = None,
    avis_type: Annotated[AvisType | None, Query(description="후기 유형 필터")] = None,
    page: PageQuery = 1,
    per_page: PerPageQuery = 10,
) -> Page:
    return await avis_service.list_public(db, prestation_id, avis_type, page, per_page)


@router.get("/featured", response_model=list[AvisPublicResponse])
async def list_featured_avis(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[AvisPublicResponse]:
    return await avis_service.list_featured(db)


@router.get("/stats", response_model=AvisStats)
async def get_avis_stats(
    db: Annotated[AsyncSession, Depends(get_db)],
    prestation_id: Annotated[UUID | None, Query(description="지원 서비스별 통계")] = None,
) -> AvisStats:
    """평점 통계 — global, or for one prestation."""
    return await avis_service.get_stats(db, prestation_id)
