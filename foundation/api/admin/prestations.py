"""관리자 지원 서비스 라우터 — 카탈로그 관리.

Admin Prestation Router — Catalogue maintenance: create, update,
activation, ordering, deletion and demand ranking.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.api.deps import require_admin
from foundation.database import get_db
from foundation.models.social import PrestationCategory, PrestationType
from foundation.models.user import User
from foundation.schemas.common import MessageResponse, ReorderRequest
from foundation.schemas.prestation import (
    PrestationCreate,
    PrestationRanking,
    PrestationResponse,
    PrestationUpdate,
)
from foundation.schemas.user import ActiveUpdate
from foundation.services.prestation_service import prestation_service
from foundation.utils.pagination import Page, PageQuery, PerPageQuery

router: APIRouter = APIRouter()


@router.get("", response_model=Page)
async def list_prestations(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    category: Annotated[PrestationCategory | None, Query(description="분야 필터")] = None,
    prestation_type: Annotated[PrestationType | None, Query(description="유형 필터")] = None,
    is_active: Annotated[bool | None, Query(description="활성 여부 필터")] = None,
    page: PageQuery = 1,
    per_page: PerPageQuery = 20,
) -> Page:
    return await prestation_service.list_all(db, category, prestation_type, is_active, page, per_page)


@router.post("", response_model=PrestationResponse, status_code=201)
async def create_prestation(
    data: PrestationCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> PrestationResponse:
    """지원 서비스 생성 — Appended at the end of the catalogue."""
    result: PrestationResponse = await prestation_service.create_prestation(db, data)
    await db.commit()
    return result


@router.get("/most-requested", response_model=list[PrestationRanking])
async def list_most_requested(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    limit: Annotated[int, Query(ge=1, le=50)] = 5,
) -> list[PrestationRanking]:
    return await prestation_service.most_requested(db, limit)


@router.put("/reorder", response_model=list[PrestationResponse])
async def reorder_prestations(
    data: ReorderRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> list[PrestationResponse]:
    result: list[PrestationResponse] = await prestation_service.reorder(db, data.ids)
    await db.commit()
    return result


@router.get("/{prestation_id}", response_model=PrestationResponse)
async def get_prestation(
    prestation_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> PrestationResponse:
    return await prestation_service.get_prestation(db, prestation_id)


@router.put("/{prestation_id}", response_model=PrestationResponse)
async def update_prestation(
    prestation_id: UUID,
    data: PrestationUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> PrestationResponse:
    result: PrestationResponse = await prestation_service.update_prestation(db, prestation_id, data)
    await db.commit()
    return result


@router.patch("/{prestation_id}/active", response_model=PrestationResponse)
async def set_prestation_active(
    prestation_id: UUID,
    data: ActiveUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> PrestationResponse:
    result: PrestationResponse = await prestation_service.set_active(db, prestation_id, data.is_active)
    await db.commit()
    return result


@router.delete("/{prestation_id}", response_model=MessageResponse)
async def delete_prestation(
    prestation_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> dict[str, str]:
    """지원 서비스 삭제 — Refused while demandes reference it."""
    await prestation_service.delete_prestation(db, prestation_id)
    await db.commit()
    return {"message": "Prestation deleted"}
