"""관리자 후기 라우터 — 검수, 답변, 추천 지정.

Admin Avis Router — Moderation queue: approve, reject, respond, feature
and delete avis.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.api.deps import require_admin
from foundation.database import get_db
from foundation.models.social import AvisStatus, AvisType
from foundation.models.user import User
from foundation.schemas.avis import AvisReply, AvisResponse
from foundation.schemas.common import MessageResponse
from foundation.services.avis_service import avis_service
from foundation.utils.pagination import Page, PageQuery, PerPageQuery

router: APIRouter = APIRouter()


@router.get("", response_model=Page)
async def list_avis(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    status: Annotated[AvisStatus | None, Query(description="상태 필터")] = None,
    sentiment: Annotated[str | None, Query(pattern="^(positive|negative)$", description="긍정/부정")] = None,
    min_rating: Annotated[int | None, Query(ge=1, le=5)] = None,
    max_rating: Annotated[int | None, Query(ge=1, le=5)] = None,
    avis_type: Annotated[AvisType | None, Query(description="후기 유형 필터")] = None,
    prestation_id: Annotated[UUID | None, Query(description="지원 서비스 필터")] = None,
    q: Annotated[str | None, Query(description="제목/내용 검색")] = None,
    needs_response: Annotated[bool, Query(description="답변 대기만")] = False,
    page: PageQuery = 1,
    per_page: PerPageQuery = 20,
) -> Page:
    return await avis_service.list_admin(
        db,
        status=status,
        sentiment=sentiment,
        min_rating=min_rating,
        max_rating=max_rating,
        avis_type=avis_type,
        prestation_id=prestation_id,
        q=q,
        needs_response=needs_response,
        page=page,
        per_page=per_page,
    )


@router.get("/{avis_id}", response_model=AvisResponse)
async def get_avis(
    avis_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> AvisResponse:
    return await avis_service.get_avis(db, avis_id)


@router.post("/{avis_id}/approve", response_model=AvisResponse)
async def approve_avis(
    avis_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> AvisResponse:
    result: AvisResponse = await avis_service.approve(db, avis_id, current_user)
    await db.commit()
    return result


@router.post("/{avis_id}/reject", response_model=AvisResponse)
async def reject_avis(
    avis_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> AvisResponse:
    result: AvisResponse = await avis_service.reject(db, avis_id)
    await db.commit()
    return result


@router.post("/{avis_id}/respond", response_model=AvisResponse)
async def respond_avis(
    avis_id: UUID,
    data: AvisReply,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> AvisResponse:
    result: AvisResponse = await avis_service.respond(db, avis_id, data)
    await db.commit()
    return result


@router.post("/{avis_id}/feature", response_model=AvisResponse)
async def toggle_featured_avis(
    avis_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> AvisResponse:
    """추천 토글 — Approved avis only."""
    result: AvisResponse = await avis_service.toggle_featured(db, avis_id)
    await db.commit()
    return result


@router.delete("/{avis_id}", response_model=MessageResponse)
async def delete_avis(
    avis_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> dict[str, str]:
    await avis_service.delete_avis(db, avis_id)
    await db.commit()
    return {"message": "Avis deleted"}
