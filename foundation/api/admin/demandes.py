"""관리자 지원 신청 라우터 — 심사, 상태 변경, 우선순위, 내보내기.

Admin Demande Router — Review queue, status transitions, priority,
follow-up lists and Excel export.
"""

from io import BytesIO
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.api.deps import require_admin
from foundation.database import get_db
from foundation.models.social import DemandeStatus
from foundation.models.user import User
from foundation.schemas.common import MessageResponse
from foundation.schemas.demande import (
    AttachmentResponse,
    DemandePriorityUpdate,
    DemandeResponse,
    DemandeStatusUpdate,
)
from foundation.services.demande_service import demande_service
from foundation.utils.pagination import Page, PageQuery, PerPageQuery

router: APIRouter = APIRouter()


@router.get("", response_model=Page)
async def list_demandes(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    status: Annotated[DemandeStatus | None, Query(description="상태 필터")] = None,
    email: Annotated[str | None, Query(description="신청자 이메일")] = None,
    prestation_id: Annotated[UUID | None, Query(description="지원 서비스 필터")] = None,
    q: Annotated[str | None, Query(description="신청자/사유 검색")] = None,
    page: PageQuery = 1,
    per_page: PerPageQuery = 20,
) -> Page:
    """전체 신청 목록 — newest first."""
    return await demande_service.list_demandes(db, status, email, prestation_id, q, page, per_page)


@router.get("/pending", response_model=Page)
async def list_pending_demandes(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    page: PageQuery = 1,
    per_page: PerPageQuery = 20,
) -> Page:
    """심사 대기 목록 — Oldest submission first."""
    return await demande_service.list_pending(db, page, per_page)


@router.get("/overdue", response_model=list[DemandeResponse])
async def list_overdue_demandes(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> list[DemandeResponse]:
    return await demande_service.list_overdue(db)


@router.get("/due-soon", response_model=list[DemandeResponse])
async def list_due_soon_demandes(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    days: Annotated[int, Query(ge=1, le=30)] = 3,
) -> list[DemandeResponse]:
    return await demande_service.list_due_soon(db, days)


@router.get("/export")
async def export_demandes(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    status: Annotated[DemandeStatus | None, Query(description="상태 필터")] = None,
    email: Annotated[str | None, Query(description="신청자 이메일")] = None,
    prestation_id: Annotated[UUID | None, Query(description="지원 서비스 필터")] = None,
    q: Annotated[str | None, Query(description="신청자/사유 검색")] = None,
) -> StreamingResponse:
    """신청 목록 Excel 다운로드.

    Download the filtered demandes as an Excel workbook.
    """
    excel_bytes: bytes = await demande_service.export_excel(db, status, email, prestation_id, q)
    return StreamingResponse(
        BytesIO(excel_bytes),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": "attachment; filename=demandes_export.xlsx"},
    )


@router.get("/{demande_id}", response_model=DemandeResponse)
async def get_demande(
    demande_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> DemandeResponse:
    return await demande_service.get_demande(db, demande_id)


@router.patch("/{demande_id}/status", response_model=DemandeResponse)
async def update_demande_status(
    demande_id: UUID,
    data: DemandeStatusUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> DemandeResponse:
    """신청 상태 변경 — Follows the transition table and emails the requester."""
    result: DemandeResponse = await demande_service.update_status(db, demande_id, current_user, data)
    await db.commit()
    return result


@router.patch("/{demande_id}/priority", response_model=DemandeResponse)
async def set_demande_priority(
    demande_id: UUID,
    data: DemandePriorityUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> DemandeResponse:
    result: DemandeResponse = await demande_service.set_priority(db, demande_id, data.priority_level.value)
    await db.commit()
    return result


@router.get("/{demande_id}/attachments", response_model=list[AttachmentResponse])
async def list_demande_attachments(
    demande_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> list[AttachmentResponse]:
    return await demande_service.list_attachments(db, demande_id, current_user)


@router.delete("/{demande_id}", response_model=MessageResponse)
async def delete_demande(
    demande_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> dict[str, str]:
    await demande_service.delete_demande(db, demande_id)
    await db.commit()
    return {"message": "Demande deleted"}
