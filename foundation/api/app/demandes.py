"""앱 지원 신청 라우터 — 내 신청 작성/제출/취소 및 첨부파일.

App Demande Router — The current user's demandes: drafting, submission,
cancellation and supporting attachments.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.api.deps import get_current_user
from foundation.config import settings
from foundation.database import get_db
from foundation.models.social import DemandeStatus
from foundation.models.user import User
from foundation.schemas.common import MessageResponse
from foundation.schemas.demande import (
    AttachmentResponse,
    DemandeCreate,
    DemandeDraftUpdate,
    DemandeResponse,
)
from foundation.services.demande_service import demande_service
from foundation.services.storage_service import storage_service
from foundation.utils.pagination import Page, PageQuery, PerPageQuery

router: APIRouter = APIRouter()


@router.get("", response_model=Page)
async def list_my_demandes(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    status: Annotated[DemandeStatus | None, Query(description="상태 필터")] = None,
    page: PageQuery = 1,
    per_page: PerPageQuery = 20,
) -> Page:
    """내 신청 목록 — newest first."""
    return await demande_service.list_my_demandes(db, current_user, status, page, per_page)


@router.post("", response_model=DemandeResponse, status_code=201)
async def create_demande(
    data: DemandeCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> DemandeResponse:
    """지원 신청 초안을 생성합니다.

    Create a DRAFT demande against an active prestation.
    """
    result: DemandeResponse = await demande_service.create_demande(db, current_user, data)
    await db.commit()
    return result


@router.get("/{demande_id}", response_model=DemandeResponse)
async def get_my_demande(
    demande_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> DemandeResponse:
    return await demande_service.get_my_demande(db, demande_id, current_user)


@router.put("/{demande_id}", response_model=DemandeResponse)
async def update_draft(
    demande_id: UUID,
    data: DemandeDraftUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> DemandeResponse:
    """초안 수정 — DRAFT only."""
    result: DemandeResponse = await demande_service.update_draft(db, demande_id, current_user, data)
    await db.commit()
    return result


@router.post("/{demande_id}/submit", response_model=DemandeResponse)
async def submit_demande(
    demande_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> DemandeResponse:
    """초안을 제출합니다.

    Submit a draft for review.
    """
    result: DemandeResponse = await demande_service.submit(db, demande_id, current_user)
    await db.commit()
    return result


@router.post("/{demande_id}/cancel", response_model=DemandeResponse)
async def cancel_demande(
    demande_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> DemandeResponse:
    result: DemandeResponse = await demande_service.cancel(db, demande_id, current_user)
    await db.commit()
    return result


@router.delete("/{demande_id}", response_model=MessageResponse)
async def delete_draft(
    demande_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict[str, str]:
    """초안 삭제 — DRAFT only."""
    await demande_service.delete_draft(db, demande_id, current_user)
    await db.commit()
    return {"message": "Demande deleted"}


@router.get("/{demande_id}/attachments", response_model=list[AttachmentResponse])
async def list_attachments(
    demande_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> list[AttachmentResponse]:
    return await demande_service.list_attachments(db, demande_id, current_user)


@router.post("/{demande_id}/attachments", response_model=AttachmentResponse, status_code=201)
async def add_attachment(
    demande_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    file: UploadFile = File(...),
) -> AttachmentResponse:
    """첨부파일 업로드 — pdf/jpg/jpeg/png/doc/docx, 10 MB max by default."""
    content: bytes = await storage_service.read_upload(file, settings.ATTACHMENT_MAX_BYTES)
    result: AttachmentResponse = await demande_service.add_attachment(
        db, demande_id, current_user, file.filename, content, file.content_type
    )
    await db.commit()
    return result
