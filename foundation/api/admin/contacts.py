"""관리자 문의 라우터 — 문의 조회, 상태 변경, 답변, 삭제.

Admin Contact Router — Triage and reply workflow for contact messages.
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.api.deps import require_admin
from foundation.database import get_db
from foundation.models.content import ContactStatus
from foundation.models.user import User
from foundation.schemas.common import MessageResponse
from foundation.schemas.content import ContactReply, ContactResponse, ContactStatusUpdate
from foundation.services.contact_service import contact_service
from foundation.utils.pagination import Page, PageQuery, PerPageQuery

router: APIRouter = APIRouter()


@router.get("", response_model=Page)
async def list_contacts(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    status: Annotated[ContactStatus | None, Query(description="상태 필터")] = None,
    q: Annotated[str | None, Query(description="이름/이메일/제목 검색")] = None,
    date_from: Annotated[datetime | None, Query(description="접수일 시작")] = None,
    date_to: Annotated[datetime | None, Query(description="접수일 종료")] = None,
    page: PageQuery = 1,
    per_page: PerPageQuery = 20,
) -> Page:
    """문의 목록 — newest first."""
    return await contact_service.list_contacts(db, status, q, date_from, date_to, page, per_page)


@router.get("/{contact_id}", response_model=ContactResponse)
async def get_contact(
    contact_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> ContactResponse:
    return await contact_service.get_contact(db, contact_id)


@router.patch("/{contact_id}/status", response_model=ContactResponse)
async def update_contact_status(
    contact_id: UUID,
    data: ContactStatusUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> ContactResponse:
    result: ContactResponse = await contact_service.update_status(db, contact_id, data.status)
    await db.commit()
    return result


@router.post("/{contact_id}/respond", response_model=ContactResponse)
async def respond_contact(
    contact_id: UUID,
    data: ContactReply,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> ContactResponse:
    """문의 답변 — Stores the reply and emails it to the sender."""
    result: ContactResponse = await contact_service.respond(db, contact_id, current_user, data)
    await db.commit()
    return result


@router.delete("/{contact_id}", response_model=MessageResponse)
async def delete_contact(
    contact_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> dict[str, str]:
    await contact_service.delete_contact(db, contact_id)
    await db.commit()
    return {"message": "Contact deleted"}
