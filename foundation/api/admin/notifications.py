"""관리자 알림 라우터 — Outgoing email log."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.api.deps import require_admin
from foundation.database import get_db
from foundation.models.user import User
from foundation.services.notification_service import notification_service
from foundation.utils.pagination import Page, PageQuery, PerPageQuery

router: APIRouter = APIRouter()


@router.get("", response_model=Page)
async def list_notifications(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    recipient_email: Annotated[str | None, Query(description="수신자 이메일")] = None,
    status: Annotated[str | None, Query(description="SENT / FAILED / LOGGED")] = None,
    kind: Annotated[str | None, Query(description="알림 종류")] = None,
    page: PageQuery = 1,
    per_page: PerPageQuery = 20,
) -> Page:
    return await notification_service.list_notifications(db, recipient_email, status, kind, page, per_page)
