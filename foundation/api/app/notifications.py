"""앱 알림 라우터 — 내 알림 조회 및 읽음 처리.

App Notification Router — Emails sent to the current user.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.api.deps import get_current_user
from foundation.database import get_db
from foundation.models.user import User
from foundation.schemas.notification import NotificationResponse
from foundation.services.notification_service import notification_service
from foundation.utils.pagination import Page, PageQuery, PerPageQuery

router: APIRouter = APIRouter()


@router.get("", response_model=Page)
async def list_my_notifications(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    page: PageQuery = 1,
    per_page: PerPageQuery = 20,
) -> Page:
    return await notification_service.list_for_user(db, current_user, page, per_page)


@router.patch("/{notification_id}/read", response_model=NotificationResponse)
async def mark_notification_read(
    notification_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> NotificationResponse:
    """알림 읽음 처리 — Mark one of my notifications as read."""
    result: NotificationResponse = await notification_service.mark_read(db, current_user, notification_id)
    await db.commit()
    return result
