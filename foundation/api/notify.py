"""알림 발송 라우터 — Manual email dispatch for administrators."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.api.deps import require_admin
from foundation.database import get_db
from foundation.models.user import User
from foundation.schemas.notification import EmailRequest, EmailResult
from foundation.services.notification_service import notification_service

router: APIRouter = APIRouter()


@router.post("/email", response_model=EmailResult)
async def send_email(
    data: EmailRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> EmailResult:
    """이메일 발송 — The attempt is recorded whatever the outcome."""
    result: EmailResult = await notification_service.send_manual(db, data)
    await db.commit()
    return result
