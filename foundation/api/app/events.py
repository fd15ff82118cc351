"""앱 행사 라우터 — 행사 참가 등록/취소.

App Event Router — Event registration for authenticated users.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.api.deps import get_current_user
from foundation.database import get_db
from foundation.models.user import User
from foundation.schemas.content import EventResponse
from foundation.services.event_service import event_service

router: APIRouter = APIRouter()


@router.post("/{event_id}/register", response_model=EventResponse)
async def register_to_event(
    event_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> EventResponse:
    """행사 참가 등록.

    Register for a published event that has not started yet.
    """
    result: EventResponse = await event_service.register(db, event_id)
    await db.commit()
    return result


@router.post("/{event_id}/unregister", response_model=EventResponse)
async def unregister_from_event(
    event_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> EventResponse:
    result: EventResponse = await event_service.unregister(db, event_id)
    await db.commit()
    return result
