"""관리자 행사 라우터 — Event authoring and publication."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.api.deps import require_admin
from foundation.database import get_db
from foundation.models.content import ContentStatus
from foundation.models.user import User
from foundation.schemas.common import MessageResponse
from foundation.schemas.content import EventCreate, EventResponse, EventUpdate
from foundation.services.event_service import event_service
from foundation.utils.pagination import Page, PageQuery, PerPageQuery

router: APIRouter = APIRouter()


@router.get("", response_model=Page)
async def list_events(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    status: Annotated[ContentStatus | None, Query(description="상태 필터")] = None,
    page: PageQuery = 1,
    per_page: PerPageQuery = 20,
) -> Page:
    return await event_service.list_admin(db, status, page, per_page)


@router.post("", response_model=EventResponse, status_code=201)
async def create_event(
    data: EventCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> EventResponse:
    result: EventResponse = await event_service.create_event(db, data)
    await db.commit()
    return result


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> EventResponse:
    return await event_service.get_event(db, event_id)


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: UUID,
    data: EventUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> EventResponse:
    """행사 수정 — end_date must not precede start_date."""
    result: EventResponse = await event_service.update_event(db, event_id, data)
    await db.commit()
    return result


@router.post("/{event_id}/publish", response_model=EventResponse)
async def publish_event(
    event_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> EventResponse:
    result: EventResponse = await event_service.publish(db, event_id)
    await db.commit()
    return result


@router.post("/{event_id}/unpublish", response_model=EventResponse)
async def unpublish_event(
    event_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> EventResponse:
    result: EventResponse = await event_service.unpublish(db, event_id)
    await db.commit()
    return result


@router.delete("/{event_id}", response_model=MessageResponse)
async def delete_event(
    event_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> dict[str, str]:
    await event_service.delete_event(db, event_id)
    await db.commit()
    return {"message": "Event deleted"}
