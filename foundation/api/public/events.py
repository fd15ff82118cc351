"""공개 행사 라우터 — 게시된 행사 조회.

Public Event Router — Published, upcoming, past and next events.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.database import get_db
from foundation.schemas.content import EventResponse
from foundation.services.event_service import event_service
from foundation.utils.pagination import Page, PageQuery, PerPageQuery

router: APIRouter = APIRouter()


@router.get("", response_model=Page)
async def list_published_events(
    db: Annotated[AsyncSession, Depends(get_db)],
    event_type: Annotated[str | None, Query(description="행사 유형 필터")] = None,
    page: PageQuery = 1,
    per_page: PerPageQuery = 10,
) -> Page:
    return await event_service.list_published(db, event_type, page, per_page)


@router.get("/upcoming", response_model=Page)
async def list_upcoming_events(
    db: Annotated[AsyncSession, Depends(get_db)],
    event_type: Annotated[str | None, Query(description="행사 유형 필터")] = None,
    q: Annotated[str | None, Query(description="제목/설명/장소 검색")] = None,
    page: PageQuery = 1,
    per_page: PerPageQuery = 10,
) -> Page:
    """예정된 행사 — soonest first."""
    return await event_service.list_upcoming(db, event_type, q, page, per_page)


@router.get("/past", response_model=Page)
async def list_past_events(
    db: Annotated[AsyncSession, Depends(get_db)],
    page: PageQuery = 1,
    per_page: PerPageQuery = 10,
) -> Page:
    return await event_service.list_past(db, page, per_page)


@router.get("/next", response_model=list[EventResponse])
async def list_next_events(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[EventResponse]:
    """다음 행사 5건 — The next five upcoming events."""
    return await event_service.list_next(db)


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> EventResponse:
    return await event_service.get_public(db, event_id)
