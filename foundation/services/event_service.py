"""행사 서비스 — 행사 관리, 공개 조회, 참가 등록 비즈니스 로직.

Event Service — Event administration, public listings and participant
registration. Registration is tracked as a counter on the event.
"""

import logging
from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from foundation.models.content import ContentStatus, Event
from foundation.repositories.event_repository import event_repository
from foundation.schemas.content import EventCreate, EventResponse, EventUpdate
from foundation.services.notification_service import notification_service
from foundation.utils.dates import ensure_utc, utcnow
from foundation.utils.exceptions import BadRequestError, NotFoundError
from foundation.utils.pagination import Page, build_page

logger = logging.getLogger(__name__)


class EventService:
    """행사 관련 비즈니스 로직을 처리하는 서비스.

    Service handling event business logic.
    """

    def _to_response(self, event: Event) -> EventResponse:
        return EventResponse(
            id=str(event.id),
            title=event.title,
            description=event.description,
            start_date=event.start_date,
            end_date=event.end_date,
            location=event.location,
            image_url=event.image_url,
            event_type=event.event_type,
            max_participants=event.max_participants,
            current_participants=event.current_participants,
            registration_required=event.registration_required,
            registration_deadline=event.registration_deadline,
            status=event.status,
            published=event.published,
            published_at=event.published_at,
            organizer=event.organizer,
            created_at=event.created_at,
        )

    async def _get_or_404(self, db: AsyncSession, event_id: UUID) -> Event:
        event: Event | None = await event_repository.get_by_id(db, event_id)
        if event is None:
            raise NotFoundError("Event not found")
        return event

    async def _get_published_or_404(self, db: AsyncSession, event_id: UUID) -> Event:
        event: Event = await self._get_or_404(db, event_id)
        if not event.published:
            raise NotFoundError("Event not found")
        return event

    # --- 관리자 — Administration ---

    async def create_event(self, db: AsyncSession, data: EventCreate) -> EventResponse:
        event: Event = await event_repository.create(
            db,
            {**data.model_dump(), "status": ContentStatus.DRAFT.value, "published": False},
        )
        return self._to_response(event)

    async def update_event(self, db: AsyncSession, event_id: UUID, data: EventUpdate) -> EventResponse:
        """행사 부분 수정.

        Partially update an event. The resulting date range is checked
        against the stored values for the fields left unchanged.

        Raises:
            NotFoundError: 행사가 없을 때 (Event not found)
            BadRequestError: 종료일이 시작일보다 앞설 때 (end_date before start_date)
        """
        event: Event = await self._get_or_404(db, event_id)
        update_data: dict[str, Any] = data.model_dump(exclude_unset=True)

        start: datetime | None = ensure_utc(update_data.get("start_date", event.start_date))
        end: datetime | None = ensure_utc(update_data.get("end_date", event.end_date))
        if start is not None and end is not None and end < start:
            raise BadRequestError("end_date must not be before start_date")

        event = await event_repository.apply(db, event, update_data)
        return self._to_response(event)

    async def delete_event(self, db: AsyncSession, event_id: UUID) -> None:
        if not await event_repository.delete(db, event_id):
            raise NotFoundError("Event not found")

    async def publish(self, db: AsyncSession, event_id: UUID) -> EventResponse:
        """행사를 게시하고 구독자에게 알립니다 (Publish and email subscribed users)."""
        event: Event = await self._get_or_404(db, event_id)
        if event.published:
            raise BadRequestError("Event is already published")
        event = await event_repository.apply(
            db,
            event,
            {"status": ContentStatus.PUBLISHED.value, "published": True, "published_at": utcnow()},
        )
        notified: int = await notification_service.notify_event_published(db, event)
        logger.info("Event published id=%s notified=%d", event.id, notified)
        return self._to_response(event)

    async def unpublish(self, db: AsyncSession, event_id: UUID) -> EventResponse:
        event: Event = await self._get_or_404(db, event_id)
        event = await event_repository.apply(
            db, event, {"status": ContentStatus.DRAFT.value, "published": False}
        )
        return self._to_response(event)

    async def get_event(self, db: AsyncSession, event_id: UUID) -> EventResponse:
        return self._to_response(await self._get_or_404(db, event_id))

    async def list_admin(
        self,
        db: AsyncSession,
        status: ContentStatus | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> Page:
        query = event_repository.build_admin_query(status.value if status else None)
        items, total = await event_repository.get_paginated(db, query, page, per_page)
        return build_page([self._to_response(e) for e in items], total, page, per_page)

    # --- 공개 — Public ---

    async def list_published(
        self,
        db: AsyncSession,
        event_type: str | None = None,
        page: int = 1,
        per_page: int = 10,
    ) -> Page:
        query = event_repository.build_published_query(event_type)
        items, total = await event_repository.get_paginated(db, query, page, per_page)
        return build_page([self._to_response(e) for e in items], total, page, per_page)

    async def list_upcoming(
        self,
        db: AsyncSession,
        event_type: str | None = None,
        q: str | None = None,
        page: int = 1,
        per_page: int = 10,
    ) -> Page:
        query = event_repository.build_upcoming_query(utcnow(), event_type, q)
        items, total = await event_repository.get_paginated(db, query, page, per_page)
        return build_page([self._to_response(e) for e in items], total, page, per_page)

    async def list_past(self, db: AsyncSession, page: int = 1, per_page: int = 10) -> Page:
        query = event_repository.build_past_query(utcnow())
        items, total = await event_repository.get_paginated(db, query, page, per_page)
        return build_page([self._to_response(e) for e in items], total, page, per_page)

    async def list_next(self, db: AsyncSession) -> list[EventResponse]:
        return [self._to_response(e) for e in await event_repository.get_next(db, utcnow())]

    async def get_public(self, db: AsyncSession, event_id: UUID) -> EventResponse:
        return self._to_response(await self._get_published_or_404(db, event_id))

    # --- 참가 등록 — Registration ---

    async def register(self, db: AsyncSession, event_id: UUID) -> EventResponse:
        """행사 참가 등록.

        Register one participant for a published event.

        Raises:
            NotFoundError: 게시되지 않았거나 없는 행사 (Unknown or unpublished event)
            BadRequestError: 이미 시작됨, 등록 마감, 정원 초과
                             (Already started, deadline passed, event full)
        """
        event: Event = await self._get_published_or_404(db, event_id)
        now: datetime = utcnow()

        if ensure_utc(event.start_date) <= now:
            raise BadRequestError("Event has already started")
        if event.registration_deadline is not None and ensure_utc(event.registration_deadline) < now:
            raise BadRequestError("Registration deadline has passed")
        # 정원 검사와 증가를 한 UPDATE로 — Capacity check and increment in one statement
        if not await event_repository.reserve_seat(db, event):
            raise BadRequestError("Event is full")
        return self._to_response(event)

    async def unregister(self, db: AsyncSession, event_id: UUID) -> EventResponse:
        """참가 취소 — Decrement the participant counter, never below zero."""
        event: Event = await self._get_published_or_404(db, event_id)
        await event_repository.release_seat(db, event)
        return self._to_response(event)


# 싱글턴 인스턴스 — Singleton instance
event_service: EventService = EventService()
