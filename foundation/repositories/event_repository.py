"""행사 레포지토리 — 예정/지난 행사 조회 쿼리.

Event Repository — Upcoming/past listings and type/search filters.
"""

from datetime import datetime
from typing import Sequence

from sqlalchemy import Select, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.models.content import Event
from foundation.repositories.base import BaseRepository


class EventRepository(BaseRepository[Event]):
    """행사 테이블 쿼리 레포지토리.

    Repository for the events table. Public queries only ever return
    published events.
    """

    def __init__(self) -> None:
        super().__init__(Event)

    def build_admin_query(self, status: str | None = None) -> Select:
        query: Select = select(Event)
        if status:
            query = query.where(Event.status == status)
        return query.order_by(Event.start_date.desc())

    def build_published_query(self, event_type: str | None = None) -> Select:
        query: Select = select(Event).where(Event.published.is_(True))
        if event_type:
            query = query.where(Event.event_type == event_type)
        return query.order_by(Event.start_date.desc())

    def build_upcoming_query(
        self,
        now: datetime,
        event_type: str | None = None,
        q: str | None = None,
    ) -> Select:
        """예정된 행사 쿼리 — Published events starting at or after now, soonest first.

        Args:
            now: 기준 시각 (Reference time, UTC)
            event_type: 행사 유형 필터 (Event type filter)
            q: 제목/설명/장소 부분 일치 (Partial match on title, description, location)
        """
        query: Select = select(Event).where(
            Event.published.is_(True),
            Event.start_date >= now,
        )
        if event_type:
            query = query.where(Event.event_type == event_type)
        if q:
            pattern: str = f"%{q}%"
            query = query.where(
                or_(
                    Event.title.ilike(pattern),
                    Event.description.ilike(pattern),
                    Event.location.ilike(pattern),
                )
            )
        return query.order_by(Event.start_date.asc())

    def build_past_query(self, now: datetime) -> Select:
        return (
            select(Event)
            .where(Event.published.is_(True), Event.start_date < now)
            .order_by(Event.start_date.desc())
        )

    async def get_next(self, db: AsyncSession, now: datetime, limit: int = 5) -> Sequence[Event]:
        query: Select = self.build_upcoming_query(now).limit(limit)
        return (await db.execute(query)).scalars().all()

    async def reserve_seat(self, db: AsyncSession, event: Event) -> bool:
        """좌석 1개 원자적 확보 — False when the event is already full."""
        result = await db.execute(
            update(Event)
            .where(
                Event.id == event.id,
                or_(
                    Event.max_participants.is_(None),
                    Event.current_participants < Event.max_participants,
                ),
            )
            .values(current_participants=Event.current_participants + 1)
        )
        await db.flush()
        await db.refresh(event)
        return result.rowcount == 1

    async def release_seat(self, db: AsyncSession, event: Event) -> bool:
        """좌석 1개 원자적 반환 — The counter never goes below zero."""
        result = await db.execute(
            update(Event)
            .where(Event.id == event.id, Event.current_participants > 0)
            .values(current_participants=Event.current_participants - 1)
        )
        await db.flush()
        await db.refresh(event)
        return result.rowcount == 1


# 싱글턴 인스턴스 — Singleton instance
event_repository: EventRepository = EventRepository()
