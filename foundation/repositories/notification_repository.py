"""알림 레포지토리 — 이메일 알림 기록 조회.

Notification Repository — Queries over the outgoing email log.
"""

from sqlalchemy import Select, func, select

from foundation.models.notification import Notification
from foundation.repositories.base import BaseRepository


class NotificationRepository(BaseRepository[Notification]):

    def __init__(self) -> None:
        super().__init__(Notification)

    def build_query(
        self,
        recipient_email: str | None = None,
        status: str | None = None,
        kind: str | None = None,
    ) -> Select:
        query: Select = select(Notification)
        if recipient_email:
            query = query.where(func.lower(Notification.recipient_email) == recipient_email.lower())
        if status:
            query = query.where(Notification.status == status)
        if kind:
            query = query.where(Notification.kind == kind)
        return query.order_by(Notification.sent_at.desc())


# 싱글턴 인스턴스 — Singleton instance
notification_repository: NotificationRepository = NotificationRepository()
