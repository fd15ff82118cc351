"""알림 서비스 — 이메일 발송 및 발송 기록 관리.

Notification Service — Sends notification emails and keeps a record of
every one of them. When SMTP is not configured the email is only logged
and stored with status LOGGED; SMTP failures are logged and stored as
FAILED so the calling workflow (a demande decision, a contact reply)
still completes.
"""

import logging
from uuid import UUID

import aiosmtplib
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.config import settings
from foundation.models.content import Contact, Event, News
from foundation.models.notification import Notification, NotificationStatus
from foundation.models.social import Demande
from foundation.models.user import User
from foundation.repositories.notification_repository import notification_repository
from foundation.repositories.user_repository import user_repository
from foundation.schemas.notification import EmailRequest, EmailResult, NotificationResponse
from foundation.utils import email_templates
from foundation.utils.email import send_email
from foundation.utils.exceptions import ForbiddenError, NotFoundError
from foundation.utils.pagination import Page, build_page

logger = logging.getLogger(__name__)


class NotificationService:
    """이메일 알림 비즈니스 로직을 처리하는 서비스.

    Service handling outgoing email notifications and the notification log.
    """

    def _to_response(self, notification: Notification) -> NotificationResponse:
        return NotificationResponse(
            id=str(notification.id),
            recipient_email=notification.recipient_email,
            subject=notification.subject,
            content=notification.content,
            kind=notification.kind,
            status=notification.status,
            error=notification.error,
            sent_at=notification.sent_at,
            is_read=notification.is_read,
        )

    async def send_email(
        self,
        db: AsyncSession,
        to: str,
        subject: str,
        html: str,
        kind: str = "manual",
        reply_to: str | None = None,
        from_email: str | None = None,
    ) -> Notification:
        """이메일을 발송하고 기록을 남깁니다.

        Send one email and persist a Notification row for it.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            to: 수신자 (Recipient)
            subject: 제목 (Subject)
            html: HTML 본문 (HTML body)
            kind: 알림 종류 (Notification kind, e.g. "demande_status")
            reply_to: 회신 주소 (Reply-To address)
            from_email: 발신 주소 재지정 (Sender override)

        Returns:
            Notification: 저장된 알림 기록 (Stored notification with final status)
        """
        notification: Notification = await notification_repository.create(
            db,
            {
                "recipient_email": to,
                "subject": subject,
                "content": html,
                "kind": kind,
                "status": NotificationStatus.LOGGED.value,
            },
        )

        if not settings.smtp_enabled:
            # SMTP 미설정 — 발송 대신 로그 (SMTP not configured: log only)
            logger.info(
                "Email logged (SMTP disabled) kind=%s to=%s subject=%r reply_to=%s",
                kind, to, subject, reply_to or "N/A",
            )
            return notification

        try:
            await send_email(to, subject, html, reply_to=reply_to, from_email=from_email)
        except (aiosmtplib.SMTPException, OSError, ValueError) as exc:
            logger.error("Email delivery failed kind=%s to=%s: %s", kind, to, exc)
            notification.status = NotificationStatus.FAILED.value
            notification.error = str(exc)[:1000]
        else:
            logger.info("Email sent kind=%s to=%s", kind, to)
            notification.status = NotificationStatus.SENT.value

        await db.flush()
        return notification

    async def send_manual(self, db: AsyncSession, data: EmailRequest) -> EmailResult:
        """관리자 직접 발송 — Admin-triggered email (POST /notify/email)."""
        notification: Notification = await self.send_email(
            db,
            to=data.to,
            subject=data.subject,
            html=data.html,
            reply_to=data.reply_to,
            from_email=data.from_email,
        )
        success: bool = notification.status != NotificationStatus.FAILED.value
        message: str = "Email sent successfully" if success else f"Failed to send email: {notification.error}"
        return EmailResult(message=message, notification_id=str(notification.id), success=success)

    # --- 도메인 알림 — Domain notifications ---

    async def notify_contact_received(self, db: AsyncSession, contact: Contact) -> Notification:
        subject, html = email_templates.contact_form_email(
            contact.name, contact.email, contact.subject, contact.message
        )
        return await self.send_email(
            db, settings.SUPPORT_EMAIL, subject, html, kind="contact", reply_to=contact.email
        )

    async def notify_contact_reply(self, db: AsyncSession, contact: Contact) -> Notification:
        subject, html = email_templates.contact_reply_email(
            contact.name, contact.subject, contact.response_message or ""
        )
        return await self.send_email(db, contact.email, subject, html, kind="contact_reply")

    async def notify_demande_status(self, db: AsyncSession, demande: Demande) -> Notification:
        subject, html = email_templates.demande_status_email(
            demande.prestation_title, demande.status, demande.admin_comment
        )
        return await self.send_email(db, demande.user_email, subject, html, kind="demande_status")

    async def notify_news_published(self, db: AsyncSession, news: News) -> int:
        """뉴스 구독자 알림 — Email opted-in users; returns the number notified."""
        url: str = f"{settings.PUBLIC_SITE_URL}/news/{news.slug}"
        subject, html = email_templates.news_published_email(news.title, url)
        subscribers = await user_repository.get_subscribers(db, "notif_news")
        for user in subscribers:
            await self.send_email(db, user.email, subject, html, kind="news")
        return len(subscribers)

    async def notify_event_published(self, db: AsyncSession, event: Event) -> int:
        """행사 구독자 알림 — Email opted-in users; returns the number notified."""
        url: str = f"{settings.PUBLIC_SITE_URL}/events/{event.id}"
        event_date: str = event.start_date.strftime("%d/%m/%Y %H:%M")
        subject, html = email_templates.event_published_email(event.title, event_date, url)
        subscribers = await user_repository.get_subscribers(db, "notif_events")
        for user in subscribers:
            await self.send_email(db, user.email, subject, html, kind="event")
        return len(subscribers)

    # --- 조회 — Queries ---

    async def list_notifications(
        self,
        db: AsyncSession,
        recipient_email: str | None = None,
        status: str | None = None,
        kind: str | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> Page:
        query = notification_repository.build_query(recipient_email, status, kind)
        items, total = await notification_repository.get_paginated(db, query, page, per_page)
        return build_page([self._to_response(n) for n in items], total, page, per_page)

    async def list_for_user(self, db: AsyncSession, user: User, page: int = 1, per_page: int = 20) -> Page:
        return await self.list_notifications(db, recipient_email=user.email, page=page, per_page=per_page)

    async def mark_read(self, db: AsyncSession, user: User, notification_id: UUID) -> NotificationResponse:
        """내 알림 읽음 처리 — Mark one of the caller's notifications as read.

        Raises:
            NotFoundError: 알림이 없을 때 (Notification not found)
            ForbiddenError: 다른 사용자의 알림일 때 (Belongs to another recipient)
        """
        notification: Notification | None = await notification_repository.get_by_id(db, notification_id)
        if notification is None:
            raise NotFoundError("Notification not found")
        if notification.recipient_email.lower() != user.email.lower():
            raise ForbiddenError("This notification belongs to another user")
        notification = await notification_repository.apply(db, notification, {"is_read": True})
        return self._to_response(notification)


# 싱글턴 인스턴스 — Singleton instance
notification_service: NotificationService = NotificationService()
