"""문의 서비스 — 공개 문의 접수 및 관리자 답변 처리.

Contact Service — Public contact form intake and admin follow-up.
Every new submission is forwarded to the support mailbox, and a reply is
emailed back to the sender.
"""

import logging
from datetime import datetime
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from foundation.models.content import Contact, ContactStatus
from foundation.models.user import User
from foundation.repositories.contact_repository import contact_repository
from foundation.schemas.content import ContactCreate, ContactReply, ContactResponse
from foundation.services.notification_service import notification_service
from foundation.utils.dates import utcnow
from foundation.utils.exceptions import NotFoundError
from foundation.utils.pagination import Page, build_page

logger = logging.getLogger(__name__)


class ContactService:
    """문의 관련 비즈니스 로직을 처리하는 서비스.

    Service handling contact submissions.
    """

    def _to_response(self, contact: Contact) -> ContactResponse:
        return ContactResponse(
            id=str(contact.id),
            name=contact.name,
            email=contact.email,
            subject=contact.subject,
            message=contact.message,
            status=contact.status,
            response_message=contact.response_message,
            responded_at=contact.responded_at,
            responded_by=contact.responded_by,
            sender_ip=contact.sender_ip,
            created_at=contact.created_at,
        )

    async def _get_or_404(self, db: AsyncSession, contact_id: UUID) -> Contact:
        contact: Contact | None = await contact_repository.get_by_id(db, contact_id)
        if contact is None:
            raise NotFoundError("Contact not found")
        return contact

    async def create_contact(
        self,
        db: AsyncSession,
        data: ContactCreate,
        sender_ip: str | None = None,
    ) -> ContactResponse:
        """공개 문의를 접수합니다.

        Record a contact submission and notify the support mailbox.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 문의 내용 (Contact form payload)
            sender_ip: 요청자 IP (Client IP address)

        Returns:
            ContactResponse: 접수된 문의 (Stored contact, status NEW)
        """
        contact: Contact = await contact_repository.create(
            db,
            {
                **data.model_dump(),
                "email": data.email.lower(),
                "status": ContactStatus.NEW.value,
                "sender_ip": sender_ip,
            },
        )
        await notification_service.notify_contact_received(db, contact)
        logger.info("Contact received id=%s from=%s ip=%s", contact.id, contact.email, sender_ip)
        return self._to_response(contact)

    async def list_contacts(
        self,
        db: AsyncSession,
        status: ContactStatus | None = None,
        q: str | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> Page:
        query = contact_repository.build_search_query(
            status.value if status else None, q, date_from, date_to
        )
        items, total = await contact_repository.get_paginated(db, query, page, per_page)
        return build_page([self._to_response(c) for c in items], total, page, per_page)

    async def get_contact(self, db: AsyncSession, contact_id: UUID) -> ContactResponse:
        return self._to_response(await self._get_or_404(db, contact_id))

    async def update_status(
        self,
        db: AsyncSession,
        contact_id: UUID,
        status: ContactStatus,
    ) -> ContactResponse:
        contact: Contact = await self._get_or_404(db, contact_id)
        contact = await contact_repository.apply(db, contact, {"status": status.value})
        return self._to_response(contact)

    async def respond(
        self,
        db: AsyncSession,
        contact_id: UUID,
        admin: User,
        data: ContactReply,
    ) -> ContactResponse:
        """문의에 답변합니다.

        Store the reply, mark the contact RESPONDED and email the sender.
        """
        contact: Contact = await self._get_or_404(db, contact_id)
        contact = await contact_repository.apply(
            db,
            contact,
            {
                "status": ContactStatus.RESPONDED.value,
                "response_message": data.response_message,
                "responded_at": utcnow(),
                "responded_by": admin.email,
            },
        )
        await notification_service.notify_contact_reply(db, contact)
        return self._to_response(contact)

    async def delete_contact(self, db: AsyncSession, contact_id: UUID) -> None:
        if not await contact_repository.delete(db, contact_id):
            raise NotFoundError("Contact not found")


# 싱글턴 인스턴스 — Singleton instance
contact_service: ContactService = ContactService()
