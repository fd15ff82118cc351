"""문의 레포지토리 — 관리자 문의 검색 쿼리.

Contact Repository — Admin search over contact submissions.
"""

from datetime import datetime

from sqlalchemy import Select, or_, select

from foundation.models.content import Contact
from foundation.repositories.base import BaseRepository


class ContactRepository(BaseRepository[Contact]):

    def __init__(self) -> None:
        super().__init__(Contact)

    def build_search_query(
        self,
        status: str | None = None,
        q: str | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
    ) -> Select:
        """문의 검색 쿼리를 생성합니다.

        Build the admin contact search query, newest first.

        Args:
            status: 처리 상태 필터 (Status filter)
            q: 이름/이메일/제목/본문 부분 일치 (Partial match on name, email, subject, message)
            date_from: 접수일 하한, 포함 (Inclusive lower bound on created_at)
            date_to: 접수일 상한, 포함 (Inclusive upper bound on created_at)
        """
        query: Select = select(Contact)
        if status:
            query = query.where(Contact.status == status)
        if q:
            pattern: str = f"%{q}%"
            query = query.where(
                or_(
                    Contact.name.ilike(pattern),
                    Contact.email.ilike(pattern),
                    Contact.subject.ilike(pattern),
                    Contact.message.ilike(pattern),
                )
            )
        if date_from is not None:
            query = query.where(Contact.created_at >= date_from)
        if date_to is not None:
            query = query.where(Contact.created_at <= date_to)
        return query.order_by(Contact.created_at.desc())


# 싱글턴 인스턴스 — Singleton instance
contact_repository: ContactRepository = ContactRepository()
