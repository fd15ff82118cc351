"""사용자 레포지토리 — 관리자 사용자 검색 및 알림 대상 조회.

User Repository — Admin user search and notification audience queries.
"""

from typing import Sequence

from sqlalchemy import Select, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.models.user import User
from foundation.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """사용자 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the users table.
    Soft-deleted users are excluded from every listing.
    """

    def __init__(self) -> None:
        super().__init__(User)

    def build_search_query(
        self,
        search: str | None = None,
        service_code: str | None = None,
    ) -> Select:
        """관리자 사용자 검색 쿼리를 생성합니다.

        Build the admin user search query.

        Args:
            search: 이름/이메일/직원번호 부분 일치 (Partial match on name, email, matricule)
            service_code: 부서 코드 필터 (Department code filter)

        Returns:
            Select: 생성일 역순 정렬 쿼리 (Query ordered by newest first)
        """
        query: Select = select(User).where(User.deleted_at.is_(None))
        if search:
            pattern: str = f"%{search.lower()}%"
            query = query.where(
                or_(
                    User.first_name.ilike(pattern),
                    User.last_name.ilike(pattern),
                    User.email.ilike(pattern),
                    User.matricule.ilike(pattern),
                )
            )
        if service_code:
            query = query.where(User.service_code == service_code)
        return query.order_by(User.created_at.desc())

    async def get_subscribers(
        self,
        db: AsyncSession,
        preference: str,
    ) -> Sequence[User]:
        """알림 수신 동의 사용자를 조회합니다.

        Active users that opted in to email and to the given preference
        column ("notif_news" or "notif_events").
        """
        column = getattr(User, preference)
        query: Select = select(User).where(
            User.is_active.is_(True),
            User.deleted_at.is_(None),
            User.notif_email.is_(True),
            column.is_(True),
        )
        result = await db.execute(query)
        return result.scalars().all()


# 싱글턴 인스턴스 — Singleton instance
user_repository: UserRepository = UserRepository()
