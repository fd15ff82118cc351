"""뉴스 레포지토리 — 뉴스 조회 쿼리.

News Repository — Public/admin listing queries and slug lookups.
"""

from typing import Sequence

from sqlalchemy import Select, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.models.content import News
from foundation.repositories.base import BaseRepository


class NewsRepository(BaseRepository[News]):

    def __init__(self) -> None:
        super().__init__(News)

    async def get_by_slug(self, db: AsyncSession, slug: str) -> News | None:
        result = await db.execute(select(News).where(News.slug == slug))
        return result.scalar_one_or_none()

    async def slug_exists(self, db: AsyncSession, slug: str) -> bool:
        return await self.exists(db, {"slug": slug})

    def build_admin_query(self, status: str | None = None) -> Select:
        query: Select = select(News)
        if status:
            query = query.where(News.status == status)
        return query.order_by(News.created_at.desc())

    def build_published_query(
        self,
        q: str | None = None,
        category: str | None = None,
    ) -> Select:
        """게시된 뉴스 검색 쿼리 — Published news, newest first.

        Args:
            q: 제목/본문 부분 일치 (Partial match on title or body)
            category: 카테고리 필터 (Category filter)
        """
        query: Select = select(News).where(News.published.is_(True))
        if q:
            pattern: str = f"%{q}%"
            query = query.where(or_(News.title.ilike(pattern), News.body.ilike(pattern)))
        if category:
            query = query.where(News.category == category)
        return query.order_by(News.published_at.desc(), News.created_at.desc())

    async def get_featured(self, db: AsyncSession, limit: int = 10) -> Sequence[News]:
        query: Select = (
            select(News)
            .where(News.published.is_(True), News.featured.is_(True))
            .order_by(News.published_at.desc())
            .limit(limit)
        )
        return (await db.execute(query)).scalars().all()

    async def get_popular(self, db: AsyncSession, limit: int = 5) -> Sequence[News]:
        query: Select = (
            select(News)
            .where(News.published.is_(True))
            .order_by(News.view_count.desc(), News.published_at.desc())
            .limit(limit)
        )
        return (await db.execute(query)).scalars().all()

    async def increment_views(self, db: AsyncSession, news: News) -> None:
        """조회수를 원자적으로 1 증가 — Atomically bump the view counter."""
        await db.execute(
            update(News).where(News.id == news.id).values(view_count=News.view_count + 1)
        )
        await db.flush()
        await db.refresh(news)


# 싱글턴 인스턴스 — Singleton instance
news_repository: NewsRepository = NewsRepository()
