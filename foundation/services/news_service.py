"""뉴스 서비스 — 뉴스 작성, 게시, 공개 조회 비즈니스 로직.

News Service — Authoring, publication workflow and public reads of news.
Publishing emails the users who opted in to news notifications.
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from foundation.models.content import ContentStatus, News
from foundation.models.user import User
from foundation.repositories.news_repository import news_repository
from foundation.schemas.content import NewsCreate, NewsResponse, NewsUpdate
from foundation.services.notification_service import notification_service
from foundation.utils.dates import utcnow
from foundation.utils.exceptions import BadRequestError, DuplicateError, NotFoundError
from foundation.utils.pagination import Page, build_page
from foundation.utils.slug import slugify

logger = logging.getLogger(__name__)


class NewsService:
    """뉴스 관련 비즈니스 로직을 처리하는 서비스.

    Service handling news business logic.
    """

    def _to_response(self, news: News) -> NewsResponse:
        return NewsResponse(
            id=str(news.id),
            title=news.title,
            slug=news.slug,
            body=news.body,
            image_url=news.image_url,
            category=news.category,
            tags=news.tags or [],
            status=news.status,
            published=news.published,
            published_at=news.published_at,
            featured=news.featured,
            view_count=news.view_count,
            author_id=str(news.author_id) if news.author_id else None,
            author_name=news.author_name,
            created_at=news.created_at,
            updated_at=news.updated_at,
        )

    async def _get_or_404(self, db: AsyncSession, news_id: UUID) -> News:
        news: News | None = await news_repository.get_by_id(db, news_id)
        if news is None:
            raise NotFoundError("News not found")
        return news

    async def _unique_slug(self, db: AsyncSession, base: str) -> str:
        """충돌 시 -2, -3 ... 접미사를 붙입니다 (Append -2, -3, ... until the slug is free)."""
        slug: str = base
        suffix: int = 2
        while await news_repository.slug_exists(db, slug):
            slug = f"{base}-{suffix}"
            suffix += 1
        return slug

    # --- 관리자 — Administration ---

    async def create_news(self, db: AsyncSession, author: User, data: NewsCreate) -> NewsResponse:
        """뉴스를 생성합니다 (초안 상태).

        Create a news item as a draft.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            author: 작성자 (Authoring admin)
            data: 뉴스 생성 데이터 (News creation data)

        Raises:
            DuplicateError: 명시한 슬러그가 이미 사용 중 (Explicit slug already taken)
        """
        if data.slug:
            if await news_repository.slug_exists(db, data.slug):
                raise DuplicateError("Slug already in use")
            slug: str = data.slug
        else:
            slug = await self._unique_slug(db, slugify(data.title))

        news: News = await news_repository.create(
            db,
            {
                **data.model_dump(exclude={"slug"}),
                "slug": slug,
                "status": ContentStatus.DRAFT.value,
                "published": False,
                "author_id": author.id,
                "author_name": author.full_name,
            },
        )
        return self._to_response(news)

    async def update_news(self, db: AsyncSession, news_id: UUID, data: NewsUpdate) -> NewsResponse:
        news: News = await self._get_or_404(db, news_id)
        update_data: dict[str, Any] = data.model_dump(exclude_unset=True)

        new_slug: str | None = update_data.get("slug")
        if new_slug and new_slug != news.slug and await news_repository.slug_exists(db, new_slug):
            raise DuplicateError("Slug already in use")
        if "slug" in update_data and not new_slug:
            update_data.pop("slug")

        news = await news_repository.apply(db, news, update_data)
        return self._to_response(news)

    async def publish(self, db: AsyncSession, news_id: UUID) -> NewsResponse:
        """뉴스를 게시하고 구독자에게 알립니다.

        Publish a news item and email subscribed users.

        Raises:
            BadRequestError: 이미 게시됨 (Already published)
        """
        news: News = await self._get_or_404(db, news_id)
        if news.published:
            raise BadRequestError("News is already published")

        news = await news_repository.apply(
            db,
            news,
            {"status": ContentStatus.PUBLISHED.value, "published": True, "published_at": utcnow()},
        )
        notified: int = await notification_service.notify_news_published(db, news)
        logger.info("News published id=%s notified=%d", news.id, notified)
        return self._to_response(news)

    async def unpublish(self, db: AsyncSession, news_id: UUID) -> NewsResponse:
        news: News = await self._get_or_404(db, news_id)
        news = await news_repository.apply(
            db, news, {"status": ContentStatus.DRAFT.value, "published": False}
        )
        return self._to_response(news)

    async def archive(self, db: AsyncSession, news_id: UUID) -> NewsResponse:
        news: News = await self._get_or_404(db, news_id)
        news = await news_repository.apply(
            db, news, {"status": ContentStatus.ARCHIVED.value, "published": False}
        )
        return self._to_response(news)

    async def delete_news(self, db: AsyncSession, news_id: UUID) -> None:
        if not await news_repository.delete(db, news_id):
            raise NotFoundError("News not found")

    async def get_news(self, db: AsyncSession, news_id: UUID) -> NewsResponse:
        return self._to_response(await self._get_or_404(db, news_id))

    async def list_admin(
        self,
        db: AsyncSession,
        status: ContentStatus | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> Page:
        query = news_repository.build_admin_query(status.value if status else None)
        items, total = await news_repository.get_paginated(db, query, page, per_page)
        return build_page([self._to_response(n) for n in items], total, page, per_page)

    # --- 공개 — Public ---

    async def list_published(
        self,
        db: AsyncSession,
        q: str | None = None,
        category: str | None = None,
        page: int = 1,
        per_page: int = 10,
    ) -> Page:
        query = news_repository.build_published_query(q, category)
        items, total = await news_repository.get_paginated(db, query, page, per_page)
        return build_page([self._to_response(n) for n in items], total, page, per_page)

    async def list_featured(self, db: AsyncSession) -> list[NewsResponse]:
        return [self._to_response(n) for n in await news_repository.get_featured(db)]

    async def list_popular(self, db: AsyncSession) -> list[NewsResponse]:
        return [self._to_response(n) for n in await news_repository.get_popular(db)]

    async def read_published(self, db: AsyncSession, news: News | None) -> NewsResponse:
        """게시된 뉴스 열람 — Return a published item and count the view."""
        if news is None or not news.published:
            raise NotFoundError("News not found")
        await news_repository.increment_views(db, news)
        return self._to_response(news)

    async def get_public(self, db: AsyncSession, news_id: UUID) -> NewsResponse:
        return await self.read_published(db, await news_repository.get_by_id(db, news_id))

    async def get_by_slug(self, db: AsyncSession, slug: str) -> NewsResponse:
        return await self.read_published(db, await news_repository.get_by_slug(db, slug))


# 싱글턴 인스턴스 — Singleton instance
news_service: NewsService = NewsService()
