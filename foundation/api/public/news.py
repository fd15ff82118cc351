"""공개 뉴스 라우터 — 게시된 뉴스 조회.

Public News Router — Published news listings and article pages.
Reading an article counts a view.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.database import get_db
from foundation.schemas.content import NewsResponse
from foundation.services.news_service import news_service
from foundation.utils.pagination import Page, PageQuery, PerPageQuery

router: APIRouter = APIRouter()


@router.get("", response_model=Page)
async def list_published_news(
    db: Annotated[AsyncSession, Depends(get_db)],
    q: Annotated[str | None, Query(description="제목/본문 검색")] = None,
    category: Annotated[str | None, Query(description="카테고리 필터")] = None,
    page: PageQuery = 1,
    per_page: PerPageQuery = 10,
) -> Page:
    """게시된 뉴스 목록 — newest first."""
    return await news_service.list_published(db, q, category, page, per_page)


@router.get("/featured", response_model=list[NewsResponse])
async def list_featured_news(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[NewsResponse]:
    return await news_service.list_featured(db)


@router.get("/popular", response_model=list[NewsResponse])
async def list_popular_news(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[NewsResponse]:
    """조회수 상위 5건 — Top 5 by views."""
    return await news_service.list_popular(db)


@router.get("/slug/{slug}", response_model=NewsResponse)
async def get_news_by_slug(
    slug: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> NewsResponse:
    result: NewsResponse = await news_service.get_by_slug(db, slug)
    await db.commit()
    return result


@router.get("/{news_id}", response_model=NewsResponse)
async def get_news(
    news_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> NewsResponse:
    result: NewsResponse = await news_service.get_public(db, news_id)
    await db.commit()
    return result
