"""관리자 뉴스 라우터 — 작성, 수정, 게시, 보관, 삭제.

Admin News Router — Authoring and publication workflow for news articles.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.api.deps import require_admin
from foundation.database import get_db
from foundation.models.content import ContentStatus
from foundation.models.user import User
from foundation.schemas.common import MessageResponse
from foundation.schemas.content import NewsCreate, NewsResponse, NewsUpdate
from foundation.services.news_service import news_service
from foundation.utils.pagination import Page, PageQuery, PerPageQuery

router: APIRouter = APIRouter()


@router.get("", response_model=Page)
async def list_news(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    status: Annotated[ContentStatus | None, Query(description="상태 필터")] = None,
    page: PageQuery = 1,
    per_page: PerPageQuery = 20,
) -> Page:
    return await news_service.list_admin(db, status, page, per_page)


@router.post("", response_model=NewsResponse, status_code=201)
async def create_news(
    data: NewsCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> NewsResponse:
    """뉴스 초안 작성 — The slug is derived from the title when omitted."""
    result: NewsResponse = await news_service.create_news(db, current_user, data)
    await db.commit()
    return result


@router.get("/{news_id}", response_model=NewsResponse)
async def get_news(
    news_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> NewsResponse:
    return await news_service.get_news(db, news_id)


@router.put("/{news_id}", response_model=NewsResponse)
async def update_news(
    news_id: UUID,
    data: NewsUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> NewsResponse:
    result: NewsResponse = await news_service.update_news(db, news_id, data)
    await db.commit()
    return result


@router.post("/{news_id}/publish", response_model=NewsResponse)
async def publish_news(
    news_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> NewsResponse:
    """뉴스 게시 — Notifies subscribed users by email."""
    result: NewsResponse = await news_service.publish(db, news_id)
    await db.commit()
    return result


@router.post("/{news_id}/unpublish", response_model=NewsResponse)
async def unpublish_news(
    news_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> NewsResponse:
    result: NewsResponse = await news_service.unpublish(db, news_id)
    await db.commit()
    return result


@router.post("/{news_id}/archive", response_model=NewsResponse)
async def archive_news(
    news_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> NewsResponse:
    result: NewsResponse = await news_service.archive(db, news_id)
    await db.commit()
    return result


@router.delete("/{news_id}", response_model=MessageResponse)
async def delete_news(
    news_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> dict[str, str]:
    await news_service.delete_news(db, news_id)
    await db.commit()
    return {"message": "News deleted"}
