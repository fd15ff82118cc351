"""앱 후기 라우터 — 내 후기 작성/조회/삭제.

App Avis Router — The current user's avis.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.api.deps import get_current_user
from foundation.database import get_db
from foundation.models.user import User
from foundation.schemas.avis import AvisCreate, AvisResponse
from foundation.schemas.common import MessageResponse
from foundation.services.avis_service import avis_service
from foundation.utils.pagination import Page, PageQuery, PerPageQuery

router: APIRouter = APIRouter()


@router.get("", response_model=Page)
async def list_my_avis(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    page: PageQuery = 1,
    per_page: PerPageQuery = 20,
) -> Page:
    return await avis_service.list_my_avis(db, current_user, page, per_page)


@router.post("", response_model=AvisResponse, status_code=201)
async def create_avis(
    data: AvisCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> AvisResponse:
    """후기를 작성합니다 — the avis stays PENDING until moderated."""
    result: AvisResponse = await avis_service.create_avis(db, current_user, data)
    await db.commit()
    return result


@router.delete("/{avis_id}", response_model=MessageResponse)
async def delete_my_avis(
    avis_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict[str, str]:
    await avis_service.delete_my_avis(db, avis_id, current_user)
    await db.commit()
    return {"message": "Avis deleted"}
