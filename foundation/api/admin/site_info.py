"""관리자 사이트 정보 라우터 — Mission text, figures and ministry content."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.api.deps import require_admin
from foundation.database import get_db
from foundation.models.user import User
from foundation.schemas.content import SiteInfoResponse, SiteInfoUpdate
from foundation.services.site_info_service import site_info_service

router: APIRouter = APIRouter()


@router.get("", response_model=SiteInfoResponse)
async def get_site_info(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> SiteInfoResponse:
    result: SiteInfoResponse = await site_info_service.get_site_info(db)
    await db.commit()
    return result


@router.put("", response_model=SiteInfoResponse)
async def update_site_info(
    data: SiteInfoUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> SiteInfoResponse:
    result: SiteInfoResponse = await site_info_service.update_site_info(db, data)
    await db.commit()
    return result
