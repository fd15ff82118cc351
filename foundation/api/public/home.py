"""공개 홈 라우터 — Home page mission and figures."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.database import get_db
from foundation.schemas.content import HomeResponse
from foundation.services.site_info_service import site_info_service

router: APIRouter = APIRouter()


@router.get("/home", response_model=HomeResponse)
async def get_home(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> HomeResponse:
    """홈 화면 정보 — creates the default site info on first access."""
    result: HomeResponse = await site_info_service.get_home(db)
    await db.commit()
    return result
