"""공개 파트너 라우터 — Partner directory."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.database import get_db
from foundation.schemas.content import PartnerResponse
from foundation.services.partner_service import partner_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[PartnerResponse])
async def list_partners(
    db: Annotated[AsyncSession, Depends(get_db)],
    sector: Annotated[str | None, Query(description="업종 필터")] = None,
) -> list[PartnerResponse]:
    return await partner_service.list_partners(db, sector)


@router.get("/sectors", response_model=list[str])
async def list_sectors(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[str]:
    return await partner_service.list_sectors(db)
