"""공개 재단 소개 라우터 — Active "about the foundation" blocks."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.database import get_db
from foundation.models.content import InfoType
from foundation.schemas.content import FoundationInfoResponse
from foundation.services.foundation_info_service import foundation_info_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[FoundationInfoResponse])
async def list_foundation_info(
    db: Annotated[AsyncSession, Depends(get_db)],
    info_type: Annotated[list[InfoType] | None, Query(description="유형 필터, 반복 가능 (repeatable)")] = None,
) -> list[FoundationInfoResponse]:
    """활성 소개 블록 — ordered by display_order within each type."""
    return await foundation_info_service.list_public(db, info_type)
