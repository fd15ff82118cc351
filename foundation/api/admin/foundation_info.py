"""관리자 재단 소개 라우터 — 블록 관리 및 순서 변경.

Admin Foundation Info Router — Block maintenance, activation and ordering
within an info type.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.api.deps import require_admin
from foundation.database import get_db
from foundation.models.content import InfoType
from foundation.models.user import User
from foundation.schemas.common import MessageResponse
from foundation.schemas.content import (
    FoundationInfoCreate,
    FoundationInfoReorder,
    FoundationInfoResponse,
    FoundationInfoUpdate,
)
from foundation.schemas.user import ActiveUpdate
from foundation.services.foundation_info_service import foundation_info_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[FoundationInfoResponse])
async def list_blocks(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    info_type: Annotated[InfoType | None, Query(description="유형 필터")] = None,
) -> list[FoundationInfoResponse]:
    """전체 블록 — Inactive blocks included."""
    return await foundation_info_service.list_admin(db, info_type)


@router.post("", response_model=FoundationInfoResponse, status_code=201)
async def create_block(
    data: FoundationInfoCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> FoundationInfoResponse:
    """블록 생성 — Appended at the end of its type."""
    result: FoundationInfoResponse = await foundation_info_service.create_block(db, data)
    await db.commit()
    return result


@router.put("/reorder", response_model=list[FoundationInfoResponse])
async def reorder_blocks(
    data: FoundationInfoReorder,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> list[FoundationInfoResponse]:
    result: list[FoundationInfoResponse] = await foundation_info_service.reorder(db, data.info_type, data.ids)
    await db.commit()
    return result


@router.get("/{block_id}", response_model=FoundationInfoResponse)
async def get_block(
    block_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> FoundationInfoResponse:
    return await foundation_info_service.get_block(db, block_id)


@router.put("/{block_id}", response_model=FoundationInfoResponse)
async def update_block(
    block_id: UUID,
    data: FoundationInfoUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> FoundationInfoResponse:
    result: FoundationInfoResponse = await foundation_info_service.update_block(db, block_id, data)
    await db.commit()
    return result


@router.patch("/{block_id}/active", response_model=FoundationInfoResponse)
async def set_block_active(
    block_id: UUID,
    data: ActiveUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> FoundationInfoResponse:
    result: FoundationInfoResponse = await foundation_info_service.set_active(db, block_id, data.is_active)
    await db.commit()
    return result


@router.delete("/{block_id}", response_model=MessageResponse)
async def delete_block(
    block_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> dict[str, str]:
    await foundation_info_service.delete_block(db, block_id)
    await db.commit()
    return {"message": "Foundation info deleted"}
