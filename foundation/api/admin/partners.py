"""관리자 파트너 라우터 — Partner directory maintenance."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.api.deps import require_admin
from foundation.database import get_db
from foundation.models.user import User
from foundation.schemas.common import MessageResponse
from foundation.schemas.content import PartnerCreate, PartnerResponse, PartnerUpdate
from foundation.services.partner_service import partner_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[PartnerResponse])
async def list_partners(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> list[PartnerResponse]:
    return await partner_service.list_partners(db)


@router.post("", response_model=PartnerResponse, status_code=201)
async def create_partner(
    data: PartnerCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> PartnerResponse:
    result: PartnerResponse = await partner_service.create_partner(db, data)
    await db.commit()
    return result


@router.get("/{partner_id}", response_model=PartnerResponse)
async def get_partner(
    partner_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> PartnerResponse:
    return await partner_service.get_partner(db, partner_id)


@router.put("/{partner_id}", response_model=PartnerResponse)
async def update_partner(
    partner_id: UUID,
    data: PartnerUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> PartnerResponse:
    result: PartnerResponse = await partner_service.update_partner(db, partner_id, data)
    await db.commit()
    return result


@router.delete("/{partner_id}", response_model=MessageResponse)
async def delete_partner(
    partner_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> dict[str, str]:
    await partner_service.delete_partner(db, partner_id)
    await db.commit()
    return {"message": "Partner deleted"}
