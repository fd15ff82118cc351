"""공개 문의 라우터 — Contact form intake."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.database import get_db
from foundation.schemas.content import ContactCreate, ContactResponse
from foundation.services.contact_service import contact_service
from foundation.utils.request import client_ip

router: APIRouter = APIRouter()


@router.post("/contact", response_model=ContactResponse, status_code=201)
async def submit_contact(
    data: ContactCreate,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ContactResponse:
    """문의 접수 — stores the message and forwards it to the support mailbox."""
    result: ContactResponse = await contact_service.create_contact(db, data, client_ip(request))
    await db.commit()
    return result
