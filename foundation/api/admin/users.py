"""백오피스 사용자 관리 — 검색, 역할, 활성 상태, 소프트 삭제."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.api.deps import require_admin
from foundation.database import get_db
from foundation.models.user import User
from foundation.schemas.common import MessageResponse
from foundation.schemas.user import ActiveUpdate, ProfileResponse, RolesUpdate
from foundation.services.user_service import user_service
from foundation.utils.pagination import Page, PageQuery, PerPageQuery

router: APIRouter = APIRouter()

Session = Annotated[AsyncSession, Depends(get_db)]
Admin = Annotated[User, Depends(require_admin)]


@router.get("", response_model=Page)
async def search_users(
    db: Session,
    _: Admin,
    search: Annotated[str | None, Query(description="이름, 이메일, 직원 번호")] = None,
    service_code: Annotated[str | None, Query(description="부서 코드")] = None,
    page: PageQuery = 1,
    per_page: PerPageQuery = 20,
) -> Page:
    """삭제되지 않은 사용자 검색."""
    return await user_service.search_users(db, search, service_code, page, per_page)


@router.get("/{user_id}", response_model=ProfileResponse)
async def read_user(user_id: UUID, db: Session, _: Admin) -> ProfileResponse:
    return await user_service.get_user(db, user_id)


@router.put("/{user_id}/roles", response_model=ProfileResponse)
async def replace_roles(user_id: UUID, data: RolesUpdate, db: Session, _: Admin) -> ProfileResponse:
    """역할 목록 전체 교체 — Missing roles are created on the fly."""
    updated: ProfileResponse = await user_service.update_roles(db, user_id, data.roles)
    await db.commit()
    return updated


@router.patch("/{user_id}/active", response_model=ProfileResponse)
async def toggle_active(user_id: UUID, data: ActiveUpdate, db: Session, _: Admin) -> ProfileResponse:
    """활성/비활성 전환 — Deactivation also ends the user's sessions."""
    updated: ProfileResponse = await user_service.set_active(db, user_id, data.is_active)
    await db.commit()
    return updated


@router.delete("/{user_id}", response_model=MessageResponse)
async def remove_user(user_id: UUID, db: Session, _: Admin) -> dict[str, str]:
    await user_service.soft_delete(db, user_id)
    await db.commit()
    return {"message": "User deleted"}
