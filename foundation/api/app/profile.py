"""내 프로필 — 조회, 수정(알림 수신 설정 포함), 아바타 업로드."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.api.deps import get_current_user
from foundation.config import settings
from foundation.database import get_db
from foundation.models.user import User
from foundation.schemas.user import ProfileResponse, ProfileUpdate
from foundation.services.storage_service import storage_service
from foundation.services.user_service import user_service

router: APIRouter = APIRouter(prefix="/profile")

CurrentUser = Annotated[User, Depends(get_current_user)]
Session = Annotated[AsyncSession, Depends(get_db)]


@router.get("", response_model=ProfileResponse)
async def read_profile(current_user: CurrentUser) -> ProfileResponse:
    return user_service.get_profile(current_user)


@router.put("", response_model=ProfileResponse)
async def edit_profile(data: ProfileUpdate, db: Session, current_user: CurrentUser) -> ProfileResponse:
    """부분 수정 — Fields left out of the body keep their value."""
    profile: ProfileResponse = await user_service.update_profile(db, current_user, data)
    await db.commit()
    return profile


@router.post("/avatar", response_model=ProfileResponse)
async def replace_avatar(db: Session, current_user: CurrentUser, file: UploadFile = File(...)) -> ProfileResponse:
    """아바타 교체 — jpg, jpeg, png or gif up to AVATAR_MAX_BYTES."""
    profile: ProfileResponse = await user_service.upload_avatar(
        db,
        current_user,
        file.filename,
        await storage_service.read_upload(file, settings.AVATAR_MAX_BYTES),
        file.content_type,
    )
    await db.commit()
    return profile
