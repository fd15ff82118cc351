"""사용자 서비스 — 내 프로필 및 관리자 사용자 관리 비즈니스 로직.

User Service — Business logic for self-service profiles and admin user
management (search, roles, activation, soft delete).
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from foundation.config import settings
from foundation.models.user import Role, User
from foundation.repositories.auth_repository import auth_repository
from foundation.repositories.user_repository import user_repository
from foundation.schemas.user import ProfileResponse, ProfileUpdate
from foundation.services.storage_service import storage_service
from foundation.utils.dates import utcnow
from foundation.utils.exceptions import NotFoundError
from foundation.utils.pagination import Page, build_page

logger = logging.getLogger(__name__)

# 아바타 허용 확장자 — Allowed avatar extensions
AVATAR_EXTENSIONS: frozenset[str] = frozenset({"jpg", "jpeg", "png", "gif"})


class UserService:
    """사용자 관련 비즈니스 로직을 처리하는 서비스.

    Service handling user profile and user administration logic.
    """

    def _to_response(self, user: User) -> ProfileResponse:
        """사용자 모델을 프로필 응답 스키마로 변환합니다.

        Convert a User model instance to a ProfileResponse schema.
        Requires the roles relationship to be loaded.
        """
        return ProfileResponse(
            id=str(user.id),
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            matricule=user.matricule,
            service_code=user.service_code,
            phone=user.phone,
            address=user.address,
            birth_date=user.birth_date,
            family_status=user.family_status,
            children_count=user.children_count,
            avatar_url=user.avatar_url,
            notif_email=user.notif_email,
            notif_news=user.notif_news,
            notif_events=user.notif_events,
            roles=user.role_names,
            is_active=user.is_active,
            deleted_at=user.deleted_at,
            created_at=user.created_at,
        )

    async def _get_or_404(self, db: AsyncSession, user_id: UUID) -> User:
        user: User | None = await user_repository.get_by_id(db, user_id)
        if user is None or user.deleted_at is not None:
            raise NotFoundError("User not found")
        return user

    # --- 내 프로필 — Own profile ---

    def get_profile(self, user: User) -> ProfileResponse:
        return self._to_response(user)

    async def update_profile(self, db: AsyncSession, user: User, data: ProfileUpdate) -> ProfileResponse:
        """내 프로필 부분 수정 — Partial update of the caller's profile."""
        update_data = data.model_dump(exclude_unset=True)
        user = await user_repository.apply(db, user, update_data)
        return self._to_response(user)

    async def upload_avatar(
        self,
        db: AsyncSession,
        user: User,
        filename: str | None,
        content: bytes,
        content_type: str | None = None,
    ) -> ProfileResponse:
        """프로필 이미지를 업로드합니다.

        Store a new avatar image and point the profile at it.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user: 현재 사용자 (Current user)
            filename: 원본 파일명 (Client-side filename)
            content: 파일 내용 (File bytes)
            content_type: MIME 타입 (Declared content type)

        Raises:
            BadRequestError: 허용되지 않은 형식 또는 크기 초과
                             (Extension not allowed or file too large)
        """
        ext: str = storage_service.validate_upload(
            filename, len(content), AVATAR_EXTENSIONS, settings.AVATAR_MAX_BYTES
        )
        url: str = await storage_service.save("avatars", ext, content, content_type)
        user = await user_repository.apply(db, user, {"avatar_url": url})
        logger.info("Avatar updated user=%s url=%s", user.id, url)
        return self._to_response(user)

    # --- 관리자 — Administration ---

    async def search_users(
        self,
        db: AsyncSession,
        search: str | None = None,
        service_code: str | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> Page:
        query = user_repository.build_search_query(search, service_code)
        users, total = await user_repository.get_paginated(db, query, page, per_page)
        return build_page([self._to_response(u) for u in users], total, page, per_page)

    async def get_user(self, db: AsyncSession, user_id: UUID) -> ProfileResponse:
        return self._to_response(await self._get_or_404(db, user_id))

    async def update_roles(self, db: AsyncSession, user_id: UUID, role_names: list[str]) -> ProfileResponse:
        """역할 전체 교체 — Replace the user's roles, creating unknown roles on demand."""
        user: User = await self._get_or_404(db, user_id)
        roles: list[Role] = [await auth_repository.get_or_create_role(db, name) for name in role_names]
        user.roles = roles
        await db.flush()
        await db.refresh(user)
        logger.info("Roles updated user=%s roles=%s", user.id, role_names)
        return self._to_response(user)

    async def set_active(self, db: AsyncSession, user_id: UUID, is_active: bool) -> ProfileResponse:
        user: User = await self._get_or_404(db, user_id)
        user = await user_repository.apply(db, user, {"is_active": is_active})
        if not is_active:
            await auth_repository.revoke_user_tokens(db, user.id)
        logger.info("User %s active=%s", user.id, is_active)
        return self._to_response(user)

    async def soft_delete(self, db: AsyncSession, user_id: UUID) -> None:
        """사용자 소프트 삭제.

        Soft-delete a user: sets deleted_at and is_active=False, and
        revokes every stored refresh token.

        Raises:
            NotFoundError: 사용자가 없거나 이미 삭제됨 (Unknown or already deleted user)
        """
        user: User = await self._get_or_404(db, user_id)
        await user_repository.apply(db, user, {"deleted_at": utcnow(), "is_active": False})
        await auth_repository.revoke_user_tokens(db, user.id)
        logger.info("User soft-deleted id=%s", user.id)


# 싱글턴 인스턴스 — Singleton instance
user_service: UserService = UserService()
