"""인증 레포지토리 — 로그인 식별자 조회, 역할, 리프레시 토큰 저장소.

Auth Repository — Lookups used by registration and login (email is
matched case-insensitively, matricule exactly), role bootstrap, and the
refresh token store. A refresh token is valid only while its row exists:
refresh and logout delete it, deactivation and deletion of an account
delete all of them.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.models.token import RefreshToken
from foundation.models.user import Role, User


class AuthRepository:
    """인증 쿼리 레포지토리."""

    async def get_user_by_email(self, db: AsyncSession, email: str) -> User | None:
        return await db.scalar(select(User).where(func.lower(User.email) == email.strip().lower()))

    async def get_user_by_matricule(self, db: AsyncSession, matricule: str) -> User | None:
        return await db.scalar(select(User).where(User.matricule == matricule))

    async def get_or_create_role(self, db: AsyncSession, name: str) -> Role:
        """역할 조회, 없으면 생성 — Used by registration, role updates and the seed."""
        role: Role | None = await db.scalar(select(Role).where(Role.name == name))
        if role is None:
            role = Role(name=name)
            db.add(role)
            await db.flush()
        return role

    # --- 리프레시 토큰 — Refresh tokens ---

    async def store_refresh_token(
        self,
        db: AsyncSession,
        user_id: UUID,
        token: str,
        expires_at: datetime,
    ) -> RefreshToken:
        """발급한 리프레시 토큰을 저장합니다.

        Args:
            user_id: 소유 사용자 (Owner)
            token: 인코딩된 JWT (Encoded refresh JWT)
            expires_at: 만료 시각, JWT exp와 동일 (Same instant as the JWT exp claim)
        """
        row = RefreshToken(user_id=user_id, token=token, expires_at=expires_at)
        db.add(row)
        await db.flush()
        return row

    async def get_refresh_token(self, db: AsyncSession, token: str) -> RefreshToken | None:
        return await db.scalar(select(RefreshToken).where(RefreshToken.token == token))

    async def revoke_refresh_token(self, db: AsyncSession, token: str) -> bool:
        """토큰 폐기 — False when the token was never stored or is already revoked."""
        result = await db.execute(delete(RefreshToken).where(RefreshToken.token == token))
        await db.flush()
        return result.rowcount > 0

    async def revoke_user_tokens(self, db: AsyncSession, user_id: UUID) -> None:
        """사용자의 모든 세션 종료 — Drop every refresh token of one user."""
        await db.execute(delete(RefreshToken).where(RefreshToken.user_id == user_id))
        await db.flush()


# 싱글턴 인스턴스 — Singleton instance
auth_repository: AuthRepository = AuthRepository()
