"""인증 서비스 — 가입, 로그인, 토큰 교환, 로그아웃, 토큰 검증.

Auth Service. Employees register themselves with the USER role and sign
in with their work email. Each sign-in or refresh issues a new
access/refresh pair and replaces whatever refresh token the user held
before, so one account has at most one live refresh token.
"""

import logging
from datetime import datetime, timezone
from typing import Any

import jwt
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.models.token import RefreshToken
from foundation.models.user import ROLE_USER, User
from foundation.repositories.auth_repository import auth_repository
from foundation.repositories.user_repository import user_repository
from foundation.schemas.auth import (
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
    UserMeResponse,
    ValidateResponse,
)
from foundation.utils.dates import ensure_utc
from foundation.utils.exceptions import DuplicateError, UnauthorizedError
from foundation.utils.jwt import ACCESS, REFRESH, issue_token, read_token, subject_id
from foundation.utils.password import hash_password, verify_password

logger = logging.getLogger(__name__)


def _claims(user: User) -> dict[str, Any]:
    return {"sub": str(user.id), "email": user.email, "roles": user.role_names}


class AuthService:
    """인증 비즈니스 로직."""

    async def _sign_in(self, db: AsyncSession, user: User) -> TokenResponse:
        """토큰 쌍 발급 — The new refresh token replaces any previous one."""
        claims: dict[str, Any] = _claims(user)
        access, access_expiry = issue_token(claims, ACCESS)
        refresh, refresh_expiry = issue_token(claims, REFRESH)

        await auth_repository.revoke_user_tokens(db, user.id)
        await auth_repository.store_refresh_token(db, user_id=user.id, token=refresh, expires_at=refresh_expiry)

        return TokenResponse(
            access_token=access,
            refresh_token=refresh,
            expires_at=access_expiry,
            roles=user.role_names,
        )

    async def register(self, db: AsyncSession, data: RegisterRequest) -> RegisterResponse:
        """직원 회원가입.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 가입 정보, 이메일은 소문자로 저장 (Email is stored lowercased)

        Raises:
            DuplicateError: 이메일 또는 직원 번호가 이미 사용 중 (Email or matricule taken)
        """
        email: str = data.email.lower()
        if await auth_repository.get_user_by_email(db, email):
            raise DuplicateError("Email already registered")
        if await auth_repository.get_user_by_matricule(db, data.matricule):
            raise DuplicateError("Matricule already registered")

        user = User(
            email=email,
            password_hash=hash_password(data.password),
            first_name=data.first_name,
            last_name=data.last_name,
            matricule=data.matricule,
            service_code=data.service,
            phone=data.phone,
            roles=[await auth_repository.get_or_create_role(db, ROLE_USER)],
        )
        db.add(user)
        await db.flush()

        logger.info("Employee registered id=%s matricule=%s", user.id, user.matricule)
        return RegisterResponse(message="User registered successfully", user_id=str(user.id))

    async def login(self, db: AsyncSession, data: LoginRequest) -> TokenResponse:
        """이메일/비밀번호 로그인.

        Raises:
            UnauthorizedError: 자격 증명 불일치, 비활성 또는 삭제된 계정
        """
        user: User | None = await auth_repository.get_user_by_email(db, data.email)
        if not user or not verify_password(data.password, user.password_hash):
            logger.info("Failed login for %s", data.email)
            raise UnauthorizedError("Invalid email or password")
        if not user.can_sign_in:
            raise UnauthorizedError("Account is disabled")
        return await self._sign_in(db, user)

    async def refresh(self, db: AsyncSession, data: RefreshRequest) -> TokenResponse:
        """리프레시 토큰 교환 — A token works once; the exchange revokes it.

        Raises:
            UnauthorizedError: 서명 오류, 액세스 토큰 사용, 폐기/만료된 토큰, 사용 불가 계정
        """
        try:
            read_token(data.refresh_token, REFRESH)
        except jwt.InvalidTokenError:
            raise UnauthorizedError("Invalid refresh token")

        stored: RefreshToken | None = await auth_repository.get_refresh_token(db, data.refresh_token)
        if not stored:
            raise UnauthorizedError("Refresh token not found or revoked")
        if ensure_utc(stored.expires_at) <= datetime.now(timezone.utc):
            await auth_repository.revoke_refresh_token(db, data.refresh_token)
            raise UnauthorizedError("Refresh token expired")

        owner: User | None = await user_repository.get_by_id(db, stored.user_id)
        if not owner or not owner.can_sign_in:
            raise UnauthorizedError("User not found or inactive")
        return await self._sign_in(db, owner)

    async def logout(self, db: AsyncSession, data: RefreshRequest) -> None:
        """로그아웃 — Unknown tokens are ignored."""
        if await auth_repository.revoke_refresh_token(db, data.refresh_token):
            logger.info("Refresh token revoked on logout")

    async def validate(self, db: AsyncSession, token: str) -> ValidateResponse:
        """액세스 토큰 검증 — Answers valid=False instead of raising."""
        try:
            user_id = subject_id(read_token(token, ACCESS))
        except jwt.InvalidTokenError:
            return ValidateResponse(valid=False)

        user: User | None = await user_repository.get_by_id(db, user_id)
        if not user or not user.can_sign_in:
            return ValidateResponse(valid=False)
        return ValidateResponse(valid=True, user_id=str(user.id), email=user.email, roles=user.role_names)

    def get_me(self, user: User) -> UserMeResponse:
        return UserMeResponse(
            id=str(user.id),
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            matricule=user.matricule,
            service_code=user.service_code,
            roles=user.role_names,
            is_active=user.is_active,
        )


# 싱글턴 인스턴스 — Singleton instance
auth_service: AuthService = AuthService()
