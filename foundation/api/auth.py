"""인증 엔드포인트 — 공개 사이트, 직원 앱, 백오피스 공용.

    POST /register   직원 가입 (USER 역할)
    POST /login      토큰 쌍 발급
    POST /refresh    리프레시 토큰 교환 (1회용)
    POST /logout     리프레시 토큰 폐기
    POST /validate   액세스 토큰 검증, 항상 200
    GET  /me         현재 사용자
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.api.deps import get_current_user
from foundation.database import get_db
from foundation.models.user import User
from foundation.schemas.auth import (
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
    UserMeResponse,
    ValidateRequest,
    ValidateResponse,
)
from foundation.services.auth_service import auth_service

router: APIRouter = APIRouter()

Session = Annotated[AsyncSession, Depends(get_db)]


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(data: RegisterRequest, db: Session) -> RegisterResponse:
    created: RegisterResponse = await auth_service.register(db, data)
    await db.commit()
    return created


@router.post("/login", response_model=TokenResponse)
async def login(data: LoginRequest, db: Session) -> TokenResponse:
    tokens: TokenResponse = await auth_service.login(db, data)
    await db.commit()
    return tokens


@router.post("/refresh", response_model=TokenResponse)
async def refresh(data: RefreshRequest, db: Session) -> TokenResponse:
    tokens: TokenResponse = await auth_service.refresh(db, data)
    await db.commit()
    return tokens


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(data: RefreshRequest, db: Session) -> None:
    await auth_service.logout(db, data)
    await db.commit()


@router.post("/validate", response_model=ValidateResponse)
async def validate(data: ValidateRequest, db: Session) -> ValidateResponse:
    return await auth_service.validate(db, data.token)


@router.get("/me", response_model=UserMeResponse)
async def me(current_user: Annotated[User, Depends(get_current_user)]) -> UserMeResponse:
    return auth_service.get_me(current_user)
