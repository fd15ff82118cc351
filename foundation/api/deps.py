"""라우터 공통 의존성 — Bearer 인증과 역할 검사.

The employee app routes depend on get_current_user, the back office on
require_admin. A request is authenticated when it carries an access
token (not a refresh token) whose subject is an active, non-deleted
user; anything else answers 401. A signed-in user lacking the role
answers 403.
"""

from typing import Annotated, Awaitable, Callable

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.database import get_db
from foundation.models.user import ROLE_ADMIN, User
from foundation.repositories.user_repository import user_repository
from foundation.utils.jwt import ACCESS, read_token, subject_id

# auto_error=False: 헤더 누락은 403이 아닌 401
bearer_scheme: HTTPBearer = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """요청의 액세스 토큰으로 사용자 확인 (역할은 selectin으로 함께 로드)."""
    if not credentials:
        raise _unauthorized("Not authenticated")
    try:
        user_id = subject_id(read_token(credentials.credentials, ACCESS))
    except jwt.InvalidTokenError:
        raise _unauthorized("Invalid or expired token")

    user: User | None = await user_repository.get_by_id(db, user_id)
    if not user or not user.can_sign_in:
        raise _unauthorized("User not found or inactive")
    return user


def require_role(*role_names: str) -> Callable[..., Awaitable[User]]:
    """주어진 역할 중 하나를 요구하는 의존성을 만듭니다.

    Args:
        role_names: 허용 역할 (Any one of them grants access)
    """

    async def _guard(user: Annotated[User, Depends(get_current_user)]) -> User:
        if not any(map(user.has_role, role_names)):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
        return user

    return _guard


# 백오피스 — Back office
require_admin = require_role(ROLE_ADMIN)
