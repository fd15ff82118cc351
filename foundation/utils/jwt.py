"""JWT 발급/검증 — 직원 앱과 백오피스가 공유하는 Bearer 토큰.

Bearer tokens of the foundation API. Access and refresh tokens carry the
same identity claims and differ by their "type" claim and lifetime:

    {"sub": "<user uuid>", "email": "jane@fondation.ma",
     "roles": ["USER"], "type": "access" | "refresh", "exp": ...}

Refresh tokens also get a random "jti", as they are stored under a
unique constraint and two may be issued within the same second.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from foundation.config import settings

ACCESS = "access"
REFRESH = "refresh"


def _lifetime(token_type: str) -> timedelta:
    if token_type == REFRESH:
        return timedelta(days=settings.JWT_REFRESH_TOKEN_EXPIRE_DAYS)
    return timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)


def issue_token(claims: dict[str, Any], token_type: str = ACCESS) -> tuple[str, datetime]:
    """토큰 발급.

    Args:
        claims: 신원 클레임 {"sub", "email", "roles"} (Identity claims)
        token_type: ACCESS 또는 REFRESH

    Returns:
        tuple[str, datetime]: (인코딩된 JWT, 만료 시각 UTC)
    """
    expires_at: datetime = datetime.now(timezone.utc) + _lifetime(token_type)
    body: dict[str, Any] = {**claims, "type": token_type, "exp": expires_at}
    if token_type == REFRESH:
        body["jti"] = uuid.uuid4().hex
    encoded: str = jwt.encode(body, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    return encoded, expires_at


def read_token(token: str, token_type: str = ACCESS) -> dict[str, Any]:
    """서명, 만료, 유형을 확인하고 클레임을 반환합니다.

    Raises:
        jwt.InvalidTokenError: 서명 오류, 만료(ExpiredSignatureError 포함),
                               다른 유형의 토큰 (Bad signature, expired, wrong type)
    """
    claims: dict[str, Any] = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    if claims.get("type") != token_type:
        raise jwt.InvalidTokenError(f"Expected a {token_type} token")
    return claims


def subject_id(claims: dict[str, Any]) -> uuid.UUID:
    """sub 클레임의 사용자 ID — Raises jwt.InvalidTokenError when absent or malformed."""
    try:
        return uuid.UUID(claims["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise jwt.InvalidTokenError("Malformed subject") from exc
