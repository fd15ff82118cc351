"""인증 스키마 — /api/v1/auth 요청과 응답."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    """직원 자가 가입.

    Attributes:
        matricule: 직원 번호, 대문자/숫자 6-10자 (e.g. "EMP001")
        service: 소속 부서 코드 (Department code, optional)
        phone: 숫자 10자리 (Ten digits, optional)
        password: 6자 이상, 서버에서 bcrypt 해시
    """

    first_name: str = Field(min_length=2, max_length=50)
    last_name: str = Field(min_length=2, max_length=50)
    email: EmailStr
    matricule: str = Field(pattern=r"^[A-Z0-9]{6,10}$")
    service: str | None = Field(default=None, max_length=50)
    phone: str | None = Field(default=None, pattern=r"^\d{10}$")
    password: str = Field(min_length=6, max_length=128)


class RegisterResponse(BaseModel):
    message: str
    user_id: str


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    """로그인/갱신 응답 — expires_at is the access token expiry."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_at: datetime
    roles: list[str]


class RefreshRequest(BaseModel):
    refresh_token: str


class ValidateRequest(BaseModel):
    token: str


class ValidateResponse(BaseModel):
    """토큰 검증 결과 — Identity fields stay empty when valid is False."""

    valid: bool
    user_id: str | None = None
    email: str | None = None
    roles: list[str] = []


class UserMeResponse(BaseModel):
    id: str
    email: str
    first_name: str
    last_name: str
    matricule: str
    service_code: str | None
    roles: list[str]
    is_active: bool
