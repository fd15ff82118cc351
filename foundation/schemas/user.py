"""사용자 프로필 및 관리자 사용자 관리 Pydantic 스키마 정의.

User profile and admin user management Pydantic schema definitions.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

from foundation.schemas.common import PartialUpdate


class ProfileUpdate(PartialUpdate):
    """내 프로필 수정 요청 스키마 (부분 업데이트).

    Self-service profile update (partial). Email and matricule are
    identity fields and cannot be changed here.

    Attributes:
        first_name / last_name: 이름 (2-50 chars)
        phone: 전화번호 10자리 (10-digit phone number)
        service_code: 부서 코드 (Department code)
        address: 주소 (≤ 500 chars)
        birth_date: 생년월일, 과거 날짜 (Birth date, must be in the past)
        family_status: 가족 상태 (≤ 50 chars)
        children_count: 자녀 수 (0-20)
        notif_email / notif_news / notif_events: 알림 수신 설정 (Notification preferences)
    """

    not_null = frozenset({"first_name", "last_name", "notif_email", "notif_news", "notif_events"})

    first_name: str | None = Field(default=None, min_length=2, max_length=50)
    last_name: str | None = Field(default=None, min_length=2, max_length=50)
    phone: str | None = Field(default=None, pattern=r"^\d{10}$")
    service_code: str | None = Field(default=None, max_length=50)
    address: str | None = Field(default=None, max_length=500)
    birth_date: date | None = None
    family_status: str | None = Field(default=None, max_length=50)
    children_count: int | None = Field(default=None, ge=0, le=20)
    notif_email: bool | None = None
    notif_news: bool | None = None
    notif_events: bool | None = None

    @field_validator("birth_date")
    @classmethod
    def _birth_date_in_past(cls, value: date | None) -> date | None:
        if value is not None and value >= date.today():
            raise ValueError("birth_date must be in the past")
        return value


class ProfileResponse(BaseModel):
    """사용자 프로필 응답 스키마 — Full profile of a user."""

    id: str
    email: str
    first_name: str
    last_name: str
    matricule: str
    service_code: str | None
    phone: str | None
    address: str | None
    birth_date: date | None
    family_status: str | None
    children_count: int | None
    avatar_url: str | None
    notif_email: bool
    notif_news: bool
    notif_events: bool
    roles: list[str]
    is_active: bool
    deleted_at: datetime | None
    created_at: datetime


class RolesUpdate(BaseModel):
    """역할 변경 요청 — Full replacement of a user's role set."""

    roles: list[str] = Field(min_length=1)

    @field_validator("roles")
    @classmethod
    def _normalize(cls, value: list[str]) -> list[str]:
        names: list[str] = sorted({name.strip().upper() for name in value if name.strip()})
        if not names:
            raise ValueError("at least one role is required")
        return names


class ActiveUpdate(BaseModel):
    is_active: bool
