"""공개 사이트 콘텐츠 Pydantic 요청/응답 스키마 정의.

Public site content request/response schemas: news, events, partners,
foundation info blocks, contact requests, and home page data.
"""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, model_validator

from foundation.models.content import ContactStatus, InfoType
from foundation.schemas.common import PartialUpdate


# === 뉴스 (News) 스키마 ===

class NewsCreate(BaseModel):
    """뉴스 생성 요청 스키마.

    News creation request. When slug is omitted it is derived from the title.

    Attributes:
        title: 제목 (Title)
        slug: URL 슬러그, 선택 (URL slug, optional, lowercase-dashed)
        body: 본문 (Article body)
        tags: 태그 목록 (Tag list)
        featured: 추천 여부 (Featured flag)
    """

    title: str = Field(min_length=1, max_length=255)
    slug: str | None = Field(default=None, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$", max_length=255)
    body: str = Field(min_length=1)
    image_url: str | None = None
    category: str | None = Field(default=None, max_length=100)
    tags: list[str] = []
    featured: bool = False


class NewsUpdate(PartialUpdate):
    """뉴스 수정 요청 스키마 (부분 업데이트)."""

    not_null = frozenset({"title", "body", "tags", "featured"})

    title: str | None = Field(default=None, min_length=1, max_length=255)
    slug: str | None = Field(default=None, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$", max_length=255)
    body: str | None = Field(default=None, min_length=1)
    image_url: str | None = None
    category: str | None = None
    tags: list[str] | None = None
    featured: bool | None = None


class NewsResponse(BaseModel):
    id: str
    title: str
    slug: str
    body: str
    image_url: str | None
    category: str | None
    tags: list[str]
    status: str
    published: bool
    published_at: datetime | None
    featured: bool
    view_count: int
    author_id: str | None
    author_name: str | None
    created_at: datetime
    updated_at: datetime


# === 행사 (Event) 스키마 ===

class EventCreate(BaseModel):
    """행사 생성 요청 스키마.

    Event creation request.

    Attributes:
        start_date / end_date: 시작/종료 일시 (end_date ≥ start_date)
        max_participants: 최대 참가자 수, 없으면 무제한 (Cap; None means unlimited)
        registration_deadline: 등록 마감 일시 (Registration deadline, optional)
    """

    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    start_date: datetime
    end_date: datetime | None = None
    location: str | None = Field(default=None, max_length=255)
    image_url: str | None = None
    event_type: str | None = Field(default=None, max_length=50)
    max_participants: int | None = Field(default=None, ge=1)
    registration_required: bool = False
    registration_deadline: datetime | None = None
    organizer: str | None = Field(default=None, max_length=255)

    @model_validator(mode="after")
    def _check_dates(self) -> "EventCreate":
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class EventUpdate(PartialUpdate):
    """행사 수정 요청 스키마 (부분 업데이트) — date order is checked against stored values."""

    not_null = frozenset({"title", "start_date", "registration_required"})

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    location: str | None = None
    image_url: str | None = None
    event_type: str | None = None
    max_participants: int | None = Field(default=None, ge=1)
    registration_required: bool | None = None
    registration_deadline: datetime | None = None
    organizer: str | None = None


class EventResponse(BaseModel):
    id: str
    title: str
    description: str | None
    start_date: datetime
    end_date: datetime | None
    location: str | None
    image_url: str | None
    event_type: str | None
    max_participants: int | None
    current_participants: int
    registration_required: bool
    registration_deadline: datetime | None
    status: str
    published: bool
    published_at: datetime | None
    organizer: str | None
    created_at: datetime


# === 파트너 (Partner) 스키마 ===

class PartnerCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    logo_url: str | None = None
    website: str | None = None
    sector: str | None = Field(default=None, max_length=100)
    phone: str | None = Field(default=None, max_length=30)
    email: EmailStr | None = None


class PartnerUpdate(PartialUpdate):
    not_null = frozenset({"name"})

    name: str | None = Field(default=None, min_length=1, max_length=255)
    logo_url: str | None = None
    website: str | None = None
    sector: str | None = None
    phone: str | None = None
    email: EmailStr | None = None


class PartnerResponse(BaseModel):
    id: str
    name: str
    logo_url: str | None
    website: str | None
    sector: str | None
    phone: str | None
    email: str | None
    created_at: datetime


# === 재단 소개 (Foundation info) 스키마 ===

class FoundationInfoCreate(BaseModel):
    """재단 소개 블록 생성 — display_order is assigned automatically."""

    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    info_type: InfoType
    is_active: bool = True


class FoundationInfoUpdate(PartialUpdate):
    not_null = frozenset({"title", "content", "info_type", "display_order", "is_active"})

    title: str | None = Field(default=None, min_length=1, max_length=255)
    content: str | None = Field(default=None, min_length=1)
    info_type: InfoType | None = None
    display_order: int | None = Field(default=None, ge=1)
    is_active: bool | None = None


class FoundationInfoResponse(BaseModel):
    id: str
    title: str
    content: str
    info_type: str
    display_order: int
    is_active: bool
    created_at: datetime


class FoundationInfoReorder(BaseModel):
    """유형 내 순서 변경 — New order of the blocks of one info type."""

    info_type: InfoType
    ids: list[str] = Field(min_length=1)


# === 문의 (Contact) 스키마 ===

class ContactCreate(BaseModel):
    """공개 문의 접수 요청 스키마 — Public contact form payload."""

    name: str = Field(min_length=2, max_length=120)
    email: EmailStr
    subject: str = Field(min_length=2, max_length=255)
    message: str = Field(min_length=5, max_length=5000)


class ContactStatusUpdate(BaseModel):
    status: ContactStatus


class ContactReply(BaseModel):
    response_message: str = Field(min_length=1, max_length=5000)


class ContactResponse(BaseModel):
    id: str
    name: str
    email: str
    subject: str
    message: str
    status: str
    response_message: str | None
    responded_at: datetime | None
    responded_by: str | None
    sender_ip: str | None
    created_at: datetime


# === 홈 화면 (Site info) 스키마 ===

class HomeResponse(BaseModel):
    mission: str
    stats: dict[str, int]


class SiteInfoUpdate(PartialUpdate):
    not_null = frozenset({"mission", "stats"})

    mission: str | None = Field(default=None, min_length=1)
    stats: dict[str, int] | None = None
    ministry_content: str | None = None


class SiteInfoResponse(BaseModel):
    id: str
    mission: str
    stats: dict[str, int]
    ministry_content: str | None
    updated_at: datetime

