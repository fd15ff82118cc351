"""지원 서비스(Prestation) Pydantic 요청/응답 스키마 정의.

Prestation catalogue request/response schemas.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from foundation.models.social import PrestationCategory, PrestationType
from foundation.schemas.common import PartialUpdate


class PrestationCreate(BaseModel):
    """지원 서비스 생성 요청 스키마.

    Prestation creation request. display_order is assigned automatically
    (max + 1). An inverted amount range is rejected
    by the service with 400.

    Attributes:
        prestation_type: 지원 유형 (Aid type, e.g. AIDE_FINANCIERE)
        category: 분야 (Domain, e.g. LOGEMENT)
        min_amount / max_amount: 신청 금액 범위 (Amount bounds, min ≤ max)
        processing_time_days: 예상 처리 기간(일) (Expected processing time)
        max_requests_per_year: 사용자당 연간 신청 한도 (Yearly cap per user)
    """

    title: str = Field(min_length=2, max_length=255)
    short_description: str | None = Field(default=None, max_length=500)
    description: str | None = None
    prestation_type: PrestationType
    category: PrestationCategory
    min_amount: Decimal | None = Field(default=None, ge=0)
    max_amount: Decimal | None = Field(default=None, ge=0)
    duration_label: str | None = Field(default=None, max_length=100)
    conditions: str | None = None
    is_active: bool = True
    requires_documents: bool = False
    required_documents: str | None = None
    eligibility_criteria: str | None = None
    processing_time_days: int | None = Field(default=None, ge=0)
    max_requests_per_year: int | None = Field(default=None, ge=1)
    image_url: str | None = None


class PrestationUpdate(PartialUpdate):
    """지원 서비스 수정 요청 스키마 (부분 업데이트) — bounds are re-checked in the service."""

    not_null = frozenset({"title", "prestation_type", "category", "is_active", "requires_documents", "display_order"})

    title: str | None = Field(default=None, min_length=2, max_length=255)
    short_description: str | None = Field(default=None, max_length=500)
    description: str | None = None
    prestation_type: PrestationType | None = None
    category: PrestationCategory | None = None
    min_amount: Decimal | None = Field(default=None, ge=0)
    max_amount: Decimal | None = Field(default=None, ge=0)
    duration_label: str | None = None
    conditions: str | None = None
    is_active: bool | None = None
    requires_documents: bool | None = None
    required_documents: str | None = None
    eligibility_criteria: str | None = None
    processing_time_days: int | None = Field(default=None, ge=0)
    max_requests_per_year: int | None = Field(default=None, ge=1)
    image_url: str | None = None
    display_order: int | None = Field(default=None, ge=1)


class PrestationResponse(BaseModel):
    id: str
    title: str
    short_description: str | None
    description: str | None
    prestation_type: str
    category: str
    min_amount: float | None
    max_amount: float | None
    duration_label: str | None
    conditions: str | None
    is_active: bool
    requires_documents: bool
    required_documents: str | None
    eligibility_criteria: str | None
    processing_time_days: int | None
    max_requests_per_year: int | None
    image_url: str | None
    display_order: int
    created_at: datetime


class PrestationRanking(BaseModel):
    """신청 건수 순위 항목 — Prestation with its demande count."""

    prestation: PrestationResponse
    demande_count: int
