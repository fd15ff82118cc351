"""지원 신청(Demande) Pydantic 요청/응답 스키마 정의.

Demande request/response schemas for the user workflow (draft, submit,
cancel, attachments) and the admin workflow (status updates, priority).
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from foundation.models.social import DemandeStatus, PriorityLevel


class DemandeCreate(BaseModel):
    """지원 신청 생성 요청 스키마.

    Creates a DRAFT demande against an active prestation.

    Attributes:
        prestation_id: 대상 지원 서비스 ID (Target prestation UUID)
        requested_amount: 신청 금액 (Requested amount, checked against the prestation bounds)
        justification: 신청 사유 (Reason for the request)
        documents: 제출 서류 이름 목록 (Names of supporting documents)
    """

    prestation_id: str
    requested_amount: Decimal | None = Field(default=None, ge=0)
    justification: str | None = Field(default=None, max_length=5000)
    documents: list[str] = []


class DemandeDraftUpdate(BaseModel):
    """초안 수정 요청 (DRAFT 상태에서만) — Partial update of a draft."""

    requested_amount: Decimal | None = Field(default=None, ge=0)
    justification: str | None = Field(default=None, max_length=5000)
    documents: list[str] | None = None


class DemandeStatusUpdate(BaseModel):
    """관리자 상태 변경 요청 스키마.

    Admin status change. Extra fields are used depending on the target:

    Attributes:
        status: 목표 상태 (IN_REVIEW, APPROVED, REJECTED, PAID, CANCELLED)
        approved_amount: 승인 금액, APPROVED 시 (defaults to the requested amount)
        rejection_reason: 거절 사유, REJECTED 시 필수 (Required when rejecting)
        payment_reference: 지급 참조 번호, PAID 시 (Payment reference)
        payment_date: 지급일, PAID 시 (defaults to now)
        admin_comment: 관리자 코멘트 (Included in the notification email)
    """

    status: DemandeStatus
    approved_amount: Decimal | None = Field(default=None, ge=0)
    rejection_reason: str | None = Field(default=None, max_length=2000)
    payment_reference: str | None = Field(default=None, max_length=100)
    payment_date: datetime | None = None
    admin_comment: str | None = Field(default=None, max_length=2000)


class DemandePriorityUpdate(BaseModel):
    priority_level: PriorityLevel


class DemandeResponse(BaseModel):
    id: str
    user_id: str
    user_email: str
    user_name: str
    employee_id: str | None
    prestation_id: str
    prestation_title: str
    status: str
    requested_amount: float | None
    approved_amount: float | None
    justification: str | None
    rejection_reason: str | None
    documents_uploaded: list[str]
    priority_level: str
    submitted_at: datetime | None
    processed_at: datetime | None
    processed_by: str | None
    processed_by_name: str | None
    expected_processing_date: datetime | None
    payment_reference: str | None
    payment_date: datetime | None
    admin_comment: str | None
    created_at: datetime
    updated_at: datetime


class AttachmentResponse(BaseModel):
    id: str
    demande_id: str
    filename: str
    url: str
    content_type: str | None
    size_bytes: int
    uploaded_at: datetime
