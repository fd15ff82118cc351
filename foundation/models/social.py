"""사회 지원 SQLAlchemy ORM 모델 정의.

Social aid ORM models: the prestation catalogue, the demandes (aid
requests) users file against it, their attachments, and avis (reviews).

Tables:
    - prestations: 지원 서비스 카탈로그 (Aid service catalogue)
    - demandes: 지원 신청 (Aid requests with status lifecycle)
    - attachments: 신청 첨부파일 (Files uploaded for a demande)
    - avis: 후기 (Moderated reviews)
"""

import enum
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from foundation.database import Base


class PrestationCategory(str, enum.Enum):
    LOGEMENT = "LOGEMENT"
    SANTE = "SANTE"
    EDUCATION = "EDUCATION"
    EMPLOI = "EMPLOI"
    FAMILLE = "FAMILLE"
    HANDICAP = "HANDICAP"
    SENIORS = "SENIORS"
    JEUNESSE = "JEUNESSE"
    CULTURE = "CULTURE"
    SPORT = "SPORT"
    AUTRE = "AUTRE"


class PrestationType(str, enum.Enum):
    AIDE_FINANCIERE = "AIDE_FINANCIERE"
    AIDE_MATERIELLE = "AIDE_MATERIELLE"
    AIDE_SERVICE = "AIDE_SERVICE"
    FORMATION = "FORMATION"
    ACCOMPAGNEMENT = "ACCOMPAGNEMENT"
    CONSEIL = "CONSEIL"
    SUBVENTION = "SUBVENTION"
    PRET = "PRET"
    BOURSE = "BOURSE"
    AUTRE = "AUTRE"


class DemandeStatus(str, enum.Enum):
    """지원 신청 상태 — Demande lifecycle status."""

    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"
    IN_REVIEW = "IN_REVIEW"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    PAID = "PAID"
    CANCELLED = "CANCELLED"


class PriorityLevel(str, enum.Enum):
    LOW = "LOW"
    NORMAL = "NORMAL"
    HIGH = "HIGH"
    URGENT = "URGENT"


class AvisStatus(str, enum.Enum):
    """후기 검수 상태 — Review moderation status."""

    PENDING = "PENDING"
    PUBLISHED = "PUBLISHED"
    REJECTED = "REJECTED"


class AvisType(str, enum.Enum):
    PRESTATION = "PRESTATION"
    SERVICE = "SERVICE"
    GENERAL = "GENERAL"


# 처리 대기 상태 — Statuses still waiting for an admin decision
PENDING_DEMANDE_STATUSES: tuple[str, ...] = (
    DemandeStatus.SUBMITTED.value,
    DemandeStatus.IN_REVIEW.value,
)

# 허용된 상태 전이 — Allowed demande status transitions
DEMANDE_TRANSITIONS: dict[str, frozenset[str]] = {
    DemandeStatus.DRAFT.value: frozenset({DemandeStatus.SUBMITTED.value, DemandeStatus.CANCELLED.value}),
    DemandeStatus.SUBMITTED.value: frozenset({
        DemandeStatus.IN_REVIEW.value,
        DemandeStatus.APPROVED.value,
        DemandeStatus.REJECTED.value,
        DemandeStatus.CANCELLED.value,
    }),
    DemandeStatus.IN_REVIEW.value: frozenset({
        DemandeStatus.APPROVED.value,
        DemandeStatus.REJECTED.value,
        DemandeStatus.CANCELLED.value,
    }),
    DemandeStatus.APPROVED.value: frozenset({DemandeStatus.PAID.value, DemandeStatus.CANCELLED.value}),
    DemandeStatus.REJECTED.value: frozenset({DemandeStatus.CANCELLED.value}),
    DemandeStatus.PAID.value: frozenset(),
    DemandeStatus.CANCELLED.value: frozenset(),
}

# 심사 결정 — Statuses that stamp processed_at / processed_by
DECISION_STATUSES: frozenset[str] = frozenset({DemandeStatus.APPROVED.value, DemandeStatus.REJECTED.value})


class Prestation(Base):
    """지원 서비스 카탈로그 항목.

    Catalogue entry describing an available aid service.

    Attributes:
        min_amount / max_amount: 신청 가능 금액 범위 (Requestable amount bounds, optional)
        max_requests_per_year: 연간 신청 한도 (Per-user yearly request cap, optional)
        processing_time_days: 예상 처리 기간 (Expected processing time in days)
        requires_documents: 제출 시 서류 필수 여부 (Documents required on submit)
        display_order: 공개 목록 정렬 순서 (Public list ordering)
    """

    __tablename__ = "prestations"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    short_description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    prestation_type: Mapped[str] = mapped_column(String(30), nullable=False)
    category: Mapped[str] = mapped_column(String(30), nullable=False, index=True)
    min_amount: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    max_amount: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    duration_label: Mapped[str | None] = mapped_column(String(100), nullable=True)
    conditions: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    requires_documents: Mapped[bool] = mapped_column(Boolean, default=False)
    required_documents: Mapped[str | None] = mapped_column(Text, nullable=True)
    eligibility_criteria: Mapped[str | None] = mapped_column(Text, nullable=True)
    processing_time_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    max_requests_per_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    display_order: Mapped[int] = mapped_column(Integer, default=1)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    demandes = relationship("Demande", back_populates="prestation")


class Demande(Base):
    """지원 신청 모델.

    Aid request filed by a user against a prestation. The requester's
    identity and the prestation title are copied at creation so the record
    stays readable after profile or catalogue edits.
    """

    __tablename__ = "demandes"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 신청자 스냅샷 — Requester snapshot
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    user_email: Mapped[str] = mapped_column(String(255), nullable=False)
    user_name: Mapped[str] = mapped_column(String(120), nullable=False)
    employee_id: Mapped[str | None] = mapped_column(String(20), nullable=True)
    prestation_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("prestations.id"), nullable=False, index=True)
    prestation_title: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default=DemandeStatus.DRAFT.value, index=True)
    requested_amount: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    approved_amount: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    justification: Mapped[str | None] = mapped_column(Text, nullable=True)
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    documents_uploaded: Mapped[list[str]] = mapped_column(JSON, default=list)
    priority_level: Mapped[str] = mapped_column(String(10), default=PriorityLevel.NORMAL.value)
    submitted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    processed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    processed_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    processed_by_name: Mapped[str | None] = mapped_column(String(120), nullable=True)
    expected_processing_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    payment_reference: Mapped[str | None] = mapped_column(String(100), nullable=True)
    payment_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    admin_comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    prestation = relationship("Prestation", back_populates="demandes")
    attachments = relationship("Attachment", back_populates="demande", cascade="all, delete-orphan")


class Attachment(Base):
    """신청 첨부파일 — File uploaded in support of a demande."""

    __tablename__ = "attachments"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    demande_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("demandes.id", ondelete="CASCADE"), nullable=False, index=True)
    filename: Mapped[str] = mapped_column(String(255), nullable=False)
    # 저장소 키 또는 URL — Storage key/URL returned by the storage service
    path: Mapped[str] = mapped_column(String(500), nullable=False)
    content_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    size_bytes: Mapped[int] = mapped_column(Integer, nullable=False)
    uploaded_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    demande = relationship("Demande", back_populates="attachments")


class Avis(Base):
    """후기 모델.

    Review of a prestation (or of a processed demande) submitted by a
    user. Only approved avis are shown on the public site.
    """

    __tablename__ = "avis"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    user_name: Mapped[str] = mapped_column(String(120), nullable=False)
    user_email: Mapped[str] = mapped_column(String(255), nullable=False)
    is_anonymous: Mapped[bool] = mapped_column(Boolean, default=False)
    prestation_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("prestations.id", ondelete="SET NULL"), nullable=True, index=True)
    demande_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("demandes.id", ondelete="SET NULL"), nullable=True)
    avis_type: Mapped[str] = mapped_column(String(20), default=AvisType.GENERAL.value)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), default=AvisStatus.PENDING.value, index=True)
    is_approved: Mapped[bool] = mapped_column(Boolean, default=False)
    is_featured: Mapped[bool] = mapped_column(Boolean, default=False)
    moderated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    approved_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    approved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    admin_response: Mapped[str | None] = mapped_column(Text, nullable=True)
    response_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
