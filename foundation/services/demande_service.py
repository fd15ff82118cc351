"""지원 신청(Demande) 서비스 — 신청 작성, 제출, 심사 워크플로우.

Demande Service — Business logic for the social aid request lifecycle:
drafting against a prestation (yearly limit, amount bounds), submission,
cancellation, supporting attachments, and the admin decision workflow
with email notification of the requester.

Status flow:
    DRAFT → SUBMITTED → IN_REVIEW → APPROVED → PAID
                      ↘ APPROVED / REJECTED
    Any non-terminal status → CANCELLED
"""

import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from io import BytesIO
from typing import Any
from uuid import UUID

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.config import settings
from foundation.models.social import (
    DECISION_STATUSES,
    DEMANDE_TRANSITIONS,
    Attachment,
    Demande,
    DemandeStatus,
    Prestation,
)
from foundation.models.user import ROLE_ADMIN, User
from foundation.repositories.attachment_repository import attachment_repository
from foundation.repositories.demande_repository import demande_repository
from foundation.repositories.prestation_repository import prestation_repository
from foundation.schemas.demande import (
    AttachmentResponse,
    DemandeCreate,
    DemandeDraftUpdate,
    DemandeResponse,
    DemandeStatusUpdate,
)
from foundation.services.notification_service import notification_service
from foundation.services.storage_service import storage_service
from foundation.utils.dates import utcnow
from foundation.utils.exceptions import BadRequestError, ForbiddenError, NotFoundError
from foundation.utils.ids import parse_uuid
from foundation.utils.pagination import Page, build_page

logger = logging.getLogger(__name__)

# 첨부파일 허용 확장자 — Allowed attachment extensions
ATTACHMENT_EXTENSIONS: frozenset[str] = frozenset({"pdf", "jpg", "jpeg", "png", "doc", "docx"})

# 더 이상 변경할 수 없는 상태 — Statuses that accept no further change
TERMINAL_STATUSES: frozenset[str] = frozenset({DemandeStatus.PAID.value, DemandeStatus.CANCELLED.value})


def _as_float(value: Decimal | None) -> float | None:
    return float(value) if value is not None else None


class DemandeService:
    """지원 신청 비즈니스 로직을 처리하는 서비스.

    Service handling demande business logic for both the requesting
    employee and the admin back office.
    """

    def _to_response(self, demande: Demande) -> DemandeResponse:
        return DemandeResponse(
            id=str(demande.id),
            user_id=str(demande.user_id),
            user_email=demande.user_email,
            user_name=demande.user_name,
            employee_id=demande.employee_id,
            prestation_id=str(demande.prestation_id),
            prestation_title=demande.prestation_title,
            status=demande.status,
            requested_amount=_as_float(demande.requested_amount),
            approved_amount=_as_float(demande.approved_amount),
            justification=demande.justification,
            rejection_reason=demande.rejection_reason,
            documents_uploaded=list(demande.documents_uploaded or []),
            priority_level=demande.priority_level,
            submitted_at=demande.submitted_at,
            processed_at=demande.processed_at,
            processed_by=str(demande.processed_by) if demande.processed_by else None,
            processed_by_name=demande.processed_by_name,
            expected_processing_date=demande.expected_processing_date,
            payment_reference=demande.payment_reference,
            payment_date=demande.payment_date,
            admin_comment=demande.admin_comment,
            created_at=demande.created_at,
            updated_at=demande.updated_at,
        )

    def _to_attachment_response(self, attachment: Attachment) -> AttachmentResponse:
        return AttachmentResponse(
            id=str(attachment.id),
            demande_id=str(attachment.demande_id),
            filename=attachment.filename,
            url=attachment.path,
            content_type=attachment.content_type,
            size_bytes=attachment.size_bytes,
            uploaded_at=attachment.uploaded_at,
        )

    async def _get_or_404(self, db: AsyncSession, demande_id: UUID) -> Demande:
        demande: Demande | None = await demande_repository.get_by_id(db, demande_id)
        if demande is None:
            raise NotFoundError("Demande not found")
        return demande

    async def _get_owned(self, db: AsyncSession, demande_id: UUID, user: User) -> Demande:
        """본인 신청 조회 — 404 if missing, 403 if owned by someone else."""
        demande: Demande = await self._get_or_404(db, demande_id)
        if demande.user_id != user.id:
            raise ForbiddenError("This demande belongs to another user")
        return demande

    def _check_amount(self, prestation: Prestation, amount: Decimal | None) -> None:
        """신청 금액이 지원 서비스 범위 안에 있는지 검증합니다.

        Check a requested amount against the prestation bounds. A missing
        amount is accepted; each bound is only enforced when set.

        Raises:
            BadRequestError: 범위를 벗어난 금액 (Amount out of bounds)
        """
        if amount is None:
            return
        if prestation.min_amount is not None and amount < prestation.min_amount:
            raise BadRequestError(f"Requested amount is below the minimum ({prestation.min_amount})")
        if prestation.max_amount is not None and amount > prestation.max_amount:
            raise BadRequestError(f"Requested amount exceeds the maximum ({prestation.max_amount})")

    # --- 신청자 — Requesting user ---

    async def create_demande(self, db: AsyncSession, user: User, data: DemandeCreate) -> DemandeResponse:
        """지원 신청 초안을 생성합니다.

        Create a DRAFT demande for the current user.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user: 신청자 (Requesting user)
            data: 신청 데이터 (Demande creation data)

        Returns:
            DemandeResponse: 생성된 초안 (Created draft)

        Raises:
            NotFoundError: 지원 서비스가 없을 때 (Prestation not found)
            BadRequestError: 비활성 지원 서비스, 연간 한도 초과, 금액 범위 위반
                             (Inactive prestation, yearly limit reached, amount out of bounds)
        """
        prestation_id: UUID = parse_uuid(data.prestation_id, "prestation_id")
        prestation: Prestation | None = await prestation_repository.get_by_id(db, prestation_id)
        if prestation is None:
            raise NotFoundError("Prestation not found")
        if not prestation.is_active:
            raise BadRequestError("Prestation is not active")

        # 연간 신청 한도 — Yearly limit over the current calendar year, every status counted
        if prestation.max_requests_per_year is not None:
            now: datetime = utcnow()
            year_start: datetime = datetime(now.year, 1, 1, tzinfo=timezone.utc)
            used: int = await demande_repository.count_user_requests_since(
                db, user.id, prestation.id, year_start
            )
            if used >= prestation.max_requests_per_year:
                raise BadRequestError("Yearly request limit reached for this prestation")

        self._check_amount(prestation, data.requested_amount)

        demande: Demande = await demande_repository.create(
            db,
            {
                "user_id": user.id,
                "user_email": user.email,
                "user_name": user.full_name,
                "employee_id": user.matricule,
                "prestation_id": prestation.id,
                "prestation_title": prestation.title,
                "status": DemandeStatus.DRAFT.value,
                "requested_amount": data.requested_amount,
                "justification": data.justification,
                "documents_uploaded": list(data.documents),
            },
        )
        logger.info("Demande created id=%s user=%s prestation=%s", demande.id, user.id, prestation.id)
        return self._to_response(demande)

    async def update_draft(
        self,
        db: AsyncSession,
        demande_id: UUID,
        user: User,
        data: DemandeDraftUpdate,
    ) -> DemandeResponse:
        """초안 수정 — owner only, DRAFT only, amount re-checked."""
        demande: Demande = await self._get_owned(db, demande_id, user)
        if demande.status != DemandeStatus.DRAFT.value:
            raise BadRequestError("Only draft demandes can be modified")

        update_data: dict[str, Any] = data.model_dump(exclude_unset=True)
        if "requested_amount" in update_data:
            prestation: Prestation | None = await prestation_repository.get_by_id(db, demande.prestation_id)
            if prestation is not None:
                self._check_amount(prestation, update_data["requested_amount"])
        if "documents" in update_data:
            update_data["documents_uploaded"] = list(update_data.pop("documents") or [])

        demande = await demande_repository.apply(db, demande, update_data)
        return self._to_response(demande)

    async def submit(self, db: AsyncSession, demande_id: UUID, user: User) -> DemandeResponse:
        """초안을 제출합니다.

        Submit a draft: sets SUBMITTED, submitted_at and the expected
        processing date derived from the prestation's processing time.

        Raises:
            ForbiddenError: 본인 신청이 아닐 때 (Not the owner)
            BadRequestError: 초안이 아니거나 필수 서류 누락
                             (Not a draft, or required documents missing)
        """
        demande: Demande = await self._get_owned(db, demande_id, user)
        if demande.status != DemandeStatus.DRAFT.value:
            raise BadRequestError("Only draft demandes can be submitted")

        prestation: Prestation | None = await prestation_repository.get_by_id(db, demande.prestation_id)
        if prestation is not None and prestation.requires_documents and not demande.documents_uploaded:
            raise BadRequestError("Supporting documents are required for this prestation")

        now: datetime = utcnow()
        update_data: dict[str, Any] = {
            "status": DemandeStatus.SUBMITTED.value,
            "submitted_at": now,
        }
        if prestation is not None and prestation.processing_time_days is not None:
            update_data["expected_processing_date"] = now + timedelta(days=prestation.processing_time_days)

        demande = await demande_repository.apply(db, demande, update_data)
        logger.info("Demande submitted id=%s", demande.id)
        return self._to_response(demande)

    async def cancel(self, db: AsyncSession, demande_id: UUID, user: User) -> DemandeResponse:
        """신청 취소 — owner only, not from PAID or CANCELLED."""
        demande: Demande = await self._get_owned(db, demande_id, user)
        if demande.status in TERMINAL_STATUSES:
            raise BadRequestError(f"Cannot cancel a demande in status {demande.status}")
        demande = await demande_repository.apply(db, demande, {"status": DemandeStatus.CANCELLED.value})
        return self._to_response(demande)

    async def delete_draft(self, db: AsyncSession, demande_id: UUID, user: User) -> None:
        demande: Demande = await self._get_owned(db, demande_id, user)
        if demande.status != DemandeStatus.DRAFT.value:
            raise BadRequestError("Only draft demandes can be deleted")
        await demande_repository.delete(db, demande.id)

    async def get_my_demande(self, db: AsyncSession, demande_id: UUID, user: User) -> DemandeResponse:
        return self._to_response(await self._get_owned(db, demande_id, user))

    async def list_my_demandes(
        self,
        db: AsyncSession,
        user: User,
        status: DemandeStatus | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> Page:
        query = demande_repository.build_user_query(user.id, status.value if status else None)
        items, total = await demande_repository.get_paginated(db, query, page, per_page)
        return build_page([self._to_response(d) for d in items], total, page, per_page)

    # --- 첨부파일 — Attachments ---

    async def add_attachment(
        self,
        db: AsyncSession,
        demande_id: UUID,
        user: User,
        filename: str | None,
        content: bytes,
        content_type: str | None = None,
    ) -> AttachmentResponse:
        """신청에 첨부파일을 추가합니다.

        Store a supporting file for one of the caller's demandes and add
        its name to documents_uploaded.

        Raises:
            ForbiddenError: 본인 신청이 아닐 때 (Not the owner)
            BadRequestError: 종료된 신청, 허용되지 않은 형식, 크기 초과
                             (Terminal status, extension not allowed, file too large)
        """
        demande: Demande = await self._get_owned(db, demande_id, user)
        if demande.status in TERMINAL_STATUSES:
            raise BadRequestError(f"Cannot add attachments to a demande in status {demande.status}")

        ext: str = storage_service.validate_upload(
            filename, len(content), ATTACHMENT_EXTENSIONS, settings.ATTACHMENT_MAX_BYTES
        )
        url: str = await storage_service.save(f"demandes/{demande.id}", ext, content, content_type)
        name: str = filename or f"document.{ext}"

        attachment: Attachment = await attachment_repository.create(
            db,
            {
                "demande_id": demande.id,
                "filename": name,
                "path": url,
                "content_type": content_type,
                "size_bytes": len(content),
            },
        )
        # JSON 컬럼은 새 리스트로 교체해야 변경이 감지됨 (Reassign so the JSON change is tracked)
        await demande_repository.apply(
            db, demande, {"documents_uploaded": [*(demande.documents_uploaded or []), name]}
        )
        logger.info("Attachment added demande=%s file=%s size=%d", demande.id, name, len(content))
        return self._to_attachment_response(attachment)

    async def list_attachments(self, db: AsyncSession, demande_id: UUID, user: User) -> list[AttachmentResponse]:
        """첨부파일 목록 — visible to the owner and to admins."""
        demande: Demande = await self._get_or_404(db, demande_id)
        if demande.user_id != user.id and not user.has_role(ROLE_ADMIN):
            raise ForbiddenError("This demande belongs to another user")
        attachments = await attachment_repository.get_by_demande(db, demande.id)
        return [self._to_attachment_response(a) for a in attachments]

    # --- 관리자 — Administration ---

    async def update_status(
        self,
        db: AsyncSession,
        demande_id: UUID,
        admin: User,
        data: DemandeStatusUpdate,
    ) -> DemandeResponse:
        """신청 상태를 변경합니다 (관리자 심사).

        Move a demande to a new status following the transition table,
        record who decided it (approval or rejection) and email the requester.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            demande_id: 신청 UUID (Demande UUID)
            admin: 처리 관리자 (Processing admin)
            data: 상태 변경 데이터 (Status change payload)

        Returns:
            DemandeResponse: 변경된 신청 (Updated demande)

        Raises:
            NotFoundError: 신청이 없을 때 (Demande not found)
            BadRequestError: 허용되지 않은 전이, 거절 사유 누락
                             (Illegal transition, missing rejection reason)
        """
        demande: Demande = await self._get_or_404(db, demande_id)
        target: str = data.status.value
        current: str = demande.status

        if target == DemandeStatus.SUBMITTED.value or target not in DEMANDE_TRANSITIONS.get(current, frozenset()):
            raise BadRequestError(f"Cannot change status from {current} to {target}")

        now: datetime = utcnow()
        update_data: dict[str, Any] = {"status": target}
        # 처리 시각/처리자는 승인 또는 거절 결정 때만 기록
        if target in DECISION_STATUSES:
            update_data.update(processed_at=now, processed_by=admin.id, processed_by_name=admin.full_name)
        if data.admin_comment is not None:
            update_data["admin_comment"] = data.admin_comment

        if target == DemandeStatus.APPROVED.value:
            update_data["approved_amount"] = (
                data.approved_amount if data.approved_amount is not None else demande.requested_amount
            )
        elif target == DemandeStatus.REJECTED.value:
            if not data.rejection_reason or not data.rejection_reason.strip():
                raise BadRequestError("A rejection reason is required")
            update_data["rejection_reason"] = data.rejection_reason
        elif target == DemandeStatus.PAID.value:
            update_data["payment_reference"] = data.payment_reference
            update_data["payment_date"] = data.payment_date or now

        demande = await demande_repository.apply(db, demande, update_data)
        await notification_service.notify_demande_status(db, demande)
        logger.info("Demande status changed id=%s %s -> %s by=%s", demande.id, current, target, admin.email)
        return self._to_response(demande)

    async def set_priority(self, db: AsyncSession, demande_id: UUID, priority_level: str) -> DemandeResponse:
        demande: Demande = await self._get_or_404(db, demande_id)
        demande = await demande_repository.apply(db, demande, {"priority_level": priority_level})
        return self._to_response(demande)

    async def get_demande(self, db: AsyncSession, demande_id: UUID) -> DemandeResponse:
        return self._to_response(await self._get_or_404(db, demande_id))

    async def delete_demande(self, db: AsyncSession, demande_id: UUID) -> None:
        if not await demande_repository.delete(db, demande_id):
            raise NotFoundError("Demande not found")

    async def list_demandes(
        self,
        db: AsyncSession,
        status: DemandeStatus | None = None,
        email: str | None = None,
        prestation_id: UUID | None = None,
        q: str | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> Page:
        query = demande_repository.build_admin_query(status.value if status else None, email, prestation_id, q)
        items, total = await demande_repository.get_paginated(db, query, page, per_page)
        return build_page([self._to_response(d) for d in items], total, page, per_page)

    async def list_pending(self, db: AsyncSession, page: int = 1, per_page: int = 20) -> Page:
        query = demande_repository.build_pending_query()
        items, total = await demande_repository.get_paginated(db, query, page, per_page)
        return build_page([self._to_response(d) for d in items], total, page, per_page)

    async def list_overdue(self, db: AsyncSession) -> list[DemandeResponse]:
        return [self._to_response(d) for d in await demande_repository.get_overdue(db, utcnow())]

    async def list_due_soon(self, db: AsyncSession, days: int = 3) -> list[DemandeResponse]:
        """기한 임박 신청 — Pending demandes due within the next `days` days."""
        now: datetime = utcnow()
        demandes = await demande_repository.get_due_between(db, now, now + timedelta(days=days))
        return [self._to_response(d) for d in demandes]

    async def export_excel(
        self,
        db: AsyncSession,
        status: DemandeStatus | None = None,
        email: str | None = None,
        prestation_id: UUID | None = None,
        q: str | None = None,
    ) -> bytes:
        """필터링된 신청 목록을 Excel 파일로 내보내기."""
        query = demande_repository.build_admin_query(status.value if status else None, email, prestation_id, q)
        demandes = (await db.execute(query)).scalars().all()

        wb = Workbook()
        ws = wb.active
        ws.title = "Demandes"

        header_font = Font(bold=True, color="FFFFFF", size=11)
        header_fill = PatternFill(start_color="2D3436", end_color="2D3436", fill_type="solid")
        headers = [
            "Reference", "Employee", "Matricule", "Email", "Prestation", "Status", "Priority",
            "Requested", "Approved", "Submitted", "Processed", "Processed By", "Payment Ref",
        ]
        for col_idx, h in enumerate(headers, 1):
            cell = ws.cell(row=1, column=col_idx, value=h)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = Alignment(horizontal="center")

        for d in demandes:
            ws.append([
                str(d.id),
                d.user_name,
                d.employee_id or "",
                d.user_email,
                d.prestation_title,
                d.status,
                d.priority_level,
                _as_float(d.requested_amount),
                _as_float(d.approved_amount),
                d.submitted_at.isoformat() if d.submitted_at else "",
                d.processed_at.isoformat() if d.processed_at else "",
                d.processed_by_name or "",
                d.payment_reference or "",
            ])

        for i, w in enumerate([38, 22, 12, 28, 30, 12, 10, 12, 12, 22, 22, 22, 16], 1):
            ws.column_dimensions[ws.cell(row=1, column=i).column_letter].width = w

        buffer = BytesIO()
        wb.save(buffer)
        return buffer.getvalue()


# 싱글턴 인스턴스 — Singleton instance
demande_service: DemandeService = DemandeService()
