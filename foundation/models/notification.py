"""알림 이메일 기록 모델.

Notification model — One row per outgoing email, whether it was sent
through SMTP, only logged (SMTP not configured), or failed.
"""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from foundation.database import Base


class NotificationStatus(str, enum.Enum):
    SENT = "SENT"
    LOGGED = "LOGGED"
    FAILED = "FAILED"


class Notification(Base):
    """알림 테이블.

    Attributes:
        recipient_email: 수신자 (Recipient address)
        subject / content: 제목과 HTML 본문 (Subject and HTML body)
        kind: 알림 종류 (contact, contact_reply, demande_status, news, event, manual)
        status: 발송 결과 (SENT, LOGGED, FAILED)
        error: 실패 사유 (SMTP error message when FAILED)
        is_read: 사용자 읽음 여부 (Read flag for the in-app inbox)
    """

    __tablename__ = "notifications"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    recipient_email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    kind: Mapped[str] = mapped_column(String(30), default="manual")
    status: Mapped[str] = mapped_column(String(10), default=NotificationStatus.LOGGED.value)
    error: Mapped[str | None] = mapped_column(Text, nullable=True)
    sent_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    is_read: Mapped[bool] = mapped_column(Boolean, default=False)
