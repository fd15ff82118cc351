"""알림 Pydantic 요청/응답 스키마 정의.

Notification request/response schemas.
"""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class EmailRequest(BaseModel):
    """이메일 발송 요청 스키마.

    Attributes:
        to: 수신자 (Recipient)
        subject: 제목 (Subject)
        html: HTML 본문 (HTML body)
        from_email: 발신 주소 재지정 (Sender override, JSON key "from")
        reply_to: 회신 주소 (Reply-To address)
    """

    to: EmailStr
    subject: str = Field(min_length=1, max_length=255)
    html: str = Field(min_length=1)
    from_email: EmailStr | None = Field(default=None, alias="from")
    reply_to: EmailStr | None = None

    model_config = {"populate_by_name": True}


class EmailResult(BaseModel):
    message: str
    notification_id: str | None
    success: bool


class NotificationResponse(BaseModel):
    id: str
    recipient_email: str
    subject: str
    content: str
    kind: str
    status: str
    error: str | None
    sent_at: datetime
    is_read: bool
