"""SMTP 발송 (aiosmtplib).

Low-level sender used by the notification service, which decides whether
SMTP is configured and records the outcome. Connection settings come
from the SMTP_* variables.
"""

from email.message import EmailMessage

import aiosmtplib

from foundation.config import settings


def _header(value: str) -> str:
    """헤더 값 한 줄로 — CR/LF would be refused by EmailMessage or inject headers."""
    return " ".join(value.splitlines()).strip()


def build_message(
    to: str,
    subject: str,
    html: str,
    text: str | None = None,
    reply_to: str | None = None,
    from_email: str | None = None,
) -> EmailMessage:
    """HTML 메일 구성 — With a text part first when text is given."""
    message = EmailMessage()
    message["From"] = _header(f"{settings.SMTP_FROM_NAME} <{from_email or settings.SMTP_FROM_EMAIL}>")
    message["To"] = _header(to)
    message["Subject"] = _header(subject)
    if reply_to:
        message["Reply-To"] = _header(reply_to)

    if text:
        message.set_content(text)
        message.add_alternative(html, subtype="html")
    else:
        message.set_content(html, subtype="html")
    return message


async def send_email(to: str, subject: str, html: str, **headers: str | None) -> None:
    """메일 한 통 발송.

    Args:
        headers: text, reply_to, from_email (build_message 참고)

    Raises:
        aiosmtplib.SMTPException: 연결, 인증, 수신 거부 등 SMTP 오류
    """
    await aiosmtplib.send(
        build_message(to, subject, html, **headers),
        hostname=settings.SMTP_HOST,
        port=settings.SMTP_PORT,
        username=settings.SMTP_USER or None,
        password=settings.SMTP_PASSWORD or None,
        start_tls=True,
    )
