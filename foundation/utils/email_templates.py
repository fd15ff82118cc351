"""알림 이메일 HTML 템플릿.

HTML bodies for outgoing notification emails. Every user-supplied value
is escaped before being interpolated.
"""

from html import escape

# 데만드 상태별 색상 — Badge colour per demande status
STATUS_COLORS: dict[str, str] = {
    "APPROVED": "#28a745",
    "REJECTED": "#dc3545",
    "IN_REVIEW": "#ffc107",
}
DEFAULT_STATUS_COLOR: str = "#6c757d"


def status_color(status: str) -> str:
    return STATUS_COLORS.get(status.upper(), DEFAULT_STATUS_COLOR)


def _wrap(body: str) -> str:
    return f"<html><body style=\"font-family: Arial, sans-serif;\">{body}</body></html>"


def contact_form_email(from_name: str, from_email: str, subject: str, message: str) -> tuple[str, str]:
    """문의 접수 알림 (support 수신) — New contact form submission."""
    html = _wrap(
        "<h2>New Contact Form Submission</h2>"
        f"<p><strong>From:</strong> {escape(from_name)} ({escape(from_email)})</p>"
        f"<p><strong>Subject:</strong> {escape(subject)}</p>"
        "<p><strong>Message:</strong></p>"
        "<div style=\"background-color: #f5f5f5; padding: 15px; border-left: 4px solid #007bff;\">"
        f"{escape(message)}</div>"
        "<p><em>This email was sent from the foundation contact form.</em></p>"
    )
    return f"New Contact Form Submission: {subject}", html


def contact_reply_email(name: str, subject: str, response_message: str) -> tuple[str, str]:
    """문의 답변 — Reply to a contact request."""
    html = _wrap(
        f"<p>Bonjour {escape(name)},</p>"
        f"<p>Suite à votre message « {escape(subject)} », voici notre réponse :</p>"
        "<div style=\"background-color: #f5f5f5; padding: 15px; border-left: 4px solid #28a745;\">"
        f"{escape(response_message)}</div>"
        "<p><em>La Fondation</em></p>"
    )
    return f"Re: {subject}", html


def demande_status_email(
    prestation_title: str,
    status: str,
    admin_comment: str | None = None,
) -> tuple[str, str]:
    """데만드 상태 변경 알림 — Demande status update."""
    comment_html: str = (
        f"<p><strong>Admin Comment:</strong> {escape(admin_comment)}</p>" if admin_comment else ""
    )
    html = _wrap(
        "<h2>Your demande status has been updated</h2>"
        f"<p><strong>Prestation:</strong> {escape(prestation_title)}</p>"
        "<p><strong>New Status:</strong> "
        f"<span style=\"color: {status_color(status)}; font-weight: bold;\">{escape(status)}</span></p>"
        f"{comment_html}"
        "<p>You can view the details of your demande in your account dashboard.</p>"
        "<p><em>Thank you for using our services.</em></p>"
    )
    return "Your demande status has been updated", html


def news_published_email(title: str, url: str) -> tuple[str, str]:
    """새 뉴스 게시 알림 — New article published."""
    html = _wrap(
        "<h2>New article published</h2>"
        f"<p>{escape(title)}</p>"
        f"<p><a href=\"{escape(url, quote=True)}\">Read the article</a></p>"
    )
    return f"New article published: {title}", html


def event_published_email(title: str, event_date: str, url: str) -> tuple[str, str]:
    """새 이벤트 게시 알림 — New event published."""
    html = _wrap(
        "<h2>New event</h2>"
        f"<p><strong>{escape(title)}</strong></p>"
        f"<p><strong>Date:</strong> {escape(event_date)}</p>"
        f"<p><a href=\"{escape(url, quote=True)}\">See the event</a></p>"
    )
    return f"New event: {title}", html
