"""알림 API 테스트 — 직접 발송, 발송 기록, 내 알림.

Notification API tests — Admin-triggered emails, the delivery log and
the employee's own notifications. SMTP is disabled unless a test
enables it, so emails are recorded with status LOGGED.
"""

from email.message import EmailMessage

import aiosmtplib
import pytest
from httpx import AsyncClient

from foundation.config import settings
from tests.conftest import auth_header

NOTIFY = "/api/v1/notify/email"
ADMIN_NOTIFICATIONS = "/api/v1/admin/notifications"
MY_NOTIFICATIONS = "/api/v1/app/my/notifications"

EMAIL = {
    "to": "jane@fondation.ma",
    "subject": "Rappel",
    "html": "<p>Merci de compléter votre dossier.</p>",
    "from": "rh@fondation.ma",
}


class TestManualEmail:
    """직접 발송 테스트."""

    async def test_send_logged(self, client: AsyncClient, admin_token):
        res = await client.post(NOTIFY, headers=auth_header(admin_token), json=EMAIL)
        assert res.status_code == 200
        data = res.json()
        assert data["success"] is True
        assert data["message"] == "Email sent successfully"
        assert data["notification_id"]

        res = await client.get(ADMIN_NOTIFICATIONS, headers=auth_header(admin_token))
        items = res.json()["items"]
        assert len(items) == 1
        assert items[0]["status"] == "LOGGED"
        assert items[0]["kind"] == "manual"
        assert items[0]["subject"] == "Rappel"

    async def test_invalid_recipient(self, client: AsyncClient, admin_token):
        res = await client.post(NOTIFY, headers=auth_header(admin_token), json={**EMAIL, "to": "nobody"})
        assert res.status_code == 422

    async def test_requires_admin(self, client: AsyncClient, employee_token):
        res = await client.post(NOTIFY, headers=auth_header(employee_token), json=EMAIL)
        assert res.status_code == 403
        res = await client.post(NOTIFY, json=EMAIL)
        assert res.status_code == 401


class TestNotificationLog:
    """발송 기록 테스트."""

    async def test_filters(self, client: AsyncClient, admin_token):
        await client.post(NOTIFY, headers=auth_header(admin_token), json=EMAIL)
        await client.post(NOTIFY, headers=auth_header(admin_token), json={**EMAIL, "to": "omar@fondation.ma"})

        res = await client.get(
            ADMIN_NOTIFICATIONS, headers=auth_header(admin_token), params={"recipient_email": "omar@fondation.ma"}
        )
        assert res.json()["total"] == 1

        res = await client.get(ADMIN_NOTIFICATIONS, headers=auth_header(admin_token), params={"status": "FAILED"})
        assert res.json()["total"] == 0

        res = await client.get(ADMIN_NOTIFICATIONS, headers=auth_header(admin_token), params={"kind": "manual"})
        assert res.json()["total"] == 2


class TestMyNotifications:
    """내 알림 테스트."""

    async def test_list_and_mark_read(self, client: AsyncClient, admin_token, employee_token, other_token):
        await client.post(NOTIFY, headers=auth_header(admin_token), json=EMAIL)

        res = await client.get(MY_NOTIFICATIONS, headers=auth_header(employee_token))
        items = res.json()["items"]
        assert len(items) == 1
        assert items[0]["is_read"] is False
        notification_id = items[0]["id"]

        res = await client.get(MY_NOTIFICATIONS, headers=auth_header(other_token))
        assert res.json()["total"] == 0

        res = await client.patch(f"{MY_NOTIFICATIONS}/{notification_id}/read", headers=auth_header(other_token))
        assert res.status_code == 403

        res = await client.patch(f"{MY_NOTIFICATIONS}/{notification_id}/read", headers=auth_header(employee_token))
        assert res.status_code == 200
        assert res.json()["is_read"] is True

    async def test_unknown_notification(self, client: AsyncClient, employee_token):
        res = await client.patch(
            f"{MY_NOTIFICATIONS}/00000000-0000-0000-0000-000000000000/read", headers=auth_header(employee_token)
        )
        assert res.status_code == 404


class TestSmtpDelivery:
    """SMTP 설정 시 발송 결과 테스트 — aiosmtplib.send is replaced by a recorder."""

    @pytest.fixture
    def outbox(self, monkeypatch) -> list[EmailMessage]:
        monkeypatch.setattr(settings, "SMTP_HOST", "smtp.fondation.ma")
        monkeypatch.setattr(settings, "SMTP_PORT", 2525)
        monkeypatch.setattr(settings, "SMTP_FROM_EMAIL", "noreply@fondation.ma")
        sent: list[EmailMessage] = []

        async def _record(message, **kwargs):
            sent.append(message)

        monkeypatch.setattr(aiosmtplib, "send", _record)
        return sent

    async def test_sent(self, client: AsyncClient, admin_token, outbox):
        res = await client.post(NOTIFY, headers=auth_header(admin_token), json=EMAIL)
        assert res.json()["success"] is True
        assert len(outbox) == 1
        assert outbox[0]["To"] == "jane@fondation.ma"
        assert outbox[0]["From"] == "Fondation <rh@fondation.ma>"

        res = await client.get(ADMIN_NOTIFICATIONS, headers=auth_header(admin_token))
        assert res.json()["items"][0]["status"] == "SENT"

    async def test_failed(self, client: AsyncClient, admin_token, outbox, monkeypatch):
        async def _refuse(message, **kwargs):
            raise aiosmtplib.SMTPException("550 mailbox unavailable")

        monkeypatch.setattr(aiosmtplib, "send", _refuse)
        res = await client.post(NOTIFY, headers=auth_header(admin_token), json=EMAIL)
        assert res.status_code == 200
        assert res.json()["success"] is False
        assert "550 mailbox unavailable" in res.json()["message"]

        res = await client.get(ADMIN_NOTIFICATIONS, headers=auth_header(admin_token), params={"status": "FAILED"})
        assert res.json()["items"][0]["error"] == "550 mailbox unavailable"

    async def test_line_breaks_in_subject(self, client: AsyncClient, admin_token, outbox):
        res = await client.post("/api/v1/public/contact", json={
            "name": "Salma",
            "email": "salma@example.ma",
            "subject": "Hi\r\nBcc: intruder@example.com",
            "message": "Bonjour, une question.",
        })
        assert res.status_code == 201
        assert len(outbox) == 1
        assert "\n" not in outbox[0]["Subject"]
        assert outbox[0]["Bcc"] is None

        res = await client.get(ADMIN_NOTIFICATIONS, headers=auth_header(admin_token), params={"kind": "contact"})
        assert res.json()["items"][0]["status"] == "SENT"
