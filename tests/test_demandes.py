"""지원 신청 API 테스트 — 신청자 워크플로우와 관리자 심사.

Demande API tests — Employee workflow (draft, submit, cancel,
attachments) and the admin decision workflow with notifications.
"""

from datetime import timedelta
from io import BytesIO
from uuid import UUID

import pytest
from fastapi import UploadFile
from httpx import AsyncClient

from foundation.config import settings
from foundation.models.social import Demande
from foundation.services.storage_service import storage_service
from foundation.utils.exceptions import BadRequestError
from foundation.utils.dates import utcnow
from tests.conftest import auth_header

MY_DEMANDES = "/api/v1/app/my/demandes"
ADMIN_DEMANDES = "/api/v1/admin/demandes"


async def _create(client: AsyncClient, token: str, prestation, **fields) -> dict:
    payload = {"prestation_id": str(prestation.id), "requested_amount": "400", "justification": "Loyer impayé"}
    payload.update(fields)
    res = await client.post(MY_DEMANDES, headers=auth_header(token), json=payload)
    assert res.status_code == 201, res.text
    return res.json()


async def _submitted(client: AsyncClient, token: str, prestation, **fields) -> dict:
    demande = await _create(client, token, prestation, **fields)
    res = await client.post(f"{MY_DEMANDES}/{demande['id']}/submit", headers=auth_header(token))
    assert res.status_code == 200, res.text
    return res.json()


async def _set_status(client: AsyncClient, token: str, demande_id: str, **payload):
    return await client.patch(f"{ADMIN_DEMANDES}/{demande_id}/status", headers=auth_header(token), json=payload)


class TestCreateDemande:
    """신청 생성 테스트."""

    async def test_create_draft(self, client: AsyncClient, employee_token, prestation):
        data = await _create(client, employee_token, prestation)
        assert data["status"] == "DRAFT"
        assert data["requested_amount"] == 400.0
        assert data["user_email"] == "jane@fondation.ma"
        assert data["user_name"] == "Jane Doe"
        assert data["employee_id"] == "EMP001"
        assert data["prestation_title"] == "Aide au logement"
        assert data["priority_level"] == "NORMAL"

    @pytest.mark.parametrize("amount", ["50", "1500"])
    async def test_amount_out_of_bounds(self, client: AsyncClient, employee_token, prestation, amount):
        res = await client.post(MY_DEMANDES, headers=auth_header(employee_token), json={
            "prestation_id": str(prestation.id), "requested_amount": amount,
        })
        assert res.status_code == 400

    async def test_yearly_limit(self, client: AsyncClient, employee_token, other_token, prestation):
        await _create(client, employee_token, prestation)
        await _create(client, employee_token, prestation)
        res = await client.post(MY_DEMANDES, headers=auth_header(employee_token), json={
            "prestation_id": str(prestation.id),
        })
        assert res.status_code == 400
        assert "limit" in res.json()["detail"]

        # 다른 사용자의 한도는 별개 (Limits are per user)
        await _create(client, other_token, prestation)

    async def test_invalid_prestation_id(self, client: AsyncClient, employee_token):
        res = await client.post(MY_DEMANDES, headers=auth_header(employee_token), json={"prestation_id": "abc"})
        assert res.status_code == 400

    async def test_unknown_prestation(self, client: AsyncClient, employee_token):
        res = await client.post(MY_DEMANDES, headers=auth_header(employee_token), json={
            "prestation_id": "00000000-0000-0000-0000-000000000000",
        })
        assert res.status_code == 404

    async def test_inactive_prestation(self, client: AsyncClient, db, employee_token, prestation):
        prestation.is_active = False
        await db.commit()
        res = await client.post(MY_DEMANDES, headers=auth_header(employee_token), json={
            "prestation_id": str(prestation.id),
        })
        assert res.status_code == 400


class TestDemandeWorkflow:
    """신청자 워크플로우 테스트."""

    async def test_update_draft(self, client: AsyncClient, employee_token, prestation):
        demande = await _create(client, employee_token, prestation)
        res = await client.put(
            f"{MY_DEMANDES}/{demande['id']}",
            headers=auth_header(employee_token),
            json={"requested_amount": "800", "documents": ["bail.pdf"]},
        )
        assert res.status_code == 200
        assert res.json()["requested_amount"] == 800.0
        assert res.json()["documents_uploaded"] == ["bail.pdf"]

        res = await client.put(
            f"{MY_DEMANDES}/{demande['id']}",
            headers=auth_header(employee_token),
            json={"requested_amount": "2000"},
        )
        assert res.status_code == 400

    async def test_submit_sets_dates(self, client: AsyncClient, employee_token, prestation):
        data = await _submitted(client, employee_token, prestation)
        assert data["status"] == "SUBMITTED"
        assert data["submitted_at"] is not None
        assert data["expected_processing_date"] is not None

    async def test_submitted_cannot_be_edited(self, client: AsyncClient, employee_token, prestation):
        demande = await _submitted(client, employee_token, prestation)
        res = await client.put(
            f"{MY_DEMANDES}/{demande['id']}", headers=auth_header(employee_token), json={"justification": "x"}
        )
        assert res.status_code == 400
        res = await client.post(f"{MY_DEMANDES}/{demande['id']}/submit", headers=auth_header(employee_token))
        assert res.status_code == 400
        res = await client.delete(f"{MY_DEMANDES}/{demande['id']}", headers=auth_header(employee_token))
        assert res.status_code == 400

    async def test_cancel(self, client: AsyncClient, employee_token, prestation):
        demande = await _submitted(client, employee_token, prestation)
        res = await client.post(f"{MY_DEMANDES}/{demande['id']}/cancel", headers=auth_header(employee_token))
        assert res.json()["status"] == "CANCELLED"

        res = await client.post(f"{MY_DEMANDES}/{demande['id']}/cancel", headers=auth_header(employee_token))
        assert res.status_code == 400

    async def test_submit_requires_documents(self, client: AsyncClient, db, employee_token, prestation, uploads_dir):
        prestation.requires_documents = True
        await db.flush()
        demande = await _create(client, employee_token, prestation)

        res = await client.post(f"{MY_DEMANDES}/{demande['id']}/submit", headers=auth_header(employee_token))
        assert res.status_code == 400
        assert res.json()["detail"] == "Supporting documents are required for this prestation"

        await client.post(
            f"{MY_DEMANDES}/{demande['id']}/attachments",
            headers=auth_header(employee_token),
            files={"file": ("bail.pdf", b"%PDF-1.4 test", "application/pdf")},
        )
        res = await client.post(f"{MY_DEMANDES}/{demande['id']}/submit", headers=auth_header(employee_token))
        assert res.status_code == 200
        assert res.json()["status"] == "SUBMITTED"

    async def test_paid_cannot_be_cancelled(self, client: AsyncClient, employee_token, admin_token, prestation):
        demande = await _submitted(client, employee_token, prestation)
        await _set_status(client, admin_token, demande["id"], status="APPROVED")
        await _set_status(client, admin_token, demande["id"], status="PAID", payment_reference="VIR-2025-002")

        res = await client.post(f"{MY_DEMANDES}/{demande['id']}/cancel", headers=auth_header(employee_token))
        assert res.status_code == 400
        res = await client.get(f"{MY_DEMANDES}/{demande['id']}", headers=auth_header(employee_token))
        assert res.json()["status"] == "PAID"

    async def test_delete_draft(self, client: AsyncClient, employee_token, prestation):
        demande = await _create(client, employee_token, prestation)
        res = await client.delete(f"{MY_DEMANDES}/{demande['id']}", headers=auth_header(employee_token))
        assert res.status_code == 200
        res = await client.get(f"{MY_DEMANDES}/{demande['id']}", headers=auth_header(employee_token))
        assert res.status_code == 404

    async def test_other_user_forbidden(self, client: AsyncClient, employee_token, other_token, prestation):
        demande = await _create(client, employee_token, prestation)
        res = await client.get(f"{MY_DEMANDES}/{demande['id']}", headers=auth_header(other_token))
        assert res.status_code == 403
        res = await client.post(f"{MY_DEMANDES}/{demande['id']}/submit", headers=auth_header(other_token))
        assert res.status_code == 403

    async def test_list_mine(self, client: AsyncClient, employee_token, other_token, prestation):
        await _create(client, employee_token, prestation)
        await _submitted(client, other_token, prestation)

        res = await client.get(MY_DEMANDES, headers=auth_header(employee_token))
        assert res.json()["total"] == 1

        res = await client.get(MY_DEMANDES, headers=auth_header(other_token), params={"status": "SUBMITTED"})
        assert res.json()["total"] == 1


class TestAttachments:
    """첨부파일 테스트."""

    async def test_upload_and_list(self, client: AsyncClient, employee_token, admin_token, prestation, uploads_dir):
        demande = await _create(client, employee_token, prestation)
        res = await client.post(
            f"{MY_DEMANDES}/{demande['id']}/attachments",
            headers=auth_header(employee_token),
            files={"file": ("bail.pdf", b"%PDF-1.4 test", "application/pdf")},
        )
        assert res.status_code == 201
        data = res.json()
        assert data["filename"] == "bail.pdf"
        assert data["size_bytes"] == len(b"%PDF-1.4 test")
        assert data["url"].startswith(f"/files/demandes/{demande['id']}/")

        res = await client.get(f"{MY_DEMANDES}/{demande['id']}", headers=auth_header(employee_token))
        assert res.json()["documents_uploaded"] == ["bail.pdf"]

        res = await client.get(f"{ADMIN_DEMANDES}/{demande['id']}/attachments", headers=auth_header(admin_token))
        assert [a["filename"] for a in res.json()] == ["bail.pdf"]

    async def test_rejects_extension(self, client: AsyncClient, employee_token, prestation):
        demande = await _create(client, employee_token, prestation)
        res = await client.post(
            f"{MY_DEMANDES}/{demande['id']}/attachments",
            headers=auth_header(employee_token),
            files={"file": ("script.exe", b"MZ", "application/octet-stream")},
        )
        assert res.status_code == 400

    async def test_rejects_oversized(self, client: AsyncClient, employee_token, prestation, uploads_dir, monkeypatch):
        monkeypatch.setattr(settings, "ATTACHMENT_MAX_BYTES", 10)
        demande = await _create(client, employee_token, prestation)
        res = await client.post(
            f"{MY_DEMANDES}/{demande['id']}/attachments",
            headers=auth_header(employee_token),
            files={"file": ("bail.pdf", b"x" * 11, "application/pdf")},
        )
        assert res.status_code == 400
        assert res.json()["detail"].startswith("File too large")

        res = await client.get(f"{MY_DEMANDES}/{demande['id']}/attachments", headers=auth_header(employee_token))
        assert res.json() == []

    async def test_read_upload_is_bounded(self):
        upload = UploadFile(BytesIO(b"x" * 100), filename="bail.pdf")
        assert len(await storage_service.read_upload(upload, 10)) == 11

        declared = UploadFile(BytesIO(b"x" * 100), size=100, filename="bail.pdf")
        with pytest.raises(BadRequestError):
            await storage_service.read_upload(declared, 10)

    async def test_other_user_cannot_list(self, client: AsyncClient, employee_token, other_token, prestation):
        demande = await _create(client, employee_token, prestation)
        res = await client.get(f"{MY_DEMANDES}/{demande['id']}/attachments", headers=auth_header(other_token))
        assert res.status_code == 403


class TestAdminDecision:
    """관리자 심사 테스트."""

    async def test_review_approve_pay(self, client: AsyncClient, employee_token, admin_token, prestation):
        demande = await _submitted(client, employee_token, prestation)

        res = await _set_status(client, admin_token, demande["id"], status="IN_REVIEW")
        assert res.json()["status"] == "IN_REVIEW"
        assert res.json()["processed_by_name"] is None

        res = await _set_status(client, admin_token, demande["id"], status="APPROVED", admin_comment="Dossier complet")
        assert res.json()["status"] == "APPROVED"
        assert res.json()["approved_amount"] == 400.0
        assert res.json()["admin_comment"] == "Dossier complet"
        assert res.json()["processed_by_name"] == "Admin Fondation"
        decided_at = res.json()["processed_at"]

        res = await _set_status(client, admin_token, demande["id"], status="PAID", payment_reference="VIR-2025-001")
        data = res.json()
        assert data["status"] == "PAID"
        assert data["payment_reference"] == "VIR-2025-001"
        assert data["payment_date"] is not None
        assert data["processed_at"] == decided_at

        res = await client.get(
            "/api/v1/admin/notifications",
            headers=auth_header(admin_token),
            params={"kind": "demande_status", "recipient_email": "jane@fondation.ma"},
        )
        assert res.json()["total"] == 3

    async def test_approve_with_amount(self, client: AsyncClient, employee_token, admin_token, prestation):
        demande = await _submitted(client, employee_token, prestation)
        res = await _set_status(client, admin_token, demande["id"], status="APPROVED", approved_amount="250")
        assert res.json()["approved_amount"] == 250.0

    async def test_reject_requires_reason(self, client: AsyncClient, employee_token, admin_token, prestation):
        demande = await _submitted(client, employee_token, prestation)
        res = await _set_status(client, admin_token, demande["id"], status="REJECTED")
        assert res.status_code == 400

        res = await _set_status(client, admin_token, demande["id"], status="REJECTED", rejection_reason="Hors critères")
        assert res.json()["status"] == "REJECTED"
        assert res.json()["rejection_reason"] == "Hors critères"

    async def test_illegal_transitions(self, client: AsyncClient, employee_token, admin_token, prestation):
        draft = await _create(client, employee_token, prestation)
        res = await _set_status(client, admin_token, draft["id"], status="APPROVED")
        assert res.status_code == 400
        res = await _set_status(client, admin_token, draft["id"], status="SUBMITTED")
        assert res.status_code == 400

        submitted = await _submitted(client, employee_token, prestation)
        res = await _set_status(client, admin_token, submitted["id"], status="PAID")
        assert res.status_code == 400

    async def test_priority(self, client: AsyncClient, employee_token, admin_token, prestation):
        demande = await _submitted(client, employee_token, prestation)
        res = await client.patch(
            f"{ADMIN_DEMANDES}/{demande['id']}/priority",
            headers=auth_header(admin_token),
            json={"priority_level": "URGENT"},
        )
        assert res.json()["priority_level"] == "URGENT"

    async def test_list_filters(self, client: AsyncClient, employee_token, other_token, admin_token, prestation):
        await _submitted(client, employee_token, prestation)
        await _create(client, other_token, prestation)

        res = await client.get(ADMIN_DEMANDES, headers=auth_header(admin_token), params={"email": "omar@fondation.ma"})
        assert res.json()["total"] == 1

        res = await client.get(f"{ADMIN_DEMANDES}/pending", headers=auth_header(admin_token))
        assert [d["user_email"] for d in res.json()["items"]] == ["jane@fondation.ma"]

    async def test_overdue_and_due_soon(self, client: AsyncClient, db, employee_token, admin_token, prestation):
        late = await _submitted(client, employee_token, prestation)
        soon = await _submitted(client, employee_token, prestation)

        now = utcnow()
        (await db.get(Demande, UUID(late["id"]))).expected_processing_date = now - timedelta(days=2)
        (await db.get(Demande, UUID(soon["id"]))).expected_processing_date = now + timedelta(days=1)
        await db.commit()

        res = await client.get(f"{ADMIN_DEMANDES}/overdue", headers=auth_header(admin_token))
        assert [d["id"] for d in res.json()] == [late["id"]]

        res = await client.get(f"{ADMIN_DEMANDES}/due-soon", headers=auth_header(admin_token), params={"days": 3})
        assert [d["id"] for d in res.json()] == [soon["id"]]

    async def test_export(self, client: AsyncClient, employee_token, admin_token, prestation):
        await _submitted(client, employee_token, prestation)
        res = await client.get(f"{ADMIN_DEMANDES}/export", headers=auth_header(admin_token))
        assert res.status_code == 200
        assert res.headers["content-type"].startswith(
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        )
        assert "demandes_export.xlsx" in res.headers["content-disposition"]
        assert res.content[:2] == b"PK"

    async def test_admin_delete(self, client: AsyncClient, employee_token, admin_token, prestation):
        demande = await _submitted(client, employee_token, prestation)
        res = await client.delete(f"{ADMIN_DEMANDES}/{demande['id']}", headers=auth_header(admin_token))
        assert res.status_code == 200
        res = await client.get(f"{ADMIN_DEMANDES}/{demande['id']}", headers=auth_header(admin_token))
        assert res.status_code == 404
