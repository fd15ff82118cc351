"""관리자 대시보드 통계 테스트."""

from httpx import AsyncClient

from tests.conftest import auth_header

STATS = "/api/v1/admin/dashboard/stats"
MY_DEMANDES = "/api/v1/app/my/demandes"


class TestDashboard:
    """대시보드 집계 테스트."""

    async def test_empty(self, client: AsyncClient, admin_token):
        res = await client.get(STATS, headers=auth_header(admin_token))
        assert res.status_code == 200
        data = res.json()
        assert data["total_demandes"] == 0
        assert data["demandes_by_status"]["DRAFT"] == 0
        assert data["average_rating"] is None
        assert data["average_processing_days"] is None
        assert data["total_users"] == 1

    async def test_aggregates(self, client: AsyncClient, employee_token, admin_token, prestation):
        ids = []
        for amount in ("400", "600"):
            res = await client.post(
                MY_DEMANDES,
                headers=auth_header(employee_token),
                json={"prestation_id": str(prestation.id), "requested_amount": amount},
            )
            ids.append(res.json()["id"])
            await client.post(f"{MY_DEMANDES}/{ids[-1]}/submit", headers=auth_header(employee_token))

        await client.patch(
            f"/api/v1/admin/demandes/{ids[0]}/status",
            headers=auth_header(admin_token),
            json={"status": "APPROVED", "approved_amount": "300"},
        )

        res = await client.post("/api/v1/app/my/avis", headers=auth_header(employee_token), json={"rating": 5})
        await client.post(f"/api/v1/admin/avis/{res.json()['id']}/approve", headers=auth_header(admin_token))
        await client.post("/api/v1/app/my/avis", headers=auth_header(employee_token), json={"rating": 1})

        await client.post("/api/v1/public/contact", json={
            "name": "Karim", "email": "karim@example.com", "subject": "Info", "message": "Bonjour à tous",
        })

        data = (await client.get(STATS, headers=auth_header(admin_token))).json()
        assert data["total_demandes"] == 2
        assert data["pending_demandes"] == 1
        assert data["approved_demandes"] == 1
        assert data["demandes_by_status"]["SUBMITTED"] == 1
        assert data["total_requested_amount"] == 1000.0
        assert data["total_approved_amount"] == 300.0
        assert data["total_paid_amount"] == 0.0
        assert data["total_prestations"] == 1
        assert data["active_prestations"] == 1
        assert data["total_avis"] == 2
        assert data["pending_avis"] == 1
        assert data["average_rating"] == 5.0
        assert data["positive_avis"] == 1
        assert data["negative_avis"] == 1
        assert data["average_processing_days"] is not None
        assert data["total_users"] == 2
        assert data["new_contacts"] == 1

    async def test_review_is_not_a_decision(self, client: AsyncClient, employee_token, admin_token, prestation):
        res = await client.post(
            MY_DEMANDES, headers=auth_header(employee_token), json={"prestation_id": str(prestation.id)}
        )
        demande_id = res.json()["id"]
        await client.post(f"{MY_DEMANDES}/{demande_id}/submit", headers=auth_header(employee_token))
        await client.patch(
            f"/api/v1/admin/demandes/{demande_id}/status",
            headers=auth_header(admin_token),
            json={"status": "IN_REVIEW"},
        )

        data = (await client.get(STATS, headers=auth_header(admin_token))).json()
        assert data["pending_demandes"] == 1
        assert data["average_processing_days"] is None

        await client.patch(
            f"/api/v1/admin/demandes/{demande_id}/status",
            headers=auth_header(admin_token),
            json={"status": "REJECTED", "rejection_reason": "Hors critères"},
        )
        data = (await client.get(STATS, headers=auth_header(admin_token))).json()
        assert data["average_processing_days"] == 0.0

    async def test_requires_admin(self, client: AsyncClient, employee_token):
        res = await client.get(STATS, headers=auth_header(employee_token))
        assert res.status_code == 403
