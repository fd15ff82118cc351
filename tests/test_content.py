"""공개 사이트 콘텐츠 API 테스트 — 파트너, 재단 소개, 문의, 홈 화면.

Site content API tests — Partners, foundation info blocks, contact
requests and the home page mission/stats.
"""

from httpx import AsyncClient

from tests.conftest import auth_header

ADMIN = "/api/v1/admin"
PUBLIC = "/api/v1/public"


class TestPartners:
    """파트너 테스트."""

    async def test_crud_and_sectors(self, client: AsyncClient, admin_token):
        headers = auth_header(admin_token)
        for name, sector in (("Banque Atlas", "Finance"), ("Clinique Salam", "Santé"), ("Assur Plus", "Finance")):
            res = await client.post(f"{ADMIN}/partners", headers=headers, json={"name": name, "sector": sector})
            assert res.status_code == 201

        res = await client.get(f"{PUBLIC}/partners")
        assert [p["name"] for p in res.json()] == ["Assur Plus", "Banque Atlas", "Clinique Salam"]

        res = await client.get(f"{PUBLIC}/partners", params={"sector": "Finance"})
        assert len(res.json()) == 2

        res = await client.get(f"{PUBLIC}/partners/sectors")
        assert res.json() == ["Finance", "Santé"]

    async def test_update_and_delete(self, client: AsyncClient, admin_token):
        headers = auth_header(admin_token)
        res = await client.post(f"{ADMIN}/partners", headers=headers, json={"name": "Atlas"})
        partner_id = res.json()["id"]

        res = await client.put(f"{ADMIN}/partners/{partner_id}", headers=headers, json={"website": "https://atlas.ma"})
        assert res.json()["website"] == "https://atlas.ma"

        res = await client.delete(f"{ADMIN}/partners/{partner_id}", headers=headers)
        assert res.status_code == 200
        res = await client.get(f"{ADMIN}/partners/{partner_id}", headers=headers)
        assert res.status_code == 404

    async def test_update_null_name(self, client: AsyncClient, admin_token):
        headers = auth_header(admin_token)
        res = await client.post(f"{ADMIN}/partners", headers=headers, json={"name": "Atlas", "sector": "Finance"})
        partner_id = res.json()["id"]

        res = await client.put(f"{ADMIN}/partners/{partner_id}", headers=headers, json={"name": None})
        assert res.status_code == 422
        res = await client.put(f"{ADMIN}/partners/{partner_id}", headers=headers, json={"sector": None})
        assert res.json()["sector"] is None

    async def test_invalid_email(self, client: AsyncClient, admin_token):
        res = await client.post(
            f"{ADMIN}/partners", headers=auth_header(admin_token), json={"name": "X", "email": "nope"}
        )
        assert res.status_code == 422


class TestFoundationInfo:
    """재단 소개 블록 테스트."""

    async def _create(self, client: AsyncClient, token: str, title: str, info_type: str, **fields) -> dict:
        payload = {"title": title, "content": f"{title} content", "info_type": info_type, **fields}
        res = await client.post(f"{ADMIN}/foundation-info", headers=auth_header(token), json=payload)
        assert res.status_code == 201, res.text
        return res.json()

    async def test_update_null_content(self, client: AsyncClient, admin_token):
        block = await self._create(client, admin_token, "Notre mission", "MISSION")
        for field in ("content", "info_type", "display_order"):
            res = await client.put(
                f"{ADMIN}/foundation-info/{block['id']}", headers=auth_header(admin_token), json={field: None}
            )
            assert res.status_code == 422, field

    async def test_display_order_per_type(self, client: AsyncClient, admin_token):
        first = await self._create(client, admin_token, "Notre mission", "MISSION")
        second = await self._create(client, admin_token, "Nos engagements", "MISSION")
        vision = await self._create(client, admin_token, "Vision 2030", "VISION")
        assert first["display_order"] == 1
        assert second["display_order"] == 2
        assert vision["display_order"] == 1

    async def test_reorder(self, client: AsyncClient, admin_token):
        a = await self._create(client, admin_token, "A", "HISTORY")
        b = await self._create(client, admin_token, "B", "HISTORY")
        c = await self._create(client, admin_token, "C", "HISTORY")

        res = await client.put(
            f"{ADMIN}/foundation-info/reorder",
            headers=auth_header(admin_token),
            json={"info_type": "HISTORY", "ids": [c["id"], a["id"], b["id"]]},
        )
        assert res.status_code == 200
        assert [(blk["title"], blk["display_order"]) for blk in res.json()] == [("C", 1), ("A", 2), ("B", 3)]

    async def test_reorder_rejects_other_type(self, client: AsyncClient, admin_token):
        history = await self._create(client, admin_token, "A", "HISTORY")
        team = await self._create(client, admin_token, "B", "TEAM")
        res = await client.put(
            f"{ADMIN}/foundation-info/reorder",
            headers=auth_header(admin_token),
            json={"info_type": "HISTORY", "ids": [history["id"], team["id"]]},
        )
        assert res.status_code == 400

    async def test_public_filter_and_inactive(self, client: AsyncClient, admin_token):
        await self._create(client, admin_token, "Mission", "MISSION")
        team = await self._create(client, admin_token, "Équipe", "TEAM")
        await self._create(client, admin_token, "Valeurs", "VALUES", is_active=False)

        res = await client.get(f"{PUBLIC}/foundation-info")
        assert {blk["title"] for blk in res.json()} == {"Mission", "Équipe"}

        res = await client.get(f"{PUBLIC}/foundation-info", params=[("info_type", "TEAM"), ("info_type", "VALUES")])
        assert [blk["id"] for blk in res.json()] == [team["id"]]

        res = await client.patch(
            f"{ADMIN}/foundation-info/{team['id']}/active",
            headers=auth_header(admin_token),
            json={"is_active": False},
        )
        assert res.json()["is_active"] is False
        res = await client.get(f"{PUBLIC}/foundation-info", params={"info_type": "TEAM"})
        assert res.json() == []

        res = await client.get(f"{ADMIN}/foundation-info", headers=auth_header(admin_token))
        assert len(res.json()) == 3


class TestContact:
    """문의 테스트."""

    CONTACT = {
        "name": "Karim Alami",
        "email": "karim@example.com",
        "subject": "Partenariat",
        "message": "Bonjour, nous souhaitons devenir partenaires.",
    }

    async def test_submit_contact(self, client: AsyncClient, admin_token):
        res = await client.post(f"{PUBLIC}/contact", json=self.CONTACT)
        assert res.status_code == 201
        assert res.json()["status"] == "NEW"

        res = await client.get(
            f"{ADMIN}/notifications",
            headers=auth_header(admin_token),
            params={"kind": "contact"},
        )
        assert res.json()["total"] == 1

    async def test_invalid_contact(self, client: AsyncClient):
        res = await client.post(f"{PUBLIC}/contact", json={**self.CONTACT, "message": "hi"})
        assert res.status_code == 422

    async def test_admin_list_and_respond(self, client: AsyncClient, admin_token):
        res = await client.post(f"{PUBLIC}/contact", json=self.CONTACT)
        contact_id = res.json()["id"]
        await client.post(f"{PUBLIC}/contact", json={**self.CONTACT, "name": "Sara Idrissi", "email": "sara@example.com"})

        headers = auth_header(admin_token)
        res = await client.get(f"{ADMIN}/contacts", headers=headers, params={"q": "karim"})
        assert res.json()["total"] == 1

        res = await client.patch(f"{ADMIN}/contacts/{contact_id}/status", headers=headers, json={"status": "IN_PROGRESS"})
        assert res.json()["status"] == "IN_PROGRESS"

        res = await client.post(
            f"{ADMIN}/contacts/{contact_id}/respond",
            headers=headers,
            json={"response_message": "Merci, nous revenons vers vous."},
        )
        data = res.json()
        assert data["status"] == "RESPONDED"
        assert data["responded_by"] == "admin@fondation.ma"
        assert data["responded_at"] is not None

        res = await client.get(f"{ADMIN}/contacts", headers=headers, params={"status": "RESPONDED"})
        assert [c["id"] for c in res.json()["items"]] == [contact_id]

        res = await client.get(f"{ADMIN}/notifications", headers=headers, params={"kind": "contact_reply"})
        assert res.json()["items"][0]["recipient_email"] == "karim@example.com"

    async def test_delete_contact(self, client: AsyncClient, admin_token):
        res = await client.post(f"{PUBLIC}/contact", json=self.CONTACT)
        contact_id = res.json()["id"]
        res = await client.delete(f"{ADMIN}/contacts/{contact_id}", headers=auth_header(admin_token))
        assert res.status_code == 200
        res = await client.get(f"{ADMIN}/contacts/{contact_id}", headers=auth_header(admin_token))
        assert res.status_code == 404

    async def test_employee_cannot_list(self, client: AsyncClient, employee_token):
        res = await client.get(f"{ADMIN}/contacts", headers=auth_header(employee_token))
        assert res.status_code == 403


class TestHome:
    """홈 화면 테스트."""

    async def test_default_home(self, client: AsyncClient):
        res = await client.get(f"{PUBLIC}/home")
        assert res.status_code == 200
        data = res.json()
        assert data["mission"].startswith("Our mission is to serve")
        assert data["stats"] == {"totalUsers": 0, "totalEvents": 0, "totalPartners": 0}

    async def test_admin_update(self, client: AsyncClient, admin_token):
        res = await client.put(
            f"{ADMIN}/site-info",
            headers=auth_header(admin_token),
            json={"mission": "Servir les employés.", "stats": {"totalUsers": 1200}},
        )
        assert res.status_code == 200
        assert res.json()["mission"] == "Servir les employés."

        res = await client.get(f"{PUBLIC}/home")
        assert res.json()["mission"] == "Servir les employés."
        assert res.json()["stats"] == {"totalUsers": 1200}

    async def test_admin_update_null_mission(self, client: AsyncClient, admin_token):
        res = await client.put(f"{ADMIN}/site-info", headers=auth_header(admin_token), json={"mission": None})
        assert res.status_code == 422
        res = await client.put(f"{ADMIN}/site-info", headers=auth_header(admin_token), json={"stats": None})
        assert res.status_code == 422
