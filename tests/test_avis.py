"""후기 API 테스트 — 작성, 검수, 공개 조회 및 통계.

Avis API tests — Authoring rules, admin moderation (approve, reject,
feature, respond) and the public listings and rating statistics.
"""

from httpx import AsyncClient

from tests.conftest import auth_header

MY_AVIS = "/api/v1/app/my/avis"
ADMIN_AVIS = "/api/v1/admin/avis"
PUBLIC_AVIS = "/api/v1/public/avis"


async def _create(client: AsyncClient, token: str, **fields) -> dict:
    payload = {"rating": 5, "comment": "Très bon accompagnement."}
    payload.update(fields)
    res = await client.post(MY_AVIS, headers=auth_header(token), json=payload)
    assert res.status_code == 201, res.text
    return res.json()


async def _approve(client: AsyncClient, token: str, avis_id: str) -> dict:
    res = await client.post(f"{ADMIN_AVIS}/{avis_id}/approve", headers=auth_header(token))
    assert res.status_code == 200, res.text
    return res.json()


class TestCreateAvis:
    """후기 작성 테스트."""

    async def test_create_pending(self, client: AsyncClient, employee_token, prestation):
        data = await _create(client, employee_token, prestation_id=str(prestation.id), avis_type="PRESTATION")
        assert data["status"] == "PENDING"
        assert data["is_approved"] is False
        assert data["user_name"] == "Jane Doe"
        assert data["prestation_id"] == str(prestation.id)

    async def test_anonymous_name(self, client: AsyncClient, employee_token):
        data = await _create(client, employee_token, is_anonymous=True)
        assert data["user_name"] == "Utilisateur anonyme"

    async def test_rating_range(self, client: AsyncClient, employee_token):
        res = await client.post(MY_AVIS, headers=auth_header(employee_token), json={"rating": 6})
        assert res.status_code == 422

    async def test_duplicate_prestation(self, client: AsyncClient, employee_token, other_token, prestation):
        await _create(client, employee_token, prestation_id=str(prestation.id))
        res = await client.post(
            MY_AVIS, headers=auth_header(employee_token), json={"rating": 3, "prestation_id": str(prestation.id)}
        )
        assert res.status_code == 409

        await _create(client, other_token, prestation_id=str(prestation.id))

    async def test_demande_rules(self, client: AsyncClient, employee_token, other_token, prestation):
        res = await client.post(
            "/api/v1/app/my/demandes",
            headers=auth_header(employee_token),
            json={"prestation_id": str(prestation.id)},
        )
        demande_id = res.json()["id"]

        res = await client.post(MY_AVIS, headers=auth_header(other_token), json={"rating": 4, "demande_id": demande_id})
        assert res.status_code == 403

        await _create(client, employee_token, demande_id=demande_id)
        res = await client.post(MY_AVIS, headers=auth_header(employee_token), json={"rating": 2, "demande_id": demande_id})
        assert res.status_code == 409

    async def test_unknown_prestation(self, client: AsyncClient, employee_token):
        res = await client.post(MY_AVIS, headers=auth_header(employee_token), json={
            "rating": 4, "prestation_id": "00000000-0000-0000-0000-000000000000",
        })
        assert res.status_code == 404

    async def test_list_and_delete_mine(self, client: AsyncClient, employee_token, other_token):
        avis = await _create(client, employee_token)

        res = await client.delete(f"{MY_AVIS}/{avis['id']}", headers=auth_header(other_token))
        assert res.status_code == 403

        res = await client.get(MY_AVIS, headers=auth_header(employee_token))
        assert res.json()["total"] == 1

        res = await client.delete(f"{MY_AVIS}/{avis['id']}", headers=auth_header(employee_token))
        assert res.status_code == 200
        res = await client.get(MY_AVIS, headers=auth_header(employee_token))
        assert res.json()["total"] == 0


class TestModeration:
    """검수 테스트."""

    async def test_approve(self, client: AsyncClient, employee_token, admin_token):
        avis = await _create(client, employee_token)
        data = await _approve(client, admin_token, avis["id"])
        assert data["status"] == "PUBLISHED"
        assert data["is_approved"] is True
        assert data["approved_by"] == "admin@fondation.ma"
        assert data["approved_at"] is not None

    async def test_feature_requires_approval(self, client: AsyncClient, employee_token, admin_token):
        avis = await _create(client, employee_token)
        res = await client.post(f"{ADMIN_AVIS}/{avis['id']}/feature", headers=auth_header(admin_token))
        assert res.status_code == 400

        await _approve(client, admin_token, avis["id"])
        res = await client.post(f"{ADMIN_AVIS}/{avis['id']}/feature", headers=auth_header(admin_token))
        assert res.json()["is_featured"] is True
        res = await client.post(f"{ADMIN_AVIS}/{avis['id']}/feature", headers=auth_header(admin_token))
        assert res.json()["is_featured"] is False

    async def test_reject_clears_flags(self, client: AsyncClient, employee_token, admin_token):
        avis = await _create(client, employee_token)
        await _approve(client, admin_token, avis["id"])
        await client.post(f"{ADMIN_AVIS}/{avis['id']}/feature", headers=auth_header(admin_token))

        res = await client.post(f"{ADMIN_AVIS}/{avis['id']}/reject", headers=auth_header(admin_token))
        data = res.json()
        assert data["status"] == "REJECTED"
        assert data["is_approved"] is False
        assert data["is_featured"] is False
        assert data["approved_by"] is None

    async def test_respond(self, client: AsyncClient, employee_token, admin_token):
        avis = await _create(client, employee_token)
        res = await client.get(ADMIN_AVIS, headers=auth_header(admin_token), params={"needs_response": True})
        assert res.json()["total"] == 0

        await _approve(client, admin_token, avis["id"])
        res = await client.get(ADMIN_AVIS, headers=auth_header(admin_token), params={"needs_response": True})
        assert res.json()["total"] == 1

        res = await client.post(
            f"{ADMIN_AVIS}/{avis['id']}/respond",
            headers=auth_header(admin_token),
            json={"admin_response": "Merci pour votre retour."},
        )
        assert res.json()["admin_response"] == "Merci pour votre retour."
        assert res.json()["response_date"] is not None

        res = await client.get(ADMIN_AVIS, headers=auth_header(admin_token), params={"needs_response": True})
        assert res.json()["total"] == 0

    async def test_sentiment_filter(self, client: AsyncClient, employee_token, other_token, admin_token):
        await _create(client, employee_token, rating=5)
        await _create(client, other_token, rating=1)

        res = await client.get(ADMIN_AVIS, headers=auth_header(admin_token), params={"sentiment": "positive"})
        assert [a["rating"] for a in res.json()["items"]] == [5]
        res = await client.get(ADMIN_AVIS, headers=auth_header(admin_token), params={"sentiment": "negative"})
        assert [a["rating"] for a in res.json()["items"]] == [1]
        res = await client.get(ADMIN_AVIS, headers=auth_header(admin_token), params={"sentiment": "neutral"})
        assert res.status_code == 422

    async def test_admin_delete(self, client: AsyncClient, employee_token, admin_token):
        avis = await _create(client, employee_token)
        res = await client.delete(f"{ADMIN_AVIS}/{avis['id']}", headers=auth_header(admin_token))
        assert res.status_code == 200
        res = await client.get(f"{ADMIN_AVIS}/{avis['id']}", headers=auth_header(admin_token))
        assert res.status_code == 404


class TestPublicAvis:
    """공개 후기 테스트."""

    async def test_only_approved_public(self, client: AsyncClient, employee_token, other_token, admin_token):
        approved = await _create(client, employee_token, rating=4)
        await _create(client, other_token, rating=2)
        await _approve(client, admin_token, approved["id"])

        res = await client.get(PUBLIC_AVIS)
        assert [a["id"] for a in res.json()["items"]] == [approved["id"]]

    async def test_featured(self, client: AsyncClient, employee_token, admin_token):
        avis = await _create(client, employee_token)
        await _approve(client, admin_token, avis["id"])
        res = await client.get(f"{PUBLIC_AVIS}/featured")
        assert res.json() == []

        await client.post(f"{ADMIN_AVIS}/{avis['id']}/feature", headers=auth_header(admin_token))
        res = await client.get(f"{PUBLIC_AVIS}/featured")
        assert [a["id"] for a in res.json()] == [avis["id"]]

    async def test_public_view_hides_author_links(self, client: AsyncClient, employee_token, admin_token):
        avis = await _create(client, employee_token, is_anonymous=True)
        await _approve(client, admin_token, avis["id"])
        await client.post(f"{ADMIN_AVIS}/{avis['id']}/feature", headers=auth_header(admin_token))

        listed = (await client.get(PUBLIC_AVIS)).json()["items"]
        featured = (await client.get(f"{PUBLIC_AVIS}/featured")).json()
        for item in (listed[0], featured[0]):
            assert item["user_name"] == "Utilisateur anonyme"
            assert "user_id" not in item
            assert "demande_id" not in item
            assert "approved_by" not in item

        res = await client.get(f"{ADMIN_AVIS}/{avis['id']}", headers=auth_header(admin_token))
        assert res.json()["user_id"] == avis["user_id"]

    async def test_stats(self, client: AsyncClient, employee_token, other_token, admin_token, prestation):
        res = await client.get(f"{PUBLIC_AVIS}/stats")
        assert res.json() == {"prestation_id": None, "average_rating": None, "count": 0}

        a = await _create(client, employee_token, rating=5, prestation_id=str(prestation.id))
        b = await _create(client, other_token, rating=2, prestation_id=str(prestation.id))
        await _create(client, employee_token, rating=1)
        await _approve(client, admin_token, a["id"])
        await _approve(client, admin_token, b["id"])

        res = await client.get(f"{PUBLIC_AVIS}/stats", params={"prestation_id": str(prestation.id)})
        data = res.json()
        assert data["average_rating"] == 3.5
        assert data["count"] == 2
        assert data["prestation_id"] == str(prestation.id)
