"""뉴스 API 테스트 — 관리자 작성/게시 흐름 및 공개 조회.

News API tests — Admin authoring and publication workflow, slug rules,
and the public listings (search, featured, popular, view counting).
"""

from httpx import AsyncClient

from tests.conftest import auth_header

ADMIN_NEWS = "/api/v1/admin/news"
PUBLIC_NEWS = "/api/v1/public/news"


async def _create(client: AsyncClient, token: str, **fields) -> dict:
    payload = {"title": "Journée portes ouvertes 2025", "body": "Venez nombreux."}
    payload.update(fields)
    res = await client.post(ADMIN_NEWS, headers=auth_header(token), json=payload)
    assert res.status_code == 201, res.text
    return res.json()


async def _publish(client: AsyncClient, token: str, news_id: str) -> dict:
    res = await client.post(f"{ADMIN_NEWS}/{news_id}/publish", headers=auth_header(token))
    assert res.status_code == 200, res.text
    return res.json()


class TestAdminNews:
    """관리자 뉴스 테스트."""

    async def test_create_news_as_draft(self, client: AsyncClient, admin_token):
        data = await _create(client, admin_token)
        assert data["status"] == "DRAFT"
        assert data["published"] is False
        assert data["slug"] == "journee-portes-ouvertes-2025"
        assert data["author_name"] == "Admin Fondation"

    async def test_generated_slug_gets_suffix(self, client: AsyncClient, admin_token):
        first = await _create(client, admin_token)
        second = await _create(client, admin_token)
        third = await _create(client, admin_token)
        assert first["slug"] == "journee-portes-ouvertes-2025"
        assert second["slug"] == "journee-portes-ouvertes-2025-2"
        assert third["slug"] == "journee-portes-ouvertes-2025-3"

    async def test_explicit_slug_conflict(self, client: AsyncClient, admin_token):
        await _create(client, admin_token, slug="rentree")
        res = await client.post(ADMIN_NEWS, headers=auth_header(admin_token), json={
            "title": "Autre", "body": "x", "slug": "rentree",
        })
        assert res.status_code == 409

    async def test_update_slug_conflict(self, client: AsyncClient, admin_token):
        await _create(client, admin_token, slug="one")
        other = await _create(client, admin_token, slug="two")
        res = await client.put(f"{ADMIN_NEWS}/{other['id']}", headers=auth_header(admin_token), json={"slug": "one"})
        assert res.status_code == 409

    async def test_update_null_title(self, client: AsyncClient, admin_token):
        news = await _create(client, admin_token)
        res = await client.put(f"{ADMIN_NEWS}/{news['id']}", headers=auth_header(admin_token), json={"title": None})
        assert res.status_code == 422
        res = await client.put(f"{ADMIN_NEWS}/{news['id']}", headers=auth_header(admin_token), json={"tags": None})
        assert res.status_code == 422

    async def test_publish_twice(self, client: AsyncClient, admin_token):
        news = await _create(client, admin_token)
        published = await _publish(client, admin_token, news["id"])
        assert published["status"] == "PUBLISHED"
        assert published["published_at"] is not None

        res = await client.post(f"{ADMIN_NEWS}/{news['id']}/publish", headers=auth_header(admin_token))
        assert res.status_code == 400

    async def test_unpublish_and_archive(self, client: AsyncClient, admin_token):
        news = await _create(client, admin_token)
        await _publish(client, admin_token, news["id"])

        res = await client.post(f"{ADMIN_NEWS}/{news['id']}/unpublish", headers=auth_header(admin_token))
        assert res.json()["status"] == "DRAFT"
        assert res.json()["published"] is False

        res = await client.post(f"{ADMIN_NEWS}/{news['id']}/archive", headers=auth_header(admin_token))
        assert res.json()["status"] == "ARCHIVED"

    async def test_list_admin_by_status(self, client: AsyncClient, admin_token):
        draft = await _create(client, admin_token, title="Brouillon")
        live = await _create(client, admin_token, title="En ligne")
        await _publish(client, admin_token, live["id"])

        res = await client.get(ADMIN_NEWS, headers=auth_header(admin_token), params={"status": "DRAFT"})
        ids = [item["id"] for item in res.json()["items"]]
        assert ids == [draft["id"]]

    async def test_delete_news(self, client: AsyncClient, admin_token):
        news = await _create(client, admin_token)
        res = await client.delete(f"{ADMIN_NEWS}/{news['id']}", headers=auth_header(admin_token))
        assert res.status_code == 200
        res = await client.get(f"{ADMIN_NEWS}/{news['id']}", headers=auth_header(admin_token))
        assert res.status_code == 404

    async def test_employee_cannot_create(self, client: AsyncClient, employee_token):
        res = await client.post(ADMIN_NEWS, headers=auth_header(employee_token), json={"title": "x", "body": "y"})
        assert res.status_code == 403


class TestPublicNews:
    """공개 뉴스 테스트."""

    async def test_only_published_listed(self, client: AsyncClient, admin_token):
        await _create(client, admin_token, title="Caché")
        live = await _create(client, admin_token, title="Visible")
        await _publish(client, admin_token, live["id"])

        res = await client.get(PUBLIC_NEWS)
        assert res.status_code == 200
        data = res.json()
        assert data["total"] == 1
        assert data["items"][0]["title"] == "Visible"
        assert data["per_page"] == 10

    async def test_search_and_category(self, client: AsyncClient, admin_token):
        a = await _create(client, admin_token, title="Bourse étudiante", category="education")
        b = await _create(client, admin_token, title="Tournoi de football", category="sport")
        await _publish(client, admin_token, a["id"])
        await _publish(client, admin_token, b["id"])

        res = await client.get(PUBLIC_NEWS, params={"q": "tournoi"})
        assert [n["id"] for n in res.json()["items"]] == [b["id"]]

        res = await client.get(PUBLIC_NEWS, params={"category": "education"})
        assert [n["id"] for n in res.json()["items"]] == [a["id"]]

    async def test_read_counts_views(self, client: AsyncClient, admin_token):
        news = await _create(client, admin_token)
        await _publish(client, admin_token, news["id"])

        res = await client.get(f"{PUBLIC_NEWS}/{news['id']}")
        assert res.status_code == 200
        assert res.json()["view_count"] == 1

        res = await client.get(f"{PUBLIC_NEWS}/slug/{news['slug']}")
        assert res.status_code == 200
        assert res.json()["view_count"] == 2

    async def test_draft_not_readable(self, client: AsyncClient, admin_token):
        news = await _create(client, admin_token)
        res = await client.get(f"{PUBLIC_NEWS}/{news['id']}")
        assert res.status_code == 404
        res = await client.get(f"{PUBLIC_NEWS}/slug/{news['slug']}")
        assert res.status_code == 404

    async def test_featured_and_popular(self, client: AsyncClient, admin_token):
        featured = await _create(client, admin_token, title="À la une", featured=True)
        plain = await _create(client, admin_token, title="Normal")
        await _publish(client, admin_token, featured["id"])
        await _publish(client, admin_token, plain["id"])
        for _ in range(3):
            await client.get(f"{PUBLIC_NEWS}/{plain['id']}")

        res = await client.get(f"{PUBLIC_NEWS}/featured")
        assert [n["id"] for n in res.json()] == [featured["id"]]

        res = await client.get(f"{PUBLIC_NEWS}/popular")
        assert res.json()[0]["id"] == plain["id"]
        assert res.json()[0]["view_count"] == 3


class TestNewsNotifications:
    """게시 알림 테스트."""

    async def test_publish_emails_subscribers(self, client: AsyncClient, db, employee, other_employee, admin_token):
        other_employee.notif_news = False
        await db.commit()

        news = await _create(client, admin_token)
        await _publish(client, admin_token, news["id"])

        res = await client.get(
            "/api/v1/admin/notifications", headers=auth_header(admin_token), params={"kind": "news"}
        )
        recipients = {n["recipient_email"] for n in res.json()["items"]}
        assert "jane@fondation.ma" in recipients
        assert "omar@fondation.ma" not in recipients
        assert all(n["status"] == "LOGGED" for n in res.json()["items"])
