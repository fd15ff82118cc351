"""행사 API 테스트 — 관리자 관리, 공개 일정, 참가 등록.

Event API tests — Admin management, public upcoming/past listings, and
participant registration from the employee app.
"""

from uuid import UUID

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.repositories.event_repository import event_repository
from tests.conftest import auth_header

ADMIN_EVENTS = "/api/v1/admin/events"
PUBLIC_EVENTS = "/api/v1/public/events"
APP_EVENTS = "/api/v1/app/events"

FUTURE = "2099-06-01T09:00:00Z"
FUTURE_END = "2099-06-01T17:00:00Z"
PAST = "2020-03-01T09:00:00Z"


async def _create(client: AsyncClient, token: str, **fields) -> dict:
    payload = {"title": "Forum de l'emploi", "start_date": FUTURE, "location": "Rabat"}
    payload.update(fields)
    res = await client.post(ADMIN_EVENTS, headers=auth_header(token), json=payload)
    assert res.status_code == 201, res.text
    return res.json()


async def _create_published(client: AsyncClient, token: str, **fields) -> dict:
    event = await _create(client, token, **fields)
    res = await client.post(f"{ADMIN_EVENTS}/{event['id']}/publish", headers=auth_header(token))
    assert res.status_code == 200, res.text
    return res.json()


class TestAdminEvents:
    """관리자 행사 테스트."""

    async def test_create_event(self, client: AsyncClient, admin_token):
        data = await _create(client, admin_token, end_date=FUTURE_END, max_participants=50)
        assert data["status"] == "DRAFT"
        assert data["published"] is False
        assert data["current_participants"] == 0
        assert data["max_participants"] == 50

    async def test_end_before_start_rejected(self, client: AsyncClient, admin_token):
        res = await client.post(ADMIN_EVENTS, headers=auth_header(admin_token), json={
            "title": "Inversé", "start_date": FUTURE_END, "end_date": FUTURE,
        })
        assert res.status_code == 422

    async def test_update_checks_stored_dates(self, client: AsyncClient, admin_token):
        event = await _create(client, admin_token, end_date=FUTURE_END)
        res = await client.put(
            f"{ADMIN_EVENTS}/{event['id']}",
            headers=auth_header(admin_token),
            json={"start_date": "2099-07-01T09:00:00Z"},
        )
        assert res.status_code == 400

        res = await client.put(
            f"{ADMIN_EVENTS}/{event['id']}",
            headers=auth_header(admin_token),
            json={"location": "Casablanca"},
        )
        assert res.status_code == 200

    async def test_update_null_start_date(self, client: AsyncClient, admin_token):
        event = await _create(client, admin_token)
        res = await client.put(
            f"{ADMIN_EVENTS}/{event['id']}",
            headers=auth_header(admin_token),
            json={"start_date": None},
        )
        assert res.status_code == 422

        res = await client.put(
            f"{ADMIN_EVENTS}/{event['id']}",
            headers=auth_header(admin_token),
            json={"max_participants": None},
        )
        assert res.status_code == 200
        assert res.json()["max_participants"] is None
        assert res.json()["location"] == "Casablanca"

    async def test_publish_and_unpublish(self, client: AsyncClient, admin_token):
        event = await _create_published(client, admin_token)
        assert event["status"] == "PUBLISHED"
        assert event["published"] is True

        res = await client.post(f"{ADMIN_EVENTS}/{event['id']}/publish", headers=auth_header(admin_token))
        assert res.status_code == 400

        res = await client.post(f"{ADMIN_EVENTS}/{event['id']}/unpublish", headers=auth_header(admin_token))
        assert res.json()["status"] == "DRAFT"

    async def test_delete_event(self, client: AsyncClient, admin_token):
        event = await _create(client, admin_token)
        res = await client.delete(f"{ADMIN_EVENTS}/{event['id']}", headers=auth_header(admin_token))
        assert res.status_code == 200
        res = await client.delete(f"{ADMIN_EVENTS}/{event['id']}", headers=auth_header(admin_token))
        assert res.status_code == 404


class TestPublicEvents:
    """공개 행사 조회 테스트."""

    async def test_upcoming_and_past(self, client: AsyncClient, admin_token):
        upcoming = await _create_published(client, admin_token, title="Gala annuel")
        past = await _create_published(client, admin_token, title="Assemblée 2020", start_date=PAST)
        await _create(client, admin_token, title="Brouillon")

        res = await client.get(f"{PUBLIC_EVENTS}/upcoming")
        assert [e["id"] for e in res.json()["items"]] == [upcoming["id"]]

        res = await client.get(f"{PUBLIC_EVENTS}/past")
        assert [e["id"] for e in res.json()["items"]] == [past["id"]]

        res = await client.get(PUBLIC_EVENTS)
        assert res.json()["total"] == 2

    async def test_next_sorted_soonest_first(self, client: AsyncClient, admin_token):
        later = await _create_published(client, admin_token, start_date="2099-12-01T09:00:00Z")
        sooner = await _create_published(client, admin_token, start_date="2099-01-15T09:00:00Z")

        res = await client.get(f"{PUBLIC_EVENTS}/next")
        assert [e["id"] for e in res.json()] == [sooner["id"], later["id"]]

    async def test_upcoming_search(self, client: AsyncClient, admin_token):
        await _create_published(client, admin_token, title="Gala", location="Rabat")
        tanger = await _create_published(client, admin_token, title="Caravane", location="Tanger")

        res = await client.get(f"{PUBLIC_EVENTS}/upcoming", params={"q": "tanger"})
        assert [e["id"] for e in res.json()["items"]] == [tanger["id"]]

    async def test_unpublished_hidden(self, client: AsyncClient, admin_token):
        event = await _create(client, admin_token)
        res = await client.get(f"{PUBLIC_EVENTS}/{event['id']}")
        assert res.status_code == 404


class TestRegistration:
    """참가 등록 테스트."""

    async def test_register_and_unregister(self, client: AsyncClient, admin_token, employee_token):
        event = await _create_published(client, admin_token, max_participants=10)

        res = await client.post(f"{APP_EVENTS}/{event['id']}/register", headers=auth_header(employee_token))
        assert res.status_code == 200
        assert res.json()["current_participants"] == 1

        res = await client.post(f"{APP_EVENTS}/{event['id']}/unregister", headers=auth_header(employee_token))
        assert res.json()["current_participants"] == 0

        res = await client.post(f"{APP_EVENTS}/{event['id']}/unregister", headers=auth_header(employee_token))
        assert res.json()["current_participants"] == 0

    async def test_event_full(self, client: AsyncClient, admin_token, employee_token):
        event = await _create_published(client, admin_token, max_participants=1)
        res = await client.post(f"{APP_EVENTS}/{event['id']}/register", headers=auth_header(employee_token))
        assert res.status_code == 200
        res = await client.post(f"{APP_EVENTS}/{event['id']}/register", headers=auth_header(employee_token))
        assert res.status_code == 400
        assert res.json()["detail"] == "Event is full"

    async def test_other_employee_refused_when_full(
        self, client: AsyncClient, admin_token, employee_token, other_token
    ):
        event = await _create_published(client, admin_token, max_participants=1)
        await client.post(f"{APP_EVENTS}/{event['id']}/register", headers=auth_header(employee_token))
        res = await client.post(f"{APP_EVENTS}/{event['id']}/register", headers=auth_header(other_token))
        assert res.status_code == 400

        res = await client.get(f"{PUBLIC_EVENTS}/{event['id']}")
        assert res.json()["current_participants"] == 1

    async def test_seat_update_is_conditional(self, client: AsyncClient, db: AsyncSession, admin_token):
        created = await _create_published(client, admin_token, max_participants=1)
        event = await event_repository.get_by_id(db, UUID(created["id"]))

        assert await event_repository.release_seat(db, event) is False
        assert await event_repository.reserve_seat(db, event) is True
        assert await event_repository.reserve_seat(db, event) is False
        assert event.current_participants == 1
        assert await event_repository.release_seat(db, event) is True
        assert event.current_participants == 0

    async def test_started_event_refused(self, client: AsyncClient, admin_token, employee_token):
        event = await _create_published(client, admin_token, start_date=PAST)
        res = await client.post(f"{APP_EVENTS}/{event['id']}/register", headers=auth_header(employee_token))
        assert res.status_code == 400
        assert res.json()["detail"] == "Event has already started"

    async def test_deadline_passed(self, client: AsyncClient, admin_token, employee_token):
        event = await _create_published(client, admin_token, registration_deadline=PAST)
        res = await client.post(f"{APP_EVENTS}/{event['id']}/register", headers=auth_header(employee_token))
        assert res.status_code == 400
        assert res.json()["detail"] == "Registration deadline has passed"

    async def test_unpublished_event_not_found(self, client: AsyncClient, admin_token, employee_token):
        event = await _create(client, admin_token)
        res = await client.post(f"{APP_EVENTS}/{event['id']}/register", headers=auth_header(employee_token))
        assert res.status_code == 404

    async def test_requires_login(self, client: AsyncClient, admin_token):
        event = await _create_published(client, admin_token)
        res = await client.post(f"{APP_EVENTS}/{event['id']}/register")
        assert res.status_code == 401
